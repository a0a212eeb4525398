"""
Écritures sur le registre des instituts (signées par le portefeuille serveur).

Degree and department lists are referenced by index from issued
certificates. Removing or renaming an entry changes how those certificates
display; nothing here remaps indices.
"""
from __future__ import annotations

import logging

from src.auditaction.models import AuditAction
from src.auditaction.services import audit_action_create
from src.chain.signers import Signer
from src.common.utils import validate_wallet_address
from src.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_DEGREES = ["General"]
DEFAULT_DEPARTMENTS = ["Main"]

# kind -> (registry method names, audit action, singular label)
_LISTS = {
    "degrees": {
        "add": "add_degrees",
        "update": "update_degree",
        "remove": "remove_degree",
        "clear": "clear_degrees",
        "action": AuditAction.INSTITUTE_DEGREES_CHANGED,
        "label": "degree",
    },
    "departments": {
        "add": "add_departments",
        "update": "update_department",
        "remove": "remove_department",
        "clear": "clear_departments",
        "action": AuditAction.INSTITUTE_DEPARTMENTS_CHANGED,
        "label": "department",
    },
}

_FIELD_UPDATERS = {
    "name": "update_name",
    "address": "update_address",
    "acronym": "update_acronym",
    "link": "update_link",
}


def _clean_names(names) -> list[str]:
    return [n.strip() for n in names or [] if n and n.strip()]


def institute_add(*, registry, signer: Signer, wallet: str, name: str, address: str = "", acronym: str = "",
                  link: str = "", degrees=None, departments=None, user=None, request=None) -> str:
    """Register a new institute. Empty lists fall back to General / Main."""
    checksum = validate_wallet_address(wallet)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Institute name is required", errors={"name": ["required"]})
    if registry.is_institute(checksum):
        raise ValidationError("Institute already registered", errors={"wallet": ["already registered"]})

    degrees = _clean_names(degrees) or list(DEFAULT_DEGREES)
    departments = _clean_names(departments) or list(DEFAULT_DEPARTMENTS)

    tx_hash = registry.add_institute(
        signer, wallet=checksum, name=name, address=(address or "").strip(), acronym=(acronym or "").strip(),
        link=(link or "").strip(), degrees=degrees, departments=departments,
    )
    logger.info("Institute added", extra={"wallet": checksum, "tx_hash": tx_hash})
    audit_action_create(
        user=user,
        action=AuditAction.INSTITUTE_ADDED,
        institute_address=checksum,
        target_type="institute",
        target_id=checksum,
        details={"name": name, "degrees": degrees, "departments": departments, "tx_hash": tx_hash},
        request=request,
    )
    return tx_hash


def _audit_list_change(kind: str, op: str, *, signer, tx_hash, user, request, **details):
    audit_action_create(
        user=user,
        action=_LISTS[kind]["action"],
        institute_address=signer.address,
        target_type="institute",
        target_id=signer.address,
        details={"op": op, "tx_hash": tx_hash, **details},
        request=request,
    )


def _ensure_index(registry, signer, kind: str, index: int) -> None:
    current = getattr(registry.get_institute(signer.address), kind)
    if not 0 <= index < len(current):
        label = _LISTS[kind]["label"]
        raise ValidationError(f"Invalid {label} index", errors={"index": [f"must be between 0 and {len(current) - 1}"]})


def institute_list_add(*, registry, signer: Signer, kind: str, names, user=None, request=None) -> str:
    names = _clean_names(names)
    if not names:
        raise ValidationError("At least one name is required", errors={"names": ["required"]})
    tx_hash = getattr(registry, _LISTS[kind]["add"])(signer, names)
    _audit_list_change(kind, "add", signer=signer, tx_hash=tx_hash, user=user, request=request, names=names)
    return tx_hash


def institute_list_update(*, registry, signer: Signer, kind: str, index: int, name: str, user=None,
                          request=None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required", errors={"name": ["required"]})
    _ensure_index(registry, signer, kind, index)
    tx_hash = getattr(registry, _LISTS[kind]["update"])(signer, index, name)
    _audit_list_change(kind, "update", signer=signer, tx_hash=tx_hash, user=user, request=request,
                       index=index, name=name)
    return tx_hash


def institute_list_remove(*, registry, signer: Signer, kind: str, index: int, user=None, request=None) -> str:
    # Les certificats émis avec un indice plus grand pointeront vers un autre nom
    _ensure_index(registry, signer, kind, index)
    tx_hash = getattr(registry, _LISTS[kind]["remove"])(signer, index)
    _audit_list_change(kind, "remove", signer=signer, tx_hash=tx_hash, user=user, request=request, index=index)
    return tx_hash


def institute_list_clear(*, registry, signer: Signer, kind: str, user=None, request=None) -> str:
    tx_hash = getattr(registry, _LISTS[kind]["clear"])(signer)
    _audit_list_change(kind, "clear", signer=signer, tx_hash=tx_hash, user=user, request=request)
    return tx_hash


def institute_update(*, registry, signer: Signer, changes: dict, user=None, request=None) -> list[str]:
    """One transaction per changed field, in name/address/acronym/link order."""
    changes = {k: v.strip() for k, v in changes.items() if k in _FIELD_UPDATERS and v is not None}
    if not changes:
        raise ValidationError("Nothing to update")
    if "name" in changes and not changes["name"]:
        raise ValidationError("Institute name is required", errors={"name": ["required"]})

    tx_hashes = []
    for field, method in _FIELD_UPDATERS.items():
        if field in changes:
            tx_hashes.append(getattr(registry, method)(signer, changes[field]))

    audit_action_create(
        user=user,
        action=AuditAction.INSTITUTE_UPDATED,
        institute_address=signer.address,
        target_type="institute",
        target_id=signer.address,
        details={"changes": changes, "tx_hashes": tx_hashes},
        request=request,
    )
    return tx_hashes
