from __future__ import annotations

import structlog
from django.conf import settings

from src.auditaction.models import AuditAction, Severity
from src.auditaction.services import audit_action_create
from src.chain import clients
from src.chain.signers import Signer
from src.core.exceptions import ChainWriteError, DomainError, NotFoundError
from src.issuance.cache import HttpMetadataCache, LocalMetadataCache, MetadataCache
from src.issuance.coordinator import IssuanceCoordinator, StudentFields

logger = structlog.get_logger(__name__)


def metadata_cache_build() -> MetadataCache:
    """Remote cache when METADATA_CACHE_URL is set, this project's own tables otherwise."""
    if settings.METADATA_CACHE_URL:
        return HttpMetadataCache(settings.METADATA_CACHE_URL, timeout=settings.METADATA_CACHE_TIMEOUT)
    return LocalMetadataCache()


def coordinator_build(*, signer: Signer | None = None) -> IssuanceCoordinator:
    return IssuanceCoordinator(
        cache=metadata_cache_build(),
        registry=clients.get_registry(),
        ledger=clients.get_ledger(),
        signer=signer or clients.get_default_signer(),
    )


def certificate_issue(*, coordinator: IssuanceCoordinator, student: StudentFields, degree: str, department: str,
                      content_hash: str = "", user=None, request=None) -> str:
    institute_address = coordinator.signer.address
    try:
        cert_id = coordinator.issue_certificate(
            institute_address=institute_address,
            student=student,
            degree_name=degree,
            department_name=department,
            content_hash=content_hash,
        )
    except DomainError as e:
        audit_action_create(
            user=user,
            action=AuditAction.CERT_ISSUE_FAILED,
            institute_address=institute_address,
            target_type="certificate",
            severity=Severity.WARNING if not isinstance(e, ChainWriteError) else Severity.ERROR,
            details={"student_id": student.student_id, "code": e.code, "message": e.message, **e.extra},
            request=request,
        )
        raise

    audit_action_create(
        user=user,
        action=AuditAction.CERT_ISSUED,
        institute_address=institute_address,
        target_type="certificate",
        target_id=cert_id,
        details={"student_id": student.student_id, "degree": degree, "department": department},
        request=request,
    )
    return cert_id


def certificate_revoke(*, ledger, signer: Signer, cert_id: str, user=None, request=None) -> str:
    """Revocation is one-way. Unknown certIds are rejected before sending anything."""
    if not ledger.verify_certificate(cert_id).exists:
        raise NotFoundError("Certificate not found", errors={"cert_id": ["not found"]})

    tx_hash = ledger.revoke_certificate(signer, cert_id)
    logger.info("certificate_revoked", cert_id=cert_id, tx_hash=tx_hash)
    audit_action_create(
        user=user,
        action=AuditAction.CERT_REVOKED,
        institute_address=signer.address,
        target_type="certificate",
        target_id=cert_id,
        details={"tx_hash": tx_hash},
        request=request,
    )
    return tx_hash


def certificate_attach_content_hash(*, ledger, signer: Signer, cert_id: str, content_hash: str, user=None,
                                    request=None) -> str:
    if not ledger.verify_certificate(cert_id).exists:
        raise NotFoundError("Certificate not found", errors={"cert_id": ["not found"]})

    tx_hash = ledger.update_content_hash(signer, cert_id, content_hash)
    audit_action_create(
        user=user,
        action=AuditAction.CERT_CONTENT_HASH_UPDATED,
        institute_address=signer.address,
        target_type="certificate",
        target_id=cert_id,
        details={"content_hash": content_hash, "tx_hash": tx_hash},
        request=request,
    )
    return tx_hash
