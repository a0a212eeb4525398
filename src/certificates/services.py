from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from src.auditaction.models import AuditAction, Severity
from src.auditaction.services import audit_action_create
from src.certificates import selectors
from src.certificates.models import CertificateRecord, CertificateRecordStatus
from src.common.utils import normalize_address
from src.core.exceptions import DuplicateCertificateError, ValidationError

logger = structlog.get_logger(__name__)

# wire name -> model field
_REQUIRED_FIELDS = {
    "certId": "cert_id",
    "name": "name",
    "studentId": "student_id",
    "degree": "degree",
    "department": "department",
    "createdAt": "issued_at",
}
_OPTIONAL_FIELDS = {
    "father": "father",
    "mother": "mother",
    "cgpa": "cgpa",
    "session": "session",
}


def _parse_iso(value: str) -> datetime | None:
    try:
        return parse_datetime(value)
    except ValueError:
        return None


def certificate_record_clean(payload: dict) -> dict:
    """
    Validate a camelCase payload and map it to model fields.
    Raises ValidationError with the message returned to the client.
    """
    address = (payload.get("instituteAddress") or "").strip()
    if not address:
        raise ValidationError("instituteAddress is required", errors={"instituteAddress": ["required"]})

    data = {"institute_address": normalize_address(address)}
    for wire, field in _REQUIRED_FIELDS.items():
        value = (payload.get(wire) or "").strip()
        if not value:
            raise ValidationError(f"{wire} is required", errors={wire: ["required"]})
        data[field] = value
    # Free text, cgpa included
    for wire, field in _OPTIONAL_FIELDS.items():
        data[field] = (payload.get(wire) or "").strip()

    if _parse_iso(data["issued_at"]) is None:
        raise ValidationError("createdAt must be an ISO-8601 timestamp", errors={"createdAt": ["invalid"]})

    return data


def certificate_record_create(**payload) -> CertificateRecord:
    """
    Insert one record. At most one record per (institute, student):
    checked first, then enforced by cert_institute_student_unique.
    """
    data = certificate_record_clean(payload)

    if selectors.certificate_record_exists(
        institute_address=data["institute_address"], student_id=data["student_id"]
    ):
        raise DuplicateCertificateError()

    # Row and audit entry commit together
    try:
        with transaction.atomic():
            record = CertificateRecord.objects.create(**data, status=CertificateRecordStatus.PENDING)
            audit_action_create(
                action=AuditAction.CACHE_RECORD_CREATED,
                institute_address=record.institute_address,
                target_type="certificate",
                target_id=record.cert_id,
                details={"student_id": record.student_id},
            )
    except IntegrityError as e:
        # Concurrent insert of the same pair, or a reused certId
        if selectors.certificate_record_exists(
            institute_address=data["institute_address"], student_id=data["student_id"]
        ):
            raise DuplicateCertificateError() from e
        raise ValidationError("certId already exists", errors={"certId": ["already taken"]}) from e

    logger.info("cache_record_created", cert_id=record.cert_id, institute=record.institute_address)
    return record


def certificate_records_reconcile(*, ledger, older_than: timedelta, purge_failed: bool = False,
                                  now: datetime | None = None) -> dict:
    """
    Compare PENDING records older than `older_than` with the ledger.
    - present on the ledger -> CONFIRMED
    - absent -> FAILED (orphan), audited
    - purge_failed deletes FAILED rows afterwards
    Ledger read errors leave the row PENDING for the next run.
    """
    now = now or timezone.now()
    counts = {"checked": 0, "confirmed": 0, "failed": 0, "errors": 0, "purged": 0}

    for record in selectors.certificate_records_pending(created_before=now - older_than):
        counts["checked"] += 1
        try:
            verification = ledger.verify_certificate(record.cert_id)
        except Exception:
            logger.exception("reconcile_ledger_read_failed", cert_id=record.cert_id)
            counts["errors"] += 1
            continue

        if verification.exists:
            record.status = CertificateRecordStatus.CONFIRMED
            counts["confirmed"] += 1
            action, severity = AuditAction.CACHE_RECORD_CONFIRMED, Severity.INFO
        else:
            record.status = CertificateRecordStatus.FAILED
            counts["failed"] += 1
            action, severity = AuditAction.CACHE_ORPHAN_DETECTED, Severity.WARNING
            logger.warning("cache_orphan_detected", cert_id=record.cert_id,
                           institute=record.institute_address, student_id=record.student_id)
        record.status_checked_at = now
        record.save(update_fields=["status", "status_checked_at", "updated_at"])
        audit_action_create(
            action=action,
            institute_address=record.institute_address,
            target_type="certificate",
            target_id=record.cert_id,
            severity=severity,
            details={"student_id": record.student_id},
        )

    if purge_failed:
        counts["purged"] = certificate_records_purge_failed()

    logger.info("cache_reconciled", **counts)
    return counts


@transaction.atomic
def certificate_records_purge_failed() -> int:
    """Delete FAILED records, freeing the (institute, student) pair for a new issuance."""
    purged = 0
    for record in selectors.certificate_records_failed():
        audit_action_create(
            action=AuditAction.CACHE_RECORD_PURGED,
            institute_address=record.institute_address,
            target_type="certificate",
            target_id=record.cert_id,
            severity=Severity.WARNING,
            details={"student_id": record.student_id},
        )
        record.delete()
        purged += 1
    return purged
