from __future__ import annotations

from datetime import datetime

from django.db.models import QuerySet

from src.certificates.models import CertificateRecord, CertificateRecordStatus
from src.common.utils import normalize_address


def certificate_record_list(*, institute_address: str, student_id: str | None = None) -> QuerySet[CertificateRecord]:
    """
    Records of one institute, newest createdAt first.
    - student_id: optional exact match
    """
    qs = CertificateRecord.objects.filter(institute_address=normalize_address(institute_address))
    if student_id:
        qs = qs.filter(student_id=student_id)
    return qs.order_by("-issued_at", "-created_at")


def certificate_record_get(*, cert_id: str) -> CertificateRecord | None:
    return CertificateRecord.objects.filter(cert_id=cert_id).first()


def certificate_record_exists(*, institute_address: str, student_id: str) -> bool:
    return CertificateRecord.objects.filter(
        institute_address=normalize_address(institute_address), student_id=student_id
    ).exists()


def certificate_records_pending(*, created_before: datetime) -> QuerySet[CertificateRecord]:
    return CertificateRecord.objects.filter(
        status=CertificateRecordStatus.PENDING, created_at__lt=created_before
    ).order_by("created_at")


def certificate_records_failed() -> QuerySet[CertificateRecord]:
    return CertificateRecord.objects.filter(status=CertificateRecordStatus.FAILED)
