from django.db import models

from src.common.models import BaseModel


class CertificateRecordStatus(models.TextChoices):
    PENDING = "PENDING", "Pending ledger confirmation"
    CONFIRMED = "CONFIRMED", "Confirmed on ledger"
    FAILED = "FAILED", "No ledger entry (orphan)"


class CertificateRecord(BaseModel):
    """
    Copie dénormalisée d'un certificat, pour la recherche par institut.
    Not authoritative: the Certification contract is the source of truth.
    """

    cert_id = models.CharField(max_length=100, help_text="Client-generated certificate id (UUID v4)")
    institute_address = models.CharField(max_length=42, db_index=True, help_text="Issuing wallet, lowercase")

    # Champs descriptifs (tous des chaînes)
    student_id = models.CharField(max_length=100)
    name = models.CharField(max_length=255)
    father = models.CharField(max_length=255, blank=True, default="")
    mother = models.CharField(max_length=255, blank=True, default="")
    degree = models.CharField(max_length=255)
    department = models.CharField(max_length=255)
    cgpa = models.CharField(max_length=20, blank=True, default="")
    session = models.CharField(max_length=50, blank=True, default="")
    issued_at = models.CharField(max_length=40, help_text="createdAt as sent by the issuer (ISO-8601)")

    # Réconciliation avec le ledger
    status = models.CharField(
        max_length=20,
        choices=CertificateRecordStatus.choices,
        default=CertificateRecordStatus.PENDING,
        db_index=True,
    )
    status_checked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "certificate_records"
        ordering = ["-issued_at"]
        constraints = [
            models.UniqueConstraint(fields=["cert_id"], name="cert_id_unique"),
            models.UniqueConstraint(fields=["institute_address", "student_id"], name="cert_institute_student_unique"),
        ]

    def __str__(self):
        return f"{self.cert_id} ({self.institute_address}/{self.student_id})"
