from django.conf import settings
from django.db import models

from src.common.models import BaseModel


class AuditCategory(models.TextChoices):
    CERT = "CERT", "Certificate"
    CACHE = "CACHE", "Metadata cache"
    INSTITUTE = "INSTITUTE", "Institute"
    AUTH = "AUTH", "Authentication"
    SYSTEM = "SYSTEM", "System"


class Severity(models.TextChoices):
    INFO = "INFO", "Info"
    WARNING = "WARNING", "Warning"
    ERROR = "ERROR", "Error"
    CRITICAL = "CRITICAL", "Critical"


class AuditAction(models.TextChoices):
    # Certificats (ledger)
    CERT_ISSUED = "CERT_ISSUED", "Certificat émis"
    CERT_ISSUE_FAILED = "CERT_ISSUE_FAILED", "Échec émission certificat"
    CERT_REVOKED = "CERT_REVOKED", "Certificat révoqué"
    CERT_CONTENT_HASH_UPDATED = "CERT_CONTENT_HASH_UPDATED", "Empreinte du document mise à jour"

    # Cache de métadonnées
    CACHE_RECORD_CREATED = "CACHE_RECORD_CREATED", "Cache record created"
    CACHE_RECORD_CONFIRMED = "CACHE_RECORD_CONFIRMED", "Cache record confirmed on ledger"
    CACHE_ORPHAN_DETECTED = "CACHE_ORPHAN_DETECTED", "Orphan cache record detected"
    CACHE_RECORD_PURGED = "CACHE_RECORD_PURGED", "Orphan cache record purged"

    # Instituts
    INSTITUTE_ADDED = "INSTITUTE_ADDED", "Institut ajouté"
    INSTITUTE_UPDATED = "INSTITUTE_UPDATED", "Institut mis à jour"
    INSTITUTE_DEGREES_CHANGED = "INSTITUTE_DEGREES_CHANGED", "Liste des diplômes modifiée"
    INSTITUTE_DEPARTMENTS_CHANGED = "INSTITUTE_DEPARTMENTS_CHANGED", "Liste des départements modifiée"


class AuditLog(BaseModel):
    """
    Journal d'audit pour tracer toutes les actions importantes
    """

    # Acteur/Où
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_actions",
    )
    institute_address = models.CharField(
        max_length=42, blank=True, default="", db_index=True,
        help_text="Adresse du portefeuille de l'institut (minuscules)",
    )
    # Quoi
    category = models.CharField(
        max_length=32, choices=AuditCategory.choices, default=AuditCategory.SYSTEM
    )
    action = models.CharField(max_length=50, choices=AuditAction.choices, db_index=True)

    # Cible Optionnelle
    target_type = models.CharField(
        max_length=50,
        blank=True,
        null=True,
        help_text="Type de ressource: 'certificate', 'institute', etc.",
    )
    target_id = models.CharField(
        max_length=255, blank=True, null=True, help_text="ID de la ressource affectée"
    )

    # Contexte
    details = models.JSONField(
        default=dict, blank=True, help_text="Informations contextuelles supplémentaires"
    )
    severity = models.CharField(
        max_length=16, choices=Severity.choices, default=Severity.INFO
    )

    # Métadonnées de la requête
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    request_id = models.CharField(max_length=64, blank=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["institute_address", "action", "-created_at"], name="audit_inst_action_idx"),
            models.Index(fields=["category", "-created_at"], name="audit_category_idx"),
            models.Index(fields=["target_type", "target_id"], name="audit_target_idx"),
        ]

    def __str__(self) -> str:
        actor = self.user.get_username() if self.user else "system"
        target = f"{self.target_type}:{self.target_id}" if self.target_type else ""
        return f"[{self.category}] {self.action} by {actor} {target} at {self.created_at:%Y-%m-%d %H:%M:%S}"
