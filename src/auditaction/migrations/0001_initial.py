import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "institute_address",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        default="",
                        help_text="Adresse du portefeuille de l'institut (minuscules)",
                        max_length=42,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("CERT", "Certificate"),
                            ("CACHE", "Metadata cache"),
                            ("INSTITUTE", "Institute"),
                            ("AUTH", "Authentication"),
                            ("SYSTEM", "System"),
                        ],
                        default="SYSTEM",
                        max_length=32,
                    ),
                ),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("CERT_ISSUED", "Certificat émis"),
                            ("CERT_ISSUE_FAILED", "Échec émission certificat"),
                            ("CERT_REVOKED", "Certificat révoqué"),
                            ("CERT_CONTENT_HASH_UPDATED", "Empreinte du document mise à jour"),
                            ("CACHE_RECORD_CREATED", "Cache record created"),
                            ("CACHE_RECORD_CONFIRMED", "Cache record confirmed on ledger"),
                            ("CACHE_ORPHAN_DETECTED", "Orphan cache record detected"),
                            ("CACHE_RECORD_PURGED", "Orphan cache record purged"),
                            ("INSTITUTE_ADDED", "Institut ajouté"),
                            ("INSTITUTE_UPDATED", "Institut mis à jour"),
                            ("INSTITUTE_DEGREES_CHANGED", "Liste des diplômes modifiée"),
                            ("INSTITUTE_DEPARTMENTS_CHANGED", "Liste des départements modifiée"),
                        ],
                        db_index=True,
                        max_length=50,
                    ),
                ),
                (
                    "target_type",
                    models.CharField(
                        blank=True,
                        help_text="Type de ressource: 'certificate', 'institute', etc.",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "target_id",
                    models.CharField(blank=True, help_text="ID de la ressource affectée", max_length=255, null=True),
                ),
                (
                    "details",
                    models.JSONField(blank=True, default=dict, help_text="Informations contextuelles supplémentaires"),
                ),
                (
                    "severity",
                    models.CharField(
                        choices=[("INFO", "Info"), ("WARNING", "Warning"), ("ERROR", "Error"), ("CRITICAL", "Critical")],
                        default="INFO",
                        max_length=16,
                    ),
                ),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True)),
                ("request_id", models.CharField(blank=True, max_length=64)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_actions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["institute_address", "action", "-created_at"], name="audit_inst_action_idx"),
                    models.Index(fields=["category", "-created_at"], name="audit_category_idx"),
                    models.Index(fields=["target_type", "target_id"], name="audit_target_idx"),
                ],
            },
        ),
    ]
