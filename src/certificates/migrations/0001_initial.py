import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CertificateRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("cert_id", models.CharField(help_text="Client-generated certificate id (UUID v4)", max_length=100)),
                (
                    "institute_address",
                    models.CharField(db_index=True, help_text="Issuing wallet, lowercase", max_length=42),
                ),
                ("student_id", models.CharField(max_length=100)),
                ("name", models.CharField(max_length=255)),
                ("father", models.CharField(blank=True, default="", max_length=255)),
                ("mother", models.CharField(blank=True, default="", max_length=255)),
                ("degree", models.CharField(max_length=255)),
                ("department", models.CharField(max_length=255)),
                ("cgpa", models.CharField(blank=True, default="", max_length=20)),
                ("session", models.CharField(blank=True, default="", max_length=50)),
                (
                    "issued_at",
                    models.CharField(help_text="createdAt as sent by the issuer (ISO-8601)", max_length=40),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending ledger confirmation"),
                            ("CONFIRMED", "Confirmed on ledger"),
                            ("FAILED", "No ledger entry (orphan)"),
                        ],
                        db_index=True,
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("status_checked_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "certificate_records",
                "ordering": ["-issued_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("cert_id",), name="cert_id_unique"),
                    models.UniqueConstraint(
                        fields=("institute_address", "student_id"), name="cert_institute_student_unique"
                    ),
                ],
            },
        ),
    ]
