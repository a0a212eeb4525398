from django.apps import AppConfig


class AuditactionConfig(AppConfig):
    name = "src.auditaction"
    default_auto_field = "django.db.models.BigAutoField"
    verbose_name = "Audit"
