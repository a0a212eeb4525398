from django.contrib import admin
from src.auditaction.models import AuditLog


@admin.register(AuditLog)
class AuditActionAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "category",
        "action",
        "severity",
        "user",
        "institute_address",
        "target_type",
        "target_id",
    )
    list_filter = ("category", "severity")
    search_fields = ("action", "institute_address", "target_id")
    readonly_fields = [f.name for f in AuditLog._meta.fields]
    ordering = ("-created_at",)
