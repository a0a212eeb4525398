from django.contrib import admin

from src.certificates.models import CertificateRecord


@admin.register(CertificateRecord)
class CertificateRecordAdmin(admin.ModelAdmin):
    list_display = ("cert_id", "institute_address", "student_id", "name", "degree", "status", "issued_at")
    list_filter = ("status",)
    search_fields = ("cert_id", "institute_address", "student_id", "name")
    readonly_fields = ("cert_id", "institute_address", "student_id", "issued_at", "status_checked_at")
    ordering = ("-issued_at",)
