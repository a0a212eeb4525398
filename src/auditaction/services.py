from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from django.db import transaction
from django.http import HttpRequest

from src.auditaction.models import AuditLog, AuditCategory, Severity


def _infer_category_from_action(action: str) -> str:
    """
    If not provided, infer category from the action's prefix (e.g., CERT_ISSUED -> CERT).
    Falls back to SYSTEM when unknown.
    """
    if not action:
        return AuditCategory.SYSTEM
    prefix = action.split("_", 1)[0].upper()
    if prefix in AuditCategory.values:
        return prefix
    return AuditCategory.SYSTEM


def _extract_request_meta(request: HttpRequest | None) -> tuple[str | None, str, str]:
    if not request:
        return None, "", ""
    xff = request.META.get("HTTP_X_FORWARDED_FOR")
    ip = (xff.split(",")[0].strip() if xff else request.META.get("REMOTE_ADDR")) or None
    ua = request.META.get("HTTP_USER_AGENT", "")
    req_id = (
        request.headers.get("X-Request-Id")
        or request.META.get("HTTP_X_REQUEST_ID")
        or getattr(request, "id", "")
        or ""
    )
    return ip, ua, str(req_id)


def _json_sanitize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (uuid.UUID, Decimal)):
        return str(obj)
    if isinstance(obj, dict):
        return {str(k): _json_sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_json_sanitize(v) for v in obj]
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    # Django model instance → pk
    if hasattr(obj, "pk"):
        return str(obj.pk)
    return str(obj)


@transaction.atomic
def audit_action_create(
    *,
    user=None,
    action: str,
    details: dict[str, Any] | None = None,
    category: str | None = None,
    institute_address: str = "",
    target_type: str = "",
    target_id: str | None = None,
    severity: str = Severity.INFO,
    request: HttpRequest | None = None,
) -> AuditLog:
    """
    Create a single audit entry. Safe to call from anywhere.
    - If category is None, inferred from action prefix.
    - Anonymous users are stored as NULL.
    - If request is provided, IP, UA and request_id are captured.
    """
    ip, ua, req_id = _extract_request_meta(request)
    return AuditLog.objects.create(
        user=user if getattr(user, "pk", None) else None,
        institute_address=(institute_address or "").lower(),
        category=category or _infer_category_from_action(action),
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=_json_sanitize(details or {}),
        severity=severity,
        ip_address=ip,
        user_agent=ua,
        request_id=req_id,
    )
