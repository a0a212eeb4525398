from __future__ import annotations

from datetime import datetime

from django.db.models import QuerySet, Q, Count
from django.utils.dateparse import parse_datetime

from src.auditaction.models import AuditLog


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parse_datetime(value)
    except ValueError:
        return None


def audit_actions_queryset(
    *,
    institute_address: str | None = None,
    category: str | None = None,
    action: str | None = None,
    target_id: str | None = None,
    severity: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    q: str | None = None,
) -> QuerySet[AuditLog]:
    qs = AuditLog.objects.select_related("user")

    if institute_address:
        qs = qs.filter(institute_address=institute_address.lower())
    if category:
        qs = qs.filter(category=category.upper())
    if action:
        qs = qs.filter(action__icontains=action)
    if target_id:
        qs = qs.filter(target_id=target_id)
    if severity:
        qs = qs.filter(severity=severity.upper())

    df = _parse_dt(date_from)
    dt = _parse_dt(date_to)
    if df:
        qs = qs.filter(created_at__gte=df)
    if dt:
        qs = qs.filter(created_at__lte=dt)

    if q:
        qs = qs.filter(
            Q(action__icontains=q)
            | Q(target_id__icontains=q)
            | Q(user__username__icontains=q)
        )

    return qs.order_by("-created_at")


def audit_actions_list_paginated(*, limit: int = 50, offset: int = 0, **filters) -> tuple[int, list[AuditLog]]:
    qs = audit_actions_queryset(**filters)
    total = qs.count()
    items = list(qs[offset : offset + limit])
    return total, items


def audit_stats_by_category(*, institute_address: str | None = None, date_from: str | None = None,
                            date_to: str | None = None) -> list[dict]:
    qs = audit_actions_queryset(institute_address=institute_address, date_from=date_from, date_to=date_to)
    data = qs.values("category").annotate(count=Count("id")).order_by("-count")
    return list(data)
