from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.auditaction import selectors
from src.auditaction.models import AuditLog
from src.auditaction.presenters import audit_to_detail_dto, audit_to_list_dto
from src.core.apis import BaseAPIController
from src.core.policies import ensure_staff


@api_controller("/audit", tags=["Audit"], auth=JWTAuth())
class AuditActionController(BaseAPIController):
    @route.get("/actions")
    def list_actions(
        self,
        institute_address: str | None = None,
        category: str | None = None,
        action: str | None = None,
        target_id: str | None = None,
        severity: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        q: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ):
        """
        List audit actions with filtering and simple pagination.
        Staff only.
        """
        ensure_staff(self.context.request.auth)

        total, items = selectors.audit_actions_list_paginated(
            institute_address=institute_address,
            category=category,
            action=action,
            target_id=target_id,
            severity=severity,
            date_from=date_from,
            date_to=date_to,
            q=q,
            limit=min(max(1, limit), 200),
            offset=max(0, offset),
        )
        return self.create_response(
            message="Audit actions",
            data={"count": total, "items": [audit_to_list_dto(obj) for obj in items]},
        )

    @route.get("/actions/{audit_id}")
    def get_action(self, audit_id: str):
        ensure_staff(self.context.request.auth)
        obj = get_object_or_404(AuditLog, id=audit_id)
        return self.create_response(message="Audit action", data=audit_to_detail_dto(obj))

    @route.get("/stats/by-category")
    def stats_by_category(self, institute_address: str | None = None, date_from: str | None = None,
                          date_to: str | None = None):
        ensure_staff(self.context.request.auth)
        data = selectors.audit_stats_by_category(
            institute_address=institute_address, date_from=date_from, date_to=date_to
        )
        return self.create_response(message="Audit statistics", data={"items": data})
