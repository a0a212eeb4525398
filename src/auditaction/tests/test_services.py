import uuid
from types import SimpleNamespace as NS

import pytest
from django.contrib.auth import get_user_model
from django.test import Client, RequestFactory
from ninja_jwt.tokens import RefreshToken

from src.auditaction.models import AuditAction, AuditCategory, AuditLog, Severity
from src.auditaction.presenters import audit_to_list_dto
from src.auditaction.services import audit_action_create


@pytest.mark.django_db
def test_category_inferred_from_action_prefix():
    entry = audit_action_create(action=AuditAction.CACHE_ORPHAN_DETECTED, institute_address="0xABC")
    assert entry.category == AuditCategory.CACHE
    assert entry.institute_address == "0xabc"


@pytest.mark.django_db
def test_request_meta_and_details_are_captured():
    request = RequestFactory().post("/", HTTP_X_FORWARDED_FOR="10.0.0.1, 10.0.0.2", HTTP_USER_AGENT="pytest",
                                    HTTP_X_REQUEST_ID="req-1")
    entry = audit_action_create(
        action=AuditAction.CERT_ISSUED,
        details={"cert_id": uuid.UUID(int=1), "nested": {"n": (1, 2)}},
        request=request,
    )
    assert entry.ip_address == "10.0.0.1"
    assert entry.request_id == "req-1"
    assert entry.details == {"cert_id": str(uuid.UUID(int=1)), "nested": {"n": [1, 2]}}


def test_list_dto_without_user():
    obj = NS(
        id="a1",
        created_at=NS(isoformat=lambda: "2024-05-01T10:00:00+00:00"),
        category="CERT",
        action="CERT_REVOKED",
        severity=Severity.INFO,
        user=None,
        institute_address="",
        target_type="certificate",
        target_id="cert-1",
    )
    dto = audit_to_list_dto(obj)
    assert dto["user"] is None
    assert dto["institute_address"] is None


@pytest.mark.django_db
def test_audit_endpoint_is_staff_only():
    audit_action_create(action=AuditAction.CERT_ISSUED, target_id="cert-1")
    User = get_user_model()
    staff = User.objects.create_user(username="staff", password="pw", is_staff=True)
    plain = User.objects.create_user(username="plain", password="pw")

    def get(user):
        token = RefreshToken.for_user(user).access_token
        return Client().get("/api/audit/actions", HTTP_AUTHORIZATION=f"Bearer {token}")

    assert get(plain).status_code == 403
    resp = get(staff)
    assert resp.status_code == 200
    assert resp.json()["data"]["count"] == AuditLog.objects.count() == 1
