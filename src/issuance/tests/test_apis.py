import json

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from ninja_jwt.tokens import RefreshToken

from src.auditaction.models import AuditAction, AuditLog
from src.certificates.models import CertificateRecord
from src.issuance.cache import LocalMetadataCache
from src.issuance.coordinator import IssuanceCoordinator

URL = "/api/issuance/certificates"


@pytest.fixture
def staff_headers(db):
    user = get_user_model().objects.create_user(username="registrar", password="pw", is_staff=True)
    return {"HTTP_AUTHORIZATION": f"Bearer {RefreshToken.for_user(user).access_token}"}


@pytest.fixture
def wired(monkeypatch, registry, ledger, signer):
    ids = iter(["cert-1", "cert-2"])

    def build(**kw):
        return IssuanceCoordinator(LocalMetadataCache(), registry, ledger, kw.get("signer") or signer,
                                   id_factory=lambda: next(ids))

    monkeypatch.setattr("src.issuance.apis.services.coordinator_build", build)
    monkeypatch.setattr("src.issuance.apis.clients.get_ledger", lambda: ledger)
    monkeypatch.setattr("src.issuance.apis.clients.get_default_signer", lambda: signer)
    return ledger


def post(url, body, headers):
    return Client().post(url, data=json.dumps(body), content_type="application/json", **headers)


BODY = {"name": "Katherine Johnson", "student_id": "S100", "degree": "M.Sc", "department": "CSE", "cgpa": "4.0"}


@pytest.mark.django_db
def test_issue_writes_cache_and_ledger(wired, staff_headers):
    resp = post(URL, BODY, staff_headers)

    assert resp.status_code == 201
    assert resp.json()["data"] == {"cert_id": "cert-1"}
    assert CertificateRecord.objects.filter(cert_id="cert-1").exists()
    assert wired.certificates["cert-1"].degree_index == 1
    assert AuditLog.objects.filter(action=AuditAction.CERT_ISSUED, target_id="cert-1").exists()


@pytest.mark.django_db
def test_invalid_reference_is_400_without_writes(wired, staff_headers):
    resp = post(URL, dict(BODY, degree="MBA"), staff_headers)

    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REFERENCE"
    assert not CertificateRecord.objects.exists()
    assert wired.writes == []
    assert AuditLog.objects.filter(action=AuditAction.CERT_ISSUE_FAILED).count() == 1


@pytest.mark.django_db
def test_duplicate_is_400(wired, staff_headers):
    post(URL, BODY, staff_headers)
    resp = post(URL, dict(BODY, name="Other"), staff_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "This student already has a certificate from this institute."


@pytest.mark.django_db
def test_chain_rejection_is_502_and_leaves_orphan(wired, staff_headers, signer):
    signer.reject = True
    resp = post(URL, BODY, staff_headers)

    assert resp.status_code == 502
    assert resp.json()["code"] == "CHAIN_WRITE_ERROR"
    assert CertificateRecord.objects.filter(cert_id="cert-1", status="PENDING").exists()
    assert wired.certificates == {}


@pytest.mark.django_db
def test_revoke_and_content_hash(wired, staff_headers):
    post(URL, BODY, staff_headers)

    resp = post(f"{URL}/cert-1/content-hash", {"content_hash": "QmDoc"}, staff_headers)
    assert resp.status_code == 200
    assert wired.certificates["cert-1"].content_hash == "QmDoc"

    resp = post(f"{URL}/cert-1/revoke", {}, staff_headers)
    assert resp.status_code == 200
    assert wired.certificates["cert-1"].revoked is True


@pytest.mark.django_db
def test_revoke_unknown_certificate(wired, staff_headers):
    resp = post(f"{URL}/missing/revoke", {}, staff_headers)
    assert resp.status_code == 404
    assert wired.writes == []
