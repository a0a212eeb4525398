import json
from unittest import mock

import pytest
from django.test import Client

from src.certificates.models import CertificateRecord, CertificateRecordStatus

URL = "/api/certificates"
WALLET = "0xAbCdEf0123456789abcdef0123456789ABCDEF01"


def make_payload(**kw):
    data = dict(
        certId="5b1f3c1e-2f1e-4a51-9d5a-3a0c3c1d9e01",
        instituteAddress=WALLET,
        name="Ada Lovelace",
        studentId="S42",
        father="Lord Byron",
        mother="Anne Isabella",
        degree="B.Sc",
        department="CSE",
        cgpa="3.85",
        session="2019-2023",
        createdAt="2024-05-01T10:00:00.000Z",
    )
    data.update(kw)
    return data


def post(client, payload):
    return client.post(URL, data=json.dumps(payload), content_type="application/json")


@pytest.fixture
def client():
    return Client()


@pytest.mark.django_db
def test_create_returns_201_and_stores_lowercase_address(client):
    resp = post(client, make_payload())
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Certificate created successfully!"
    assert body["certificate"]["instituteAddress"] == WALLET.lower()
    assert body["certificate"]["status"] == CertificateRecordStatus.PENDING
    assert CertificateRecord.objects.count() == 1


@pytest.mark.django_db
def test_duplicate_pair_is_rejected(client):
    assert post(client, make_payload()).status_code == 201
    resp = post(client, make_payload(certId="another-id", instituteAddress=WALLET.upper().replace("0X", "0x")))
    assert resp.status_code == 400
    assert resp.json() == {"error": "This student already has a certificate from this institute."}
    assert CertificateRecord.objects.count() == 1


@pytest.mark.django_db
def test_same_student_other_institute_is_allowed(client):
    assert post(client, make_payload()).status_code == 201
    other = "0x" + "12" * 20
    assert post(client, make_payload(certId="other", instituteAddress=other)).status_code == 201


@pytest.mark.django_db
def test_constraint_closes_the_race(client):
    # Both requests pass the application check; only the DB constraint can stop the second
    assert post(client, make_payload()).status_code == 201
    with mock.patch("src.certificates.services.selectors.certificate_record_exists", side_effect=[False, True]):
        resp = post(client, make_payload(certId="racing-id"))
    assert resp.status_code == 400
    assert resp.json()["error"] == "This student already has a certificate from this institute."
    assert CertificateRecord.objects.count() == 1


@pytest.mark.django_db
def test_missing_institute_address(client):
    resp = post(client, make_payload(instituteAddress=""))
    assert resp.status_code == 400
    assert resp.json() == {"error": "instituteAddress is required"}


@pytest.mark.django_db
@pytest.mark.parametrize("field", ["certId", "studentId", "name", "degree", "department", "createdAt"])
def test_missing_required_field(client, field):
    payload = make_payload()
    payload.pop(field)
    resp = post(client, payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": f"{field} is required"}


@pytest.mark.django_db
def test_cgpa_is_free_text(client):
    resp = post(client, make_payload(cgpa="First Class"))
    assert resp.status_code == 201
    assert resp.json()["certificate"]["cgpa"] == "First Class"


@pytest.mark.django_db
def test_numeric_json_values_are_stored_as_strings(client):
    resp = post(client, make_payload(cgpa=3.8, studentId=1042))
    assert resp.status_code == 201
    assert resp.json()["certificate"]["cgpa"] == "3.8"
    assert CertificateRecord.objects.get().student_id == "1042"


@pytest.mark.django_db
def test_malformed_timestamp(client):
    resp = post(client, make_payload(createdAt="yesterday"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "createdAt must be an ISO-8601 timestamp"}


@pytest.mark.django_db
def test_unexpected_failure_returns_500(client):
    with mock.patch("src.certificates.apis.services.certificate_record_create", side_effect=RuntimeError("db down")):
        resp = post(client, make_payload())
    assert resp.status_code == 500
    assert resp.json() == {"error": "db down"}


@pytest.mark.django_db
def test_list_requires_institute_address(client):
    resp = client.get(URL)
    assert resp.status_code == 400
    assert resp.json() == {"error": "instituteAddress is required"}


@pytest.mark.django_db
def test_list_sorted_by_created_at_desc_and_filtered(client):
    post(client, make_payload(certId="c1", studentId="S1", createdAt="2024-01-01T00:00:00.000Z"))
    post(client, make_payload(certId="c2", studentId="S2", createdAt="2024-03-01T00:00:00.000Z"))
    post(client, make_payload(certId="c3", studentId="S3", createdAt="2024-02-01T00:00:00.000Z"))
    post(client, make_payload(certId="c4", studentId="S1", instituteAddress="0x" + "12" * 20))

    resp = client.get(URL, {"instituteAddress": WALLET})
    assert resp.status_code == 200
    assert [r["certId"] for r in resp.json()] == ["c2", "c3", "c1"]

    resp = client.get(URL, {"instituteAddress": WALLET.lower(), "studentId": "S1"})
    assert [r["certId"] for r in resp.json()] == ["c1"]


@pytest.mark.django_db
def test_point_lookup(client):
    post(client, make_payload())
    resp = client.get(f"{URL}/5b1f3c1e-2f1e-4a51-9d5a-3a0c3c1d9e01")
    assert resp.status_code == 200
    assert resp.json()["studentId"] == "S42"

    resp = client.get(f"{URL}/unknown")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Certificate not found"}
