from types import SimpleNamespace as NS

import pytest
import requests

from src.core.exceptions import CachePersistenceError, DuplicateCertificateError, ValidationError
from src.issuance.cache import HttpMetadataCache


def response(status, body=None, text=""):
    def _json():
        if body is None:
            raise ValueError("no json")
        return body
    return NS(status_code=status, json=_json, text=text, reason="")


class FakeSession:
    def __init__(self, resp=None, error=None):
        self.resp = resp
        self.error = error
        self.calls = []

    def get(self, url, **kw):
        self.calls.append(("GET", url, kw))
        if self.error:
            raise self.error
        return self.resp

    def post(self, url, **kw):
        self.calls.append(("POST", url, kw))
        if self.error:
            raise self.error
        return self.resp


def test_find_sends_lowercase_address():
    session = FakeSession(response(200, [{"certId": "c1"}]))
    cache = HttpMetadataCache("http://cache:5000/api/", session=session)

    assert cache.find(institute_address="0xABC", student_id="S1") == [{"certId": "c1"}]
    method, url, kw = session.calls[0]
    assert url == "http://cache:5000/api/certificates"
    assert kw["params"] == {"instituteAddress": "0xabc", "studentId": "S1"}


def test_insert_returns_stored_certificate():
    session = FakeSession(response(201, {"message": "Certificate created successfully!", "certificate": {"certId": "c1"}}))
    assert HttpMetadataCache("http://cache", session=session).insert({"certId": "c1"}) == {"certId": "c1"}


def test_insert_duplicate_maps_to_domain_error():
    session = FakeSession(response(400, {"error": "This student already has a certificate from this institute."}))
    with pytest.raises(DuplicateCertificateError):
        HttpMetadataCache("http://cache", session=session).insert({"certId": "c1"})


def test_insert_other_400_is_validation():
    session = FakeSession(response(400, {"error": "instituteAddress is required"}))
    with pytest.raises(ValidationError) as exc:
        HttpMetadataCache("http://cache", session=session).insert({})
    assert exc.value.message == "instituteAddress is required"


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("refused")),
    FakeSession(response(500, {"error": "db down"})),
    FakeSession(response(502, text="Bad Gateway")),
])
def test_insert_transport_or_server_failure(session):
    with pytest.raises(CachePersistenceError):
        HttpMetadataCache("http://cache", session=session).insert({"certId": "c1"})


def test_find_unreachable():
    session = FakeSession(error=requests.Timeout("slow"))
    with pytest.raises(CachePersistenceError):
        HttpMetadataCache("http://cache", session=session).find(institute_address="0xabc", student_id="S1")
