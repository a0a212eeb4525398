import json

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from ninja_jwt.tokens import RefreshToken

from src.conftest import INSTITUTE_WALLET, OTHER_WALLET


@pytest.fixture
def wired(monkeypatch, registry, signer):
    monkeypatch.setattr("src.institutes.apis.clients.get_registry", lambda: registry)
    monkeypatch.setattr("src.institutes.apis.clients.get_default_signer", lambda: signer)
    return registry


def auth_headers(*, is_staff=True, username="operator"):
    user = get_user_model().objects.create_user(username=username, password="pw", is_staff=is_staff)
    token = RefreshToken.for_user(user).access_token
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.mark.django_db
def test_public_list_and_detail(wired):
    client = Client()
    resp = client.get("/api/institutes/")
    assert resp.status_code == 200
    assert resp.json()["data"]["count"] == 1

    resp = client.get(f"/api/institutes/{INSTITUTE_WALLET}")
    assert resp.status_code == 200
    assert resp.json()["data"]["degrees"] == ["B.Sc", "M.Sc", "Ph.D"]

    resp = client.get(f"/api/institutes/{OTHER_WALLET}")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_write_requires_authentication(wired):
    resp = Client().post("/api/institutes/me/degrees", data=json.dumps({"names": ["MBA"]}),
                         content_type="application/json")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_non_staff_cannot_write(wired):
    resp = Client().post("/api/institutes/me/degrees", data=json.dumps({"names": ["MBA"]}),
                         content_type="application/json", **auth_headers(is_staff=False))
    assert resp.status_code == 403
    assert resp.json()["code"] == "FORBIDDEN"


@pytest.mark.django_db
def test_staff_edits_own_lists(wired):
    headers = auth_headers()
    client = Client()

    resp = client.post("/api/institutes/me/degrees", data=json.dumps({"names": ["MBA"]}),
                       content_type="application/json", **headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["degrees"] == ["B.Sc", "M.Sc", "Ph.D", "MBA"]

    resp = client.delete("/api/institutes/me/departments/0", **headers)
    assert resp.json()["data"]["departments"] == ["EEE"]

    resp = client.patch("/api/institutes/me", data=json.dumps({"acronym": "TUX"}),
                        content_type="application/json", **headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["acronym"] == "TUX"


@pytest.mark.django_db
def test_add_institute(wired, settings):
    settings.REGISTRY_ADMIN_USERNAMES = ["owner"]
    body = {"wallet": OTHER_WALLET, "name": "Second College", "degrees": "B.A, M.A"}

    resp = Client().post("/api/institutes/", data=json.dumps(body), content_type="application/json",
                         **auth_headers(username="operator"))
    assert resp.status_code == 403
    assert resp.json()["message"] == "Only admin can add institutes."

    resp = Client().post("/api/institutes/", data=json.dumps(body), content_type="application/json",
                         **auth_headers(username="owner"))
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["degrees"] == ["B.A", "M.A"]
    assert data["departments"] == ["Main"]
