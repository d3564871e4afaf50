from datetime import timedelta

import pytest

from clinic_admin.dependencies import get_token_service

PROTECTED = [
    ("post", "/patients", {"name": "Eve", "age": 30, "gender": "female", "bloodGroup": "B+", "password": "x"}),
    ("get", "/patients", None),
    ("get", "/patients/search/eve", None),
    ("put", "/patients/some-id", {"age": 31}),
    ("delete", "/patients/some-id", None),
    ("post", "/appointments", {"patientId": "p", "date": "2030-01-01", "time": "10:00", "appointmentType": "remote"}),
    ("get", "/appointments", None),
    ("get", "/appointments/search/eve", None),
    ("put", "/appointments/some-id", {"time": "11:00"}),
    ("put", "/appointments/some-id/link", {"remoteLink": "https://meet.example.com/a"}),
    ("delete", "/appointments/some-id", None),
    ("post", "/medications", {"name": "Aspirin", "price": 2.5, "quantity": 10}),
    ("get", "/medications", None),
    ("get", "/medications/search/asp", None),
    ("put", "/medications/some-id", {"price": 3}),
    ("delete", "/medications/some-id", None),
    ("post", "/fingerprints/some-id/enroll", None),
    ("get", "/fingerprints/status", None),
]


def call(client, method, path, body, headers=None):
    kwargs = {"headers": headers or {}}
    if body is not None:
        kwargs["json"] = body
    return client.request(method.upper(), path, **kwargs)


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_missing_token_is_401(client, method, path, body):
    resp = call(client, method, path, body)
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Access denied"}


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_invalid_token_is_403(client, method, path, body):
    resp = call(client, method, path, body, {"Authorization": "Bearer not.a.token"})
    assert resp.status_code == 403
    assert resp.json()["message"] == "Invalid token"


def test_non_bearer_scheme_counts_as_missing(client):
    resp = client.get("/patients", headers={"Authorization": "Basic YWRtaW46YWRtaW4="})
    assert resp.status_code == 401


def test_expired_token_is_403(client):
    expired = get_token_service().issue("admin-id", expires_delta=timedelta(seconds=-5))
    resp = client.get("/patients", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 403


def test_rejected_requests_do_not_mutate(client, auth_headers):
    for method, path, body in PROTECTED:
        if method in ("post", "put", "delete"):
            call(client, method, path, body)
    assert client.get("/patients", headers=auth_headers).json() == []
    assert client.get("/appointments", headers=auth_headers).json() == []
    assert client.get("/medications", headers=auth_headers).json() == []


def test_login_success(client):
    resp = client.post("/admin/login", json={"username": "admin", "password": "clinic-admin-pw"})
    assert resp.status_code == 200
    token = resp.json()["token"]
    assert get_token_service().verify(token).subject


@pytest.mark.parametrize("payload", [
    {"username": "admin", "password": "wrong"},
    {"username": "ghost", "password": "clinic-admin-pw"},
])
def test_login_bad_credentials_is_400(client, payload):
    resp = client.post("/admin/login", json=payload)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid credentials"


def test_login_missing_fields_is_400(client):
    resp = client.post("/admin/login", json={"username": "admin"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_bootstrap_is_idempotent(client):
    from sqlmodel import Session, select
    from clinic_admin.database import engine
    from clinic_admin.main import bootstrap_admin
    from clinic_admin.models import Admin

    bootstrap_admin()
    bootstrap_admin()
    with Session(engine) as session:
        assert len(session.exec(select(Admin)).all()) == 1


def test_health_is_public(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["timestamp"].endswith("+00:00")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
