import pytest

from clinic_admin.dependencies import get_device_registry
from clinic_admin.main import app

DEVICE_HEADERS = {"X-Device-Key": "scanner-key"}


class FakeRegistry:
    def __init__(self):
        self.state = {"DeviceMode": "auth"}

    def request_enrollment(self, user_code, slot):
        self.state.update({"DeviceMode": "signup", "FingerPrintCount": slot, "GetUser": user_code})

    def get_mode(self):
        return self.state["DeviceMode"]

    def reset(self):
        self.state["DeviceMode"] = "auth"


@pytest.fixture
def registry(client):
    fake = FakeRegistry()
    app.dependency_overrides[get_device_registry] = lambda: fake
    return fake


def test_enroll_writes_signup_request(client, auth_headers, patient, registry):
    resp = client.post(f"/fingerprints/{patient['id']}/enroll", headers=auth_headers)
    assert resp.status_code == 202
    assert resp.json()["slot"] == 1
    assert resp.json()["userCode"] == "U001"
    assert registry.state == {"DeviceMode": "signup", "FingerPrintCount": 1, "GetUser": "U001"}

    status = client.get("/fingerprints/status", headers=auth_headers).json()
    assert status == {"deviceMode": "signup", "ready": False}


def test_callback_marks_patient_enrolled(client, auth_headers, patient, registry):
    client.post(f"/fingerprints/{patient['id']}/enroll", headers=auth_headers)
    resp = client.post("/fingerprints/callback", json={"userCode": "U001", "success": True},
                       headers=DEVICE_HEADERS)
    assert resp.status_code == 200
    assert registry.get_mode() == "auth"

    listed = client.get("/patients", headers=auth_headers).json()
    assert listed[0]["fingerprintEnrolled"] is True
    status = client.get("/fingerprints/status", headers=auth_headers).json()
    assert status["ready"] is True


def test_failed_callback_leaves_patient_unenrolled(client, auth_headers, patient, registry):
    client.post(f"/fingerprints/{patient['id']}/enroll", headers=auth_headers)
    resp = client.post("/fingerprints/callback", json={"userCode": "U001", "success": False},
                       headers=DEVICE_HEADERS)
    assert resp.status_code == 200
    assert client.get("/patients", headers=auth_headers).json()[0]["fingerprintEnrolled"] is False


def test_callback_requires_device_key(client, patient, registry):
    resp = client.post("/fingerprints/callback", json={"userCode": "U001"})
    assert resp.status_code == 401
    resp = client.post("/fingerprints/callback", json={"userCode": "U001"}, headers={"X-Device-Key": "nope"})
    assert resp.status_code == 401


def test_callback_unknown_code_is_404(client, registry):
    resp = client.post("/fingerprints/callback", json={"userCode": "U999"}, headers=DEVICE_HEADERS)
    assert resp.status_code == 404


def test_enroll_unknown_patient_is_404(client, auth_headers, registry):
    resp = client.post("/fingerprints/missing/enroll", headers=auth_headers)
    assert resp.status_code == 404
    assert registry.state == {"DeviceMode": "auth"}


def test_unconfigured_registry_is_503(client, auth_headers, patient):
    resp = client.post(f"/fingerprints/{patient['id']}/enroll", headers=auth_headers)
    assert resp.status_code == 503
