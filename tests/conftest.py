import os

# Configure the app before anything imports clinic_admin.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-signing-key-0123456789abcdef0123456789"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "clinic-admin-pw"
os.environ["DEVICE_CALLBACK_KEY"] = "scanner-key"
os.environ["FIREBASE_DATABASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from clinic_admin.database import engine
from clinic_admin.main import app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "clinic-admin-pw"


@pytest.fixture
def client():
    SQLModel.metadata.drop_all(engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def token(client):
    resp = client.post("/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def patient(client, auth_headers):
    resp = client.post("/patients", json={
        "name": "John Smith",
        "age": 42,
        "gender": "male",
        "bloodGroup": "O+",
        "email": "john@example.com",
        "number": "5550100",
        "password": "patient-pw",
    }, headers=auth_headers)
    assert resp.status_code == 201
    return resp.json()["patient"]
