from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from clinic_admin.application.services.auth_service import AuthService
from clinic_admin.application.services.token_service import TokenService
from clinic_admin.application.ports.admin_repo import AdminRepository, AdminDto
from clinic_admin.exceptions import InvalidCredentialsError, InvalidTokenError, TokenExpiredError
from clinic_admin.utils import verify_password

SECRET = "unit-test-secret-0123456789abcdef0123456789"


class FakeAdminRepo(AdminRepository):
    def __init__(self):
        self.admins = {}
        self.created = 0

    def get_by_username(self, username: str) -> Optional[AdminDto]:
        return self.admins.get(username)

    def create(self, username: str, password_hash: str) -> AdminDto:
        self.created += 1
        admin = AdminDto(id=f"admin-{self.created}", username=username,
                         password_hash=password_hash, created_at=datetime.now(timezone.utc))
        self.admins[username] = admin
        return admin


def make_service():
    repo = FakeAdminRepo()
    return repo, AuthService(admin_repo=repo, tokens=TokenService(secret_key=SECRET))


def test_ensure_default_admin_creates_hashed_account():
    repo, svc = make_service()
    admin = svc.ensure_default_admin("admin", "admin-pw")
    assert admin.username == "admin"
    assert admin.password_hash != "admin-pw"
    assert verify_password("admin-pw", admin.password_hash)


def test_ensure_default_admin_is_idempotent():
    repo, svc = make_service()
    first = svc.ensure_default_admin("admin", "admin-pw")
    second = svc.ensure_default_admin("admin", "other-pw")
    assert repo.created == 1
    assert second.id == first.id
    assert verify_password("admin-pw", second.password_hash)


def test_login_returns_verifiable_token():
    repo, svc = make_service()
    admin = svc.ensure_default_admin("admin", "admin-pw")
    token = svc.login("admin", "admin-pw")
    identity = svc.tokens.verify(token)
    assert identity.subject == admin.id


@pytest.mark.parametrize("username,password", [
    ("admin", "wrong"),
    ("nobody", "admin-pw"),
    ("admin", ""),
])
def test_login_rejects_bad_credentials(username, password):
    repo, svc = make_service()
    svc.ensure_default_admin("admin", "admin-pw")
    with pytest.raises(InvalidCredentialsError) as exc:
        svc.login(username, password)
    assert exc.value.status_code == 400


def test_token_expires_after_its_lifetime():
    tokens = TokenService(secret_key=SECRET, expire_minutes=60)
    token = tokens.issue("admin-1", expires_delta=timedelta(seconds=-1))
    with pytest.raises(TokenExpiredError) as exc:
        tokens.verify(token)
    assert exc.value.status_code == 403


def test_token_lifetime_is_one_hour_by_default():
    tokens = TokenService(secret_key=SECRET)
    identity = tokens.verify(tokens.issue("admin-1"))
    remaining = identity.expires_at - datetime.now(identity.expires_at.tzinfo)
    assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)


def test_token_signed_with_other_secret_is_rejected():
    forged = TokenService(secret_key="another-secret-0123456789abcdef01234567").issue("admin-1")
    with pytest.raises(InvalidTokenError):
        TokenService(secret_key=SECRET).verify(forged)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenError):
        TokenService(secret_key=SECRET).verify("not-a-jwt")


@pytest.mark.parametrize("secret", ["", "secret", "change-me-in-prod"])
def test_placeholder_secret_is_refused(secret):
    with pytest.raises(ValueError):
        TokenService(secret_key=secret)
