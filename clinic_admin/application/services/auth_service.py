from dataclasses import dataclass
import logging

from ..ports.admin_repo import AdminRepository, AdminDto
from .token_service import TokenService
from ...exceptions import InvalidCredentialsError
from ...utils import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    admin_repo: AdminRepository
    tokens: TokenService

    def ensure_default_admin(self, username: str, password: str) -> AdminDto:
        """Create the administrator account if it does not exist yet.

        Safe to call on every start; an existing account is left untouched.
        """
        admin = self.admin_repo.get_by_username(username)
        if admin:
            return admin
        admin = self.admin_repo.create(username, hash_password(password))
        logger.info(f"Default administrator '{username}' created")
        return admin

    def login(self, username: str, password: str) -> str:
        admin = self.admin_repo.get_by_username(username)
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning(f"Failed login attempt for '{username}'")
            raise InvalidCredentialsError()
        logger.info(f"Administrator '{username}' logged in")
        return self.tokens.issue(admin.id)
