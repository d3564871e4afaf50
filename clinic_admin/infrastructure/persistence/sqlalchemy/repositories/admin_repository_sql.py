from typing import Optional
from sqlmodel import Session, select

from .....models import Admin
from .....application.ports.admin_repo import AdminRepository, AdminDto


class SqlAdminRepository(AdminRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, admin: Admin) -> AdminDto:
        return AdminDto(
            id=admin.id,
            username=admin.username,
            password_hash=admin.password_hash,
            created_at=admin.created_at,
        )

    def get_by_username(self, username: str) -> Optional[AdminDto]:
        admin = self.session.exec(select(Admin).where(Admin.username == username)).first()
        return self._to_dto(admin) if admin else None

    def create(self, username: str, password_hash: str) -> AdminDto:
        admin = Admin(username=username, password_hash=password_hash)
        self.session.add(admin)
        self.session.commit()
        self.session.refresh(admin)
        return self._to_dto(admin)
