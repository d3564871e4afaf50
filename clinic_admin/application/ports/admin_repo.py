from dataclasses import dataclass
from typing import Optional, Protocol
from datetime import datetime


@dataclass
class AdminDto:
    id: str
    username: str
    password_hash: str
    created_at: datetime


class AdminRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[AdminDto]:
        ...

    def create(self, username: str, password_hash: str) -> AdminDto:
        ...
