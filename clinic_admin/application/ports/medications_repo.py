from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime


@dataclass
class MedicationDto:
    id: str
    name: str
    price: float
    quantity: int
    image_url: Optional[str]
    created_at: datetime
    updated_at: datetime


class MedicationsRepository(Protocol):
    def create(self, name: str, price: float, quantity: int, image_url: Optional[str]) -> MedicationDto:
        ...

    def list_all(self) -> List[MedicationDto]:
        ...

    def search_by_name(self, term: str) -> List[MedicationDto]:
        ...

    def update(self, medication_id: str, fields: Dict[str, Any]) -> Optional[MedicationDto]:
        ...

    def delete(self, medication_id: str) -> bool:
        ...
