"""Repository contract for Equipment entities."""
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..entities import Equipment


class EquipmentRepository(ABC):

    @abstractmethod
    def find_by_id(self, equipment_id: UUID) -> Optional[Equipment]: ...

    @abstractmethod
    def find_by_owner_company(self, owner_company_id: UUID) -> List[Equipment]: ...

    @abstractmethod
    def find_by_type(self, equipment_type: str, owner_company_id: UUID) -> List[Equipment]: ...

    @abstractmethod
    def save(self, equipment: Equipment) -> Equipment: ...

    @abstractmethod
    def delete(self, equipment_id: UUID) -> bool: ...
