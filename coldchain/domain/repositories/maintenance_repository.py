"""Repository contract for Maintenance entities."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..entities import Maintenance


class MaintenanceRepository(ABC):

    @abstractmethod
    def save(self, maintenance: Maintenance) -> Maintenance: ...

    @abstractmethod
    def find_by_id(self, maintenance_id: UUID) -> Optional[Maintenance]: ...

    @abstractmethod
    def find_by_provider(self, provider_company_id: UUID, filters: Optional[Dict[str, Any]] = None) -> List[Maintenance]: ...

    @abstractmethod
    def find_by_equipment(self, equipment_id: UUID) -> List[Maintenance]: ...

    @abstractmethod
    def find_by_date_range(self, start: datetime, end: datetime, provider_company_id: Optional[UUID] = None) -> List[Maintenance]: ...

    @abstractmethod
    def delete(self, maintenance_id: UUID) -> bool: ...

    def get_kpis(self, provider_company_id: UUID, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        raise NotImplementedError(f"{type(self).__name__} does not provide KPIs")

    def get_calendar_view(self, provider_company_id: UUID, year: int, month: int) -> Dict[str, List[Maintenance]]:
        raise NotImplementedError(f"{type(self).__name__} does not provide a calendar view")
