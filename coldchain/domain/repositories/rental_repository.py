"""Repository contract for Rental aggregates."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..entities import Rental


class RentalRepository(ABC):
    """
    Persistence boundary for rentals.

    Finders and savers are required. The read-model aggregates are optional
    for a store and raise NotImplementedError unless overridden.
    """

    @abstractmethod
    def find_by_id(self, rental_id: UUID) -> Optional[Rental]: ...

    @abstractmethod
    def find_by_provider(self, provider_company_id: UUID, filters: Optional[Dict[str, Any]] = None) -> List[Rental]: ...

    @abstractmethod
    def find_by_client(self, client_company_id: UUID, filters: Optional[Dict[str, Any]] = None) -> List[Rental]: ...

    @abstractmethod
    def find_by_equipment(self, equipment_id: UUID) -> List[Rental]: ...

    @abstractmethod
    def find_active_rentals(self, provider_company_id: UUID) -> List[Rental]: ...

    @abstractmethod
    def find_active_rental_by_equipment(self, equipment_id: UUID) -> Optional[Rental]: ...

    @abstractmethod
    def find_expiring_rentals(self, provider_company_id: UUID, days_ahead: int = 30) -> List[Rental]: ...

    @abstractmethod
    def save(self, rental: Rental) -> Rental: ...

    @abstractmethod
    def delete(self, rental_id: UUID) -> bool: ...

    def get_revenue_stats(self, provider_company_id: UUID, start: datetime, end: datetime) -> Dict[str, Any]:
        raise NotImplementedError(f"{type(self).__name__} does not provide revenue stats")

    def get_monthly_revenue(self, provider_company_id: UUID, months: int = 12) -> List[Dict[str, Any]]:
        raise NotImplementedError(f"{type(self).__name__} does not provide monthly revenue")

    def find_with_pagination(self, page: int = 1, limit: int = 20, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return ``{"rentals": [...], "total": n}``."""
        raise NotImplementedError(f"{type(self).__name__} does not provide pagination")
