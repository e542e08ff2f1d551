"""Repository contract for Company entities."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..entities import Company, CompanyType


class CompanyRepository(ABC):
    """Companies are deactivated, so ``delete`` is for data cleanup only."""

    @abstractmethod
    def find_by_id(self, company_id: UUID) -> Optional[Company]: ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Company]: ...

    @abstractmethod
    def find_by_type(self, company_type: CompanyType) -> List[Company]: ...

    @abstractmethod
    def create(self, company: Company) -> Company: ...

    @abstractmethod
    def update(self, company: Company) -> Company: ...

    @abstractmethod
    def delete(self, company_id: UUID) -> bool: ...

    def get_company_summary(self, company_id: UUID) -> Dict[str, Any]:
        raise NotImplementedError(f"{type(self).__name__} does not provide company summaries")

    def get_statistics(self, company_type: Optional[CompanyType] = None) -> Dict[str, Any]:
        raise NotImplementedError(f"{type(self).__name__} does not provide statistics")
