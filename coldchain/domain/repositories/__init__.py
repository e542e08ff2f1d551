"""
Repository contracts consumed by the domain. Concrete storage lives outside this package.
"""
from .rental_repository import RentalRepository
from .maintenance_repository import MaintenanceRepository
from .company_repository import CompanyRepository
from .equipment_repository import EquipmentRepository

__all__ = [
    'RentalRepository',
    'MaintenanceRepository',
    'CompanyRepository',
    'EquipmentRepository',
]
