"""
Domain Entities - Pure business objects without infrastructure dependencies.
"""

from .base import Entity, StatefulEntity, as_datetime
from .company import Company, CompanyType
from .equipment import Equipment, EquipmentStatus, EquipmentCondition
from .rental import Rental, RentalStatus
from .maintenance import Maintenance, MaintenanceStatus, MaintenanceType

__all__ = [
    'Entity',
    'StatefulEntity',
    'as_datetime',
    'Company',
    'CompanyType',
    'Equipment',
    'EquipmentStatus',
    'EquipmentCondition',
    'Rental',
    'RentalStatus',
    'Maintenance',
    'MaintenanceStatus',
    'MaintenanceType',
]
