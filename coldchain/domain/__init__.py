"""
Domain layer - entities, value objects, lifecycle tables and the rules that bind them.

Nothing in here touches storage; repositories are abstract contracts.
"""
from .exceptions import (
    DomainError,
    ValidationError,
    CurrencyMismatchError,
    NotFoundError,
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    EquipmentNotRentableError,
    RentalNotFoundError,
    EquipmentNotFoundError,
    MaintenanceNotFoundError,
    CompanyNotFoundError,
)
from .lifecycle import Lifecycle
from .value_objects import Money, Email, Phone, ContactInfo, MaintenancePriority
from .entities import (
    Company,
    CompanyType,
    Equipment,
    EquipmentStatus,
    EquipmentCondition,
    Rental,
    RentalStatus,
    Maintenance,
    MaintenanceStatus,
    MaintenanceType,
)
from .repositories import RentalRepository, MaintenanceRepository, CompanyRepository, EquipmentRepository
from .services import EquipmentDomainService, RentabilityCheck
