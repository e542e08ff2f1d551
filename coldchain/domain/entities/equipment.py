"""
Equipment Entity - A refrigeration unit owned by a provider.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from .base import StatefulEntity, as_datetime, now
from ..exceptions import ValidationError, BusinessRuleViolationError
from ..lifecycle import Lifecycle
from ..value_objects import Money

MAINTENANCE_WARNING_DAYS = 7


class EquipmentStatus(str, Enum):
    """Operational status of a unit."""
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class EquipmentCondition(str, Enum):
    """Physical condition, best to worst."""
    NEW = "NEW"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


EQUIPMENT_LIFECYCLE = Lifecycle("Equipment", {
    (EquipmentStatus.AVAILABLE, "rent"): EquipmentStatus.RENTED,
    (EquipmentStatus.RENTED, "release"): EquipmentStatus.AVAILABLE,
    (EquipmentStatus.AVAILABLE, "send_to_maintenance"): EquipmentStatus.MAINTENANCE,
    (EquipmentStatus.RENTED, "send_to_maintenance"): EquipmentStatus.MAINTENANCE,
    (EquipmentStatus.MAINTENANCE, "finish_maintenance"): EquipmentStatus.AVAILABLE,
    (EquipmentStatus.AVAILABLE, "retire"): EquipmentStatus.OUT_OF_SERVICE,
    (EquipmentStatus.RENTED, "retire"): EquipmentStatus.OUT_OF_SERVICE,
    (EquipmentStatus.MAINTENANCE, "retire"): EquipmentStatus.OUT_OF_SERVICE,
    (EquipmentStatus.OUT_OF_SERVICE, "reactivate"): EquipmentStatus.AVAILABLE,
})


@dataclass(eq=False)
class Equipment(StatefulEntity):
    """
    Equipment entity representing a cold-chain unit.

    A unit is rented to at most one client at a time; ``current_client_id``
    is set while it is RENTED.
    """
    LIFECYCLE = EQUIPMENT_LIFECYCLE

    owner_company_id: Optional[UUID] = None
    equipment_type: str = ""
    serial_number: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    capacity: Optional[float] = None
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    condition: EquipmentCondition = EquipmentCondition.GOOD
    current_client_id: Optional[UUID] = None

    purchase_price: Optional[Money] = None
    rental_rate: Optional[Money] = None

    installation_date: Optional[datetime] = None
    warranty_expiry: Optional[datetime] = None
    last_maintenance_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None

    is_active: bool = True
    specifications: Dict[str, Any] = field(default_factory=dict)

    UPDATABLE_FIELDS = (
        'equipment_type', 'brand', 'model', 'capacity', 'warranty_expiry',
        'next_maintenance_date', 'specifications', 'rental_rate'
    )

    def __post_init__(self):
        self.status = self._coerce(EquipmentStatus, self.status)
        self.condition = self._coerce(EquipmentCondition, self.condition)

        errors = self._collect_errors()
        if errors:
            raise ValidationError.from_errors(errors)

        if self.purchase_price is not None:
            self.purchase_price = Money.of(self.purchase_price)
        if self.rental_rate is not None:
            self.rental_rate = Money.of(self.rental_rate)
        self.installation_date = as_datetime(self.installation_date, "installation_date")
        self.warranty_expiry = as_datetime(self.warranty_expiry, "warranty_expiry")
        self.last_maintenance_date = as_datetime(self.last_maintenance_date, "last_maintenance_date")
        self.next_maintenance_date = as_datetime(self.next_maintenance_date, "next_maintenance_date")

    @staticmethod
    def _coerce(enum_cls, value):
        if isinstance(value, str) and value in enum_cls.__members__:
            return enum_cls(value)
        return value

    @staticmethod
    def _valid_capacity(capacity) -> bool:
        if capacity is None:
            return True
        return isinstance(capacity, (int, float)) and not isinstance(capacity, bool) and capacity > 0

    def _collect_errors(self) -> List[str]:
        errors = []
        if not self.owner_company_id:
            errors.append("Owner company ID is required")
        if not self.equipment_type or len(self.equipment_type.strip()) < 2:
            errors.append("Equipment type is required")
        if self.serial_number is not None and len(self.serial_number.strip()) < 3:
            errors.append("Serial number must be at least 3 characters")
        if not isinstance(self.status, EquipmentStatus):
            errors.append("Invalid equipment status")
        if not isinstance(self.condition, EquipmentCondition):
            errors.append("Invalid equipment condition")
        if not self._valid_capacity(self.capacity):
            errors.append("Capacity must be a positive number")
        for name in ('purchase_price', 'rental_rate'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Money):
                try:
                    Money.of(value)
                except ValidationError as e:
                    errors.append(f"{name.replace('_', ' ').capitalize()}: {e.message}")
        return errors

    # Capability predicates

    def is_available(self) -> bool:
        return self.status == EquipmentStatus.AVAILABLE and self.is_active

    def is_rented(self) -> bool:
        return self.status == EquipmentStatus.RENTED

    def is_in_maintenance(self) -> bool:
        return self.status == EquipmentStatus.MAINTENANCE

    def is_out_of_service(self) -> bool:
        return self.status == EquipmentStatus.OUT_OF_SERVICE

    def is_under_warranty(self) -> bool:
        if not self.warranty_expiry:
            return False
        return now() <= self.warranty_expiry

    def needs_maintenance_soon(self) -> bool:
        """Check if the next scheduled maintenance falls within the warning window."""
        if not self.next_maintenance_date:
            return False
        return self.next_maintenance_date - now() <= timedelta(days=MAINTENANCE_WARNING_DAYS)

    # Transitions

    def rent(self, client_company_id: UUID) -> None:
        """Hand the unit over to a client."""
        if not client_company_id:
            raise ValidationError("Client company ID is required", "client_company_id")
        self._check("rent")
        if not self.is_active:
            raise BusinessRuleViolationError("INACTIVE_EQUIPMENT", "Equipment is not active")
        self._apply("rent", note=f"client={client_company_id}")
        self.current_client_id = client_company_id

    def release(self) -> None:
        """Return the unit from its current rental."""
        self._apply("release", note=f"client={self.current_client_id}")
        self.current_client_id = None

    def send_to_maintenance(self) -> None:
        self._apply("send_to_maintenance")

    def complete_maintenance(
        self,
        completed_at: Optional[datetime] = None,
        next_maintenance_date: Optional[datetime] = None
    ) -> None:
        """Bring the unit back from service and record the dates."""
        completed_at = as_datetime(completed_at, "completed_at") or now()
        next_date = as_datetime(next_maintenance_date, "next_maintenance_date")
        self._check("finish_maintenance")
        # a unit serviced while rented goes back to the pool
        self.current_client_id = None
        self.last_maintenance_date = completed_at
        self.next_maintenance_date = next_date
        self._apply("finish_maintenance")

    def abort_maintenance(self, reason: Optional[str] = None) -> None:
        """Return the unit to the pool without recording a service."""
        self._apply("finish_maintenance", note=reason)
        self.current_client_id = None

    def retire(self, reason: Optional[str] = None) -> None:
        """Take the unit out of service."""
        self._apply("retire", note=reason)
        self.is_active = False
        self.current_client_id = None

    def reactivate(self) -> None:
        self._apply("reactivate")
        self.is_active = True

    def update_condition(self, condition: EquipmentCondition) -> None:
        condition = self._coerce(EquipmentCondition, condition)
        if not isinstance(condition, EquipmentCondition):
            raise ValidationError("Invalid equipment condition", "condition")
        self.condition = condition
        self.mark_updated()

    def update(self, **changes) -> None:
        """Update descriptive fields from the allowlist."""
        unknown = set(changes) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}", sorted(unknown)[0]
            )

        staged = dict(changes)
        if 'equipment_type' in staged and (not staged['equipment_type'] or len(staged['equipment_type'].strip()) < 2):
            raise ValidationError("Equipment type is required", "equipment_type")
        if 'capacity' in staged and not self._valid_capacity(staged['capacity']):
            raise ValidationError("Capacity must be a positive number", "capacity")
        if staged.get('rental_rate') is not None:
            staged['rental_rate'] = Money.of(staged['rental_rate'])
        for name in ('warranty_expiry', 'next_maintenance_date'):
            if name in staged:
                staged[name] = as_datetime(staged[name], name)

        for name, value in staged.items():
            setattr(self, name, value)
        self.mark_updated()

    # Derived data

    @property
    def age_in_days(self) -> int:
        if not self.installation_date:
            return 0
        return abs((now() - self.installation_date).days)

    @property
    def days_until_maintenance(self) -> Optional[int]:
        if not self.next_maintenance_date:
            return None
        return (self.next_maintenance_date.date() - now().date()).days

    @property
    def display_name(self) -> str:
        parts = [part for part in (self.brand, self.model) if part]
        label = " ".join(parts) or self.equipment_type
        return f"{label} ({self.serial_number})" if self.serial_number else label

    def set_specification(self, key: str, value: Any) -> None:
        self.specifications[key] = value
        self.mark_updated()

    def get_specification(self, key: str, default: Any = None) -> Any:
        return self.specifications.get(key, default)

    def __str__(self) -> str:
        return f"Equipment({self.display_name}, {self.status.value}, {self.condition.value})"
