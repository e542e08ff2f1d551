"""
Maintenance Entity - A scheduled or performed service on one equipment unit.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from dateutil.relativedelta import relativedelta

from .base import StatefulEntity, DateLike, as_datetime, now
from ..exceptions import ValidationError
from ..lifecycle import Lifecycle
from ..value_objects import Money, DEFAULT_CURRENCY

PREVENTIVE_INTERVAL_MONTHS = 3


class MaintenanceType(str, Enum):
    PREVENTIVE = "PREVENTIVE"
    CORRECTIVE = "CORRECTIVE"
    EMERGENCY = "EMERGENCY"


class MaintenanceStatus(str, Enum):
    """Maintenance workflow status."""
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"

    @property
    def is_terminal(self) -> bool:
        return self in (MaintenanceStatus.COMPLETED, MaintenanceStatus.CANCELLED)


MAINTENANCE_LIFECYCLE = Lifecycle("Maintenance", {
    (MaintenanceStatus.SCHEDULED, "start"): MaintenanceStatus.IN_PROGRESS,
    (MaintenanceStatus.IN_PROGRESS, "complete"): MaintenanceStatus.COMPLETED,
    (MaintenanceStatus.SCHEDULED, "postpone"): MaintenanceStatus.POSTPONED,
    (MaintenanceStatus.POSTPONED, "resume"): MaintenanceStatus.SCHEDULED,
    (MaintenanceStatus.SCHEDULED, "reschedule"): MaintenanceStatus.SCHEDULED,
    (MaintenanceStatus.IN_PROGRESS, "reschedule"): MaintenanceStatus.SCHEDULED,
    (MaintenanceStatus.POSTPONED, "reschedule"): MaintenanceStatus.SCHEDULED,
    (MaintenanceStatus.SCHEDULED, "cancel"): MaintenanceStatus.CANCELLED,
    (MaintenanceStatus.IN_PROGRESS, "cancel"): MaintenanceStatus.CANCELLED,
    (MaintenanceStatus.POSTPONED, "cancel"): MaintenanceStatus.CANCELLED,
    (MaintenanceStatus.COMPLETED, "rate"): MaintenanceStatus.COMPLETED,
})


@dataclass(eq=False)
class Maintenance(StatefulEntity):
    """
    Maintenance entity.

    Workflow:
    1. SCHEDULED - Planned for ``scheduled_date``
    2. IN_PROGRESS - Technician on site
    3. COMPLETED - Work recorded, costs known, can be rated
    CANCELLED is reachable from any non-terminal status. POSTPONED is only
    passed through while postponing and lands back on SCHEDULED.
    """
    LIFECYCLE = MAINTENANCE_LIFECYCLE

    title: Optional[str] = None
    description: Optional[str] = None
    maintenance_type: MaintenanceType = None
    category: Optional[str] = None
    scheduled_date: Optional[DateLike] = None
    estimated_duration_hours: Optional[float] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    next_scheduled_date: Optional[datetime] = None
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED

    equipment_id: Optional[UUID] = None
    service_request_id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    client_company_id: Optional[UUID] = None
    provider_company_id: Optional[UUID] = None

    currency: str = DEFAULT_CURRENCY
    estimated_cost: Optional[Money] = None
    actual_cost: Optional[Money] = None
    parts_cost: Optional[Money] = None
    labor_cost: Optional[Money] = None

    work_performed: Optional[str] = None
    parts_used: List[str] = field(default_factory=list)
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    quality_rating: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.maintenance_type, str) and self.maintenance_type in MaintenanceType.__members__:
            self.maintenance_type = MaintenanceType(self.maintenance_type)
        if isinstance(self.status, str) and self.status in MaintenanceStatus.__members__:
            self.status = MaintenanceStatus(self.status)

        self.scheduled_date = as_datetime(self.scheduled_date, "scheduled_date")
        self.actual_start_time = as_datetime(self.actual_start_time, "actual_start_time")
        self.actual_end_time = as_datetime(self.actual_end_time, "actual_end_time")
        self.next_scheduled_date = as_datetime(self.next_scheduled_date, "next_scheduled_date")
        self.parts_used = list(self.parts_used or [])
        self.validate()

    def validate(self) -> None:
        """Check every invariant, raising on the first violation."""
        if not isinstance(self.maintenance_type, MaintenanceType):
            raise ValidationError("Invalid maintenance type", "maintenance_type")
        if not isinstance(self.status, MaintenanceStatus):
            raise ValidationError("Invalid maintenance status", "status")
        if not self.scheduled_date:
            raise ValidationError("Scheduled date is required", "scheduled_date")
        if not self.equipment_id:
            raise ValidationError("Equipment ID is required", "equipment_id")

        self.estimated_cost = self._cost(self.estimated_cost, "estimated_cost")
        self.actual_cost = self._cost(self.actual_cost, "actual_cost")
        self.parts_cost = self._cost(self.parts_cost, "parts_cost")
        self.labor_cost = self._cost(self.labor_cost, "labor_cost")

        if self.estimated_duration_hours is not None and self.estimated_duration_hours <= 0:
            raise ValidationError("Estimated duration must be positive", "estimated_duration_hours")
        if self.quality_rating is not None:
            self._check_rating(self.quality_rating)

    def _cost(self, value, name: str) -> Optional[Money]:
        if value is None:
            return None
        label = name.replace('_', ' ').capitalize()
        if isinstance(value, Money):
            if value.currency != self.currency:
                raise ValidationError(f"{label} must be in {self.currency}", name)
            return value
        try:
            return Money(value, self.currency)
        except ValidationError as e:
            raise ValidationError(f"{label}: {e.message}", name) from None

    @staticmethod
    def _check_rating(rating) -> None:
        if isinstance(rating, bool) or not isinstance(rating, (int, float)) or not 1 <= rating <= 5:
            raise ValidationError("Quality rating must be between 1 and 5", "quality_rating")

    @classmethod
    def schedule(
        cls,
        equipment_id: UUID,
        maintenance_type: MaintenanceType,
        scheduled_date: DateLike,
        title: Optional[str] = None,
        **kwargs
    ) -> 'Maintenance':
        """Factory method to create a new scheduled maintenance."""
        return cls(
            equipment_id=equipment_id,
            maintenance_type=maintenance_type,
            scheduled_date=scheduled_date,
            title=title,
            status=MaintenanceStatus.SCHEDULED,
            **kwargs
        )

    @property
    def is_scheduled(self) -> bool:
        return self.status == MaintenanceStatus.SCHEDULED

    @property
    def is_in_progress(self) -> bool:
        return self.status == MaintenanceStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == MaintenanceStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status == MaintenanceStatus.CANCELLED

    @property
    def is_postponed(self) -> bool:
        return self.status == MaintenanceStatus.POSTPONED

    @property
    def was_postponed(self) -> bool:
        return any(entry["action"] == "postpone" for entry in self.status_history)

    @property
    def is_preventive(self) -> bool:
        return self.maintenance_type == MaintenanceType.PREVENTIVE

    def is_due(self) -> bool:
        return self.is_scheduled and now() >= self.scheduled_date

    def is_overdue(self) -> bool:
        """Scheduled and the scheduled day is already over."""
        return self.is_scheduled and now().date() > self.scheduled_date.date()

    def _future_date(self, value: DateLike) -> datetime:
        new_date = as_datetime(value, "scheduled_date")
        if new_date is None or new_date <= now():
            raise ValidationError("New scheduled date must be in the future", "scheduled_date")
        return new_date

    def start(self) -> None:
        self._check("start")
        self.actual_start_time = now()
        self._apply("start")

    def complete(self, work_performed: Optional[str] = None, actual_cost=0, parts_cost=0, labor_cost=0) -> None:
        self._check("complete")
        costs = {
            "actual_cost": self._cost(actual_cost, "actual_cost"),
            "parts_cost": self._cost(parts_cost, "parts_cost"),
            "labor_cost": self._cost(labor_cost, "labor_cost"),
        }

        self.actual_end_time = now()
        self.work_performed = work_performed
        for name, value in costs.items():
            setattr(self, name, value)
        self._apply("complete")

        if self.is_preventive and not self.next_scheduled_date:
            self.schedule_next_preventive_maintenance()

    def cancel(self, reason: str) -> None:
        self._apply("cancel", note=reason)
        self._append_findings(f"Cancelled: {reason}")

    def postpone(self, new_scheduled_date: DateLike, reason: str) -> None:
        """Move a scheduled maintenance to a later date; it stays SCHEDULED."""
        self._check("postpone")
        new_date = self._future_date(new_scheduled_date)
        previous = self.scheduled_date

        self._apply("postpone", note=reason)
        self.scheduled_date = new_date
        self._append_findings(f"Postponed: {reason}")
        self._apply("resume", note=f"{previous.isoformat()} -> {new_date.isoformat()}")

    def reschedule(self, new_scheduled_date: DateLike) -> None:
        self._check("reschedule")
        self.scheduled_date = self._future_date(new_scheduled_date)
        self._apply("reschedule")

    def rate_quality(self, rating: int) -> None:
        self._check("rate")
        self._check_rating(rating)
        self.quality_rating = rating
        self._apply("rate", note=str(rating))

    def update_costs(self, actual_cost, parts_cost=0, labor_cost=0) -> None:
        # all three are converted before any is assigned
        costs = (
            self._cost(actual_cost, "actual_cost"),
            self._cost(parts_cost, "parts_cost"),
            self._cost(labor_cost, "labor_cost"),
        )
        self.actual_cost, self.parts_cost, self.labor_cost = costs
        self.mark_updated()

    def add_findings(self, findings: str) -> None:
        self._append_findings(findings)
        self.mark_updated()

    def add_recommendations(self, recommendations: str) -> None:
        self.recommendations = (
            f"{self.recommendations}\n{recommendations}" if self.recommendations else recommendations
        )
        self.mark_updated()

    def add_parts_used(self, parts: List[str]) -> None:
        if not isinstance(parts, (list, tuple)):
            raise ValidationError("Parts must be a list", "parts_used")
        self.parts_used.extend(parts)
        self.mark_updated()

    def _append_findings(self, text: str) -> None:
        self.findings = f"{self.findings}\n{text}" if self.findings else text

    def calculate_actual_duration(self) -> float:
        """Hours between actual start and end, 2 decimal places."""
        if not self.actual_start_time or not self.actual_end_time:
            return 0.0
        hours = (self.actual_end_time - self.actual_start_time).total_seconds() / 3600
        return round(hours, 2)

    def is_on_time(self) -> Optional[bool]:
        if not self.is_completed:
            return None
        return self.calculate_actual_duration() <= (self.estimated_duration_hours or 0)

    def is_on_budget(self) -> Optional[bool]:
        if not self.is_completed or not self.estimated_cost or self.estimated_cost.is_zero:
            return None
        actual = self.actual_cost or Money.zero(self.currency)
        return not actual.is_greater_than(self.estimated_cost)

    def schedule_next_preventive_maintenance(self) -> Optional[datetime]:
        """Set the next occurrence of a preventive maintenance."""
        if not self.is_preventive:
            return None
        self.next_scheduled_date = self.scheduled_date + relativedelta(months=PREVENTIVE_INTERVAL_MONTHS)
        self.mark_updated()
        return self.next_scheduled_date

    def __str__(self) -> str:
        label = self.title or self.maintenance_type.value
        return f"Maintenance({label}, {self.scheduled_date.date()}, {self.status.value})"
