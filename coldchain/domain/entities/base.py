"""
Base Entity - Abstract base for all domain entities.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, ClassVar, Dict, List, Optional, Union
from uuid import UUID, uuid4

from dateutil import parser as date_parser

from ..exceptions import ValidationError
from ..lifecycle import Lifecycle

DateLike = Union[datetime, date, str]


def now() -> datetime:
    """Current local time; every entity compares against naive datetimes."""
    return datetime.now()


def as_datetime(value: Optional[DateLike], field_name: str = "date") -> Optional[datetime]:
    """Normalize datetimes, dates and date strings to a naive datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return as_datetime(date_parser.parse(value), field_name)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid date for {field_name}: {value}", field_name) from None
    raise ValidationError(f"Invalid date for {field_name}: {value!r}", field_name)


@dataclass(eq=False)
class Entity(ABC):
    """
    Base class for all domain entities.

    Entities have identity (id) and are mutable.
    They encapsulate business logic and rules.
    """
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=now)
    updated_at: Optional[datetime] = None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entity):
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def mark_updated(self) -> None:
        """Mark entity as updated with current timestamp."""
        self.updated_at = now()


@dataclass(eq=False)
class StatefulEntity(Entity):
    """
    Entity whose status moves through a declared Lifecycle.

    Subclasses set ``LIFECYCLE`` and a ``status`` field; state-changing
    methods call ``_apply`` instead of assigning ``status`` directly.
    """
    LIFECYCLE: ClassVar[Lifecycle]

    status_history: List[Dict[str, Any]] = field(default_factory=list)

    def can(self, action: str) -> bool:
        return self.LIFECYCLE.can(self.status, action)

    @property
    def allowed_actions(self) -> List[str]:
        return self.LIFECYCLE.allowed_actions(self.status)

    def ensure_can(self, action: str) -> None:
        """Raise InvalidStatusTransitionError unless ``action`` is allowed from the current status."""
        self._check(action)

    def _check(self, action: str):
        """Resolve the target status without changing anything."""
        return self.LIFECYCLE.next_status(self.status, action)

    def _apply(self, action: str, note: Optional[str] = None):
        target = self._check(action)
        self.status_history.append({
            "from": self.status.value,
            "to": target.value,
            "action": action,
            "at": now().isoformat(),
            "note": note,
        })
        self.status = target
        self.mark_updated()
        return target
