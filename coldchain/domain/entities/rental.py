"""
Rental Entity - Aggregate root for an equipment rental contract.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from .base import StatefulEntity, DateLike, as_datetime, now
from ..exceptions import ValidationError, BusinessRuleViolationError
from ..lifecycle import Lifecycle
from ..value_objects import Money, DEFAULT_CURRENCY


class RentalStatus(str, Enum):
    """Rental contract status. Everything but ACTIVE is terminal."""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    TERMINATED = "TERMINATED"
    EXPIRED = "EXPIRED"

    @property
    def is_terminal(self) -> bool:
        return self != RentalStatus.ACTIVE


RENTAL_LIFECYCLE = Lifecycle("Rental", {
    (RentalStatus.ACTIVE, "complete"): RentalStatus.COMPLETED,
    (RentalStatus.ACTIVE, "terminate"): RentalStatus.TERMINATED,
    (RentalStatus.ACTIVE, "expire"): RentalStatus.EXPIRED,
    (RentalStatus.ACTIVE, "extend"): RentalStatus.ACTIVE,
})


def months_between(start: datetime, end: datetime) -> int:
    """Whole calendar months between two dates, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


@dataclass(eq=False)
class Rental(StatefulEntity):
    """
    Rental contract binding one equipment unit to one client company.

    Created ACTIVE. COMPLETED, TERMINATED and EXPIRED are one-way terminal
    states; only an ACTIVE rental can be extended.
    """
    LIFECYCLE = RENTAL_LIFECYCLE

    equipment_id: Optional[UUID] = None
    client_company_id: Optional[UUID] = None
    provider_company_id: Optional[UUID] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    monthly_rate: Optional[Money] = None
    security_deposit: Optional[Money] = None
    currency: str = DEFAULT_CURRENCY
    status: RentalStatus = RentalStatus.ACTIVE
    payment_terms: Optional[str] = None
    contract_terms: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.equipment_id:
            raise ValidationError("Equipment ID is required", "equipment_id")
        if not self.client_company_id:
            raise ValidationError("Client company ID is required", "client_company_id")
        if not self.provider_company_id:
            raise ValidationError("Provider company ID is required", "provider_company_id")

        self.start_date = as_datetime(self.start_date, "start_date")
        self.end_date = as_datetime(self.end_date, "end_date")
        if not self.start_date:
            raise ValidationError("Start date is required", "start_date")
        if not self.end_date:
            raise ValidationError("End date is required", "end_date")
        if self.start_date >= self.end_date:
            raise ValidationError("Start date must be before end date", "end_date")

        self.monthly_rate = self._positive_rate(self.monthly_rate)
        self.currency = self.monthly_rate.currency
        self.security_deposit = Money.of(
            self.security_deposit if self.security_deposit is not None else 0,
            self.monthly_rate.currency,
        )
        if self.security_deposit.currency != self.monthly_rate.currency:
            raise ValidationError("Security deposit currency must match the monthly rate", "security_deposit")

        if isinstance(self.status, str) and self.status in RentalStatus.__members__:
            self.status = RentalStatus(self.status)
        if not isinstance(self.status, RentalStatus):
            raise ValidationError("Invalid rental status", "status")

    def _positive_rate(self, value) -> Money:
        if value is None:
            raise ValidationError("Monthly rate must be greater than zero", "monthly_rate")
        try:
            rate = Money.of(value, self.currency)
        except ValidationError as e:
            if e.field != "amount":
                raise
            raise ValidationError("Monthly rate must be greater than zero", "monthly_rate") from None
        if not rate.is_positive:
            raise ValidationError("Monthly rate must be greater than zero", "monthly_rate")
        return rate

    @property
    def is_active(self) -> bool:
        return self.status == RentalStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == RentalStatus.COMPLETED

    @property
    def is_terminated(self) -> bool:
        return self.status == RentalStatus.TERMINATED

    @property
    def is_expired(self) -> bool:
        return self.status == RentalStatus.EXPIRED

    def has_expired(self) -> bool:
        """Check if the contract end date is already behind us."""
        return now() > self.end_date

    def days_until_expiry(self) -> int:
        seconds = (self.end_date - now()).total_seconds()
        return math.ceil(seconds / 86400)

    @property
    def months_span(self) -> int:
        return months_between(self.start_date, self.end_date)

    def calculate_total_revenue(self) -> Money:
        """Contract value: monthly rate times the whole-month span, at least one month."""
        return self.monthly_rate.multiply(max(1, self.months_span))

    def calculate_actual_revenue(self) -> Money:
        """Revenue earned so far; an active rental is counted up to today."""
        end = self.end_date
        if self.is_active:
            end = min(now(), self.end_date)
        return self.monthly_rate.multiply(max(1, months_between(self.start_date, end)))

    def extend_rental(self, new_end_date: DateLike) -> None:
        new_end = as_datetime(new_end_date, "end_date")
        self._check("extend")
        if new_end is None or new_end <= self.end_date:
            raise BusinessRuleViolationError(
                "EXTENSION_DATE", "New end date must be after current end date"
            )
        previous = self.end_date
        self.end_date = new_end
        self._apply("extend", note=f"{previous.isoformat()} -> {new_end.isoformat()}")

    def terminate(self, reason: str) -> None:
        self._apply("terminate", note=reason)
        self._append_note(f"[{now().isoformat(timespec='seconds')}] Terminated: {reason}")

    def complete(self) -> None:
        self._apply("complete")

    def mark_expired(self) -> None:
        """Expire an ACTIVE rental past its end date; any other status is rejected."""
        self._check("expire")
        if not self.has_expired():
            raise BusinessRuleViolationError("NOT_EXPIRED", "Rental has not expired yet")
        self._apply("expire")

    def update_payment_terms(self, new_terms: str) -> None:
        self.payment_terms = new_terms
        self.mark_updated()

    def update_monthly_rate(self, new_rate) -> None:
        rate = self._positive_rate(new_rate)
        if rate.currency != self.currency:
            raise ValidationError("Monthly rate currency cannot change", "monthly_rate")
        self.monthly_rate = rate
        self.mark_updated()

    def add_note(self, note: str) -> None:
        self._append_note(note)
        self.mark_updated()

    def _append_note(self, note: str) -> None:
        self.notes = f"{self.notes}\n{note}" if self.notes else note

    def __str__(self) -> str:
        return (
            f"Rental({self.start_date.date()} -> {self.end_date.date()}, "
            f"{self.monthly_rate}/month, {self.status.value})"
        )
