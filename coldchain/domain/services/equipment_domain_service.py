"""Cross-entity business rules for equipment: rentability, pricing, depreciation and upkeep."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import structlog
from dateutil.relativedelta import relativedelta

from ..entities import Equipment, EquipmentCondition, EquipmentStatus, Maintenance
from ..entities.base import now
from ..repositories import EquipmentRepository, RentalRepository
from ..value_objects import Money, MaintenancePriority, DEFAULT_CURRENCY

logger = structlog.get_logger()

FALLBACK_RATE_SHARE = Decimal("0.10")
FALLBACK_RATE = Decimal("1000")

RATE_MULTIPLIER = {
    EquipmentCondition.NEW: Decimal("1.2"),
    EquipmentCondition.GOOD: Decimal("1.0"),
    EquipmentCondition.FAIR: Decimal("0.8"),
    EquipmentCondition.POOR: Decimal("0.6"),
}

ANNUAL_DEPRECIATION = 0.10
MAX_AGE_DEPRECIATION = 0.80
MAX_DEPRECIATION = 0.90
CONDITION_DEPRECIATION = {
    EquipmentCondition.NEW: 0.0,
    EquipmentCondition.GOOD: 0.05,
    EquipmentCondition.FAIR: 0.15,
    EquipmentCondition.POOR: 0.30,
}

NEVER_SERVICED_GRACE_MONTHS = 6
SERVICE_INTERVAL_MONTHS = 3
SECONDS_PER_YEAR = 365.25 * 24 * 3600


@dataclass(frozen=True)
class RentabilityCheck:
    """Outcome of a rentability check; falsy when the unit cannot be rented."""
    can_rent: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.can_rent


class EquipmentDomainService:
    """
    Business rules that need more than one equipment unit or its rentals.

    Repositories are injected so the rules can run against any store,
    including in-memory fakes.
    """

    def __init__(self, equipment_repository: EquipmentRepository, rental_repository: RentalRepository):
        self._equipment = equipment_repository
        self._rentals = rental_repository

    def can_equipment_be_rented(self, equipment: Equipment) -> RentabilityCheck:
        """
        Decide whether a unit can be handed to a new client.

        Refuses units that are not AVAILABLE (or inactive), units in POOR
        condition and units that already have an ACTIVE rental on record.
        """
        if equipment.status != EquipmentStatus.AVAILABLE:
            return self._refuse(equipment, f"Equipment is {equipment.status.value.lower()}")
        if not equipment.is_active:
            return self._refuse(equipment, "Equipment is inactive")

        if equipment.condition == EquipmentCondition.POOR:
            return self._refuse(equipment, "Equipment condition is too poor for rental")

        if self._rentals.find_active_rental_by_equipment(equipment.id):
            return self._refuse(equipment, "Equipment already has an active rental")

        return RentabilityCheck(can_rent=True)

    def _refuse(self, equipment: Equipment, reason: str) -> RentabilityCheck:
        logger.debug("Equipment not rentable", equipment_id=str(equipment.id), reason=reason)
        return RentabilityCheck(can_rent=False, reason=reason)

    def calculate_suggested_rental_rate(self, equipment: Equipment) -> Money:
        """
        Suggest a monthly rate from the owner's other units of the same type.

        Without priced peers the rate is 10% of the purchase price, or a flat
        1000 when the price is unknown. Peer averages are scaled by condition.
        Only peers priced in the unit's own currency are averaged.
        """
        currency = self._pricing_currency(equipment)
        peers = self._equipment.find_by_type(equipment.equipment_type, equipment.owner_company_id)
        rates = [
            peer.rental_rate for peer in peers
            if peer.id != equipment.id and peer.rental_rate is not None
            and peer.rental_rate.is_positive and peer.rental_rate.currency == currency
        ]

        if not rates:
            if equipment.purchase_price is not None:
                return equipment.purchase_price.multiply(FALLBACK_RATE_SHARE)
            return Money(FALLBACK_RATE, DEFAULT_CURRENCY)

        total = rates[0]
        for rate in rates[1:]:
            total = total.add(rate)
        average = total.divide(len(rates))
        return average.multiply(RATE_MULTIPLIER.get(equipment.condition, Decimal("1.0")))

    @staticmethod
    def _pricing_currency(equipment: Equipment) -> str:
        for price in (equipment.rental_rate, equipment.purchase_price):
            if price is not None:
                return price.currency
        return DEFAULT_CURRENCY

    def needs_maintenance(self, equipment: Equipment, maintenance_history: Iterable[Maintenance] = ()) -> bool:
        if equipment.is_out_of_service():
            return True
        if equipment.condition == EquipmentCondition.POOR:
            return True

        current = now()
        completions = self._completion_dates(maintenance_history)
        if not completions:
            grace_limit = current - relativedelta(months=NEVER_SERVICED_GRACE_MONTHS)
            return bool(equipment.installation_date and equipment.installation_date < grace_limit)

        return max(completions) < current - relativedelta(months=SERVICE_INTERVAL_MONTHS)

    @staticmethod
    def _completion_dates(maintenance_history: Iterable[Maintenance]) -> List:
        return [m.actual_end_time for m in maintenance_history if m.is_completed and m.actual_end_time]

    def calculate_depreciation(self, equipment: Equipment) -> float:
        """
        Share of the purchase price lost, between 0 and 0.9.

        Linear 10% per year of installed age (capped at 80%) plus a
        condition penalty.
        """
        if equipment.purchase_price is None or not equipment.installation_date:
            return 0.0

        years = max((now() - equipment.installation_date).total_seconds(), 0) / SECONDS_PER_YEAR
        age_share = min(years * ANNUAL_DEPRECIATION, MAX_AGE_DEPRECIATION)
        return min(age_share + CONDITION_DEPRECIATION.get(equipment.condition, 0.0), MAX_DEPRECIATION)

    def calculate_current_value(self, equipment: Equipment) -> Money:
        if equipment.purchase_price is None:
            return Money.zero(DEFAULT_CURRENCY)
        remaining = Decimal(str(1 - self.calculate_depreciation(equipment)))
        return equipment.purchase_price.multiply(remaining)

    def get_maintenance_priority(
        self,
        equipment: Equipment,
        maintenance_history: Iterable[Maintenance] = ()
    ) -> MaintenancePriority:
        history = list(maintenance_history)
        if equipment.is_out_of_service():
            return MaintenancePriority.CRITICAL
        if equipment.condition == EquipmentCondition.POOR:
            return MaintenancePriority.HIGH

        needs_service = self.needs_maintenance(equipment, history)
        if equipment.is_rented() and needs_service:
            return MaintenancePriority.HIGH
        if needs_service:
            return MaintenancePriority.MEDIUM
        return MaintenancePriority.LOW

    def summarize(self, equipment: Equipment, maintenance_history: Iterable[Maintenance] = ()) -> Dict[str, Any]:
        """Build a one-shot report of the rules above for a single unit."""
        history = list(maintenance_history)
        rentability = self.can_equipment_be_rented(equipment)
        priority = self.get_maintenance_priority(equipment, history)
        summary = {
            'equipment_id': str(equipment.id),
            'status': equipment.status.value,
            'condition': equipment.condition.value,
            'can_rent': rentability.can_rent,
            'rent_blocked_reason': rentability.reason,
            'needs_maintenance': self.needs_maintenance(equipment, history),
            'maintenance_priority': priority.value,
            'depreciation': round(self.calculate_depreciation(equipment), 4),
            'current_value': self.calculate_current_value(equipment).to_dict(),
            'suggested_rate': self.calculate_suggested_rental_rate(equipment).to_dict(),
        }
        logger.debug("Equipment summary built", equipment_id=summary['equipment_id'], priority=priority.value)
        return summary
