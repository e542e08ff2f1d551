"""Service for rental creation and lifecycle operations."""
from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from ..config import config
from ..domain.entities import Equipment, Rental
from ..domain.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EquipmentNotFoundError,
    EquipmentNotRentableError,
    RentalNotFoundError,
)
from ..domain.repositories import EquipmentRepository, RentalRepository
from ..domain.services import EquipmentDomainService
from ..domain.value_objects import Money
from .dto import CreateRentalRequest

logger = structlog.get_logger()


@dataclass
class RentalResult:
    """Result of a rental operation."""
    success: bool
    message: str
    rental: Optional[Rental] = None
    rentals: List[Rental] = field(default_factory=list)
    error: Optional[str] = None


class RentalService:
    """Creates rentals and drives them through their lifecycle, keeping the equipment in step."""

    def __init__(
        self,
        rental_repository: RentalRepository,
        equipment_repository: EquipmentRepository,
        equipment_domain_service: EquipmentDomainService
    ):
        self._rentals = rental_repository
        self._equipment = equipment_repository
        self._domain = equipment_domain_service

    def create_rental(self, data) -> RentalResult:
        """
        Create a rental for an available unit.

        Args:
            data: dict payload or CreateRentalRequest.

        Returns:
            RentalResult with the saved rental, or the error code on failure.
        """
        try:
            request = CreateRentalRequest.parse(data)

            equipment = self._equipment.find_by_id(request.equipment_id)
            if not equipment:
                raise EquipmentNotFoundError(str(request.equipment_id))
            if equipment.owner_company_id != request.provider_company_id:
                raise BusinessRuleViolationError(
                    "EQUIPMENT_OWNERSHIP", "Equipment does not belong to the provider company"
                )

            check = self._domain.can_equipment_be_rented(equipment)
            if not check.can_rent:
                raise EquipmentNotRentableError(check.reason)

            rental = Rental(
                equipment_id=request.equipment_id,
                client_company_id=request.client_company_id,
                provider_company_id=request.provider_company_id,
                start_date=request.start_date,
                end_date=request.end_date,
                monthly_rate=Money(request.monthly_rate, request.currency),
                security_deposit=Money(request.security_deposit, request.currency),
                payment_terms=request.payment_terms,
                contract_terms=request.contract_terms,
                notes=request.notes,
            )
            equipment.rent(request.client_company_id)
        except DomainError as e:
            return self._failure("Rental not created", e)

        saved = self._rentals.save(rental)
        self._equipment.save(equipment)
        logger.info(
            "Rental created",
            rental_id=str(saved.id),
            equipment_id=str(equipment.id),
            client_company_id=str(saved.client_company_id),
            monthly_rate=str(saved.monthly_rate),
        )
        return RentalResult(success=True, message="Rental created successfully", rental=saved)

    def terminate_rental(self, rental_id, reason: str) -> RentalResult:
        try:
            rental = self._get(rental_id)
            rental.terminate(reason)
        except DomainError as e:
            return self._failure("Rental not terminated", e, rental_id=str(rental_id))

        self._finish(rental)
        logger.info("Rental terminated", rental_id=str(rental.id), reason=reason)
        return RentalResult(success=True, message="Rental terminated", rental=rental)

    def complete_rental(self, rental_id) -> RentalResult:
        try:
            rental = self._get(rental_id)
            rental.complete()
        except DomainError as e:
            return self._failure("Rental not completed", e, rental_id=str(rental_id))

        self._finish(rental)
        logger.info("Rental completed", rental_id=str(rental.id))
        return RentalResult(success=True, message="Rental completed", rental=rental)

    def extend_rental(self, rental_id, new_end_date) -> RentalResult:
        try:
            rental = self._get(rental_id)
            rental.extend_rental(new_end_date)
        except DomainError as e:
            return self._failure("Rental not extended", e, rental_id=str(rental_id))

        self._rentals.save(rental)
        logger.info("Rental extended", rental_id=str(rental.id), end_date=rental.end_date.isoformat())
        return RentalResult(success=True, message="Rental extended", rental=rental)

    def expire_overdue_rentals(self, provider_company_id) -> RentalResult:
        """Mark every active rental of the provider whose end date has passed as EXPIRED."""
        expired = []
        for rental in self._rentals.find_active_rentals(provider_company_id):
            if not rental.has_expired():
                continue
            rental.mark_expired()
            self._finish(rental)
            expired.append(rental)

        logger.info("Overdue rentals expired", provider_company_id=str(provider_company_id), count=len(expired))
        return RentalResult(success=True, message=f"{len(expired)} rentals expired", rentals=expired)

    def get_expiring_rentals(self, provider_company_id, days: Optional[int] = None) -> RentalResult:
        days = config.EXPIRING_RENTALS_DAYS if days is None else days
        rentals = self._rentals.find_expiring_rentals(provider_company_id, days)
        return RentalResult(
            success=True,
            message=f"{len(rentals)} rentals expiring within {days} days",
            rentals=rentals,
        )

    def _get(self, rental_id) -> Rental:
        rental = self._rentals.find_by_id(rental_id)
        if not rental:
            raise RentalNotFoundError(str(rental_id))
        return rental

    def _finish(self, rental: Rental) -> None:
        """Persist a closed rental and hand its unit back to the pool."""
        self._rentals.save(rental)
        equipment: Optional[Equipment] = self._equipment.find_by_id(rental.equipment_id)
        if equipment and equipment.is_rented() and equipment.current_client_id == rental.client_company_id:
            equipment.release()
            self._equipment.save(equipment)

    @staticmethod
    def _failure(event: str, error: DomainError, **context) -> RentalResult:
        logger.warning(event, error=error.code, reason=error.message, **context)
        return RentalResult(success=False, message=error.message, error=error.code)
