"""Service for scheduling and running maintenance on equipment."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import structlog

from ..domain.entities import Equipment, Maintenance
from ..domain.exceptions import DomainError, EquipmentNotFoundError, MaintenanceNotFoundError
from ..domain.repositories import EquipmentRepository, MaintenanceRepository
from ..domain.services import EquipmentDomainService
from ..domain.value_objects import MaintenancePriority, Money
from .dto import ScheduleMaintenanceRequest

logger = structlog.get_logger()


@dataclass
class MaintenanceResult:
    """Result of a maintenance operation."""
    success: bool
    message: str
    maintenance: Optional[Maintenance] = None
    priority: Optional[MaintenancePriority] = None
    error: Optional[str] = None


class MaintenanceService:
    """Handles the maintenance workflow and moves the serviced unit in and out of MAINTENANCE."""

    def __init__(
        self,
        maintenance_repository: MaintenanceRepository,
        equipment_repository: EquipmentRepository,
        equipment_domain_service: EquipmentDomainService
    ):
        self._maintenances = maintenance_repository
        self._equipment = equipment_repository
        self._domain = equipment_domain_service

    def schedule(self, data) -> MaintenanceResult:
        """
        Schedule a maintenance for an existing unit.

        Args:
            data: dict payload or ScheduleMaintenanceRequest.

        Returns:
            MaintenanceResult with the saved maintenance.
        """
        try:
            request = ScheduleMaintenanceRequest.parse(data)
            equipment = self._get_equipment(request.equipment_id)

            maintenance = Maintenance.schedule(
                equipment_id=equipment.id,
                maintenance_type=request.maintenance_type,
                scheduled_date=request.scheduled_date,
                title=request.title,
                description=request.description,
                category=request.category,
                estimated_duration_hours=request.estimated_duration_hours,
                currency=request.currency,
                estimated_cost=None if request.estimated_cost is None else Money(request.estimated_cost, request.currency),
                technician_id=request.technician_id,
                service_request_id=request.service_request_id,
                client_company_id=equipment.current_client_id,
                provider_company_id=equipment.owner_company_id,
            )
            if maintenance.is_preventive and request.maintenance_interval_days:
                maintenance.next_scheduled_date = (
                    maintenance.scheduled_date + timedelta(days=request.maintenance_interval_days)
                )
        except DomainError as e:
            return self._failure("Maintenance not scheduled", e)

        saved = self._maintenances.save(maintenance)
        logger.info(
            "Maintenance scheduled",
            maintenance_id=str(saved.id),
            equipment_id=str(equipment.id),
            maintenance_type=saved.maintenance_type.value,
            scheduled_date=saved.scheduled_date.isoformat(),
        )
        return MaintenanceResult(success=True, message="Maintenance scheduled successfully", maintenance=saved)

    def start(self, maintenance_id) -> MaintenanceResult:
        try:
            maintenance = self._get(maintenance_id)
            equipment = self._get_equipment(maintenance.equipment_id)
            maintenance.ensure_can("start")
            needs_hop = not equipment.is_in_maintenance()
            if needs_hop:
                equipment.ensure_can("send_to_maintenance")
            maintenance.start()
            if needs_hop:
                equipment.send_to_maintenance()
        except DomainError as e:
            return self._failure("Maintenance not started", e, maintenance_id=str(maintenance_id))

        self._save(maintenance, equipment)
        logger.info("Maintenance started", maintenance_id=str(maintenance.id), equipment_id=str(equipment.id))
        return MaintenanceResult(success=True, message="Maintenance started", maintenance=maintenance)

    def complete(
        self,
        maintenance_id,
        work_performed: Optional[str] = None,
        actual_cost=0,
        parts_cost=0,
        labor_cost=0
    ) -> MaintenanceResult:
        """Close the maintenance and return the unit to AVAILABLE with its service dates."""
        try:
            maintenance = self._get(maintenance_id)
            equipment = self._get_equipment(maintenance.equipment_id)
            maintenance.complete(work_performed, actual_cost, parts_cost, labor_cost)
            if equipment.is_in_maintenance():
                equipment.complete_maintenance(
                    completed_at=maintenance.actual_end_time,
                    next_maintenance_date=maintenance.next_scheduled_date,
                )
        except DomainError as e:
            return self._failure("Maintenance not completed", e, maintenance_id=str(maintenance_id))

        self._save(maintenance, equipment)
        logger.info(
            "Maintenance completed",
            maintenance_id=str(maintenance.id),
            equipment_id=str(equipment.id),
            actual_cost=str(maintenance.actual_cost),
            duration_hours=maintenance.calculate_actual_duration(),
        )
        return MaintenanceResult(success=True, message="Maintenance completed", maintenance=maintenance)

    def cancel(self, maintenance_id, reason: str) -> MaintenanceResult:
        try:
            maintenance = self._get(maintenance_id)
            equipment = self._get_equipment(maintenance.equipment_id)
            was_in_progress = maintenance.is_in_progress
            maintenance.cancel(reason)
            if was_in_progress and equipment.is_in_maintenance():
                equipment.abort_maintenance(reason)
        except DomainError as e:
            return self._failure("Maintenance not cancelled", e, maintenance_id=str(maintenance_id))

        self._save(maintenance, equipment)
        logger.info("Maintenance cancelled", maintenance_id=str(maintenance.id), reason=reason)
        return MaintenanceResult(success=True, message="Maintenance cancelled", maintenance=maintenance)

    def priority_for(self, equipment_id) -> MaintenanceResult:
        try:
            equipment = self._get_equipment(equipment_id)
        except DomainError as e:
            return self._failure("Priority not computed", e, equipment_id=str(equipment_id))

        history = self._maintenances.find_by_equipment(equipment.id)
        priority = self._domain.get_maintenance_priority(equipment, history)
        logger.debug("Maintenance priority computed", equipment_id=str(equipment.id), priority=priority.value)
        return MaintenanceResult(success=True, message=f"{priority.label} priority", priority=priority)

    def _get(self, maintenance_id) -> Maintenance:
        maintenance = self._maintenances.find_by_id(maintenance_id)
        if not maintenance:
            raise MaintenanceNotFoundError(str(maintenance_id))
        return maintenance

    def _get_equipment(self, equipment_id) -> Equipment:
        equipment = self._equipment.find_by_id(equipment_id)
        if not equipment:
            raise EquipmentNotFoundError(str(equipment_id))
        return equipment

    def _save(self, maintenance: Maintenance, equipment: Equipment) -> None:
        self._maintenances.save(maintenance)
        self._equipment.save(equipment)

    @staticmethod
    def _failure(event: str, error: DomainError, **context) -> MaintenanceResult:
        logger.warning(event, error=error.code, reason=error.message, **context)
        return MaintenanceResult(success=False, message=error.message, error=error.code)
