"""Tests for MaintenanceService."""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from coldchain.domain import EquipmentStatus, MaintenancePriority, MaintenanceType, Money
from coldchain.domain.entities.base import now


class TestMaintenanceService:

    @pytest.fixture
    def unit(self, equipment_repository, equipment_factory):
        return equipment_repository.save(equipment_factory.create())

    @pytest.fixture
    def scheduled(self, maintenance_service, unit):
        result = maintenance_service.schedule({
            'equipment_id': unit.id,
            'maintenance_type': 'CORRECTIVE',
            'scheduled_date': now() + timedelta(days=2),
            'title': 'Fix thermostat',
            'estimated_cost': '200',
        })
        assert result.success is True
        return result.maintenance

    def test_schedule_links_equipment_owner(self, scheduled, unit, maintenance_repository):
        assert scheduled.is_scheduled
        assert scheduled.provider_company_id == unit.owner_company_id
        assert scheduled.estimated_cost == Money(200)
        assert maintenance_repository.find_by_id(scheduled.id) is scheduled

    def test_schedule_preventive_with_interval(self, maintenance_service, unit):
        result = maintenance_service.schedule({
            'equipment_id': unit.id,
            'maintenance_type': MaintenanceType.PREVENTIVE,
            'scheduled_date': '2031-01-01',
            'maintenance_interval_days': 45,
        })
        assert result.maintenance.next_scheduled_date == datetime(2031, 2, 15)

    def test_schedule_for_unknown_equipment(self, maintenance_service):
        result = maintenance_service.schedule({
            'equipment_id': uuid4(),
            'maintenance_type': 'CORRECTIVE',
            'scheduled_date': '2031-01-01',
        })
        assert result.success is False
        assert result.error == "EQUIPMENT_NOT_FOUND"

    def test_schedule_invalid_payload(self, maintenance_service):
        result = maintenance_service.schedule({'maintenance_type': 'CORRECTIVE'})
        assert result.success is False
        assert result.error == "VALIDATION_ERROR"

    def test_start_moves_equipment_to_maintenance(self, maintenance_service, scheduled, unit):
        result = maintenance_service.start(scheduled.id)
        assert result.success is True
        assert scheduled.is_in_progress
        assert unit.status == EquipmentStatus.MAINTENANCE

    def test_start_on_retired_unit_changes_nothing(
        self, maintenance_service, scheduled, unit, maintenance_repository
    ):
        unit.retire("compressor failure")

        result = maintenance_service.start(scheduled.id)

        assert result.success is False
        assert result.error == "BUSINESS_RULE_STATUS_TRANSITION"
        stored = maintenance_repository.find_by_id(scheduled.id)
        assert stored.is_scheduled
        assert stored.actual_start_time is None
        assert stored.status_history == []
        assert unit.is_out_of_service()

    def test_start_keeps_unit_already_in_maintenance(self, maintenance_service, scheduled, unit):
        unit.send_to_maintenance()
        result = maintenance_service.start(scheduled.id)
        assert result.success is True
        assert [entry["action"] for entry in unit.status_history] == ["send_to_maintenance"]

    def test_complete_returns_equipment(self, maintenance_service, scheduled, unit):
        maintenance_service.start(scheduled.id)
        result = maintenance_service.complete(scheduled.id, "Replaced thermostat", actual_cost=180)

        assert result.success is True
        assert scheduled.is_completed
        assert scheduled.is_on_budget() is True
        assert unit.is_available()
        assert unit.last_maintenance_date == scheduled.actual_end_time

    def test_complete_preventive_sets_next_equipment_date(self, maintenance_service, unit):
        maintenance = maintenance_service.schedule({
            'equipment_id': unit.id,
            'maintenance_type': 'PREVENTIVE',
            'scheduled_date': datetime(2031, 1, 10),
        }).maintenance
        maintenance_service.start(maintenance.id)
        maintenance_service.complete(maintenance.id)
        assert unit.next_maintenance_date == datetime(2031, 4, 10)

    def test_complete_without_start_fails(self, maintenance_service, scheduled, unit):
        result = maintenance_service.complete(scheduled.id)
        assert result.success is False
        assert result.error == "BUSINESS_RULE_STATUS_TRANSITION"
        assert unit.is_available()

    def test_cancel_in_progress_frees_equipment(self, maintenance_service, scheduled, unit):
        maintenance_service.start(scheduled.id)
        result = maintenance_service.cancel(scheduled.id, "parts on backorder")
        assert result.success is True
        assert scheduled.is_cancelled
        assert unit.is_available()
        assert unit.last_maintenance_date is None

    def test_cancel_scheduled_leaves_equipment_alone(self, maintenance_service, scheduled, unit):
        unit.rent(uuid4())
        result = maintenance_service.cancel(scheduled.id, "client declined")
        assert result.success is True
        assert unit.is_rented()

    def test_unknown_maintenance(self, maintenance_service):
        result = maintenance_service.start(uuid4())
        assert result.success is False
        assert result.error == "MAINTENANCE_NOT_FOUND"

    def test_priority_for(self, maintenance_service, equipment_repository, equipment_factory):
        unit = equipment_repository.save(equipment_factory.create(installation_date=now() - timedelta(days=400)))
        result = maintenance_service.priority_for(unit.id)
        assert result.success is True
        assert result.priority == MaintenancePriority.MEDIUM
        assert result.message == "Medium priority"

    def test_priority_uses_maintenance_history(self, maintenance_service, equipment_repository, equipment_factory):
        unit = equipment_repository.save(equipment_factory.create(installation_date=now() - timedelta(days=400)))
        maintenance = maintenance_service.schedule({
            'equipment_id': unit.id,
            'maintenance_type': 'CORRECTIVE',
            'scheduled_date': now() + timedelta(days=1),
        }).maintenance
        maintenance_service.start(maintenance.id)
        maintenance_service.complete(maintenance.id)

        assert maintenance_service.priority_for(unit.id).priority == MaintenancePriority.LOW

    def test_priority_for_unknown_equipment(self, maintenance_service):
        assert maintenance_service.priority_for(uuid4()).error == "EQUIPMENT_NOT_FOUND"
