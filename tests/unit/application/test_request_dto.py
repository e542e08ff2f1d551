"""Tests for the request models."""
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from coldchain.application import CreateRentalRequest, ScheduleMaintenanceRequest
from coldchain.domain import MaintenanceType, ValidationError
from coldchain.domain.entities.base import now


def rental_payload(**overrides):
    start = now() + timedelta(days=1)
    data = {
        'equipment_id': str(uuid4()),
        'client_company_id': str(uuid4()),
        'provider_company_id': str(uuid4()),
        'start_date': start.isoformat(),
        'end_date': (start + timedelta(days=90)).isoformat(),
        'monthly_rate': '1500',
    }
    data.update(overrides)
    return data


class TestCreateRentalRequest:

    def test_parse_valid_payload(self):
        request = CreateRentalRequest.parse(rental_payload(payment_terms="  NET 30 "))
        assert request.monthly_rate == Decimal("1500")
        assert request.security_deposit == Decimal("0")
        assert request.currency == "USD"
        assert request.payment_terms == "NET 30"
        assert request.start_date.tzinfo is None

    def test_parse_passes_instances_through(self):
        request = CreateRentalRequest.parse(rental_payload())
        assert CreateRentalRequest.parse(request) is request

    def test_start_today_is_accepted(self):
        today = now().replace(hour=0, minute=0, second=0, microsecond=0)
        request = CreateRentalRequest.parse(rental_payload(start_date=today.date().isoformat()))
        assert request.start_date == today

    def test_every_violation_is_reported(self):
        """Should list missing ids, bad dates, rate and deposit together."""
        data = rental_payload(
            start_date=(now() - timedelta(days=3)).isoformat(),
            monthly_rate=0,
            security_deposit=-1,
        )
        del data['equipment_id']
        with pytest.raises(ValidationError) as exc:
            CreateRentalRequest.parse(data)

        errors = exc.value.errors
        assert len(errors) == 4
        assert any(e.startswith("equipment_id:") for e in errors)
        assert "start_date: Start date cannot be in the past" in errors
        assert "monthly_rate: Monthly rate must be greater than zero" in errors
        assert "security_deposit: Security deposit cannot be negative" in errors
        assert exc.value.message.startswith("Validation errors: ")

    def test_end_must_follow_start(self):
        start = now() + timedelta(days=5)
        with pytest.raises(ValidationError) as exc:
            CreateRentalRequest.parse(rental_payload(start_date=start.isoformat(), end_date=start.isoformat()))
        assert exc.value.errors == ["end_date: Start date must be before end date"]

    def test_unparseable_date(self):
        with pytest.raises(ValidationError) as exc:
            CreateRentalRequest.parse(rental_payload(end_date="someday"))
        assert len(exc.value.errors) == 1
        assert exc.value.errors[0].startswith("end_date: Invalid date for")

    def test_currency_is_normalized(self):
        assert CreateRentalRequest.parse(rental_payload(currency="eur")).currency == "EUR"
        with pytest.raises(ValidationError):
            CreateRentalRequest.parse(rental_payload(currency="EURO"))


class TestScheduleMaintenanceRequest:

    def test_parse_valid_payload(self):
        request = ScheduleMaintenanceRequest.parse({
            'equipment_id': uuid4(),
            'maintenance_type': 'PREVENTIVE',
            'scheduled_date': '2031-02-01',
            'estimated_cost': '150.00',
            'maintenance_interval_days': 30,
        })
        assert request.maintenance_type == MaintenanceType.PREVENTIVE
        assert request.scheduled_date.year == 2031
        assert request.estimated_cost == Decimal("150.00")

    def test_invalid_payload(self):
        with pytest.raises(ValidationError) as exc:
            ScheduleMaintenanceRequest.parse({
                'equipment_id': 'not-a-uuid',
                'maintenance_type': 'COSMETIC',
                'scheduled_date': '2031-02-01',
                'estimated_duration_hours': 0,
            })
        assert len(exc.value.errors) == 3
