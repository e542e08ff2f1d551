"""Unit tests for the Company entity."""

import pytest

from coldchain.domain import Company, CompanyType, ContactInfo, ValidationError


class TestCompany:
    """Tests for Company entity."""

    def test_create_provider(self):
        """Should create an active provider with the factory method."""
        company = Company.create(
            name="  Polar Rentals ",
            company_type=CompanyType.PROVIDER,
            email="OPS@Polar-Rentals.com",
            phone="+15551234567",
            contact_person="Alex Morgan",
        )
        assert company.is_provider
        assert not company.is_client
        assert company.is_active
        assert company.name == "Polar Rentals"
        assert company.email == "ops@polar-rentals.com"

    def test_company_type_accepts_string(self, company_factory):
        assert company_factory.create(company_type="CLIENT").is_client

    def test_validation_reports_every_violation(self):
        """Should aggregate all violations into one error."""
        with pytest.raises(ValidationError) as exc:
            Company(name="X", company_type="OTHER", email="nope", phone="123", contact_person="")
        errors = exc.value.errors
        assert len(errors) == 5
        assert "Company name must be at least 2 characters" in errors
        assert "Valid email is required" in errors
        assert "Phone must be at least 10 characters" in errors
        assert "Contact person must be at least 2 characters" in errors
        assert "Company type must be CLIENT or PROVIDER" in errors
        assert exc.value.message.startswith("Validation errors: ")

    def test_deactivate_and_activate(self, company_factory):
        """Should toggle the active flag and stamp updated_at."""
        company = company_factory.create()
        company.deactivate()
        assert not company.is_active
        assert company.updated_at is not None
        company.deactivate()
        assert not company.is_active
        company.activate()
        assert company.is_active

    def test_update_allowed_fields(self, company_factory):
        company = company_factory.create()
        company.update(name="Polar Rentals Ltd", tax_id="12-3456789")
        assert company.name == "Polar Rentals Ltd"
        assert company.tax_id == "12-3456789"
        assert company.updated_at is not None

    def test_update_rejects_unknown_field(self, company_factory):
        company = company_factory.create()
        with pytest.raises(ValidationError):
            company.update(is_active=False)
        assert company.is_active

    def test_invalid_update_leaves_company_unchanged(self, company_factory):
        """Should validate the whole candidate before assigning anything."""
        company = company_factory.create()
        with pytest.raises(ValidationError):
            company.update(name="Polar Two", email="broken")
        assert company.name == "Polar Rentals"
        assert company.email == "ops@polar-rentals.com"
        assert company.updated_at is None

    def test_contact_info_view(self, company_factory):
        info = company_factory.create().contact_info
        assert isinstance(info, ContactInfo)
        assert info.email == "ops@polar-rentals.com"
        assert info.address == "12 Harbor Rd"

    @pytest.mark.parametrize("phone", ["0800 123 4567", "555.123.4567"])
    def test_contact_info_with_local_phone_format(self, company_factory, phone):
        company = company_factory.create(phone=phone)
        info = company.contact_info
        assert company.phone == phone
        assert info.phone is None
        assert info.email == "ops@polar-rentals.com"

    def test_contact_info_keeps_international_phone(self, company_factory):
        assert company_factory.create(phone="+1 (555) 123-4567").contact_info.phone == "+1 (555) 123-4567"

    def test_identity_equality(self, company_factory):
        first = company_factory.create()
        second = company_factory.create()
        assert first != second
        assert first == first
        assert len({first, second, first}) == 2

    def test_str(self, company_factory):
        assert str(company_factory.create()) == "Company(Polar Rentals, PROVIDER, Active)"
