"""Unit tests for contact value objects and priority levels."""

import pytest

from coldchain.domain import ContactInfo, Email, MaintenancePriority, Phone, ValidationError


class TestEmail:
    """Tests for Email value object."""

    def test_email_normalization(self):
        """Should strip and lower-case the address."""
        assert str(Email("  Ops@ColdRent.COM ")) == "ops@coldrent.com"

    def test_invalid_email_raises_error(self):
        with pytest.raises(ValidationError) as exc:
            Email("not-an-email")
        assert exc.value.field == "email"

    def test_email_equality(self):
        assert Email("a@b.co") == Email("A@B.CO")
        assert Email("a@b.co") == "A@b.co"

    def test_domain(self):
        assert Email("ops@coldrent.com").domain == "coldrent.com"

    def test_is_valid(self):
        assert Email.is_valid("x@y.io")
        assert not Email.is_valid("x@y")
        assert not Email.is_valid("")


class TestPhone:
    """Tests for Phone value object."""

    def test_separators_are_stripped(self):
        phone = Phone("+1 (555) 010-2030")
        assert phone.value == "+15550102030"
        assert phone.digits == "15550102030"
        assert phone.is_international

    def test_leading_zero_is_rejected(self):
        with pytest.raises(ValidationError):
            Phone("0555123456")

    def test_too_long_is_rejected(self):
        assert not Phone.is_valid("+12345678901234567")

    def test_from_string_returns_none_when_invalid(self):
        assert Phone.from_string("abc") is None
        assert Phone.from_string("") is None
        assert Phone.from_string("5551234567").value == "5551234567"


class TestContactInfo:
    """Tests for ContactInfo value object."""

    def test_all_parts_are_optional(self):
        info = ContactInfo()
        assert info.formatted_address == ""

    def test_invalid_email_raises_error(self):
        with pytest.raises(ValidationError) as exc:
            ContactInfo(email="bad")
        assert exc.value.field == "email"

    def test_invalid_phone_raises_error(self):
        with pytest.raises(ValidationError) as exc:
            ContactInfo(phone="call me")
        assert exc.value.field == "phone"

    def test_postal_code_allows_spaces_and_dashes(self):
        assert ContactInfo(postal_code="SW1A 1AA").postal_code == "SW1A 1AA"
        assert ContactInfo(postal_code="01310-100").postal_code == "01310-100"

    def test_invalid_postal_code_raises_error(self):
        with pytest.raises(ValidationError):
            ContactInfo(postal_code="12")

    def test_formatted_address_skips_missing_parts(self):
        info = ContactInfo(address="12 Harbor Rd", city="Santos", country="BR")
        assert info.formatted_address == "12 Harbor Rd, Santos, BR"
        assert str(info) == info.formatted_address

    def test_update_returns_new_instance(self):
        """Should merge non-None overrides without mutating the original."""
        info = ContactInfo(email="a@b.co", city="Santos")
        updated = info.update(city="Recife", phone=None)
        assert updated.city == "Recife"
        assert updated.email == "a@b.co"
        assert info.city == "Santos"

    def test_update_validates_merged_values(self):
        with pytest.raises(ValidationError):
            ContactInfo().update(email="broken")

    def test_update_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ContactInfo().update(fax="123")

    def test_to_dict(self):
        assert ContactInfo(city="Lima").to_dict()["city"] == "Lima"


class TestMaintenancePriority:

    def test_weights_order_levels(self):
        ordered = sorted(MaintenancePriority, key=lambda p: p.weight)
        assert ordered == [
            MaintenancePriority.LOW,
            MaintenancePriority.MEDIUM,
            MaintenancePriority.HIGH,
            MaintenancePriority.CRITICAL,
        ]

    def test_label(self):
        assert MaintenancePriority.CRITICAL.label == "Critical"
