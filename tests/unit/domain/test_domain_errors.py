"""Unit tests for the domain exception hierarchy."""

from coldchain.domain import (
    BusinessRuleViolationError,
    CompanyNotFoundError,
    DomainError,
    EquipmentNotRentableError,
    InvalidStatusTransitionError,
    NotFoundError,
    RentalNotFoundError,
    ValidationError,
)


class TestExceptions:
    """Tests for error codes and messages."""

    def test_validation_error_defaults(self):
        error = ValidationError("Bad value", "monthly_rate")
        assert error.code == "VALIDATION_ERROR_MONTHLY_RATE"
        assert error.errors == ["Bad value"]
        assert str(error) == "Bad value"
        assert isinstance(error, DomainError)

    def test_validation_error_from_errors(self):
        error = ValidationError.from_errors(["a is required", "b is invalid"])
        assert error.message == "Validation errors: a is required, b is invalid"
        assert error.errors == ["a is required", "b is invalid"]
        assert error.code == "VALIDATION_ERROR"

    def test_not_found(self):
        error = RentalNotFoundError("r-1")
        assert isinstance(error, NotFoundError)
        assert error.message == "Rental 'r-1' not found"
        assert error.code == "RENTAL_NOT_FOUND"
        assert CompanyNotFoundError().message == "Company not found"

    def test_business_rule(self):
        error = BusinessRuleViolationError("extension_date", "Too early")
        assert error.rule == "extension_date"
        assert error.code == "BUSINESS_RULE_EXTENSION_DATE"

    def test_invalid_transition_message(self):
        error = InvalidStatusTransitionError("COMPLETED", "terminate", "Rental")
        assert error.message == "Cannot terminate rental in status 'COMPLETED'"
        assert isinstance(error, BusinessRuleViolationError)

    def test_not_rentable(self):
        error = EquipmentNotRentableError("Equipment is rented")
        assert error.message == "Cannot rent equipment: Equipment is rented"
        assert error.code == "BUSINESS_RULE_NOT_RENTABLE"
        assert error.reason == "Equipment is rented"
