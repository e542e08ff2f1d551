"""
Errors raised by the rental domain.

Every error carries a human message and a machine ``code``; application
services turn them into failed results.
"""
from typing import List, Optional


class DomainError(Exception):
    """Root of every rental-domain failure."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(DomainError):
    """Malformed or missing input. ``errors`` lists each violation found."""

    def __init__(self, message: str, field: str = None, errors: Optional[List[str]] = None):
        self.field = field
        self.errors = list(errors) if errors else [message]
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    @classmethod
    def from_errors(cls, errors: List[str], field: str = None) -> 'ValidationError':
        """Build a single error listing every violation found."""
        return cls(f"Validation errors: {', '.join(errors)}", field, errors)


class CurrencyMismatchError(ValidationError):
    """Raised when money in two different currencies is combined."""

    def __init__(self, left: str, right: str):
        self.left = left
        self.right = right
        super().__init__(f"Cannot combine {left} with {right}", "currency")


class NotFoundError(DomainError):
    """A repository lookup came back empty."""

    def __init__(self, entity_type: str, identifier: str = None):
        self.entity_type = entity_type
        self.identifier = identifier
        message = f"{entity_type} not found"
        if identifier:
            message = f"{entity_type} '{identifier}' not found"
        super().__init__(message, f"{entity_type.upper()}_NOT_FOUND")


class BusinessRuleViolationError(DomainError):
    """Well-formed input that the rental rules refuse."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        super().__init__(message, f"BUSINESS_RULE_{rule.upper()}")


# Lookups

class RentalNotFoundError(NotFoundError):
    """Raised when a rental is not found."""

    def __init__(self, rental_id: str = None):
        super().__init__("Rental", rental_id)


class EquipmentNotFoundError(NotFoundError):
    """Raised when an equipment is not found."""

    def __init__(self, equipment_id: str = None):
        super().__init__("Equipment", equipment_id)


class MaintenanceNotFoundError(NotFoundError):
    """Raised when a maintenance is not found."""

    def __init__(self, maintenance_id: str = None):
        super().__init__("Maintenance", maintenance_id)


class CompanyNotFoundError(NotFoundError):
    """Raised when a company is not found."""

    def __init__(self, company_id: str = None):
        super().__init__("Company", company_id)


class InvalidStatusTransitionError(BusinessRuleViolationError):
    """The lifecycle table has no entry for this status and action."""

    def __init__(self, current_status: str, action: str, entity_type: str = "Entity"):
        self.current_status = current_status
        self.action = action
        self.entity_type = entity_type
        message = f"Cannot {action} {entity_type.lower()} in status '{current_status}'"
        super().__init__("STATUS_TRANSITION", message)


class EquipmentNotRentableError(BusinessRuleViolationError):
    """Raised when equipment fails the rentability check."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("NOT_RENTABLE", f"Cannot rent equipment: {reason}")
