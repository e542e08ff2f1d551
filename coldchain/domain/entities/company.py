"""
Company Entity - Represents a client or provider organization.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .base import Entity, now
from ..exceptions import ValidationError
from ..value_objects import ContactInfo, Email, Phone


class CompanyType(str, Enum):
    """Role a company plays in the marketplace."""
    CLIENT = "CLIENT"
    PROVIDER = "PROVIDER"


@dataclass(eq=False)
class Company(Entity):
    """
    Company entity representing a marketplace participant.

    PROVIDER companies own equipment; CLIENT companies rent it.
    Companies are never deleted, only deactivated.
    """
    name: str = ""
    company_type: CompanyType = None
    address: Optional[str] = None
    phone: str = ""
    email: str = ""
    contact_person: str = ""
    tax_id: Optional[str] = None
    is_active: bool = True
    registration_date: datetime = field(default_factory=now)

    UPDATABLE_FIELDS = ('name', 'address', 'phone', 'email', 'contact_person', 'tax_id')

    def __post_init__(self):
        if isinstance(self.company_type, str) and self.company_type in CompanyType.__members__:
            self.company_type = CompanyType(self.company_type)

        errors = self._collect_errors()
        if errors:
            raise ValidationError.from_errors(errors)

        self.name = self.name.strip()
        self.contact_person = self.contact_person.strip()
        self.email = str(Email(self.email))

    def _collect_errors(self) -> List[str]:
        errors = []
        if not self.name or len(self.name.strip()) < 2:
            errors.append("Company name must be at least 2 characters")
        if not Email.is_valid(self.email or ""):
            errors.append("Valid email is required")
        if not self.phone or len(self.phone.strip()) < 10:
            errors.append("Phone must be at least 10 characters")
        if not self.contact_person or len(self.contact_person.strip()) < 2:
            errors.append("Contact person must be at least 2 characters")
        if not isinstance(self.company_type, CompanyType):
            errors.append("Company type must be CLIENT or PROVIDER")
        return errors

    @classmethod
    def create(
        cls,
        name: str,
        company_type: CompanyType,
        email: str,
        phone: str,
        contact_person: str,
        address: Optional[str] = None,
        tax_id: Optional[str] = None
    ) -> 'Company':
        """Factory method to create a new active company."""
        return cls(
            name=name,
            company_type=company_type,
            email=email,
            phone=phone,
            contact_person=contact_person,
            address=address,
            tax_id=tax_id,
        )

    @property
    def is_provider(self) -> bool:
        return self.company_type == CompanyType.PROVIDER

    @property
    def is_client(self) -> bool:
        return self.company_type == CompanyType.CLIENT

    @property
    def contact_info(self) -> ContactInfo:
        """Contact details as a value object; a phone outside the international format is left out."""
        phone = self.phone if Phone.is_valid(self.phone) else None
        return ContactInfo(email=self.email, phone=phone, address=self.address)

    def activate(self) -> None:
        self.is_active = True
        self.mark_updated()

    def deactivate(self) -> None:
        self.is_active = False
        self.mark_updated()

    def update(self, **changes) -> None:
        """
        Update company information.

        Only the fields in UPDATABLE_FIELDS may change. The new values are
        validated together and nothing is assigned if any of them is invalid.
        """
        unknown = set(changes) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}", sorted(unknown)[0]
            )

        candidate = replace(self, **changes)
        for name in self.UPDATABLE_FIELDS:
            setattr(self, name, getattr(candidate, name))
        self.mark_updated()

    def __str__(self) -> str:
        status = "Active" if self.is_active else "Inactive"
        return f"Company({self.name}, {self.company_type.value}, {status})"
