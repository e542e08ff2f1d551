"""
ContactInfo Value Object - Immutable contact details with validation.
"""

import re
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from .email import Email
from .phone import Phone
from ..exceptions import ValidationError


@dataclass(frozen=True)
class ContactInfo:
    """
    Contact details of a company or site.

    Every part is optional; the parts that are present must be well formed.
    ``update`` never mutates, it returns a merged copy.
    """

    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None

    POSTAL_CODE_PATTERN = re.compile(r'^[A-Za-z0-9]{3,10}$')

    def __post_init__(self):
        if self.email and not Email.is_valid(self.email):
            raise ValidationError("Invalid email format", "email")

        if self.phone and not Phone.is_valid(self.phone):
            raise ValidationError("Invalid phone format", "phone")

        if self.postal_code and not self.is_valid_postal_code(self.postal_code):
            raise ValidationError("Invalid postal code format", "postal_code")

    @classmethod
    def is_valid_postal_code(cls, postal_code: str) -> bool:
        return bool(cls.POSTAL_CODE_PATTERN.match(re.sub(r'[\s\-]', '', postal_code)))

    @property
    def formatted_address(self) -> str:
        parts = [self.address, self.city, self.state, self.country, self.postal_code]
        return ', '.join(part.strip() for part in parts if part and part.strip())

    def update(self, **overrides: Optional[str]) -> 'ContactInfo':
        """Return a new ContactInfo with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValidationError(f"Unknown contact fields: {', '.join(sorted(unknown))}")

        merged = asdict(self)
        merged.update({key: value for key, value in overrides.items() if value is not None})
        return ContactInfo(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return self.formatted_address
