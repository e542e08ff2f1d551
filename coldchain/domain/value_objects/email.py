"""
Email Value Object - company contact address.
"""

import re
from dataclasses import dataclass
from ..exceptions import ValidationError


@dataclass(frozen=True)
class Email:
    """
    Contact address, stored trimmed and lower-cased.

    Usage:
        email = Email("Ops@ColdRent.com")
        print(email.value)   # "ops@coldrent.com"
        print(email.domain)  # "coldrent.com"
    """

    value: str

    EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

    def __post_init__(self):
        if not self.value:
            raise ValidationError("Email is required", "email")

        normalized = self.value.strip().lower()

        if not self.EMAIL_PATTERN.match(normalized):
            raise ValidationError(f"Invalid email: {self.value}", "email")

        object.__setattr__(self, 'value', normalized)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(value) and bool(cls.EMAIL_PATTERN.match(value.strip()))

    @property
    def domain(self) -> str:
        return self.value.split('@')[1]

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other) -> bool:
        if isinstance(other, str):
            other = other.strip().lower()
        elif isinstance(other, Email):
            other = other.value
        else:
            return NotImplemented
        return self.value == other

    def __hash__(self) -> int:
        return hash(self.value)
