"""
Phone Value Object - Immutable phone number with validation.
"""

import re
from dataclasses import dataclass
from typing import Optional
from ..exceptions import ValidationError


@dataclass(frozen=True)
class Phone:
    """
    Immutable phone number in international digit form.

    Spaces, dashes and parentheses are stripped before validation;
    an optional leading "+" is kept.

    Usage:
        phone = Phone("+1 (555) 010-2030")
        print(phone.value)   # "+15550102030"
        print(phone.digits)  # "15550102030"
    """

    value: str

    PHONE_PATTERN = re.compile(r'^\+?[1-9]\d{0,15}$')
    SEPARATORS = re.compile(r'[\s\-()]')

    def __post_init__(self):
        if not self.value:
            raise ValidationError("Phone is required", "phone")

        cleaned = self.clean(self.value)
        if not self.PHONE_PATTERN.match(cleaned):
            raise ValidationError(f"Invalid phone: {self.value}", "phone")

        object.__setattr__(self, 'value', cleaned)

    @classmethod
    def clean(cls, value: str) -> str:
        return cls.SEPARATORS.sub('', value)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(value) and bool(cls.PHONE_PATTERN.match(cls.clean(value)))

    @property
    def digits(self) -> str:
        return self.value.lstrip('+')

    @property
    def is_international(self) -> bool:
        return self.value.startswith('+')

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Optional['Phone']:
        """Create Phone from string, returns None if invalid."""
        if not value:
            return None
        try:
            return cls(value)
        except ValidationError:
            return None
