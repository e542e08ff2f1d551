"""
Money Value Object - Immutable monetary amount with currency.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Union

from ..exceptions import ValidationError, CurrencyMismatchError

DEFAULT_CURRENCY = "USD"
CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number, field: str = "amount") -> Decimal:
    """Convert through str so floats round the way they print."""
    if isinstance(value, bool):
        raise ValidationError(f"{field.capitalize()} must be a valid number", field)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field.capitalize()} must be a valid number", field) from None
    if not result.is_finite():
        raise ValidationError(f"{field.capitalize()} must be a valid number", field)
    return result


@dataclass(frozen=True)
class Money:
    """
    Immutable money value object.

    Amounts are stored with 2 decimal places, rounded half up, and can
    never be negative. Arithmetic returns new instances.

    Usage:
        rate = Money("1500.00")
        print(rate.add(Money(250)))     # "USD 1750.00"
        print(Money(10.005).amount)     # Decimal("10.01")
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        raw = _to_decimal(self.amount)
        if raw < 0:
            raise ValidationError("Amount cannot be negative", "amount")
        amount = raw.quantize(CENTS, rounding=ROUND_HALF_UP)

        currency = self.currency
        if not isinstance(currency, str) or len(currency.strip()) != 3 or not currency.strip().isalpha():
            raise ValidationError("Currency must be a valid 3-letter code", "currency")

        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, 'amount', amount)
        object.__setattr__(self, 'currency', currency.strip().upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> 'Money':
        return cls(Decimal("0"), currency)

    @classmethod
    def from_string(cls, value: str, currency: str = DEFAULT_CURRENCY) -> 'Money':
        """Parse amounts such as "1,250.50" or " 99 "."""
        if value is None:
            raise ValidationError("Amount must be a valid number", "amount")
        return cls(str(value).replace(",", "").strip(), currency)

    @classmethod
    def of(cls, value: Union['Money', Number], currency: str = DEFAULT_CURRENCY) -> 'Money':
        """Coerce a plain number into Money, passing Money instances through."""
        if isinstance(value, Money):
            return value
        return cls(value, currency)

    def _check_currency(self, other: 'Money') -> None:
        if not isinstance(other, Money):
            raise ValidationError("Can only operate on Money objects", "amount")
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def add(self, other: 'Money') -> 'Money':
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: 'Money') -> 'Money':
        self._check_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Subtraction result cannot be negative", "amount")
        return Money(result, self.currency)

    def multiply(self, factor: Number) -> 'Money':
        factor = _to_decimal(factor, "factor")
        if factor < 0:
            raise ValidationError("Factor cannot be negative", "factor")
        return Money(self.amount * factor, self.currency)

    def divide(self, divisor: Number) -> 'Money':
        divisor = _to_decimal(divisor, "divisor")
        if divisor <= 0:
            raise ValidationError("Divisor must be a positive number", "divisor")
        return Money(self.amount / divisor, self.currency)

    def is_greater_than(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": str(self.amount), "currency": self.currency}

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"
