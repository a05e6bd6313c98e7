"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from stockledger.domain.exceptions import InvalidQuantityError, ValidationError


def _coerce_decimal(raw: object) -> Decimal | None:
    """Convert int/str/float/Decimal into Decimal, or None if not numeric.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float, str)):
        try:
            return Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return None
    return None


def stock_level(raw: object, field_name: str) -> Decimal:
    """Parse a non-negative, finite stock level (current, min or max)."""
    value = _coerce_decimal(raw)
    if value is None or not value.is_finite():
        raise ValidationError(f"{field_name} must be a finite number, got {raw!r}")
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative, got {value}")
    return value


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors; repeated
    fractional additions never drift.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        value = _coerce_decimal(amount)
        if value is None:
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive, finite adjustment quantity.

    Fractional values are allowed because ingredients are measured in
    kilograms and litres as well as pieces.
    """

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise InvalidQuantityError(
                f"Quantity must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite():
            raise InvalidQuantityError(f"Quantity must be finite, got {self.value}")
        if self.value <= 0:
            raise InvalidQuantityError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def of(raw: object) -> Quantity:
        value = _coerce_decimal(raw)
        if value is None:
            raise InvalidQuantityError(f"Quantity must be a number, got {raw!r}")
        return Quantity(value)


MAX_PAGE_SIZE = 500


@dataclass(frozen=True)
class Page:
    """1-based page selector for history queries."""

    number: int = 1
    size: int = 100

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 1:
            raise ValidationError(f"Page number must be an integer >= 1, got {self.number!r}")
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValidationError(f"Page size must be an integer, got {self.size!r}")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size
