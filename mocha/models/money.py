"""
Money - exact decimal amounts

DESIGN DECISION: Every balance, target and transfer amount is a Money.
Money wraps a Decimal and refuses floats, so sums and comparisons
are exact (0.1 + 0.2 == 0.3).

Money is immutable. Arithmetic always returns a new Money.
"""

import re
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


CENT = Decimal("0.01")

# Largest amount the UI may type: 15 integer digits, 10 decimal places.
MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_PLACES = 10

PLAIN_AMOUNT = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")

# Money arithmetic must be exact: anything that would round raises instead.
EXACT = Context(prec=1000, traps=[Inexact, InvalidOperation, Overflow, DivisionByZero])
DISPLAY = Context(prec=1000, rounding=ROUND_HALF_UP)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}


class Money(BaseModel):
    """An exact amount of money."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Decimal("0")

    @field_validator('amount', mode='before')
    @classmethod
    def reject_float(cls, v):
        """Binary floats cannot represent cents exactly."""
        if isinstance(v, float):
            raise ValueError("Money cannot be built from a float; use a Decimal or string")
        return v

    @field_validator('amount')
    @classmethod
    def require_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Money amount must be finite")
        return v

    def __init__(self, amount: Union[Decimal, int, str] = Decimal("0"), **data):
        super().__init__(amount=amount, **data)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal("0"))

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["Money"]:
        """
        Parse user-entered text such as "25.50".

        Accepts only a plain decimal string: digits, an optional "."
        followed by digits, and an optional leading sign. Surrounding
        whitespace is ignored. Exponents, digit separators, NaN and
        infinity are refused, as are amounts with more than
        MAX_INTEGER_DIGITS integer digits or MAX_DECIMAL_PLACES decimal
        places. Returns None (never raises) for anything refused.
        """
        if text is None:
            return None

        cleaned = text.strip()
        if not PLAIN_AMOUNT.fullmatch(cleaned):
            return None

        integer_part, _, fraction_part = cleaned.lstrip("+-").partition(".")
        if len(integer_part.lstrip("0")) > MAX_INTEGER_DIGITS:
            return None
        if len(fraction_part) > MAX_DECIMAL_PLACES:
            return None

        return cls(Decimal(cleaned))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(EXACT.add(self.amount, other.amount))

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(EXACT.subtract(self.amount, other.amount))

    def __mul__(self, scalar: Union[int, Decimal]) -> "Money":
        if isinstance(scalar, bool) or not isinstance(scalar, (int, Decimal)):
            raise TypeError(f"Money can only be multiplied by int or Decimal, not {type(scalar).__name__}")
        return Money(EXACT.multiply(self.amount, Decimal(scalar)))

    __rmul__ = __mul__

    def __neg__(self) -> "Money":
        return Money(self.amount.copy_negate())

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount >= other.amount

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def rounded(self) -> Decimal:
        """Amount rounded half-up to cents."""
        return DISPLAY.quantize(self.amount, CENT)

    def format(self, currency_code: str = "USD") -> str:
        """
        Format for display, e.g. "$1,234.50" or "-$3.00".

        Currencies without a known symbol render as "1,234.50 CHF".
        """
        value = self.rounded()
        digits = f"{value.copy_abs():,.2f}"
        sign = "-" if value < 0 else ""

        symbol = CURRENCY_SYMBOLS.get(currency_code.upper())
        if symbol is None:
            return f"{sign}{digits} {currency_code.upper()}"
        return f"{sign}{symbol}{digits}"

    def __str__(self) -> str:
        return str(self.rounded())

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"


def sum_money(amounts) -> Money:
    """Sum an iterable of Money (the builtin sum() needs an int start)."""
    total = Money.zero()
    for amount in amounts:
        total = total + amount
    return total
