# utils/currency.py
"""
Currency helpers for USD amounts.

NUMERIC columns may reach us as Decimal, float, int or as a decimal string
(e.g. from JSON payloads or a REST-backed store), so every helper accepts any
of those.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

Numeric = Union[int, float, str, Decimal, None]

CENT = Decimal("0.01")


def _parse(value: Numeric) -> Optional[float]:
     """Parse to a finite float, or None when that is not possible."""
     if value is None or isinstance(value, bool):
          return None
     if isinstance(value, str):
          try:
               number = float(value.strip())
          except ValueError:
               return None
     else:
          try:
               number = float(value)
          except (TypeError, ValueError, InvalidOperation):
               return None
     if not math.isfinite(number):
          return None
     return number


def round_money(value: Numeric) -> Decimal:
     """Round half-up to cents (100.129 -> 100.13, 10.999 -> 11.00)."""
     if isinstance(value, Decimal) and value.is_finite():
          return value.quantize(CENT, rounding=ROUND_HALF_UP)
     number = _parse(value)
     if number is None:
          return Decimal("0.00")
     # repr() gives the shortest string that round-trips, so 1.005 stays 1.005
     return Decimal(repr(number)).quantize(CENT, rounding=ROUND_HALF_UP)


def _format(value: Numeric, symbol: str) -> str:
     amount = round_money(value)
     if amount == 0:
          return f"{symbol}0.00"
     sign = "-" if amount < 0 else ""
     return f"{sign}{symbol}{abs(amount):,.2f}"


def to_usd(value: Numeric) -> str:
     """Format as "$1,234.56" / "-$100.25"; invalid input gives "$0.00"."""
     return _format(value, "$")


def to_usd_no_symbol(value: Numeric) -> str:
     """Format as "1,234.56"; invalid input gives "0.00"."""
     return _format(value, "")


def from_usd(text: Optional[str]) -> float:
     """Parse "$1,234.56" or "1,234.56" back to a number; 0.0 when unparsable."""
     if text is None:
          return 0.0
     cleaned = "".join(ch for ch in str(text) if ch not in "$," and not ch.isspace())
     number = _parse(cleaned)
     return number if number is not None else 0.0


def safe_numeric(value: Numeric) -> float:
     """None, NaN and unparsable values become 0.0."""
     number = _parse(value)
     return number if number is not None else 0.0


def safe_decimal(value: Numeric) -> Decimal:
     """Decimal flavour of safe_numeric, for money arithmetic."""
     if isinstance(value, Decimal):
          return value if value.is_finite() else Decimal("0")
     if isinstance(value, int) and not isinstance(value, bool):
          return Decimal(value)
     number = _parse(value)
     if number is None:
          return Decimal("0")
     if isinstance(value, str):
          return Decimal(value.strip())
     return Decimal(repr(number))
