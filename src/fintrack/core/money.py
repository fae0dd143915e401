"""Conversions between decimal amounts and stored minor units (paise)."""

from decimal import ROUND_HALF_UP, Decimal

from fintrack.config import settings


def to_minor_units(amount: Decimal | int | float | str) -> int:
    """Convert a decimal amount to integer minor units (e.g. 12.50 -> 1250)."""
    scale = Decimal(10) ** settings.currency_minor_unit
    return int((Decimal(str(amount)) * scale).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    """Convert stored minor units back to a decimal amount."""
    return Decimal(amount) / (Decimal(10) ** settings.currency_minor_unit)
