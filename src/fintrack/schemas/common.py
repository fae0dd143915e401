"""Shared response schemas."""

from pydantic import BaseModel, Field


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., INR)")
    minor_unit: int = Field(
        description="Number of decimal places for the currency (e.g., 2 for paise)"
    )
