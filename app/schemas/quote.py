import math
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enums import Accessorial, UrgencyTier

TRUTHY = {"1", "true", "yes", "on", "y"}


def coerce_number(value: Any) -> float:
    """Free-text number to a non-negative float; anything unusable is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return False


class Accessorials(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    inside_delivery: bool = False
    white_glove: bool = False
    after_hours: bool = False

    @field_validator("inside_delivery", "white_glove", "after_hours", mode="before")
    @classmethod
    def _flag(cls, v):
        return coerce_flag(v)

    def active(self) -> list:
        return [a for a in Accessorial if getattr(self, a.value)]


class LaneRequest(BaseModel):
    """Caller-owned lane record; every field tolerates partial free-text input."""
    model_config = ConfigDict(validate_assignment=True)

    origin: Optional[str] = None
    destination: Optional[str] = None
    distance_miles: float = 0.0
    weight_lbs: float = 0.0
    urgency: UrgencyTier = UrgencyTier.STANDARD
    stop_count: int = 0
    accessorials: Accessorials = Field(default_factory=Accessorials)

    pallets: int = 0
    pickup_date: Optional[str] = None
    delivery_date: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("origin", "destination", "pickup_date", "delivery_date", "notes", mode="before")
    @classmethod
    def _text(cls, v):
        # numeric ZIP codes arrive as JSON numbers
        return None if v is None else str(v)

    @field_validator("distance_miles", "weight_lbs", mode="before")
    @classmethod
    def _number(cls, v):
        return coerce_number(v)

    @field_validator("stop_count", "pallets", mode="before")
    @classmethod
    def _count(cls, v):
        return int(coerce_number(v))

    @field_validator("urgency", mode="before")
    @classmethod
    def _urgency(cls, v):
        if isinstance(v, UrgencyTier):
            return v
        if isinstance(v, str):
            try:
                return UrgencyTier(v.strip().lower())
            except ValueError:
                pass
        return UrgencyTier.STANDARD

    @field_validator("accessorials", mode="before")
    @classmethod
    def _accessorials(cls, v):
        # a list of names is accepted as well as the flag mapping
        if isinstance(v, (list, tuple, set, frozenset)):
            names = {str(item).strip().lower() for item in v}
            return {a.value: a.value in names for a in Accessorial}
        if v is None or not isinstance(v, (dict, Accessorials)):
            return Accessorials()
        return v


class RateBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fee: Decimal
    per_mile_rate: Decimal
    distance_miles: Decimal
    mileage_charge: Decimal
    linehaul: Decimal
    weight_surcharge: Decimal
    urgency_surcharge: Decimal
    stop_fee: Optional[Decimal] = None
    accessorial_total: Decimal
    subtotal: Decimal
    fuel_surcharge_rate: Decimal
    fuel_amount: Decimal
    total: Decimal


class QuoteEstimateResponse(BaseModel):
    estimate: Optional[RateBreakdown] = None
    message: Optional[str] = None
