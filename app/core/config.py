from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings


class PricingConfig(BaseModel):
    """Business constants for the lane estimate."""
    model_config = ConfigDict(frozen=True)

    base_fee: Decimal = Decimal("89")
    per_mile_rate: Decimal = Decimal("3")
    fuel_surcharge_rate: Decimal = Decimal("0.18")

    heavy_threshold_lbs: Decimal = Decimal("150")
    heavy_fee: Decimal = Decimal("45")

    expedited_fee: Decimal = Decimal("95")
    overnight_fee: Decimal = Decimal("175")
    overnight_enabled: bool = False

    per_stop_fee: Decimal = Decimal("25")
    multi_stop_enabled: bool = False

    inside_delivery_fee: Decimal = Decimal("35")
    white_glove_fee: Decimal = Decimal("55")
    after_hours_fee: Decimal = Decimal("40")

    def accessorial_fees(self) -> Dict[str, Decimal]:
        return {
            "inside_delivery": self.inside_delivery_fee,
            "white_glove": self.white_glove_fee,
            "after_hours": self.after_hours_fee,
        }


class Settings(BaseSettings):
    ORS_API_KEY: Optional[str] = None
    ORS_BASE_URL: str = "https://api.openrouteservice.org"
    ROUTE_COUNTRY: str = "US"
    ROUTE_PROFILE: str = "driving-hgv"
    ROUTE_PHASE_TIMEOUT: float = 10.0  # seconds, per network phase

    BASE_FEE: Decimal = Decimal("89")
    PER_MILE_RATE: Decimal = Decimal("3")
    FUEL_SURCHARGE_RATE: Decimal = Decimal("0.18")
    HEAVY_THRESHOLD_LBS: Decimal = Decimal("150")
    HEAVY_FEE: Decimal = Decimal("45")
    EXPEDITED_FEE: Decimal = Decimal("95")
    OVERNIGHT_FEE: Decimal = Decimal("175")
    PER_STOP_FEE: Decimal = Decimal("25")
    INSIDE_DELIVERY_FEE: Decimal = Decimal("35")
    WHITE_GLOVE_FEE: Decimal = Decimal("55")
    AFTER_HOURS_FEE: Decimal = Decimal("40")

    OVERNIGHT_ENABLED: bool = False
    MULTI_STOP_ENABLED: bool = False

    API_TITLE: str = "Freight Quote Service"
    API_DESCRIPTION: str = "Instant non-binding lane estimates and route previews"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    def pricing(self) -> PricingConfig:
        return PricingConfig(
            base_fee=self.BASE_FEE,
            per_mile_rate=self.PER_MILE_RATE,
            fuel_surcharge_rate=self.FUEL_SURCHARGE_RATE,
            heavy_threshold_lbs=self.HEAVY_THRESHOLD_LBS,
            heavy_fee=self.HEAVY_FEE,
            expedited_fee=self.EXPEDITED_FEE,
            overnight_fee=self.OVERNIGHT_FEE,
            overnight_enabled=self.OVERNIGHT_ENABLED,
            per_stop_fee=self.PER_STOP_FEE,
            multi_stop_enabled=self.MULTI_STOP_ENABLED,
            inside_delivery_fee=self.INSIDE_DELIVERY_FEE,
            white_glove_fee=self.WHITE_GLOVE_FEE,
            after_hours_fee=self.AFTER_HOURS_FEE,
        )

settings = Settings()
