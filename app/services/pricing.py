from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from app.core.config import PricingConfig
from app.core.enums import UrgencyTier
from app.schemas.quote import LaneRequest, RateBreakdown


DEFAULT_PRICING = PricingConfig()
CENTS = Decimal("0.01")
# enough digits for any finite float input carried down to cents
PRECISION = 400
ZERO = Decimal("0")


def round2(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def urgency_fee(tier: UrgencyTier, config: PricingConfig) -> Decimal:
    # urgency is a flat add-on before fuel, never a multiplier
    if tier == UrgencyTier.OVERNIGHT:
        return config.overnight_fee if config.overnight_enabled else config.expedited_fee
    if tier == UrgencyTier.EXPEDITED:
        return config.expedited_fee
    return ZERO


def estimate(lane: LaneRequest, config: Optional[PricingConfig] = None) -> Optional[RateBreakdown]:
    """Price a lane, or return None when there is no distance to charge for.

    Intermediate amounts keep full precision; only the total is rounded.
    """
    config = config or DEFAULT_PRICING
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return _price(lane, config)


def _price(lane: LaneRequest, config: PricingConfig) -> Optional[RateBreakdown]:
    distance = _to_decimal(lane.distance_miles)
    if distance <= 0:
        return None

    weight = _to_decimal(lane.weight_lbs)

    mileage_charge = distance * config.per_mile_rate
    linehaul = config.base_fee + mileage_charge
    weight_surcharge = config.heavy_fee if weight > config.heavy_threshold_lbs else ZERO
    urgency_surcharge = urgency_fee(lane.urgency, config)

    stop_fee = None
    if config.multi_stop_enabled:
        stop_fee = Decimal(lane.stop_count) * config.per_stop_fee

    fees = config.accessorial_fees()
    accessorial_total = sum(
        (fees[a.value] for a in lane.accessorials.active()),
        ZERO,
    )

    subtotal = linehaul + weight_surcharge + urgency_surcharge + accessorial_total
    if stop_fee is not None:
        subtotal += stop_fee

    fuel_amount = subtotal * config.fuel_surcharge_rate
    total = round2(subtotal + fuel_amount)

    return RateBreakdown(
        base_fee=config.base_fee,
        per_mile_rate=config.per_mile_rate,
        distance_miles=distance,
        mileage_charge=mileage_charge,
        linehaul=linehaul,
        weight_surcharge=weight_surcharge,
        urgency_surcharge=urgency_surcharge,
        stop_fee=stop_fee,
        accessorial_total=accessorial_total,
        subtotal=subtotal,
        fuel_surcharge_rate=config.fuel_surcharge_rate,
        fuel_amount=fuel_amount,
        total=total,
    )
