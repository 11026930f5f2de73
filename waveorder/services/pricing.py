"""
Effective price calculation for products and variants
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class EffectivePrice:
    effective: float
    effective_original: Optional[float] = None


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def is_sale_active(
    sale_start: Optional[datetime],
    sale_end: Optional[datetime],
    now: datetime,
) -> bool:
    """Open-ended bounds count as -inf / +inf."""
    now = _as_utc(now)
    sale_start = _as_utc(sale_start)
    sale_end = _as_utc(sale_end)
    return (sale_start is None or now >= sale_start) and (sale_end is None or now <= sale_end)


def effective_price(
    price: float,
    original_price: Optional[float],
    sale_start: Optional[datetime],
    sale_end: Optional[datetime],
    now: Optional[datetime] = None,
) -> EffectivePrice:
    """Resolve the price shown to shoppers.

    During the sale window a higher original price is shown struck through
    next to ``price``. Outside it the higher of the two is the only price,
    so an expired sale never keeps displaying the discount.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    has_higher_original = original_price is not None and original_price > price

    if has_higher_original and is_sale_active(sale_start, sale_end, now):
        return EffectivePrice(effective=price, effective_original=original_price)

    return EffectivePrice(
        effective=original_price if has_higher_original else price,
        effective_original=None,
    )
