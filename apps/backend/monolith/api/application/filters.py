"""
Typed representation of a symbol's exchange trading-rule filters.

The exchange sends filters as a list of dicts discriminated by
``filterType`` with every number encoded as a decimal string, e.g.::

    {"filterType": "LOT_SIZE", "minQty": "0.00001000",
     "maxQty": "9000.00000000", "stepSize": "0.00001000"}

Only LOT_SIZE, PRICE_FILTER and MIN_NOTIONAL / NOTIONAL are interpreted.
Anything else is ignored here and kept raw on SymbolInfo.

A zero step, tick or upper bound disables that rule (exchange convention
for PRICE_FILTER, applied uniformly).
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Iterable, Optional

from .errors import MalformedFilter

LOT_SIZE = "LOT_SIZE"
PRICE_FILTER = "PRICE_FILTER"
MIN_NOTIONAL = "MIN_NOTIONAL"
NOTIONAL = "NOTIONAL"

ZERO = Decimal("0")


@dataclass(frozen=True)
class LotSizeFilter:
    min_qty: Decimal
    max_qty: Decimal
    step_size: Decimal


@dataclass(frozen=True)
class PriceFilter:
    min_price: Decimal
    max_price: Decimal
    tick_size: Decimal


@dataclass(frozen=True)
class MinNotionalFilter:
    min_notional: Decimal
    apply_to_market: bool = True


@dataclass(frozen=True)
class SymbolFilters:
    """At most one filter of each recognized kind. ``None`` means no constraint."""

    lot_size: Optional[LotSizeFilter] = None
    price: Optional[PriceFilter] = None
    min_notional: Optional[MinNotionalFilter] = None


# ==========================================
# GRID ARITHMETIC
# ==========================================


def floor_to_grid(value: Decimal, origin: Decimal, step: Decimal) -> Decimal:
    """Largest ``origin + k * step`` (k >= 0) not above ``value``."""
    if step == ZERO or value <= origin:
        return value
    steps = (value - origin) // step
    return origin + steps * step


def ceil_to_grid(value: Decimal, origin: Decimal, step: Decimal) -> Decimal:
    """Smallest ``origin + k * step`` (k >= 0) not below ``value``."""
    if value <= origin:
        return origin
    if step == ZERO:
        return value
    steps, remainder = divmod(value - origin, step)
    if remainder:
        steps += 1
    return origin + steps * step


def quantize_down(value: Decimal, places: int) -> Decimal:
    """Truncate ``value`` to ``places`` decimal places."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)


# ==========================================
# PARSING
# ==========================================


def _decimal_field(raw: dict, filter_type: str, name: str) -> Decimal:
    if name not in raw or raw[name] is None:
        raise MalformedFilter(filter_type, f"missing field {name}")
    try:
        value = Decimal(str(raw[name]))
    except InvalidOperation:
        raise MalformedFilter(filter_type, f"{name} is not a decimal: {raw[name]!r}")
    if not value.is_finite() or value < ZERO:
        raise MalformedFilter(filter_type, f"{name} must be a non-negative decimal, got {raw[name]!r}")
    return value


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def parse_lot_size(raw: dict) -> LotSizeFilter:
    return LotSizeFilter(
        min_qty=_decimal_field(raw, LOT_SIZE, "minQty"),
        max_qty=_decimal_field(raw, LOT_SIZE, "maxQty"),
        step_size=_decimal_field(raw, LOT_SIZE, "stepSize"),
    )


def parse_price_filter(raw: dict) -> PriceFilter:
    return PriceFilter(
        min_price=_decimal_field(raw, PRICE_FILTER, "minPrice"),
        max_price=_decimal_field(raw, PRICE_FILTER, "maxPrice"),
        tick_size=_decimal_field(raw, PRICE_FILTER, "tickSize"),
    )


def parse_min_notional(raw: dict) -> MinNotionalFilter:
    filter_type = raw.get("filterType", MIN_NOTIONAL)
    # MIN_NOTIONAL says applyToMarket, the newer NOTIONAL says applyMinToMarket
    apply_to_market = raw.get("applyToMarket", raw.get("applyMinToMarket", True))
    return MinNotionalFilter(
        min_notional=_decimal_field(raw, filter_type, "minNotional"),
        apply_to_market=_flag(apply_to_market),
    )


_PARSERS = {
    LOT_SIZE: parse_lot_size,
    PRICE_FILTER: parse_price_filter,
    MIN_NOTIONAL: parse_min_notional,
    NOTIONAL: parse_min_notional,
}


def parse_filters(raw_filters: Iterable[dict]) -> SymbolFilters:
    """
    Locate at most one filter of each recognized kind.

    Raises:
        MalformedFilter: a recognized filter is duplicated or has a missing /
            unparseable / negative numeric field.
    """
    found: dict[str, object] = {}
    for raw in raw_filters:
        filter_type = raw.get("filterType")
        parser = _PARSERS.get(filter_type)
        if parser is None:
            continue
        if filter_type in found:
            raise MalformedFilter(filter_type, "filter listed more than once")
        found[filter_type] = parser(raw)

    return SymbolFilters(
        lot_size=found.get(LOT_SIZE),
        price=found.get(PRICE_FILTER),
        min_notional=found.get(MIN_NOTIONAL) or found.get(NOTIONAL),
    )
