"""
Trading-rule validators.

Each validator is a pure function: filters in, ``ValidationOutcome`` out.
Validators never adjust the order; on failure they describe the problem and
suggest a corrected value which the caller may resubmit.

Principles:
- Exact decimal arithmetic only (no float modulo).
- Round DOWN to the grid on misalignment, so a suggestion never exceeds
  what the caller asked for. The only exception is the minimum notional,
  where the suggestion has to go up to be acceptable at all.
- Applying a suggestion through the same validator is always VALID.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_UP
from enum import Enum
from typing import Optional

from .domain import OrderType, ResolvedOrder, format_decimal
from .filters import (
    ZERO,
    LotSizeFilter,
    MinNotionalFilter,
    PriceFilter,
    ceil_to_grid,
    floor_to_grid,
)

# Rejection kinds
QUANTITY_OUT_OF_RANGE = "QUANTITY_OUT_OF_RANGE"
QUANTITY_STEP_MISALIGNED = "QUANTITY_STEP_MISALIGNED"
PRICE_OUT_OF_RANGE = "PRICE_OUT_OF_RANGE"
PRICE_TICK_MISALIGNED = "PRICE_TICK_MISALIGNED"
NOTIONAL_TOO_SMALL = "NOTIONAL_TOO_SMALL"


class ValidationStatus(Enum):
    VALID = "VALID"
    INVALID = "INVALID"


@dataclass(frozen=True)
class ValidationRejection:
    """Client-facing rejection: what is wrong and what to send instead."""

    kind: str
    reason: str
    field: str
    suggested_value: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "reason": self.reason,
            "field": self.field,
            "suggestedValue": (
                format_decimal(self.suggested_value) if self.suggested_value is not None else None
            ),
        }


@dataclass(frozen=True)
class ValidationOutcome:
    status: ValidationStatus
    rejection: Optional[ValidationRejection] = None

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID

    @property
    def suggested_value(self) -> Optional[Decimal]:
        return self.rejection.suggested_value if self.rejection else None

    @property
    def reason(self) -> str:
        return self.rejection.reason if self.rejection else ""

    @classmethod
    def valid(cls) -> "ValidationOutcome":
        return cls(status=ValidationStatus.VALID)

    @classmethod
    def invalid(
        cls, kind: str, reason: str, field: str, suggested_value: Optional[Decimal] = None
    ) -> "ValidationOutcome":
        return cls(
            status=ValidationStatus.INVALID,
            rejection=ValidationRejection(
                kind=kind, reason=reason, field=field, suggested_value=suggested_value
            ),
        )


def _fmt(value: Decimal) -> str:
    return format_decimal(value)


# ==========================================
# QUANTITY (LOT_SIZE)
# ==========================================


def validate_quantity(quantity: Decimal, lot_size: Optional[LotSizeFilter] = None) -> ValidationOutcome:
    """Check ``quantity`` against min / max / step of the lot-size filter."""
    if lot_size is None:
        return ValidationOutcome.valid()

    if quantity < lot_size.min_qty:
        return ValidationOutcome.invalid(
            QUANTITY_OUT_OF_RANGE,
            f"Quantity {_fmt(quantity)} is below the minimum quantity {_fmt(lot_size.min_qty)}",
            field="quantity",
            suggested_value=lot_size.min_qty,
        )

    if lot_size.max_qty != ZERO and quantity > lot_size.max_qty:
        return ValidationOutcome.invalid(
            QUANTITY_OUT_OF_RANGE,
            f"Quantity {_fmt(quantity)} is above the maximum quantity {_fmt(lot_size.max_qty)}",
            field="quantity",
            suggested_value=lot_size.max_qty,
        )

    if lot_size.step_size != ZERO and (quantity - lot_size.min_qty) % lot_size.step_size != ZERO:
        return ValidationOutcome.invalid(
            QUANTITY_STEP_MISALIGNED,
            (
                f"Quantity {_fmt(quantity)} does not match step size {_fmt(lot_size.step_size)} "
                f"(minimum {_fmt(lot_size.min_qty)})"
            ),
            field="quantity",
            suggested_value=floor_to_grid(quantity, lot_size.min_qty, lot_size.step_size),
        )

    return ValidationOutcome.valid()


# ==========================================
# PRICE (PRICE_FILTER)
# ==========================================


def validate_price(price: Decimal, price_filter: Optional[PriceFilter] = None) -> ValidationOutcome:
    """Check a LIMIT price against min / max / tick of the price filter."""
    if price_filter is None:
        return ValidationOutcome.valid()

    if price_filter.min_price != ZERO and price < price_filter.min_price:
        return ValidationOutcome.invalid(
            PRICE_OUT_OF_RANGE,
            f"Price {_fmt(price)} is below the minimum price {_fmt(price_filter.min_price)}",
            field="price",
            suggested_value=price_filter.min_price,
        )

    if price_filter.max_price != ZERO and price > price_filter.max_price:
        return ValidationOutcome.invalid(
            PRICE_OUT_OF_RANGE,
            f"Price {_fmt(price)} is above the maximum price {_fmt(price_filter.max_price)}",
            field="price",
            suggested_value=price_filter.max_price,
        )

    if price_filter.tick_size != ZERO and (price - price_filter.min_price) % price_filter.tick_size != ZERO:
        return ValidationOutcome.invalid(
            PRICE_TICK_MISALIGNED,
            (
                f"Price {_fmt(price)} does not match tick size {_fmt(price_filter.tick_size)} "
                f"(minimum {_fmt(price_filter.min_price)})"
            ),
            field="price",
            suggested_value=floor_to_grid(price, price_filter.min_price, price_filter.tick_size),
        )

    return ValidationOutcome.valid()


# ==========================================
# MINIMUM NOTIONAL (MIN_NOTIONAL / NOTIONAL)
# ==========================================


def minimum_quantity_for_notional(
    min_notional: Decimal,
    price: Decimal,
    lot_size: Optional[LotSizeFilter] = None,
    base_precision: int = 8,
) -> Decimal:
    """Smallest tradable quantity whose value at ``price`` reaches ``min_notional``."""
    needed = min_notional / price
    if lot_size is not None and lot_size.step_size != ZERO:
        return ceil_to_grid(needed, lot_size.min_qty, lot_size.step_size)
    return needed.quantize(Decimal(1).scaleb(-base_precision), rounding=ROUND_UP)


def validate_min_notional(
    order: ResolvedOrder,
    min_notional: Optional[MinNotionalFilter] = None,
    reference_price: Optional[Decimal] = None,
    lot_size: Optional[LotSizeFilter] = None,
    base_precision: int = 8,
) -> ValidationOutcome:
    """
    Check the order value against the minimum notional.

    LIMIT orders are valued at their own price. MARKET orders are only checked
    when the filter applies to market orders: quote-denominated buys by their
    quote amount, quantity orders at ``reference_price`` (skipped without one).
    """
    if min_notional is None:
        return ValidationOutcome.valid()

    if order.order_type == OrderType.MARKET:
        if not min_notional.apply_to_market:
            return ValidationOutcome.valid()
        if order.quote_order_qty is not None:
            if order.quote_order_qty < min_notional.min_notional:
                return ValidationOutcome.invalid(
                    NOTIONAL_TOO_SMALL,
                    (
                        f"Order value {_fmt(order.quote_order_qty)} is below the minimum notional "
                        f"{_fmt(min_notional.min_notional)}"
                    ),
                    field="quoteOrderQty",
                    suggested_value=min_notional.min_notional,
                )
            return ValidationOutcome.valid()
        price = reference_price
    else:
        price = order.price

    if price is None or order.quantity is None or price <= ZERO:
        return ValidationOutcome.valid()

    notional = order.quantity * price
    if notional < min_notional.min_notional:
        return ValidationOutcome.invalid(
            NOTIONAL_TOO_SMALL,
            (
                f"Order value {_fmt(notional)} ({_fmt(order.quantity)} x {_fmt(price)}) is below "
                f"the minimum notional {_fmt(min_notional.min_notional)}"
            ),
            field="quantity",
            suggested_value=minimum_quantity_for_notional(
                min_notional.min_notional, price, lot_size, base_precision
            ),
        )
    return ValidationOutcome.valid()
