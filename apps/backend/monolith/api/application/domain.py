"""
Lightweight domain entities for order normalization.

These are simple value objects used by the application layer.
They are framework-agnostic: no Django, no exchange SDK.

All monetary and size fields are ``Decimal``, parsed from the exchange's
decimal strings, and are re-serialized with ``format_decimal`` so no
precision is lost on the way back to the exchange.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from .filters import SymbolFilters, parse_filters


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"


class TimeInForce(str, Enum):
    GTC = "GTC"  # Good-Til-Canceled
    IOC = "IOC"  # Immediate-Or-Cancel
    FOK = "FOK"  # Fill-Or-Kill


def format_decimal(value: Decimal) -> str:
    """Render a Decimal as a plain string without exponent or trailing zeros."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class OrderRequest:
    """
    Partial order as received from the caller.

    ``side`` and ``order_type`` are kept as raw strings so that unsupported
    values are reported by the builder instead of failing on construction.
    """

    symbol: str
    side: str
    order_type: str
    quantity: Optional[Decimal] = None
    quote_order_qty: Optional[Decimal] = None
    price: Optional[Decimal] = None
    time_in_force: Optional[str] = None


@dataclass(frozen=True)
class ResolvedOrder:
    """
    Fully specified order, ready for validation and submission.

    Invariants (enforced by the builder):
    - LIMIT carries price, quantity and a time-in-force.
    - MARKET never carries a price nor a time-in-force.
    """

    symbol: str
    side: Side
    order_type: OrderType
    quantity: Optional[Decimal] = None
    quote_order_qty: Optional[Decimal] = None
    price: Optional[Decimal] = None
    time_in_force: Optional[TimeInForce] = None

    @property
    def is_limit(self) -> bool:
        return self.order_type == OrderType.LIMIT

    def to_exchange_params(self) -> dict[str, str]:
        """Parameters for the exchange's new-order endpoint, as decimal strings."""
        params = {
            "symbol": self.symbol,
            "side": self.side.value,
            "type": self.order_type.value,
        }
        if self.quantity is not None:
            params["quantity"] = format_decimal(self.quantity)
        if self.quote_order_qty is not None:
            params["quoteOrderQty"] = format_decimal(self.quote_order_qty)
        if self.price is not None:
            params["price"] = format_decimal(self.price)
        if self.time_in_force is not None:
            params["timeInForce"] = self.time_in_force.value
        return params

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "side": self.side.value,
            "type": self.order_type.value,
            "quantity": format_decimal(self.quantity) if self.quantity is not None else None,
            "quoteOrderQty": (
                format_decimal(self.quote_order_qty) if self.quote_order_qty is not None else None
            ),
            "price": format_decimal(self.price) if self.price is not None else None,
            "timeInForce": self.time_in_force.value if self.time_in_force else None,
        }


@dataclass(frozen=True)
class SymbolInfo:
    """
    Immutable snapshot of a symbol's exchange metadata.

    Fetched fresh for every validation call, never cached by the core.
    """

    symbol: str
    base_asset: str
    quote_asset: str
    base_precision: int
    quote_precision: int
    filters: SymbolFilters
    status: str = "TRADING"
    order_types: tuple[str, ...] = ()
    raw_filters: tuple[dict, ...] = field(default=(), repr=False)

    @property
    def is_trading(self) -> bool:
        return self.status == "TRADING"

    def supports(self, order_type: OrderType) -> bool:
        # An empty list means the exchange did not tell us; do not block on it.
        return not self.order_types or order_type.value in self.order_types

    @classmethod
    def from_exchange(cls, payload: dict) -> "SymbolInfo":
        """Build from an exchange-info symbol entry (Binance spot layout)."""
        raw_filters = tuple(payload.get("filters") or ())
        return cls(
            symbol=payload["symbol"],
            base_asset=payload.get("baseAsset", ""),
            quote_asset=payload.get("quoteAsset", ""),
            base_precision=int(payload.get("baseAssetPrecision", 8)),
            quote_precision=int(payload.get("quoteAssetPrecision", payload.get("quotePrecision", 8))),
            filters=parse_filters(raw_filters),
            status=payload.get("status", "TRADING"),
            order_types=tuple(payload.get("orderTypes") or ()),
            raw_filters=raw_filters,
        )
