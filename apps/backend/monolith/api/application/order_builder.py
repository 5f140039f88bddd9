"""
Order Parameter Builder.

Turns a partial ``OrderRequest`` into a fully specified ``ResolvedOrder``:

- MARKET BUY:  quoteOrderQty if given (quote-denominated spend), else quantity
- MARKET SELL: quantity only (quoteOrderQty is ignored for sells)
- LIMIT:       explicit price, or a passive price derived from the market
               (below market for buys, above for sells); explicit quantity,
               or quantity derived from quoteOrderQty / price

Values the builder derives itself are snapped DOWN to the symbol's grid.
Values the caller supplied are passed through untouched and left to the
validators, which reject them with a suggestion instead of correcting them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Optional
import logging

from .domain import (
    OrderRequest,
    OrderType,
    ResolvedOrder,
    Side,
    SymbolInfo,
    TimeInForce,
    format_decimal,
)
from .errors import (
    InvalidOrderSide,
    InvalidPrice,
    MissingQuantitySpecification,
    UnsupportedOrderType,
)
from .filters import ZERO, floor_to_grid, quantize_down

logger = logging.getLogger(__name__)

PriceFetcher = Callable[[str], Decimal]


@dataclass(frozen=True)
class LimitPricePolicy:
    """
    Offsets used when a LIMIT order arrives without a price.

    The default of 1% places a resting order on the passive side of the
    book instead of crossing the spread.
    """

    buy_offset: Decimal = Decimal("0.01")
    sell_offset: Decimal = Decimal("0.01")

    def derive(self, side: Side, current_price: Decimal) -> Decimal:
        if side == Side.BUY:
            return current_price * (Decimal("1") - self.buy_offset)
        return current_price * (Decimal("1") + self.sell_offset)


@dataclass(frozen=True)
class BuilderPolicy:
    limit_price: LimitPricePolicy = field(default_factory=LimitPricePolicy)
    # False forces GTC on every LIMIT order, whatever the caller sent.
    respect_caller_time_in_force: bool = False


class OrderParameterBuilder:
    def __init__(self, policy: BuilderPolicy | None = None):
        self.policy = policy or BuilderPolicy()

    def build(
        self,
        request: OrderRequest,
        fetch_current_price: PriceFetcher,
        symbol_info: Optional[SymbolInfo] = None,
    ) -> ResolvedOrder:
        """
        Resolve ``request`` into a ResolvedOrder.

        Args:
            request: Partial order from the caller
            fetch_current_price: Called only for LIMIT orders without a price
            symbol_info: Used to snap derived values to the symbol's grid

        Raises:
            InvalidOrderSide, UnsupportedOrderType, MissingQuantitySpecification,
            InvalidPrice, and whatever ``fetch_current_price`` raises.
        """
        side = self._parse_side(request.side)
        order_type = self._parse_order_type(request.order_type)

        if order_type == OrderType.MARKET:
            return self._build_market(request, side)
        return self._build_limit(request, side, fetch_current_price, symbol_info)

    # ------------------------------------------------------------------

    @staticmethod
    def _parse_side(side: str) -> Side:
        try:
            return Side(str(side).upper())
        except ValueError:
            raise InvalidOrderSide(side)

    @staticmethod
    def _parse_order_type(order_type: str) -> OrderType:
        try:
            return OrderType(str(order_type).upper())
        except ValueError:
            raise UnsupportedOrderType(order_type)

    @staticmethod
    def _positive_size(name: str, value: Decimal) -> Decimal:
        # Only the size field the order actually uses is checked
        if value <= ZERO:
            raise MissingQuantitySpecification(f"{name} must be positive, got {format_decimal(value)}")
        return value

    def _build_market(self, request: OrderRequest, side: Side) -> ResolvedOrder:
        if side == Side.BUY:
            if request.quote_order_qty is not None:
                return ResolvedOrder(
                    symbol=request.symbol,
                    side=side,
                    order_type=OrderType.MARKET,
                    quote_order_qty=self._positive_size("quoteOrderQty", request.quote_order_qty),
                )
            if request.quantity is not None:
                return ResolvedOrder(
                    symbol=request.symbol,
                    side=side,
                    order_type=OrderType.MARKET,
                    quantity=self._positive_size("quantity", request.quantity),
                )
            raise MissingQuantitySpecification("MARKET BUY orders require quoteOrderQty or quantity")

        if request.quantity is None:
            raise MissingQuantitySpecification(
                "MARKET SELL orders require quantity (quoteOrderQty is not used for sells)"
            )
        return ResolvedOrder(
            symbol=request.symbol,
            side=side,
            order_type=OrderType.MARKET,
            quantity=self._positive_size("quantity", request.quantity),
        )

    def _build_limit(
        self,
        request: OrderRequest,
        side: Side,
        fetch_current_price: PriceFetcher,
        symbol_info: Optional[SymbolInfo],
    ) -> ResolvedOrder:
        if request.quantity is None and request.quote_order_qty is None:
            raise MissingQuantitySpecification("LIMIT orders require quantity or quoteOrderQty")
        if request.quantity is not None:
            self._positive_size("quantity", request.quantity)
        else:
            self._positive_size("quoteOrderQty", request.quote_order_qty)

        price = request.price
        if price is not None and price <= ZERO:
            raise InvalidPrice(f"Price must be positive, got {format_decimal(price)}")
        if price is None:
            current_price = fetch_current_price(request.symbol)
            if current_price <= ZERO:
                raise InvalidPrice(
                    f"Market price for {request.symbol} is not positive: {format_decimal(current_price)}"
                )
            price = self._snap_price(self.policy.limit_price.derive(side, current_price), symbol_info)
            logger.debug(
                "Derived %s LIMIT price for %s: %s (market %s)",
                side.value, request.symbol, format_decimal(price), format_decimal(current_price),
            )
            if price <= ZERO:
                raise InvalidPrice(f"Derived price for {request.symbol} rounds down to zero")

        quantity = request.quantity
        if quantity is None:
            quantity = self._snap_quantity(request.quote_order_qty / price, symbol_info)
            if quantity <= ZERO:
                raise MissingQuantitySpecification(
                    f"quoteOrderQty {format_decimal(request.quote_order_qty)} is too small "
                    f"for one step at price {format_decimal(price)}"
                )

        return ResolvedOrder(
            symbol=request.symbol,
            side=side,
            order_type=OrderType.LIMIT,
            quantity=quantity,
            price=price,
            time_in_force=self._time_in_force(request),
        )

    def _time_in_force(self, request: OrderRequest) -> TimeInForce:
        if self.policy.respect_caller_time_in_force and request.time_in_force:
            return TimeInForce(str(request.time_in_force).upper())
        return TimeInForce.GTC

    @staticmethod
    def _snap_price(price: Decimal, symbol_info: Optional[SymbolInfo]) -> Decimal:
        if symbol_info is None:
            return price
        price = quantize_down(price, symbol_info.quote_precision)
        price_filter = symbol_info.filters.price
        if price_filter is not None:
            return floor_to_grid(price, price_filter.min_price, price_filter.tick_size)
        return price

    @staticmethod
    def _snap_quantity(quantity: Decimal, symbol_info: Optional[SymbolInfo]) -> Decimal:
        if symbol_info is None:
            return quantity
        quantity = quantize_down(quantity, symbol_info.base_precision)
        lot_size = symbol_info.filters.lot_size
        if lot_size is not None:
            return floor_to_grid(quantity, lot_size.min_qty, lot_size.step_size)
        return quantity
