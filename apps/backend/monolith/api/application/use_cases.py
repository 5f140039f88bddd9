"""
Application layer use cases for the order gateway.

Use cases orchestrate the builder, the validators and the exchange ports.

Hexagonal Architecture INSIDE Django:
- Use cases are framework-agnostic (no Django-specific code here)
- Dependencies are injected via ports
- Django/Binance adapters implement these ports

Every call is independent: symbol info is fetched fresh, nothing is
cached or shared between requests.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

from .domain import OrderRequest, OrderType, ResolvedOrder, SymbolInfo
from .errors import SymbolNotFound, SymbolNotTrading, UnsupportedOrderType
from .order_builder import OrderParameterBuilder, PriceFetcher
from .ports import ExchangeExecutionPort, MarketDataPort
from .validation import (
    ValidationRejection,
    validate_min_notional,
    validate_price,
    validate_quantity,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderDecision:
    """Either an order ready for submission or a rejection with a suggestion."""

    order: ResolvedOrder
    rejection: Optional[ValidationRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    def to_dict(self) -> dict:
        payload = {"valid": self.accepted, "order": self.order.to_dict()}
        if self.rejection is not None:
            payload["rejection"] = self.rejection.to_dict()
        return payload


@dataclass(frozen=True)
class OrderPlacement:
    decision: OrderDecision
    receipt: Optional[dict] = None

    @property
    def submitted(self) -> bool:
        return self.receipt is not None


def build_and_validate_order(
    request: OrderRequest,
    symbol_info: SymbolInfo,
    fetch_current_price: PriceFetcher,
    builder: OrderParameterBuilder | None = None,
) -> OrderDecision:
    """
    Resolve and validate one order against the symbol's trading rules.

    Sequence: builder → quantity (LOT_SIZE) → price (PRICE_FILTER, LIMIT only)
    → minimum notional. The first failing check short-circuits.

    Raises:
        SymbolNotTrading, UnsupportedOrderType and every builder error.
        Rule violations are NOT raised, they come back in the decision.
    """
    builder = builder or OrderParameterBuilder()

    if not symbol_info.is_trading:
        raise SymbolNotTrading(symbol_info.symbol, symbol_info.status)

    order = builder.build(request, fetch_current_price, symbol_info)

    if not symbol_info.supports(order.order_type):
        raise UnsupportedOrderType(order.order_type.value, symbol_info.symbol)

    filters = symbol_info.filters

    # MARKET buys sized in quote asset carry no base quantity to check
    if order.quantity is not None:
        outcome = validate_quantity(order.quantity, filters.lot_size)
        if not outcome.is_valid:
            return _reject(order, outcome.rejection)

    if order.is_limit:
        outcome = validate_price(order.price, filters.price)
        if not outcome.is_valid:
            return _reject(order, outcome.rejection)

    reference_price: Optional[Decimal] = None
    if (
        filters.min_notional is not None
        and filters.min_notional.apply_to_market
        and order.order_type == OrderType.MARKET
        and order.quantity is not None
    ):
        reference_price = fetch_current_price(order.symbol)

    outcome = validate_min_notional(
        order,
        filters.min_notional,
        reference_price=reference_price,
        lot_size=filters.lot_size,
        base_precision=symbol_info.base_precision,
    )
    if not outcome.is_valid:
        return _reject(order, outcome.rejection)

    logger.info(
        "Order accepted: %s %s %s", order.order_type.value, order.side.value, order.symbol
    )
    return OrderDecision(order=order)


def _reject(order: ResolvedOrder, rejection: ValidationRejection) -> OrderDecision:
    logger.info("Order rejected for %s: [%s] %s", order.symbol, rejection.kind, rejection.reason)
    return OrderDecision(order=order, rejection=rejection)


class ValidateOrderUseCase:
    """
    Dry run: resolve and validate an order without submitting it.

    This orchestrates:
    1. Fetching the symbol's trading rules (SymbolNotFound if unlisted)
    2. Building the order (fetching the market price only when needed)
    3. Validating it against the symbol's filters
    """

    def __init__(self, md: MarketDataPort, builder: OrderParameterBuilder | None = None):
        self.md = md
        self.builder = builder or OrderParameterBuilder()

    def execute(self, request: OrderRequest) -> OrderDecision:
        symbol_info = self.md.fetch_symbol_info(request.symbol)
        if symbol_info is None:
            raise SymbolNotFound(request.symbol)
        return build_and_validate_order(
            request, symbol_info, self.md.fetch_current_price, self.builder
        )


class CreateOrderUseCase:
    """
    Use case for creating an order on the exchange.

    Validation failures are reported, never auto-corrected: a rejected
    order is not submitted on that call.
    """

    def __init__(
        self,
        md: MarketDataPort,
        ex: ExchangeExecutionPort,
        builder: OrderParameterBuilder | None = None,
    ):
        self.validate = ValidateOrderUseCase(md, builder)
        self.ex = ex

    def execute(self, request: OrderRequest) -> OrderPlacement:
        decision = self.validate.execute(request)
        if not decision.accepted:
            return OrderPlacement(decision=decision)

        receipt = self.ex.submit_order(decision.order)
        logger.info(
            "Order submitted: %s %s %s (exchange id %s)",
            decision.order.order_type.value,
            decision.order.side.value,
            decision.order.symbol,
            receipt.get("orderId"),
        )
        return OrderPlacement(decision=decision, receipt=receipt)


class CancelOrderUseCase:
    def __init__(self, ex: ExchangeExecutionPort):
        self.ex = ex

    def execute(self, symbol: str, order_id: int) -> dict:
        receipt = self.ex.cancel_order(symbol, order_id)
        logger.info("Order %s on %s canceled", order_id, symbol)
        return receipt
