"""
Dependency injection container for assembling use cases with adapters.

This is the composition root where we wire together:
- Use cases (from use_cases.py)
- Adapters (from adapters.py)
- Configuration (from Django settings)

Nothing here is a singleton: credentials arrive with each request, so the
Binance client and the adapters around it are built per call.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from .adapters import BinanceExecution, BinanceMarketData, get_binance_client
from .order_builder import BuilderPolicy, LimitPricePolicy, OrderParameterBuilder
from .use_cases import CancelOrderUseCase, CreateOrderUseCase, ValidateOrderUseCase


@dataclass(frozen=True)
class ApiCredentials:
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return "ApiCredentials(api_key='***', api_secret='***')"


def get_builder_policy() -> BuilderPolicy:
    """Builder policy from settings (limit-price offsets, time-in-force handling)."""
    return BuilderPolicy(
        limit_price=LimitPricePolicy(
            buy_offset=Decimal(str(getattr(settings, "ORDER_LIMIT_BUY_OFFSET", "0.01"))),
            sell_offset=Decimal(str(getattr(settings, "ORDER_LIMIT_SELL_OFFSET", "0.01"))),
        ),
        respect_caller_time_in_force=getattr(settings, "ORDER_RESPECT_CALLER_TIME_IN_FORCE", False),
    )


def _client(credentials: ApiCredentials):
    return get_binance_client(
        credentials.api_key,
        credentials.api_secret,
        use_testnet=getattr(settings, "BINANCE_USE_TESTNET", True),
    )


def get_execution(credentials: ApiCredentials, client=None) -> BinanceExecution:
    return BinanceExecution(
        client or _client(credentials),
        test_orders=not getattr(settings, "TRADING_ENABLED", False),
    )


def get_validate_order_uc(credentials: ApiCredentials) -> ValidateOrderUseCase:
    return ValidateOrderUseCase(
        BinanceMarketData(_client(credentials)),
        OrderParameterBuilder(get_builder_policy()),
    )


def get_create_order_uc(credentials: ApiCredentials) -> CreateOrderUseCase:
    client = _client(credentials)
    return CreateOrderUseCase(
        BinanceMarketData(client),
        get_execution(credentials, client),
        OrderParameterBuilder(get_builder_policy()),
    )


def get_cancel_order_uc(credentials: ApiCredentials) -> CancelOrderUseCase:
    return CancelOrderUseCase(get_execution(credentials))
