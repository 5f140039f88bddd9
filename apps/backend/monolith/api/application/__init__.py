"""
Application layer package - Hexagonal Architecture INSIDE Django.

This package contains:
- domain.py: Order request / resolved order / symbol info value objects
- filters.py: Exchange trading-rule filters and grid arithmetic
- validation.py: Quantity, price and minimum-notional validators
- order_builder.py: Derivation of missing order parameters
- use_cases.py: Validation orchestrator and order use cases
- ports.py: Interface definitions (protocols)
- adapters.py: Concrete implementations (Binance, in-memory)
- wiring.py: Composition root

Usage:
    from api.application.wiring import ApiCredentials, get_create_order_uc

    use_case = get_create_order_uc(ApiCredentials(api_key, api_secret))
    placement = use_case.execute(order_request)
"""

from .errors import (
    OrderGatewayError,
    MalformedFilter,
    SymbolNotFound,
    SymbolNotTrading,
    MissingQuantitySpecification,
    UnsupportedOrderType,
    InvalidOrderSide,
    InvalidPrice,
    FetchError,
    PriceUnavailable,
    OrderSubmissionError,
)

from .domain import (
    Side,
    OrderType,
    TimeInForce,
    OrderRequest,
    ResolvedOrder,
    SymbolInfo,
    format_decimal,
)

from .filters import (
    LotSizeFilter,
    PriceFilter,
    MinNotionalFilter,
    SymbolFilters,
    parse_filters,
)

from .validation import (
    ValidationStatus,
    ValidationOutcome,
    ValidationRejection,
    validate_quantity,
    validate_price,
    validate_min_notional,
)

from .order_builder import LimitPricePolicy, BuilderPolicy, OrderParameterBuilder

from .ports import MarketDataPort, ExchangeExecutionPort, AccountPort

from .use_cases import (
    OrderDecision,
    OrderPlacement,
    build_and_validate_order,
    ValidateOrderUseCase,
    CreateOrderUseCase,
    CancelOrderUseCase,
)


__all__ = [
    # Errors
    "OrderGatewayError",
    "MalformedFilter",
    "SymbolNotFound",
    "SymbolNotTrading",
    "MissingQuantitySpecification",
    "UnsupportedOrderType",
    "InvalidOrderSide",
    "InvalidPrice",
    "FetchError",
    "PriceUnavailable",
    "OrderSubmissionError",
    # Domain
    "Side",
    "OrderType",
    "TimeInForce",
    "OrderRequest",
    "ResolvedOrder",
    "SymbolInfo",
    "format_decimal",
    # Filters
    "LotSizeFilter",
    "PriceFilter",
    "MinNotionalFilter",
    "SymbolFilters",
    "parse_filters",
    # Validation
    "ValidationStatus",
    "ValidationOutcome",
    "ValidationRejection",
    "validate_quantity",
    "validate_price",
    "validate_min_notional",
    # Builder
    "LimitPricePolicy",
    "BuilderPolicy",
    "OrderParameterBuilder",
    # Ports
    "MarketDataPort",
    "ExchangeExecutionPort",
    "AccountPort",
    # Use Cases
    "OrderDecision",
    "OrderPlacement",
    "build_and_validate_order",
    "ValidateOrderUseCase",
    "CreateOrderUseCase",
    "CancelOrderUseCase",
]
