"""
Error taxonomy for order normalization and validation.

Every error carries a stable ``code`` (used by the HTTP layer and by API
clients) and a human-readable message. Business-rule rejections are NOT
exceptions: they are returned as ``ValidationRejection`` values inside an
``OrderDecision`` (see validation.py / use_cases.py).

Nothing in the core retries or swallows these errors.
"""

from __future__ import annotations


class OrderGatewayError(Exception):
    """Base class for all errors raised by the order gateway core."""

    code = "ORDER_GATEWAY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


# ==========================================
# EXCHANGE METADATA ERRORS
# ==========================================


class MalformedFilter(OrderGatewayError):
    """Exchange filter metadata could not be parsed. Fatal for that symbol."""

    code = "MALFORMED_FILTER"

    def __init__(self, filter_type: str, message: str):
        super().__init__(f"{filter_type}: {message}")
        self.filter_type = filter_type


class SymbolNotFound(OrderGatewayError):
    code = "SYMBOL_NOT_FOUND"

    def __init__(self, symbol: str):
        super().__init__(f"Symbol {symbol} is not listed on the exchange")
        self.symbol = symbol


class SymbolNotTrading(OrderGatewayError):
    code = "SYMBOL_NOT_TRADING"

    def __init__(self, symbol: str, status: str):
        super().__init__(f"Symbol {symbol} is not open for trading (status: {status})")
        self.symbol = symbol
        self.status = status


# ==========================================
# REQUEST-SHAPE ERRORS
# ==========================================


class MissingQuantitySpecification(OrderGatewayError):
    code = "MISSING_QUANTITY_SPECIFICATION"


class UnsupportedOrderType(OrderGatewayError):
    code = "UNSUPPORTED_ORDER_TYPE"

    def __init__(self, order_type: str, symbol: str | None = None):
        if symbol:
            message = f"Order type {order_type} is not supported for {symbol}"
        else:
            message = f"Order type {order_type} is not supported"
        super().__init__(message)
        self.order_type = order_type


class InvalidOrderSide(OrderGatewayError):
    code = "INVALID_SIDE"

    def __init__(self, side: str):
        super().__init__(f"Order side must be BUY or SELL, got: {side}")
        self.side = side


class InvalidPrice(OrderGatewayError):
    code = "INVALID_PRICE"


# ==========================================
# EXTERNAL DEPENDENCY ERRORS
# ==========================================


class FetchError(OrderGatewayError):
    """A read from the exchange failed. Retryable by the caller."""

    code = "FETCH_ERROR"
    retryable = True

    def to_dict(self) -> dict:
        return dict(super().to_dict(), retryable=self.retryable)


class PriceUnavailable(FetchError):
    code = "PRICE_UNAVAILABLE"

    def __init__(self, symbol: str, reason: str = ""):
        message = f"Current price for {symbol} is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.symbol = symbol


class OrderSubmissionError(OrderGatewayError):
    """The exchange refused or failed to accept a write (new order, cancel)."""

    code = "ORDER_SUBMISSION_ERROR"

    def __init__(self, message: str, exchange_code: int | None = None):
        super().__init__(message)
        self.exchange_code = exchange_code

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.exchange_code is not None:
            payload["exchange_code"] = self.exchange_code
        return payload
