"""
Concrete adapter implementations for application ports.

These adapters implement the ports defined in ports.py using:
- python-binance for market data, symbol rules and execution
- Plain in-memory objects for tests and local development

Multi-tenant aware: every Binance adapter is built from the credentials
sent with the request, never from a shared singleton.

Exchange and transport exceptions are translated into the gateway's error
taxonomy here, so the core never sees SDK exceptions. Nothing is retried.
"""

from __future__ import annotations
from typing import Optional
from decimal import Decimal, InvalidOperation
import logging

from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException
from requests.exceptions import RequestException

from .domain import ResolvedOrder, SymbolInfo
from .errors import FetchError, OrderSubmissionError, PriceUnavailable
from .ports import AccountPort, ExchangeExecutionPort, MarketDataPort

logger = logging.getLogger(__name__)

# Binance error code for an unknown symbol
INVALID_SYMBOL = -1121

_TRANSPORT_ERRORS = (BinanceRequestException, RequestException)


# ==========================================
# EXTERNAL SERVICE ADAPTERS (Binance)
# ==========================================


def get_binance_client(api_key: str, api_secret: str, use_testnet: bool = True) -> Client:
    """
    Create a Binance client for one request's credentials.

    Raises:
        FetchError: the exchange could not be reached while initializing
    """
    mode_str = "TESTNET" if use_testnet else "PRODUCTION"
    logger.debug(f"Creating Binance client in {mode_str} mode")
    try:
        return Client(api_key, api_secret, testnet=use_testnet)
    except BinanceAPIException as e:
        raise FetchError(f"Binance rejected the client setup: {e.message}")
    except _TRANSPORT_ERRORS as e:
        raise FetchError(f"Binance is unreachable: {e}")


class BinanceMarketData(MarketDataPort):
    """Market data adapter using the Binance spot REST API."""

    def __init__(self, client: Client):
        self.client = client

    def fetch_current_price(self, symbol: str) -> Decimal:
        """Latest price from the symbol ticker."""
        try:
            ticker = self.client.get_symbol_ticker(symbol=symbol)
            return Decimal(str(ticker["price"]))
        except BinanceAPIException as e:
            raise PriceUnavailable(symbol, e.message)
        except _TRANSPORT_ERRORS as e:
            raise PriceUnavailable(symbol, str(e))
        except (KeyError, TypeError, InvalidOperation):
            raise PriceUnavailable(symbol, "unexpected ticker payload")

    def fetch_symbol_info(self, symbol: str) -> Optional[SymbolInfo]:
        """Symbol rules from exchange info, or None when the symbol is unknown."""
        try:
            payload = self.client.get_symbol_info(symbol)
        except BinanceAPIException as e:
            if e.code == INVALID_SYMBOL:
                return None
            raise FetchError(f"Failed to fetch symbol info for {symbol}: {e.message}")
        except _TRANSPORT_ERRORS as e:
            raise FetchError(f"Failed to fetch symbol info for {symbol}: {e}")

        if not payload:
            return None
        return SymbolInfo.from_exchange(payload)


class BinanceExecution(ExchangeExecutionPort, AccountPort):
    """
    Real Binance execution adapter.

    WARNING: with ``test_orders=False`` this places REAL orders.
    With ``test_orders=True`` orders go to the exchange's test endpoint,
    which validates them but never reaches the matching engine.
    """

    def __init__(self, client: Client, test_orders: bool = False):
        self.client = client
        self.test_orders = test_orders

    def submit_order(self, order: ResolvedOrder) -> dict:
        params = order.to_exchange_params()
        logger.info(
            "Placing %s%s order: %s",
            "TEST " if self.test_orders else "",
            order.order_type.value,
            params,
        )
        try:
            if self.test_orders:
                return self.client.create_test_order(**params) or {}
            return self.client.create_order(**params)
        except BinanceAPIException as e:
            raise OrderSubmissionError(f"Binance rejected the order: {e.message}", e.code)
        except _TRANSPORT_ERRORS as e:
            raise OrderSubmissionError(f"Order could not be sent to Binance: {e}")

    def cancel_order(self, symbol: str, order_id: int) -> dict:
        try:
            return self.client.cancel_order(symbol=symbol, orderId=order_id)
        except BinanceAPIException as e:
            raise OrderSubmissionError(f"Binance rejected the cancel: {e.message}", e.code)
        except _TRANSPORT_ERRORS as e:
            raise OrderSubmissionError(f"Cancel could not be sent to Binance: {e}")

    def ping(self) -> dict:
        try:
            return self.client.ping()
        except BinanceAPIException as e:
            raise FetchError(f"Binance ping failed: {e.message}")
        except _TRANSPORT_ERRORS as e:
            raise FetchError(f"Binance ping failed: {e}")

    def get_account_balance(self, asset: str = None) -> dict:
        """
        Get account balance(s).

        Args:
            asset: Specific asset to get balance for. If None, returns all non-zero.
        """
        try:
            account = self.client.get_account()
        except BinanceAPIException as e:
            raise FetchError(f"Failed to fetch account: {e.message}")
        except _TRANSPORT_ERRORS as e:
            raise FetchError(f"Failed to fetch account: {e}")

        balances = account.get("balances", [])

        if asset:
            for balance in balances:
                if balance["asset"] == asset:
                    return {
                        "asset": asset,
                        "free": Decimal(balance["free"]),
                        "locked": Decimal(balance["locked"]),
                    }
            return {"asset": asset, "free": Decimal("0"), "locked": Decimal("0")}

        non_zero = []
        for balance in balances:
            free = Decimal(balance["free"])
            locked = Decimal(balance["locked"])
            if free > 0 or locked > 0:
                non_zero.append({
                    "asset": balance["asset"],
                    "free": free,
                    "locked": locked,
                })
        return {"balances": non_zero}


# ==========================================
# IN-MEMORY ADAPTERS (tests, local development)
# ==========================================


class InMemoryMarketData(MarketDataPort):
    """
    Market data served from dicts.

    Records how many times each price was requested so tests can assert
    that no fetch happened when none was needed.
    """

    def __init__(self, symbols: dict[str, SymbolInfo] | None = None, prices: dict[str, Decimal] | None = None):
        self.symbols = dict(symbols or {})
        self.prices = dict(prices or {})
        self.price_requests: list[str] = []

    def fetch_current_price(self, symbol: str) -> Decimal:
        self.price_requests.append(symbol)
        if symbol not in self.prices:
            raise PriceUnavailable(symbol, "no price loaded")
        return Decimal(self.prices[symbol])

    def fetch_symbol_info(self, symbol: str) -> Optional[SymbolInfo]:
        return self.symbols.get(symbol)


class InMemoryExecution(ExchangeExecutionPort):
    """Execution stub that records submitted orders without any external call."""

    def __init__(self):
        self.submitted: list[ResolvedOrder] = []
        self.canceled: list[tuple[str, int]] = []

    def submit_order(self, order: ResolvedOrder) -> dict:
        self.submitted.append(order)
        return dict(order.to_exchange_params(), orderId=len(self.submitted), status="NEW")

    def cancel_order(self, symbol: str, order_id: int) -> dict:
        self.canceled.append((symbol, order_id))
        return {"symbol": symbol, "orderId": order_id, "status": "CANCELED"}
