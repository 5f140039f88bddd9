"""
Application layer ports (interfaces) for the order gateway.

Hexagonal Architecture INSIDE Django:
- These ports define what the core needs from the exchange
- Concrete implementations are in adapters.py
- Use cases depend on ports, never on the exchange SDK

Timeouts and retries belong to the adapters' HTTP client, not to the core.
"""

from __future__ import annotations
from typing import Protocol, Optional
from decimal import Decimal

from .domain import ResolvedOrder, SymbolInfo


class MarketDataPort(Protocol):
    """Port for read-only exchange metadata and prices."""

    def fetch_current_price(self, symbol: str) -> Decimal:
        """
        Get the latest traded price for a symbol.

        Raises:
            PriceUnavailable: unknown symbol or exchange unreachable
        """
        ...

    def fetch_symbol_info(self, symbol: str) -> Optional[SymbolInfo]:
        """
        Get the symbol's trading rules, or None if the symbol is not listed.

        Raises:
            FetchError: exchange unreachable
            MalformedFilter: filter metadata could not be parsed
        """
        ...


class ExchangeExecutionPort(Protocol):
    """Port for writes against the exchange account."""

    def submit_order(self, order: ResolvedOrder) -> dict:
        """
        Submit a validated order.
        Returns the exchange's order receipt.
        """
        ...

    def cancel_order(self, symbol: str, order_id: int) -> dict:
        """Cancel an open order. Returns the exchange's cancel receipt."""
        ...


class AccountPort(Protocol):
    """Port for account-level reads and connectivity checks."""

    def ping(self) -> dict:
        """Check connectivity (and credential acceptance) with the exchange."""
        ...

    def get_account_balance(self, asset: Optional[str] = None) -> dict:
        """Balance of one asset, or all non-zero balances."""
        ...
