"""
API Serializers Package.

Exports all serializers for the API.
"""

from .order_serializers import (
    ApiCredentialsSerializer,
    BaseRequestSerializer,
    OrderSerializer,
    CreateOrderRequestSerializer,
    CancelOrderSerializer,
    BalanceRequestSerializer,
)


__all__ = [
    "ApiCredentialsSerializer",
    "BaseRequestSerializer",
    "OrderSerializer",
    "CreateOrderRequestSerializer",
    "CancelOrderSerializer",
    "BalanceRequestSerializer",
]
