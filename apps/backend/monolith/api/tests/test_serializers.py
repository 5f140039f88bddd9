"""
Tests for the request serializers (shape only, no exchange calls).
"""

from decimal import Decimal

from api.serializers import (
    BalanceRequestSerializer,
    CancelOrderSerializer,
    CreateOrderRequestSerializer,
)

CREDENTIALS = {"apiKey": "k" * 64, "apiSecret": "s" * 64}


class TestCreateOrderRequestSerializer:
    def test_order_request_built_from_payload(self):
        serializer = CreateOrderRequestSerializer(data={
            "credentials": CREDENTIALS,
            "order": {"symbol": " ethusdt ", "side": "SELL", "type": "LIMIT", "quantity": "0.25", "price": "3000.5"},
        })

        assert serializer.is_valid(), serializer.errors
        request = serializer.get_order_request()
        assert request.symbol == "ETHUSDT"
        assert request.side == "SELL"
        assert request.order_type == "LIMIT"
        assert request.quantity == Decimal("0.25")
        assert request.price == Decimal("3000.5")
        assert request.quote_order_qty is None
        assert request.time_in_force is None

    def test_credentials_are_masked(self):
        serializer = CreateOrderRequestSerializer(data={
            "credentials": CREDENTIALS,
            "order": {"symbol": "BTCUSDT", "side": "BUY", "type": "MARKET", "quoteOrderQty": "100"},
        })

        assert serializer.is_valid(), serializer.errors
        credentials = serializer.get_credentials()
        assert credentials.api_key == "k" * 64
        assert "k" * 64 not in repr(credentials)

    def test_credentials_must_be_64_characters(self):
        serializer = CreateOrderRequestSerializer(data={
            "credentials": {"apiKey": "k" * 63, "apiSecret": "s" * 64},
            "order": {"symbol": "BTCUSDT", "side": "BUY", "type": "MARKET", "quoteOrderQty": "100"},
        })

        assert not serializer.is_valid()
        assert "credentials" in serializer.errors

    def test_non_numeric_quantity(self):
        serializer = CreateOrderRequestSerializer(data={
            "credentials": CREDENTIALS,
            "order": {"symbol": "BTCUSDT", "side": "BUY", "type": "MARKET", "quantity": "lots"},
        })

        assert not serializer.is_valid()
        assert "quantity" in serializer.errors["order"]

    def test_unknown_side(self):
        serializer = CreateOrderRequestSerializer(data={
            "credentials": CREDENTIALS,
            "order": {"symbol": "BTCUSDT", "side": "HOLD", "type": "MARKET", "quantity": "1"},
        })

        assert not serializer.is_valid()
        assert "side" in serializer.errors["order"]


class TestCancelOrderSerializer:
    def test_valid(self):
        serializer = CancelOrderSerializer(data={"credentials": CREDENTIALS, "symbol": "btcusdt", "orderId": 9})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["symbol"] == "BTCUSDT"

    def test_order_id_must_be_positive(self):
        serializer = CancelOrderSerializer(data={"credentials": CREDENTIALS, "symbol": "BTCUSDT", "orderId": 0})

        assert not serializer.is_valid()
        assert "orderId" in serializer.errors


class TestBalanceRequestSerializer:
    def test_asset_is_optional(self):
        serializer = BalanceRequestSerializer(data={"credentials": CREDENTIALS})

        assert serializer.is_valid(), serializer.errors
        assert "asset" not in serializer.validated_data
