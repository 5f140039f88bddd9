"""
Serializers for the order gateway API.

These serializers only check the SHAPE of a request (types, enums, decimal
strings). Order rules such as "a LIMIT order needs a size" live in the
application layer and come back as typed errors.
"""

from rest_framework import serializers

from api.application import OrderRequest
from api.application.wiring import ApiCredentials

API_KEY_LENGTH = 64


class ApiCredentialsSerializer(serializers.Serializer):
    """Per-request exchange credentials."""

    apiKey = serializers.CharField(
        trim_whitespace=False,
        error_messages={"required": "API key is required", "blank": "API key is required"},
    )
    apiSecret = serializers.CharField(
        trim_whitespace=False,
        error_messages={"required": "API secret is required", "blank": "API secret is required"},
    )

    def validate(self, data):
        if len(data["apiKey"]) != API_KEY_LENGTH or len(data["apiSecret"]) != API_KEY_LENGTH:
            raise serializers.ValidationError(
                f"API key and API secret must be {API_KEY_LENGTH} characters long"
            )
        return data


class BaseRequestSerializer(serializers.Serializer):
    credentials = ApiCredentialsSerializer()

    def get_credentials(self) -> ApiCredentials:
        data = self.validated_data["credentials"]
        return ApiCredentials(api_key=data["apiKey"], api_secret=data["apiSecret"])


def _decimal_field(help_text: str) -> serializers.DecimalField:
    # Exchange values are decimal strings with at most 8 decimal places
    return serializers.DecimalField(
        max_digits=30,
        decimal_places=8,
        required=False,
        allow_null=True,
        help_text=help_text,
    )


class OrderSerializer(serializers.Serializer):
    """Partial order: the gateway fills in whatever the exchange needs."""

    symbol = serializers.CharField(
        max_length=20,
        error_messages={"required": "Symbol is required", "blank": "Symbol is required"},
    )
    side = serializers.ChoiceField(choices=["BUY", "SELL"])
    type = serializers.ChoiceField(choices=["LIMIT", "MARKET"])
    quantity = _decimal_field("Base-asset amount")
    quoteOrderQty = _decimal_field("Quote-asset amount to spend")
    price = _decimal_field("Limit price; derived from the market when omitted")
    timeInForce = serializers.ChoiceField(
        choices=["GTC", "IOC", "FOK"],
        required=False,
        allow_null=True,
    )

    def validate_symbol(self, value: str) -> str:
        return value.strip().upper()


def order_request_from(data: dict) -> OrderRequest:
    return OrderRequest(
        symbol=data["symbol"],
        side=data["side"],
        order_type=data["type"],
        quantity=data.get("quantity"),
        quote_order_qty=data.get("quoteOrderQty"),
        price=data.get("price"),
        time_in_force=data.get("timeInForce"),
    )


class CreateOrderRequestSerializer(BaseRequestSerializer):
    order = OrderSerializer()

    def get_order_request(self) -> OrderRequest:
        return order_request_from(self.validated_data["order"])


class CancelOrderSerializer(BaseRequestSerializer):
    symbol = serializers.CharField(
        max_length=20,
        error_messages={"required": "Symbol is required", "blank": "Symbol is required"},
    )
    orderId = serializers.IntegerField(
        min_value=1,
        error_messages={"required": "Order ID is required"},
    )

    def validate_symbol(self, value: str) -> str:
        return value.strip().upper()


class BalanceRequestSerializer(BaseRequestSerializer):
    asset = serializers.CharField(max_length=20, required=False, allow_blank=False)

    def validate_asset(self, value: str) -> str:
        return value.strip().upper()
