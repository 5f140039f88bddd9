"""
Order endpoints.

Credentials travel with every request; the exchange client is built per
call. Orders are resolved and validated against the symbol's live trading
rules before anything is sent to the exchange.

IMPORTANT: with TRADING_ENABLED=True and BINANCE_USE_TESTNET=False the
create endpoint places REAL orders with REAL money.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from api.application import (
    FetchError,
    InvalidOrderSide,
    InvalidPrice,
    MalformedFilter,
    MissingQuantitySpecification,
    OrderGatewayError,
    OrderSubmissionError,
    SymbolNotFound,
    SymbolNotTrading,
    UnsupportedOrderType,
)
from api.application.wiring import (
    get_cancel_order_uc,
    get_create_order_uc,
    get_execution,
    get_validate_order_uc,
)
from api.serializers import (
    BaseRequestSerializer,
    CancelOrderSerializer,
    CreateOrderRequestSerializer,
)

logger = logging.getLogger(__name__)

# Checked in order: subclasses before their parents
ERROR_STATUS = (
    (SymbolNotFound, status.HTTP_400_BAD_REQUEST),
    (SymbolNotTrading, status.HTTP_400_BAD_REQUEST),
    (MissingQuantitySpecification, status.HTTP_400_BAD_REQUEST),
    (UnsupportedOrderType, status.HTTP_400_BAD_REQUEST),
    (InvalidOrderSide, status.HTTP_400_BAD_REQUEST),
    (InvalidPrice, status.HTTP_400_BAD_REQUEST),
    (MalformedFilter, status.HTTP_502_BAD_GATEWAY),
    (FetchError, status.HTTP_502_BAD_GATEWAY),
    (OrderSubmissionError, status.HTTP_502_BAD_GATEWAY),
)


def error_response(error: OrderGatewayError) -> Response:
    """Map a gateway error to its HTTP response."""
    for error_cls, status_code in ERROR_STATUS:
        if isinstance(error, error_cls):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response({"error": error.to_dict()}, status=status_code)


def invalid_request_response(errors) -> Response:
    return Response({
        "error": {
            "code": "INVALID_REQUEST",
            "message": "Invalid request body",
            "details": errors,
        },
    }, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
def test_credentials(request):
    """Check that the exchange accepts the supplied credentials."""
    serializer = BaseRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request_response(serializer.errors)

    try:
        data = get_execution(serializer.get_credentials()).ping()
        return Response({"message": "API credentials are valid", "data": data})
    except OrderGatewayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error testing API credentials")
        return Response(
            {"message": "Error testing API credentials"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@api_view(['POST'])
def validate_order(request):
    """
    Dry run: resolve the order and check it against the symbol's rules.

    Returns 200 with the resolved order, or 422 with the rejection and a
    suggested value. Nothing is submitted.
    """
    serializer = CreateOrderRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request_response(serializer.errors)

    try:
        use_case = get_validate_order_uc(serializer.get_credentials())
        decision = use_case.execute(serializer.get_order_request())
    except OrderGatewayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error validating order")
        return Response(
            {"message": "Error validating order"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    status_code = status.HTTP_200_OK if decision.accepted else status.HTTP_422_UNPROCESSABLE_ENTITY
    return Response(decision.to_dict(), status=status_code)


@api_view(['POST'])
def create_order(request):
    """
    Resolve, validate and submit an order.

    Request body:
        - credentials: {apiKey, apiSecret}
        - order: {symbol, side, type, quantity?, quoteOrderQty?, price?, timeInForce?}

    A rejected order is NOT submitted: the response carries the reason and
    the value to resubmit with.
    """
    serializer = CreateOrderRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request_response(serializer.errors)

    try:
        use_case = get_create_order_uc(serializer.get_credentials())
        placement = use_case.execute(serializer.get_order_request())
    except OrderGatewayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error creating order")
        return Response(
            {"message": "Error creating order"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if not placement.submitted:
        return Response(placement.decision.to_dict(), status=status.HTTP_422_UNPROCESSABLE_ENTITY)

    return Response({
        "message": "Order created successfully",
        "order": placement.decision.order.to_dict(),
        "testOrder": not getattr(settings, "TRADING_ENABLED", False),
        "data": placement.receipt,
    })


@api_view(['DELETE'])
def cancel_order(request):
    """Cancel an open order by exchange order id."""
    serializer = CancelOrderSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request_response(serializer.errors)

    try:
        use_case = get_cancel_order_uc(serializer.get_credentials())
        data = use_case.execute(
            serializer.validated_data["symbol"],
            serializer.validated_data["orderId"],
        )
        return Response({"message": "Order canceled successfully", "data": data})
    except OrderGatewayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error canceling order")
        return Response(
            {"message": "Error canceling order"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
