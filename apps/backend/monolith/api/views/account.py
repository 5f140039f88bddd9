"""
Account endpoints.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from api.application import OrderGatewayError, format_decimal
from api.application.wiring import get_execution
from api.serializers import BalanceRequestSerializer
from .orders import error_response, invalid_request_response

logger = logging.getLogger(__name__)


def _balance_to_dict(balance: dict) -> dict:
    return {
        "asset": balance["asset"],
        "free": format_decimal(balance["free"]),
        "locked": format_decimal(balance["locked"]),
    }


@api_view(['POST'])
def account_balance(request):
    """
    Get account balance for all assets or a specific asset.

    Request body:
        - credentials: {apiKey, apiSecret}
        - asset: Optional specific asset (e.g., 'USDT', 'BTC')
    """
    serializer = BalanceRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request_response(serializer.errors)

    try:
        execution = get_execution(serializer.get_credentials())
        balance = execution.get_account_balance(serializer.validated_data.get("asset"))
    except OrderGatewayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error fetching account balance")
        return Response(
            {"message": "Error fetching account balance"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if "balances" in balance:
        data = {"balances": [_balance_to_dict(b) for b in balance["balances"]]}
    else:
        data = _balance_to_dict(balance)
    return Response({"message": "Account balance fetched successfully", "data": data})
