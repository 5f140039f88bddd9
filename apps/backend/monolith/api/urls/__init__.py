# api/urls/__init__.py
"""
URL configuration for the order gateway API.

Orders:
- POST   /api/orders/test/      - Check exchange credentials
- POST   /api/orders/validate/  - Resolve and validate an order (dry run)
- POST   /api/orders/create/    - Resolve, validate and submit an order
- DELETE /api/orders/cancel/    - Cancel an open order

Account:
- POST   /api/account/balance/  - Account balances
"""

from django.urls import path

from ..views.orders import test_credentials, validate_order, create_order, cancel_order
from ..views.account import account_balance

urlpatterns = [
    # ==========================================
    # ORDER ROUTES
    # ==========================================
    path('orders/test/', test_credentials, name='orders_test'),
    path('orders/validate/', validate_order, name='orders_validate'),
    path('orders/create/', create_order, name='orders_create'),
    path('orders/cancel/', cancel_order, name='orders_cancel'),

    # ==========================================
    # ACCOUNT ROUTES
    # ==========================================
    path('account/balance/', account_balance, name='account_balance'),
]
