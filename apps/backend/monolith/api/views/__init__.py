"""
API Views Package.

- orders.py: credential check, order validation, creation and cancel
- account.py: account balances
- health.py: liveness probe
"""

from . import orders
from . import account
from . import health
