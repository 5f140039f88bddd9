"""
Tests for the trading-rule validators.

Covers the LOT_SIZE, PRICE_FILTER and minimum-notional rules:
- Exact decimal arithmetic (no float modulo artifacts)
- Suggestions round DOWN to the grid
- Re-validating a suggestion is always VALID
"""

from __future__ import annotations
import unittest
from decimal import Decimal

from api.application import (
    LotSizeFilter,
    MinNotionalFilter,
    OrderType,
    PriceFilter,
    ResolvedOrder,
    Side,
    TimeInForce,
    ValidationStatus,
    validate_min_notional,
    validate_price,
    validate_quantity,
)
from api.application.validation import (
    NOTIONAL_TOO_SMALL,
    PRICE_OUT_OF_RANGE,
    PRICE_TICK_MISALIGNED,
    QUANTITY_OUT_OF_RANGE,
    QUANTITY_STEP_MISALIGNED,
)

BTC_LOT = LotSizeFilter(min_qty=Decimal("0.00001"), max_qty=Decimal("9000"), step_size=Decimal("0.00001"))
BTC_PRICE = PriceFilter(min_price=Decimal("0.01"), max_price=Decimal("1000000"), tick_size=Decimal("0.01"))


class ValidateQuantityTests(unittest.TestCase):
    def test_no_filter_is_valid(self):
        self.assertTrue(validate_quantity(Decimal("0.123456789")).is_valid)

    def test_quantity_on_step_is_valid(self):
        outcome = validate_quantity(Decimal("0.00001"), BTC_LOT)

        self.assertEqual(outcome.status, ValidationStatus.VALID)
        self.assertIsNone(outcome.suggested_value)

    def test_misaligned_quantity_suggests_step_below(self):
        outcome = validate_quantity(Decimal("0.000015"), BTC_LOT)

        self.assertEqual(outcome.status, ValidationStatus.INVALID)
        self.assertEqual(outcome.rejection.kind, QUANTITY_STEP_MISALIGNED)
        self.assertEqual(outcome.suggested_value, Decimal("0.00001"))
        self.assertIn("step size 0.00001", outcome.reason)

    def test_below_minimum_suggests_minimum(self):
        outcome = validate_quantity(Decimal("0.000001"), BTC_LOT)

        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.rejection.kind, QUANTITY_OUT_OF_RANGE)
        self.assertEqual(outcome.suggested_value, Decimal("0.00001"))

    def test_above_maximum_suggests_maximum(self):
        outcome = validate_quantity(Decimal("9000.5"), BTC_LOT)

        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.rejection.kind, QUANTITY_OUT_OF_RANGE)
        self.assertEqual(outcome.suggested_value, Decimal("9000"))

    def test_step_counted_from_minimum(self):
        lot = LotSizeFilter(min_qty=Decimal("0.15"), max_qty=Decimal("100"), step_size=Decimal("0.1"))

        self.assertTrue(validate_quantity(Decimal("0.25"), lot).is_valid)
        outcome = validate_quantity(Decimal("0.3"), lot)
        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.suggested_value, Decimal("0.25"))

    def test_zero_step_disables_step_check(self):
        lot = LotSizeFilter(min_qty=Decimal("0.001"), max_qty=Decimal("100"), step_size=Decimal("0"))

        self.assertTrue(validate_quantity(Decimal("0.0012345"), lot).is_valid)

    def test_no_float_artifacts(self):
        # 0.1 + 0.2 style values that break with binary floats
        lot = LotSizeFilter(min_qty=Decimal("0.1"), max_qty=Decimal("1000"), step_size=Decimal("0.1"))

        self.assertTrue(validate_quantity(Decimal("0.3"), lot).is_valid)
        self.assertTrue(validate_quantity(Decimal("0.7"), lot).is_valid)

    def test_suggestion_is_always_accepted(self):
        for quantity in ("0.000015", "0.000001", "9000.5", "1.234567", "0.00001999"):
            outcome = validate_quantity(Decimal(quantity), BTC_LOT)
            if outcome.is_valid:
                continue
            with self.subTest(quantity=quantity):
                self.assertTrue(validate_quantity(outcome.suggested_value, BTC_LOT).is_valid)
                self.assertLessEqual(outcome.suggested_value, max(Decimal(quantity), BTC_LOT.min_qty))

    def test_rejection_serializes_decimal_strings(self):
        outcome = validate_quantity(Decimal("0.000015"), BTC_LOT)

        payload = outcome.rejection.to_dict()
        self.assertEqual(payload["suggestedValue"], "0.00001")
        self.assertEqual(payload["field"], "quantity")


class ValidatePriceTests(unittest.TestCase):
    def test_price_on_tick_is_valid(self):
        self.assertTrue(validate_price(Decimal("49500.12"), BTC_PRICE).is_valid)

    def test_misaligned_price_suggests_tick_below(self):
        outcome = validate_price(Decimal("49500.125"), BTC_PRICE)

        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.rejection.kind, PRICE_TICK_MISALIGNED)
        self.assertEqual(outcome.suggested_value, Decimal("49500.12"))
        self.assertTrue(validate_price(outcome.suggested_value, BTC_PRICE).is_valid)

    def test_below_minimum_price(self):
        outcome = validate_price(Decimal("0.001"), BTC_PRICE)

        self.assertEqual(outcome.rejection.kind, PRICE_OUT_OF_RANGE)
        self.assertEqual(outcome.suggested_value, Decimal("0.01"))

    def test_above_maximum_price(self):
        outcome = validate_price(Decimal("2000000"), BTC_PRICE)

        self.assertEqual(outcome.rejection.kind, PRICE_OUT_OF_RANGE)
        self.assertEqual(outcome.suggested_value, Decimal("1000000"))

    def test_zero_bounds_and_tick_disable_rules(self):
        unbounded = PriceFilter(min_price=Decimal("0"), max_price=Decimal("0"), tick_size=Decimal("0"))

        self.assertTrue(validate_price(Decimal("123456789.123456789"), unbounded).is_valid)


def _limit(quantity: str, price: str) -> ResolvedOrder:
    return ResolvedOrder(
        symbol="BTCUSDT",
        side=Side.BUY,
        order_type=OrderType.LIMIT,
        quantity=Decimal(quantity),
        price=Decimal(price),
        time_in_force=TimeInForce.GTC,
    )


class ValidateMinNotionalTests(unittest.TestCase):
    def setUp(self):
        self.min_notional = MinNotionalFilter(min_notional=Decimal("10"))

    def test_no_filter_is_valid(self):
        self.assertTrue(validate_min_notional(_limit("0.00001", "1")).is_valid)

    def test_limit_order_above_minimum(self):
        self.assertTrue(validate_min_notional(_limit("0.001", "50000"), self.min_notional).is_valid)

    def test_limit_order_below_minimum_suggests_quantity(self):
        outcome = validate_min_notional(_limit("0.0001", "50000"), self.min_notional, lot_size=BTC_LOT)

        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.rejection.kind, NOTIONAL_TOO_SMALL)
        self.assertEqual(outcome.rejection.field, "quantity")
        self.assertEqual(outcome.suggested_value, Decimal("0.0002"))
        self.assertTrue(
            validate_min_notional(_limit("0.0002", "50000"), self.min_notional, lot_size=BTC_LOT).is_valid
        )

    def test_market_quote_order_checked_by_spend(self):
        order = ResolvedOrder(
            symbol="BTCUSDT", side=Side.BUY, order_type=OrderType.MARKET, quote_order_qty=Decimal("5")
        )

        outcome = validate_min_notional(order, self.min_notional)

        self.assertFalse(outcome.is_valid)
        self.assertEqual(outcome.rejection.field, "quoteOrderQty")
        self.assertEqual(outcome.suggested_value, Decimal("10"))

    def test_market_order_exempt_when_filter_not_applied_to_market(self):
        order = ResolvedOrder(
            symbol="BTCUSDT", side=Side.BUY, order_type=OrderType.MARKET, quote_order_qty=Decimal("5")
        )

        outcome = validate_min_notional(order, MinNotionalFilter(Decimal("10"), apply_to_market=False))

        self.assertTrue(outcome.is_valid)

    def test_market_quantity_order_uses_reference_price(self):
        order = ResolvedOrder(
            symbol="BTCUSDT", side=Side.SELL, order_type=OrderType.MARKET, quantity=Decimal("0.0001")
        )

        self.assertTrue(validate_min_notional(order, self.min_notional).is_valid)
        outcome = validate_min_notional(order, self.min_notional, reference_price=Decimal("50000"))
        self.assertFalse(outcome.is_valid)
