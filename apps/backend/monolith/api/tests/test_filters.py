"""
Tests for exchange filter parsing and grid arithmetic.

Filters arrive as decimal strings; every value must survive parsing exactly.
"""

from __future__ import annotations
import unittest
from decimal import Decimal

from api.application import MalformedFilter, SymbolInfo, parse_filters
from api.application.filters import ceil_to_grid, floor_to_grid, quantize_down


LOT_SIZE = {"filterType": "LOT_SIZE", "minQty": "0.00001000", "maxQty": "9000.00000000", "stepSize": "0.00001000"}
PRICE_FILTER = {"filterType": "PRICE_FILTER", "minPrice": "0.01000000", "maxPrice": "1000000.00000000", "tickSize": "0.01000000"}


class ParseFiltersTests(unittest.TestCase):
    def test_lot_size_and_price_filter_are_exact(self):
        filters = parse_filters([LOT_SIZE, PRICE_FILTER])

        self.assertEqual(filters.lot_size.min_qty, Decimal("0.00001"))
        self.assertEqual(filters.lot_size.max_qty, Decimal("9000"))
        self.assertEqual(filters.lot_size.step_size, Decimal("0.00001"))
        self.assertEqual(filters.price.tick_size, Decimal("0.01"))
        self.assertIsNone(filters.min_notional)

    def test_unknown_filters_are_ignored(self):
        filters = parse_filters([
            {"filterType": "ICEBERG_PARTS", "limit": 10},
            {"filterType": "MAX_NUM_ORDERS", "maxNumOrders": 200},
            LOT_SIZE,
        ])

        self.assertIsNotNone(filters.lot_size)
        self.assertIsNone(filters.price)

    def test_no_filters_means_no_constraints(self):
        filters = parse_filters([])

        self.assertIsNone(filters.lot_size)
        self.assertIsNone(filters.price)
        self.assertIsNone(filters.min_notional)

    def test_missing_field_is_malformed(self):
        broken = {"filterType": "LOT_SIZE", "minQty": "0.001", "maxQty": "100"}

        with self.assertRaises(MalformedFilter) as ctx:
            parse_filters([broken])
        self.assertIn("stepSize", str(ctx.exception))
        self.assertEqual(ctx.exception.filter_type, "LOT_SIZE")

    def test_unparseable_field_is_malformed(self):
        broken = dict(PRICE_FILTER, tickSize="abc")

        with self.assertRaises(MalformedFilter):
            parse_filters([broken])

    def test_negative_field_is_malformed(self):
        broken = dict(LOT_SIZE, minQty="-1")

        with self.assertRaises(MalformedFilter):
            parse_filters([broken])

    def test_duplicate_filter_is_malformed(self):
        with self.assertRaises(MalformedFilter):
            parse_filters([LOT_SIZE, LOT_SIZE])

    def test_min_notional_apply_to_market(self):
        filters = parse_filters([
            {"filterType": "MIN_NOTIONAL", "minNotional": "10.00000000", "applyToMarket": False, "avgPriceMins": 5},
        ])

        self.assertEqual(filters.min_notional.min_notional, Decimal("10"))
        self.assertFalse(filters.min_notional.apply_to_market)

    def test_notional_filter_uses_apply_min_to_market(self):
        filters = parse_filters([
            {"filterType": "NOTIONAL", "minNotional": "5.00000000", "applyMinToMarket": True,
             "maxNotional": "9000000.00000000", "applyMaxToMarket": False, "avgPriceMins": 5},
        ])

        self.assertEqual(filters.min_notional.min_notional, Decimal("5"))
        self.assertTrue(filters.min_notional.apply_to_market)


class SymbolInfoTests(unittest.TestCase):
    def test_from_exchange_payload(self):
        info = SymbolInfo.from_exchange({
            "symbol": "BTCUSDT",
            "status": "TRADING",
            "baseAsset": "BTC",
            "baseAssetPrecision": 8,
            "quoteAsset": "USDT",
            "quotePrecision": 8,
            "quoteAssetPrecision": 8,
            "orderTypes": ["LIMIT", "LIMIT_MAKER", "MARKET", "STOP_LOSS_LIMIT", "TAKE_PROFIT_LIMIT"],
            "filters": [PRICE_FILTER, LOT_SIZE],
        })

        self.assertEqual(info.symbol, "BTCUSDT")
        self.assertEqual(info.base_asset, "BTC")
        self.assertEqual(info.quote_precision, 8)
        self.assertTrue(info.is_trading)
        self.assertEqual(info.filters.lot_size.step_size, Decimal("0.00001"))
        self.assertEqual(len(info.raw_filters), 2)

    def test_halted_symbol_is_not_trading(self):
        info = SymbolInfo.from_exchange({"symbol": "LUNAUSDT", "status": "BREAK", "filters": []})

        self.assertFalse(info.is_trading)


class GridArithmeticTests(unittest.TestCase):
    def test_floor_to_grid(self):
        self.assertEqual(floor_to_grid(Decimal("0.000015"), Decimal("0.00001"), Decimal("0.00001")), Decimal("0.00001"))
        self.assertEqual(floor_to_grid(Decimal("0.00123"), Decimal("0.00001"), Decimal("0.00001")), Decimal("0.00123"))
        self.assertEqual(floor_to_grid(Decimal("49500.123"), Decimal("0.01"), Decimal("0.01")), Decimal("49500.12"))

    def test_floor_to_grid_with_offset_origin(self):
        # Grid anchored at 0.15: 0.15, 0.25, 0.35 ...
        self.assertEqual(floor_to_grid(Decimal("0.3"), Decimal("0.15"), Decimal("0.1")), Decimal("0.25"))

    def test_zero_step_leaves_value(self):
        self.assertEqual(floor_to_grid(Decimal("1.23456"), Decimal("0"), Decimal("0")), Decimal("1.23456"))

    def test_ceil_to_grid(self):
        self.assertEqual(ceil_to_grid(Decimal("0.000101"), Decimal("0.00001"), Decimal("0.00001")), Decimal("0.00011"))
        self.assertEqual(ceil_to_grid(Decimal("0.0001"), Decimal("0.00001"), Decimal("0.00001")), Decimal("0.0001"))
        self.assertEqual(ceil_to_grid(Decimal("0.000001"), Decimal("0.00001"), Decimal("0.00001")), Decimal("0.00001"))

    def test_quantize_down(self):
        self.assertEqual(quantize_down(Decimal("0.123456789"), 8), Decimal("0.12345678"))
        self.assertEqual(quantize_down(Decimal("49500.999"), 2), Decimal("49500.99"))
