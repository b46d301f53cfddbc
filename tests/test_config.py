"""
Unit tests for environment overrides in config
"""

import os
import unittest
from unittest.mock import patch

from commission_calc.config import COMMISSION_TIERS, UNIT_PRICES, UNIT_RANGES, env_flag, env_log_level


class TestEnvFlag(unittest.TestCase):

    @patch.dict(os.environ, {"COMMISSION_TEST_FLAG": "false"})
    def test_false_values(self):
        self.assertFalse(env_flag("COMMISSION_TEST_FLAG", True))

    @patch.dict(os.environ, {"COMMISSION_TEST_FLAG": " Yes "})
    def test_true_values(self):
        self.assertTrue(env_flag("COMMISSION_TEST_FLAG", False))

    @patch.dict(os.environ, {"COMMISSION_TEST_FLAG": "maybe"})
    def test_unknown_falls_back(self):
        self.assertTrue(env_flag("COMMISSION_TEST_FLAG", True))
        self.assertFalse(env_flag("COMMISSION_TEST_FLAG", False))

    def test_unset_uses_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(env_flag("COMMISSION_TEST_FLAG", True))


class TestEnvLogLevel(unittest.TestCase):

    @patch.dict(os.environ, {"COMMISSION_TEST_LEVEL": "debug"})
    def test_known_level(self):
        self.assertEqual(env_log_level("COMMISSION_TEST_LEVEL"), "DEBUG")

    @patch.dict(os.environ, {"COMMISSION_TEST_LEVEL": "loud"})
    def test_unknown_level(self):
        self.assertEqual(env_log_level("COMMISSION_TEST_LEVEL"), "INFO")


class TestConstants(unittest.TestCase):

    def test_prices_and_ranges(self):
        self.assertEqual(UNIT_PRICES, {"locks": 45, "stocks": 30, "barrels": 25})
        self.assertEqual(UNIT_RANGES, {"locks": (1, 70), "stocks": (1, 80), "barrels": (1, 90)})

    def test_tiers_end_unbounded(self):
        self.assertIsNone(COMMISSION_TIERS[-1][0])
        bounds = [upper for upper, _ in COMMISSION_TIERS[:-1]]
        self.assertEqual(bounds, sorted(bounds))


if __name__ == '__main__':
    unittest.main()
