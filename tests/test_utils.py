"""
Unit tests for display helpers and the log panel handler
"""

import logging
import unittest
from unittest.mock import Mock

from commission_calc.calculator import evaluate
from commission_calc.utils import (
    TextWidgetHandler,
    describe_entry,
    entry_status,
    fields_with_errors,
    format_money,
)


class TestFormatting(unittest.TestCase):

    def test_format_money(self):
        self.assertEqual(format_money(1420), "$1,420.00")
        self.assertEqual(format_money(0), "$0.00")
        self.assertEqual(format_money(157.5), "$157.50")

    def test_status_of_valid_entry(self):
        entry = evaluate(1, "Ann", "10", "10", "10")
        self.assertEqual(entry_status(entry), "Valid")
        self.assertEqual(fields_with_errors(entry), set())

    def test_status_of_invalid_entry(self):
        entry = evaluate(2, "Ann", "0", "10", "200")
        self.assertEqual(
            entry_status(entry),
            "Locks must be between 1 and 70; Barrels must be between 1 and 90"
        )
        self.assertEqual(fields_with_errors(entry), {"locks", "barrels"})

    def test_describe_valid_entry(self):
        text = describe_entry(evaluate(3, "Ann", "70", "80", "90", created_at="2026-01-01T09:00:00"))
        self.assertIn("Number #3", text)
        self.assertIn("Name: Ann", text)
        self.assertIn("Sales: $7,800.00", text)
        self.assertIn("Commission: $1,420.00", text)
        self.assertIn("Recorded: 2026-01-01T09:00:00", text)

    def test_describe_invalid_entry(self):
        text = describe_entry(evaluate(4, "Ann", "0", "10", "10"))
        self.assertIn("Locks: 0 (!)", text)
        self.assertIn("Stocks: 10   ", text)
        self.assertIn("Invalid Input", text)
        self.assertNotIn("Sales:", text)


class TestTextWidgetHandler(unittest.TestCase):

    def _emit(self, handler, widget, message):
        record = logging.LogRecord("commission_calc", logging.INFO, __file__, 1, message, None, None)
        handler.emit(record)
        # run the callback scheduled through after()
        callback = widget.after.call_args[0][1]
        callback()

    def test_appends_line(self):
        widget = Mock()
        widget.index.return_value = "2.0"
        handler = TextWidgetHandler(widget, max_lines=10)
        self._emit(handler, widget, "hello")
        widget.insert.assert_called_once_with("end", "hello\n")
        widget.delete.assert_not_called()

    def test_trims_oldest_lines(self):
        widget = Mock()
        widget.index.return_value = "5.0"
        handler = TextWidgetHandler(widget, max_lines=2)
        self._emit(handler, widget, "hello")
        widget.delete.assert_called_once_with("1.0", "4.0")


if __name__ == '__main__':
    unittest.main()
