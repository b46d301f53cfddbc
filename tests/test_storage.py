"""
Unit tests for persistence: JSON file store and the entries/counter mapping
"""

import json
import tempfile
import unittest
from pathlib import Path

from commission_calc.config import ENTRIES_KEY, ENTRY_COUNT_KEY, HISTORY_FILENAME
from commission_calc.models import Entry
from commission_calc.repository import History
from commission_calc.storage import EntryStore, JsonFileStore, MemoryStore, get_history_path


class TestJsonFileStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.path = self.dir / HISTORY_FILENAME
        self.store = JsonFileStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_reads_default(self):
        self.assertEqual(self.store.get("entries", []), [])

    def test_set_get_remove(self):
        self.store.set("entry_count", 3)
        self.store.set("entries", [{"id": 1}])
        self.assertEqual(self.store.get("entry_count"), 3)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"entry_count": 3, "entries": [{"id": 1}]})
        self.store.remove("entry_count")
        self.assertIsNone(self.store.get("entry_count"))
        self.assertEqual(self.store.get("entries"), [{"id": 1}])

    def test_corrupt_file_reads_empty(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("commission_calc.storage", level="WARNING"):
            self.assertIsNone(self.store.get("entries"))

    def test_non_object_file_reads_empty(self):
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        with self.assertLogs("commission_calc.storage", level="WARNING"):
            self.assertIsNone(self.store.get("entries"))

    def test_write_failure_is_logged_not_raised(self):
        # a directory where the file should be makes both read and write fail
        store = JsonFileStore(self.dir)
        with self.assertLogs("commission_calc.storage", level="WARNING") as logs:
            store.set("entry_count", 1)
        self.assertTrue(any("Cannot write" in line for line in logs.output))

    def test_history_round_trip_through_file(self):
        history = History(EntryStore(self.store))
        history.record("Ann", "10", "10", "10")
        history.record("", "abc", "10", "10")

        reloaded = History(EntryStore(JsonFileStore(self.path)))
        self.assertEqual(reloaded.entries(), history.entries())
        self.assertEqual(reloaded.next_id, 3)
        self.assertEqual(reloaded.totals(), history.totals())


class TestEntryStore(unittest.TestCase):

    def test_empty_store(self):
        store = EntryStore(MemoryStore())
        self.assertEqual(store.load(), [])
        self.assertEqual(store.load_count(), 0)

    def test_serialized_shape(self):
        kv = MemoryStore()
        entry = Entry(1, "Ann", 10, 10, 10, 1000.0, 100.0, True, (), "2026-01-01T00:00:00")
        EntryStore(kv).save([entry])
        self.assertEqual(kv.get(ENTRIES_KEY), [{
            "id": 1,
            "name": "Ann",
            "locks": 10,
            "stocks": 10,
            "barrels": 10,
            "sales": 1000.0,
            "commission": 100.0,
            "isValid": True,
            "errors": [],
            "createdAt": "2026-01-01T00:00:00",
        }])

    def test_malformed_records_are_skipped(self):
        good = {"id": 2, "name": "Bob", "locks": 1, "stocks": 1, "barrels": 1,
                "sales": 100, "commission": 10, "isValid": True, "errors": []}
        kv = MemoryStore({ENTRIES_KEY: [{"id": "x"}, "junk", {"name": "no id"}, good]})
        entries = EntryStore(kv).load()
        self.assertEqual([e.id for e in entries], [2])
        self.assertEqual(entries[0].sales, 100.0)

    def test_entries_not_a_list(self):
        kv = MemoryStore({ENTRIES_KEY: {"id": 1}})
        self.assertEqual(EntryStore(kv).load(), [])

    def test_validity_follows_errors_not_stored_flag(self):
        kv = MemoryStore({ENTRIES_KEY: [
            {"id": 1, "sales": 500, "commission": 50, "isValid": "false", "errors": ["x"]},
            {"id": 2, "sales": 100, "commission": 10, "isValid": False, "errors": []},
        ]})
        first, second = EntryStore(kv).load()
        self.assertFalse(first.is_valid)
        self.assertEqual((first.sales, first.commission), (0.0, 0.0))
        self.assertTrue(second.is_valid)
        self.assertEqual(History(EntryStore(kv)).totals(), (100.0, 10.0))

    def test_record_without_optional_fields(self):
        kv = MemoryStore({ENTRIES_KEY: [{"id": 4, "errors": ["Please enter Locks"]}]})
        entry = EntryStore(kv).load()[0]
        self.assertFalse(entry.is_valid)
        self.assertEqual(entry.created_at, "")

    def test_garbled_count(self):
        self.assertEqual(EntryStore(MemoryStore({ENTRY_COUNT_KEY: "abc"})).load_count(), 0)
        self.assertEqual(EntryStore(MemoryStore({ENTRY_COUNT_KEY: -3})).load_count(), 0)
        self.assertEqual(EntryStore(MemoryStore({ENTRY_COUNT_KEY: "7"})).load_count(), 7)

    def test_clear_removes_both_keys(self):
        kv = MemoryStore({ENTRIES_KEY: [], ENTRY_COUNT_KEY: 4})
        EntryStore(kv).clear()
        self.assertIsNone(kv.get(ENTRIES_KEY))
        self.assertIsNone(kv.get(ENTRY_COUNT_KEY))


class TestHistoryPath(unittest.TestCase):

    def test_explicit_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(get_history_path(tmp), Path(tmp) / HISTORY_FILENAME)


if __name__ == '__main__':
    unittest.main()
