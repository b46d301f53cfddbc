"""
Design (storage.py)
- Purpose: Persist the entry history and the entry-id counter as two keys of a small
           key-value store. The calculator core never touches storage; History talks
           to an EntryStore, which talks to a KeyValueStore.
- Inputs: Path (from get_history_path()) for the JSON-file store; lists of Entry for save.
- Outputs: list[Entry] / int on load; None on save.
- Side effects: Reads/writes one JSON file. On load failure returns empty values;
                on save failure logs and carries on (best effort).
- Thread-safety: Call from main thread only (e.g. after history mutations).
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import APP_DIR_NAME, DATA_DIR, ENTRIES_KEY, ENTRY_COUNT_KEY, HISTORY_FILENAME
from .models import Entry

logger = logging.getLogger(__name__)


def get_history_path(data_dir: Optional[str] = None) -> Path:
    """
    Resolve path for the history file. An explicit directory (argument or
    COMMISSION_DATA_DIR) wins; otherwise prefer the per-user app data dir so it
    survives reinstalls. Fallback to the project dir.
    """
    override = data_dir if data_dir is not None else DATA_DIR
    if override:
        return Path(override).expanduser() / HISTORY_FILENAME

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) / APP_DIR_NAME if appdata else None
    else:
        xdg = os.environ.get("XDG_DATA_HOME")
        root = Path(xdg) if xdg else Path.home() / ".local" / "share"
        base = root / "commission-calculator"

    if base is not None:
        try:
            base.mkdir(parents=True, exist_ok=True)
            return base / HISTORY_FILENAME
        except OSError:
            logger.warning(f"Cannot create data dir {base}, falling back to project dir")
    return Path(__file__).resolve().parent.parent / HISTORY_FILENAME


class KeyValueStore:
    """Interface for the opaque key-value persistence the history is written to."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store (tests, or running without a writable disk)."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Design (JsonFileStore)
    - State: every key lives in one JSON object on disk; the file is re-read on
             each get and rewritten on each set/remove.
    - Failure policy: unreadable/malformed file reads as empty; write errors are
                      logged and ignored (e.g. read-only location).
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Cannot read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.path}: expected a JSON object")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Cannot write {self.path}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class EntryStore:
    """
    Design (EntryStore)
    - Purpose: Map the history and its id counter onto the "entries" and
               "entry_count" keys of a KeyValueStore.
    - Load policy: skip records that are not dicts or cannot be parsed; a missing or
                   garbled counter reads as 0.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def load(self) -> List[Entry]:
        data = self.kv.get(ENTRIES_KEY, [])
        if not isinstance(data, list):
            logger.warning("Stored entries are not a list; starting with empty history")
            return []
        entries: List[Entry] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                entries.append(Entry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed stored entry: {item!r}")
                continue
        return entries

    def save(self, entries: List[Entry]) -> None:
        self.kv.set(ENTRIES_KEY, [e.to_dict() for e in entries])

    def load_count(self) -> int:
        raw = self.kv.get(ENTRY_COUNT_KEY, 0)
        try:
            count = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Stored entry count {raw!r} is not a number; using 0")
            return 0
        return max(count, 0)

    def save_count(self, count: int) -> None:
        self.kv.set(ENTRY_COUNT_KEY, count)

    def clear(self) -> None:
        self.kv.remove(ENTRIES_KEY)
        self.kv.remove(ENTRY_COUNT_KEY)
