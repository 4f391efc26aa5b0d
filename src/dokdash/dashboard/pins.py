# dokdash/dashboard/pins.py
"""
Persisted set of pinned entry ids.

The set lives under a single key of a key-value store as a JSON array of
strings. It is read once when the store is opened and written back on
every change. Unreadable content is discarded rather than raised.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from dokdash.core.errors import StorageCorruptionError

logger = logging.getLogger(__name__)

PIN_STORAGE_KEY = "dokdash:pinnedResources"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage:
    """String values kept in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)


def decode_pins(raw: str | None) -> list[str]:
    """Decode stored pins; raises ``StorageCorruptionError`` on bad content."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise StorageCorruptionError(f"Stored pins are not valid JSON: {exc}") from exc
    if not isinstance(parsed, list):
        raise StorageCorruptionError(
            f"Stored pins must be a JSON array, got {type(parsed).__name__}"
        )
    return [item for item in parsed if isinstance(item, str)]


class PinStore:
    """Insertion-ordered set of pinned ids backed by a ``KeyValueStorage``."""

    def __init__(self, storage: KeyValueStorage, key: str = PIN_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._ids: list[str] = self._restore()

    def _restore(self) -> list[str]:
        try:
            ids = decode_pins(self._storage.get_item(self._key))
        except (StorageCorruptionError, OSError, ValueError) as exc:
            logger.warning("Failed to restore pinned resources: %s", exc)
            return []
        # Duplicates in storage collapse to their first occurrence
        return list(dict.fromkeys(ids))

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, json.dumps(self._ids))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to persist pinned resources: %s", exc)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, entry_id: str) -> bool:
        """Flip membership of ``entry_id``; returns whether it is now pinned."""
        if entry_id in self._ids:
            self._ids.remove(entry_id)
            pinned = False
        else:
            self._ids.append(entry_id)
            pinned = True
        self._persist()
        return pinned

    def pin(self, entry_id: str) -> None:
        if entry_id not in self._ids:
            self.toggle(entry_id)

    def unpin(self, entry_id: str) -> None:
        if entry_id in self._ids:
            self.toggle(entry_id)
