"""Persistent key-value properties backing an analytics session.

A store is fully loaded on construction and rewritten in full after each
mutation. Read and write failures never reach the caller: a missing or
corrupt medium loads as an empty mapping, and a failed write leaves the
in-memory mapping authoritative for the rest of the process.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

from pyusage.environment import EnvironmentProbe, user_home_dir
from pyusage.exceptions import UsageStorageError

_logger = logging.getLogger(__name__)


def _decode(contents: str | None) -> dict[str, Any]:
    if contents is None or not contents.strip():
        return {}
    try:
        decoded = json.loads(contents)
    except json.JSONDecodeError:
        _logger.debug("Discarding corrupt property contents", exc_info=True)
        return {}
    if not isinstance(decoded, dict):
        return {}
    return decoded


def _encode(mapping: dict[str, Any]) -> str:
    """Serialize *mapping*, leaving out entries that are not JSON-compatible.

    Such entries stay in memory for the rest of the process but are never
    written, so one bad value cannot block later writes.
    """
    try:
        return json.dumps(mapping)
    except (TypeError, ValueError):
        _logger.debug("Properties contain values that cannot be stored as JSON", exc_info=True)

    storable: dict[str, Any] = {}
    for key, value in mapping.items():
        try:
            json.dumps({key: value})
        except (TypeError, ValueError):
            _logger.debug("Not persisting property %s", key)
            continue
        storable[key] = value
    return json.dumps(storable)


class PersistentProperties(ABC):
    """Abstract key-value store identified by an application name."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._map: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        """Return the value for *key*, or ``None`` if unset."""
        return self._map.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set *key* to *value*; ``None`` removes the key.

        Unchanged values are not written back to the medium.
        """
        if value is None and key not in self._map:
            return
        if key in self._map:
            current = self._map[key]
            # True == 1 in Python, but the two differ once written as JSON.
            if type(current) is type(value) and current == value:
                return

        if value is None:
            del self._map[key]
        else:
            self._map[key] = value

        try:
            self._persist(_encode(self._map))
        except UsageStorageError:
            _logger.debug("Failed to persist properties for %s", self.name, exc_info=True)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def as_dict(self) -> dict[str, Any]:
        """Shallow copy of the current mapping."""
        return dict(self._map)

    @abstractmethod
    def _persist(self, encoded: str) -> None:
        """Overwrite the medium with *encoded*.

        Implementations raise :class:`UsageStorageError` on failure.
        """


class FileProperties(PersistentProperties):
    """Properties stored as JSON in ``<document_dir>/.<name>``.

    Spaces in the name become underscores. The directory defaults to the
    user's home directory (``APPDATA`` on Windows).
    """

    def __init__(
        self,
        name: str,
        *,
        document_dir: str | Path | None = None,
        environment: EnvironmentProbe | None = None,
    ) -> None:
        super().__init__(name)
        directory = Path(document_dir) if document_dir is not None else Path(user_home_dir(environment))
        self.path = directory / f".{name.replace(' ', '_')}"

        try:
            if not self.path.exists():
                self.path.touch()
            contents = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            _logger.debug("Could not read properties from %s", self.path, exc_info=True)
            contents = None
        self._map = _decode(contents)

    def _persist(self, encoded: str) -> None:
        try:
            self.path.write_text(encoded + "\n", encoding="utf-8")
        except OSError as exc:
            raise UsageStorageError(f"Could not write {self.path}: {exc}", location=str(self.path)) from exc


class StorageProperties(PersistentProperties):
    """Properties kept in a browser-style storage entry named after the app.

    *storage* is any string-to-string mapping, typically
    ``window.localStorage`` exposed by the browser host.
    """

    def __init__(self, name: str, storage: MutableMapping[str, str]) -> None:
        super().__init__(name)
        self._storage = storage
        try:
            contents = storage.get(name)
        except Exception:  # noqa: BLE001 - host storage may be disabled
            _logger.debug("Could not read storage entry %s", name, exc_info=True)
            contents = None
        self._map = _decode(contents)

    def _persist(self, encoded: str) -> None:
        try:
            self._storage[self.name] = encoded
        except Exception as exc:  # noqa: BLE001 - quota exceeded surfaces as a host error
            raise UsageStorageError(f"Could not write storage entry {self.name}: {exc}", location=self.name) from exc


class MemoryProperties(PersistentProperties):
    """Non-durable properties; records every persisted snapshot."""

    def __init__(self, name: str, initial: dict[str, Any] | None = None) -> None:
        super().__init__(name)
        self._map = dict(initial or {})
        self.writes: list[str] = []

    def _persist(self, encoded: str) -> None:
        self.writes.append(encoded)
