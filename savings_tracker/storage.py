"""
Savings Tracker - Persistence Module.

This module provides the local key-value store that holds the savings
goal and balance between runs. The JSON file store is read once when it
is created and rewritten on every save.

Classes:
    PersistenceStore: Key-value store contract with typed loaders.
    InMemoryStore: Dictionary-backed store for tests and throwaway sessions.
    JsonFileStore: Store backed by a JSON document on disk.
"""

import json
import logging
import math
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class PersistenceStore(ABC):
    """
    Key-value store contract.

    Subclasses provide ``_get`` and ``_write``. The typed loaders follow
    the behaviour of platform preference stores: a missing or mistyped
    value yields the caller's default instead of an error.
    """

    def load_string(self, key: str, default: str = "") -> str:
        """
        Loads a string value.

        Args:
            key: Store key.
            default: Value returned when the key is absent or not a string.

        Returns:
            Stored string or default.
        """
        value = self._get(key)
        if isinstance(value, str):
            return value
        if value is not None:
            logger.warning("Ignoring non-string value for %r: %r", key, value)
        return default

    def load_float(self, key: str, default: float = 0.0) -> float:
        """
        Loads a floating-point value.

        Numbers and numeric strings are accepted. Booleans, other types
        and non-finite numbers yield the default.

        Args:
            key: Store key.
            default: Value returned when the key is absent or not numeric.

        Returns:
            Stored float or default.
        """
        value = self._get(key)
        if value is None:
            return default

        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            logger.warning("Ignoring non-numeric value for %r: %r", key, value)
            return default

        try:
            number = float(value)
        except (ValueError, OverflowError):
            logger.warning("Ignoring non-numeric value for %r: %r", key, value)
            return default

        if not math.isfinite(number):
            logger.warning("Ignoring non-finite value for %r: %r", key, value)
            return default

        return number

    def save(self, key: str, value: Any) -> None:
        """
        Saves a single value.

        Args:
            key: Store key.
            value: JSON-compatible value.
        """
        self.save_many({key: value})

    def save_many(self, values: Mapping[str, Any]) -> None:
        """
        Saves several values with a single write.

        Args:
            values: Mapping of store keys to JSON-compatible values.
        """
        self._write(dict(values))

    @abstractmethod
    def _get(self, key: str) -> Any:
        """Returns the raw stored value, or None if the key is absent."""

    @abstractmethod
    def _write(self, values: Dict[str, Any]) -> None:
        """Persists the given key-value pairs."""


class InMemoryStore(PersistenceStore):
    """
    Dictionary-backed store.

    Example:
        >>> store = InMemoryStore({"savingsGoal": "1000"})
        >>> store.load_string("savingsGoal")
        '1000'
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self.data: Dict[str, Any] = dict(initial or {})
        self.write_count = 0

    def _get(self, key: str) -> Any:
        return self.data.get(key)

    def _write(self, values: Dict[str, Any]) -> None:
        self.data.update(values)
        self.write_count += 1


class JsonFileStore(PersistenceStore):
    """
    Store backed by a flat JSON object on disk.

    The file is read once at construction. A missing file is an empty
    store; an unreadable or malformed file is logged and treated as
    empty. Writes replace the whole file atomically.

    Example:
        >>> store = JsonFileStore("savings.json")
        >>> store.save("currentSavings", 250.0)
        >>> JsonFileStore("savings.json").load_float("currentSavings")
        250.0
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialises the store and loads the file if it exists.

        Args:
            file_path: Path to the JSON document.
        """
        self.file_path = Path(file_path).expanduser()
        self._data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        """
        Reads the JSON document from disk.

        Returns:
            Stored key-value pairs, or an empty dict if the file is
            missing or unusable.
        """
        if not self.file_path.exists():
            logger.debug("No store file at %s; starting empty", self.file_path)
            return {}

        try:
            data = json.loads(self.file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not read %s (%s); starting empty", self.file_path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Store file %s is not a JSON object; starting empty", self.file_path)
            return {}

        return data

    def _get(self, key: str) -> Any:
        return self._data.get(key)

    def _write(self, values: Dict[str, Any]) -> None:
        """
        Merges values and rewrites the file.

        Raises:
            OSError: If the file cannot be written.
            ValueError: If a value is NaN or infinite.
        """
        data = dict(self._data)
        data.update(values)

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.file_path.parent,
            prefix=f".{self.file_path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True, allow_nan=False)
            os.replace(tmp_name, self.file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self._data = data
        logger.debug("Saved %s to %s", sorted(values), self.file_path)
