"""
Small key-value stores for state that must outlive a single delivery, such as
the webhook dedup window. Values are scoped by workflow/node identity.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Protocol

logger = logging.getLogger(__name__)


class StaticDataStore(Protocol):
    def get(self, scope: str, key: str, default: Any = None) -> Any: ...

    def put(self, scope: str, key: str, value: Any) -> None: ...


class InMemoryStaticDataStore:
    """Lives as long as the process."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}

    def get(self, scope: str, key: str, default: Any = None) -> Any:
        return self._data.get(scope, {}).get(key, default)

    def put(self, scope: str, key: str, value: Any) -> None:
        self._data.setdefault(scope, {})[key] = value


class JsonFileStaticDataStore:
    """Keeps every scope in one JSON file, rewritten on each put()."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._data: Dict[str, Dict[str, Any]] = self._load()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read static data from %s, starting empty: %s", self._path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Static data in %s is not a JSON object, starting empty.", self._path)
            return {}
        return raw

    def get(self, scope: str, key: str, default: Any = None) -> Any:
        return self._data.get(scope, {}).get(key, default)

    def put(self, scope: str, key: str, value: Any) -> None:
        self._data.setdefault(scope, {})[key] = value
        tmp_path = f"{self._path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
        os.replace(tmp_path, self._path)
