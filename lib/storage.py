#!/usr/bin/env python3
"""
Key-value storage for persisted UI state

JsonFileStorage keeps every key in one JSON object on disk, the way the browser
version kept its watchlist in localStorage. MemoryStorage is the throwaway
equivalent for tests and sessions that should not touch disk.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str):
        self.items[key] = value
        self.writes += 1

    def remove_item(self, key: str):
        self.items.pop(key, None)


class JsonFileStorage:
    """Persistent key-value storage backed by a single JSON file"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.items = self._load()

    def _load(self) -> Dict[str, str]:
        """Load all keys from the JSON file"""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read storage file {self.path}: {e}. Starting fresh.")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object. Starting fresh.")
            return {}

        logger.debug(f"Loaded {len(data)} keys from {self.path}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self):
        """Write all keys back to the JSON file"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self.items, f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved {len(self.items)} keys to {self.path}")

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str):
        self.items[key] = value
        self._save()

    def remove_item(self, key: str):
        if self.items.pop(key, None) is not None:
            self._save()
