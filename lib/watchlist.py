#!/usr/bin/env python3
"""
lib/watchlist.py - Ordered, de-duplicated watchlist mirrored to storage

The whole collection is serialized on every mutation (no incremental diffing).
Unreadable persisted data is treated as an empty watchlist: there is nothing
the user could do to recover it.
"""

import json
import logging
from typing import Iterator, List, Union

from lib.constants import WATCHLIST_KEY
from lib.records import SummaryRecord, WatchlistEntry

logger = logging.getLogger(__name__)


class WatchlistStore:
    """In-memory watchlist owning its persisted copy under a fixed key"""

    def __init__(self, storage, key: str = WATCHLIST_KEY):
        self.storage = storage
        self.key = key
        self._entries: List[WatchlistEntry] = []

    def load(self) -> 'WatchlistStore':
        """Replace the in-memory collection with the persisted one"""
        self._entries = self._read()
        logger.info(f"Loaded watchlist with {len(self._entries)} entries")
        return self

    def _read(self) -> List[WatchlistEntry]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored watchlist is not valid JSON ({e}); starting empty")
            return []
        if not isinstance(items, list):
            logger.warning("Stored watchlist is not a list; starting empty")
            return []

        entries: List[WatchlistEntry] = []
        seen = set()
        for item in items:
            if not isinstance(item, dict) or not item.get('imdbID'):
                logger.debug(f"Skipping malformed watchlist item: {item!r}")
                continue
            entry = WatchlistEntry.from_omdb(item)
            if entry.imdb_id in seen:
                continue
            seen.add(entry.imdb_id)
            entries.append(entry)
        return entries

    def save(self):
        """Persist the full collection"""
        payload = json.dumps([e.to_omdb() for e in self._entries])
        self.storage.set_item(self.key, payload)

    def add(self, record: Union[SummaryRecord, WatchlistEntry]) -> bool:
        """Append a movie unless its id is already saved. Returns True if added."""
        if self.contains(record.imdb_id):
            return False
        if isinstance(record, SummaryRecord):
            record = WatchlistEntry.from_summary(record)
        self._entries.append(record)
        self.save()
        logger.info(f"Added to watchlist: {record.title} ({record.imdb_id})")
        return True

    def remove(self, imdb_id: str) -> int:
        """Remove every entry with this id. Returns how many were removed."""
        kept = [e for e in self._entries if e.imdb_id != imdb_id]
        removed = len(self._entries) - len(kept)
        if removed:
            self._entries = kept
            self.save()
            logger.info(f"Removed from watchlist: {imdb_id}")
        return removed

    def contains(self, imdb_id: str) -> bool:
        return any(e.imdb_id == imdb_id for e in self._entries)

    def all(self) -> List[WatchlistEntry]:
        """Entries in display (insertion) order"""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WatchlistEntry]:
        return iter(self.all())
