#!/usr/bin/env python3
"""
Test suite for lib/watchlist.py - de-duplication, ordering and persistence
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from lib.constants import WATCHLIST_KEY
from lib.records import WatchlistEntry
from lib.storage import MemoryStorage, JsonFileStorage
from lib.watchlist import WatchlistStore

from conftest import summary


class TestAdd:
    """add() appends once per id and persists"""

    def test_add_new_movie(self, store, storage):
        assert store.add(summary()) is True
        assert len(store) == 1
        assert store.contains('tt0083658')
        assert storage.writes == 1

    def test_add_same_id_twice_keeps_one(self, store, storage):
        store.add(summary())
        assert store.add(summary(title='Blade Runner (Final Cut)')) is False
        assert len(store) == 1
        assert store.all()[0].title == 'Blade Runner'
        assert storage.writes == 1

    def test_summary_converted_to_entry(self, store):
        store.add(summary(poster='https://img/poster.jpg'))
        entry = store.all()[0]
        assert isinstance(entry, WatchlistEntry)
        assert entry.poster == 'https://img/poster.jpg'

    def test_insertion_order_preserved(self, store):
        for imdb_id in ('tt3', 'tt1', 'tt2'):
            store.add(summary(imdb_id=imdb_id))
        assert [e.imdb_id for e in store.all()] == ['tt3', 'tt1', 'tt2']


class TestRemove:
    """remove() drops matching entries and persists"""

    def test_remove_present_id(self, store, storage):
        store.add(summary('tt1'))
        store.add(summary('tt2'))
        writes = storage.writes

        assert store.remove('tt1') == 1
        assert len(store) == 1
        assert not store.contains('tt1')
        assert storage.writes == writes + 1
        persisted = json.loads(storage.get_item(WATCHLIST_KEY))
        assert [m['imdbID'] for m in persisted] == ['tt2']

    def test_remove_absent_id_is_noop(self, store, storage):
        store.add(summary('tt1'))
        writes = storage.writes

        assert store.remove('tt999') == 0
        assert len(store) == 1
        assert storage.writes == writes

    def test_remove_on_empty_watchlist(self, store, storage):
        assert store.remove('tt1') == 0
        assert storage.writes == 0


class TestLoad:
    """load() restores persisted order and tolerates bad data"""

    def test_round_trip_preserves_order(self, storage):
        first = WatchlistStore(storage).load()
        for imdb_id in ('tt5', 'tt2', 'tt9'):
            first.add(summary(imdb_id=imdb_id, title=f"Film {imdb_id}"))

        second = WatchlistStore(storage).load()
        assert second.all() == first.all()

    def test_reads_browser_format(self):
        raw = json.dumps([
            {'Title': 'Alien', 'Year': '1979', 'Poster': 'N/A', 'imdbID': 'tt0078748'},
            {'Title': 'Heat', 'Year': '1995', 'Poster': 'https://img/heat.jpg', 'imdbID': 'tt0113277'},
        ])
        store = WatchlistStore(MemoryStorage({WATCHLIST_KEY: raw})).load()
        assert [e.title for e in store.all()] == ['Alien', 'Heat']

    def test_missing_key_is_empty(self, storage):
        assert len(WatchlistStore(storage).load()) == 0

    @pytest.mark.parametrize("raw", ['{not json', '{"Title": "x"}', '42', 'null'])
    def test_unparseable_data_is_empty(self, raw):
        store = WatchlistStore(MemoryStorage({WATCHLIST_KEY: raw})).load()
        assert store.all() == []

    def test_skips_items_without_id_and_duplicates(self):
        raw = json.dumps([
            {'Title': 'No id'},
            'garbage',
            {'Title': 'Alien', 'Year': '1979', 'Poster': 'N/A', 'imdbID': 'tt1'},
            {'Title': 'Alien again', 'Year': '1979', 'Poster': 'N/A', 'imdbID': 'tt1'},
        ])
        store = WatchlistStore(MemoryStorage({WATCHLIST_KEY: raw})).load()
        assert [e.title for e in store.all()] == ['Alien']


class TestFileBackedWatchlist:
    """WatchlistStore on JsonFileStorage survives a restart"""

    def test_survives_restart(self, tmp_path):
        path = tmp_path / 'nested' / 'watchlist.json'
        store = WatchlistStore(JsonFileStorage(path)).load()
        store.add(summary('tt1', title='Alien'))
        store.add(summary('tt2', title='Heat'))
        store.remove('tt1')

        reloaded = WatchlistStore(JsonFileStorage(path)).load()
        assert [e.title for e in reloaded.all()] == ['Heat']

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / 'watchlist.json'
        path.write_text('<<<', encoding='utf-8')
        store = WatchlistStore(JsonFileStorage(path)).load()
        assert len(store) == 0

        store.add(summary('tt1'))
        assert WatchlistStore(JsonFileStorage(path)).load().contains('tt1')
