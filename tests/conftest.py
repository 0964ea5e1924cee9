#!/usr/bin/env python3
"""Shared fixtures: fake OMDb responses and an in-memory watchlist"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from lib.records import SummaryRecord, DetailRecord
from lib.storage import MemoryStorage
from lib.watchlist import WatchlistStore


def make_response(payload=None, status_code=200, reason='OK', json_error=None):
    """Build a stand-in for requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.url = 'https://www.omdbapi.com/?apikey=test'
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def summary(imdb_id='tt0083658', title='Blade Runner', year='1982', poster='N/A'):
    return SummaryRecord(title=title, year=year, poster=poster, imdb_id=imdb_id)


def detail(imdb_id='tt0083658', title='Blade Runner', **kwargs):
    fields = dict(year='1982', rating='8.1', genre='Sci-Fi', director='Ridley Scott',
                  cast='Harrison Ford', plot='A blade runner must pursue replicants.',
                  poster='N/A')
    fields.update(kwargs)
    return DetailRecord(imdb_id=imdb_id, title=title, **fields)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return WatchlistStore(storage).load()


@pytest.fixture
def client():
    """OMDb client double; tests set search/get_details return values"""
    return MagicMock()
