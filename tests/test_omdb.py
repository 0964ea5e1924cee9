#!/usr/bin/env python3
"""Test suite for lib/omdb.py - request building and outcome classification"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from lib.constants import MSG_HTTP_ERROR, MSG_NETWORK_ERROR
from lib.omdb import OMDbClient, RESULTS, NO_MATCH, ERROR

from conftest import make_response


SEARCH_PAYLOAD = {
    'Response': 'True',
    'totalResults': '2',
    'Search': [
        {'Title': 'Alien', 'Year': '1979', 'imdbID': 'tt0078748', 'Type': 'movie', 'Poster': 'N/A'},
        {'Title': 'Aliens', 'Year': '1986', 'imdbID': 'tt0090605', 'Type': 'movie',
         'Poster': 'https://img/aliens.jpg'},
    ],
}

DETAIL_PAYLOAD = {
    'Response': 'True',
    'Title': 'Alien',
    'Year': '1979',
    'imdbRating': '8.5',
    'Genre': 'Horror, Sci-Fi',
    'Director': 'Ridley Scott',
    'Actors': 'Sigourney Weaver, Tom Skerritt',
    'Plot': 'The crew of a commercial spacecraft encounters a deadly lifeform.',
    'Poster': 'N/A',
    'imdbID': 'tt0078748',
}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def omdb(session):
    return OMDbClient(api_key='test-key', session=session, timeout=5)


class TestSearch:
    """search() classification into results / no_match / error"""

    def test_builds_request(self, omdb, session):
        session.get.return_value = make_response(SEARCH_PAYLOAD)
        omdb.search('alien')

        args, kwargs = session.get.call_args
        assert args[0] == 'https://www.omdbapi.com/'
        assert kwargs['params'] == {'apikey': 'test-key', 's': 'alien', 'type': 'movie'}
        assert kwargs['timeout'] == 5

    def test_results_in_order(self, omdb, session):
        session.get.return_value = make_response(SEARCH_PAYLOAD)
        outcome = omdb.search('alien')

        assert outcome.status == RESULTS
        assert [r.imdb_id for r in outcome.records] == ['tt0078748', 'tt0090605']
        assert outcome.records[0].poster == 'N/A'
        assert outcome.records[1].year == '1986'

    def test_no_match_is_not_error(self, omdb, session):
        session.get.return_value = make_response({'Response': 'False', 'Error': 'Movie not found!'})
        outcome = omdb.search('zzzzqqq')

        assert outcome.status == NO_MATCH
        assert outcome.message is None
        assert outcome.records == []
        assert outcome.detail == 'Movie not found!'

    def test_repeated_ids_keep_first(self, omdb, session):
        payload = {
            'Response': 'True',
            'Search': [
                {'Title': 'Batman', 'Year': '1989', 'imdbID': 'tt0096895', 'Poster': 'N/A'},
                {'Title': 'Batman Begins', 'Year': '2005', 'imdbID': 'tt0372784', 'Poster': 'N/A'},
                {'Title': 'Batman (repeat)', 'Year': '1989', 'imdbID': 'tt0096895', 'Poster': 'N/A'},
            ],
        }
        session.get.return_value = make_response(payload)
        outcome = omdb.search('batman')

        assert outcome.status == RESULTS
        assert [r.imdb_id for r in outcome.records] == ['tt0096895', 'tt0372784']
        assert outcome.records[0].title == 'Batman'

    def test_items_without_id_are_dropped(self, omdb, session):
        payload = {'Response': 'True', 'Search': [{'Title': 'Ghost'}]}
        session.get.return_value = make_response(payload)
        assert omdb.search('ghost').status == NO_MATCH

    @pytest.mark.parametrize("status", [401, 404, 500, 503])
    def test_http_error_status(self, omdb, session, status):
        session.get.return_value = make_response({}, status_code=status, reason='Bad')
        outcome = omdb.search('alien')

        assert outcome.status == ERROR
        assert outcome.message == MSG_HTTP_ERROR
        assert outcome.detail == f"HTTP {status}"

    def test_transport_error(self, omdb, session):
        session.get.side_effect = requests.exceptions.ConnectionError('offline')
        outcome = omdb.search('alien')

        assert outcome.status == ERROR
        assert outcome.message == MSG_NETWORK_ERROR

    def test_timeout(self, omdb, session):
        session.get.side_effect = requests.exceptions.Timeout('slow')
        assert omdb.search('alien').status == ERROR

    def test_unparseable_json(self, omdb, session):
        session.get.return_value = make_response(json_error=ValueError('Expecting value'))
        outcome = omdb.search('alien')

        assert outcome.status == ERROR
        assert outcome.message == MSG_NETWORK_ERROR


class TestDetails:
    """get_details() returns a DetailRecord or None"""

    def test_builds_request(self, omdb, session):
        session.get.return_value = make_response(DETAIL_PAYLOAD)
        omdb.get_details('tt0078748')

        _, kwargs = session.get.call_args
        assert kwargs['params'] == {'apikey': 'test-key', 'i': 'tt0078748', 'plot': 'full'}

    def test_success(self, omdb, session):
        session.get.return_value = make_response(DETAIL_PAYLOAD)
        record = omdb.get_details('tt0078748')

        assert record.title == 'Alien'
        assert record.rating == '8.5'
        assert record.cast == 'Sigourney Weaver, Tom Skerritt'
        assert record.director == 'Ridley Scott'

    def test_na_fields_become_none(self, omdb, session):
        payload = dict(DETAIL_PAYLOAD, imdbRating='N/A', Plot='N/A')
        session.get.return_value = make_response(payload)
        record = omdb.get_details('tt0078748')

        assert record.rating is None
        assert record.plot is None

    def test_unsuccessful_payload(self, omdb, session):
        session.get.return_value = make_response({'Response': 'False', 'Error': 'Incorrect IMDb ID.'})
        assert omdb.get_details('tt0000000') is None

    def test_http_error(self, omdb, session):
        session.get.return_value = make_response({}, status_code=500, reason='Server Error')
        assert omdb.get_details('tt0078748') is None

    def test_transport_error(self, omdb, session):
        session.get.side_effect = requests.exceptions.ConnectionError('offline')
        assert omdb.get_details('tt0078748') is None

    def test_malformed_payload(self, omdb, session):
        session.get.return_value = make_response(['not', 'a', 'dict'])
        assert omdb.get_details('tt0078748') is None

    def test_missing_id_filled_from_request(self, omdb, session):
        payload = {k: v for k, v in DETAIL_PAYLOAD.items() if k != 'imdbID'}
        session.get.return_value = make_response(payload)
        assert omdb.get_details('tt0078748').imdb_id == 'tt0078748'
