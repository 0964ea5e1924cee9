#!/usr/bin/env python3
"""
OMDb API client for title search and by-id details
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Dict, List

import requests

from lib.constants import (
    OMDB_BASE_URL, SEARCH_MEDIA_TYPE, DETAILS_PLOT, DEFAULT_TIMEOUT,
    MSG_HTTP_ERROR, MSG_NETWORK_ERROR,
)
from lib.records import SummaryRecord, DetailRecord

logger = logging.getLogger(__name__)

RESULTS = 'results'
NO_MATCH = 'no_match'
ERROR = 'error'


@dataclass
class SearchOutcome:
    """Result of one title search: results, no_match or error"""
    status: str
    query: str
    records: List[SummaryRecord] = field(default_factory=list)
    message: Optional[str] = None   # user-facing text for errors
    detail: Optional[str] = None    # diagnostic text (OMDb error, HTTP status, ...)


class OMDbClient:
    """Interface to the Open Movie Database API"""

    def __init__(self, api_key: str, base_url: str = OMDB_BASE_URL,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, params: Dict) -> requests.Response:
        query = {'apikey': self.api_key}
        query.update(params)
        return self.session.get(self.base_url, params=query, timeout=self.timeout)

    def search(self, query: str) -> SearchOutcome:
        """
        Search movies by title.

        The query must already be trimmed and non-empty; the search command
        rejects empty input before any request is made.

        Never raises for network or API problems: they come back as an
        outcome with status ERROR and a user-facing message.
        """
        params = {'s': query, 'type': SEARCH_MEDIA_TYPE}

        try:
            response = self._get(params)
        except requests.exceptions.RequestException as e:
            logger.error(f"OMDb search request failed for '{query}': {e}")
            return SearchOutcome(ERROR, query, message=MSG_NETWORK_ERROR, detail=str(e))

        if not response.ok:
            logger.error(
                f"OMDb API HTTP error for '{query}': "
                f"status={response.status_code} reason={response.reason} url={response.url}"
            )
            return SearchOutcome(
                ERROR, query, message=MSG_HTTP_ERROR,
                detail=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Could not parse OMDb search response for '{query}': {e}")
            return SearchOutcome(ERROR, query, message=MSG_NETWORK_ERROR, detail=str(e))

        if not isinstance(data, dict):
            logger.warning(f"Unexpected OMDb search payload for '{query}': {type(data).__name__}")
            return SearchOutcome(NO_MATCH, query, detail='unexpected payload')

        # OMDb returns Response: "True" when there are results
        if data.get('Response') == 'True' and isinstance(data.get('Search'), list):
            records = []
            seen = set()
            for item in data['Search']:
                if not isinstance(item, dict) or not item.get('imdbID'):
                    continue
                # OMDb occasionally repeats an id within one page; first one wins
                if item['imdbID'] in seen:
                    logger.debug(f"Skipping repeated OMDb result {item['imdbID']} for '{query}'")
                    continue
                seen.add(item['imdbID'])
                records.append(SummaryRecord.from_omdb(item))
            if records:
                logger.info(f"OMDb: '{query}' → {len(records)} results")
                return SearchOutcome(RESULTS, query, records=records)

        error = data.get('Error', 'Unknown error')
        logger.debug(f"No OMDb results for '{query}': {error}")
        return SearchOutcome(NO_MATCH, query, detail=error)

    def get_details(self, imdb_id: str) -> Optional[DetailRecord]:
        """Fetch full details for one movie, or None on any failure"""
        params = {'i': imdb_id, 'plot': DETAILS_PLOT}

        try:
            response = self._get(params)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching OMDb details for {imdb_id}: {e}")
            return None

        if not response.ok:
            logger.error(
                f"OMDb details HTTP error for {imdb_id}: "
                f"status={response.status_code} reason={response.reason} url={response.url}"
            )
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Could not parse OMDb details for {imdb_id}: {e}")
            return None

        if not isinstance(data, dict) or data.get('Response') != 'True':
            error = data.get('Error') if isinstance(data, dict) else data
            logger.error(f"OMDb details error response for {imdb_id}: {error}")
            return None

        record = DetailRecord.from_omdb(data)
        if not record.imdb_id:
            record = replace(record, imdb_id=imdb_id)
        return record
