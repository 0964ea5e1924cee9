#!/usr/bin/env python3
"""
lib/commands.py - User actions as plain command handlers

Each handler takes structured input, drives the OMDb client / watchlist /
overlay, and returns the resulting view state. Nothing here knows about a
rendering environment, so the Streamlit app, the CLI and the tests all go
through the same code.

Action flow:
1. submit_search(query)  → ResultsView (empty_input | results | no_match | error)
2. add(record)           → True if newly saved (idempotent)
3. remove(imdb_id)       → number of entries removed
4. open_details(id)      → ticket; overlay shows the loading placeholder
5. complete_details(ticket, detail) → applied only if the ticket is still current
6. close_details() / click_overlay(inside_content)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from lib.config import require_api_key
from lib.constants import MSG_EMPTY_INPUT, MSG_NO_MATCH
from lib.omdb import OMDbClient, RESULTS, NO_MATCH, ERROR
from lib.overlay import DetailsOverlay, DetailsTicket
from lib.records import SummaryRecord, DetailRecord
from lib.storage import JsonFileStorage
from lib.watchlist import WatchlistStore
from lib import render

logger = logging.getLogger(__name__)

IDLE = 'idle'
EMPTY_INPUT = 'empty_input'


@dataclass
class ResultsView:
    """What the results region should show"""
    status: str = IDLE
    query: str = ''
    records: List[SummaryRecord] = field(default_factory=list)
    message: Optional[str] = None


class WatchlistController:
    """Command handlers for the search/watchlist/details screen"""

    def __init__(self, client, store, overlay: Optional[DetailsOverlay] = None):
        self.client = client
        self.store = store
        self.overlay = overlay or DetailsOverlay()
        self.results = ResultsView()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def submit_search(self, raw_query: Optional[str]) -> ResultsView:
        query = (raw_query or '').strip()

        if not query:
            self.results = ResultsView(EMPTY_INPUT, message=MSG_EMPTY_INPUT)
            return self.results

        outcome = self.client.search(query)

        if outcome.status == RESULTS:
            self.results = ResultsView(RESULTS, query, records=list(outcome.records))
        elif outcome.status == NO_MATCH:
            self.results = ResultsView(NO_MATCH, query, message=MSG_NO_MATCH.format(query=query))
        else:
            self.results = ResultsView(ERROR, query, message=outcome.message)

        return self.results

    # ------------------------------------------------------------------
    # Watchlist
    # ------------------------------------------------------------------

    def is_added(self, imdb_id: str) -> bool:
        return self.store.contains(imdb_id)

    def add(self, record: SummaryRecord) -> bool:
        return self.store.add(record)

    def remove(self, imdb_id: str) -> int:
        return self.store.remove(imdb_id)

    # ------------------------------------------------------------------
    # Details overlay
    # ------------------------------------------------------------------

    def open_details(self, imdb_id: str) -> DetailsTicket:
        return self.overlay.open(imdb_id)

    def fetch_details(self, ticket: DetailsTicket) -> Optional[DetailRecord]:
        return self.client.get_details(ticket.imdb_id)

    def complete_details(self, ticket: DetailsTicket, detail: Optional[DetailRecord]) -> bool:
        return self.overlay.resolve(ticket, detail)

    def show_details(self, imdb_id: str) -> DetailsOverlay:
        """Open, fetch and apply in one go (for synchronous surfaces)"""
        ticket = self.open_details(imdb_id)
        self.complete_details(ticket, self.fetch_details(ticket))
        return self.overlay

    def close_details(self):
        self.overlay.close()

    def click_overlay(self, inside_content: bool) -> bool:
        return self.overlay.click(inside_content)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def results_html(self) -> str:
        if self.results.status == RESULTS:
            return render.render_results(self.results.records, self.is_added)
        if self.results.message:
            return render.render_message(self.results.message)
        return ''

    def watchlist_html(self) -> str:
        return render.render_watchlist(self.store.all())

    def page_html(self) -> str:
        return render.render_page(
            self.results_html(),
            self.watchlist_html(),
            render.render_overlay(self.overlay),
        )


def build_controller(config: dict) -> WatchlistController:
    """Wire an OMDb client and a file-backed watchlist from a loaded config"""
    client = OMDbClient(
        api_key=require_api_key(config),
        base_url=config['omdb_base_url'],
        timeout=config['request_timeout'],
    )
    store = WatchlistStore(JsonFileStorage(config['watchlist_path'])).load()
    return WatchlistController(client, store)
