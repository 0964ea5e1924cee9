#!/usr/bin/env python3
"""
Details overlay state machine

    closed → loading → populated | failed → closed

There is only one overlay. Every open() stamps a new ticket; a fetch result is
applied only if its ticket is still the one the overlay is waiting for, so a
slow response for an earlier movie can never overwrite a newer request.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Optional

from lib.records import DetailRecord

logger = logging.getLogger(__name__)

CLOSED = 'closed'
LOADING = 'loading'
POPULATED = 'populated'
FAILED = 'failed'


@dataclass(frozen=True)
class DetailsTicket:
    """Identity of one details request"""
    imdb_id: str
    stamp: int


class DetailsOverlay:
    """The single details overlay and the request it is waiting on"""

    def __init__(self):
        self._stamps = itertools.count(1)
        self.state = CLOSED
        self.ticket: Optional[DetailsTicket] = None
        self.detail: Optional[DetailRecord] = None

    @property
    def is_open(self) -> bool:
        return self.state != CLOSED

    @property
    def imdb_id(self) -> Optional[str]:
        return self.ticket.imdb_id if self.ticket else None

    def open(self, imdb_id: str) -> DetailsTicket:
        """Show the loading placeholder for imdb_id, restarting any open cycle"""
        self.ticket = DetailsTicket(imdb_id, next(self._stamps))
        self.state = LOADING
        self.detail = None
        logger.debug(f"Overlay loading {imdb_id} (request #{self.ticket.stamp})")
        return self.ticket

    def is_current(self, ticket: DetailsTicket) -> bool:
        return self.state == LOADING and ticket == self.ticket

    def resolve(self, ticket: DetailsTicket, detail: Optional[DetailRecord]) -> bool:
        """
        Apply a finished fetch. A None detail moves the overlay to FAILED.

        Returns False (and changes nothing) when the ticket is stale: the
        overlay was closed or re-opened since the request was made.
        """
        if not self.is_current(ticket):
            logger.debug(
                f"Discarding stale details for {ticket.imdb_id} (request #{ticket.stamp}); "
                f"overlay is {self.state} on {self.imdb_id}"
            )
            return False

        self.detail = detail
        self.state = POPULATED if detail is not None else FAILED
        return True

    def close(self):
        self.state = CLOSED
        self.ticket = None
        self.detail = None

    def click(self, inside_content: bool) -> bool:
        """Backdrop click: closes unless it landed inside the content region"""
        if self.is_open and not inside_content:
            self.close()
            return True
        return False
