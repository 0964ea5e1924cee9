#!/usr/bin/env python3
"""
lib/render.py - HTML fragments for result cards, watchlist cards and the details overlay

Every piece of API- or user-supplied text goes through escape_html() before it
is placed in markup. Buttons carry data-action / data-id attributes; wiring
them to handlers is left to whichever surface hosts the markup.
"""

import html
from typing import Iterable, Optional

from lib.constants import (
    MISSING, PLACEHOLDER_POSTER,
    MSG_EMPTY_WATCHLIST, MSG_LOADING, MSG_DETAILS_UNAVAILABLE, MSG_DETAILS_RETRY,
    LABEL_ADD, LABEL_ADDED, LABEL_REMOVE, LABEL_DETAILS,
)
from lib.overlay import DetailsOverlay, LOADING, POPULATED, FAILED
from lib.records import SummaryRecord, WatchlistEntry, DetailRecord


def escape_html(value) -> str:
    """Escape & < > " ' ; None and '' become '', 0 stays '0'"""
    if value is None or value == '':
        return ''
    return html.escape(str(value), quote=True)


def poster_url(poster: Optional[str]) -> str:
    """Poster URL, or the placeholder image when OMDb has none"""
    if not poster or poster == MISSING:
        return PLACEHOLDER_POSTER
    return poster


def render_message(text: str) -> str:
    return f'<div class="no-results">{escape_html(text)}</div>'


def _card_head(title: str, year: str, poster: str) -> str:
    safe_title = escape_html(title)
    return (
        f'<img class="movie-poster" src="{escape_html(poster_url(poster))}" alt="{safe_title} poster">'
        f'<div class="movie-info">'
        f'<h3 class="movie-title" title="{safe_title}">{safe_title}</h3>'
        f'<div class="movie-year">{escape_html(year)}</div>'
    )


def _details_button(imdb_id: str) -> str:
    return (
        f'<button class="details-btn" data-action="details" '
        f'data-id="{escape_html(imdb_id)}">{LABEL_DETAILS}</button>'
    )


def render_result_card(record: SummaryRecord, added: bool) -> str:
    """One search result; the add control is disabled once the movie is saved"""
    if added:
        add_button = (
            f'<button class="btn add-btn" data-action="add" '
            f'data-id="{escape_html(record.imdb_id)}" disabled>{LABEL_ADDED}</button>'
        )
    else:
        add_button = (
            f'<button class="btn add-btn" data-action="add" '
            f'data-id="{escape_html(record.imdb_id)}">{LABEL_ADD}</button>'
        )
    return (
        '<div class="movie-card">'
        + _card_head(record.title, record.year, record.poster)
        + add_button
        + '</div>'
        + _details_button(record.imdb_id)
        + '</div>'
    )


def render_results(records: Iterable[SummaryRecord], is_added) -> str:
    """Result grid; is_added(imdb_id) decides each card's add/added state"""
    return ''.join(render_result_card(r, is_added(r.imdb_id)) for r in records)


def render_watchlist_card(entry: WatchlistEntry) -> str:
    return (
        '<div class="movie-card">'
        + _card_head(entry.title, entry.year, entry.poster)
        + f'<button class="btn btn-remove" data-action="remove" '
          f'data-id="{escape_html(entry.imdb_id)}">{LABEL_REMOVE}</button>'
        + '</div>'
        + _details_button(entry.imdb_id)
        + '</div>'
    )


def render_watchlist(entries: Iterable[WatchlistEntry]) -> str:
    cards = [render_watchlist_card(e) for e in entries]
    if not cards:
        return escape_html(MSG_EMPTY_WATCHLIST)
    return ''.join(cards)


def overlay_fields(detail: DetailRecord) -> dict:
    """Plain-text overlay fields (unescaped; for text-only surfaces)"""
    return {
        'poster': poster_url(detail.poster),
        'title': detail.title or '',
        'year_rating': f"{detail.year or ''} • Rating: {detail.rating or MISSING}",
        'genre': f"Genre: {detail.genre or MISSING}",
        'director': f"Director: {detail.director or MISSING}",
        'cast': f"Cast: {detail.cast or MISSING}",
        'plot': detail.plot or '',
    }


def render_overlay(overlay: DetailsOverlay) -> str:
    """Details modal markup for the overlay's current state ('' when closed)"""
    if not overlay.is_open:
        return ''

    if overlay.state == LOADING:
        body = f'<h2 id="modal-title">{escape_html(MSG_LOADING)}</h2>'
    elif overlay.state == FAILED:
        body = (
            f'<h2 id="modal-title">{escape_html(MSG_DETAILS_UNAVAILABLE)}</h2>'
            f'<p id="modal-plot">{escape_html(MSG_DETAILS_RETRY)}</p>'
        )
    elif overlay.state == POPULATED:
        fields = overlay_fields(overlay.detail)
        body = (
            f'<img id="modal-poster" src="{escape_html(fields["poster"])}" '
            f'alt="{escape_html(fields["title"])} poster">'
            f'<h2 id="modal-title">{escape_html(fields["title"])}</h2>'
            f'<p id="modal-year-rating">{escape_html(fields["year_rating"])}</p>'
            f'<p id="modal-genre">{escape_html(fields["genre"])}</p>'
            f'<p id="modal-director">{escape_html(fields["director"])}</p>'
            f'<p id="modal-actors">{escape_html(fields["cast"])}</p>'
            f'<p id="modal-plot">{escape_html(fields["plot"])}</p>'
        )
    else:
        raise ValueError(f"Unknown overlay state: {overlay.state}")

    return (
        '<div id="modal" class="modal show" aria-hidden="false" data-action="dismiss">'
        '<div class="modal-content">'
        '<button id="modal-close" data-action="close" aria-label="Close">&times;</button>'
        f'{body}'
        '</div></div>'
    )


def render_page(results_html: str, watchlist_html: str, overlay_html: str = '',
                title: str = 'Movie Watchlist') -> str:
    """Standalone HTML document with results, watchlist and overlay regions"""
    return (
        '<!DOCTYPE html>\n'
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f'<title>{escape_html(title)}</title>\n'
        '</head>\n<body>\n'
        f'<h1>{escape_html(title)}</h1>\n'
        f'<section><h2>Results</h2><div id="movie-results">{results_html}</div></section>\n'
        f'<section><h2>My Watchlist</h2><div id="watchlist">{watchlist_html}</div></section>\n'
        f'{overlay_html}\n'
        '</body>\n</html>\n'
    )
