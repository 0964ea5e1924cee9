#!/usr/bin/env python3
"""
Movie Watchlist
Single-file Streamlit application: search OMDb, keep a watchlist, view details.

Run:  streamlit run app.py
"""

import logging
from pathlib import Path

import streamlit as st

from lib.commands import build_controller
from lib.config import load_config, ConfigError
from lib.constants import (
    MSG_EMPTY_WATCHLIST, MSG_LOADING, MSG_DETAILS_UNAVAILABLE, MSG_DETAILS_RETRY,
    LABEL_ADD, LABEL_ADDED, LABEL_REMOVE, LABEL_DETAILS,
)
from lib.omdb import RESULTS, ERROR
from lib.overlay import LOADING, POPULATED, FAILED
from lib.render import escape_html, poster_url, overlay_fields

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent
GRID_COLUMNS = 5


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

def get_controller():
    """One controller per browser session (results + overlay are per-user)"""
    if 'controller' not in st.session_state:
        try:
            config = load_config(PROJECT_ROOT / 'config.yaml')
            st.session_state['controller'] = build_controller(config)
        except ConfigError as e:
            st.error(str(e))
            st.stop()
    return st.session_state['controller']


def _request_details(controller, imdb_id: str):
    # Only open here; the dialog fetches so the loading state gets drawn first
    st.session_state['details_ticket'] = controller.open_details(imdb_id)
    st.session_state['overlay_keep'] = True


def _close_details(controller):
    st.session_state.pop('details_ticket', None)
    controller.close_details()


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def render_card_text(title: str, year: str):
    st.markdown(
        f'<div class="movie-title" title="{escape_html(title)}"><b>{escape_html(title)}</b></div>'
        f'<div class="movie-year">{escape_html(year)}</div>',
        unsafe_allow_html=True,
    )


def render_search(controller):
    with st.form('search-form'):
        col_input, col_submit = st.columns([5, 1])
        with col_input:
            query = st.text_input("Search", placeholder="Search for a movie…",
                                  label_visibility='collapsed')
        with col_submit:
            submitted = st.form_submit_button("Search", width='stretch')

    if submitted:
        controller.submit_search(query)


def render_results(controller):
    view = controller.results

    if view.status == RESULTS:
        cols = st.columns(GRID_COLUMNS)
        for i, record in enumerate(view.records):
            with cols[i % GRID_COLUMNS]:
                st.image(poster_url(record.poster), width='stretch')
                render_card_text(record.title, record.year)
                added = controller.is_added(record.imdb_id)
                st.button(
                    LABEL_ADDED if added else LABEL_ADD,
                    key=f"add_{record.imdb_id}",
                    disabled=added,
                    on_click=controller.add,
                    args=(record,),
                )
                st.button(LABEL_DETAILS, key=f"details_result_{record.imdb_id}",
                          on_click=_request_details, args=(controller, record.imdb_id))
    elif view.status == ERROR:
        st.error(view.message)
    elif view.message:
        st.info(view.message)


def render_watchlist(controller):
    st.header("My Watchlist")
    entries = controller.store.all()
    if not entries:
        st.caption(MSG_EMPTY_WATCHLIST)
        return

    cols = st.columns(GRID_COLUMNS)
    for i, entry in enumerate(entries):
        with cols[i % GRID_COLUMNS]:
            st.image(poster_url(entry.poster), width='stretch')
            render_card_text(entry.title, entry.year)
            st.button(LABEL_REMOVE, key=f"remove_{entry.imdb_id}",
                      on_click=controller.remove, args=(entry.imdb_id,))
            st.button(LABEL_DETAILS, key=f"details_watchlist_{entry.imdb_id}",
                      on_click=_request_details, args=(controller, entry.imdb_id))


@st.dialog("Movie details", width='large')
def render_details_dialog(controller):
    overlay = controller.overlay

    if not overlay.is_open:
        # Closed from inside the dialog; only a full app run removes it
        st.rerun()

    if overlay.state == LOADING:
        ticket = st.session_state.get('details_ticket') or overlay.ticket
        placeholder = st.empty()
        placeholder.write(MSG_LOADING)
        with st.spinner(MSG_LOADING):
            detail = controller.fetch_details(ticket)
        if not controller.complete_details(ticket, detail):
            logger.info(f"Ignoring stale details for {ticket.imdb_id}")
        placeholder.empty()

    if overlay.state == POPULATED:
        fields = overlay_fields(overlay.detail)
        left, right = st.columns([1, 2])
        with left:
            st.image(fields['poster'], width='stretch')
        with right:
            st.subheader(fields['title'])
            st.text(fields['year_rating'])
            st.text(fields['genre'])
            st.text(fields['director'])
            st.text(fields['cast'])
            st.text(fields['plot'])
    elif overlay.state == FAILED:
        st.subheader(MSG_DETAILS_UNAVAILABLE)
        st.write(MSG_DETAILS_RETRY)

    st.button("Close", key='modal-close', on_click=_close_details, args=(controller,))


def render_details(controller):
    # Streamlit closes a dialog on an outside click without telling us; any
    # later full run that did not come from a Details button counts as that click.
    keep = st.session_state.pop('overlay_keep', False)
    if st.session_state.pop('overlay_shown', False) and not keep:
        controller.click_overlay(inside_content=False)

    if controller.overlay.is_open:
        st.session_state['overlay_shown'] = True
        render_details_dialog(controller)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main():
    st.set_page_config(page_title="Movie Watchlist", page_icon="\U0001F3AC", layout='wide')
    st.title("\U0001F3AC Movie Watchlist")

    controller = get_controller()

    render_search(controller)
    render_results(controller)
    st.divider()
    render_watchlist(controller)
    render_details(controller)


if __name__ == '__main__':
    main()
