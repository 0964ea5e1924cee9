#!/usr/bin/env python3
"""
Shared constants for the movie watchlist

Single source of truth for API endpoints, storage keys and user-facing messages.
DO NOT duplicate these strings in other modules - import from here instead.
"""

# OMDb endpoint and the media-type filter applied to every title search
OMDB_BASE_URL = 'https://www.omdbapi.com/'
SEARCH_MEDIA_TYPE = 'movie'
DETAILS_PLOT = 'full'

# OMDb uses this literal for any missing field (posters, ratings, ...)
MISSING = 'N/A'

PLACEHOLDER_POSTER = 'https://via.placeholder.com/300x450?text=No+Image'

# Storage key for the serialized watchlist (same key the browser version used)
WATCHLIST_KEY = 'omdb_watchlist_v1'

DEFAULT_WATCHLIST_PATH = 'output/watchlist.json'
DEFAULT_TIMEOUT = 10

# Inline messages
MSG_EMPTY_INPUT = 'Please enter a movie title.'
MSG_NO_MATCH = 'No results found for "{query}".'
MSG_HTTP_ERROR = 'Sorry, something went wrong while fetching results. Please try again later.'
MSG_NETWORK_ERROR = 'Network error. Please check your connection and try again.'
MSG_EMPTY_WATCHLIST = 'Your watchlist is empty. Search for movies to add!'

# Details overlay text
MSG_LOADING = 'Loading...'
MSG_DETAILS_UNAVAILABLE = 'Details not available'
MSG_DETAILS_RETRY = 'Could not load details. Please try again later.'

# Control labels
LABEL_ADD = 'Add to Watchlist'
LABEL_ADDED = 'Added'
LABEL_REMOVE = 'Remove'
LABEL_DETAILS = 'Details'
