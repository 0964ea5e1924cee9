#!/usr/bin/env python3
"""
Movie records exchanged between the OMDb clients, the watchlist and the views

OMDb returns capitalised keys ("Title", "Year", "imdbID", ...). The from_omdb /
to_omdb helpers are the only places that know about that wire format.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from lib.constants import MISSING


def _text(value) -> str:
    """Coerce an OMDb field to a string ('' for missing)"""
    if value is None:
        return ''
    return str(value)


@dataclass(frozen=True)
class SummaryRecord:
    """One row of a title search"""
    title: str
    year: str
    poster: str   # URL or MISSING
    imdb_id: str

    @classmethod
    def from_omdb(cls, data: Dict) -> 'SummaryRecord':
        return cls(
            title=_text(data.get('Title')),
            year=_text(data.get('Year')),
            poster=_text(data.get('Poster')) or MISSING,
            imdb_id=_text(data.get('imdbID')),
        )


@dataclass(frozen=True)
class WatchlistEntry:
    """Persisted subset of a summary record"""
    title: str
    year: str
    poster: str
    imdb_id: str

    @classmethod
    def from_summary(cls, record: SummaryRecord) -> 'WatchlistEntry':
        return cls(
            title=record.title,
            year=record.year,
            poster=record.poster,
            imdb_id=record.imdb_id,
        )

    @classmethod
    def from_omdb(cls, data: Dict) -> 'WatchlistEntry':
        return cls.from_summary(SummaryRecord.from_omdb(data))

    def to_omdb(self) -> Dict[str, str]:
        """Serialize with the field names the browser version stored"""
        return {
            'Title': self.title,
            'Year': self.year,
            'Poster': self.poster,
            'imdbID': self.imdb_id,
        }


@dataclass(frozen=True)
class DetailRecord:
    """Full movie data for the details overlay (never persisted)"""
    imdb_id: str
    title: str
    year: str
    rating: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    cast: Optional[str] = None
    plot: Optional[str] = None
    poster: str = MISSING

    @classmethod
    def from_omdb(cls, data: Dict) -> 'DetailRecord':
        def field(name: str) -> Optional[str]:
            value = data.get(name)
            if value in (None, '', MISSING):
                return None
            return str(value)

        return cls(
            imdb_id=_text(data.get('imdbID')),
            title=_text(data.get('Title')),
            year=_text(data.get('Year')),
            rating=field('imdbRating'),
            genre=field('Genre'),
            director=field('Director'),
            cast=field('Actors'),
            plot=field('Plot'),
            poster=_text(data.get('Poster')) or MISSING,
        )
