#!/usr/bin/env python3
"""
watch.py - Search OMDb and manage the local watchlist from the terminal

Commands:
  search QUERY        List matching movies ([x] = already on the watchlist)
  details IMDB_ID     Show full details for one movie
  add IMDB_ID         Save a movie to the watchlist
  remove IMDB_ID      Drop a movie from the watchlist
  list                Show the watchlist in saved order
  export              Write the watchlist (and optional search) as an HTML page

Both this CLI and the Streamlit app (streamlit run app.py) read config.yaml
from the project directory by default, so they share one watchlist file.
"""

import sys
import logging
import argparse
from pathlib import Path

from lib.commands import build_controller
from lib.config import load_config, ConfigError
from lib.omdb import RESULTS, ERROR
from lib.overlay import POPULATED
from lib.records import WatchlistEntry
from lib.render import overlay_fields
from lib.constants import MSG_EMPTY_WATCHLIST, MSG_DETAILS_UNAVAILABLE, MSG_DETAILS_RETRY

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent


def cmd_search(controller, args) -> int:
    view = controller.submit_search(args.query)
    if view.status != RESULTS:
        print(view.message)
        return 1 if view.status == ERROR else 0

    for record in view.records:
        mark = '[x]' if controller.is_added(record.imdb_id) else '[ ]'
        print(f"{mark} {record.imdb_id:<12} {record.title} ({record.year})")
    return 0


def cmd_details(controller, args) -> int:
    overlay = controller.show_details(args.imdb_id)
    if overlay.state != POPULATED:
        print(MSG_DETAILS_UNAVAILABLE)
        print(MSG_DETAILS_RETRY)
        return 1

    fields = overlay_fields(overlay.detail)
    print(fields['title'])
    print(fields['year_rating'])
    print(fields['genre'])
    print(fields['director'])
    print(fields['cast'])
    if fields['plot']:
        print()
        print(fields['plot'])
    return 0


def cmd_add(controller, args) -> int:
    if controller.is_added(args.imdb_id):
        print(f"Already on the watchlist: {args.imdb_id}")
        return 0

    detail = controller.client.get_details(args.imdb_id)
    if detail is None:
        logger.error(f"Could not look up {args.imdb_id}; nothing added")
        return 1

    entry = WatchlistEntry(
        title=detail.title,
        year=detail.year,
        poster=detail.poster,
        imdb_id=args.imdb_id,
    )
    controller.store.add(entry)
    print(f"Added: {entry.title} ({entry.year})")
    return 0


def cmd_remove(controller, args) -> int:
    removed = controller.remove(args.imdb_id)
    if not removed:
        print(f"Not on the watchlist: {args.imdb_id}")
        return 0
    print(f"Removed: {args.imdb_id}")
    return 0


def cmd_list(controller, args) -> int:
    entries = controller.store.all()
    if not entries:
        print(MSG_EMPTY_WATCHLIST)
        return 0
    for i, entry in enumerate(entries, 1):
        print(f"{i:>3}. {entry.imdb_id:<12} {entry.title} ({entry.year})")
    return 0


def cmd_export(controller, args) -> int:
    if args.query:
        controller.submit_search(args.query)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(controller.page_html(), encoding='utf-8')
    print(f"Wrote {args.output}")
    return 0


COMMANDS = {
    'search': cmd_search,
    'details': cmd_details,
    'add': cmd_add,
    'remove': cmd_remove,
    'list': cmd_list,
    'export': cmd_export,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Search OMDb and manage a local movie watchlist',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python watch.py search "blade runner"
  python watch.py add tt0083658
  python watch.py export --output output/watchlist.html
        """
    )
    parser.add_argument('--config', type=Path, default=PROJECT_ROOT / 'config.yaml',
                        help='Configuration file (default: config.yaml next to watch.py)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log at INFO level')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('search', help='Search movies by title')
    p.add_argument('query', help='Title to search for')

    p = sub.add_parser('details', help='Show details for a movie')
    p.add_argument('imdb_id')

    p = sub.add_parser('add', help='Add a movie to the watchlist')
    p.add_argument('imdb_id')

    p = sub.add_parser('remove', help='Remove a movie from the watchlist')
    p.add_argument('imdb_id')

    sub.add_parser('list', help='Show the watchlist')

    p = sub.add_parser('export', help='Write an HTML page of the watchlist')
    p.add_argument('--output', '-o', type=Path, default=Path('output/watchlist.html'),
                   help='HTML output path (default: output/watchlist.html)')
    p.add_argument('--query', '-q', default=None,
                   help='Also include search results for this title')

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        config = load_config(args.config)
        controller = build_controller(config)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    return COMMANDS[args.command](controller, args)


if __name__ == '__main__':
    sys.exit(main())
