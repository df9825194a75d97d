#!/usr/bin/env python3
"""
xkcd downloader and tier list.

Usage:
    python app.py                    # Rank comics interactively
    python app.py --download         # Download all comics, no interactive session
    python app.py -d --redownload    # Download everything again
"""
import argparse
import sys

from app_logging import app_logger, set_debug
from app_state import AppState, TIERS, TIER_KEYS
from config import get_debug_logging
from exceptions import RemoteUnavailable
from store import Store
from sync import download_all_comics
from version import __version__

HELP_TEXT = (
    "Commands: "
    + " ".join(f"{tier.key}={tier.title}" for tier in TIERS)
    + " | n/<enter> next | p previous | <number> jump | r retry fetch"
    + " | t tiers | l links | save | q quit | q! quit without saving | ? help"
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='xkcd downloader and tier list',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '-d', '--download', action='store_true',
        help='Download all comics instead of starting the interactive session'
    )
    parser.add_argument(
        '-r', '--redownload', action='store_true',
        help='Redownload comics that have already been downloaded'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def describe_comic(state: AppState) -> str:
    comic = state.current_comic()
    if comic is None:
        return f"#{state.n}: Error fetching comic (r to try again)"

    tier = state.current_tier()
    lines = [
        f"#{comic.num}: {comic.title}  ({comic.year}-{comic.month}-{comic.day})",
        f"  Tier: {tier.title} ({tier.subtitle})",
    ]
    if comic.has_image_downloaded(state.store.cache_dir):
        lines.append(f"  Image: {comic.img_path(state.store.cache_dir)}")
    else:
        lines.append(f"  Transcript: {comic.transcript}")
    if comic.alt:
        lines.append(f"  Alt: {comic.alt}")
    return "\n".join(lines)


def describe_tiers(state: AppState) -> str:
    lines = []
    for tier, numbers in state.tier_summary():
        shown = ", ".join(f"#{n}" for n in numbers[-10:])
        lines.append(f"{tier.title:>2} {tier.subtitle:<10} ({len(numbers)}) {shown}")
    return "\n".join(lines)


def run_interactive(state: AppState, input_fn=input, output=print) -> None:
    """
    Line-oriented ranking session. Tier changes stay in memory until ``save``.
    """
    output(HELP_TEXT)
    while True:
        output(describe_comic(state))
        prompt = "* > " if state.unsaved else "> "
        try:
            command = input_fn(prompt).strip().lower()
        except EOFError:
            if state.unsaved:
                output("Input closed, unsaved changes discarded.")
            return

        if command in ("", "n"):
            state.next()
        elif command == "p":
            state.previous()
        elif command.isdigit():
            state.go_to(int(command))
        elif command in TIER_KEYS:
            state.assign_tier(TIER_KEYS[command])
        elif command == "r":
            state.retry_fetch()
        elif command == "t":
            output(describe_tiers(state))
        elif command == "l":
            output("\n".join(state.links(state.n)))
        elif command == "save":
            if state.save():
                output("Saved.")
            else:
                output("Save failed, see log.")
        elif command == "q":
            if state.unsaved:
                output("Unsaved changes: use 'save' first, or 'q!' to discard them.")
                continue
            return
        elif command == "q!":
            return
        else:
            output(HELP_TEXT)


def main(argv=None) -> int:
    args = parse_args(argv)
    set_debug(get_debug_logging())

    if args.download:
        try:
            download_all_comics(redownload=args.redownload)
        except RemoteUnavailable as e:
            app_logger.error(f"Cannot determine the latest comic: {e}")
            return 1
        return 0

    state = AppState(Store.load())
    run_interactive(state)
    return 0


if __name__ == '__main__':
    sys.exit(main())
