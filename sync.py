#!/usr/bin/env python3
"""
Download every xkcd comic and its image into the local cache.

A comic counts as done when its metadata is in comics.json and its image is
on disk, so re-running after an interruption or partial failure picks up at
the first incomplete comic. The store is saved once, after the whole range.

Usage:
    python sync.py               # Fetch whatever is missing
    python sync.py --redownload  # Fetch metadata and images for every comic again
"""

import argparse
import sys
from datetime import datetime
from app_logging import app_logger, set_debug
from config import get_debug_logging
from exceptions import XkcdRankError, RemoteUnavailable, IOFailure
from models.xkcd import XkcdClient
from store import Store


def download_all_comics(redownload: bool = False, client=None, cache_dir=None) -> dict:
    """
    Run one sync pass over comics 1..latest.

    Args:
        redownload: Re-fetch metadata and re-download images even when cached
        client: XkcdClient to use (defaults to one built from config.ini)
        cache_dir: Cache directory (defaults to CACHE_DIR from config.ini)

    Returns:
        dict with counts for the pass

    Raises:
        RemoteUnavailable: the latest comic could not be fetched, so the range is unknown
    """
    client = client or XkcdClient.from_config()

    app_logger.info("Fetching latest comic ...")
    latest = client.get_latest()
    count = latest.num
    app_logger.info(f"There are {count} comics (excluding 404)")

    # Redownload still seeds from the saved store so tier assignments survive
    store = Store.load(cache_dir=cache_dir, client=client)

    result = {
        'latest': count,
        'fetched': 0,
        'images': 0,
        'skipped': 0,
        'failed': [],
        'image_failed': [],
        'saved': False,
    }

    for i in range(1, count + 1):
        if not redownload and store.has_comic(i) and store.comics[i].has_image_downloaded(store.cache_dir):
            result['skipped'] += 1
            continue

        cached = store.has_comic(i)
        if redownload or not cached:
            app_logger.info(f"Fetching comic #{i} ...")
        try:
            comic = store.fetch_comic(i, refresh=redownload)
        except XkcdRankError as e:
            app_logger.error(f"Error fetching comic #{i}: {e}")
            result['failed'].append(i)
            continue
        if redownload or not cached:
            result['fetched'] += 1

        if redownload or not comic.has_image_downloaded(store.cache_dir):
            try:
                client.download_image(comic, store.cache_dir)
            except (RemoteUnavailable, IOFailure) as e:
                app_logger.error(f"Error downloading image #{i}: {e}")
                result['image_failed'].append(i)
            else:
                app_logger.info(f"Downloaded image #{i}")
                result['images'] += 1

    app_logger.info("Done fetching all comics!")

    result['saved'] = store.save()

    app_logger.info(
        f"Sync complete: {result['fetched']} fetched, {result['images']} images, "
        f"{result['skipped']} already complete, {len(result['failed'])} failed, "
        f"{len(result['image_failed'])} images failed"
    )
    if result['failed']:
        app_logger.warning(f"  Failed comics: {', '.join(str(n) for n in result['failed'])}")

    return result


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Download all xkcd comics and images into the local cache',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '-r', '--redownload', action='store_true',
        help='Redownload comics that have already been downloaded'
    )

    args = parser.parse_args(argv)
    set_debug(get_debug_logging())

    app_logger.info(f"xkcd-rank sync started at {datetime.now().isoformat()}")

    try:
        download_all_comics(redownload=args.redownload)
    except RemoteUnavailable as e:
        app_logger.error(f"Cannot determine the latest comic: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
