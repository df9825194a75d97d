"""
xkcd JSON API client.

xkcd publishes one JSON document per comic and one for the latest comic:

- GET /info.0.json          - Latest comic (used to learn the highest number)
- GET /<n>/info.0.json      - Comic number n
- GET <img url>             - Raw image bytes (a *_2x.png variant exists for most PNGs)

Comic #404 does not exist on the server and is answered locally with a
placeholder record. No call is retried; a failed comic is simply fetched
again on the next sync pass.
"""
import os

import requests
from app_logging import app_logger
from config import config, get_request_timeout
from exceptions import RemoteUnavailable, IOFailure, InvalidIndex, ParseFailure
from helpers import get_img_dir
from models.comic import Comic, NOT_FOUND_COMIC_NUMBER, not_found_comic

DEFAULT_BASE_URL = "https://xkcd.com"


class XkcdClient:
    """Client for the xkcd JSON endpoints and image host."""

    def __init__(self, base_url=None, timeout=None, user_agent=None):
        """
        Initialize the xkcd client.

        Args:
            base_url: Site root (defaults to BASE_URL from config.ini)
            timeout: Seconds per request; None means no timeout
            user_agent: User-Agent header (defaults to USER_AGENT from config.ini)
        """
        if base_url is None:
            base_url = config.get("SETTINGS", "BASE_URL", fallback=DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': user_agent or config.get("SETTINGS", "USER_AGENT", fallback="xkcd-rank"),
        })

    @classmethod
    def from_config(cls):
        """Build a client from the [SETTINGS] section of config.ini."""
        return cls(timeout=get_request_timeout())

    def latest_url(self):
        return f"{self.base_url}/info.0.json"

    def comic_url(self, n):
        return f"{self.base_url}/{n}/info.0.json"

    def _get(self, url):
        """GET a URL, raising RemoteUnavailable on transport errors or non-2xx status."""
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteUnavailable(f"GET {url} failed: {e}") from e
        return resp

    def _get_comic(self, url):
        resp = self._get(url)
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteUnavailable(f"Malformed JSON from {url}: {e}") from e
        try:
            return Comic.from_dict(data)
        except ParseFailure as e:
            raise RemoteUnavailable(f"Unexpected comic document from {url}: {e}") from e

    def get_latest(self):
        """Fetch the most recent comic; its ``num`` is the size of the catalog."""
        return self._get_comic(self.latest_url())

    def get_comic(self, n):
        """
        Fetch comic number ``n``.

        Returns:
            Comic parsed from the per-number endpoint, or the local placeholder for #404

        Raises:
            InvalidIndex: n is 0 or negative
            RemoteUnavailable: request or response parsing failed
        """
        if n < 1:
            raise InvalidIndex(f"Comic #{n} doesn't exist")
        if n == NOT_FOUND_COMIC_NUMBER:
            return not_found_comic()
        return self._get_comic(self.comic_url(n))

    def fetch_image_bytes(self, comic):
        """
        Download the image for ``comic``, preferring the 2x variant.

        Falls back to the base image when the 2x request fails. A comic without
        an image reference fails without touching the network.
        """
        candidates = [url for url in (comic.img_2x, comic.img) if url]
        if not candidates:
            raise RemoteUnavailable(f"Comic #{comic.num} has no image")

        last_error = None
        for url in candidates:
            try:
                return self._get(url).content
            except RemoteUnavailable as e:
                app_logger.debug(f"Image #{comic.num}: {e}")
                last_error = e
        raise last_error

    def download_image(self, comic, cache_dir=None):
        """
        Download the image for ``comic`` into the cache's img directory.

        Returns:
            Path the image was written to

        Raises:
            RemoteUnavailable: neither image variant could be fetched
            IOFailure: the image could not be written
        """
        data = self.fetch_image_bytes(comic)
        dest = comic.img_path(cache_dir)
        try:
            os.makedirs(get_img_dir(cache_dir), exist_ok=True)
            with open(dest, "wb") as f:
                f.write(data)
        except OSError as e:
            raise IOFailure(f"Could not write {dest}: {e}") from e
        return dest
