"""
Local store of downloaded comics and tier assignments.

Both sequences are index-aligned to comic numbers (index 0 is never a comic)
and persisted together in CACHE_DIR/comics.json, rewritten in full on every
save. A comic slot is either None (never fetched, or the fetch failed) or a
Comic; there is no "failed" marker, so a missing comic is retried next time
it is requested.
"""
import json
import os
from typing import List, Optional

from app_logging import app_logger
from exceptions import InvalidIndex, ParseFailure
from helpers import get_cache_dir, get_comics_json_path
from models.comic import Comic
from models.xkcd import XkcdClient

DEFAULT_TIER = 0
MAX_TIER = 255  # tiers are stored as uint8


class Store:
    """
    Comic records and tier assignments for one cache directory.

    ``unsaved`` is set by every tier change and cleared by a successful save;
    it is never written to disk.
    """

    def __init__(self, comics=None, tier_assignments=None, cache_dir=None, client=None):
        self.comics: List[Optional[Comic]] = comics if comics is not None else []
        self.tier_assignments: List[int] = tier_assignments if tier_assignments is not None else []
        self.unsaved = False
        self.cache_dir = cache_dir or get_cache_dir()
        self.client = client

    @property
    def path(self):
        return get_comics_json_path(self.cache_dir)

    # -------- Persistence --------

    @classmethod
    def from_dict(cls, data, cache_dir=None, client=None):
        """
        Build a Store from the decoded comics.json document.

        Missing top-level keys default to empty sequences. Any malformed entry
        raises ParseFailure; the document is accepted or rejected as a whole.
        """
        if not isinstance(data, dict):
            raise ParseFailure("State document is not an object")

        raw_comics = data.get("comics") or []
        raw_tiers = data.get("tier_assignments") or []
        if not isinstance(raw_comics, list) or not isinstance(raw_tiers, list):
            raise ParseFailure("'comics' and 'tier_assignments' must be lists")

        comics = [None if entry is None else Comic.from_dict(entry) for entry in raw_comics]

        tiers = []
        for tier in raw_tiers:
            if isinstance(tier, bool) or not isinstance(tier, int) or not DEFAULT_TIER <= tier <= MAX_TIER:
                raise ParseFailure(f"Invalid tier assignment: {tier!r}")
            tiers.append(tier)

        return cls(comics=comics, tier_assignments=tiers, cache_dir=cache_dir, client=client)

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return {
            "comics": [None if comic is None else comic.to_dict() for comic in self.comics],
            "tier_assignments": list(self.tier_assignments),
        }

    @classmethod
    def load(cls, cache_dir=None, client=None):
        """
        Load comics.json from the cache directory.

        A missing, unreadable or malformed file yields an empty Store; the
        previous contents are then lost on the next save.
        """
        cache_dir = cache_dir or get_cache_dir()
        path = get_comics_json_path(cache_dir)
        if not os.path.exists(path):
            app_logger.debug(f"No saved comics at {path}, starting empty")
            return cls(cache_dir=cache_dir, client=client)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            store = cls.from_dict(data, cache_dir=cache_dir, client=client)
        except (OSError, ValueError, ParseFailure) as e:
            app_logger.warning(f"Could not load {path}, starting with an empty store: {e}")
            return cls(cache_dir=cache_dir, client=client)

        app_logger.debug(f"Loaded {sum(1 for c in store.comics if c)} comics from {path}")
        return store

    def save(self):
        """
        Write the whole store to comics.json.

        Returns:
            True on success. On failure the error is logged, ``unsaved`` is left
            as it was and False is returned.
        """
        path = self.path
        contents = json.dumps(self.to_dict(), ensure_ascii=False)
        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(contents)
        except OSError as e:
            app_logger.error(f"Error saving data store to {path}: {e}")
            return False

        self.unsaved = False
        app_logger.info(f"Saved {len(self.comics)} comic slots to {path}")
        return True

    # -------- Comics --------

    def _get_client(self):
        if self.client is None:
            self.client = XkcdClient.from_config()
        return self.client

    def has_comic(self, i):
        return 0 <= i < len(self.comics) and self.comics[i] is not None

    def fetch_comic(self, i, refresh=False):
        """
        Return comic ``i``, fetching and caching it if it is not stored yet.

        Args:
            i: Comic number
            refresh: Fetch again even when cached; on failure the cached
                record is kept

        Raises:
            InvalidIndex: i is 0 or negative
            RemoteUnavailable: the comic could not be fetched (slot stays as it was)
        """
        if i < 1:
            raise InvalidIndex(f"Comic #{i} doesn't exist")

        if len(self.comics) <= i:
            self.comics.extend([None] * (i + 1 - len(self.comics)))

        if self.comics[i] is not None and not refresh:
            return self.comics[i]

        comic = self._get_client().get_comic(i)
        self.comics[i] = comic
        return comic

    # -------- Tiers --------

    def ensure_tiers_exist(self):
        """Pad tier_assignments to len(comics) + 1 entries with the default tier."""
        if len(self.tier_assignments) <= len(self.comics):
            missing = len(self.comics) + 1 - len(self.tier_assignments)
            self.tier_assignments.extend([DEFAULT_TIER] * missing)

    def get_tier_of_comic(self, i):
        if 0 <= i < len(self.tier_assignments):
            return self.tier_assignments[i]
        return DEFAULT_TIER

    def set_tier_of_comic(self, i, tier):
        """
        Assign ``tier`` to comic ``i``.

        Only comic numbers inside the comics sequence are recorded; anything
        beyond it is dropped even though the tier list may be longer.
        """
        if not DEFAULT_TIER <= tier <= MAX_TIER:
            raise ValueError(f"Tier must be between {DEFAULT_TIER} and {MAX_TIER}, got {tier}")
        self.unsaved = True
        self.ensure_tiers_exist()
        if 0 <= i < len(self.comics):
            self.tier_assignments[i] = tier

    def comics_in_tier(self, tier):
        """Comic numbers (ascending, excluding slot 0) assigned to ``tier``."""
        return [i for i, assigned in enumerate(self.tier_assignments)
                if 0 < i < len(self.comics) and assigned == tier]
