"""
State of an interactive ranking session.

The Store plus the comic currently being viewed. Everything that changes
the session goes through an AppState instance handed to the caller; nothing
here is module-level mutable state.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app_logging import app_logger
from config import config
from exceptions import XkcdRankError
from models.comic import Comic
from store import Store


@dataclass(frozen=True)
class Tier:
    title: str
    subtitle: str
    key: str


TIERS = [
    Tier("U", "Unsorted", "u"),
    Tier("S+", "Cliche", "w"),
    Tier("S", "Superb", "s"),
    Tier("A", "Very good", "a"),
    Tier("B", "Good", "b"),
    Tier("C", "Mediocre", "c"),
    Tier("D", "Obscure", "d"),
    Tier("E", "Bad", "e"),
    Tier("F", "N/A", "f"),
]

# Shortcut letter -> tier id
TIER_KEYS = {tier.key: tier_id for tier_id, tier in enumerate(TIERS)}


class AppState:
    def __init__(self, store: Store, n: int = 1):
        self.store = store
        self.n = n

    @property
    def unsaved(self) -> bool:
        return self.store.unsaved

    @property
    def last_number(self) -> int:
        return max(1, len(self.store.comics) - 1)

    def current_comic(self) -> Optional[Comic]:
        if self.store.has_comic(self.n):
            return self.store.comics[self.n]
        return None

    def current_tier(self) -> Tier:
        tier_id = self.store.get_tier_of_comic(self.n)
        return TIERS[tier_id] if tier_id < len(TIERS) else TIERS[0]

    def go_to(self, n: int) -> int:
        """Move to comic ``n``, clamped to the numbers the store knows about."""
        self.n = min(max(1, n), self.last_number)
        return self.n

    def next(self) -> int:
        return self.go_to(self.n + 1)

    def previous(self) -> int:
        return self.go_to(self.n - 1)

    def retry_fetch(self) -> Optional[Comic]:
        """Fetch the current comic again; errors are logged, not raised."""
        try:
            return self.store.fetch_comic(self.n)
        except XkcdRankError as e:
            app_logger.error(f"Error fetching comic #{self.n}: {e}")
            return None

    def assign_tier(self, tier_id: int) -> None:
        self.store.set_tier_of_comic(self.n, tier_id)

    def save(self) -> bool:
        return self.store.save()

    def tier_summary(self) -> List[Tuple[Tier, List[int]]]:
        self.store.ensure_tiers_exist()
        return [(tier, self.store.comics_in_tier(tier_id)) for tier_id, tier in enumerate(TIERS)]

    @staticmethod
    def links(n: int) -> List[str]:
        base_url = config.get("SETTINGS", "BASE_URL", fallback="https://xkcd.com").rstrip('/')
        explain_url = config.get("SETTINGS", "EXPLAIN_URL", fallback="https://explainxkcd.com").rstrip('/')
        return [f"{base_url}/{n}", f"{explain_url}/{n}"]
