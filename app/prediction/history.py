"""History manager for recent searches and favorites."""
import logging
from typing import List, Optional

from config.settings import settings
from app.utils.helpers import safe_strip
from .preferences import PreferenceStore, FAVORITES_KEY, HISTORY_KEY

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Owns the recent-search list and the favorites collection.

    Recent searches are most-recent-first, unique ignoring case, and capped
    at max_recent entries. Favorites are matched exactly and keep insertion
    order for display. Every mutation writes the affected list back to the
    preference store.
    """

    def __init__(self, store: PreferenceStore, max_recent: Optional[int] = None):
        self._store = store
        if max_recent is None:
            max_recent = settings.max_recent_searches
        self._max_recent = max(max_recent, 0)
        self._recent: List[str] = self._normalize(store.load(HISTORY_KEY))
        self._favorites: List[str] = store.load(FAVORITES_KEY)

    def _normalize(self, items: List[str]) -> List[str]:
        """Trim, drop blanks and case-insensitive repeats, then apply the cap."""
        seen = set()
        recent = []
        for item in items:
            trimmed = safe_strip(item)
            folded = trimmed.casefold()
            if not trimmed or folded in seen:
                continue
            seen.add(folded)
            recent.append(trimmed)
        return recent[: self._max_recent]

    @property
    def recent_searches(self) -> List[str]:
        return list(self._recent)

    @property
    def favorites(self) -> List[str]:
        return list(self._favorites)

    def record_search(self, query: str) -> None:
        """
        Move query to the front of recent searches.

        Any entry equal ignoring case is replaced by this spelling; entries
        beyond the cap are dropped.
        """
        trimmed = safe_strip(query)
        if not trimmed:
            return

        folded = trimmed.casefold()
        remaining = [item for item in self._recent if item.casefold() != folded]
        self._recent = [trimmed, *remaining][: self._max_recent]
        self._store.save(HISTORY_KEY, self._recent)

    def clear_history(self) -> None:
        """Remove all recent searches."""
        self._recent = []
        self._store.save(HISTORY_KEY, self._recent)

    def toggle_favorite(self, label: str) -> None:
        """Add label to favorites, or remove it if already there."""
        trimmed = safe_strip(label)
        if not trimmed:
            return

        if trimmed in self._favorites:
            self._favorites = [fav for fav in self._favorites if fav != trimmed]
            logger.debug(f"Removed favorite: {trimmed}")
        else:
            self._favorites = [*self._favorites, trimmed]
            logger.debug(f"Added favorite: {trimmed}")
        self._store.save(FAVORITES_KEY, self._favorites)

    def is_favorite(self, label: str) -> bool:
        trimmed = safe_strip(label)
        return bool(trimmed) and trimmed in self._favorites
