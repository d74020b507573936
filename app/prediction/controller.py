"""
Prediction controller - the state machine behind the prediction view.

States:
    idle -> analyzing -> success | error
    success | error -> analyzing (next submit)

All transitions run on one event loop. The awaited analysis call is the
only suspension point, and submits arriving while it is pending are refused,
so at most one analysis is ever in flight. There is no timeout. If the
awaiting task is cancelled, the guard is released and the cancellation
propagates.
"""
import logging
from typing import List, Optional, Union

from app.utils.helpers import safe_strip
from .history import HistoryManager
from .llm import AnalysisClient
from .models import (
    AnalysisResult,
    PredictionState,
    QuerySource,
    Submit,
    QuickSelect,
    ToggleFavorite,
    ClearHistory,
)

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Something went wrong. Please try again."

TRENDING_MATCHES = [
    "Liverpool vs Manchester City",
    "Real Madrid vs Barcelona",
    "Inter Milan vs AC Milan",
    "Bayern Munich vs Bayer Leverkusen",
]

Event = Union[Submit, QuickSelect, ToggleFavorite, ClearHistory]


class PredictionController:
    """
    Owns PredictionState and funnels every change through named transitions.

    Also tracks search_query, the text mirrored into the visible input.
    """

    def __init__(self, client: AnalysisClient, history: HistoryManager):
        self._client = client
        self._history = history
        self._state = PredictionState()
        self.search_query = ""

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def is_analyzing(self) -> bool:
        return self._state.is_analyzing

    @property
    def trending(self) -> List[str]:
        return list(TRENDING_MATCHES)

    def snapshot(self) -> PredictionState:
        """Copy of the current state for renderers."""
        return self._state.copy()

    # =========================================================================
    # Transitions
    # =========================================================================

    def _start(self) -> None:
        self._state.is_analyzing = True
        self._state.error = None
        self._state.prediction = ""
        self._state.stats = []

    def _resolve_success(self, query: str, result: AnalysisResult) -> None:
        self._state = PredictionState(
            match=query,
            prediction=result.text,
            is_analyzing=False,
            links=list(result.links),
            stats=list(result.stats),
        )
        self._history.record_search(query)

    def _resolve_error(self, error: Exception) -> None:
        # Prior prediction, stats and links are left as they were
        self._state.is_analyzing = False
        self._state.error = str(error) or FALLBACK_ERROR_MESSAGE

    async def submit(self, query: str, source: QuerySource = QuerySource.TYPED) -> bool:
        """
        Analyze query.

        Returns False without touching state when the query is blank or an
        analysis is already running; True once the analysis has resolved
        either way.
        """
        query = safe_strip(query)
        if not query or self._state.is_analyzing:
            logger.debug(f"Submit ignored (blank={not query}, analyzing={self._state.is_analyzing})")
            return False

        if source is QuerySource.TYPED:
            self.search_query = query

        self._start()
        try:
            result = await self._client.analyze(query)
        except Exception as e:
            logger.warning(f"Analysis failed for {query!r}: {e}")
            self._resolve_error(e)
            return True
        finally:
            # Cancellation must not leave the guard closed
            self._state.is_analyzing = False

        self._resolve_success(query, result)
        return True

    async def quick_select(self, query: str, source: QuerySource = QuerySource.TRENDING) -> bool:
        """Mirror a favorite/recent/trending entry into the input, then submit it."""
        self.search_query = query
        return await self.submit(query, source=source)

    def toggle_favorite(self, label: str) -> None:
        self._history.toggle_favorite(label)

    def clear_history(self) -> None:
        self._history.clear_history()

    async def dispatch(self, event: Event) -> Optional[bool]:
        """
        Apply one UI event.

        Returns the submit outcome for Submit/QuickSelect, None otherwise.
        """
        if isinstance(event, Submit):
            return await self.submit(event.query)
        if isinstance(event, QuickSelect):
            return await self.quick_select(event.query, source=event.source)
        if isinstance(event, ToggleFavorite):
            self.toggle_favorite(event.label)
            return None
        if isinstance(event, ClearHistory):
            self.clear_history()
            return None
        raise TypeError(f"Unknown event: {type(event).__name__}")
