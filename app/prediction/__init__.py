"""
Match prediction - AI analysis with persisted history.

This module provides:
- Grounded match analysis with team stats and cited sources
- A single-flight state machine driving the prediction view
- Recent searches and favorites persisted between runs
"""
from typing import Optional

from .models import (
    TeamStats,
    GroundingLink,
    AnalysisResult,
    PredictionState,
    AnalysisStatus,
    FormResult,
    QuerySource,
    Submit,
    QuickSelect,
    ToggleFavorite,
    ClearHistory,
    MAX_FORM_LENGTH,
    NO_ANALYSIS_TEXT,
)
from .preferences import (
    PreferenceStore,
    get_preference_store,
    FAVORITES_KEY,
    HISTORY_KEY,
)
from .history import (
    HistoryManager,
)
from .llm import (
    AnalysisClient,
    AnalysisError,
    GeminiAnalysisClient,
    get_analysis_client,
)
from .controller import (
    PredictionController,
    TRENDING_MATCHES,
)


def build_prediction_controller(
    store: Optional[PreferenceStore] = None,
    client: Optional[AnalysisClient] = None,
) -> PredictionController:
    """Wire a controller from the configured store and analysis client."""
    history = HistoryManager(store or get_preference_store())
    return PredictionController(client or get_analysis_client(), history)


__all__ = [
    # Models
    "TeamStats",
    "GroundingLink",
    "AnalysisResult",
    "PredictionState",
    "AnalysisStatus",
    "FormResult",
    "QuerySource",
    "Submit",
    "QuickSelect",
    "ToggleFavorite",
    "ClearHistory",
    "MAX_FORM_LENGTH",
    "NO_ANALYSIS_TEXT",
    # Storage
    "PreferenceStore",
    "get_preference_store",
    "FAVORITES_KEY",
    "HISTORY_KEY",
    # History
    "HistoryManager",
    # Analysis
    "AnalysisClient",
    "AnalysisError",
    "GeminiAnalysisClient",
    "get_analysis_client",
    # Controller
    "PredictionController",
    "TRENDING_MATCHES",
    "build_prediction_controller",
]
