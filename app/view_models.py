"""
View Models for UI Rendering
Strict mapping layer that converts controller state into presentation-ready models.
The page only consumes these payloads, never PredictionState directly.
"""
import math
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field

from app.prediction import PredictionController, TeamStats, FormResult


# =============================================================================
# PAYLOAD CONTRACTS (UI-Stable View Models)
# =============================================================================

FORM_STYLES = {
    FormResult.WIN.value: "win",
    FormResult.DRAW.value: "draw",
    FormResult.LOSS.value: "loss",
}


@dataclass
class FormBadge:
    """One square in the form strip."""
    result: str
    style: str  # "win" | "draw" | "loss" | "unknown"

    @classmethod
    def from_result(cls, result: Any) -> "FormBadge":
        value = result.value if isinstance(result, FormResult) else str(result)
        return cls(result=value, style=FORM_STYLES.get(value, "unknown"))


@dataclass
class TeamStatsCard:
    """
    Stable payload for a team stat card.
    UI relies on these exact field names.
    """
    name: str
    win: int
    draw: int
    loss: int
    win_rate: int  # Percentage, 0-100
    form: List[FormBadge] = field(default_factory=list)

    @classmethod
    def from_stats(cls, stats: TeamStats) -> "TeamStatsCard":
        """Map TeamStats to a card, computing the win rate."""
        # An empty record divides by 1 so the rate is 0
        total = stats.played or 1
        return cls(
            name=stats.name,
            win=stats.win,
            draw=stats.draw,
            loss=stats.loss,
            win_rate=math.floor(stats.win / total * 100 + 0.5),
            form=[FormBadge.from_result(r) for r in stats.form],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "name": self.name,
            "win": self.win,
            "draw": self.draw,
            "loss": self.loss,
            "win_rate": self.win_rate,
            "form": [{"result": b.result, "style": b.style} for b in self.form],
        }


@dataclass
class PredictionPageView:
    """
    Everything the prediction page renders.

    status drives which section is shown:
    idle -> feature cards, analyzing -> spinner,
    success -> stats + analysis + sources, error -> error banner.
    """
    status: str
    match: str
    prediction: str
    error: Optional[str]
    links: List[Dict[str, str]]
    stats: List[TeamStatsCard]
    search_query: str
    is_favorite: bool
    favorites: List[str]
    recent_searches: List[str]
    trending: List[str]

    @classmethod
    def from_controller(cls, controller: PredictionController) -> "PredictionPageView":
        state = controller.snapshot()
        history = controller.history
        return cls(
            status=state.status.value,
            match=state.match,
            prediction=state.prediction,
            error=state.error,
            links=[link.to_dict() for link in state.links],
            stats=[TeamStatsCard.from_stats(s) for s in state.stats],
            search_query=controller.search_query,
            is_favorite=history.is_favorite(controller.search_query),
            favorites=history.favorites,
            recent_searches=history.recent_searches,
            trending=controller.trending,
        )

    @property
    def is_analyzing(self) -> bool:
        return self.status == "analyzing"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "status": self.status,
            "is_analyzing": self.is_analyzing,
            "match": self.match,
            "prediction": self.prediction,
            "error": self.error,
            "links": self.links,
            "stats": [card.to_dict() for card in self.stats],
            "search_query": self.search_query,
            "is_favorite": self.is_favorite,
            "favorites": self.favorites,
            "recent_searches": self.recent_searches,
            "trending": self.trending,
        }
