"""
Data models for match prediction.

Defines the analysis result shapes, the view state owned by the controller,
and the events the controller consumes.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum


# Form is reported for the last five matches
MAX_FORM_LENGTH = 5

NO_ANALYSIS_TEXT = "No analysis available."


class FormResult(str, Enum):
    """Outcome of a single match in a team's recent form."""
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


class AnalysisStatus(str, Enum):
    """Render mode of the prediction view."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


class QuerySource(str, Enum):
    """Where a submitted query came from."""
    TYPED = "typed"
    FAVORITE = "favorite"
    RECENT = "recent"
    TRENDING = "trending"


@dataclass(frozen=True)
class TeamStats:
    """
    Current-season record and recent form for one team.

    Built wholesale from an analysis response and never modified.
    """
    name: str
    win: int = 0
    draw: int = 0
    loss: int = 0
    form: tuple = ()  # Tuple[FormResult, ...], most recent match order as returned

    @property
    def played(self) -> int:
        return self.win + self.draw + self.loss

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "win": self.win,
            "draw": self.draw,
            "loss": self.loss,
            "form": [result.value for result in self.form],
        }


@dataclass(frozen=True)
class GroundingLink:
    """A web source cited by the analysis."""
    uri: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {"uri": self.uri, "title": self.title}


@dataclass
class AnalysisResult:
    """Everything one analysis call produces."""
    text: str = NO_ANALYSIS_TEXT
    links: List[GroundingLink] = field(default_factory=list)
    stats: List[TeamStats] = field(default_factory=list)


@dataclass
class PredictionState:
    """
    Single source of truth for the prediction view.

    Only PredictionController mutates this. While is_analyzing is True,
    error, prediction and stats are always cleared.
    """
    match: str = ""
    prediction: str = ""
    is_analyzing: bool = False
    links: List[GroundingLink] = field(default_factory=list)
    stats: List[TeamStats] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def status(self) -> AnalysisStatus:
        """Derive the current render mode."""
        if self.is_analyzing:
            return AnalysisStatus.ANALYZING
        if self.error:
            return AnalysisStatus.ERROR
        if self.prediction:
            return AnalysisStatus.SUCCESS
        return AnalysisStatus.IDLE

    def copy(self) -> "PredictionState":
        return PredictionState(
            match=self.match,
            prediction=self.prediction,
            is_analyzing=self.is_analyzing,
            links=list(self.links),
            stats=list(self.stats),
            error=self.error,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "match": self.match,
            "prediction": self.prediction,
            "is_analyzing": self.is_analyzing,
            "links": [link.to_dict() for link in self.links],
            "stats": [team.to_dict() for team in self.stats],
            "error": self.error,
        }


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class Submit:
    """Analyze the query typed into the search input."""
    query: str


@dataclass(frozen=True)
class QuickSelect:
    """Analyze a favorite, recent or trending entry."""
    query: str
    source: QuerySource = QuerySource.TRENDING


@dataclass(frozen=True)
class ToggleFavorite:
    """Add or remove a favorite label."""
    label: str


@dataclass(frozen=True)
class ClearHistory:
    """Forget all recent searches."""
    pass
