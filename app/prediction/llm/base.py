"""Base analysis client abstraction.

An analysis client turns a match query into commentary, team statistics
and the web sources behind them. Exactly one upstream request is made per
call: no retries, no caching, no streaming.
"""

from abc import ABC, abstractmethod

from ..models import AnalysisResult


ANALYSIS_FAILED_MESSAGE = (
    "Failed to generate football prediction. "
    "Please check your connection or try a different match."
)


class AnalysisError(Exception):
    """Raised when the analysis request itself fails.

    The message is always the generic user-facing one; the underlying cause
    is logged by the client and chained as __cause__.
    """

    def __init__(self, message: str = ANALYSIS_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class AnalysisClient(ABC):
    """
    Abstract base class for match analysis providers.

    Implementations must degrade a malformed response to placeholder text
    and empty stats, and raise AnalysisError only when the request fails.
    """

    @abstractmethod
    async def analyze(self, query: str) -> AnalysisResult:
        """
        Analyze a match query.

        Args:
            query: Free-text match description, e.g. "Chelsea vs Arsenal"

        Returns:
            AnalysisResult with text, grounding links and team stats

        Raises:
            AnalysisError: transport, authentication or service failure
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        pass
