# Analysis clients for match prediction
# One grounded request per query; failures surface as AnalysisError

import logging

from dotenv import load_dotenv
from .base import AnalysisClient, AnalysisError, ANALYSIS_FAILED_MESSAGE
from .gemini import GeminiAnalysisClient

# Ensure .env is loaded for API key access
load_dotenv()

logger = logging.getLogger(__name__)

__all__ = [
    "AnalysisClient",
    "AnalysisError",
    "ANALYSIS_FAILED_MESSAGE",
    "GeminiAnalysisClient",
    "get_analysis_client",
]


def get_analysis_client() -> AnalysisClient:
    """
    Get the configured analysis client.

    Always returns a GeminiAnalysisClient. Without API_KEY every request
    fails with the generic AnalysisError, which the UI shows as an error
    state the user can retry from.
    """
    from config.settings import settings

    if not settings.api_key:
        logger.warning("API_KEY is not set; analysis requests will fail")

    return GeminiAnalysisClient(api_key=settings.api_key, model=settings.gemini_model)
