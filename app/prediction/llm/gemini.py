"""Gemini analysis client.

Asks Gemini for a grounded match analysis with a strict JSON schema:
    {"analysis": str, "stats": [{"name", "win", "draw", "loss", "form"}]}
Citations come from the response's grounding metadata, not the JSON body.
"""

import json
import os
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from .base import AnalysisClient, AnalysisError
from ..models import (
    AnalysisResult,
    FormResult,
    GroundingLink,
    TeamStats,
    MAX_FORM_LENGTH,
    NO_ANALYSIS_TEXT,
)
from app.utils.helpers import safe_count, safe_str, safe_strip

logger = logging.getLogger(__name__)


# ============================================================================
# Prompt Templates
# ============================================================================

SYSTEM_INSTRUCTION = """You are an expert football analyst.
Analyze the requested match and provide:
1. A detailed analysis in markdown format.
2. Current season statistics for both teams involved (Win, Draw, Loss records).
3. Recent form (last 5 matches) as a list of 'W', 'D', or 'L'.

You MUST return the response in the specified JSON format."""


ANALYSIS_PROMPT = (
    "Provide a full analysis and current season stats for: {query}. "
    "Include win/draw/loss counts for their respective leagues."
)


RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "analysis": types.Schema(
            type=types.Type.STRING,
            description="The detailed match analysis in markdown format.",
        ),
        "stats": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": types.Schema(type=types.Type.STRING, description="Full name of the team"),
                    "win": types.Schema(type=types.Type.INTEGER),
                    "draw": types.Schema(type=types.Type.INTEGER),
                    "loss": types.Schema(type=types.Type.INTEGER),
                    "form": types.Schema(
                        type=types.Type.ARRAY,
                        items=types.Schema(type=types.Type.STRING),
                        description="Last 5 matches: W, D, or L",
                    ),
                },
                required=["name", "win", "draw", "loss", "form"],
            ),
        ),
    },
    required=["analysis", "stats"],
)


def build_analysis_prompt(query: str) -> str:
    return ANALYSIS_PROMPT.format(query=query)


def build_generation_config() -> types.GenerateContentConfig:
    """Grounded generation with the strict analysis schema."""
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_INSTRUCTION,
        tools=[types.Tool(google_search=types.GoogleSearch())],
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )


# ============================================================================
# Response Parsing
# ============================================================================

def _parse_json_response(response_text: Optional[str]) -> Optional[Any]:
    """
    Parse JSON from Gemini's response.

    Handles markdown code blocks around the payload.
    """
    text = safe_strip(response_text)
    if not text:
        return None

    if text.startswith("```"):
        lines = text.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse Gemini response as JSON: {e}")
        logger.debug(f"Response was: {text[:500]}")
        return None


def parse_form(raw_form: Any) -> tuple:
    """Keep W/D/L entries only, at most MAX_FORM_LENGTH of them."""
    if not isinstance(raw_form, list):
        return ()

    form = []
    for item in raw_form:
        try:
            form.append(FormResult(safe_strip(item).upper()))
        except ValueError:
            continue
    return tuple(form[:MAX_FORM_LENGTH])


def parse_team_stats(raw_stats: Any) -> List[TeamStats]:
    """Build TeamStats from the stats array, skipping unusable entries."""
    if not isinstance(raw_stats, list):
        return []

    stats = []
    for item in raw_stats:
        if not isinstance(item, dict):
            continue
        name = safe_strip(item.get("name"))
        if not name:
            continue
        stats.append(TeamStats(
            name=name,
            win=safe_count(item.get("win")),
            draw=safe_count(item.get("draw")),
            loss=safe_count(item.get("loss")),
            form=parse_form(item.get("form")),
        ))
    return stats


def parse_analysis_payload(response_text: Optional[str]) -> AnalysisResult:
    """
    Turn the JSON body into analysis text and stats.

    A missing or malformed body degrades to the placeholder text and no
    stats; it is never an error.
    """
    data = _parse_json_response(response_text)
    if not isinstance(data, dict):
        return AnalysisResult(text=NO_ANALYSIS_TEXT, stats=[])

    analysis = data.get("analysis")
    text = analysis if isinstance(analysis, str) and analysis.strip() else NO_ANALYSIS_TEXT
    return AnalysisResult(text=text, stats=parse_team_stats(data.get("stats")))


def extract_grounding_links(response: Any) -> List[GroundingLink]:
    """
    Collect web citations from the first candidate's grounding metadata.

    Chunks without a destination URI are skipped; order is preserved.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    links = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = safe_strip(getattr(web, "uri", None))
        if not uri:
            continue
        title = safe_str(getattr(web, "title", None)).strip() or uri
        links.append(GroundingLink(uri=uri, title=title))
    return links


# ============================================================================
# GeminiAnalysisClient Implementation
# ============================================================================

class GeminiAnalysisClient(AnalysisClient):
    """
    Gemini-backed match analysis.

    The SDK client is built on first use, so a missing or bad credential
    surfaces as an AnalysisError on the request rather than at startup.
    """

    DEFAULT_MODEL = "gemini-3-flash-preview"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key. If not provided, reads from the
                     API_KEY environment variable.
            model: Model identifier
            client: Prebuilt genai.Client (tests pass a fake here)
        """
        self._api_key = api_key or os.environ.get("API_KEY")
        self._model = model or self.DEFAULT_MODEL
        self._client = client

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def analyze(self, query: str) -> AnalysisResult:
        """Run one grounded analysis request for query."""
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=build_analysis_prompt(query),
                config=build_generation_config(),
            )
        except Exception as e:
            logger.error(f"Gemini analysis error for {query!r}: {e}", exc_info=True)
            raise AnalysisError() from e

        result = parse_analysis_payload(getattr(response, "text", None))
        result.links = extract_grounding_links(response)
        logger.info(
            f"Analysis for {query!r}: {len(result.stats)} teams, {len(result.links)} sources"
        )
        return result
