"""
Shared fixtures: temporary preference database and a scripted analysis client.
"""
import tempfile
from pathlib import Path

import pytest

from app.db import make_engine
from app.prediction import (
    AnalysisClient,
    AnalysisResult,
    GroundingLink,
    PreferenceStore,
    TeamStats,
    FormResult,
)


class FakeAnalysisClient(AnalysisClient):
    """
    Analysis client that returns a canned result or raises a canned error.

    When gate is an asyncio.Event, analyze() waits on it first so tests can
    observe the controller while a request is in flight.
    """

    def __init__(self, result=None, error=None, gate=None):
        self.result = result or AnalysisResult()
        self.error = error
        self.gate = gate
        self.calls = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def analyze(self, query: str) -> AnalysisResult:
        self.calls.append(query)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def temp_store():
    """Create a temporary preference database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        engine = make_engine(f"sqlite:///{Path(tmpdir) / 'test_preferences.db'}")
        yield PreferenceStore(engine)
        engine.dispose()


@pytest.fixture
def fake_client_cls():
    """The FakeAnalysisClient class, for tests that build their own."""
    return FakeAnalysisClient


@pytest.fixture
def clasico_result():
    """Analysis of Real Madrid vs Barcelona with two teams and one source."""
    W, D, L = FormResult.WIN, FormResult.DRAW, FormResult.LOSS
    return AnalysisResult(
        text="## Preview\nMadrid are unbeaten at home.",
        links=[GroundingLink(uri="https://x", title="X")],
        stats=[
            TeamStats(name="Real Madrid", win=10, draw=3, loss=2, form=(W, W, D, L, W)),
            TeamStats(name="Barcelona", win=11, draw=2, loss=2, form=(W, L, W, W, D)),
        ],
    )
