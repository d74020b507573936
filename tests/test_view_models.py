"""
Tests for the page view-models: stat cards and the page payload.
"""
import asyncio

from app.prediction import FormResult, HistoryManager, PredictionController, TeamStats
from app.view_models import FormBadge, PredictionPageView, TeamStatsCard


def test_win_rate_is_rounded_percentage():
    """Win rate is wins over games played, rounded to a whole percent."""
    card = TeamStatsCard.from_stats(TeamStats(name="Real Madrid", win=10, draw=3, loss=2))
    assert card.win_rate == 67


def test_win_rate_rounds_half_up():
    card = TeamStatsCard.from_stats(TeamStats(name="Arsenal", win=1, draw=0, loss=7))
    assert card.win_rate == 13  # 12.5%


def test_win_rate_of_empty_record_is_zero():
    """A team with no games does not divide by zero."""
    card = TeamStatsCard.from_stats(TeamStats(name="New Club"))
    assert card.win_rate == 0


def test_form_badges_have_styles():
    """W/D/L map to their styles, anything else is unknown."""
    card = TeamStatsCard.from_stats(
        TeamStats(name="Arsenal", form=(FormResult.WIN, FormResult.DRAW, FormResult.LOSS))
    )
    assert [b.style for b in card.form] == ["win", "draw", "loss"]
    assert FormBadge.from_result("?").style == "unknown"


def test_card_to_dict():
    card = TeamStatsCard.from_stats(
        TeamStats(name="Arsenal", win=1, draw=1, loss=0, form=(FormResult.WIN,))
    )
    assert card.to_dict() == {
        "name": "Arsenal",
        "win": 1,
        "draw": 1,
        "loss": 0,
        "win_rate": 50,
        "form": [{"result": "W", "style": "win"}],
    }


def test_page_view_from_controller(temp_store, fake_client_cls, clasico_result):
    """The page payload combines state, history, favorites and trending."""
    controller = PredictionController(fake_client_cls(result=clasico_result), HistoryManager(temp_store))
    asyncio.run(controller.quick_select("Real Madrid vs Barcelona"))
    controller.toggle_favorite("Real Madrid vs Barcelona")

    page = PredictionPageView.from_controller(controller).to_dict()

    assert page["status"] == "success"
    assert page["is_analyzing"] is False
    assert page["match"] == "Real Madrid vs Barcelona"
    assert [card["name"] for card in page["stats"]] == ["Real Madrid", "Barcelona"]
    assert page["links"] == [{"uri": "https://x", "title": "X"}]
    assert page["search_query"] == "Real Madrid vs Barcelona"
    assert page["is_favorite"] is True
    assert page["favorites"] == ["Real Madrid vs Barcelona"]
    assert page["recent_searches"] == ["Real Madrid vs Barcelona"]
    assert len(page["trending"]) == 4


def test_idle_page(temp_store, fake_client_cls):
    controller = PredictionController(fake_client_cls(), HistoryManager(temp_store))
    page = PredictionPageView.from_controller(controller).to_dict()
    assert page["status"] == "idle"
    assert page["error"] is None
    assert page["stats"] == []
    assert page["is_favorite"] is False
