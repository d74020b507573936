"""
Prediction API tests: each route maps to one controller event.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.prediction import AnalysisError, HistoryManager, PredictionController


@pytest.fixture
def analysis_client(fake_client_cls, clasico_result):
    return fake_client_cls(result=clasico_result)


@pytest.fixture
def controller(temp_store, analysis_client):
    return PredictionController(analysis_client, HistoryManager(temp_store))


@pytest.fixture
def client(controller):
    return TestClient(create_app(controller=controller))


def test_state_starts_idle(client):
    """GET /api/state returns the idle page"""
    data = client.get("/api/state").json()
    assert data["status"] == "idle"
    assert data["recent_searches"] == []
    assert len(data["trending"]) == 4


def test_predict_success(client):
    """POST /api/predict analyzes and records the query"""
    response = client.post("/api/predict", json={"query": "Real Madrid vs Barcelona"})
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is True
    state = data["state"]
    assert state["status"] == "success"
    assert state["match"] == "Real Madrid vs Barcelona"
    assert state["error"] is None
    assert len(state["stats"]) == 2
    assert state["stats"][0]["win_rate"] == 67
    assert state["recent_searches"][0] == "Real Madrid vs Barcelona"


def test_predict_blank_query_is_refused(client):
    """Blank queries are not errors, just not accepted"""
    response = client.post("/api/predict", json={"query": "   "})
    assert response.status_code == 200
    assert response.json()["accepted"] is False
    assert response.json()["state"]["status"] == "idle"


def test_predict_failure(client, analysis_client):
    """Upstream failure shows up as the error state"""
    analysis_client.error = AnalysisError()
    data = client.post("/api/predict", json={"query": "Chelsea vs Arsenal"}).json()
    assert data["accepted"] is True
    assert data["state"]["status"] == "error"
    assert data["state"]["error"]
    assert data["state"]["recent_searches"] == []


def test_failed_predict_reports_typed_query(client, analysis_client):
    """After a quick-select, a failing typed submit still reports the typed text"""
    client.post("/api/quick-select", json={"query": "Inter Milan vs AC Milan", "source": "trending"})
    analysis_client.error = AnalysisError()
    data = client.post("/api/predict", json={"query": "Chelsea vs Arsenal"}).json()
    assert data["state"]["status"] == "error"
    assert data["state"]["search_query"] == "Chelsea vs Arsenal"


def test_predict_requires_query(client):
    """Missing body fields fail validation"""
    response = client.post("/api/predict", json={})
    assert response.status_code == 422


def test_quick_select(client):
    """POST /api/quick-select fills the input and analyzes"""
    data = client.post(
        "/api/quick-select", json={"query": "Inter Milan vs AC Milan", "source": "trending"}
    ).json()
    assert data["accepted"] is True
    assert data["state"]["search_query"] == "Inter Milan vs AC Milan"
    assert data["state"]["recent_searches"] == ["Inter Milan vs AC Milan"]


def test_quick_select_rejects_unknown_source(client):
    response = client.post("/api/quick-select", json={"query": "A vs B", "source": "nowhere"})
    assert response.status_code == 422


def test_toggle_favorite(client):
    """POST /api/favorites/toggle adds then removes"""
    data = client.post("/api/favorites/toggle", json={"label": "Arsenal"}).json()
    assert data["favorites"] == ["Arsenal"]
    data = client.post("/api/favorites/toggle", json={"label": "Arsenal"}).json()
    assert data["favorites"] == []


def test_clear_history(client):
    """DELETE /api/history empties recent searches"""
    client.post("/api/predict", json={"query": "Real Madrid vs Barcelona"})
    data = client.delete("/api/history").json()
    assert data["recent_searches"] == []


def test_trending(client):
    data = client.get("/api/trending").json()
    assert data["matches"][0] == "Liverpool vs Manchester City"
