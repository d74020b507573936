"""
GoalMind Predictor - Main FastAPI Application
AI match analysis with team stats, cited sources, favorites and recent searches
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse

from app.prediction import (
    PredictionController,
    Submit,
    QuickSelect,
    ToggleFavorite,
    ClearHistory,
    TRENDING_MATCHES,
    build_prediction_controller,
)
from app.schemas import (
    PredictRequest,
    QuickSelectRequest,
    FavoriteRequest,
    PredictResponse,
    TrendingResponse,
)
from app.view_models import PredictionPageView
from config.settings import settings

# Version tracking
APP_VERSION = "v1.0.0"
APP_NAME = "GoalMind Predictor"
APP_STAGE = "Beta"

TEMPLATE_PATH = Path(__file__).parent / "templates" / "index.html"

logger = logging.getLogger(__name__)


async def get_controller(request: Request) -> PredictionController:
    """
    The controller owned by this app instance.
    Built on first use when none was supplied to create_app.
    """
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        controller = build_prediction_controller()
        request.app.state.controller = controller
        logger.info("Prediction controller initialized")
    return controller


def _page(controller: PredictionController) -> dict:
    return PredictionPageView.from_controller(controller).to_dict()


def create_app(controller: Optional[PredictionController] = None) -> FastAPI:
    """Build the FastAPI app around one prediction controller."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=f"{APP_NAME} ({APP_STAGE})",
        description="AI-powered football match analysis",
        version=APP_VERSION,
    )
    app.state.controller = controller

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/version")
    def version_info():
        """Version information endpoint."""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "stage": APP_STAGE,
            "full": f"{APP_NAME} {APP_VERSION} ({APP_STAGE})"
        }

    @app.get("/", response_class=HTMLResponse)
    def home():
        """Prediction page. All state is fetched from /api/state."""
        if TEMPLATE_PATH.exists():
            return HTMLResponse(content=TEMPLATE_PATH.read_text(encoding="utf-8"))
        return HTMLResponse(content="<h1>Page template not found</h1>", status_code=500)

    # =========================================================================
    # PREDICTION API
    # =========================================================================

    @app.get("/api/state")
    async def api_state(controller: PredictionController = Depends(get_controller)):
        """Current page state: analysis result, favorites, history, trending."""
        return _page(controller)

    @app.post("/api/predict", response_model=PredictResponse)
    async def api_predict(
        body: PredictRequest,
        controller: PredictionController = Depends(get_controller),
    ):
        """
        Analyze the typed query.

        Blank queries and submits made while an analysis is running are
        refused with accepted=false and the unchanged state.
        """
        accepted = await controller.dispatch(Submit(query=body.query))
        return PredictResponse(accepted=accepted, state=_page(controller))

    @app.post("/api/quick-select", response_model=PredictResponse)
    async def api_quick_select(
        body: QuickSelectRequest,
        controller: PredictionController = Depends(get_controller),
    ):
        """Analyze a favorite, recent or trending entry."""
        accepted = await controller.dispatch(QuickSelect(query=body.query, source=body.source))
        return PredictResponse(accepted=accepted, state=_page(controller))

    @app.post("/api/favorites/toggle")
    async def api_toggle_favorite(
        body: FavoriteRequest,
        controller: PredictionController = Depends(get_controller),
    ):
        """Add or remove a favorite."""
        await controller.dispatch(ToggleFavorite(label=body.label))
        return _page(controller)

    @app.delete("/api/history")
    async def api_clear_history(controller: PredictionController = Depends(get_controller)):
        """Forget all recent searches."""
        await controller.dispatch(ClearHistory())
        return _page(controller)

    @app.get("/api/trending", response_model=TrendingResponse)
    def api_trending():
        """Suggested fixtures for the quick-access bar."""
        return TrendingResponse(matches=list(TRENDING_MATCHES))

    return app


app = create_app()
