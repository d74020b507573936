"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel
from typing import Any, Dict, List

from app.prediction import QuerySource


# ===== REQUEST SCHEMAS =====

class PredictRequest(BaseModel):
    """Query typed into the search input"""
    query: str


class QuickSelectRequest(BaseModel):
    """Favorite, recent or trending entry picked from a quick-access bar"""
    query: str
    source: QuerySource = QuerySource.TRENDING


class FavoriteRequest(BaseModel):
    """Label to add to or remove from favorites"""
    label: str


# ===== RESPONSE SCHEMAS =====

class PredictResponse(BaseModel):
    """Submit outcome plus the page state after it"""
    accepted: bool
    state: Dict[str, Any]


class TrendingResponse(BaseModel):
    """Suggested fixtures"""
    matches: List[str]
