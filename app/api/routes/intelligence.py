"""Intelligence & recommendation routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_recommender
from app.api.middleware.auth import get_current_session
from app.api.schemas import RecommendationsResponse
from app.domain.state import LibraryState
from app.ports.recommender import RecommenderPort
from app.services.recommendation import RecommendationController

router = APIRouter(tags=["Intelligence"])


@router.get("/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    state: LibraryState = Depends(get_current_session),
    recommender: RecommenderPort = Depends(get_recommender),
) -> RecommendationsResponse:
    """Get "you might also like" suggestions for the book being viewed."""
    if state.selected_book is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No book selected",
        )

    panel = await RecommendationController(recommender).refresh(state)
    if panel is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Selection changed before recommendations arrived",
        )

    return RecommendationsResponse.from_panel(panel)
