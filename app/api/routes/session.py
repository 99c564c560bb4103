"""Session snapshot, navigation, history and activity routes."""

from fastapi import APIRouter, Depends

from app.api.middleware.auth import get_current_session
from app.api.schemas import (
    BookResponse,
    EventResponse,
    NavigateRequest,
    RecommendationsResponse,
    SessionResponse,
)
from app.domain.state import LibraryState
from app.services.navigation import NavigationService
from app.services.seats import TOTAL_SEATS

router = APIRouter(tags=["Session"])


def session_snapshot(state: LibraryState) -> SessionResponse:
    panel = state.recommendations
    return SessionResponse(
        username=state.username,
        role=state.role,
        view=state.view,
        selected_book_id=state.selected_book_id,
        wishlist_count=len(state.wishlist),
        borrowed_count=len(state.borrowed),
        available_seats=state.available_seats,
        total_seats=TOTAL_SEATS,
        recommendations=RecommendationsResponse.from_panel(panel) if panel else None,
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(state: LibraryState = Depends(get_current_session)) -> SessionResponse:
    return session_snapshot(state)


@router.post("/session/navigate", response_model=SessionResponse)
async def navigate(
    data: NavigateRequest,
    state: LibraryState = Depends(get_current_session),
) -> SessionResponse:
    NavigationService(state).navigate(data.view)
    return session_snapshot(state)


@router.post("/session/home", response_model=SessionResponse)
async def go_home(state: LibraryState = Depends(get_current_session)) -> SessionResponse:
    """Back to the role's landing view: catalog for students, dashboard for admins."""
    NavigationService(state).go_home()
    return session_snapshot(state)


@router.get("/history", response_model=list[BookResponse])
async def get_history(state: LibraryState = Depends(get_current_session)) -> list[BookResponse]:
    return [BookResponse.model_validate(b) for b in state.history]


@router.get("/events", response_model=list[EventResponse])
async def get_events(state: LibraryState = Depends(get_current_session)) -> list[EventResponse]:
    """Catalog, circulation and wishlist activity of this session, oldest first."""
    return [EventResponse.model_validate(e) for e in state.events]
