"""Pydantic request/response schemas for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.models import BookStatus, EventKind, UserRole, ViewState, Zone
from app.domain.state import RecommendationPanel

# ── Auth ───────────────────────────────────────────


class LoginRequest(BaseModel):
    role: UserRole = UserRole.STUDENT
    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str
    role: UserRole
    view: ViewState


class NavigateRequest(BaseModel):
    view: ViewState


# ── Books ──────────────────────────────────────────


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    author: str
    genre: str
    description: str
    status: BookStatus
    cover_url: str
    rating: float


class BookDetailResponse(BookResponse):
    in_wishlist: bool
    borrowed_by_me: bool


class BookCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=500)
    author: str = Field(min_length=1, max_length=300)
    genre: str | None = Field(default=None, max_length=100)


class WishlistToggleResponse(BaseModel):
    book_id: str
    in_wishlist: bool


# ── Seats ──────────────────────────────────────────


class SeatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    zone: Zone
    is_occupied: bool


class ZoneResponse(BaseModel):
    zone: Zone
    total: int
    available: int
    seats: list[SeatResponse]


class SeatMapResponse(BaseModel):
    total: int
    available: int
    zones: list[ZoneResponse]


# ── Intelligence ───────────────────────────────────


class RecommendationsResponse(BaseModel):
    focal_book_id: str
    books: list[BookResponse]
    reasoning: str

    @classmethod
    def from_panel(cls, panel: RecommendationPanel) -> "RecommendationsResponse":
        return cls(
            focal_book_id=panel.focal_book_id,
            books=[BookResponse.model_validate(b) for b in panel.books],
            reasoning=panel.reasoning,
        )


# ── Session ────────────────────────────────────────


class SessionResponse(BaseModel):
    username: str
    role: UserRole
    view: ViewState
    selected_book_id: str | None
    wishlist_count: int
    borrowed_count: int
    available_seats: int
    total_seats: int
    recommendations: RecommendationsResponse | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: EventKind
    book_id: str
    at: datetime
