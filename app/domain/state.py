"""Per-session application state."""

from dataclasses import dataclass, field

from app.domain.models import (
    Book,
    EventKind,
    Seat,
    SessionEvent,
    UserRole,
    ViewHistory,
    ViewState,
)


def home_view_for(role: UserRole) -> ViewState:
    if role is UserRole.ADMIN:
        return ViewState.ADMIN_DASHBOARD
    return ViewState.CATALOG


@dataclass(frozen=True)
class RecommendationTicket:
    """Identity of an issued recommendation request."""

    focal_book_id: str
    sequence: int


@dataclass
class RecommendationPanel:
    focal_book_id: str
    books: list[Book]
    reasoning: str


@dataclass
class LibraryState:
    """
    Everything one logged-in user sees: catalog, history, wishlist, borrowed
    books, seats, navigation and the recommendation panel.

    Services mutate it through discrete operations. Catalog, circulation and
    wishlist changes and views that extend the history record a SessionEvent;
    navigation does not.
    """

    username: str
    role: UserRole
    catalog: list[Book]
    seats: list[Seat]
    view: ViewState
    history: ViewHistory = field(default_factory=ViewHistory)
    wishlist: list[Book] = field(default_factory=list)
    borrowed: list[Book] = field(default_factory=list)
    selected_book_id: str | None = None
    recommendations: RecommendationPanel | None = None
    recommendation_sequence: int = 0
    events: list[SessionEvent] = field(default_factory=list)

    @property
    def home_view(self) -> ViewState:
        return home_view_for(self.role)

    @property
    def selected_book(self) -> Book | None:
        if self.selected_book_id is None:
            return None
        return self.find_book(self.selected_book_id)

    @property
    def available_seats(self) -> int:
        return sum(1 for s in self.seats if not s.is_occupied)

    def find_book(self, book_id: str) -> Book | None:
        return next((b for b in self.catalog if b.id == book_id), None)

    def is_wishlisted(self, book_id: str) -> bool:
        return any(b.id == book_id for b in self.wishlist)

    def is_borrowed(self, book_id: str) -> bool:
        return any(b.id == book_id for b in self.borrowed)

    def record(self, kind: EventKind, book_id: str) -> SessionEvent:
        event = SessionEvent(kind=kind, book_id=book_id)
        self.events.append(event)
        return event

    def clear_selection(self) -> None:
        self.selected_book_id = None
        self.recommendations = None

    # ── Recommendation tickets ─────────────────────

    def issue_recommendation_ticket(self, focal_book_id: str) -> RecommendationTicket:
        self.recommendation_sequence += 1
        return RecommendationTicket(focal_book_id, self.recommendation_sequence)

    def is_current(self, ticket: RecommendationTicket) -> bool:
        """True while the ticket is the latest one and its book is still selected."""
        return (
            ticket.sequence == self.recommendation_sequence
            and ticket.focal_book_id == self.selected_book_id
        )
