"""In-memory domain models for a single library session."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"


class ViewState(str, Enum):
    CATALOG = "CATALOG"
    DETAILS = "DETAILS"
    ADMIN_DASHBOARD = "ADMIN_DASHBOARD"
    WISHLIST = "WISHLIST"
    SEAT_MAP = "SEAT_MAP"


class Zone(str, Enum):
    MAIN_READING_HALL = "Main Reading Hall"
    QUIET_ZONE = "Quiet Zone"
    MEDIA_CENTER = "Media Center"


class EventKind(str, Enum):
    VIEW = "view"
    BORROW = "borrow"
    RETURN = "return"
    WISHLIST_ADD = "wishlist_add"
    WISHLIST_REMOVE = "wishlist_remove"
    BOOK_ADDED = "book_added"
    BOOK_DELETED = "book_deleted"
    STOCK_TOGGLED = "stock_toggled"


@dataclass
class Book:
    id: str
    title: str
    author: str
    genre: str
    description: str
    status: BookStatus
    cover_url: str
    rating: float

    @property
    def is_available(self) -> bool:
        return self.status is BookStatus.AVAILABLE


@dataclass
class Seat:
    id: int
    zone: Zone
    is_occupied: bool


@dataclass(frozen=True)
class SessionEvent:
    kind: EventKind
    book_id: str
    at: datetime = field(default_factory=_utcnow)


class ViewHistory:
    """Books viewed this session, oldest first.

    Appending the book that is already the most recent entry is a no-op, so
    re-opening the same details page does not grow the history.
    """

    def __init__(self) -> None:
        self._books: list[Book] = []

    def append(self, book: Book) -> bool:
        """Record a view. Returns False when it repeats the latest entry."""
        if self._books and self._books[-1].id == book.id:
            return False
        self._books.append(book)
        return True

    def snapshot(self) -> list[Book]:
        return list(self._books)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self):
        return iter(list(self._books))
