"""Catalog browsing and admin inventory service."""

import logging
import time

from fastapi import HTTPException, status

from app.adapters.covers.openlibrary import OpenLibraryCoverAdapter
from app.api.schemas import BookCreateRequest
from app.domain.models import Book, BookStatus, EventKind, UserRole, ViewState
from app.domain.state import LibraryState

logger = logging.getLogger(__name__)

DEFAULT_GENRE = "General"
NEW_BOOK_DESCRIPTION = "A newly added book to the collection."
NEW_BOOK_RATING = 4.0


def search_books(catalog: list[Book], query: str) -> list[Book]:
    """Case-insensitive substring match on title, author or genre."""
    needle = query.strip().lower()
    if not needle:
        return list(catalog)
    return [
        b
        for b in catalog
        if needle in b.title.lower()
        or needle in b.author.lower()
        or needle in b.genre.lower()
    ]


class CatalogService:
    """Reads and edits the catalog of one session."""

    def __init__(self, state: LibraryState) -> None:
        self._state = state

    def get_book(self, book_id: str) -> Book:
        book = self._state.find_book(book_id)
        if not book:
            raise HTTPException(status_code=404, detail="Book not found")
        return book

    def view_book(self, book_id: str) -> Book:
        """Open a book's details page and add it to the viewing history."""
        book = self.get_book(book_id)
        state = self._state
        if state.selected_book_id != book.id:
            state.recommendations = None
        state.selected_book_id = book.id
        state.view = ViewState.DETAILS
        if state.history.append(book):
            state.record(EventKind.VIEW, book.id)
        return book

    def _require_admin(self) -> None:
        if self._state.role is not UserRole.ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required",
            )

    def _next_book_id(self) -> str:
        candidate = int(time.time() * 1000)
        while self._state.find_book(str(candidate)):
            candidate += 1
        return str(candidate)

    async def add_book(
        self, data: BookCreateRequest, covers: OpenLibraryCoverAdapter
    ) -> Book:
        """Create a book at the top of the catalog, with a looked-up cover."""
        self._require_admin()
        cover_url = await covers.find_cover_url(data.title)
        book = Book(
            id=self._next_book_id(),
            title=data.title,
            author=data.author,
            genre=data.genre or DEFAULT_GENRE,
            description=NEW_BOOK_DESCRIPTION,
            status=BookStatus.AVAILABLE,
            cover_url=cover_url,
            rating=NEW_BOOK_RATING,
        )
        self._state.catalog.insert(0, book)
        self._state.record(EventKind.BOOK_ADDED, book.id)
        logger.info("Book added: %s (%s)", book.title, book.id)
        return book

    def delete_book(self, book_id: str) -> None:
        """Remove a book from the catalog, the wishlist and the borrowed list."""
        self._require_admin()
        book = self.get_book(book_id)
        state = self._state
        state.catalog = [b for b in state.catalog if b.id != book.id]
        state.wishlist = [b for b in state.wishlist if b.id != book.id]
        state.borrowed = [b for b in state.borrowed if b.id != book.id]
        if state.selected_book_id == book.id:
            state.clear_selection()
        state.record(EventKind.BOOK_DELETED, book.id)
        logger.info("Book deleted: %s", book.id)

    def toggle_stock(self, book_id: str) -> Book:
        self._require_admin()
        book = self.get_book(book_id)
        book.status = (
            BookStatus.UNAVAILABLE if book.is_available else BookStatus.AVAILABLE
        )
        self._state.record(EventKind.STOCK_TOGGLED, book.id)
        return book
