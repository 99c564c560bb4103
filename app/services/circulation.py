"""Borrow, return and wishlist service."""

from fastapi import HTTPException, status

from app.domain.models import Book, BookStatus, EventKind
from app.domain.state import LibraryState
from app.services.catalog import CatalogService


class CirculationService:
    """Moves books between the shelf, the user's hands and the wishlist."""

    def __init__(self, state: LibraryState) -> None:
        self._state = state
        self._catalog = CatalogService(state)

    def borrow(self, book_id: str) -> Book:
        """
        Borrow a book.

        Raises 409 if this session already holds it or it is out of stock.
        """
        book = self._catalog.get_book(book_id)
        if self._state.is_borrowed(book.id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Book already borrowed",
            )
        if not book.is_available:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Book is out of stock",
            )

        book.status = BookStatus.UNAVAILABLE
        self._state.borrowed.append(book)
        self._state.record(EventKind.BORROW, book.id)
        return book

    def return_book(self, book_id: str) -> Book:
        """Return a borrowed book. Raises 409 if this session does not hold it."""
        book = self._catalog.get_book(book_id)
        if not self._state.is_borrowed(book.id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Book is not borrowed by you",
            )

        book.status = BookStatus.AVAILABLE
        self._state.borrowed = [b for b in self._state.borrowed if b.id != book.id]
        self._state.record(EventKind.RETURN, book.id)
        return book

    def toggle_wishlist(self, book_id: str) -> bool:
        """Add or remove a book from the wishlist. Returns the new membership."""
        book = self._catalog.get_book(book_id)
        if self._state.is_wishlisted(book.id):
            self._state.wishlist = [b for b in self._state.wishlist if b.id != book.id]
            self._state.record(EventKind.WISHLIST_REMOVE, book.id)
            return False

        self._state.wishlist.append(book)
        self._state.record(EventKind.WISHLIST_ADD, book.id)
        return True
