"""Catalog, inventory, circulation and wishlist routes."""

from fastapi import APIRouter, Depends, Query, status

from app.adapters.covers.openlibrary import OpenLibraryCoverAdapter
from app.api.dependencies import get_cover_adapter
from app.api.middleware.auth import get_current_session
from app.api.schemas import (
    BookCreateRequest,
    BookDetailResponse,
    BookResponse,
    WishlistToggleResponse,
)
from app.domain.models import Book
from app.domain.state import LibraryState
from app.services.catalog import CatalogService, search_books
from app.services.circulation import CirculationService

router = APIRouter(tags=["Books"])


def _detail(state: LibraryState, book: Book) -> BookDetailResponse:
    return BookDetailResponse(
        **BookResponse.model_validate(book).model_dump(),
        in_wishlist=state.is_wishlisted(book.id),
        borrowed_by_me=state.is_borrowed(book.id),
    )


# ── Catalog ────────────────────────────────────────


@router.get("/books", response_model=list[BookResponse])
async def list_books(
    q: str = Query(default="", description="Search by title, author, or genre"),
    state: LibraryState = Depends(get_current_session),
) -> list[BookResponse]:
    return [BookResponse.model_validate(b) for b in search_books(state.catalog, q)]


@router.get("/books/{book_id}", response_model=BookDetailResponse)
async def view_book(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> BookDetailResponse:
    """Open a book's details page; the view is added to the session history."""
    book = CatalogService(state).view_book(book_id)
    return _detail(state, book)


# ── Admin Inventory ────────────────────────────────


@router.post("/books", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def add_book(
    data: BookCreateRequest,
    state: LibraryState = Depends(get_current_session),
    covers: OpenLibraryCoverAdapter = Depends(get_cover_adapter),
) -> BookResponse:
    book = await CatalogService(state).add_book(data, covers)
    return BookResponse.model_validate(book)


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> None:
    CatalogService(state).delete_book(book_id)


@router.post("/books/{book_id}/toggle-stock", response_model=BookResponse)
async def toggle_stock(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> BookResponse:
    book = CatalogService(state).toggle_stock(book_id)
    return BookResponse.model_validate(book)


# ── Circulation ────────────────────────────────────


@router.post(
    "/books/{book_id}/borrow",
    response_model=BookDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def borrow_book(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> BookDetailResponse:
    book = CirculationService(state).borrow(book_id)
    return _detail(state, book)


@router.post("/books/{book_id}/return", response_model=BookDetailResponse)
async def return_book(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> BookDetailResponse:
    book = CirculationService(state).return_book(book_id)
    return _detail(state, book)


@router.get("/borrowed", response_model=list[BookResponse])
async def list_borrowed(state: LibraryState = Depends(get_current_session)) -> list[BookResponse]:
    return [BookResponse.model_validate(b) for b in state.borrowed]


# ── Wishlist ───────────────────────────────────────


@router.post("/wishlist/{book_id}", response_model=WishlistToggleResponse)
async def toggle_wishlist(
    book_id: str,
    state: LibraryState = Depends(get_current_session),
) -> WishlistToggleResponse:
    in_wishlist = CirculationService(state).toggle_wishlist(book_id)
    return WishlistToggleResponse(book_id=book_id, in_wishlist=in_wishlist)


@router.get("/wishlist", response_model=list[BookResponse])
async def list_wishlist(state: LibraryState = Depends(get_current_session)) -> list[BookResponse]:
    return [BookResponse.model_validate(b) for b in state.wishlist]
