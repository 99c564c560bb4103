"""View navigation for a session."""

from fastapi import HTTPException, status

from app.domain.models import UserRole, ViewState
from app.domain.state import LibraryState


class NavigationService:
    def __init__(self, state: LibraryState) -> None:
        self._state = state

    def navigate(self, view: ViewState) -> ViewState:
        """
        Switch to a top-level view. Leaving the details page drops the
        selection and its recommendation panel.
        """
        if view is ViewState.DETAILS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Open a book to view its details",
            )
        if view is ViewState.ADMIN_DASHBOARD and self._state.role is not UserRole.ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required",
            )
        self._state.clear_selection()
        self._state.view = view
        return view

    def go_home(self) -> ViewState:
        return self.navigate(self._state.home_view)
