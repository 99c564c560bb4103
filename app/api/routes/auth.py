"""Login, logout and profile routes."""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_credential_verifier
from app.api.middleware.auth import get_current_session, get_session_token
from app.api.routes.session import session_snapshot
from app.api.schemas import LoginRequest, SessionResponse, TokenResponse
from app.config import settings
from app.domain.state import LibraryState
from app.ports.auth import CredentialVerifier
from app.services.auth import AuthService
from app.sessions import registry

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> AuthService:
    return AuthService(registry, verifier, settings.seat_refresh_interval)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Open a session and start its live seat feed."""
    session = await service.login(data.role, data.username, data.password)
    return TokenResponse(
        access_token=session.token,
        username=session.state.username,
        role=session.state.role,
        view=session.state.view,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(get_session_token),
    _state: LibraryState = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Close the session; wishlist, history and borrowed books are discarded."""
    await service.logout(token)


@router.get("/profile", response_model=SessionResponse)
async def profile(state: LibraryState = Depends(get_current_session)) -> SessionResponse:
    return session_snapshot(state)
