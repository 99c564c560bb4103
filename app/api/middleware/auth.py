"""Bearer-token session resolution for route dependencies."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.state import LibraryState
from app.sessions import registry

bearer_scheme = HTTPBearer()


def get_session_token(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> str:
    return credentials.credentials


async def get_current_session(token: str = Depends(get_session_token)) -> LibraryState:
    """Resolve the caller's LibraryState. Raises 401 for unknown, closed or expired sessions."""
    entry = await registry.get(token)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return entry.state
