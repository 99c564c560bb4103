"""Login gate and session lifecycle service."""

import hmac

from fastapi import HTTPException, status

from app.domain.models import UserRole
from app.ports.auth import CredentialVerifier
from app.sessions import OpenSession, SessionRegistry


class DemoCredentialVerifier(CredentialVerifier):
    """
    Any non-blank student id may log in. Admins need the configured password;
    with none configured, admin login is closed.
    """

    def __init__(self, admin_password: str | None) -> None:
        self._admin_password = admin_password

    def verify(self, role: UserRole, username: str, password: str) -> str | None:
        if role is UserRole.ADMIN:
            if not self._admin_password:
                return "Admin login is disabled"
            if not hmac.compare_digest(password.encode(), self._admin_password.encode()):
                return "Invalid admin credentials"
            return None
        if not username.strip():
            return "Please enter your Student ID"
        return None


class AuthService:
    """Opens and closes sessions after checking credentials."""

    def __init__(
        self,
        registry: SessionRegistry,
        verifier: CredentialVerifier,
        seat_interval: float,
    ) -> None:
        self._registry = registry
        self._verifier = verifier
        self._seat_interval = seat_interval

    async def login(self, role: UserRole, username: str, password: str) -> OpenSession:
        """Authenticate and open a session. Raises 401 on rejection."""
        error = self._verifier.verify(role, username, password)
        if error:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error,
            )

        username = username.strip()
        if role is UserRole.ADMIN and not username:
            username = "Admin"
        return await self._registry.open(role, username, self._seat_interval)

    async def logout(self, token: str) -> None:
        await self._registry.close(token)
