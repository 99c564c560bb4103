"""Credential verifier port."""

from abc import ABC, abstractmethod

from app.domain.models import UserRole


class CredentialVerifier(ABC):
    @abstractmethod
    def verify(self, role: UserRole, username: str, password: str) -> str | None:
        """Return an error message when the login is rejected, None when accepted."""
        ...
