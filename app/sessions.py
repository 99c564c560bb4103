"""In-memory registry of open library sessions, keyed by bearer token."""

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable

from app.config import settings
from app.domain.catalog import initial_books
from app.domain.models import UserRole
from app.domain.state import LibraryState, home_view_for
from app.services.seats import SeatSimulator, generate_seats

logger = logging.getLogger(__name__)


@dataclass
class OpenSession:
    token: str
    state: LibraryState
    simulator: SeatSimulator
    last_seen: float


class SessionRegistry:
    """
    Owns every LibraryState and the background task attached to it.

    Sessions idle for longer than `idle_ttl` seconds are closed on the next
    registry access. Opening a session beyond `max_sessions` closes the
    least recently used ones first.
    """

    def __init__(
        self,
        idle_ttl: float,
        max_sessions: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_ttl = idle_ttl
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: dict[str, OpenSession] = {}

    async def open(self, role: UserRole, username: str, seat_interval: float) -> OpenSession:
        """Create a fresh session, start its seat feed and return it."""
        await self.reap_expired()
        while len(self._sessions) >= self.max_sessions:
            oldest = min(self._sessions.values(), key=lambda s: s.last_seen)
            logger.info("Session limit reached; evicting user=%s", oldest.state.username)
            await self.close(oldest.token)

        seats = generate_seats()
        state = LibraryState(
            username=username,
            role=role,
            catalog=initial_books(),
            seats=seats,
            view=home_view_for(role),
        )
        simulator = SeatSimulator(seats, interval=seat_interval)
        simulator.start()

        token = secrets.token_urlsafe(32)
        entry = OpenSession(
            token=token, state=state, simulator=simulator, last_seen=self._clock()
        )
        self._sessions[token] = entry
        logger.info("Session opened: user=%s role=%s", username, role.value)
        return entry

    async def get(self, token: str) -> OpenSession | None:
        """Look up a live session and mark it as used."""
        await self.reap_expired()
        entry = self._sessions.get(token)
        if entry is not None:
            entry.last_seen = self._clock()
        return entry

    async def reap_expired(self) -> int:
        now = self._clock()
        expired = [
            token
            for token, entry in self._sessions.items()
            if now - entry.last_seen > self.idle_ttl
        ]
        for token in expired:
            logger.info("Session expired: user=%s", self._sessions[token].state.username)
            await self.close(token)
        return len(expired)

    async def close(self, token: str) -> None:
        entry = self._sessions.pop(token, None)
        if entry is None:
            return
        await entry.simulator.stop()
        logger.info("Session closed: user=%s", entry.state.username)

    async def close_all(self) -> None:
        for token in list(self._sessions):
            await self.close(token)

    def __len__(self) -> int:
        return len(self._sessions)


registry = SessionRegistry(
    idle_ttl=settings.session_idle_ttl,
    max_sessions=settings.max_sessions,
)
