"""Seat map generation and the simulated live-occupancy feed."""

import asyncio
import logging
import random

from app.domain.models import Seat, Zone

logger = logging.getLogger(__name__)

# zone -> (seat count, probability a seat starts occupied)
ZONE_LAYOUT: dict[Zone, tuple[int, float]] = {
    Zone.MAIN_READING_HALL: (60, 0.4),
    Zone.QUIET_ZONE: (30, 0.3),
    Zone.MEDIA_CENTER: (30, 0.5),
}
TOTAL_SEATS = sum(count for count, _ in ZONE_LAYOUT.values())

MIN_TOGGLES = 3
MAX_TOGGLES = 6


def generate_seats(rng: random.Random | None = None) -> list[Seat]:
    """Build the seat map with ids numbered from 1, zone by zone."""
    rng = rng or random.Random()
    seats: list[Seat] = []
    for zone, (count, occupied_p) in ZONE_LAYOUT.items():
        for _ in range(count):
            seats.append(
                Seat(id=len(seats) + 1, zone=zone, is_occupied=rng.random() < occupied_p)
            )
    return seats


def toggle_random_seats(seats: list[Seat], rng: random.Random | None = None) -> int:
    """Flip the occupancy of 3-6 randomly picked seats. Returns the flip count."""
    if not seats:
        return 0
    rng = rng or random.Random()
    changes = rng.randint(MIN_TOGGLES, MAX_TOGGLES)
    for _ in range(changes):
        seat = seats[rng.randrange(len(seats))]
        seat.is_occupied = not seat.is_occupied
    return changes


class SeatSimulator:
    """
    Periodic task that keeps a seat map changing while its session is open.

    Call start() from a running event loop and stop() on teardown.
    """

    def __init__(
        self,
        seats: list[Seat],
        interval: float,
        rng: random.Random | None = None,
    ) -> None:
        self._seats = seats
        self._interval = interval
        self._rng = rng or random.Random()
        self._task: asyncio.Task | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.debug("Seat simulator started (interval=%.2fs)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("Seat simulator stopped after %d ticks", self.ticks)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            toggle_random_seats(self._seats, self._rng)
            self.ticks += 1
