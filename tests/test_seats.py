"""Tests for the seat map and its simulated feed."""

import asyncio
import random

import pytest

from app.domain.models import Zone
from app.services.seats import (
    MAX_TOGGLES,
    MIN_TOGGLES,
    TOTAL_SEATS,
    SeatSimulator,
    generate_seats,
    toggle_random_seats,
)


def test_layout():
    seats = generate_seats(random.Random(7))
    assert len(seats) == TOTAL_SEATS == 120
    assert [s.id for s in seats] == list(range(1, 121))
    assert sum(s.zone is Zone.MAIN_READING_HALL for s in seats) == 60
    assert sum(s.zone is Zone.QUIET_ZONE for s in seats) == 30
    assert sum(s.zone is Zone.MEDIA_CENTER for s in seats) == 30


def test_generation_is_reproducible_with_seed():
    first = [s.is_occupied for s in generate_seats(random.Random(42))]
    second = [s.is_occupied for s in generate_seats(random.Random(42))]
    assert first == second


def test_toggle_changes_between_three_and_six_picks():
    seats = generate_seats(random.Random(1))
    rng = random.Random(3)
    for _ in range(50):
        changes = toggle_random_seats(seats, rng)
        assert MIN_TOGGLES <= changes <= MAX_TOGGLES


def test_toggle_on_empty_map():
    assert toggle_random_seats([]) == 0


@pytest.mark.asyncio
async def test_simulator_ticks_until_stopped():
    seats = generate_seats(random.Random(5))
    simulator = SeatSimulator(seats, interval=0.01, rng=random.Random(5))

    simulator.start()
    assert simulator.running
    await asyncio.sleep(0.1)
    await simulator.stop()

    assert not simulator.running
    ticks = simulator.ticks
    assert ticks > 0
    await asyncio.sleep(0.05)
    assert simulator.ticks == ticks


@pytest.mark.asyncio
async def test_stop_before_start_is_harmless():
    await SeatSimulator([], interval=1.0).stop()
