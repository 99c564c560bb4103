"""Live seat map route."""

from fastapi import APIRouter, Depends

from app.api.middleware.auth import get_current_session
from app.api.schemas import SeatMapResponse, SeatResponse, ZoneResponse
from app.domain.state import LibraryState
from app.services.seats import ZONE_LAYOUT

router = APIRouter(tags=["Seats"])


@router.get("/seats", response_model=SeatMapResponse)
async def get_seat_map(state: LibraryState = Depends(get_current_session)) -> SeatMapResponse:
    """Current occupancy, grouped by zone."""
    zones: list[ZoneResponse] = []
    for zone in ZONE_LAYOUT:
        seats = [s for s in state.seats if s.zone is zone]
        zones.append(
            ZoneResponse(
                zone=zone,
                total=len(seats),
                available=sum(1 for s in seats if not s.is_occupied),
                seats=[SeatResponse.model_validate(s) for s in seats],
            )
        )
    return SeatMapResponse(
        total=len(state.seats),
        available=state.available_seats,
        zones=zones,
    )
