from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from ..core.deps import get_seating_service
from ..models.schemas import (
    AssignSeatIn,
    AssignSeatOut,
    RemoveSeatIn,
    RemoveSeatOut,
    ResetSeatsOut,
    SeatOut,
    StudentOut,
)
from ..services.seating_service import SeatingService

router = APIRouter(prefix="/api", tags=["seats"])


def _seat_out(service: SeatingService, seat) -> SeatOut:
    return SeatOut.from_entity(seat, service.route_id_of(seat))


@router.get("/seats", response_model=list[SeatOut])
def list_seats(service: SeatingService = Depends(get_seating_service)):
    return [_seat_out(service, s) for s in service.list_seats()]


@router.get("/seats/route/{routeId}", response_model=list[SeatOut])
def list_seats_for_route(
    route_id: str = Path(alias="routeId"),
    service: SeatingService = Depends(get_seating_service),
):
    return [_seat_out(service, s) for s in service.seats_for_route(route_id)]


@router.post("/assign-seat", response_model=AssignSeatOut)
def assign_seat(payload: AssignSeatIn, service: SeatingService = Depends(get_seating_service)):
    seat, student = service.assign_seat(payload.student_id, payload.seat_id)
    return AssignSeatOut(seat=_seat_out(service, seat), student=StudentOut.from_entity(student))


@router.post("/remove-seat", response_model=RemoveSeatOut)
def remove_seat(payload: RemoveSeatIn, service: SeatingService = Depends(get_seating_service)):
    seat = service.remove_seat(payload.seat_id)
    return RemoveSeatOut(seat=_seat_out(service, seat))


@router.post("/reset-seats", response_model=ResetSeatsOut)
def reset_seats(service: SeatingService = Depends(get_seating_service)):
    service.reset_seats()
    return ResetSeatsOut(message="All seats have been reset")
