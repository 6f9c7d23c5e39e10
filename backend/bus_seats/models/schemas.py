from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .entities import RouteEntity, SeatEntity, StudentEntity


def _blank_to_none(v: Any) -> Any:
    # HTML forms post "" for an untouched field
    if isinstance(v, str) and not v.strip():
        return None
    return v


class SeatOut(BaseModel):
    id: str
    row: int
    seat: int
    is_occupied: bool = Field(alias="isOccupied")
    student_id: int | None = Field(default=None, alias="studentId")
    route_id: int | None = Field(default=None, alias="routeId")

    class Config:
        populate_by_name = True

    @classmethod
    def from_entity(cls, seat: SeatEntity, route_id: int | None) -> "SeatOut":
        return cls(
            id=seat.id,
            row=seat.row,
            seat=seat.seat,
            is_occupied=seat.is_occupied,
            student_id=seat.student_id,
            route_id=route_id,
        )


class StudentOut(BaseModel):
    id: int
    name: str
    grade: str
    route_id: int = Field(alias="routeId")

    class Config:
        populate_by_name = True

    @classmethod
    def from_entity(cls, student: StudentEntity) -> "StudentOut":
        return cls(id=student.id, name=student.name, grade=student.grade, route_id=student.route_id)


class RouteOut(BaseModel):
    id: int
    name: str
    capacity: int

    class Config:
        from_attributes = True

    @classmethod
    def from_entity(cls, route: RouteEntity) -> "RouteOut":
        return cls.model_validate(route)


class AssignSeatIn(BaseModel):
    # ids that do not resolve are a 404 from the service, not a 400 here
    student_id: Any = Field(default=None, alias="studentId")
    seat_id: Any = Field(default=None, alias="seatId")

    class Config:
        populate_by_name = True


class RemoveSeatIn(BaseModel):
    seat_id: Any = Field(default=None, alias="seatId")

    class Config:
        populate_by_name = True


class StudentCreateIn(BaseModel):
    name: str | None = None
    grade: str | None = None
    route_id: int | None = Field(default=None, alias="routeId")

    class Config:
        populate_by_name = True

    @field_validator("route_id", mode="before")
    @classmethod
    def _route_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class RouteCreateIn(BaseModel):
    name: str | None = None
    capacity: int | None = None

    @field_validator("capacity", mode="before")
    @classmethod
    def _capacity_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class AssignSeatOut(BaseModel):
    success: bool = True
    seat: SeatOut
    student: StudentOut


class RemoveSeatOut(BaseModel):
    success: bool = True
    seat: SeatOut


class ResetSeatsOut(BaseModel):
    success: bool = True
    message: str


class StatsOut(BaseModel):
    """Seat occupancy counters shown in the dashboard header."""
    total_seats: int = Field(alias="totalSeats")
    occupied_seats: int = Field(alias="occupiedSeats")
    available_seats: int = Field(alias="availableSeats")

    class Config:
        populate_by_name = True


class ExportOut(BaseModel):
    seats: list[SeatOut]
    students: list[StudentOut]
    routes: list[RouteOut]
    export_date: dt.datetime = Field(alias="exportDate")

    class Config:
        populate_by_name = True
