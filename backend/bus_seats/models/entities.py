from __future__ import annotations

from dataclasses import dataclass


def seat_key(row: int, seat: int) -> str:
    return f"{row}-{seat}"


@dataclass
class SeatEntity:
    row: int
    seat: int
    student_id: int | None = None

    @property
    def id(self) -> str:
        return seat_key(self.row, self.seat)

    @property
    def is_occupied(self) -> bool:
        return self.student_id is not None

    def vacate(self) -> None:
        self.student_id = None


@dataclass
class StudentEntity:
    id: int
    name: str
    grade: str
    route_id: int


@dataclass
class RouteEntity:
    id: int
    name: str
    capacity: int
