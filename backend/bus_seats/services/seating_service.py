from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..core.store import InMemoryStore
from ..models.entities import RouteEntity, SeatEntity, StudentEntity


logger = logging.getLogger(__name__)


def _clean(v: str | None) -> str:
    return v.strip() if v else ""


def as_int_id(v: Any) -> int | None:
    """Integer id from an int or a numeric string; None when it cannot be one."""
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


class SeatingService:
    """
    Seat assignment operations over an in-memory store.

    Keeps the seat/student relation a partial bijection: a student sits in at
    most one seat and a seat holds at most one student. A seat's route is read
    from its occupant, so it cannot drift from the student's route.

    Every operation runs under the store lock.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store

    # --- reads ---

    def list_seats(self) -> list[SeatEntity]:
        with self.store.lock:
            return list(self.store.seats.values())

    def list_students(self) -> list[StudentEntity]:
        with self.store.lock:
            return list(self.store.students.values())

    def list_routes(self) -> list[RouteEntity]:
        with self.store.lock:
            return list(self.store.routes.values())

    def route_id_of(self, seat: SeatEntity) -> int | None:
        return self.store.route_id_of(seat)

    def seats_for_route(self, route_id: Any) -> list[SeatEntity]:
        rid = as_int_id(route_id)
        if rid is None:
            return []
        with self.store.lock:
            return [s for s in self.store.seats.values() if self.store.route_id_of(s) == rid]

    def unseated_students(self) -> list[StudentEntity]:
        with self.store.lock:
            seated = {s.student_id for s in self.store.seats.values() if s.is_occupied}
            return [st for st in self.store.students.values() if st.id not in seated]

    def stats(self) -> dict[str, int]:
        with self.store.lock:
            total = len(self.store.seats)
            occupied = sum(1 for s in self.store.seats.values() if s.is_occupied)
        return {"total": total, "occupied": occupied, "available": total - occupied}

    def export_snapshot(self, now: datetime | None = None) -> dict:
        with self.store.lock:
            return {
                "seats": self.list_seats(),
                "students": self.list_students(),
                "routes": self.list_routes(),
                "exported_at": now or datetime.now(timezone.utc),
            }

    # --- mutations ---

    def assign_seat(self, student_id: Any, seat_id: Any) -> tuple[SeatEntity, StudentEntity]:
        sid = as_int_id(student_id)
        with self.store.lock:
            student = self.store.students.get(sid) if sid is not None else None
            seat = self.store.seats.get(seat_id) if isinstance(seat_id, str) else None
            if not student or not seat:
                raise NotFoundError("Student or seat not found")

            if seat.is_occupied:
                raise ConflictError("Seat is already occupied")

            previous = self.store.seat_of(student.id)
            if previous is not None:
                previous.vacate()
                logger.info(f"Student {student.id} moved out of seat {previous.id}")

            seat.student_id = student.id
        logger.info(f"Student {student.id} assigned to seat {seat.id} (route {student.route_id})")
        return seat, student

    def remove_seat(self, seat_id: Any) -> SeatEntity:
        with self.store.lock:
            seat = self.store.seats.get(seat_id) if isinstance(seat_id, str) else None
            if not seat:
                raise NotFoundError("Seat not found")

            seat.vacate()
        logger.info(f"Seat {seat_id} cleared")
        return seat

    def reset_seats(self) -> None:
        with self.store.lock:
            for seat in self.store.seats.values():
                seat.vacate()
        logger.info(f"All {len(self.store.seats)} seats reset")

    def add_student(self, name: str | None, grade: str | None, route_id: int | None) -> StudentEntity:
        name, grade = _clean(name), _clean(grade)
        if not name or not grade or not route_id:
            raise ValidationError("Name, grade, and route are required")

        with self.store.lock:
            student = StudentEntity(id=self.store.next_student_id(), name=name, grade=grade, route_id=int(route_id))
            self.store.students[student.id] = student
        logger.info(f"Student {student.id} '{student.name}' added on route {student.route_id}")
        return student

    def add_route(self, name: str | None, capacity: int | None) -> RouteEntity:
        name = _clean(name)
        if not name or not capacity:
            raise ValidationError("Name and capacity are required")

        with self.store.lock:
            route = RouteEntity(id=self.store.next_route_id(), name=name, capacity=int(capacity))
            self.store.routes[route.id] = route
        logger.info(f"Route {route.id} '{route.name}' added with capacity {route.capacity}")
        return route
