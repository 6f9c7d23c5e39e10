from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from ..models.entities import RouteEntity, SeatEntity, StudentEntity, seat_key


SAMPLE_ROUTES = [
    (1, "Route A - Downtown", 20),
    (2, "Route B - Suburbs", 20),
    (3, "Route C - Rural", 20),
]

SAMPLE_STUDENTS = [
    (1, "Shreyansh singh", "10th", 1),
    (2, "Sudhanshu Dubey", "9th", 2),
    (3, "Abhishek pal", "11th", 1),
]


@dataclass
class InMemoryStore:
    seats: Dict[str, SeatEntity] = field(default_factory=dict)  # key = "row-seat"
    students: Dict[int, StudentEntity] = field(default_factory=dict)
    routes: Dict[int, RouteEntity] = field(default_factory=dict)
    # held for every read-modify-write of the maps; handlers run in a threadpool
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def next_student_id(self) -> int:
        return max(self.students, default=0) + 1

    def next_route_id(self) -> int:
        return max(self.routes, default=0) + 1

    def seat_of(self, student_id: int) -> SeatEntity | None:
        for seat in self.seats.values():
            if seat.student_id == student_id:
                return seat
        return None

    def route_id_of(self, seat: SeatEntity) -> int | None:
        """Route of the seat's occupant, or None for an empty seat."""
        if seat.student_id is None:
            return None
        student = self.students.get(seat.student_id)
        return student.route_id if student else None


def build_store(rows: int, seats_per_row: int, sample_data: bool = True) -> InMemoryStore:
    store = InMemoryStore()
    for row in range(1, rows + 1):
        for seat in range(1, seats_per_row + 1):
            store.seats[seat_key(row, seat)] = SeatEntity(row=row, seat=seat)

    if sample_data:
        for route_id, name, capacity in SAMPLE_ROUTES:
            store.routes[route_id] = RouteEntity(id=route_id, name=name, capacity=capacity)
        for student_id, name, grade, route_id in SAMPLE_STUDENTS:
            store.students[student_id] = StudentEntity(id=student_id, name=name, grade=grade, route_id=route_id)
    return store
