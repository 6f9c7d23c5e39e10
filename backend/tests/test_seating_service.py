from concurrent.futures import ThreadPoolExecutor
import time

import pytest

from bus_seats.core.errors import ConflictError, NotFoundError, ValidationError
from bus_seats.core.store import build_store
from bus_seats.services.seating_service import as_int_id


def test_build_store_creates_empty_grid_with_sample_data(store):
    assert len(store.seats) == 40
    assert list(store.seats)[:3] == ["1-1", "1-2", "1-3"]
    assert all(not s.is_occupied for s in store.seats.values())
    assert sorted(store.routes) == [1, 2, 3]
    assert sorted(store.students) == [1, 2, 3]


def test_build_store_without_sample_data():
    s = build_store(2, 3, sample_data=False)
    assert list(s.seats) == ["1-1", "1-2", "1-3", "2-1", "2-2", "2-3"]
    assert s.students == {}
    assert s.routes == {}
    assert s.next_student_id() == 1
    assert s.next_route_id() == 1


def test_assign_seat_sets_occupant_and_derived_route(service):
    seat, student = service.assign_seat(2, "1-1")
    assert seat.is_occupied
    assert seat.student_id == 2
    assert student.id == 2
    assert service.route_id_of(seat) == 2


def test_assign_seat_evicts_previous_seat(service, store):
    service.assign_seat(1, "1-1")
    service.assign_seat(1, "1-2")

    assert not store.seats["1-1"].is_occupied
    assert store.seats["1-1"].student_id is None
    assert store.seats["1-2"].student_id == 1
    assert store.seat_of(1) is store.seats["1-2"]


def test_assign_seat_rejects_occupied_seat(service, store):
    service.assign_seat(1, "1-1")
    with pytest.raises(ConflictError):
        service.assign_seat(2, "1-1")
    assert store.seats["1-1"].student_id == 1
    assert store.seat_of(2) is None


def test_assign_same_seat_twice_is_a_conflict(service):
    service.assign_seat(1, "1-1")
    with pytest.raises(ConflictError):
        service.assign_seat(1, "1-1")


def test_conflict_does_not_evict_current_seat(service, store):
    service.assign_seat(1, "1-1")
    service.assign_seat(2, "1-2")
    with pytest.raises(ConflictError):
        service.assign_seat(1, "1-2")
    assert store.seats["1-1"].student_id == 1


@pytest.mark.parametrize("student_id, seat_id", [(99, "1-1"), (1, "9-9"), (None, "1-1"), (1, None)])
def test_assign_seat_unknown_references(service, student_id, seat_id):
    with pytest.raises(NotFoundError):
        service.assign_seat(student_id, seat_id)


def test_remove_seat_clears_occupant(service, store):
    service.assign_seat(3, "2-4")
    seat = service.remove_seat("2-4")
    assert seat is store.seats["2-4"]
    assert not seat.is_occupied
    assert service.route_id_of(seat) is None


def test_remove_empty_seat_is_noop(service):
    seat = service.remove_seat("5-8")
    assert not seat.is_occupied


def test_remove_unknown_seat(service):
    with pytest.raises(NotFoundError):
        service.remove_seat("0-0")


def test_reset_seats_clears_everything(service, store):
    service.assign_seat(1, "1-1")
    service.assign_seat(2, "3-3")
    service.assign_seat(3, "5-8")
    service.reset_seats()
    assert all(s.student_id is None for s in store.seats.values())


def test_add_student_assigns_next_id(service, store):
    student = service.add_student("  Jane Roe ", "8th", 3)
    assert student.id == 4
    assert student.name == "Jane Roe"
    assert store.students[4] is student


def test_add_student_does_not_check_route(service):
    student = service.add_student("Ghost Rider", "12th", 42)
    assert student.route_id == 42


@pytest.mark.parametrize(
    "name, grade, route_id",
    [(None, "9th", 1), ("", "9th", 1), ("   ", "9th", 1), ("Ann", None, 1), ("Ann", "9th", None), ("Ann", "9th", 0)],
)
def test_add_student_requires_all_fields(service, store, name, grade, route_id):
    with pytest.raises(ValidationError):
        service.add_student(name, grade, route_id)
    assert len(store.students) == 3


def test_add_route_assigns_next_id(service):
    route = service.add_route("Route D - Hills", 15)
    assert route.id == 4
    assert route.capacity == 15


@pytest.mark.parametrize("name, capacity", [(None, 10), ("", 10), ("Route X", None), ("Route X", 0)])
def test_add_route_requires_fields(service, store, name, capacity):
    with pytest.raises(ValidationError):
        service.add_route(name, capacity)
    assert len(store.routes) == 3


def test_seats_for_route(service):
    service.assign_seat(1, "1-1")
    service.assign_seat(2, "1-2")
    service.assign_seat(3, "4-4")
    assert [s.id for s in service.seats_for_route(1)] == ["1-1", "4-4"]
    assert [s.id for s in service.seats_for_route(2)] == ["1-2"]
    assert service.seats_for_route(3) == []


def test_unseated_students_and_stats(service):
    service.assign_seat(2, "2-2")
    assert [s.id for s in service.unseated_students()] == [1, 3]
    assert service.stats() == {"total": 40, "occupied": 1, "available": 39}


def test_capacity_is_not_enforced(service, store):
    service.add_route("Tiny", 1)
    a = service.add_student("A", "1st", 4)
    b = service.add_student("B", "1st", 4)
    service.assign_seat(a.id, "1-1")
    service.assign_seat(b.id, "1-2")
    assert len(service.seats_for_route(4)) == 2


def test_add_route_stores_capacity_as_given(service):
    route = service.add_route("Route N", -5)
    assert route.capacity == -5


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3), ("3", 3), (" 4 ", 4), (2.0, 2), (2.5, None), ("abc", None), (True, None), (None, None), ([1], None)],
)
def test_as_int_id(value, expected):
    assert as_int_id(value) == expected


def test_seats_for_route_with_unparseable_id(service):
    service.assign_seat(1, "1-1")
    assert service.seats_for_route("abc") == []
    assert [s.id for s in service.seats_for_route("1")] == ["1-1"]


def test_assign_seat_resolves_string_student_id(service, store):
    seat, student = service.assign_seat("3", "2-2")
    assert student.id == 3
    assert store.seats["2-2"].student_id == 3


@pytest.mark.parametrize("student_id, seat_id", [("abc", "1-1"), (1, 11), (1.5, "1-1")])
def test_assign_seat_unresolvable_ids(service, student_id, seat_id):
    with pytest.raises(NotFoundError):
        service.assign_seat(student_id, seat_id)


def test_parallel_moves_leave_student_in_one_seat(service, store, monkeypatch):
    service.assign_seat(1, "1-1")
    seat_of = store.seat_of

    def slow_seat_of(student_id):
        found = seat_of(student_id)
        time.sleep(0.05)
        return found

    monkeypatch.setattr(store, "seat_of", slow_seat_of)

    targets = ["2-1", "2-2", "2-3", "2-4"]
    with ThreadPoolExecutor(max_workers=len(targets)) as pool:
        list(pool.map(lambda seat_id: service.assign_seat(1, seat_id), targets))

    held = [s.id for s in store.seats.values() if s.student_id == 1]
    assert len(held) == 1
    assert held[0] in targets
