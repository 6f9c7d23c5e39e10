from fastapi.testclient import TestClient
import pytest

from bus_seats.core.config import Settings
from bus_seats.core.store import build_store
from bus_seats.main import create_app
from bus_seats.services.seating_service import SeatingService


@pytest.fixture
def store():
    return build_store(5, 8)


@pytest.fixture
def service(store):
    return SeatingService(store)


@pytest.fixture
def client(store, tmp_path):
    settings = Settings(STATIC_DIR=str(tmp_path / "public"))
    app = create_app(settings=settings, store=store)
    with TestClient(app) as c:
        yield c


def _assert_consistent(seats: list[dict], students: list[dict]) -> None:
    """No student in two seats, and every occupied seat carries its occupant's route."""
    routes_by_student = {s["id"]: s["routeId"] for s in students}
    occupants = [s["studentId"] for s in seats if s["isOccupied"]]
    assert len(occupants) == len(set(occupants))
    for seat in seats:
        if seat["isOccupied"]:
            assert seat["studentId"] is not None
            assert seat["routeId"] == routes_by_student[seat["studentId"]]
        else:
            assert seat["studentId"] is None
            assert seat["routeId"] is None


@pytest.fixture
def assert_consistent(client):
    def _check():
        seats = client.get("/api/seats").json()
        students = client.get("/api/students").json()
        _assert_consistent(seats, students)
        return seats

    return _check
