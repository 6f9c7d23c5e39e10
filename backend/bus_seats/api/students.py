from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.deps import get_seating_service
from ..models.schemas import StudentCreateIn, StudentOut
from ..services.seating_service import SeatingService

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=list[StudentOut])
def list_students(service: SeatingService = Depends(get_seating_service)):
    return [StudentOut.from_entity(s) for s in service.list_students()]


@router.get("/unseated", response_model=list[StudentOut])
def list_unseated_students(service: SeatingService = Depends(get_seating_service)):
    """Students that can still be picked for an empty seat."""
    return [StudentOut.from_entity(s) for s in service.unseated_students()]


@router.post("", response_model=StudentOut)
def add_student(payload: StudentCreateIn, service: SeatingService = Depends(get_seating_service)):
    student = service.add_student(payload.name, payload.grade, payload.route_id)
    return StudentOut.from_entity(student)
