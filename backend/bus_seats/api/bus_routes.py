from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.deps import get_seating_service
from ..models.schemas import RouteCreateIn, RouteOut
from ..services.seating_service import SeatingService

router = APIRouter(prefix="/api/routes", tags=["routes"])


@router.get("", response_model=list[RouteOut])
def list_routes(service: SeatingService = Depends(get_seating_service)):
    return [RouteOut.from_entity(r) for r in service.list_routes()]


@router.post("", response_model=RouteOut)
def add_route(payload: RouteCreateIn, service: SeatingService = Depends(get_seating_service)):
    route = service.add_route(payload.name, payload.capacity)
    return RouteOut.from_entity(route)
