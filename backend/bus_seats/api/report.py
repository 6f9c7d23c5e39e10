"""
Read-only summaries of the seating plan:
- occupancy counters for the dashboard
- full JSON export (seats, students, routes) as a downloadable file
"""
from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.deps import get_seating_service
from ..models.schemas import ExportOut, RouteOut, SeatOut, StatsOut, StudentOut
from ..services.seating_service import SeatingService

router = APIRouter(prefix="/api", tags=["report"])


@router.get("/stats", response_model=StatsOut)
def get_stats(service: SeatingService = Depends(get_seating_service)):
    counts = service.stats()
    return StatsOut(
        total_seats=counts["total"],
        occupied_seats=counts["occupied"],
        available_seats=counts["available"],
    )


@router.get("/export", response_model=ExportOut)
def export_data(service: SeatingService = Depends(get_seating_service)):
    """
    Export the whole store as a JSON attachment.

    The file name carries the export date: bus-seat-data-YYYY-MM-DD.json
    """
    snapshot = service.export_snapshot()
    exported = ExportOut(
        seats=[SeatOut.from_entity(s, service.route_id_of(s)) for s in snapshot["seats"]],
        students=[StudentOut.from_entity(s) for s in snapshot["students"]],
        routes=[RouteOut.from_entity(r) for r in snapshot["routes"]],
        export_date=snapshot["exported_at"],
    )

    filename = f"bus-seat-data-{exported.export_date.date().isoformat()}.json"
    return JSONResponse(
        content=jsonable_encoder(exported, by_alias=True),
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
