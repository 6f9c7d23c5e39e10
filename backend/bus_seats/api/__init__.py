from .seats import router as seats_router
from .students import router as students_router
from .bus_routes import router as bus_routes_router
from .report import router as report_router

__all__ = ["seats_router", "students_router", "bus_routes_router", "report_router"]
