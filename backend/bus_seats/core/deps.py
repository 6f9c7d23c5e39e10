from __future__ import annotations

from fastapi import Depends, Request

from .store import InMemoryStore
from ..services.seating_service import SeatingService


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_seating_service(store: InMemoryStore = Depends(get_store)) -> SeatingService:
    return SeatingService(store)
