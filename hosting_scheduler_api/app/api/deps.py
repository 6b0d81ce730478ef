"""FastAPI dependencies that hand out the objects built by ``create_app``."""

from fastapi import Request

from ..services.slot_service import SlotService


def get_slot_service(request: Request) -> SlotService:
    return request.app.state.slot_service
