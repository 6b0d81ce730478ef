"""
Hosting slot endpoints for API v1.

Reading is public: anyone can list upcoming slots, look one up or ask
who hosts today.  Creating, updating and deleting require a bearer
token obtained from ``/auth/login``.

Handlers stay thin.  ``SlotService`` raises the errors from
``core.exceptions`` and the handlers registered in ``main`` turn them
into responses, so no handler builds an error response itself.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from hosting_scheduler_api.app.api.deps import get_slot_service
from hosting_scheduler_api.app.core.security import require_token
from hosting_scheduler_api.app.schemas.common import ApiResponse
from hosting_scheduler_api.app.schemas.hosting_slot import HostingSlotInput, HostingSlotRead, SlotCreated
from hosting_scheduler_api.app.services.slot_service import SlotService

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[HostingSlotRead]])
async def list_hosting_slots(
    service: SlotService = Depends(get_slot_service),
) -> ApiResponse[List[HostingSlotRead]]:
    """List slots dated today or later, earliest first."""
    return ApiResponse(success=True, data=await service.list_upcoming())


# Declared before "/{slot_id}" so that "today" is not parsed as an id.
@router.get("/today", response_model=ApiResponse[Optional[HostingSlotRead]])
async def todays_hosting_slot(
    service: SlotService = Depends(get_slot_service),
) -> ApiResponse[Optional[HostingSlotRead]]:
    """Return the slot claimed for today, or ``data: null`` if nobody hosts."""
    slot = await service.todays_slot()
    message = None if slot else "Nobody is hosting today"
    return ApiResponse(success=True, data=slot, message=message)


@router.get("/{slot_id}", response_model=ApiResponse[HostingSlotRead])
async def get_hosting_slot(
    slot_id: int,
    service: SlotService = Depends(get_slot_service),
) -> ApiResponse[HostingSlotRead]:
    return ApiResponse(success=True, data=await service.get_slot(slot_id))


@router.post("/", response_model=ApiResponse[SlotCreated], status_code=status.HTTP_201_CREATED)
async def create_hosting_slot(
    slot: HostingSlotInput,
    service: SlotService = Depends(get_slot_service),
    token: dict = Depends(require_token),
) -> ApiResponse[SlotCreated]:
    """Claim a date.

    Fails with 400 if a required field is missing, the date or time is
    malformed, the date is in the past or the date is already taken.
    """
    slot_id = await service.validate_and_create(slot)
    return ApiResponse(
        success=True,
        data=SlotCreated(id=slot_id),
        message="Hosting slot created successfully",
    )


@router.put("/{slot_id}", response_model=ApiResponse)
async def update_hosting_slot(
    slot_id: int,
    slot: HostingSlotInput,
    service: SlotService = Depends(get_slot_service),
    token: dict = Depends(require_token),
) -> ApiResponse:
    """Replace every field of an existing slot (id and creation time excepted)."""
    await service.validate_and_update(slot_id, slot)
    return ApiResponse(success=True, message="Hosting slot updated successfully")


@router.delete("/{slot_id}", response_model=ApiResponse)
async def delete_hosting_slot(
    slot_id: int,
    service: SlotService = Depends(get_slot_service),
    token: dict = Depends(require_token),
) -> ApiResponse:
    await service.remove(slot_id)
    return ApiResponse(success=True, message="Hosting slot deleted successfully")
