"""
Pydantic models for hosting slots.

``HostingSlotInput`` is the request body for both create and update.
Its fields are all optional at the schema level: deciding which fields
are missing, and how to word the error, is the job of ``SlotService``
so that every transport reports it the same way.  ``HostingSlotRead``
is what the API returns.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class HostingSlotInput(BaseModel):
    """Schema for creating or replacing a hosting slot."""

    host_name: Optional[str] = Field(None, examples=["Alice"])
    host_address: Optional[str] = Field(None, examples=["1 Main St"])
    hosting_date: Optional[str] = Field(None, examples=["2025-03-11"])
    start_time: Optional[str] = Field(None, examples=["18:00"])
    additional_notes: Optional[str] = Field(None, examples=["Bring snacks"])


class HostingSlotRead(BaseModel):
    """Schema for reading a hosting slot from the API."""

    id: int
    host_name: str
    host_address: str
    hosting_date: date
    start_time: str
    additional_notes: Optional[str] = None
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class SlotCreated(BaseModel):
    id: int
