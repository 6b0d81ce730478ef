"""
Business logic for hosting slots.

``SlotService`` validates requests before they reach ``SlotStore`` and
rewords storage outcomes for the caller.  It holds no state of its own
besides the store and the clock it was built with, so one instance can
serve any number of concurrent requests.

Validation runs in a fixed order: required fields, date format, the
past-date check against the clock's "today", then time format.  Errors
that concern a date name it the way people read it, e.g.
``"Tue 2025-03-11 is already taken"``.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from ..core.clock import Clock
from ..core.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    StorageError,
    ValidationError,
)
from ..schemas.hosting_slot import HostingSlotInput, HostingSlotRead
from .slot_store import SlotStore

logger = logging.getLogger(__name__)

# Fixed English abbreviations; strftime("%a") would follow the locale.
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

REQUIRED_FIELDS = ("host_name", "host_address", "hosting_date", "start_time")
MISSING_FIELDS_MESSAGE = "Host name, address, date, and start time are required"
NOT_FOUND_MESSAGE = "Hosting slot not found"


def date_label(day: date) -> str:
    """Format ``day`` as weekday abbreviation plus ISO date."""
    return f"{WEEKDAY_ABBREVIATIONS[day.weekday()]} {day.isoformat()}"


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


class SlotService:
    """Validate hosting slot requests and delegate them to the store."""

    def __init__(self, store: SlotStore, clock: Clock):
        self.store = store
        self.clock = clock

    def _validate(self, data: HostingSlotInput) -> HostingSlotInput:
        """Check ``data`` and return a normalised copy.

        Text is stripped, the date is rewritten in canonical ISO form,
        the time as ``HH:MM`` and empty notes become ``None``.
        """
        values = {field: _clean(getattr(data, field)) for field in REQUIRED_FIELDS}
        if not all(values.values()):
            raise ValidationError(MISSING_FIELDS_MESSAGE, code="missing_fields")

        try:
            hosting_date = datetime.strptime(values["hosting_date"], "%Y-%m-%d").date()
        except ValueError as exc:
            raise ValidationError(
                f"{values['hosting_date']} is not a valid date (expected YYYY-MM-DD)",
                code="invalid_date",
            ) from exc
        if hosting_date < self.clock.today():
            raise ValidationError(f"{date_label(hosting_date)} is in the past", code="date_in_past")

        try:
            start_time = datetime.strptime(values["start_time"], "%H:%M").time()
        except ValueError as exc:
            raise ValidationError(
                f"{values['start_time']} is not a valid start time (expected HH:MM)",
                code="invalid_time",
            ) from exc

        return HostingSlotInput(
            host_name=values["host_name"],
            host_address=values["host_address"],
            hosting_date=hosting_date.isoformat(),
            start_time=start_time.strftime("%H:%M"),
            additional_notes=_clean(data.additional_notes) or None,
        )

    @staticmethod
    def _conflict(slot: HostingSlotInput) -> ConflictError:
        label = date_label(date.fromisoformat(slot.hosting_date))
        logger.info("Rejected hosting slot: %s is already taken", label)
        return ConflictError(f"{label} is already taken", code="date_taken")

    async def validate_and_create(self, data: HostingSlotInput) -> int:
        """Validate ``data`` and store it as a new slot.

        Returns the id of the new slot.  Raises ``ValidationError``
        (``missing_fields``, ``invalid_date``, ``invalid_time`` or
        ``date_in_past``) or ``ConflictError`` (``date_taken``).
        """
        slot = self._validate(data)
        try:
            return await self.store.create(slot)
        except ConflictError as exc:
            raise self._conflict(slot) from exc

    async def validate_and_update(self, slot_id: int, data: HostingSlotInput) -> None:
        """Validate ``data`` and replace slot ``slot_id`` with it.

        Raises the same errors as ``validate_and_create`` plus
        ``NotFoundError`` when no slot has that id.
        """
        slot = self._validate(data)
        try:
            updated = await self.store.update(slot_id, slot)
        except ConflictError as exc:
            raise self._conflict(slot) from exc
        if not updated:
            raise NotFoundError(NOT_FOUND_MESSAGE)

    async def remove(self, slot_id: int) -> None:
        if not await self.store.delete(slot_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    async def get_slot(self, slot_id: int) -> HostingSlotRead:
        slot = await self.store.get_by_id(slot_id)
        if slot is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return slot

    async def list_upcoming(self) -> List[HostingSlotRead]:
        """Slots from today onwards, earliest first."""
        try:
            return await self.store.list_upcoming()
        except StorageError as exc:
            raise ServiceError("Failed to fetch hosting slots") from exc

    async def todays_slot(self) -> Optional[HostingSlotRead]:
        """The slot claimed for the clock's current date, if any."""
        return await self.store.get_by_date(self.clock.today())
