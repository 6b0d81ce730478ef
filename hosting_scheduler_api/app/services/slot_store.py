"""
Persistence for hosting slots.

``SlotStore`` is the only code that talks to the ``hosting_slots``
table.  It is constructed explicitly with a database path, a clock
and a busy timeout, and every method opens its own connection, runs a
single statement and closes the connection again.  The blocking
sqlite3 work runs in a worker thread so a locked database stalls only
the request that is waiting on it, not the event loop.

At most one slot may exist per date.  The ``UNIQUE`` constraint on
``hosting_date`` enforces this inside SQLite, so create and update are
single constrained statements and two concurrent requests for the same
date cannot both succeed.  A violation is reported as
``ConflictError``; any other database failure (including a lock that
outlives the busy timeout) is logged and reported as ``StorageError``.
"""

import asyncio
import logging
import sqlite3
from datetime import date
from typing import List, Optional

from ..core.clock import Clock
from ..core.db import get_connection, init_db
from ..core.exceptions import ConflictError, StorageError
from ..schemas.hosting_slot import HostingSlotInput, HostingSlotRead

logger = logging.getLogger(__name__)

SLOT_COLUMNS = "id, host_name, host_address, hosting_date, start_time, additional_notes, created_at"


class SlotStore:
    """CRUD over the ``hosting_slots`` table."""

    def __init__(self, database_path: str, clock: Clock, timeout: float = 5.0):
        self.database_path = database_path
        self.clock = clock
        self.timeout = timeout

    def init_schema(self) -> int:
        """Create the database file if needed and apply migrations."""
        try:
            return init_db(self.database_path, self.timeout)
        except (sqlite3.Error, OSError) as exc:
            logger.exception("Could not initialise database at %s", self.database_path)
            raise StorageError("Failed to initialise database") from exc

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_connection(self.database_path, self.timeout)
        except sqlite3.Error as exc:
            logger.exception("Could not open database at %s", self.database_path)
            raise StorageError("Database unavailable") from exc

    @staticmethod
    def _row_to_slot(row: sqlite3.Row) -> HostingSlotRead:
        return HostingSlotRead(
            id=row["id"],
            host_name=row["host_name"],
            host_address=row["host_address"],
            hosting_date=row["hosting_date"],
            start_time=row["start_time"],
            additional_notes=row["additional_notes"],
            created_at=row["created_at"],
        )

    @staticmethod
    def _is_date_conflict(exc: sqlite3.IntegrityError) -> bool:
        return "hosting_slots.hosting_date" in str(exc)

    def _list_upcoming(self) -> List[HostingSlotRead]:
        """Return slots dated today or later, earliest first."""
        today = self.clock.today().isoformat()
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {SLOT_COLUMNS} FROM hosting_slots WHERE hosting_date >= ? ORDER BY hosting_date ASC",
                (today,),
            ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed to list upcoming hosting slots")
            raise StorageError("Failed to fetch hosting slots") from exc
        finally:
            conn.close()
        return [self._row_to_slot(row) for row in rows]

    def _get_by_id(self, slot_id: int) -> Optional[HostingSlotRead]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {SLOT_COLUMNS} FROM hosting_slots WHERE id = ?", (slot_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to load hosting slot %s", slot_id)
            raise StorageError("Failed to fetch hosting slot") from exc
        finally:
            conn.close()
        return self._row_to_slot(row) if row else None

    def _get_by_date(self, hosting_date: date) -> Optional[HostingSlotRead]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {SLOT_COLUMNS} FROM hosting_slots WHERE hosting_date = ?",
                (hosting_date.isoformat(),),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to load hosting slot for %s", hosting_date)
            raise StorageError("Failed to fetch hosting slot") from exc
        finally:
            conn.close()
        return self._row_to_slot(row) if row else None

    def _create(self, slot: HostingSlotInput) -> int:
        """Insert a slot and return its new id.

        Raises ``ConflictError`` if another slot already uses
        ``slot.hosting_date``.
        """
        conn = self._connect()
        try:
            cursor = conn.execute(
                """
                INSERT INTO hosting_slots (host_name, host_address, hosting_date, start_time, additional_notes)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    slot.host_name,
                    slot.host_address,
                    slot.hosting_date,
                    slot.start_time,
                    slot.additional_notes,
                ),
            )
            conn.commit()
            slot_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if self._is_date_conflict(exc):
                raise ConflictError(f"{slot.hosting_date} is already taken") from exc
            logger.exception("Integrity failure while creating hosting slot")
            raise StorageError("Failed to create hosting slot") from exc
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Failed to create hosting slot")
            raise StorageError("Failed to create hosting slot") from exc
        finally:
            conn.close()
        logger.info("Created hosting slot %s on %s", slot_id, slot.hosting_date)
        return slot_id

    def _update(self, slot_id: int, slot: HostingSlotInput) -> bool:
        """Replace every mutable field of slot ``slot_id``.

        Returns ``False`` if no slot has that id.  Raises
        ``ConflictError`` if a different slot already uses the new date.
        """
        conn = self._connect()
        try:
            cursor = conn.execute(
                """
                UPDATE hosting_slots
                SET host_name = ?, host_address = ?, hosting_date = ?, start_time = ?, additional_notes = ?
                WHERE id = ?
                """,
                (
                    slot.host_name,
                    slot.host_address,
                    slot.hosting_date,
                    slot.start_time,
                    slot.additional_notes,
                    slot_id,
                ),
            )
            conn.commit()
            updated = cursor.rowcount > 0
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if self._is_date_conflict(exc):
                raise ConflictError(f"{slot.hosting_date} is already taken") from exc
            logger.exception("Integrity failure while updating hosting slot %s", slot_id)
            raise StorageError("Failed to update hosting slot") from exc
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Failed to update hosting slot %s", slot_id)
            raise StorageError("Failed to update hosting slot") from exc
        finally:
            conn.close()
        if updated:
            logger.info("Updated hosting slot %s", slot_id)
        return updated

    def _delete(self, slot_id: int) -> bool:
        """Remove slot ``slot_id``; ``False`` if it did not exist."""
        conn = self._connect()
        try:
            cursor = conn.execute("DELETE FROM hosting_slots WHERE id = ?", (slot_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Failed to delete hosting slot %s", slot_id)
            raise StorageError("Failed to delete hosting slot") from exc
        finally:
            conn.close()
        if deleted:
            logger.info("Deleted hosting slot %s", slot_id)
        return deleted

    async def list_upcoming(self) -> List[HostingSlotRead]:
        """Return slots dated today or later, earliest first."""
        return await asyncio.to_thread(self._list_upcoming)

    async def get_by_id(self, slot_id: int) -> Optional[HostingSlotRead]:
        return await asyncio.to_thread(self._get_by_id, slot_id)

    async def get_by_date(self, hosting_date: date) -> Optional[HostingSlotRead]:
        return await asyncio.to_thread(self._get_by_date, hosting_date)

    async def create(self, slot: HostingSlotInput) -> int:
        """Insert a slot and return its new id.

        Raises ``ConflictError`` if another slot already uses
        ``slot.hosting_date``.
        """
        return await asyncio.to_thread(self._create, slot)

    async def update(self, slot_id: int, slot: HostingSlotInput) -> bool:
        """Replace every mutable field of slot ``slot_id``.

        Returns ``False`` if no slot has that id.  Raises
        ``ConflictError`` if a different slot already uses the new date.
        """
        return await asyncio.to_thread(self._update, slot_id, slot)

    async def delete(self, slot_id: int) -> bool:
        """Remove slot ``slot_id``; ``False`` if it did not exist."""
        return await asyncio.to_thread(self._delete, slot_id)
