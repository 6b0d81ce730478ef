"""
Shared pytest fixtures for the Hosting Scheduler tests.

Provides:
- A clock pinned to Monday 2025-03-10 so "today" is deterministic
- A slot store and service backed by a temporary SQLite file
- Test settings, an API client and authorization headers
"""

from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from hosting_scheduler_api.app.core.clock import Clock
from hosting_scheduler_api.app.core.config import Settings
from hosting_scheduler_api.app.main import create_app
from hosting_scheduler_api.app.schemas.hosting_slot import HostingSlotInput
from hosting_scheduler_api.app.services.slot_service import SlotService
from hosting_scheduler_api.app.services.slot_store import SlotStore

TODAY = date(2025, 3, 10)  # a Monday
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)

SITE_PASSWORD = "open-sesame"
SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"


class FixedClock(Clock):
    """Clock that always reports noon UTC on a given day."""

    def __init__(self, today: date):
        self.tz = timezone.utc
        self.timezone_name = "UTC"
        self.current = datetime.combine(today, time(12, 0), tzinfo=self.tz)

    def now(self) -> datetime:
        return self.current


def make_input(hosting_date, host_name="Alice", **overrides) -> HostingSlotInput:
    """Build a valid request body for ``hosting_date``."""
    if isinstance(hosting_date, date):
        hosting_date = hosting_date.isoformat()
    fields = {
        "host_name": host_name,
        "host_address": "1 Main St",
        "hosting_date": hosting_date,
        "start_time": "18:00",
        "additional_notes": None,
    }
    fields.update(overrides)
    return HostingSlotInput(**fields)


# ============================================================================
# Storage and service fixtures
# ============================================================================

@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "data" / "hosting_slots.db")


@pytest.fixture
def store(db_path: str, clock: FixedClock) -> SlotStore:
    """Slot store with its schema applied."""
    slot_store = SlotStore(db_path, clock, timeout=1.0)
    slot_store.init_schema()
    return slot_store


@pytest.fixture
def service(store: SlotStore, clock: FixedClock) -> SlotService:
    return SlotService(store, clock)


# ============================================================================
# API fixtures
# ============================================================================

@pytest.fixture
def settings(db_path: str) -> Settings:
    return Settings(
        database_url=db_path,
        secret_key=SECRET_KEY,
        site_password=SITE_PASSWORD,
        timezone="UTC",
        log_level="WARNING",
        log_file=None,
    )


@pytest.fixture
def client(settings: Settings, clock: FixedClock) -> Generator[TestClient, None, None]:
    """API client; entering the context runs startup (schema creation)."""
    app = create_app(settings, clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict:
    response = client.post("/api/v1/auth/login", json={"password": SITE_PASSWORD})
    assert response.status_code == 200
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
