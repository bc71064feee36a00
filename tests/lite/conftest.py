from collections.abc import Callable, Generator
from datetime import UTC, datetime
from typing import Any, Optional

import pytest

from bandsync_lite.lite_models import BandEvent, Recurrence, RecurrenceRule


@pytest.fixture
def make_event() -> Callable[..., BandEvent]:
    """Factory for minimal BandEvent instances.

    Pass ``rule`` to get a recurring event; ``end_date`` and ``exceptions``
    are only used together with a rule.
    """

    def _make(
        date: datetime,
        rule: Optional[RecurrenceRule] = None,
        end_date: Optional[datetime] = None,
        exceptions: tuple[datetime, ...] = (),
        event_id: str = "evt-1",
        title: str = "Rehearsal",
    ) -> BandEvent:
        recurrence = None
        if rule is not None:
            recurrence = Recurrence(rule=rule, end_date=end_date, exceptions=exceptions)
        return BandEvent(
            id=event_id,
            title=title,
            date=date,
            type="Rehearsal",
            status="Confirmed",
            location="Studio B",
            recurrence=recurrence,
        )

    return _make


@pytest.fixture
def utc() -> Callable[..., datetime]:
    """Shorthand for building UTC datetimes: ``utc(2024, 1, 3)``."""

    def _utc(*args: int) -> datetime:
        return datetime(*args, tzinfo=UTC)

    return _utc


@pytest.fixture
def event_document() -> dict[str, Any]:
    """A complete stored event document in the store's camelCase layout."""
    return {
        "title": "Summer Festival",
        "date": {"seconds": 1719597600, "nanoseconds": 0},  # 2024-06-28T18:00:00Z
        "type": "Festival",
        "status": "Confirmed",
        "location": "Riverside Park",
        "organizer": {"name": "Ana", "phone": "+100", "email": "ana@example.com"},
        "coordinator": {"name": "Ben", "phone": "+200", "email": "ben@example.com"},
        "hotel": {"address": "1 Main St", "checkIn": "14:00", "checkOut": "11:00"},
        "fee": "1500",
        "setlist": ["Intro", "Encore"],
        "notes": "Bring spare strings",
        "schedule": [{"id": "s1", "time": "16:00", "activity": "Soundcheck"}],
        "isPersonal": False,
        "groupId": "group-42",
    }


@pytest.fixture(autouse=True)
def clean_bandsync_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Keep BANDSYNC_* variables from leaking into or between tests."""
    for name in (
        "BANDSYNC_DEBUG",
        "BANDSYNC_LOG_LEVEL",
        "BANDSYNC_DISPLAY_MONTHS_BACK",
        "BANDSYNC_DISPLAY_MONTHS_AHEAD",
        "BANDSYNC_MAX_OCCURRENCES",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
