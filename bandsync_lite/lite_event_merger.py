"""Occurrence merging for the BandSync Lite calendar display.

Combines non-recurring events with the expanded occurrences of recurring
ones into a single date-ordered list for a query window.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any, Optional

from .lite_datetime_utils import add_months, ensure_timezone_aware
from .lite_exceptions import RecurrencePreconditionError
from .lite_models import BandEvent, EventOccurrence
from .lite_recurrence_expander import LiteRecurrenceExpander

logger = logging.getLogger(__name__)


class LiteOccurrenceMerger:
    """Builds the display list of occurrences for a date window."""

    def __init__(self, settings: Any = None, expander: Optional[LiteRecurrenceExpander] = None):
        """Initialize merger.

        Args:
            settings: Optional object with ``display_months_back`` and
                ``display_months_ahead`` (defaults 3 and 6), also handed to
                the expander when one is not supplied
            expander: Expander instance to use instead of a fresh one
        """
        self.months_back = getattr(settings, "display_months_back", 3)
        self.months_ahead = getattr(settings, "display_months_ahead", 6)
        self.expander = expander or LiteRecurrenceExpander(settings)

    def default_window(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Return the calendar's default window around ``now``."""
        anchor = ensure_timezone_aware(now) if now is not None else datetime.now(UTC)
        return add_months(anchor, -self.months_back), add_months(anchor, self.months_ahead)

    def merge(
        self,
        events: Iterable[BandEvent],
        window_start: datetime,
        window_end: datetime,
    ) -> list[EventOccurrence]:
        """Expand recurring events and merge them with one-off events.

        Non-recurring events are passed through as a single occurrence at
        their own date, whether or not it falls in the window. Recurring
        events contribute one virtual occurrence per expanded date.

        Args:
            events: Base events as loaded from the store
            window_start: Inclusive lower bound for recurring occurrences
            window_end: Exclusive upper bound for recurring occurrences

        Returns:
            Occurrences sorted by date, then event id
        """
        occurrences: list[EventOccurrence] = []
        base_count = 0
        for event in events:
            base_count += 1
            if not event.is_recurring:
                occurrences.append(EventOccurrence(event=event, date=event.date))
                continue
            for occurrence_date in self.expander.expand(event, window_start, window_end):
                occurrences.append(EventOccurrence(event=event, date=occurrence_date, is_virtual=True))

        occurrences.sort(key=lambda occ: (occ.date, occ.event.id))
        logger.info(
            "Loaded base events: %d, total with repetitions: %d", base_count, len(occurrences)
        )
        return occurrences

    def merge_default_window(
        self, events: Iterable[BandEvent], now: Optional[datetime] = None
    ) -> list[EventOccurrence]:
        """``merge`` over ``default_window(now)``."""
        start, end = self.default_window(now)
        return self.merge(events, start, end)


def occurrences_on_day(occurrences: Iterable[EventOccurrence], day: date) -> list[EventOccurrence]:
    """Occurrences whose local date is ``day``, earliest first.

    Each occurrence is read in its own timezone, so an evening gig stays on
    the evening's calendar day.
    """
    matching = [occ for occ in occurrences if occ.date.date() == day]
    return sorted(matching, key=lambda occ: occ.date)


def add_exception(event: BandEvent, occurrence_date: datetime) -> BandEvent:
    """Return a copy of ``event`` with one occurrence removed.

    This is the "delete this occurrence only" operation; the base event and
    every other occurrence are left intact.

    Raises:
        RecurrencePreconditionError: If ``event`` does not recur
    """
    recurrence = event.recurrence
    if recurrence is None:
        raise RecurrencePreconditionError(f"Event {event.id!r} has no occurrences to exclude")
    instant = ensure_timezone_aware(occurrence_date)
    if instant in recurrence.exceptions:
        return event
    updated = recurrence.model_copy(update={"exceptions": (*recurrence.exceptions, instant)})
    logger.debug("Excluded occurrence %s from event %s", instant, event.id)
    return event.model_copy(update={"recurrence": updated})
