"""Recurrence expansion logic for BandSync Lite.

Turns a base event with a recurrence rule into the concrete occurrence
instants that fall inside a half-open query window ``[start, end)``.
Expansion is a pure computation: no I/O, no shared state, no caching.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from .lite_datetime_utils import (
    add_months,
    add_years,
    end_date_bound,
    ensure_timezone_aware,
    months_between,
    start_of_week,
)
from .lite_exceptions import RecurrencePreconditionError
from .lite_models import (
    BandEvent,
    DailyRule,
    MonthlyRule,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)

logger = logging.getLogger(__name__)


@dataclass
class ExpanderConfig:
    """Configuration for recurrence expansion.

    Consolidates expansion settings with explicit defaults.
    """

    # None means unbounded; the window already bounds the output
    max_occurrences_per_event: Optional[int] = None
    exception_tolerance_seconds: int = 60

    @classmethod
    def from_settings(cls, settings: Any) -> "ExpanderConfig":
        """Extract expansion configuration from any settings object.

        Args:
            settings: Object exposing expansion attributes, or None

        Returns:
            ExpanderConfig with values from settings or defaults
        """
        return cls(
            max_occurrences_per_event=getattr(settings, "max_occurrences_per_event", None),
            exception_tolerance_seconds=getattr(settings, "exception_tolerance_seconds", 60),
        )


def _step_count_before(anchor: datetime, target: datetime, step: timedelta) -> int:
    """Number of whole steps that can be skipped without passing ``target``.

    One step of slack absorbs DST offset differences between wall-clock and
    absolute arithmetic.
    """
    if target <= anchor:
        return 0
    return max(0, (target - anchor) // step - 1)


def _fixed_steps(anchor: datetime, days: int, window_start: datetime) -> Iterator[datetime]:
    try:
        step = timedelta(days=days)
    except OverflowError:
        # A step wider than the datetime range leaves only the anchor
        yield anchor
        return
    k = _step_count_before(anchor, window_start, step)
    while True:
        try:
            candidate = anchor + step * k
        except OverflowError:
            return
        yield candidate
        k += 1


def _month_steps(anchor: datetime, interval: int, window_start: datetime) -> Iterator[datetime]:
    # Always offset from the anchor so a clamped month does not drag later days
    k = max(0, months_between(anchor, window_start) // interval - 1)
    while True:
        try:
            candidate = add_months(anchor, k * interval)
        except (OverflowError, ValueError):
            return
        yield candidate
        k += 1


def _year_steps(anchor: datetime, interval: int, window_start: datetime) -> Iterator[datetime]:
    k = max(0, (window_start.year - anchor.year) // interval - 1)
    while True:
        try:
            candidate = add_years(anchor, k * interval)
        except (OverflowError, ValueError):
            return
        yield candidate
        k += 1


def _weekday_steps(
    anchor: datetime, interval: int, days_of_week: tuple[int, ...], window_start: datetime
) -> Iterator[datetime]:
    """Yield every listed weekday of every ``interval``-th week block.

    Blocks start on the Monday of the anchor's week and keep the anchor's
    time of day. Dates before the anchor are left to the caller to drop.
    Streams end quietly at the edge of the datetime range.
    """
    first_block = start_of_week(anchor)
    try:
        block_step = timedelta(weeks=interval)
    except OverflowError:
        block_step = None
    k = 0 if block_step is None else _step_count_before(first_block, window_start, block_step)
    while True:
        try:
            block = first_block if block_step is None else first_block + block_step * k
        except OverflowError:
            return
        for day in days_of_week:
            try:
                candidate = block + timedelta(days=day - 1)
            except OverflowError:
                return
            yield candidate
        if block_step is None:
            return
        k += 1


def iter_candidates(rule: RecurrenceRule, anchor: datetime, window_start: datetime) -> Iterator[datetime]:
    """Yield non-decreasing candidate instants for ``rule`` near ``window_start``.

    The stream only ends at the edge of the datetime range; callers stop it
    against their own bounds. A rule
    without a usable frequency yields nothing.
    """
    if isinstance(rule, DailyRule):
        return _fixed_steps(anchor, rule.interval, window_start)
    if isinstance(rule, WeeklyRule):
        if rule.days_of_week:
            return _weekday_steps(anchor, rule.interval, rule.days_of_week, window_start)
        return _fixed_steps(anchor, 7 * rule.interval, window_start)
    if isinstance(rule, MonthlyRule):
        return _month_steps(anchor, rule.interval, window_start)
    if isinstance(rule, YearlyRule):
        return _year_steps(anchor, rule.interval, window_start)
    return iter(())


class LiteRecurrenceExpander:
    """Expands recurring band events into occurrence instants."""

    def __init__(self, settings: Any = None):
        """Initialize expander with configuration settings.

        Args:
            settings: Optional object with expansion settings (see ExpanderConfig)
        """
        self.config = ExpanderConfig.from_settings(settings)

    def expand(
        self,
        event: BandEvent,
        window_start: datetime,
        window_end: datetime,
        max_occurrences: Optional[int] = None,
    ) -> list[datetime]:
        """Return the instants at which ``event`` recurs inside the window.

        Args:
            event: Base event; must carry a recurrence
            window_start: Inclusive lower bound
            window_end: Exclusive upper bound
            max_occurrences: Per-call cap overriding the configured one

        Returns:
            Strictly increasing list of occurrence datetimes. Every entry is at
            or after the anchor, inside the window and, when the rule has an
            end date, no later than the end of that day.

        Raises:
            RecurrencePreconditionError: If the event does not recur
        """
        recurrence = event.recurrence
        if recurrence is None:
            raise RecurrencePreconditionError(
                f"Event {event.id!r} is not recurring; add it to the display list directly"
            )

        start = ensure_timezone_aware(window_start)
        end = ensure_timezone_aware(window_end)
        if start >= end:
            return []

        anchor = event.date
        upper = None
        if recurrence.end_date is not None:
            try:
                upper = end_date_bound(recurrence.end_date, anchor.tzinfo)
            except OverflowError:
                # End of day falls outside the datetime range; the window still bounds the stream
                logger.debug("End date of event %s is beyond the datetime range", event.id)
        if upper is not None and upper < start:
            return []

        limit = max_occurrences if max_occurrences is not None else self.config.max_occurrences_per_event
        tolerance = self.config.exception_tolerance_seconds
        excluded = recurrence.exceptions

        occurrences: list[datetime] = []
        for candidate in iter_candidates(recurrence.rule, anchor, start):
            if candidate >= end or (upper is not None and candidate > upper):
                break
            if candidate < start or candidate < anchor:
                continue
            if excluded and any(abs((candidate - ex).total_seconds()) < tolerance for ex in excluded):
                logger.debug("Skipping excluded occurrence %s of event %s", candidate, event.id)
                continue
            if limit is not None and len(occurrences) >= limit:
                logger.warning(
                    "Recurrence expansion for event %s truncated at %d occurrences",
                    event.id,
                    limit,
                )
                break
            occurrences.append(candidate)

        logger.debug(
            "Expanded event %s (%s): %d occurrences in [%s, %s)",
            event.id,
            recurrence.rule.kind,
            len(occurrences),
            start.isoformat(),
            end.isoformat(),
        )
        return occurrences


_default_expander = LiteRecurrenceExpander()


def expand(
    event: BandEvent,
    window_start: datetime,
    window_end: datetime,
    max_occurrences: Optional[int] = None,
) -> list[datetime]:
    """Expand ``event`` with default settings. See ``LiteRecurrenceExpander.expand``."""
    return _default_expander.expand(event, window_start, window_end, max_occurrences)
