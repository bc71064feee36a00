"""Data models for band calendar events - BandSync Lite version."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .lite_datetime_utils import ensure_timezone_aware


class RecurrenceKind(str, Enum):
    """Recurrence frequencies understood by the expander."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class EventType(str, Enum):
    """Event types with dedicated icons in the calendar."""

    CONCERT = "Concert"
    FESTIVAL = "Festival"
    MEETING = "Meeting"
    REHEARSAL = "Rehearsal"
    PHOTO_SESSION = "Photo Session"
    INTERVIEW = "Interview"


_TYPE_ICONS: dict[str, str] = {
    EventType.CONCERT.value: "🎤",
    EventType.FESTIVAL.value: "🎪",
    EventType.MEETING.value: "🤝",
    EventType.REHEARSAL.value: "🎸",
    EventType.PHOTO_SESSION.value: "📷",
    EventType.INTERVIEW.value: "🎙",
}

_TYPE_COLORS: dict[str, str] = {
    EventType.CONCERT.value: "red",
    EventType.FESTIVAL.value: "orange",
    EventType.MEETING.value: "yellow",
    EventType.REHEARSAL.value: "green",
    EventType.PHOTO_SESSION.value: "blue",
    EventType.INTERVIEW.value: "purple",
}

Weekday = Annotated[int, Field(ge=1, le=7)]


# Recurrence rule variants


class _IntervalRule(BaseModel):
    """Shared behaviour for variants that step by an interval."""

    model_config = ConfigDict(frozen=True)

    interval: int = Field(default=1, ge=1, description="Step multiplier")

    @field_validator("interval", mode="before")
    @classmethod
    def default_interval(cls, value: Any) -> Any:
        """Unset or non-positive intervals mean "every period"."""
        if value is None or isinstance(value, bool):
            return 1
        try:
            number = int(value)
        except (TypeError, ValueError):
            return value
        return number if number >= 1 else 1


class NoRecurrenceRule(BaseModel):
    """Marked recurring, but with an absent or unrecognised frequency.

    Expanding this variant yields no occurrences.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"
    raw_type: Optional[str] = Field(default=None, description="Type string found in storage")
    raw_interval: int = Field(default=1, description="Interval found in storage, kept verbatim")
    raw_days_of_week: tuple[int, ...] = Field(default=(), description="Weekdays found in storage")


class DailyRule(_IntervalRule):
    kind: Literal["daily"] = "daily"


class WeeklyRule(_IntervalRule):
    """Weekly recurrence, optionally on an explicit set of weekdays.

    ``days_of_week`` uses 1 = Monday .. 7 = Sunday and is stored sorted and
    de-duplicated. Empty means "on the anchor's weekday".
    """

    kind: Literal["weekly"] = "weekly"
    days_of_week: tuple[Weekday, ...] = Field(default=(), description="Weekdays, 1=Monday")

    @field_validator("days_of_week", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(sorted(set(value)))
        return value


class MonthlyRule(_IntervalRule):
    kind: Literal["monthly"] = "monthly"


class YearlyRule(_IntervalRule):
    kind: Literal["yearly"] = "yearly"


RecurrenceRule = Annotated[
    Union[NoRecurrenceRule, DailyRule, WeeklyRule, MonthlyRule, YearlyRule],
    Field(discriminator="kind"),
]

_RULE_TYPES: dict[str, type[BaseModel]] = {
    RecurrenceKind.DAILY.value: DailyRule,
    RecurrenceKind.WEEKLY.value: WeeklyRule,
    RecurrenceKind.MONTHLY.value: MonthlyRule,
    RecurrenceKind.YEARLY.value: YearlyRule,
}


def rule_from_fields(
    recurrence_type: Optional[str],
    interval: Any = 1,
    days_of_week: Optional[Any] = None,
) -> RecurrenceRule:
    """Build a rule variant from the string-typed fields kept in storage.

    Matching is case-insensitive. Anything that is not one of the four
    frequencies becomes a ``NoRecurrenceRule`` carrying the raw fields so they
    can be written back unchanged.
    """
    key = recurrence_type.strip().lower() if isinstance(recurrence_type, str) else ""
    rule_cls = _RULE_TYPES.get(key)
    if rule_cls is None:
        return NoRecurrenceRule(
            raw_type=recurrence_type,
            raw_interval=interval if isinstance(interval, int) and not isinstance(interval, bool) else 1,
            raw_days_of_week=tuple(days_of_week) if isinstance(days_of_week, (list, tuple)) else (),
        )
    if rule_cls is WeeklyRule:
        return WeeklyRule(interval=interval, days_of_week=days_of_week or ())
    return rule_cls(interval=interval)  # type: ignore[return-value]


class Recurrence(BaseModel):
    """A rule plus its end bound, lineage and excluded instants."""

    model_config = ConfigDict(frozen=True)

    rule: RecurrenceRule
    end_date: Optional[datetime] = Field(
        default=None, description="Last day on which occurrences may fall (inclusive)"
    )
    parent_id: Optional[str] = Field(default=None, description="Originating base event id")
    exceptions: tuple[datetime, ...] = Field(
        default=(), description="Occurrence instants removed by the user"
    )

    @field_validator("end_date")
    @classmethod
    def aware_end_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_timezone_aware(value) if value is not None else None

    @field_validator("exceptions")
    @classmethod
    def aware_exceptions(cls, value: tuple[datetime, ...]) -> tuple[datetime, ...]:
        return tuple(ensure_timezone_aware(dt) for dt in value)

    @property
    def kind(self) -> RecurrenceKind:
        return RecurrenceKind(self.rule.kind)


# Event display payload


class EventContact(BaseModel):
    """Organizer or coordinator contact details."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone: str = ""
    email: str = ""


class Hotel(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = ""
    check_in: str = ""
    check_out: str = ""


class DailyScheduleItem(BaseModel):
    """One line of an event's day schedule."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    time: str
    activity: str


class BandEvent(BaseModel):
    """Base event record as kept by the event store.

    Display fields are opaque to recurrence expansion and are carried
    unchanged onto every occurrence.
    """

    model_config = ConfigDict(frozen=True)

    # Core properties
    id: str = Field(..., description="Event ID")
    title: str = Field(..., description="Event title")
    date: datetime = Field(..., description="Start instant; anchor of any recurrence")
    type: str = Field(default="", description="Event type, e.g. Concert")
    status: str = Field(default="", description="Booking status")
    location: str = Field(default="", description="Venue")

    # People and logistics
    organizer: EventContact = Field(default_factory=EventContact)
    coordinator: EventContact = Field(default_factory=EventContact)
    hotel: Hotel = Field(default_factory=Hotel)
    fee: str = ""
    setlist: list[str] = Field(default_factory=list)
    setlist_id: Optional[str] = None
    setlist_name: Optional[str] = None
    notes: str = ""
    schedule: list[DailyScheduleItem] = Field(default_factory=list)

    # Ownership
    is_personal: bool = False
    group_id: str = ""

    # Recurrence
    recurrence: Optional[Recurrence] = Field(default=None, description="Set when the event repeats")

    @field_validator("date")
    @classmethod
    def aware_date(cls, value: datetime) -> datetime:
        return ensure_timezone_aware(value)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def icon(self) -> str:
        return _TYPE_ICONS.get(self.type, "📅")

    @property
    def type_color(self) -> str:
        return _TYPE_COLORS.get(self.type, "gray")

    @field_serializer("date")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()


class EventOccurrence(BaseModel):
    """A display instance of a base event at a concrete instant.

    Occurrences have no persisted identity; ``key`` identifies one.
    """

    model_config = ConfigDict(frozen=True)

    event: BandEvent
    date: datetime
    is_virtual: bool = Field(
        default=False, description="True if generated by recurrence expansion"
    )

    @property
    def key(self) -> tuple[str, datetime]:
        return (self.event.id, self.date)

    @property
    def title(self) -> str:
        return self.event.title

    @field_serializer("date")
    def serialize_datetime(self, dt: datetime) -> str:
        return dt.isoformat()
