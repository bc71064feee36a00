"""Event document decoding and encoding for BandSync Lite.

The event store hands over plain mappings with camelCase keys and
timestamp values. This module turns them into ``BandEvent`` models and back.
It never talks to the store itself.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from .lite_datetime_utils import to_datetime
from .lite_exceptions import DocumentParseError
from .lite_models import (
    BandEvent,
    DailyScheduleItem,
    EventContact,
    Hotel,
    NoRecurrenceRule,
    Recurrence,
    WeeklyRule,
    rule_from_fields,
)

logger = logging.getLogger(__name__)

_REQUIRED_STRINGS = ("title", "type", "status", "location", "fee")
_CONTACT_KEYS = ("name", "phone", "email")
_HOTEL_KEYS = {"address": "address", "checkIn": "check_in", "checkOut": "check_out"}


class LiteEventDocumentParser:
    """Decodes stored event documents into ``BandEvent`` models."""

    def parse_document(self, data: Mapping[str, Any], doc_id: str) -> Optional[BandEvent]:
        """Decode one stored document, returning None when it is unusable.

        Args:
            data: Document fields as returned by the store
            doc_id: Store-assigned document id

        Returns:
            BandEvent, or None if a required field is missing or malformed
        """
        try:
            return self.parse_document_strict(data, doc_id)
        except DocumentParseError as e:
            logger.warning("Skipping event document %s: %s", doc_id, e)
            return None

    def parse_document_strict(self, data: Mapping[str, Any], doc_id: str) -> BandEvent:
        """Decode one stored document.

        Raises:
            DocumentParseError: If a required field is missing or malformed
        """
        fields: dict[str, Any] = {}
        for key in _REQUIRED_STRINGS:
            value = data.get(key)
            if not isinstance(value, str):
                raise DocumentParseError(f"missing or non-string field {key!r}")
            fields[key] = value

        try:
            event_date = to_datetime(data.get("date"))
        except ValueError as e:
            raise DocumentParseError(f"invalid date: {e}") from e

        organizer = self._parse_contact(data.get("organizer"), "organizer")
        coordinator = self._parse_contact(data.get("coordinator"), "coordinator")
        hotel = self._parse_hotel(data.get("hotel"))

        setlist = data.get("setlist")
        notes = data.get("notes")
        is_personal = data.get("isPersonal")

        try:
            return BandEvent(
                id=doc_id,
                date=event_date,
                organizer=organizer,
                coordinator=coordinator,
                hotel=hotel,
                setlist=[str(s) for s in setlist] if isinstance(setlist, list) else [],
                setlist_id=data.get("setlistId") if isinstance(data.get("setlistId"), str) else None,
                setlist_name=data.get("setlistName") if isinstance(data.get("setlistName"), str) else None,
                notes=notes if isinstance(notes, str) else "",
                schedule=self._parse_schedule(data.get("schedule")),
                is_personal=is_personal if isinstance(is_personal, bool) else False,
                group_id=data.get("groupId") if isinstance(data.get("groupId"), str) else "",
                recurrence=self.parse_recurrence(data, doc_id),
                **fields,
            )
        except ValidationError as e:
            raise DocumentParseError(str(e)) from e

    def parse_recurrence(self, data: Mapping[str, Any], doc_id: str = "<unknown>") -> Optional[Recurrence]:
        """Decode the recurrence fields of a document.

        Returns None when ``isRecurring`` is not true. An absent or
        unrecognised ``recurrenceType`` yields a rule that expands to nothing.
        """
        if data.get("isRecurring") is not True:
            return None

        raw_type = data.get("recurrenceType")
        interval = data.get("recurrenceInterval", 1)
        if not isinstance(interval, int) or isinstance(interval, bool):
            logger.debug("Event %s: non-integer recurrenceInterval %r, using 1", doc_id, interval)
            interval = 1

        rule = rule_from_fields(
            raw_type if isinstance(raw_type, str) else None,
            interval,
            self._parse_days_of_week(data.get("recurrenceDaysOfWeek"), doc_id),
        )
        if isinstance(rule, NoRecurrenceRule):
            logger.warning(
                "Event %s is marked recurring with unrecognised type %r; it will not repeat",
                doc_id,
                raw_type,
            )

        end_date = None
        if data.get("recurrenceEndDate") is not None:
            try:
                end_date = to_datetime(data["recurrenceEndDate"])
            except ValueError:
                logger.warning("Event %s: unreadable recurrenceEndDate, treating as open-ended", doc_id)

        parent_id = data.get("recurrenceParentId")
        return Recurrence(
            rule=rule,
            end_date=end_date,
            parent_id=parent_id if isinstance(parent_id, str) else None,
            exceptions=tuple(self._parse_exceptions(data.get("exceptions"), doc_id)),
        )

    def _parse_contact(self, value: Any, key: str) -> EventContact:
        if not isinstance(value, Mapping) or not all(isinstance(value.get(k), str) for k in _CONTACT_KEYS):
            raise DocumentParseError(f"missing or malformed {key!r}")
        return EventContact(**{k: value[k] for k in _CONTACT_KEYS})

    def _parse_hotel(self, value: Any) -> Hotel:
        if not isinstance(value, Mapping) or not all(isinstance(value.get(k), str) for k in _HOTEL_KEYS):
            raise DocumentParseError("missing or malformed 'hotel'")
        return Hotel(**{attr: value[key] for key, attr in _HOTEL_KEYS.items()})

    def _parse_schedule(self, value: Any) -> list[DailyScheduleItem]:
        # Incomplete schedule rows are dropped, the rest of the event is kept
        if not isinstance(value, list):
            return []
        items = []
        for row in value:
            if not isinstance(row, Mapping):
                continue
            time_text, activity = row.get("time"), row.get("activity")
            if not isinstance(time_text, str) or not isinstance(activity, str):
                continue
            item_id = row.get("id")
            if isinstance(item_id, str):
                items.append(DailyScheduleItem(id=item_id, time=time_text, activity=activity))
            else:
                items.append(DailyScheduleItem(time=time_text, activity=activity))
        return items

    def _parse_days_of_week(self, value: Any, doc_id: str) -> tuple[int, ...]:
        if not isinstance(value, list):
            return ()
        days = []
        for day in value:
            if isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= 7:
                days.append(day)
            else:
                logger.warning("Event %s: ignoring invalid weekday %r", doc_id, day)
        return tuple(days)

    def _parse_exceptions(self, value: Any, doc_id: str) -> list[datetime]:
        if not isinstance(value, list):
            return []
        parsed = []
        for raw in value:
            try:
                parsed.append(to_datetime(raw))
            except ValueError as e:
                logger.warning("Event %s: skipping unreadable exception %r: %s", doc_id, raw, e)
        return parsed


def to_document(event: BandEvent) -> dict[str, Any]:
    """Encode ``event`` in the stored document layout.

    Recurrence keys are written only for recurring events. Timestamps stay
    native datetimes; the store client converts them on write.
    """
    doc: dict[str, Any] = {
        "id": event.id,
        "groupId": event.group_id,
        "title": event.title,
        "date": event.date,
        "type": event.type,
        "status": event.status,
        "location": event.location,
        "fee": event.fee,
        "notes": event.notes,
        "setlist": list(event.setlist),
        "isPersonal": event.is_personal,
        "organizer": event.organizer.model_dump(),
        "coordinator": event.coordinator.model_dump(),
        "hotel": {
            "address": event.hotel.address,
            "checkIn": event.hotel.check_in,
            "checkOut": event.hotel.check_out,
        },
        "schedule": [
            {"time": item.time, "activity": item.activity, "id": item.id} for item in event.schedule
        ],
        "isRecurring": event.is_recurring,
    }
    if event.setlist_id is not None:
        doc["setlistId"] = event.setlist_id
    if event.setlist_name is not None:
        doc["setlistName"] = event.setlist_name

    recurrence = event.recurrence
    if recurrence is None:
        return doc

    rule = recurrence.rule
    if isinstance(rule, NoRecurrenceRule):
        if rule.raw_type is not None:
            doc["recurrenceType"] = rule.raw_type
        doc["recurrenceInterval"] = rule.raw_interval
        if rule.raw_days_of_week:
            doc["recurrenceDaysOfWeek"] = list(rule.raw_days_of_week)
    else:
        doc["recurrenceType"] = rule.kind
        doc["recurrenceInterval"] = rule.interval
    if isinstance(rule, WeeklyRule) and rule.days_of_week:
        doc["recurrenceDaysOfWeek"] = list(rule.days_of_week)
    if recurrence.end_date is not None:
        doc["recurrenceEndDate"] = recurrence.end_date
    if recurrence.parent_id is not None:
        doc["recurrenceParentId"] = recurrence.parent_id
    if recurrence.exceptions:
        doc["exceptions"] = list(recurrence.exceptions)
    return doc
