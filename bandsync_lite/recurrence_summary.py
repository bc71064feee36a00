"""Human-readable descriptions of recurrence rules.

Produces the short sentences shown under the repeat settings, e.g.
"every 2 weeks on Monday, Friday until Mar 1, 2024".
"""

from .lite_models import NoRecurrenceRule, Recurrence, RecurrenceRule, WeeklyRule

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_UNITS = {
    "daily": ("day", "days"),
    "weekly": ("week", "weeks"),
    "monthly": ("month", "months"),
    "yearly": ("year", "years"),
}


def weekday_name(day: int) -> str:
    """Name for an ISO weekday number (1 = Monday)."""
    return WEEKDAY_NAMES[day - 1]


def interval_label(rule: RecurrenceRule) -> str:
    """Unit word for the rule's interval: "week" or "weeks", "" for no rule."""
    if isinstance(rule, NoRecurrenceRule):
        return ""
    singular, plural = _UNITS[rule.kind]
    return singular if rule.interval == 1 else plural


def describe(recurrence: Recurrence) -> str:
    """Describe ``recurrence`` as shown to band members.

    Returns an empty string for a rule without a usable frequency.
    """
    rule = recurrence.rule
    if isinstance(rule, NoRecurrenceRule):
        return ""

    summary = "every "
    if rule.interval > 1:
        summary += f"{rule.interval} "
    summary += interval_label(rule)

    if isinstance(rule, WeeklyRule) and rule.days_of_week:
        summary += " on " + ", ".join(weekday_name(day) for day in rule.days_of_week)

    if recurrence.end_date is not None:
        end = recurrence.end_date
        summary += f" until {end:%b} {end.day}, {end.year}"
    else:
        summary += " with no end date"
    return summary
