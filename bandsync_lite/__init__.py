"""bandsync_lite - recurring-event expansion for the BandSync band calendar.

Expands stored recurring events (daily, weekly, monthly, yearly) into the
concrete occurrences shown for a date window, and merges them with one-off
events for display.
"""

import logging
from pathlib import Path
from typing import Optional, Union

__version__ = "0.1.0"

from .config_loader import Config, load_config
from .lite_event_merger import LiteOccurrenceMerger, add_exception, occurrences_on_day
from .lite_event_parser import LiteEventDocumentParser, to_document
from .lite_exceptions import (
    BandSyncError,
    ConfigError,
    DocumentParseError,
    RecurrencePreconditionError,
)
from .lite_logging import configure_lite_logging
from .lite_models import (
    BandEvent,
    DailyRule,
    EventOccurrence,
    MonthlyRule,
    NoRecurrenceRule,
    Recurrence,
    RecurrenceKind,
    WeeklyRule,
    YearlyRule,
    rule_from_fields,
)
from .lite_recurrence_expander import ExpanderConfig, LiteRecurrenceExpander, expand
from .recurrence_summary import describe, interval_label


def create_merger(config_path: Optional[Union[str, Path]] = None) -> LiteOccurrenceMerger:
    """Load configuration, apply its log level and return a ready merger.

    Args:
        config_path: YAML/JSON settings file; ``./bandsync.yaml`` when omitted

    Raises:
        ConfigError: If the settings file exists but cannot be used
    """
    config = load_config(config_path)
    configure_lite_logging(log_level=config.log_level)
    logging.getLogger(__name__).debug(
        "Merger window: %d months back, %d months ahead",
        config.display_months_back,
        config.display_months_ahead,
    )
    return LiteOccurrenceMerger(config)


__all__ = [
    "BandEvent",
    "BandSyncError",
    "Config",
    "ConfigError",
    "DailyRule",
    "DocumentParseError",
    "EventOccurrence",
    "ExpanderConfig",
    "LiteEventDocumentParser",
    "LiteOccurrenceMerger",
    "LiteRecurrenceExpander",
    "MonthlyRule",
    "NoRecurrenceRule",
    "Recurrence",
    "RecurrenceKind",
    "RecurrencePreconditionError",
    "WeeklyRule",
    "YearlyRule",
    "add_exception",
    "configure_lite_logging",
    "create_merger",
    "describe",
    "expand",
    "interval_label",
    "load_config",
    "occurrences_on_day",
    "rule_from_fields",
    "to_document",
]
