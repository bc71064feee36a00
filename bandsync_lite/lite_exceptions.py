"""Exception hierarchy for bandsync_lite.

Recurrence expansion itself never raises for malformed-but-typed input; the
types below cover programming errors and strict decoding paths only.
"""


class BandSyncError(Exception):
    """Base exception for all bandsync_lite errors.

    Catch this to handle any error raised by the package without also
    swallowing unrelated failures.
    """


class RecurrencePreconditionError(BandSyncError, ValueError):
    """Recurrence expansion was requested for an event that does not recur.

    Raised when:
    - ``expand`` is called with an event whose ``recurrence`` is ``None``

    This is a caller bug. Non-recurring events belong in the display list as a
    single occurrence without going through the expander.
    """


class DocumentParseError(BandSyncError, ValueError):
    """A stored event document could not be decoded.

    Raised when:
    - A required field is missing or has the wrong shape
    - The ``date`` value is not a recognisable timestamp

    Only the strict decoding path raises this; the lenient path logs and
    returns ``None`` instead.
    """


class ConfigError(BandSyncError, ValueError):
    """Configuration file exists but cannot be used.

    Raised when:
    - The file is neither valid YAML nor valid JSON
    - The top-level value is not a mapping
    """
