"""Tests for the bandsync_lite exception hierarchy."""

import pytest

from bandsync_lite.lite_exceptions import (
    BandSyncError,
    ConfigError,
    DocumentParseError,
    RecurrencePreconditionError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("exc_type", [RecurrencePreconditionError, DocumentParseError, ConfigError])
def test_all_errors_share_base_and_value_error(exc_type):
    assert issubclass(exc_type, BandSyncError)
    assert issubclass(exc_type, ValueError)


def test_base_catches_subclasses():
    with pytest.raises(BandSyncError, match="not recurring"):
        raise RecurrencePreconditionError("event is not recurring")


def test_base_is_not_a_value_error():
    assert not issubclass(BandSyncError, ValueError)
