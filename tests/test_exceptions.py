"""Test Playbulb exceptions."""
from __future__ import annotations

import pytest

from playbulb.exceptions import (
    AttributeAbsentError,
    ConnectionFailedError,
    DeviceNotFoundError,
    MalformedRecordError,
    PlaybulbError,
    ReadError,
    WriteRejectedError,
)


@pytest.mark.parametrize("error", [
    DeviceNotFoundError("6A:9C:4B:0F:AC:E6"),
    ConnectionFailedError("Resolving services timed out"),
    AttributeAbsentError("0000fffc-0000-1000-8000-00805f9b34fb"),
    MalformedRecordError("Color", 4, 2),
    WriteRejectedError("0000fffc-0000-1000-8000-00805f9b34fb"),
    ReadError("Read failed"),
])
def test_inheritance(error) -> None:
    """All errors derive from PlaybulbError."""
    assert isinstance(error, PlaybulbError)


def test_device_not_found_message() -> None:
    error = DeviceNotFoundError("6A:9C:4B:0F:AC:E6")
    assert str(error) == "Device with address 6A:9C:4B:0F:AC:E6 not available"


def test_malformed_record_fields() -> None:
    error = MalformedRecordError("Effect", 7, 3)
    assert (error.record, error.expected, error.actual) == ("Effect", 7, 3)
    assert str(error) == "Effect record needs at least 7 bytes, got 3"


def test_write_rejected_detail() -> None:
    assert str(WriteRejectedError("fffc")) == "Write to fffc was rejected"
    assert str(WriteRejectedError("fffc", "busy")) == "Write to fffc was rejected: busy"
