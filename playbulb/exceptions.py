"""
Custom exceptions for the Playbulb module.
"""

from typing import Optional


class PlaybulbError(Exception):
    """Base exception for Playbulb errors."""
    pass


class DeviceNotFoundError(PlaybulbError):
    """Exception raised when no device matches the requested address."""

    def __init__(self, address: str):
        super().__init__(f"Device with address {address} not available")
        self.address = address


class ConnectionFailedError(PlaybulbError):
    """Exception raised when connecting, resolving services or disconnecting fails."""
    pass


class AttributeAbsentError(PlaybulbError):
    """Exception raised when a required characteristic is not exposed by the device."""

    def __init__(self, identifier: str):
        super().__init__(f"Characteristic {identifier} not available")
        self.identifier = identifier


class MalformedRecordError(PlaybulbError):
    """Exception raised when a raw record is too short to decode."""

    def __init__(self, record: str, expected: int, actual: int):
        super().__init__(
            f"{record} record needs at least {expected} bytes, got {actual}"
        )
        self.record = record
        self.expected = expected
        self.actual = actual


class WriteRejectedError(PlaybulbError):
    """Exception raised in strict mode when the device does not acknowledge a write."""

    def __init__(self, identifier: str, detail: Optional[str] = None):
        message = f"Write to {identifier} was rejected"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.identifier = identifier


class ReadError(PlaybulbError):
    """Exception raised when reading a characteristic fails at the transport level."""
    pass
