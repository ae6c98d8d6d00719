"""Fixtures for Playbulb tests."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from playbulb.constants import (
    CHARACTERISTIC_BATTERY_LEVEL,
    CHARACTERISTIC_COLOR,
    CHARACTERISTIC_EFFECT,
    CHARACTERISTIC_FIRMWARE_REVISION,
    CHARACTERISTIC_GIVEN_NAME,
    CHARACTERISTIC_HARDWARE_REVISION,
    CHARACTERISTIC_MANUFACTURER_NAME,
    CHARACTERISTIC_PIN,
    CHARACTERISTIC_PNP_ID,
    CHARACTERISTIC_RANDOM_MODE,
    CHARACTERISTIC_RUNNING_TIMERS,
    CHARACTERISTIC_SERIAL_NUMBER,
    CHARACTERISTIC_SOFTWARE_REVISION,
    CHARACTERISTIC_TIMER_SETTINGS,
)
from playbulb.registry import AttributeRegistry

MAC = "6A:9C:4B:0F:AC:E6"

# Slot 0 wakeup 08:30, slot 1 unset, slot 2 doze 22:00, slot 3 unset, clock 14:05
TIMER_SETTINGS = bytes([0, 8, 30, 2, 0xFF, 0, 1, 22, 0, 2, 0xFF, 0, 14, 5])
RUNNING_TIMERS = bytes([
    10, 20, 30, 40, 15,
    0, 0, 0, 0, 0,
    0, 0, 0, 255, 60,
    0, 0, 0, 0, 0,
])


class FakeTransport:
    """In-memory transport; handles are the characteristic UUIDs themselves."""

    def __init__(self, values: Optional[Dict[str, bytes]] = None, address: str = MAC):
        self.address = address
        self.values = dict(values or {})
        self.connected = False
        self.connect_result = True
        self.disconnect_result = True
        self.write_result = True
        # Services count as resolved from this check on; None means never
        self.resolved_after: Optional[int] = 1
        self.resolve_checks = 0
        self.reads: List[str] = []
        self.writes: List[Tuple[str, bytes]] = []

    async def connect(self) -> bool:
        self.connected = self.connect_result
        return self.connected

    async def disconnect(self) -> bool:
        if self.disconnect_result:
            self.connected = False
        return self.disconnect_result

    def is_connected(self) -> bool:
        return self.connected

    def is_services_resolved(self) -> bool:
        self.resolve_checks += 1
        return self.resolved_after is not None and self.resolve_checks >= self.resolved_after

    def enumerate_attributes(self) -> Dict[str, str]:
        return {identifier: identifier for identifier in self.values}

    async def read_value(self, handle: str) -> bytes:
        self.reads.append(handle)
        return self.values[handle]

    async def write_value(self, handle: str, data: bytes) -> bool:
        self.writes.append((handle, bytes(data)))
        if self.write_result:
            self.values[handle] = bytes(data)
        return self.write_result


@pytest.fixture
def device_values() -> Dict[str, bytes]:
    """Raw characteristic values of a battery powered Playbulb."""
    return {
        CHARACTERISTIC_GIVEN_NAME: b"Wohnzimmer",
        CHARACTERISTIC_PIN: b"1234",
        CHARACTERISTIC_BATTERY_LEVEL: bytes([87]),
        CHARACTERISTIC_MANUFACTURER_NAME: b"MIPOW",
        CHARACTERISTIC_SERIAL_NUMBER: b"BTL300",
        CHARACTERISTIC_FIRMWARE_REVISION: b"BTL300_v5",
        CHARACTERISTIC_HARDWARE_REVISION: b"CSR101x A05",
        CHARACTERISTIC_SOFTWARE_REVISION: b"Application version 2.4.3.26",
        CHARACTERISTIC_PNP_ID: bytes([0x01, 0x0A, 0x00]),
        CHARACTERISTIC_COLOR: bytes([0, 255, 0, 0]),
        CHARACTERISTIC_EFFECT: bytes([0, 0, 255, 0, 3, 0, 25, 0]),
        CHARACTERISTIC_TIMER_SETTINGS: TIMER_SETTINGS,
        CHARACTERISTIC_RUNNING_TIMERS: RUNNING_TIMERS,
        CHARACTERISTIC_RANDOM_MODE: bytes([0, 0, 0, 16, 30, 22, 30, 40, 75, 255, 0, 0, 0]),
    }


@pytest.fixture
def transport(device_values) -> FakeTransport:
    """A connected fake transport exposing every characteristic."""
    fake = FakeTransport(device_values)
    fake.connected = True
    return fake


@pytest.fixture
def registry(transport) -> AttributeRegistry:
    return AttributeRegistry(transport)
