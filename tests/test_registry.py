"""Test Playbulb attribute registry."""
from __future__ import annotations

import pytest

from playbulb.constants import CHARACTERISTIC_COLOR, CHARACTERISTIC_PIN
from playbulb.exceptions import AttributeAbsentError, ConnectionFailedError
from playbulb.registry import AttributeRegistry

from conftest import FakeTransport


class CountingTransport(FakeTransport):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enumerations = 0

    def enumerate_attributes(self):
        self.enumerations += 1
        return super().enumerate_attributes()


class TestAttributeRegistry:
    """Tests for AttributeRegistry."""

    def test_enumerates_once(self) -> None:
        transport = CountingTransport({CHARACTERISTIC_COLOR: bytes(4)})
        transport.connected = True

        registry = AttributeRegistry(transport)
        registry.get(CHARACTERISTIC_COLOR)
        registry.get(CHARACTERISTIC_PIN)
        assert CHARACTERISTIC_COLOR in registry

        assert transport.enumerations == 1
        assert len(registry) == 1
        assert list(registry) == [CHARACTERISTIC_COLOR]

    def test_requires_connection(self) -> None:
        with pytest.raises(ConnectionFailedError):
            AttributeRegistry(FakeTransport({CHARACTERISTIC_COLOR: bytes(4)}))

    def test_lookup_is_case_insensitive(self) -> None:
        transport = FakeTransport({CHARACTERISTIC_COLOR.upper(): bytes(4)})
        transport.connected = True

        registry = AttributeRegistry(transport)

        assert CHARACTERISTIC_COLOR in registry
        assert registry.get(CHARACTERISTIC_COLOR) == CHARACTERISTIC_COLOR.upper()

    def test_absent_is_none(self, registry) -> None:
        assert registry.get("0000abcd-0000-1000-8000-00805f9b34fb") is None
        assert "0000abcd-0000-1000-8000-00805f9b34fb" not in registry

    def test_empty_value_is_present(self) -> None:
        transport = FakeTransport({CHARACTERISTIC_PIN: b""})
        transport.connected = True

        registry = AttributeRegistry(transport)

        assert CHARACTERISTIC_PIN in registry
        assert registry.get(CHARACTERISTIC_PIN) is not None

    def test_require_absent(self) -> None:
        transport = FakeTransport({})
        transport.connected = True
        registry = AttributeRegistry(transport)

        with pytest.raises(AttributeAbsentError) as err:
            registry.require(CHARACTERISTIC_COLOR)
        assert err.value.identifier == CHARACTERISTIC_COLOR

    @pytest.mark.asyncio
    async def test_read_and_write(self, registry, transport) -> None:
        assert await registry.read(CHARACTERISTIC_COLOR) == bytes([0, 255, 0, 0])
        assert await registry.write(CHARACTERISTIC_COLOR, bytes([1, 2, 3, 4])) is True
        assert transport.writes == [(CHARACTERISTIC_COLOR, bytes([1, 2, 3, 4]))]

    @pytest.mark.asyncio
    async def test_write_absent(self) -> None:
        transport = FakeTransport({})
        transport.connected = True
        registry = AttributeRegistry(transport)

        with pytest.raises(AttributeAbsentError):
            await registry.write(CHARACTERISTIC_COLOR, bytes(4))
        assert transport.writes == []

    def test_address(self, registry) -> None:
        assert registry.address == "6A:9C:4B:0F:AC:E6"
