"""
Playbulb Transport

The narrow interface the rest of the package uses to reach the device, and
its implementation on top of bleak. The transport moves opaque byte
sequences; it knows nothing about the record formats.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Protocol, Union

from bleak import BleakClient, BleakScanner
from bleak.backends.device import BLEDevice
from bleak.exc import BleakError

from .constants import DEFAULT_CONNECTION_PARAMS
from .exceptions import DeviceNotFoundError, ReadError

logger = logging.getLogger(__name__)


def normalize_identifier(identifier: str) -> str:
    """Characteristic UUIDs are compared lower-case."""
    return str(identifier).lower()


class Transport(Protocol):
    """
    Link level operations consumed by LinkManager, AttributeRegistry and Playbulb.

    ``connect``, ``disconnect``, ``read_value`` and ``write_value`` perform
    radio round trips; the remaining methods only inspect local state.
    """

    address: str

    async def connect(self) -> bool:
        ...

    async def disconnect(self) -> bool:
        ...

    def is_connected(self) -> bool:
        ...

    def is_services_resolved(self) -> bool:
        ...

    def enumerate_attributes(self) -> Mapping[str, Any]:
        ...

    async def read_value(self, handle: Any) -> bytes:
        ...

    async def write_value(self, handle: Any, data: bytes) -> bool:
        ...


class BleakTransport:
    """
    Transport backed by a ``BleakClient``.

    Usage:
        device = await find_device("6A:9C:4B:0F:AC:E6")
        transport = BleakTransport(device)
    """

    def __init__(self, device: Union[BLEDevice, str],
                 timeout: float = DEFAULT_CONNECTION_PARAMS["timeout"]):
        """
        Args:
            device: BLEDevice from ``find_device`` or a MAC address
            timeout: Connection timeout in seconds
        """
        address = device if isinstance(device, str) else device.address
        self.address = address.upper()
        self._client = BleakClient(device, timeout=timeout)

    def __repr__(self):
        return f"<BleakTransport addr={self.address} connected={self.is_connected()}>"

    async def connect(self) -> bool:
        try:
            await self._client.connect()
        except (BleakError, asyncio.TimeoutError) as e:
            logger.warning(f"Failed to connect to {self.address}: {e}")
            return False
        return self._client.is_connected

    async def disconnect(self) -> bool:
        try:
            await self._client.disconnect()
        except (BleakError, asyncio.TimeoutError) as e:
            logger.warning(f"Error during disconnect from {self.address}: {e}")
            return False
        return not self._client.is_connected

    def is_connected(self) -> bool:
        return self._client.is_connected

    def is_services_resolved(self) -> bool:
        try:
            services = self._client.services
        except BleakError:
            # bleak raises until service discovery has been performed
            return False
        return services is not None and bool(services.services)

    def enumerate_attributes(self) -> Dict[str, Any]:
        return {
            normalize_identifier(char.uuid): char
            for service in self._client.services
            for char in service.characteristics
        }

    async def read_value(self, handle: Any) -> bytes:
        try:
            data = await self._client.read_gatt_char(handle)
        except (BleakError, asyncio.TimeoutError) as e:
            raise ReadError(f"Read from {getattr(handle, 'uuid', handle)} failed: {e}") from e
        return bytes(data)

    async def write_value(self, handle: Any, data: bytes) -> bool:
        try:
            await self._client.write_gatt_char(handle, data, response=True)
        except (BleakError, asyncio.TimeoutError) as e:
            logger.warning(f"Write to {getattr(handle, 'uuid', handle)} failed: {e}")
            return False
        return True


async def find_device(address: str,
                      timeout: float = DEFAULT_CONNECTION_PARAMS["scan_timeout"]) -> BLEDevice:
    """
    Look up a device by its MAC address.

    Args:
        address: Bluetooth MAC address (e.g., "XX:XX:XX:XX:XX:XX")
        timeout: How long to listen for the device in seconds

    Returns:
        The matching BLEDevice

    Raises:
        DeviceNotFoundError: If no device with that address is advertising
    """
    device = await BleakScanner.find_device_by_address(address, timeout=timeout)
    if device is None:
        raise DeviceNotFoundError(address)
    logger.debug(f"Found {address}: {device.name}")
    return device
