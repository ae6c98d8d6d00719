"""
Playbulb Attribute Registry

Maps characteristic UUIDs to the transport's handles for the current
session. The table is built once, when the registry is created.
"""

import logging
from typing import Any, Dict, Iterator, Optional

from .exceptions import AttributeAbsentError, ConnectionFailedError
from .transport import Transport, normalize_identifier

logger = logging.getLogger(__name__)


class AttributeRegistry:
    """Characteristic lookup for one connected transport."""

    def __init__(self, transport: Transport):
        """
        Args:
            transport: A connected transport with resolved services

        Raises:
            ConnectionFailedError: If the transport is not connected
        """
        if not transport.is_connected():
            raise ConnectionFailedError(f"{transport.address} is not connected")

        self.transport = transport
        self._attributes: Dict[str, Any] = {
            normalize_identifier(identifier): handle
            for identifier, handle in transport.enumerate_attributes().items()
        }
        logger.debug(f"Found {len(self._attributes)} characteristics on {transport.address}")

    @property
    def address(self) -> str:
        return self.transport.address

    def __contains__(self, identifier: str) -> bool:
        return normalize_identifier(identifier) in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def get(self, identifier: str) -> Optional[Any]:
        """Return the handle for ``identifier`` or None if the device lacks it."""
        return self._attributes.get(normalize_identifier(identifier))

    def require(self, identifier: str) -> Any:
        handle = self.get(identifier)
        if handle is None:
            raise AttributeAbsentError(identifier)
        return handle

    async def read(self, identifier: str) -> bytes:
        data = await self.transport.read_value(self.require(identifier))
        logger.debug(f"Read {identifier}: {data.hex()}")
        return data

    async def write(self, identifier: str, data: bytes) -> bool:
        success = await self.transport.write_value(self.require(identifier), data)
        logger.debug(f"Written {identifier}: {data.hex()} (acknowledged={success})")
        return success
