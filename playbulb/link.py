"""
Playbulb Link Manager

Brings a transport to the "ready" state (connected, services resolved) or
fails with ConnectionFailedError. There is no automatic reconnect.
"""

import asyncio
import logging
from enum import Enum

from .constants import DEFAULT_CONNECTION_PARAMS
from .exceptions import ConnectionFailedError
from .transport import Transport

logger = logging.getLogger(__name__)


class LinkState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    SERVICES_RESOLVING = "services_resolving"
    READY = "ready"
    FAILED = "failed"


class LinkManager:
    """
    Connection lifecycle for a single transport.

    Usage:
        async with LinkManager(BleakTransport(device)) as link:
            registry = AttributeRegistry(link.transport)
    """

    def __init__(self, transport: Transport,
                 poll_interval: float = DEFAULT_CONNECTION_PARAMS["poll_interval"],
                 resolve_attempts: int = DEFAULT_CONNECTION_PARAMS["resolve_attempts"]):
        """
        Args:
            transport: Link to manage
            poll_interval: Seconds to wait between service resolution checks
            resolve_attempts: Total number of checks, including the immediate one
        """
        if resolve_attempts < 1:
            raise ValueError("resolve_attempts must be at least 1")
        self.transport = transport
        self.poll_interval = poll_interval
        self.resolve_attempts = resolve_attempts
        self._state = LinkState.IDLE

    def __repr__(self):
        return f"<LinkManager addr={self.transport.address} state={self._state.value}>"

    @property
    def state(self) -> LinkState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is LinkState.READY

    def _fail(self, message: str) -> ConnectionFailedError:
        self._state = LinkState.FAILED
        logger.warning(f"{self.transport.address}: {message}")
        return ConnectionFailedError(message)

    async def connect(self) -> None:
        """
        Connect and wait for service resolution.

        Raises:
            ConnectionFailedError: If the link does not come up, services are
                not resolved after ``resolve_attempts`` checks, or the wait is
                cancelled
        """
        address = self.transport.address
        self._state = LinkState.CONNECTING
        logger.info(f"Connecting to {address}")

        await self.transport.connect()
        if not self.transport.is_connected():
            raise self._fail(f"Unable to connect to {address}")

        self._state = LinkState.SERVICES_RESOLVING
        resolved = self.transport.is_services_resolved()
        attempt = 1
        try:
            while not resolved and attempt < self.resolve_attempts:
                logger.debug(f"Services of {address} not resolved yet (attempt {attempt}/{self.resolve_attempts})")
                await asyncio.sleep(self.poll_interval)
                attempt += 1
                resolved = self.transport.is_services_resolved()
        except asyncio.CancelledError as err:
            await self._drop_link()
            raise self._fail("Resolving services interrupted") from err

        if not resolved:
            await self._drop_link()
            raise self._fail("Resolving services timed out")

        self._state = LinkState.READY
        logger.info(f"Connected to {address}")

    async def disconnect(self) -> None:
        """
        Disconnect the link.

        Raises:
            ConnectionFailedError: If the transport reports failure
        """
        if not await self.transport.disconnect():
            raise self._fail("Disconnection failed")
        self._state = LinkState.IDLE
        logger.info(f"Disconnected from {self.transport.address}")

    async def __aenter__(self) -> 'LinkManager':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.disconnect()
            return
        try:
            await self.disconnect()
        except ConnectionFailedError as e:
            logger.error(f"Error during disconnect after {exc_type.__name__}: {e}")

    async def _drop_link(self) -> None:
        # the bulb accepts one central at a time, release it before failing
        if not await self.transport.disconnect():
            logger.warning(f"Could not release {self.transport.address} after failed connect")
