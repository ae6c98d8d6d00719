"""
Playbulb Device

Read/write facade over a ready link. Every device field is cached
independently: getters read through on first access (or when forced),
setters only update the cache once the device has acknowledged the write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .codec import (
    Color,
    Effect,
    Randommode,
    Timer,
    Timers,
    decode_color,
    decode_effect,
    decode_randommode,
    decode_string,
    decode_timers,
    decode_unsigned,
    encode_color,
    encode_effect,
    encode_randommode,
    encode_string,
    encode_timer,
)
from .constants import (
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
    NOT_AVAILABLE,
)
from .exceptions import (
    AttributeAbsentError,
    MalformedRecordError,
    PlaybulbError,
    ReadError,
    WriteRejectedError,
)
from .registry import AttributeRegistry

logger = logging.getLogger(__name__)


class Field(Enum):
    """Independently cached device fields."""
    NAME = "name"
    PIN = "pin"
    BATTERY_LEVEL = "battery_level"
    MANUFACTURER = "manufacturer"
    SERIAL_NUMBER = "serial_number"
    FIRMWARE_REVISION = "firmware_revision"
    HARDWARE_REVISION = "hardware_revision"
    SOFTWARE_REVISION = "software_revision"
    PNP_ID = "pnp_id"
    COLOR = "color"
    EFFECT = "effect"
    TIMERS = "timers"
    RANDOMMODE = "randommode"


@dataclass(frozen=True)
class DeviceState:
    """Point in time copy of everything cached for one device."""
    address: str
    name: Optional[str] = None
    pin: Optional[str] = None
    battery_level: Optional[int] = None
    manufacturer: Optional[str] = None
    serial_number: Optional[str] = None
    firmware_revision: Optional[str] = None
    hardware_revision: Optional[str] = None
    software_revision: Optional[str] = None
    pnp_id: Optional[int] = None
    color: Optional[Color] = None
    effect: Optional[Effect] = None
    timers: Optional[Timers] = None
    randommode: Optional[Randommode] = None

    def __str__(self) -> str:
        return (
            f"Playbulb(mac={self.address}, name={self.name}, pin={self.pin}, "
            f"battery={self.battery_level}, manufacturer={self.manufacturer}, "
            f"serialnumber={self.serial_number}, firmware={self.firmware_revision}, "
            f"hardware={self.hardware_revision}, software={self.software_revision}, "
            f"pnp={self.pnp_id}, color={self.color}, effect={self.effect}, "
            f"timers={self.timers}, randommode={self.randommode})"
        )


class Playbulb:
    """
    Cached view of a MiPow Playbulb.

    Usage:
        async with LinkManager(BleakTransport(device)) as link:
            bulb = Playbulb(AttributeRegistry(link.transport))
            await bulb.set_color(Color(white=255))
            print(await bulb.read_all())

    A rejected write leaves the cached value untouched and makes the setter
    return False; with ``strict_writes`` it raises WriteRejectedError instead.
    """

    def __init__(self, registry: AttributeRegistry, strict_writes: bool = False):
        self.registry = registry
        self.strict_writes = strict_writes
        self._address = registry.address
        self._cache: Dict[Field, Any] = {}

    def __repr__(self):
        return f"<Playbulb addr={self._address} cached={len(self._cache)}>"

    def __str__(self):
        return str(self.snapshot())

    @property
    def address(self) -> str:
        return self._address

    def is_cached(self, field: Field) -> bool:
        return field in self._cache

    def invalidate(self, field: Optional[Field] = None) -> None:
        """Forget one cached field, or all of them."""
        if field is None:
            self._cache.clear()
        else:
            self._cache.pop(field, None)

    def snapshot(self) -> DeviceState:
        """Return the cached state without touching the device."""
        return DeviceState(
            address=self._address,
            **{f.value: self._cache.get(f) for f in Field}
        )

    async def _get(self, field: Field, force: bool,
                   read: Callable[[], Awaitable[Any]]) -> Any:
        if not force and field in self._cache:
            return self._cache[field]
        value = await read()
        self._cache[field] = value
        return value

    async def _read(self, identifier: str, decode: Callable[[bytes], Any]) -> Any:
        return decode(await self.registry.read(identifier))

    async def _read_optional(self, identifier: str, decode: Callable[[bytes], Any],
                             default: Any) -> Any:
        if identifier not in self.registry:
            logger.debug(f"{self._address} has no {identifier}, using {default!r}")
            return default
        return await self._read(identifier, decode)

    async def _write(self, identifier: str, data: bytes) -> bool:
        success = await self.registry.write(identifier, data)
        if not success:
            logger.warning(f"{self._address} did not acknowledge write to {identifier}")
            if self.strict_writes:
                raise WriteRejectedError(identifier)
        return success

    # Device information

    async def get_name(self, force: bool = False) -> str:
        return await self._get(Field.NAME, force,
                               lambda: self._read(CHARACTERISTIC_GIVEN_NAME, decode_string))

    async def get_pin(self, force: bool = False) -> str:
        """PIN code, or "N/A" on models without a PIN characteristic."""
        return await self._get(Field.PIN, force, lambda: self._read_optional(
            CHARACTERISTIC_PIN, decode_string, NOT_AVAILABLE))

    async def get_battery_level(self, force: bool = False) -> Optional[int]:
        """Battery level in percent, or None for mains powered models."""
        return await self._get(Field.BATTERY_LEVEL, force, lambda: self._read_optional(
            CHARACTERISTIC_BATTERY_LEVEL, decode_unsigned, None))

    async def get_manufacturer(self, force: bool = False) -> str:
        return await self._get(Field.MANUFACTURER, force,
                               lambda: self._read(CHARACTERISTIC_MANUFACTURER_NAME, decode_string))

    async def get_serial_number(self, force: bool = False) -> str:
        return await self._get(Field.SERIAL_NUMBER, force,
                               lambda: self._read(CHARACTERISTIC_SERIAL_NUMBER, decode_string))

    async def get_firmware_revision(self, force: bool = False) -> str:
        return await self._get(Field.FIRMWARE_REVISION, force,
                               lambda: self._read(CHARACTERISTIC_FIRMWARE_REVISION, decode_string))

    async def get_hardware_revision(self, force: bool = False) -> str:
        return await self._get(Field.HARDWARE_REVISION, force,
                               lambda: self._read(CHARACTERISTIC_HARDWARE_REVISION, decode_string))

    async def get_software_revision(self, force: bool = False) -> str:
        return await self._get(Field.SOFTWARE_REVISION, force,
                               lambda: self._read(CHARACTERISTIC_SOFTWARE_REVISION, decode_string))

    async def get_pnp_id(self, force: bool = False) -> int:
        """Vendor/product id record as one unsigned integer."""
        return await self._get(Field.PNP_ID, force,
                               lambda: self._read(CHARACTERISTIC_PNP_ID, decode_unsigned))

    # Light state

    async def get_color(self, force: bool = False) -> Color:
        return await self._get(Field.COLOR, force,
                               lambda: self._read(CHARACTERISTIC_COLOR, decode_color))

    async def get_effect(self, force: bool = False) -> Effect:
        return await self._get(Field.EFFECT, force,
                               lambda: self._read(CHARACTERISTIC_EFFECT, decode_effect))

    async def get_timers(self, force: bool = False) -> Optional[Timers]:
        """All four timer slots, or None if the model has no timer characteristics."""
        return await self._get(Field.TIMERS, force, self._read_timers)

    async def _read_timers(self) -> Optional[Timers]:
        if CHARACTERISTIC_TIMER_SETTINGS not in self.registry \
                or CHARACTERISTIC_RUNNING_TIMERS not in self.registry:
            return None
        timer_data = await self.registry.read(CHARACTERISTIC_TIMER_SETTINGS)
        effect_data = await self.registry.read(CHARACTERISTIC_RUNNING_TIMERS)
        return decode_timers(timer_data, effect_data)

    async def get_randommode(self, force: bool = False) -> Randommode:
        return await self._get(Field.RANDOMMODE, force,
                               lambda: self._read(CHARACTERISTIC_RANDOM_MODE, decode_randommode))

    async def read_all(self) -> DeviceState:
        """
        Refresh every field from the device.

        Fields are read independently; one that cannot be read does not stop
        the others, and keeps its previous cached value.

        Returns:
            Snapshot of the refreshed state

        Raises:
            PlaybulbError: The first read failure, once every field was tried
        """
        getters = (
            self.get_firmware_revision,
            self.get_hardware_revision,
            self.get_manufacturer,
            self.get_pnp_id,
            self.get_serial_number,
            self.get_software_revision,
            self.get_color,
            self.get_effect,
            self.get_timers,
            self.get_randommode,
            self.get_name,
            self.get_pin,
            self.get_battery_level,
        )
        errors: List[PlaybulbError] = []
        for getter in getters:
            try:
                await getter(force=True)
            except (AttributeAbsentError, MalformedRecordError, ReadError) as e:
                logger.warning(f"{self._address}: {getter.__name__} failed: {e}")
                errors.append(e)

        if errors:
            raise errors[0]
        return self.snapshot()

    # Mutators

    async def set_color(self, color: Color) -> bool:
        """
        Set the steady color.

        Args:
            color: Channel values, already clamped to 0-255

        Returns:
            True if the device acknowledged the write
        """
        success = await self._write(CHARACTERISTIC_COLOR, encode_color(color))
        if success:
            self._cache[Field.COLOR] = color
        return success

    async def set_effect(self, effect: Effect) -> bool:
        success = await self._write(CHARACTERISTIC_EFFECT, encode_effect(effect))
        if success:
            self._cache[Field.EFFECT] = effect
        return success

    async def set_randommode(self, randommode: Randommode,
                             now: Optional[datetime] = None) -> bool:
        success = await self._write(CHARACTERISTIC_RANDOM_MODE, encode_randommode(randommode, now))
        if success:
            self._cache[Field.RANDOMMODE] = randommode
        return success

    async def set_timer(self, timer: Timer, now: Optional[datetime] = None) -> bool:
        """
        Program one timer slot.

        Only slot ``timer.id % 4`` of the cached timers is replaced; the other
        slots and the device clock stay as they were read. If the timers have
        not been read yet nothing is cached.
        """
        success = await self._write(CHARACTERISTIC_TIMER_SETTINGS, encode_timer(timer, now))
        if success:
            timers = self._cache.get(Field.TIMERS)
            if timers is not None:
                self._cache[Field.TIMERS] = timers.with_timer(timer)
        return success

    async def set_name(self, name: str) -> bool:
        success = await self._write(CHARACTERISTIC_GIVEN_NAME, encode_string(name))
        if success:
            self._cache[Field.NAME] = name
        return success

    async def set_pin(self, pin: str) -> bool:
        success = await self._write(CHARACTERISTIC_PIN, encode_string(pin))
        if success:
            self._cache[Field.PIN] = pin
        return success
