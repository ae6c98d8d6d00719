"""
Playbulb Record Codec

Pure encode/decode functions for the fixed-layout records the Playbulb
exposes through its characteristics: color, light effect, timers and
random mode. Nothing in here performs I/O.

Record layouts (byte offsets):

    Color       [W, R, G, B]
    Effect      [W, R, G, B, type, 0, delay, 0]
    Timer       [id, type, sec, min, hour, flag, start_min, start_hour, W, R, G, B, runtime]
    Randommode  [sec, min, hour, start_h, start_m, end_h, end_m, min_int, max_int, W, R, G, B]

The wall-clock bytes of Timer and Randommode are only meaningful on write;
they are filled from ``now`` when encoding and ignored when decoding.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .constants import (
    COLOR_RECORD_SIZE,
    EFFECT_RECORD_SIZE,
    NOT_AVAILABLE,
    RANDOMMODE_HOUR_UNSET,
    RANDOMMODE_RECORD_SIZE,
    RUNNING_TIMERS_RECORD_SIZE,
    RUNNING_TIMERS_STRIDE,
    TIMER_CURRENT_HOUR_OFFSET,
    TIMER_CURRENT_MINUTE_OFFSET,
    TIMER_FLAG_ACTIVE,
    TIMER_FLAG_INACTIVE,
    TIMER_HOUR_UNSET,
    TIMER_SETTINGS_RECORD_SIZE,
    TIMER_SETTINGS_STRIDE,
    TIMER_SLOTS,
)
from .exceptions import MalformedRecordError


def _check_length(record: str, data: bytes, expected: int) -> None:
    if len(data) < expected:
        raise MalformedRecordError(record, expected, len(data))


def _format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


@dataclass
class Color:
    """Intensity of the four LED channels, each 0-255."""
    white: int = 0
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int):
        """Create a Color with the white channel off."""
        return cls(white=0, red=red, green=green, blue=blue)

    def to_hex(self) -> str:
        """Return hex color string of the RGB channels."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


class EffectType(Enum):
    """Built-in light effects."""
    BLINK = 0
    PULSE = 1
    DISCO = 2
    RAINBOW = 3
    CANDLE = 4
    OFF = 0xFF

    @classmethod
    def from_code(cls, code: int) -> 'EffectType':
        """Get effect from its wire code, falling back to OFF."""
        for effect in cls:
            if effect.value == code:
                return effect
        return cls.OFF


@dataclass
class Effect:
    """A light effect; ``delay`` is in effect specific time units (0-255)."""
    effect_type: EffectType
    color: Optional[Color] = None
    delay: int = 0

    def __str__(self) -> str:
        return f"Effect(type={self.effect_type.name}, color={self.color}, delay={self.delay})"


class TimerType(Enum):
    """Behaviour of a timer slot."""
    WAKEUP = 0
    DOZE = 1
    OFF = 2

    @classmethod
    def from_code(cls, code: int) -> 'TimerType':
        """Get timer type from its wire code, falling back to OFF."""
        for timer_type in cls:
            if timer_type.value == code:
                return timer_type
        return cls.OFF


@dataclass
class Timer:
    """
    One of the four timer slots.

    A slot is inactive when its starting hour is ``TIMER_HOUR_UNSET`` (-1);
    the device has no separate "active" field, so ``active`` is derived.
    """
    id: int
    timer_type: TimerType = TimerType.OFF
    starting_hour: int = TIMER_HOUR_UNSET
    starting_minute: int = 0
    runtime: int = 0
    color: Color = field(default_factory=Color)

    @property
    def active(self) -> bool:
        return self.starting_hour != TIMER_HOUR_UNSET

    @property
    def slot(self) -> int:
        """Index into the slot array; out of range ids alias modulo 4."""
        return self.id % TIMER_SLOTS

    @property
    def schedule(self) -> str:
        if not self.active:
            return NOT_AVAILABLE
        return _format_time(self.starting_hour, self.starting_minute)

    def __str__(self) -> str:
        return (
            f"Timer(id={self.id}, active={self.active}, type={self.timer_type.name}, "
            f"schedule={self.schedule}, runtime={self.runtime}, color={self.color})"
        )


@dataclass
class Timers:
    """All timer slots plus the device clock at the time they were read."""
    timers: List[Timer]
    current_hour: int = 0
    current_minute: int = 0

    def get_timer(self, timer_id: int) -> Timer:
        return self.timers[timer_id % TIMER_SLOTS]

    def with_timer(self, timer: Timer) -> 'Timers':
        """Return a copy with ``timer`` placed in slot ``timer.id % 4``."""
        timers = list(self.timers)
        timers[timer.slot] = timer
        return replace(self, timers=timers)

    def __str__(self) -> str:
        slots = ", ".join(str(t) for t in self.timers)
        return f"Timers(time={_format_time(self.current_hour, self.current_minute)}, {slots})"


@dataclass
class Randommode:
    """
    Random on/off schedule.

    A starting hour of ``RANDOMMODE_HOUR_UNSET`` (255) means no schedule is set.
    """
    starting_hour: int
    starting_minute: int
    ending_hour: int
    ending_minute: int
    min_interval: int
    max_interval: int
    color: Color = field(default_factory=Color)

    @property
    def is_set(self) -> bool:
        return self.starting_hour != RANDOMMODE_HOUR_UNSET

    @property
    def start(self) -> str:
        if not self.is_set:
            return NOT_AVAILABLE
        return _format_time(self.starting_hour, self.starting_minute)

    @property
    def stop(self) -> str:
        if not self.is_set:
            return NOT_AVAILABLE
        return _format_time(self.ending_hour, self.ending_minute)

    def __str__(self) -> str:
        return (
            f"Randommode(start={self.start}, stop={self.stop}, min={self.min_interval}, "
            f"max={self.max_interval}, color={self.color})"
        )


def decode_color(data: bytes) -> Color:
    """Decode a color from the first four bytes of ``data`` (W, R, G, B)."""
    _check_length("Color", data, COLOR_RECORD_SIZE)
    return Color(white=data[0], red=data[1], green=data[2], blue=data[3])


def encode_color(color: Color) -> bytes:
    """
    Encode a color as four bytes.

    Channels are truncated to 8 bits, callers must clamp to 0-255 beforehand.
    """
    return bytes([
        color.white & 0xFF,
        color.red & 0xFF,
        color.green & 0xFF,
        color.blue & 0xFF,
    ])


def decode_effect(data: bytes) -> Effect:
    _check_length("Effect", data, EFFECT_RECORD_SIZE)
    return Effect(
        effect_type=EffectType.from_code(data[4]),
        color=decode_color(data[0:4]),
        delay=data[6],
    )


def encode_effect(effect: Effect) -> bytes:
    """Encode an effect as eight bytes; a missing color is sent as all zero."""
    color = encode_color(effect.color) if effect.color is not None else bytes(4)
    return color + bytes([effect.effect_type.value & 0xFF, 0, effect.delay & 0xFF, 0])


def encode_timer(timer: Timer, now: Optional[datetime] = None) -> bytes:
    """
    Encode a single timer slot as thirteen bytes.

    Args:
        timer: Timer to write
        now: Wall clock sent along with the timer, defaults to the local time

    Returns:
        Raw record for the timer settings characteristic
    """
    if now is None:
        now = datetime.now()

    flag = TIMER_FLAG_ACTIVE if timer.active else TIMER_FLAG_INACTIVE
    return bytes([
        timer.id & 0xFF,
        timer.timer_type.value,
        now.second,
        now.minute,
        now.hour,
        flag,
        timer.starting_minute & 0xFF,
        timer.starting_hour & 0xFF,
    ]) + encode_color(timer.color) + bytes([timer.runtime & 0xFF])


def decode_timers(timer_data: bytes, effect_data: bytes) -> Timers:
    """
    Decode all four timer slots.

    Args:
        timer_data: Timer settings record; ``[type, hour, minute]`` per slot
            followed by the device's current hour and minute at offsets 12 and 13
        effect_data: Running timers record; ``[W, R, G, B, runtime]`` per slot

    Returns:
        Timers with slot ids 0..3 assigned positionally
    """
    _check_length("Timer settings", timer_data, TIMER_SETTINGS_RECORD_SIZE)
    _check_length("Running timers", effect_data, RUNNING_TIMERS_RECORD_SIZE)

    timers = []
    for i in range(TIMER_SLOTS):
        t = i * TIMER_SETTINGS_STRIDE
        e = i * RUNNING_TIMERS_STRIDE
        hour = timer_data[t + 1]
        # 0xFF is the signed -1 the device uses for an unset timer
        if hour == 0xFF:
            hour = TIMER_HOUR_UNSET
        timers.append(Timer(
            id=i,
            timer_type=TimerType.from_code(timer_data[t]),
            starting_hour=hour,
            starting_minute=timer_data[t + 2],
            runtime=effect_data[e + 4],
            color=decode_color(effect_data[e:e + 4]),
        ))

    return Timers(
        timers=timers,
        current_hour=timer_data[TIMER_CURRENT_HOUR_OFFSET],
        current_minute=timer_data[TIMER_CURRENT_MINUTE_OFFSET],
    )


def decode_randommode(data: bytes) -> Randommode:
    _check_length("Randommode", data, RANDOMMODE_RECORD_SIZE)
    return Randommode(
        starting_hour=data[3],
        starting_minute=data[4],
        ending_hour=data[5],
        ending_minute=data[6],
        min_interval=data[7],
        max_interval=data[8],
        color=decode_color(data[9:13]),
    )


def encode_randommode(randommode: Randommode, now: Optional[datetime] = None) -> bytes:
    """Encode the random mode schedule as thirteen bytes, prefixed with ``now``."""
    if now is None:
        now = datetime.now()

    return bytes([
        now.second,
        now.minute,
        now.hour,
        randommode.starting_hour & 0xFF,
        randommode.starting_minute & 0xFF,
        randommode.ending_hour & 0xFF,
        randommode.ending_minute & 0xFF,
        randommode.min_interval & 0xFF,
        randommode.max_interval & 0xFF,
    ]) + encode_color(randommode.color)


# Plain value characteristics

def decode_string(data: bytes) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def encode_string(value: str) -> bytes:
    return value.encode("utf-8")


def decode_unsigned(data: bytes) -> int:
    """Decode a big-endian unsigned integer of any width (battery level, PnP id)."""
    return int.from_bytes(bytes(data), "big")
