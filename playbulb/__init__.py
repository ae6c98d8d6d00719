"""
Playbulb Python Module

This module provides a Python interface for MiPow Playbulb BLE lights:
a codec for the bulb's color, effect, timer and random mode records, and a
cached read/write view of the device over bleak.

Supported devices:
- Playbulb Candle
- Playbulb Rainbow
- Playbulb Sphere / Garden / Comet (same characteristic layout)

Version: 1.0.0
"""

from .codec import (
    Color,
    Effect,
    EffectType,
    Randommode,
    Timer,
    Timers,
    TimerType,
    decode_color,
    decode_effect,
    decode_randommode,
    decode_timers,
    encode_color,
    encode_effect,
    encode_randommode,
    encode_timer,
)
from .device import DeviceState, Field, Playbulb
from .exceptions import (
    PlaybulbError,
    DeviceNotFoundError,
    ConnectionFailedError,
    AttributeAbsentError,
    MalformedRecordError,
    WriteRejectedError,
    ReadError,
)
from .link import LinkManager, LinkState
from .registry import AttributeRegistry
from .transport import BleakTransport, Transport, find_device

__version__ = "1.0.0"
__all__ = [
    'Color',
    'Effect',
    'EffectType',
    'Randommode',
    'Timer',
    'Timers',
    'TimerType',
    'decode_color',
    'decode_effect',
    'decode_randommode',
    'decode_timers',
    'encode_color',
    'encode_effect',
    'encode_randommode',
    'encode_timer',
    'DeviceState',
    'Field',
    'Playbulb',
    'PlaybulbError',
    'DeviceNotFoundError',
    'ConnectionFailedError',
    'AttributeAbsentError',
    'MalformedRecordError',
    'WriteRejectedError',
    'ReadError',
    'LinkManager',
    'LinkState',
    'AttributeRegistry',
    'BleakTransport',
    'Transport',
    'find_device',
]
