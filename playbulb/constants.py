"""
Playbulb Constants

Contains the characteristic UUIDs, record sizes, sentinel values and
connection defaults used when talking to MiPow Playbulb devices.
"""

# Generic GATT characteristics (Bluetooth SIG assigned numbers)
CHARACTERISTIC_SERVICE_CHANGED = "00002a05-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_BATTERY_LEVEL = "00002a19-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_SERIAL_NUMBER = "00002a25-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_FIRMWARE_REVISION = "00002a26-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_HARDWARE_REVISION = "00002a27-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_SOFTWARE_REVISION = "00002a28-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_MANUFACTURER_NAME = "00002a29-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_PNP_ID = "00002a50-0000-1000-8000-00805f9b34fb"

# Playbulb specific characteristics
CHARACTERISTIC_PIN = "0000fff7-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_RUNNING_TIMERS = "0000fff8-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_RANDOM_MODE = "0000fff9-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_RESERVED = "0000fffa-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_EFFECT = "0000fffb-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_COLOR = "0000fffc-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_FACTORY_RESET = "0000fffd-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_TIMER_SETTINGS = "0000fffe-0000-1000-8000-00805f9b34fb"
CHARACTERISTIC_GIVEN_NAME = "0000ffff-0000-1000-8000-00805f9b34fb"

GENERIC_CHARACTERISTICS = (
    CHARACTERISTIC_SERVICE_CHANGED,
    CHARACTERISTIC_BATTERY_LEVEL,
    CHARACTERISTIC_SERIAL_NUMBER,
    CHARACTERISTIC_FIRMWARE_REVISION,
    CHARACTERISTIC_HARDWARE_REVISION,
    CHARACTERISTIC_SOFTWARE_REVISION,
    CHARACTERISTIC_MANUFACTURER_NAME,
    CHARACTERISTIC_PNP_ID,
)

PLAYBULB_CHARACTERISTICS = (
    CHARACTERISTIC_PIN,
    CHARACTERISTIC_RUNNING_TIMERS,
    CHARACTERISTIC_RANDOM_MODE,
    CHARACTERISTIC_RESERVED,
    CHARACTERISTIC_EFFECT,
    CHARACTERISTIC_COLOR,
    CHARACTERISTIC_FACTORY_RESET,
    CHARACTERISTIC_TIMER_SETTINGS,
    CHARACTERISTIC_GIVEN_NAME,
)

# Number of timer slots on the device; timer ids are always taken modulo this
TIMER_SLOTS = 4

# Minimum buffer sizes accepted by the decoders
COLOR_RECORD_SIZE = 4
EFFECT_RECORD_SIZE = 7
TIMER_SETTINGS_RECORD_SIZE = 14
RUNNING_TIMERS_RECORD_SIZE = 20
RANDOMMODE_RECORD_SIZE = 13

# Byte offsets inside the timer settings record
TIMER_SETTINGS_STRIDE = 3
TIMER_CURRENT_HOUR_OFFSET = 12
TIMER_CURRENT_MINUTE_OFFSET = 13

# Byte stride per slot inside the running timers record (4 color bytes + runtime)
RUNNING_TIMERS_STRIDE = 5

# Sentinel values
TIMER_HOUR_UNSET = -1
RANDOMMODE_HOUR_UNSET = 255
TIMER_FLAG_ACTIVE = 0x00
TIMER_FLAG_INACTIVE = 0xFF
NOT_AVAILABLE = "N/A"

# Default connection parameters
DEFAULT_CONNECTION_PARAMS = {
    "timeout": 10.0,  # seconds, BLE connect timeout
    "scan_timeout": 10.0,  # seconds, address lookup
    "poll_interval": 1.0,  # seconds between service resolution checks
    "resolve_attempts": 5,  # total checks, including the immediate one
}

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
