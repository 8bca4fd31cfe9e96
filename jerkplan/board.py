"""Pin map, start-up banner and battery voltage sensing of the controller board."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "VoltageMonitor",
    "raw_to_millivolts",
    "online_banner",
    "SERIAL_BAUD_RATE",
    "ADC_RESOLUTION",
    "PIN_LED",
    "LED_BUILTIN",
    "PIN_VSENSE",
]

# Board limits
PINS_COUNT = 30
NUM_DIGITAL_PINS = 30
NUM_ANALOG_INPUTS = 4
NUM_ANALOG_OUTPUTS = 0
ADC_RESOLUTION = 12
DIGITAL_PINS = tuple(range(NUM_DIGITAL_PINS))

# LEDs
PIN_LED = 27
LED_BUILTIN = PIN_LED

# General IO and DShot pins
IO_PINS = (0, 1, 2, 3, 4, 5)
DSHOT_PINS = (6, 7, 8, 9)

# Board function specific pins
PIN_RGB = 19
IMU_INT1 = 23
PIN_SPI0_CS0 = 21
PIN_SPI0_CS1 = 20
PIN_SPI0_CS2 = 18
PIN_VSENSE = 28

# Serial
PIN_SERIAL1_TX = 16
PIN_SERIAL1_RX = 17
PIN_SERIAL2_TX = 4
PIN_SERIAL2_RX = 5

# SPI
PIN_SPI0_MISO = 12
PIN_SPI0_MOSI = 11
PIN_SPI0_SCK = 10
PIN_SPI0_SS = PIN_SPI0_CS0
PIN_SPI1_MISO = 12
PIN_SPI1_MOSI = 11
PIN_SPI1_SCK = 10
PIN_SPI1_SS = PIN_SPI0_CS0

# Wire
PIN_WIRE0_SDA = 24
PIN_WIRE0_SCL = 25
PIN_WIRE1_SDA = 24
PIN_WIRE1_SCL = 25

SERIAL_HOWMANY = 3
SPI_HOWMANY = 1
WIRE_HOWMANY = 1

# Analog inputs
A0, A1, A2, A3 = 26, 27, 28, 29

SS = PIN_SPI0_SS
MOSI = PIN_SPI0_MOSI
MISO = PIN_SPI0_MISO
SCK = PIN_SPI0_SCK
SDA = PIN_WIRE0_SDA
SCL = PIN_WIRE0_SCL

#: Baud rate of the debug serial port.
SERIAL_BAUD_RATE = 2_000_000


def raw_to_millivolts(raw: int) -> int:
    """Battery voltage in mV for a 12-bit ADC reading of the 1:11 divider."""
    if raw < 0:
        raise ValueError(f"ADC reading must not be negative: {raw}")
    return (raw * 110 * 3300 // 10 // 4096) & 0xFFFF


def online_banner(name: Optional[str] = None) -> str:
    """Coloured start-up line announcing the board or robot by name."""
    return f"\u001b[33m{name or 'BDB16'}\u001b[0m Online!\n"


class VoltageMonitor:
    """Exponentially smoothed battery voltage in millivolts."""

    def __init__(self) -> None:
        self.millivolts = 0

    def update(self, raw: int) -> int:
        """Fold one ADC reading into the average and return it in mV."""
        value = raw_to_millivolts(raw)
        if self.millivolts == 0:
            self.millivolts = value
        else:
            self.millivolts = (self.millivolts * 90 + value * 10) // 100
        return self.millivolts & 0xFFFF