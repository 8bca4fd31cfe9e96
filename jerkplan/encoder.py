"""14-bit rotary encoder with zero-crossing tracking."""

from __future__ import annotations

from typing import Callable, Optional

__all__ = ["Encoder", "COUNTS_PER_TURN"]

#: Counts of one full turn of a 14-bit encoder.
COUNTS_PER_TURN = 16384
_MASK = 0x3FFF
_HALF_TURN = 8191


class Encoder:
    """Tracks a multi-turn position from raw 16-bit encoder words.

    ``read_raw`` performs one bus transfer and returns the raw word; the
    upper two bits (parity and zero) are ignored.
    """

    def __init__(
        self,
        read_raw: Callable[[], int],
        min_val: int,
        max_val: int,
        absolute: bool = False,
    ) -> None:
        self.read_raw = read_raw
        self.min_val = min_val
        self.max_val = max_val
        self.absolute = absolute
        self.first_read = True
        self.zero_crossings = 0
        self.last_value = -1

    def percent(self, value: Optional[int] = None) -> float:
        """Position of ``value`` (default: current position) between min and max, in percent."""
        if value is None:
            value = self.get()
        return (value - self.min_val) / (self.max_val - self.min_val) * 100.0

    def get(self) -> int:
        """Current multi-turn position."""
        return self.last_value + COUNTS_PER_TURN * self.zero_crossings

    def update(self) -> int:
        """Read the encoder once and return the new position."""
        result = self.read_raw() & _MASK

        if self.absolute:
            self.last_value = result
            return result

        if self.first_read:
            self.first_read = False
        else:
            delta = self.last_value - result
            # A jump of about half a turn in one reading means a zero crossing.
            if delta > _HALF_TURN:
                self.zero_crossings += 1
            if delta < -_HALF_TURN:
                self.zero_crossings -= 1

        self.last_value = result
        return self.get()