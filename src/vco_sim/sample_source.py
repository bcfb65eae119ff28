"""
Control Sample Sources - The "voltage" input of the VCO

The oscillator pulls one control value per tick via read().
External actors (OSC server, demo ramp, another thread) push targets
via write(). The filtered source is the one piece of shared mutable
state in the system, so both sides go through a single lock.
"""

import math
import threading
from abc import ABC, abstractmethod


class InputSample(ABC):
    """Supplies the current control value on demand."""

    @abstractmethod
    def read(self) -> float:
        """Return the current control value (called once per tick)."""
        pass


class AverageTwoFilteredSample(InputSample):
    """
    Very simple low pass filter for the control voltage.

    read() returns the average of the last value it returned and the
    most recent target set by write(), and remembers the result:

        out[n] = (out[n-1] + target) / 2

    This is a one-pole smoother with a fixed coefficient of 0.5. It
    approaches the target exponentially and never reaches a nonzero
    target in a finite number of reads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0.0    # last value handed out by read()
        self._target = 0.0  # last value set by write()

    def write(self, value: float) -> None:
        """
        Set the target value for the filter.

        Safe to call from any thread.

        Raises:
            ValueError: If value is not a finite number
        """
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Control value must be finite, got {value}")
        with self._lock:
            self._target = value

    def read(self) -> float:
        with self._lock:
            sample = (self._last + self._target) / 2.0
            self._last = sample
        return sample

    @property
    def target(self) -> float:
        with self._lock:
            return self._target

    @property
    def last(self) -> float:
        with self._lock:
            return self._last

    def __repr__(self) -> str:
        with self._lock:
            return f"AverageTwoFilteredSample(last={self._last:.4f}, target={self._target:.4f})"


class ConstantSample(InputSample):
    """Fixed control value, useful for tests and static patches."""

    def __init__(self, value: float = 0.0):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Control value must be finite, got {value}")
        self.value = value

    def read(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantSample({self.value})"
