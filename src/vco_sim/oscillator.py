"""
Oscillator - Voltage Controlled Oscillator core

The VCO follows f(t) = K * V(t):
- f(t) is the output frequency in Hz
- K is the gain in Hz per volt
- V(t) is the control voltage pulled from the sample source each tick

Each tick integrates frequency over the elapsed interval into a phase
accumulator, wraps it, looks the phase up in the wave function and
pushes the result to the sink. Intended for low rate control signals
(ticks every few tens of milliseconds), not audio rate output.
"""

import logging
import math
import threading
from typing import Any, Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)

SECONDS_PER_MILLISECOND = 1e-3
TWO_PI = 2.0 * np.pi


def phase_advance(gain: float, previous_voltage: float, voltage: float,
                  elapsed_seconds: float) -> float:
    """
    Phase covered during one tick interval, in radians.

    Trapezoidal integration of 2π * K * V(t) using the voltages at both
    ends of the interval:

        Δφ = 2π * K * (V0 + V1) / 2 * Δt = π * K * (V0 + V1) * Δt
    """
    return np.pi * gain * (previous_voltage + voltage) * elapsed_seconds


def wrap_phase(phase: float) -> float:
    """
    Bring an accumulated phase back into [0, 2π].

    Only overshoot above 2π is removed, by subtracting whole cycles.
    A phase that is already <= 2π (including a negative one, from
    negative gain or voltage) is returned untouched.
    """
    if phase > TWO_PI:
        phase -= math.floor(phase / TWO_PI) * TWO_PI
    return phase


def _require(obj: Any, method: str, role: str) -> Any:
    if obj is None:
        raise TypeError(f"Oscillator needs a {role}, got None")
    if not callable(getattr(obj, method, None)):
        raise TypeError(f"{role} must provide a callable {method}(), got {type(obj).__name__}")
    return obj


class Oscillator:
    """
    Phase accumulating VCO driven by an external periodic tick.

    Collaborators:
    - wave_function: object with map(phase) -> float
    - sample_source: object with read() -> float
    - sink: object with emit(timestamp, value)

    Guarantees:
    - The first tick only records a baseline (no output)
    - Phase is carried across ticks and kept <= 2π by wrap_phase()
    - A tick either completes (sample emitted, state committed) or
      leaves the state exactly as it was
    - Concurrent tick() calls are serialized
    """

    def __init__(self, gain: float, wave_function, sample_source, sink):
        """
        Args:
            gain: Hertz per unit of control voltage (fixed for the lifetime)
            wave_function: Maps phase to output sample
            sample_source: Supplies the control voltage
            sink: Receives (timestamp, value) for each completed tick

        Raises:
            TypeError: If a collaborator is missing or lacks its method
            ValueError: If gain is not a finite number
        """
        if gain is None:
            raise TypeError("Oscillator needs a gain, got None")
        gain = float(gain)
        if not math.isfinite(gain):
            raise ValueError(f"Gain must be finite, got {gain}")

        self._gain = gain
        self.wave_function = _require(wave_function, "map", "wave function")
        self.sample_source = _require(sample_source, "read", "sample source")
        self.sink = _require(sink, "emit", "output sink")

        self._lock = threading.Lock()

        # Oscillator state
        self._phase = 0.0
        self._previous_voltage = 0.0
        self._previous_tick_time: Optional[float] = None

        # Counters
        self.tick_count = 0
        self.emit_count = 0
        self.error_count = 0

        logger.debug("Oscillator created: gain=%s wave=%r source=%r sink=%r",
                     gain, wave_function, sample_source, sink)

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def phase(self) -> float:
        return self._phase

    @property
    def previous_voltage(self) -> float:
        return self._previous_voltage

    @property
    def previous_tick_time(self) -> Optional[float]:
        return self._previous_tick_time

    @property
    def is_primed(self) -> bool:
        """True once a baseline tick has been recorded."""
        return self._previous_tick_time is not None

    def tick(self, now: float) -> Optional[float]:
        """
        Advance the oscillator to time `now` (milliseconds).

        Returns:
            The emitted sample, or None when nothing was emitted
            (baseline tick, or a collaborator failed during the tick)
        """
        with self._lock:
            self.tick_count += 1
            try:
                voltage = float(self.sample_source.read())
                if not math.isfinite(voltage):
                    raise ValueError(f"Control voltage must be finite, got {voltage}")

                if self._previous_tick_time is None:
                    # No time delta yet: record the baseline only
                    self._previous_tick_time = now
                    self._previous_voltage = voltage
                    self._phase = 0.0
                    logger.debug("Baseline tick at %s (voltage=%.4f)", now, voltage)
                    return None

                elapsed = (now - self._previous_tick_time) * SECONDS_PER_MILLISECOND
                phase = self._phase + phase_advance(
                    self._gain, self._previous_voltage, voltage, elapsed)
                phase = wrap_phase(phase)

                value = float(self.wave_function.map(phase))
                if not math.isfinite(value):
                    raise ValueError(f"Wave output must be finite, got {value} at phase {phase}")
                self.sink.emit(now, value)

            except Exception as e:
                self.error_count += 1
                logger.exception("Tick at %s failed, no output this cycle: %s", now, e)
                return None

            # Commit only after the sink accepted the sample
            self._previous_tick_time = now
            self._previous_voltage = voltage
            self._phase = phase
            self.emit_count += 1
            return value

    def reset(self) -> None:
        """Forget the baseline; the next tick starts over at phase 0."""
        with self._lock:
            self._phase = 0.0
            self._previous_voltage = 0.0
            self._previous_tick_time = None

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of oscillator state for diagnostics."""
        with self._lock:
            return {
                'gain': self._gain,
                'phase': self._phase,
                'previous_voltage': self._previous_voltage,
                'previous_tick_time': self._previous_tick_time,
                'tick_count': self.tick_count,
                'emit_count': self.emit_count,
                'error_count': self.error_count,
            }

    def __repr__(self) -> str:
        return (f"Oscillator(gain={self._gain:.2f}, phase={self._phase:.4f}, "
                f"wave={self.wave_function!r})")
