"""
Wave Functions - Phase to sample mapping for the VCO
Pure, stateless shapes over one cycle of [0, 2π]

Provides:
- WaveFunction base with a single map() method
- Sine, sawtooth, triangle and square shapes
- Name-based registry so shapes can be picked from config/CLI
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Type

TWO_PI = 2.0 * np.pi


class WaveFunction(ABC):
    """
    Maps a phase angle in radians to a normalized sample.

    Input is expected in [0, 2π]; output lies in [-1.0, 1.0].
    Implementations hold no state, so one instance can be shared freely.
    """

    name = "wave"

    @abstractmethod
    def map(self, phase: float) -> float:
        """
        Sample the waveform at the given phase.

        Args:
            phase: Angle in radians (0 .. 2π)

        Returns:
            Sample value in [-1.0, 1.0]
        """
        pass

    def __call__(self, phase: float) -> float:
        return self.map(phase)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# Registry of wave shapes by name
_WAVES: Dict[str, Type[WaveFunction]] = {}


def register_wave(name: str) -> Callable[[Type[WaveFunction]], Type[WaveFunction]]:
    """
    Decorator to register a wave shape under a name.

    Usage:
        @register_wave('sine')
        class SineWave(WaveFunction):
            ...
    """
    def decorator(cls: Type[WaveFunction]) -> Type[WaveFunction]:
        if name in _WAVES:
            raise ValueError(f"Wave '{name}' already registered")
        if not issubclass(cls, WaveFunction):
            raise ValueError("Wave must inherit from WaveFunction")
        cls.name = name
        _WAVES[name] = cls
        return cls
    return decorator


def create_wave(name: str) -> WaveFunction:
    """Create a wave function instance by registered name."""
    try:
        return _WAVES[name]()
    except KeyError:
        known = ", ".join(sorted(_WAVES))
        raise ValueError(f"Unknown wave '{name}' (known: {known})") from None


def list_waves() -> List[str]:
    """List registered wave names."""
    return sorted(_WAVES)


@register_wave('sine')
class SineWave(WaveFunction):
    """Classic sine: sin(phase)."""

    def map(self, phase: float) -> float:
        return float(np.sin(phase))


@register_wave('saw')
class SawtoothWave(WaveFunction):
    """
    Linear ramp from -1.0 at 0 to 1.0 at 2π.

    Not clamped: the ramp is exact at both ends so map(2π) == 1.0,
    then drops back to -1.0 once the oscillator wraps the phase.
    """

    def map(self, phase: float) -> float:
        return float(phase / np.pi - 1.0)


@register_wave('triangle')
class TriangleWave(WaveFunction):
    """Triangle starting at 0, peaking at π/2, trough at 3π/2."""

    def map(self, phase: float) -> float:
        # Same piecewise shape as the LFO, on a [0, 1) cycle position
        pos = (phase / TWO_PI) % 1.0
        if pos < 0.25:
            return float(4.0 * pos)
        elif pos < 0.75:
            return float(2.0 - 4.0 * pos)
        return float(4.0 * pos - 4.0)


@register_wave('square')
class SquareWave(WaveFunction):
    """+1 for the first half cycle, -1 for the second."""

    def map(self, phase: float) -> float:
        pos = (phase / TWO_PI) % 1.0
        return 1.0 if pos < 0.5 else -1.0
