"""
VCO Simulator - Voltage Controlled Oscillator for low rate control signals
Phase accumulation driven by a periodic tick, pluggable waves and sinks
"""

__version__ = "0.1.0"

from .oscillator import Oscillator, phase_advance, wrap_phase
from .sample_source import InputSample, AverageTwoFilteredSample, ConstantSample
from .sinks import OutputSink, ConsoleSink, RecordingSink, OSCSink, FanOutSink, FunctionSink
from .waves import (WaveFunction, SineWave, SawtoothWave, TriangleWave, SquareWave,
                    create_wave, list_waves, register_wave)
from .scheduler import TickScheduler

__all__ = [
    'Oscillator', 'phase_advance', 'wrap_phase',
    'InputSample', 'AverageTwoFilteredSample', 'ConstantSample',
    'OutputSink', 'ConsoleSink', 'RecordingSink', 'OSCSink', 'FanOutSink', 'FunctionSink',
    'WaveFunction', 'SineWave', 'SawtoothWave', 'TriangleWave', 'SquareWave',
    'create_wave', 'list_waves', 'register_wave',
    'TickScheduler',
]
