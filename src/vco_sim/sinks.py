"""
Output Sinks - Consumers of timestamped VCO samples

Each completed tick produces exactly one emit(timestamp, value) call,
in tick order. Sinks decide where the sample goes: the console,
memory, or another process over OSC.
"""

import math
import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, List, Optional, TextIO, Tuple

from pythonosc import udp_client


class OutputSink(ABC):
    """Receives the oscillator output."""

    @abstractmethod
    def emit(self, timestamp: float, value: float) -> None:
        """
        Consume one output sample.

        Args:
            timestamp: Tick time in milliseconds
            value: Oscillator output in [-1.0, 1.0]
        """
        pass


class ConsoleSink(OutputSink):
    """
    Text "scope" for the terminal.

    Prints elapsed milliseconds in a 10 wide column, followed by a
    marker placed (value + 1) * width columns to the right, so a full
    swing covers 2 * width columns.
    """

    def __init__(self, start_time: float = 0.0, width: int = 40,
                 stream: Optional[TextIO] = None):
        self.start_time = start_time
        self.width = width
        self.stream = stream

    def render(self, timestamp: float, value: float) -> str:
        elapsed = int(timestamp - self.start_time)
        spaces = max(0, int(math.floor((value + 1.0) * self.width)))
        return f"{elapsed:10d}" + " " * spaces + "*"

    def emit(self, timestamp: float, value: float) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(self.render(timestamp, value), file=stream)


class RecordingSink(OutputSink):
    """
    In-memory capture of emitted samples.

    Optionally bounded (oldest samples are dropped once maxlen is reached).
    """

    def __init__(self, maxlen: Optional[int] = None):
        self._lock = threading.Lock()
        self._samples: deque = deque(maxlen=maxlen)

    def emit(self, timestamp: float, value: float) -> None:
        with self._lock:
            self._samples.append((timestamp, value))

    @property
    def samples(self) -> List[Tuple[float, float]]:
        with self._lock:
            return list(self._samples)

    @property
    def values(self) -> List[float]:
        with self._lock:
            return [v for _, v in self._samples]

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)


class OSCSink(OutputSink):
    """
    Forward samples to an OSC listener.

    Each sample is sent as <address> [timestamp, value], e.g. to drive
    a parameter of an external synth from the VCO.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 5006,
                 address: str = "/vco/out"):
        self.host = host
        self.port = port
        self.address = address
        self.client = udp_client.SimpleUDPClient(host, port)

    def emit(self, timestamp: float, value: float) -> None:
        self.client.send_message(self.address, [float(timestamp), float(value)])

    def __repr__(self) -> str:
        return f"OSCSink({self.host}:{self.port}{self.address})"


class FanOutSink(OutputSink):
    """Forwards every sample to several sinks, in the order given."""

    def __init__(self, *sinks: OutputSink):
        if not sinks:
            raise ValueError("FanOutSink needs at least one sink")
        self.sinks = sinks

    def emit(self, timestamp: float, value: float) -> None:
        for sink in self.sinks:
            sink.emit(timestamp, value)


class FunctionSink(OutputSink):
    """Adapts a plain callable(timestamp, value) to the sink interface."""

    def __init__(self, callback: Callable[[float, float], None]):
        if not callable(callback):
            raise TypeError("FunctionSink needs a callable")
        self.callback = callback

    def emit(self, timestamp: float, value: float) -> None:
        self.callback(timestamp, value)
