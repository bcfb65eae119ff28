#!/usr/bin/env python3
"""
VCO demo - sweep the control voltage up and back down while the
oscillator draws its output on the console.

    vco-demo                      # sine, 100ms ticks, 1000 step ramps
    vco-demo --wave saw --steps 200
    vco-demo --osc                # also accept /vco/voltage over OSC
"""

import argparse
import logging
import time

from .config import configure_logging, get_config, load_env_file
from .oscillator import Oscillator
from .osc_control import OSCController
from .sample_source import AverageTwoFilteredSample
from .scheduler import TickScheduler, wall_clock_ms
from .sinks import ConsoleSink, FanOutSink, OSCSink
from .waves import create_wave, list_waves

logger = logging.getLogger(__name__)


def ramp_up_down(source, steps: int, step_s: float, hold_s: float) -> None:
    """Write 0 -> 1, hold, then 1 -> 0 into the source."""
    if steps < 1:
        raise ValueError(f"Ramp needs at least one step, got {steps}")
    for i in range(steps):
        source.write(i / steps)
        time.sleep(step_s)

    time.sleep(hold_s)

    for i in range(steps, -1, -1):
        source.write(i / steps)
        time.sleep(step_s)


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser(config):
    parser = argparse.ArgumentParser(description="Voltage controlled oscillator demo")
    parser.add_argument("--wave", choices=list_waves(), default=config['wave'])
    parser.add_argument("--gain", type=float, default=config['gain'],
                        help="Hertz per unit of control voltage")
    parser.add_argument("--interval", type=float, default=config['tick_ms'],
                        help="Tick interval in milliseconds")
    parser.add_argument("--steps", type=positive_int, default=1000,
                        help="Writes per ramp direction")
    parser.add_argument("--osc", action="store_true",
                        help="Start the OSC control server")
    parser.add_argument("--osc-out", action="store_true",
                        help="Also send samples to /vco/out on the OSC output port")
    parser.add_argument("-v", "--verbose", action="store_true", default=config['verbose'])
    return parser


def main(argv=None):
    load_env_file()
    config = get_config()
    args = build_parser(config).parse_args(argv)
    configure_logging(args.verbose)

    start_time = wall_clock_ms()
    source = AverageTwoFilteredSample()
    sink = ConsoleSink(start_time)
    if args.osc_out:
        sink = FanOutSink(sink, OSCSink(config['osc_host'], config['out_port']))
    vco = Oscillator(args.gain, create_wave(args.wave), source, sink)
    timer = TickScheduler(vco.tick, interval_ms=args.interval)

    osc = None
    if args.osc:
        osc = OSCController(source, config['osc_host'], config['osc_port'])
        osc.start()

    timer.start()
    try:
        step_s = args.interval / 1000.0
        ramp_up_down(source, args.steps, step_s, hold_s=1.0)
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        timer.stop()
        if osc:
            osc.stop()
        logger.info("Done: %s", vco.get_state())


if __name__ == "__main__":
    main()
