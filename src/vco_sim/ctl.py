#!/usr/bin/env python3
"""
VCO Control Tool - Drive the control voltage of a running VCO over OSC
"""

import argparse
import time

from pythonosc import udp_client

from .config import get_config, load_env_file
from .osc_control import VOLTAGE_ADDRESS


class VCOCtl:
    def __init__(self, host="127.0.0.1", port=5005):
        self.client = udp_client.SimpleUDPClient(host, port)
        self.host = host
        self.port = port

    def voltage(self, value):
        """Set the control voltage target"""
        print(f"[vcoctl] Setting {VOLTAGE_ADDRESS} = {value}")
        self.client.send_message(VOLTAGE_ADDRESS, [float(value)])

    def ramp(self, start, stop, steps=100, interval=0.1):
        """Sweep the control voltage linearly from start to stop"""
        print(f"[vcoctl] Ramping {start} -> {stop} in {steps} steps")
        for value in ramp_values(start, stop, steps):
            self.client.send_message(VOLTAGE_ADDRESS, [value])
            time.sleep(interval)
        print("[vcoctl] Ramp complete")


def ramp_values(start, stop, steps):
    """Evenly spaced values from start to stop inclusive."""
    if steps < 2:
        return [float(stop)]
    step = (stop - start) / (steps - 1)
    return [float(start + i * step) for i in range(steps)]


def build_parser(config=None):
    config = config or get_config()
    parser = argparse.ArgumentParser(
        description="VCO Control Tool - set the control voltage of a running VCO",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vcoctl voltage 0.5                  # Set control target
  vcoctl ramp 0 1 --steps 50          # Sweep up
  vcoctl ramp 1 0 --interval 0.05     # Sweep down faster
        """
    )

    parser.add_argument("--host", default=config['osc_host'],
                        help=f"OSC server host (default: {config['osc_host']})")
    parser.add_argument("--port", type=int, default=config['osc_port'],
                        help=f"OSC server port (default: {config['osc_port']})")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    voltage_parser = subparsers.add_parser("voltage", help="Set control voltage")
    voltage_parser.add_argument("value", type=float, help="Target value")

    ramp_parser = subparsers.add_parser("ramp", help="Sweep control voltage")
    ramp_parser.add_argument("start", type=float)
    ramp_parser.add_argument("stop", type=float)
    ramp_parser.add_argument("--steps", type=int, default=100)
    ramp_parser.add_argument("--interval", type=float, default=0.1,
                             help="Seconds between steps (default: 0.1)")
    return parser


def main(argv=None):
    load_env_file()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    ctl = VCOCtl(args.host, args.port)

    if args.command == "voltage":
        ctl.voltage(args.value)
    elif args.command == "ramp":
        ctl.ramp(args.start, args.stop, args.steps, args.interval)


if __name__ == "__main__":
    main()
