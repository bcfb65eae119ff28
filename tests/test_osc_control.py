"""
OSC control tests
Handler validation plus a loopback round trip through a real UDP server.
"""

import sys
import time
from pathlib import Path

import pytest
from pythonosc import udp_client

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vco_sim.ctl import build_parser, ramp_values
from vco_sim.osc_control import OSCController, VOLTAGE_ADDRESS
from vco_sim.sample_source import AverageTwoFilteredSample, ConstantSample


class TestHandler:

    def setup_method(self):
        self.source = AverageTwoFilteredSample()
        self.controller = OSCController(self.source, port=0)

    def test_sets_target(self):
        self.controller.handle_voltage(VOLTAGE_ADDRESS, 0.75)
        assert self.source.target == 0.75
        assert self.controller.updates_received == 1

    def test_int_payload(self):
        self.controller.handle_voltage(VOLTAGE_ADDRESS, 2)
        assert self.source.target == 2.0

    def test_missing_value(self):
        self.controller.handle_voltage(VOLTAGE_ADDRESS)
        assert self.source.target == 0.0
        assert self.controller.updates_rejected == 1

    def test_invalid_values(self):
        self.controller.handle_voltage(VOLTAGE_ADDRESS, "abc")
        self.controller.handle_voltage(VOLTAGE_ADDRESS, float("nan"))
        assert self.source.target == 0.0
        assert self.controller.updates_rejected == 2

    def test_requires_writable_source(self):
        with pytest.raises(TypeError):
            OSCController(ConstantSample(1.0))

    def test_dispatcher_mapping(self):
        disp = self.controller.setup_dispatcher()
        handlers = list(disp.handlers_for_address(VOLTAGE_ADDRESS))
        assert len(handlers) == 1


def test_loopback_round_trip():
    source = AverageTwoFilteredSample()
    controller = OSCController(source, host="127.0.0.1", port=0)
    controller.start()
    try:
        client = udp_client.SimpleUDPClient("127.0.0.1", controller.port)
        client.send_message(VOLTAGE_ADDRESS, [0.6])

        deadline = time.time() + 2.0
        while source.target != pytest.approx(0.6) and time.time() < deadline:
            time.sleep(0.01)

        assert source.target == pytest.approx(0.6)
    finally:
        controller.stop()


class TestCtl:

    def test_ramp_values(self):
        assert ramp_values(0.0, 1.0, 5) == [0.0, 0.25, 0.5, 0.75, 1.0]
        assert ramp_values(1.0, 0.0, 3) == [1.0, 0.5, 0.0]
        assert ramp_values(0.0, 1.0, 1) == [1.0]

    def test_parser(self):
        config = {'osc_host': '127.0.0.1', 'osc_port': 5005}
        parser = build_parser(config)

        args = parser.parse_args(["voltage", "0.5"])
        assert args.command == "voltage"
        assert args.value == 0.5
        assert args.port == 5005

        args = parser.parse_args(["--port", "6000", "ramp", "0", "1", "--steps", "10"])
        assert (args.start, args.stop, args.steps, args.port) == (0.0, 1.0, 10, 6000)
