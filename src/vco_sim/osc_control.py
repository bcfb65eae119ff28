"""
OSC control for the VCO's control voltage
Lets another process act as the external writer of the sample source.

Endpoints:
- /vco/voltage <float>  set the control target
"""

import logging
import threading
from typing import Optional

from pythonosc import dispatcher
from pythonosc.osc_server import ThreadingOSCUDPServer

logger = logging.getLogger(__name__)

VOLTAGE_ADDRESS = "/vco/voltage"


class OSCController:
    """
    OSC server feeding control values into a sample source.
    Runs in a separate daemon thread.
    """

    def __init__(self, sample_source, host: str = "127.0.0.1", port: int = 5005):
        """
        Args:
            sample_source: Anything with write(value), usually AverageTwoFilteredSample
            host: Address to bind
            port: UDP port to bind
        """
        if not callable(getattr(sample_source, "write", None)):
            raise TypeError("OSCController needs a sample source with write()")
        self.sample_source = sample_source
        self.host = host
        self.port = port
        self.server: Optional[ThreadingOSCUDPServer] = None
        self.thread: Optional[threading.Thread] = None

        self.updates_received = 0
        self.updates_rejected = 0

    def setup_dispatcher(self) -> dispatcher.Dispatcher:
        """Create OSC message dispatcher"""
        disp = dispatcher.Dispatcher()
        disp.map(VOLTAGE_ADDRESS, self.handle_voltage)
        return disp

    def handle_voltage(self, address, *args):
        """Validate and forward a control value to the sample source."""
        if len(args) < 1:
            self.updates_rejected += 1
            logger.warning("%s without a value ignored", address)
            return

        try:
            self.sample_source.write(float(args[0]))
            self.updates_received += 1
        except (ValueError, TypeError):
            self.updates_rejected += 1
            logger.warning("Invalid control value on %s: %r", address, args[0])

    def start(self):
        """Start OSC server in separate thread"""
        self.server = ThreadingOSCUDPServer((self.host, self.port), self.setup_dispatcher())
        # Report the port actually bound (port 0 picks a free one)
        self.port = self.server.server_address[1]
        self.thread = threading.Thread(target=self.server.serve_forever,
                                       name="VCO OSC", daemon=True)
        self.thread.start()
        logger.info("OSC server listening on %s:%s", self.host, self.port)
        logger.info("Send control voltage to: %s", VOLTAGE_ADDRESS)

    def stop(self):
        """Stop OSC server"""
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None
        if self.thread:
            self.thread.join(timeout=2)
            self.thread = None
