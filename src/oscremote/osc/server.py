# OscRemote - OSC Server
# Copyright (C) 2025 maigre - Hemisphere Project
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

import logging
import threading

from pythonosc import osc_server

from oscremote.errors import BindError

log = logging.getLogger(__name__)


class _DatagramServer(osc_server.BlockingOSCUDPServer):
    # Let non-OSC datagrams through so the dispatcher logs them
    def verify_request(self, request, client_address):
        return True


class OSCServer:
    """UDP listener feeding every datagram to a dispatcher.

    Two states: stopped (no socket) and running (socket bound, receive thread
    alive). Datagrams are handled one at a time on the receive thread.
    """

    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.config = None
        self.server = None
        self.thread = None

    @property
    def is_running(self):
        return self.server is not None

    @property
    def server_address(self):
        """Bound (host, port), or None when stopped"""
        if self.server is None:
            return None
        return self.server.server_address

    def start(self, config):
        """Bind to config.local_port and start receiving.

        Raises BindError when the port is taken or not allowed; the server
        stays stopped in that case.
        """
        if self.server is not None:
            raise RuntimeError(f"OSC server already running on {self.server_address}")

        try:
            server = _DatagramServer((config.host, config.local_port), self.dispatcher)
        except OSError as e:
            raise BindError(config.local_port, e.strerror or str(e)) from e

        self.config = config
        self.server = server
        self.thread = threading.Thread(target=server.serve_forever,
                                       name='oscremote-listener', daemon=True)
        self.thread.start()
        host, port = self.server_address[:2]
        log.info("Listening for OSC messages on %s:%s (prefix /%s)",
                 host, port, config.address_prefix)
        return host, port

    def stop(self):
        """Close the socket. Safe to call when already stopped."""
        server, thread = self.server, self.thread
        if server is None:
            return
        self.server = None
        self.thread = None

        server.shutdown()
        server.server_close()
        thread.join()
        log.info("OSC server stopped")

    def restart(self, config):
        # stop() releases the port before the new bind
        self.stop()
        return self.start(config)
