# OscRemote - OSC Dispatcher
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
import struct

from pythonosc import osc_packet

from oscremote.errors import DecodeError, RoutingMiscue, InvalidArgument, SinkError
from oscremote.osc.routes import Command, ROUTES

log = logging.getLogger(__name__)


def split_address(address):
    """Split an OSC address into its non-empty path segments"""
    return [segment for segment in address.split('/') if segment]


def format_address(client_address):
    if not client_address:
        return 'unknown sender'
    return f"{client_address[0]}:{client_address[1]}"


class Dispatcher:
    """Decodes OSC datagrams and routes them to the command handlers.

    Messages must live under /<address_prefix>/<command>; anything else is
    logged and dropped. A bad datagram or a failing handler never reaches the
    listener. With a worker, handler calls run on the worker thread so a slow
    sink cannot hold up reception.
    """

    def __init__(self, address_prefix, sink, worker=None, routes=ROUTES):
        self.address_prefix = address_prefix.strip('/')
        self.sink = sink
        self.worker = worker
        self.routes = routes

    def decode(self, data):
        """Decode a datagram into its OSC messages, bundles flattened in order"""
        try:
            packet = osc_packet.OscPacket(data)
        except osc_packet.ParseError as e:
            raise DecodeError(str(e)) from e
        except (ValueError, IndexError, struct.error) as e:
            raise DecodeError(f"malformed packet: {e}") from e
        return [timed.message for timed in packet.messages]

    def route(self, message):
        """Resolve a message to (command, handler, residual path)"""
        segments = split_address(message.address)
        if not segments or segments[0] != self.address_prefix:
            raise RoutingMiscue(
                f"address {message.address} is outside /{self.address_prefix}")

        command = Command.lookup(segments[1]) if len(segments) > 1 else None
        if command is None or command not in self.routes:
            raise RoutingMiscue(f"message type unknown: {message.address}")
        return command, self.routes[command], segments[2:]

    def handle_datagram(self, data, client_address=None):
        try:
            messages = self.decode(data)
        except DecodeError as e:
            log.error("Could not decode OSC message from %s: %s",
                      format_address(client_address), e)
            return

        for message in messages:
            self.handle_message(message, client_address)

    def handle_message(self, message, client_address=None):
        args = list(message.params)
        log.debug("received message %s %s from %s",
                  message.address, args, format_address(client_address))
        try:
            command, handler, residual = self.route(message)
        except RoutingMiscue as e:
            log.warning("Dropped OSC message: %s", e)
            return

        if self.worker is not None:
            try:
                self.worker.submit(self.invoke, command, handler, residual, args)
            except RuntimeError as e:
                log.warning("Dropped %s request: %s", command.value, e)
        else:
            self.invoke(command, handler, residual, args)

    def invoke(self, command, handler, residual, args):
        try:
            handler(self.sink, residual, args)
        except InvalidArgument as e:
            log.warning("Rejected %s request: %s", command.value, e)
        except SinkError as e:
            log.error("%s request failed: %s", command.value, e)
        except Exception:
            log.exception("Unexpected error while handling %s request", command.value)
        else:
            log.info("dispatched %s", command.value)

    def call_handlers_for_packet(self, data, client_address):
        """Entry point used by the python-osc UDP request handler"""
        self.handle_datagram(data, client_address)
        # python-osc sends back any returned values as replies
        return []
