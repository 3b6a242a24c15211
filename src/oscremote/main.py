# OscRemote - Application
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

import argparse
import logging
import sys
import time

from oscremote import __version__
from oscremote.config import get_config_path, load_config, save_config, listener_config
from oscremote.errors import BindError, ConfigError
from oscremote.osc.dispatcher import Dispatcher
from oscremote.osc.server import OSCServer
from oscremote.sink import LoggingSink, VolumioSink, SinkWorker

log = logging.getLogger(__name__)


# Settings the Volumio sink is built from
SINK_KEYS = ('volumio_url', 'http_timeout', 'play_service')


class OscRemote:
    """Wires config, sink, dispatcher and listener together.

    start_bridge/stop_bridge/restart_bridge follow the host plugin hooks.
    A failed start is reported once through notifier(message).
    """

    def __init__(self, config_file=None, sink=None, notifier=None, host='0.0.0.0',
                 overrides=None):
        self.config_file = str(config_file or get_config_path())
        self.config = load_config(self.config_file)
        if overrides:
            self.config.update(overrides)
        self.host = host
        # An injected sink is the caller's; a sink built from config follows it
        self.owns_sink = sink is None
        self.sink = self.create_sink() if self.owns_sink else sink
        self.notifier = notifier or self.default_notifier
        self.worker = SinkWorker()
        self.dispatcher = None
        self.osc_server = None
        self.is_running = False

    def create_sink(self):
        return VolumioSink(
            base_url=self.config['volumio_url'],
            timeout=float(self.config['http_timeout']),
            service=self.config['play_service'],
        )

    def default_notifier(self, message):
        log.error(message)

    def start_bridge(self):
        """Open the OSC port. Returns False when it could not be opened."""
        if self.is_running:
            return True

        try:
            listen = listener_config(self.config, host=self.host)
        except ConfigError as e:
            self.notifier(f"Invalid OSC settings: {e}")
            return False

        background = bool(self.config.get('background_dispatch', True))
        if background:
            self.worker.start()
        self.dispatcher = Dispatcher(listen.address_prefix, self.sink,
                                     worker=self.worker if background else None)
        self.osc_server = OSCServer(self.dispatcher)

        try:
            self.osc_server.start(listen)
        except BindError as e:
            self.worker.stop()
            self.notifier(f"OSC: could not open port {e.port} ({e.reason})")
            return False

        self.is_running = True
        log.info("Bridge started on port %s", self.osc_server.server_address[1])
        return True

    def stop_bridge(self):
        if self.osc_server:
            self.osc_server.stop()
        self.worker.stop()
        if self.is_running:
            log.info("Bridge stopped")
        self.is_running = False

    def restart_bridge(self):
        self.stop_bridge()
        return self.start_bridge()

    def persist_config(self):
        try:
            save_config(self.config_file, self.config)
            return True
        except OSError as e:
            log.error("Error saving config: %s", e)
            return False

    def rebuild_sink(self):
        if isinstance(self.sink, VolumioSink):
            self.sink.close()
        self.sink = self.create_sink()
        log.info("Player sink now targets %s", self.sink.base_url)

    def save_conf(self, data):
        """Merge new settings, persist them and restart with all of them applied"""
        sink_changed = any(key in SINK_KEYS and self.config.get(key) != value
                           for key, value in data.items())
        for key, value in data.items():
            self.config[key] = value
        self.persist_config()

        self.stop_bridge()
        if sink_changed and self.owns_sink:
            self.rebuild_sink()
        return self.start_bridge()

    def get_conf(self, key):
        return self.config.get(key)

    def set_conf(self, key, value):
        self.config[key] = value
        return self.persist_config()

    def run(self):
        """Serve until interrupted. Returns the process exit code."""
        if not self.start_bridge():
            return 1
        try:
            while self.is_running:
                time.sleep(0.5)
        except KeyboardInterrupt:
            log.info("Interrupted")
        finally:
            self.stop_bridge()
            if self.owns_sink and isinstance(self.sink, VolumioSink):
                self.sink.close()
        return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='oscremote',
        description='Control a Volumio player with OSC messages.')
    parser.add_argument('--config', help='config.json path (default: platform config dir)')
    parser.add_argument('--port', type=int, help='UDP port to listen on')
    parser.add_argument('--prefix', help='OSC address root, e.g. "volumio" for /volumio/play')
    parser.add_argument('--host', default='0.0.0.0', help='interface to bind (default: all)')
    parser.add_argument('--volumio-url', help='Volumio base URL, e.g. http://volumio.local')
    parser.add_argument('--dry-run', action='store_true',
                        help='log commands instead of sending them to Volumio')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)-7s %(name)s: %(message)s',
    )

    # Command line values apply to this run only, they are not saved
    overrides = {}
    if args.port is not None:
        overrides['osc_udp_local_port'] = args.port
    if args.prefix:
        overrides['osc_body_prefix'] = args.prefix
    if args.volumio_url:
        overrides['volumio_url'] = args.volumio_url

    sink = LoggingSink() if args.dry_run else None
    app = OscRemote(config_file=args.config, sink=sink, host=args.host, overrides=overrides)

    return app.run()


if __name__ == '__main__':
    sys.exit(main())
