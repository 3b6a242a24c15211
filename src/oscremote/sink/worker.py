# OscRemote - Sink Worker
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
import queue
import threading

log = logging.getLogger(__name__)


class SinkWorker:
    """Runs sink calls on a single background thread, in submission order"""

    def __init__(self, name='oscremote-sink'):
        self.name = name
        self.queue = queue.Queue()
        self.thread = None

    @property
    def is_running(self):
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self.thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self.thread.start()

    def submit(self, func, *args):
        if not self.is_running:
            raise RuntimeError("sink worker is not running")
        self.queue.put((func, args))

    def drain(self):
        """Block until every submitted call has run"""
        self.queue.join()

    def stop(self, timeout=None):
        """Finish queued calls, then end the thread. No-op when stopped."""
        thread = self.thread
        if thread is None:
            return
        self.thread = None
        self.queue.put(None)
        thread.join(timeout)

    def _run(self):
        while True:
            item = self.queue.get()
            try:
                if item is None:
                    return
                func, args = item
                try:
                    func(*args)
                except Exception:
                    log.exception("Sink call %s failed", getattr(func, '__name__', func))
            finally:
                self.queue.task_done()
