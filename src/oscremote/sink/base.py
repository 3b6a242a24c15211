# OscRemote - Sink Interface
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

log = logging.getLogger(__name__)


class Sink:
    """Commands the media player exposes to the dispatcher"""

    def play(self, resource_id):
        raise NotImplementedError

    def stop(self):
        raise NotImplementedError

    def get_state(self):
        raise NotImplementedError

    def set_volume(self, level):
        raise NotImplementedError


class LoggingSink(Sink):
    """Dry-run sink: logs each command instead of driving a player"""

    def __init__(self):
        self.volume = None
        self.status = 'stop'
        self.uri = ''

    def play(self, resource_id):
        self.status = 'play'
        self.uri = resource_id
        log.info("[dry-run] play %s", resource_id)

    def stop(self):
        self.status = 'stop'
        log.info("[dry-run] stop")

    def get_state(self):
        return {'status': self.status, 'uri': self.uri, 'volume': self.volume}

    def set_volume(self, level):
        self.volume = level
        log.info("[dry-run] volume %s", level)
