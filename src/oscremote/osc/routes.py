# OscRemote - OSC Routes
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

"""Command handlers and the static route table.

Each handler receives the sink, the path segments left after the command
segment and the decoded OSC arguments. Handlers hold no state and return
nothing; a message they cannot use raises InvalidArgument.
"""

import enum
import logging
from types import MappingProxyType

from oscremote.errors import InvalidArgument

log = logging.getLogger(__name__)


class Command(enum.Enum):
    PLAY = 'play'
    STOP = 'stop'
    GET_STATE = 'getstate'
    SET_VOLUME = 'setvolume'

    @classmethod
    def lookup(cls, segment):
        """Return the command named by an address segment, or None"""
        try:
            return cls(segment)
        except ValueError:
            return None


def resolve_resource_id(residual, args):
    """Resource id of a play request: the residual path, else the first argument"""
    if residual:
        return '/'.join(residual)
    if args and isinstance(args[0], str) and args[0]:
        return args[0]
    raise InvalidArgument("play needs a path after the command or a string argument")


def handle_play(sink, residual, args):
    resource_id = resolve_resource_id(residual, args)
    log.info("play request: %s", resource_id)
    sink.play(resource_id)


def handle_stop(sink, residual, args):
    log.info("stop request")
    sink.stop()


def handle_get_state(sink, residual, args):
    log.info("get state request")
    state = sink.get_state()
    log.info("player state: %s", state)


def handle_set_volume(sink, residual, args):
    if not args:
        raise InvalidArgument("setvolume needs a level argument")
    level = args[0]
    # bool is an int subclass, OSC True/False are not levels
    if isinstance(level, bool) or not isinstance(level, (int, float, str)):
        raise InvalidArgument(f"unusable volume level {level!r}")
    log.info("set volume request: %s", level)
    sink.set_volume(level)


ROUTES = MappingProxyType({
    Command.PLAY: handle_play,
    Command.STOP: handle_stop,
    Command.GET_STATE: handle_get_state,
    Command.SET_VOLUME: handle_set_volume,
})
