# OscRemote - Errors
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


class OscRemoteError(Exception):
    """Base class for all OscRemote errors"""


class BindError(OscRemoteError):
    """The listener could not open its UDP port"""

    def __init__(self, port, reason):
        self.port = port
        self.reason = reason
        super().__init__(f"could not open port {port}: {reason}")


class DecodeError(OscRemoteError):
    """A datagram is not a valid OSC packet"""


class RoutingMiscue(OscRemoteError):
    """A message is outside our address root or names an unknown command"""


class InvalidArgument(OscRemoteError):
    """A handler could not derive a usable value from the message"""


class SinkError(OscRemoteError):
    """The media player refused or failed a command"""


class ConfigError(OscRemoteError):
    """Configuration values are missing or out of range"""
