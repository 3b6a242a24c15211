# OscRemote - Volumio Sink
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

import requests

from oscremote.errors import SinkError
from oscremote.sink.base import Sink

log = logging.getLogger(__name__)


class VolumioSink(Sink):
    """Drives a Volumio player through its REST API (/api/v1)"""

    def __init__(self, base_url='http://localhost:3000', timeout=2.0,
                 service='mpd', track_type='mp3', session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.service = service
        self.track_type = track_type
        self.session = session or requests.Session()

    def _url(self, endpoint):
        return f"{self.base_url}/api/v1/{endpoint}"

    def _request(self, method, endpoint, **kwargs):
        url = self._url(endpoint)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SinkError(f"{method} {url} failed: {e}") from e
        return resp

    def _command(self, cmd, **params):
        params['cmd'] = cmd
        return self._request('GET', 'commands/', params=params)

    def play(self, resource_id):
        # Same item shape the plugin hands to replaceAndPlay
        item = {
            'uri': resource_id,
            'service': self.service,
            'trackType': self.track_type,
        }
        self._request('POST', 'replaceAndPlay', json={'item': item})
        log.debug("replaceAndPlay sent for %s", resource_id)

    def stop(self):
        self._command('stop')

    def get_state(self):
        resp = self._request('GET', 'getState')
        try:
            return resp.json()
        except ValueError as e:
            raise SinkError(f"getState returned invalid JSON: {e}") from e

    def set_volume(self, level):
        self._command('volume', volume=level)

    def close(self):
        self.session.close()
