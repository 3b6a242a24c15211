# OscRemote - Configuration
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

import copy
import json
import logging
import os
import sys
from collections import namedtuple
from pathlib import Path

from oscremote.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'osc_udp_local_port': 9000,
    'osc_body_prefix': 'volumio',
    'volumio_url': 'http://localhost:3000',
    'http_timeout': 2.0,
    'play_service': 'mpd',
    'background_dispatch': True,
}

ListenerConfig = namedtuple('ListenerConfig', ['local_port', 'address_prefix', 'host'],
                            defaults=['0.0.0.0'])

CONFIG_ENV = 'OSCREMOTE_CONFIG'


def _config_dir():
    # XDG_CONFIG_HOME takes precedence over ~/.config
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'OscRemote'
    if os.name == 'nt':
        appdata = os.getenv('APPDATA')
        return Path(appdata) / 'OscRemote' if appdata else None
    xdg = os.getenv('XDG_CONFIG_HOME')
    base = Path(xdg) if xdg else Path.home() / '.config'
    return base / 'oscremote'


def get_config_path():
    """Where config.json lives.

    $OSCREMOTE_CONFIG names the file directly. Otherwise it sits in the
    per-user config directory, created on demand, or the working directory
    when the platform has none.
    """
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override)

    config_dir = _config_dir()
    if config_dir is None:
        return Path('config.json')
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / 'config.json'


def get_default_config():
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_file):
    """Load config.json, filling missing keys with defaults.

    A missing file is created with the defaults. A file that cannot be read
    or parsed is left alone and the defaults are used.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        log.info("No config file found, creating %s with defaults", config_file)
        config = get_default_config()
        try:
            save_config(config_file, config)
        except OSError as e:
            log.warning("Could not save default config: %s", e)
        return config

    try:
        with open(config_file, 'r') as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        log.error("Error loading config %s: %s, using defaults", config_file, e)
        return get_default_config()

    if not isinstance(loaded, dict):
        log.error("Config %s is not a JSON object, using defaults", config_file)
        return get_default_config()

    config = get_default_config()
    config.update(loaded)
    log.info("Config loaded from %s", config_file)
    return config


def save_config(config_file, config):
    config_file = Path(config_file)
    with open(config_file, 'w') as f:
        json.dump(config, f, indent=2)
    log.info("Config saved to %s", config_file)


def listener_config(config, host='0.0.0.0'):
    """Build a validated ListenerConfig from the config dict"""
    port = config.get('osc_udp_local_port')
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ConfigError(f"osc_udp_local_port must be an integer, got {port!r}")
    if not 0 <= port <= 65535:
        raise ConfigError(f"osc_udp_local_port out of range: {port}")

    prefix = config.get('osc_body_prefix')
    if not isinstance(prefix, str) or not prefix.strip('/'):
        raise ConfigError(f"osc_body_prefix must be a non-empty string, got {prefix!r}")
    if '/' in prefix.strip('/'):
        raise ConfigError(f"osc_body_prefix must be a single path segment, got {prefix!r}")

    return ListenerConfig(port, prefix.strip('/'), host)
