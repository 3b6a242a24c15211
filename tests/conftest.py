"""Shared fixtures: a sink that records calls and an OSC datagram builder"""

import time

import pytest
from pythonosc import osc_bundle_builder, osc_message_builder

from oscremote.sink import Sink


class RecordingSink(Sink):
    def __init__(self, state=None):
        self.calls = []
        self.state = state if state is not None else {'status': 'stop'}

    def play(self, resource_id):
        self.calls.append(('play', resource_id))

    def stop(self):
        self.calls.append(('stop',))

    def get_state(self):
        self.calls.append(('get_state',))
        return self.state

    def set_volume(self, level):
        self.calls.append(('set_volume', level))


def build_message(address, *args):
    builder = osc_message_builder.OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build()


def wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def dgram():
    """Build the datagram of one OSC message"""
    def _build(address, *args):
        return build_message(address, *args).dgram
    return _build


@pytest.fixture
def bundle_dgram():
    """Build the datagram of a bundle holding several (address, args) messages"""
    def _build(*messages):
        builder = osc_bundle_builder.OscBundleBuilder(osc_bundle_builder.IMMEDIATELY)
        for address, args in messages:
            builder.add_content(build_message(address, *args))
        return builder.build().dgram
    return _build


@pytest.fixture
def waiter():
    return wait_for
