"""
Test the command table and the per-command argument rules
"""

import pytest

from oscremote.errors import InvalidArgument
from oscremote.osc.routes import (
    Command, ROUTES, resolve_resource_id, handle_play, handle_set_volume, handle_stop,
)


class TestCommand:
    def test_lookup_known_segments(self):
        assert Command.lookup('play') is Command.PLAY
        assert Command.lookup('stop') is Command.STOP
        assert Command.lookup('getstate') is Command.GET_STATE
        assert Command.lookup('setvolume') is Command.SET_VOLUME

    def test_lookup_is_case_sensitive(self):
        assert Command.lookup('Play') is None
        assert Command.lookup('unknowncmd') is None

    def test_route_table_covers_every_command(self):
        assert set(ROUTES) == set(Command)

    def test_route_table_is_read_only(self):
        with pytest.raises(TypeError):
            ROUTES[Command.PLAY] = handle_stop


class TestPlayResource:
    def test_residual_path_joined(self):
        assert resolve_resource_id(['Music', 'Song.mp3'], []) == 'Music/Song.mp3'

    def test_residual_path_wins_over_argument(self):
        assert resolve_resource_id(['a.mp3'], ['b.mp3']) == 'a.mp3'

    def test_argument_fallback(self):
        assert resolve_resource_id([], ['Music/Song.mp3']) == 'Music/Song.mp3'

    @pytest.mark.parametrize('args', [[], [42], [1.5], [b'blob'], ['']])
    def test_unusable_argument_rejected(self, args):
        with pytest.raises(InvalidArgument):
            resolve_resource_id([], args)

    def test_rejected_play_never_reaches_sink(self, sink):
        with pytest.raises(InvalidArgument):
            handle_play(sink, [], [7])
        assert sink.calls == []


class TestSetVolume:
    def test_level_passed_through_unchanged(self, sink):
        handle_set_volume(sink, [], [150])
        handle_set_volume(sink, [], [0.25])
        handle_set_volume(sink, [], ['+'])
        assert sink.calls == [('set_volume', 150), ('set_volume', 0.25), ('set_volume', '+')]

    @pytest.mark.parametrize('args', [[], [True], [b'\x01']])
    def test_unusable_level_rejected(self, sink, args):
        with pytest.raises(InvalidArgument):
            handle_set_volume(sink, [], args)
        assert sink.calls == []
