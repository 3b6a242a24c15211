"""
Test the background sink worker
"""

import threading

import pytest

from oscremote.sink import SinkWorker


class TestSinkWorker:
    def setup_method(self):
        self.worker = SinkWorker()

    def teardown_method(self):
        self.worker.stop()

    def test_runs_calls_in_order_off_thread(self):
        seen = []
        self.worker.start()
        for i in range(5):
            self.worker.submit(lambda n: seen.append((n, threading.current_thread().name)), i)
        self.worker.drain()
        assert [n for n, _ in seen] == [0, 1, 2, 3, 4]
        assert {name for _, name in seen} == {'oscremote-sink'}

    def test_failing_call_does_not_kill_worker(self, caplog):
        seen = []
        self.worker.start()
        self.worker.submit(lambda: 1 / 0)
        self.worker.submit(seen.append, 'after')
        self.worker.drain()
        assert seen == ['after']
        assert 'failed' in caplog.text

    def test_submit_requires_running_worker(self):
        with pytest.raises(RuntimeError):
            self.worker.submit(print)

    def test_stop_finishes_queued_calls(self):
        seen = []
        self.worker.start()
        self.worker.submit(seen.append, 1)
        self.worker.stop()
        assert seen == [1]
        assert not self.worker.is_running

    def test_stop_twice_and_restart(self):
        self.worker.stop()
        self.worker.start()
        self.worker.stop()
        self.worker.stop()
        self.worker.start()
        assert self.worker.is_running
