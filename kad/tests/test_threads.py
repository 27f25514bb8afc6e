import time
import signal
import logging
import threading

import pytest

from kad.shutdown import install_shutdown_signal_handlers, _handle_shutdown
from kad.threads import SupervisedThread, SupervisedThreadGroup


class CrashingThread(SupervisedThread):
    def run_supervised(self):
        raise RuntimeError('boom')


class FinishingThread(SupervisedThread):
    def run_supervised(self):
        pass


class BlockingThread(SupervisedThread):
    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def run_supervised(self):
        self.release.wait()


class SlowExitThread(SupervisedThread):
    def run_supervised(self):
        self.group_event.set()
        time.sleep(0.2)


@pytest.fixture
def blocking():
    thread = BlockingThread()
    yield thread
    thread.release.set()


def test_wait_any_returns_crashed_thread(caplog, blocking):
    crashing = CrashingThread()
    group = SupervisedThreadGroup()
    group.add_thread(blocking)
    group.add_thread(crashing)

    with caplog.at_level(logging.INFO):
        group.start_all()
        assert group.wait_any() is crashing

    record = next(r for r in caplog.records if r.getMessage() == f'Thread {crashing.name} crashed')
    assert record.levelno == logging.ERROR
    assert record.exc_info[0] is RuntimeError
    assert blocking.is_alive()


def test_wait_any_returns_finished_thread(caplog, blocking):
    finishing = FinishingThread()
    group = SupervisedThreadGroup()
    group.add_thread(blocking)
    group.add_thread(finishing)

    with caplog.at_level(logging.INFO):
        group.start_all()
        assert group.wait_any() is finishing

    assert f'Thread {finishing.name} finished' in caplog.text


def test_wait_any_waits_for_thread_to_exit(blocking):
    slow = SlowExitThread()
    group = SupervisedThreadGroup()
    group.add_thread(blocking)
    group.add_thread(slow)

    group.start_all()
    assert group.wait_any() is slow
    assert not slow.is_alive()


def test_add_thread_links_group_event():
    thread = FinishingThread()
    group = SupervisedThreadGroup()
    group.add_thread(thread)

    assert thread.group_event is group.event
    assert thread.daemon


@pytest.mark.parametrize('signum', [signal.SIGTERM, signal.SIGINT])
def test_shutdown_exits_cleanly(caplog, signum):
    with caplog.at_level(logging.INFO):
        with pytest.raises(SystemExit) as exc:
            _handle_shutdown(signum, None)

    assert exc.value.code == 0
    assert f'Received {signal.Signals(signum).name}, shutting down' in caplog.text


def test_install_shutdown_signal_handlers(monkeypatch):
    installed = {}
    monkeypatch.setattr(signal, 'signal', lambda signum, handler: installed.__setitem__(signum, handler))

    install_shutdown_signal_handlers()

    assert installed == {signal.SIGTERM: _handle_shutdown, signal.SIGINT: _handle_shutdown}
