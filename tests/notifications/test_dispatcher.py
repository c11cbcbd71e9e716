import logging
import threading

from src.attendease.attendease.notifications.dispatcher import InlineDispatcher, ThreadPoolDispatcher


def test_inline_runs_immediately_and_swallows_errors(caplog):
    calls = []
    dispatcher = InlineDispatcher()

    dispatcher.submit("ok", calls.append, 1)
    with caplog.at_level(logging.ERROR):
        dispatcher.submit("broken", lambda: 1 / 0)

    assert calls == [1]
    assert "Outbound task broken failed" in caplog.text


def test_pool_runs_tasks_off_the_caller_thread():
    dispatcher = ThreadPoolDispatcher(max_workers=1, max_pending=5)
    seen = []
    try:
        future = dispatcher.submit("record", lambda: seen.append(threading.current_thread().name))
        future.result(timeout=5)
    finally:
        dispatcher.shutdown()

    assert seen and seen[0].startswith("outbound")


def test_pool_drops_tasks_beyond_pending_cap(caplog):
    release = threading.Event()
    dispatcher = ThreadPoolDispatcher(max_workers=1, max_pending=1)
    try:
        blocker = dispatcher.submit("blocker", release.wait, 5)
        with caplog.at_level(logging.WARNING):
            dropped = dispatcher.submit("extra", lambda: None)

        assert dropped is None
        assert "dropping task extra" in caplog.text

        release.set()
        blocker.result(timeout=5)
    finally:
        release.set()
        dispatcher.shutdown()


def test_pool_failure_is_logged_and_slot_released(caplog):
    dispatcher = ThreadPoolDispatcher(max_workers=1, max_pending=1)
    try:
        with caplog.at_level(logging.ERROR):
            dispatcher.submit("broken", lambda: 1 / 0).result(timeout=5)
        assert "Outbound task broken failed" in caplog.text

        assert dispatcher.submit("after", lambda: 42).result(timeout=5) == 42
    finally:
        dispatcher.shutdown()
