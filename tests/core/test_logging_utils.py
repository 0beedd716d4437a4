"""
Tests for log forwarding to a GUI queue.
"""

import logging
import threading
from queue import Queue

import pytest

from copybook_toolkit.core.utils.logging_utils import (
    PACKAGE_LOGGER,
    QueueLogHandler,
    ThreadFilter,
    attach_queue_handler,
    detach_queue_handler,
    forward_logs,
)


class TestQueueLogHandler:
    def test_emit_when_warning_then_message_and_level_queued(self):
        queue = Queue()
        handler = QueueLogHandler(queue)
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "font %s", ("missing",), None)

        handler.emit(record)

        assert queue.get_nowait() == ("font missing", "WARNING")

    def test_emit_when_debug_then_reported_as_info(self):
        queue = Queue()
        handler = QueueLogHandler(queue, level=logging.DEBUG)
        record = logging.LogRecord("x", logging.DEBUG, __file__, 1, "detail", (), None)

        handler.emit(record)

        assert queue.get_nowait() == ("detail", "INFO")


class TestAttachDetach:
    def test_attach_when_package_logger_logs_then_queue_receives(self):
        queue = Queue()
        package_logger = logging.getLogger(f"{PACKAGE_LOGGER}.export.test")
        package_logger.setLevel(logging.INFO)

        handler = attach_queue_handler(queue)
        try:
            package_logger.info("Paginated 20 characters")
        finally:
            detach_queue_handler(handler)

        assert queue.get_nowait() == ("Paginated 20 characters", "INFO")

    def test_detach_then_no_more_messages(self):
        queue = Queue()
        package_logger = logging.getLogger(f"{PACKAGE_LOGGER}.export.test")
        package_logger.setLevel(logging.INFO)

        handler = attach_queue_handler(queue)
        detach_queue_handler(handler)
        package_logger.info("after detach")

        assert queue.empty()


class TestForwardLogs:
    def test_forward_logs_when_queue_then_forwards_inside_block_only(self):
        queue = Queue()
        package_logger = logging.getLogger(f"{PACKAGE_LOGGER}.fonts.test")
        package_logger.setLevel(logging.INFO)

        with forward_logs(queue) as handler:
            package_logger.warning("2 character(s) have no glyph")
        package_logger.warning("outside")

        assert isinstance(handler, QueueLogHandler)
        assert queue.get_nowait() == ("2 character(s) have no glyph", "WARNING")
        assert queue.empty()

    def test_forward_logs_when_no_queue_then_nothing_attached(self):
        before = list(logging.getLogger(PACKAGE_LOGGER).handlers)

        with forward_logs(None) as handler:
            assert handler is None
            assert logging.getLogger(PACKAGE_LOGGER).handlers == before


@pytest.fixture
def package_logger():
    """Package logger, with its level restored after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = logger.level
    yield logger
    logger.setLevel(saved)


def _drain(queue):
    messages = []
    while not queue.empty():
        messages.append(queue.get_nowait())
    return messages


class TestForwardLogsLevel:
    def test_forward_logs_when_package_logger_at_warning_then_info_forwarded(self, package_logger):
        package_logger.setLevel(logging.WARNING)
        queue = Queue()

        with forward_logs(queue):
            assert package_logger.level == logging.INFO
            logging.getLogger(f"{PACKAGE_LOGGER}.layout.progress").info("Laid out 20 characters")

        assert _drain(queue) == [("Laid out 20 characters", "INFO")]

    def test_forward_logs_restores_previous_level(self, package_logger):
        package_logger.setLevel(logging.WARNING)

        with forward_logs(Queue()):
            pass

        assert package_logger.level == logging.WARNING

    def test_forward_logs_when_already_debug_then_level_kept(self, package_logger):
        package_logger.setLevel(logging.DEBUG)

        with forward_logs(Queue()):
            assert package_logger.level == logging.DEBUG

        assert package_logger.level == logging.DEBUG

    def test_nested_blocks_keep_info_until_last_closes(self, package_logger):
        package_logger.setLevel(logging.WARNING)

        with forward_logs(Queue()):
            with forward_logs(Queue()):
                pass
            assert package_logger.level == logging.INFO

        assert package_logger.level == logging.WARNING


class TestForwardLogsThreads:
    def test_records_from_other_threads_not_forwarded(self, package_logger):
        package_logger.setLevel(logging.WARNING)
        child = logging.getLogger(f"{PACKAGE_LOGGER}.fonts.threads")
        queue = Queue()

        with forward_logs(queue):
            other = threading.Thread(target=child.warning, args=("from another export",))
            other.start()
            other.join(timeout=10)
            child.warning("from this export")

        assert _drain(queue) == [("from this export", "WARNING")]

    def test_thread_filter_matches_thread_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", (), None)

        assert ThreadFilter(threading.get_ident()).filter(record)
        assert not ThreadFilter(threading.get_ident() + 1).filter(record)
