"""
Module: core.utils.logging_utils

Purpose:
    Logging setup for the command line, and forwarding of export progress
    to a queue that a console widget can drain.

Key Functions:
    - configure_logging(): Root handler and levels for the CLI
    - attach_queue_handler() / detach_queue_handler(): Forward package logs
    - forward_logs(): Context manager around attach/detach for one thread

Key Classes:
    - QueueLogHandler: Puts (message, level_name) tuples on a queue
    - ThreadFilter: Passes only records emitted by one thread

Used By:
    - export.worker: Log forwarding for the lifetime of one export
    - cli: configure_logging()
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from queue import Queue
from typing import Iterator, Optional

PACKAGE_LOGGER = "copybook_toolkit"

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Nesting count of forward_logs() blocks and the package logger level they replaced
_forward_lock = threading.Lock()
_forward_depth = 0
_saved_level = logging.NOTSET


class QueueLogHandler(logging.Handler):
    """
    Logging handler that queues (message, level_name) tuples.

    Consoles only distinguish INFO, WARNING and ERROR, so DEBUG records
    are reported as INFO.
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level_name = "INFO" if record.levelno <= logging.DEBUG else record.levelname
            self.log_queue.put((self.format(record), level_name))
        except Exception:
            self.handleError(record)


class ThreadFilter(logging.Filter):
    """Accept records emitted by a single thread."""

    def __init__(self, thread_id: int):
        super().__init__()
        self.thread_id = thread_id

    def filter(self, record: logging.LogRecord) -> bool:
        return record.thread == self.thread_id


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = PACKAGE_LOGGER,
    *,
    thread_id: Optional[int] = None,
) -> QueueLogHandler:
    """
    Start forwarding records of a logger (the package logger by default).

    Args:
        log_queue: Destination queue
        logger_name: Logger to listen on
        thread_id: Forward only records emitted by this thread

    Returns:
        The handler, to pass to detach_queue_handler()
    """
    handler = QueueLogHandler(log_queue)
    if thread_id is not None:
        handler.addFilter(ThreadFilter(thread_id))
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = PACKAGE_LOGGER) -> None:
    """Stop forwarding records to handler's queue."""
    logging.getLogger(logger_name).removeHandler(handler)


def _enter_forwarding(level: int) -> None:
    global _forward_depth, _saved_level
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    with _forward_lock:
        if _forward_depth == 0:
            _saved_level = package_logger.level
            if package_logger.getEffectiveLevel() > level:
                package_logger.setLevel(level)
        _forward_depth += 1


def _exit_forwarding() -> None:
    global _forward_depth
    with _forward_lock:
        _forward_depth -= 1
        if _forward_depth == 0:
            logging.getLogger(PACKAGE_LOGGER).setLevel(_saved_level)


@contextmanager
def forward_logs(log_queue: Optional[Queue], level: int = logging.INFO) -> Iterator[Optional[QueueLogHandler]]:
    """
    Forward package logs emitted by the calling thread to log_queue.

    Records from other threads are not forwarded, so concurrent exports
    each see only their own progress. While any block is open the package
    logger passes records at `level` and above; its previous level is
    restored when the last block closes.

    A None queue forwards nothing, so callers need no branch.
    """
    if log_queue is None:
        yield None
        return
    _enter_forwarding(level)
    handler = attach_queue_handler(log_queue, thread_id=threading.get_ident())
    try:
        yield handler
    finally:
        detach_queue_handler(handler)
        _exit_forwarding()


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for command line use.

    Args:
        verbose: Log DEBUG records when True, INFO otherwise.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=True)
    # fontTools logs every dropped table at INFO
    logging.getLogger("fontTools").setLevel(logging.WARNING)
