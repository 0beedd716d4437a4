"""
Module: export.worker

Purpose:
    Run one export off the calling (UI) thread and deliver the outcome
    exactly once.

Key Classes:
    - ExportWorker: One background export per instance

Key Functions:
    - start_export(): Start a worker and return it

Behaviour:
    - The request is deep-copied on start; the worker owns its copy
    - The outcome is an ExportResponse delivered once, through the
      returned Future and the optional callback
    - cancel() is coarse: the export runs on in the background but its
      result is discarded
    - No timeout is applied here; pass one to wait()

Dependencies:
    - threading, concurrent.futures (std)
    - export.controller: ExportOrchestrator

Used By:
    - cli: Command line export with --timeout
"""

from __future__ import annotations

import copy
import logging
import threading
from concurrent.futures import Future
from queue import Queue
from typing import Callable, Optional

from ..core.utils.logging_utils import forward_logs
from .config import ExportRequest, ExportResponse
from .controller import ExportOrchestrator, ServiceFactory

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ExportResponse], None]


class ExportWorker:
    """
    Runs a single export on a daemon thread.

    Usage:
        worker = ExportWorker(log_queue=console_queue)
        future = worker.start(request, on_complete=show_result)
        ...
        response = worker.wait(timeout=120)

    Attributes:
        log_queue: Optional queue receiving (message, level) log tuples
    """

    def __init__(
        self,
        *,
        log_queue: Optional[Queue] = None,
        service_factory: Optional[ServiceFactory] = None,
    ):
        self.log_queue = log_queue
        self._service_factory = service_factory
        self._future: Future = Future()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._cancelled = False

    @property
    def started(self) -> bool:
        return self._thread is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self, request: ExportRequest, on_complete: Optional[CompletionCallback] = None) -> Future:
        """
        Start the export in the background.

        Args:
            request: Export request (copied; later changes by the caller
                do not reach the worker)
            on_complete: Called once with the ExportResponse, on the
                worker thread. Not called if the export is cancelled.

        Returns:
            Future resolving to the ExportResponse

        Raises:
            RuntimeError: If this worker was already started
        """
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("ExportWorker runs a single export; create a new worker")
            owned = copy.deepcopy(request)
            self._thread = threading.Thread(
                target=self._run,
                args=(owned, on_complete),
                name="copybook-export",
                daemon=True,
            )
            self._future.set_running_or_notify_cancel()
            self._thread.start()
        logger.debug("Export worker started")
        return self._future

    def _run(self, request: ExportRequest, on_complete: Optional[CompletionCallback]) -> None:
        with forward_logs(self.log_queue):
            try:
                response = ExportOrchestrator(self._service_factory).execute(request)
            except Exception as e:
                # execute() reports pipeline failures itself; this is a last resort
                logger.exception("Export worker crashed")
                response = ExportResponse.failure(f"Unexpected error: {e}", type(e).__name__)

        with self._lock:
            if self._cancelled:
                logger.info("Export finished after cancellation; result discarded")
                return
            self._future.set_result(response)

        if on_complete is not None:
            on_complete(response)

    def cancel(self) -> bool:
        """
        Discard the export's result.

        Returns:
            True if the result will be discarded, False if it was already delivered
        """
        with self._lock:
            if self._future.done():
                return False
            self._cancelled = True
            # A running Future cannot be cancelled; fail it so waiters wake up
            self._future.set_result(
                ExportResponse.failure("Export cancelled", "CancelledError")
            )
        logger.info("Export cancelled")
        return True

    def wait(self, timeout: Optional[float] = None) -> ExportResponse:
        """
        Block until the export finishes.

        Raises:
            concurrent.futures.TimeoutError: If the timeout expires
            RuntimeError: If the worker was never started
        """
        if self._thread is None:
            raise RuntimeError("ExportWorker was not started")
        return self._future.result(timeout=timeout)


def start_export(
    request: ExportRequest,
    on_complete: Optional[CompletionCallback] = None,
    *,
    log_queue: Optional[Queue] = None,
) -> ExportWorker:
    """Create a worker, start it, and return it."""
    worker = ExportWorker(log_queue=log_queue)
    worker.start(request, on_complete)
    return worker
