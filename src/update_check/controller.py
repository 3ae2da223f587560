"""Background checks for updates."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from update_check.api import check_for_updates
from update_check.models.update_info import Results
from update_check.models.version import VersionInfo

logger = logging.getLogger(__name__)

CompleteCallback = Callable[["UpdateCheckController", Results], None]
CancelledCallback = Callable[["UpdateCheckController"], None]


class UpdateCheckController:
    """Runs one check for updates at a time on a background worker.

    Results are delivered through ``on_complete``, or ``on_cancelled`` if
    ``cancel`` was requested while the check was running. Callbacks are
    invoked from the worker thread. A controller can be reused after a check
    completes, but not after it was cancelled.
    """

    def __init__(
        self,
        current_version: VersionInfo | str,
        on_complete: CompleteCallback | None = None,
        on_cancelled: CancelledCallback | None = None,
        check: Callable[..., Results] = check_for_updates,
        **check_kwargs,
    ):
        if isinstance(current_version, str):
            current_version = VersionInfo.parse(current_version)

        self.current_version = current_version
        self.on_complete = on_complete
        self.on_cancelled = on_cancelled
        self._check = check
        self._check_kwargs = check_kwargs

        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="CheckForUpdatesThread"
        )
        self._lock = threading.Lock()
        self._cancel_event = threading.Event()
        # False once the worker has decided which callback to deliver
        self._cancellable = False
        self._future: Future | None = None

    def __enter__(self) -> UpdateCheckController:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_running(self) -> bool:
        return self._future is not None and not self._future.done()

    @property
    def was_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def start(self, latest_release_url: str, json_filename: str) -> Future:
        """Start checking for updates in the background."""
        with self._lock:
            if self.was_cancelled:
                raise RuntimeError("A cancelled controller cannot check again.")
            if self.is_running:
                raise RuntimeError("A check for updates is already running.")

            self._cancellable = True
            self._future = self._executor.submit(
                self._run, latest_release_url, json_filename
            )
            return self._future

    def cancel(self):
        """Request the running check to be cancelled.

        The in-flight download is not interrupted; the result is discarded
        and ``on_cancelled`` fires once the worker finishes.
        """
        with self._lock:
            if self.is_running and self._cancellable:
                logger.debug("Cancelling check for updates")
                self._cancel_event.set()

    def close(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def _run(self, latest_release_url: str, json_filename: str) -> Results | None:
        results = self._check(
            self.current_version,
            latest_release_url,
            json_filename,
            **self._check_kwargs,
        )

        with self._lock:
            self._cancellable = False
            cancelled = self.was_cancelled

        try:
            if cancelled:
                if self.on_cancelled is not None:
                    self.on_cancelled(self)
                return None

            if self.on_complete is not None:
                self.on_complete(self, results)
        except Exception:
            logger.exception("Update check callback failed")

        return results
