from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable


class BestEffortRunner:
    """
    Runs secondary steps (slot board updates, notifications) after the ledger write.

    Each step gets a bounded wait; a timeout or exception is logged and reported as
    False, never raised. A timed-out step keeps running on the pool.
    """

    def __init__(self, timeout_seconds: float = 5.0, max_workers: int = 4) -> None:
        self._timeout = timeout_seconds
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="best-effort")
        self._logger = logging.getLogger(__name__)

    def run(self, step: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        try:
            future = self._executor.submit(fn, *args, **kwargs)
            result = future.result(timeout=self._timeout)
        except FutureTimeoutError:
            self._logger.warning("Best-effort step timed out", extra={"step": step, "timeout": self._timeout})
            return False
        except Exception as e:
            self._logger.error("Best-effort step failed", extra={"step": step, "error": str(e)})
            return False
        return result is not False

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
