from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from catalog.domain.errors import SeedError

logger = logging.getLogger(__name__)


class InitState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZING = "INITIALIZING"
    INITIALIZED = "INITIALIZED"
    FAILED = "FAILED"


class InitGuard:
    """Runs an initializer at most once per guard instance.

    Concurrent callers block on a condition variable until the single run
    finishes, then all observe its outcome. A failure is kept: every later
    call re-raises the same :class:`SeedError` without running the body again.

    Example:
        >>> guard = InitGuard("demo")
        >>> guard.run(lambda: None)
        >>> guard.state
        <InitState.INITIALIZED: 'INITIALIZED'>
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._cond = threading.Condition()
        self._state = InitState.UNINITIALIZED
        self._error: Optional[SeedError] = None

    @property
    def state(self) -> InitState:
        with self._cond:
            return self._state

    @property
    def done(self) -> bool:
        return self.state is InitState.INITIALIZED

    def wait(self) -> InitState:
        """Block while a run is in progress and return the settled state."""
        with self._cond:
            while self._state is InitState.INITIALIZING:
                self._cond.wait()
            return self._state

    def run(self, body: Callable[[], None]) -> None:
        with self._cond:
            while self._state is InitState.INITIALIZING:
                self._cond.wait()
            if self._state is InitState.INITIALIZED:
                return
            if self._error is not None:
                raise self._error
            self._state = InitState.INITIALIZING

        error: Optional[SeedError] = None
        completed = False
        try:
            body()
            completed = True
        except Exception as exc:
            error = exc if isinstance(exc, SeedError) else SeedError(f"{self.name}: {exc}")
            if error is not exc:
                error.__cause__ = exc
            logger.error("Initialization failed", extra={"repo": self.name, "error": str(exc)})
        finally:
            with self._cond:
                if completed:
                    self._state = InitState.INITIALIZED
                elif error is not None:
                    self._state = InitState.FAILED
                    self._error = error
                else:
                    # Interrupted (e.g. KeyboardInterrupt): let the next caller try.
                    self._state = InitState.UNINITIALIZED
                self._cond.notify_all()

        if error is not None:
            raise error
        logger.info("Initialization complete", extra={"repo": self.name})
