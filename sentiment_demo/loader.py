from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Generic, Optional, TypeVar

from sentiment_demo.errors import InitializationError
from sentiment_demo.sentiment_types import LoaderState, ProgressCallback, ProgressEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")

Initializer = Callable[[ProgressCallback], T]


class ClassifierLoader(Generic[T]):
    """
    Single-flight initializer for the classification capability.

    - The initializer runs at most once at a time; callers arriving while it
      runs wait for that same attempt and see the same result or error.
    - Once READY, ensure_ready() returns the cached classifier.
    - After a failure, the next ensure_ready() starts a fresh attempt.
    - Progress events are relayed to observers in emission order; a failed
      attempt ends with a ProgressEvent("failed").
    - Calling ensure_ready() from the loading thread itself (e.g. from an
      observer) raises InitializationError instead of waiting on itself.

    One loader is built per application and passed to whoever needs it.
    """

    def __init__(self, initializer: Initializer[T]):
        self._initializer = initializer
        self._lock = threading.Lock()
        self._state = LoaderState.UNINITIALIZED
        self._classifier: Optional[T] = None
        self._inflight: Optional[Future[T]] = None
        self._owner_thread: Optional[int] = None
        self._last_error: Optional[InitializationError] = None
        self._observers: list[ProgressCallback] = []

    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is LoaderState.READY

    @property
    def last_error(self) -> Optional[InitializationError]:
        return self._last_error

    def add_progress_observer(self, observer: ProgressCallback) -> None:
        with self._lock:
            self._observers.append(observer)

    def ensure_ready(self) -> T:
        """
        Return the ready classifier, initializing it on first use.

        Raises:
            InitializationError: if the (shared) initialization attempt failed
        """
        with self._lock:
            if self._state is LoaderState.READY:
                assert self._classifier is not None
                return self._classifier

            if self._state is LoaderState.LOADING:
                assert self._inflight is not None
                if self._owner_thread == threading.get_ident():
                    raise InitializationError("ensure_ready called re-entrantly during initialization")
                future = self._inflight
                owner = False
            else:
                future = Future()
                self._inflight = future
                self._state = LoaderState.LOADING
                self._owner_thread = threading.get_ident()
                owner = True

        if owner:
            self._run(future)
        return future.result()

    def _run(self, future: Future[T]) -> None:
        logger.info("Initializing classifier")
        try:
            classifier = self._call_initializer()
        except InitializationError as e:
            logger.error("Classifier initialization failed: %s", e)
            self._fail(future, e)
            return
        except BaseException:
            # KeyboardInterrupt etc.: release waiters before propagating.
            self._fail(future, InitializationError("Classifier initialization interrupted"))
            raise

        with self._lock:
            self._classifier = classifier
            self._state = LoaderState.READY
            self._inflight = None
            self._last_error = None
            self._owner_thread = None
        logger.info("Classifier ready")
        future.set_result(classifier)

    def _fail(self, future: Future[T], error: InitializationError) -> None:
        try:
            self._relay_progress(ProgressEvent("failed"))
        except Exception:
            # The attempt already failed; callers get `error`, not the observer's.
            logger.exception("Progress observer raised on terminal event")
        finally:
            with self._lock:
                self._state = LoaderState.FAILED
                self._inflight = None
                self._owner_thread = None
                self._last_error = error
            future.set_exception(error)

    def _call_initializer(self) -> T:
        try:
            return self._initializer(self._relay_progress)
        except InitializationError:
            raise
        except Exception as e:
            raise InitializationError(f"Classifier initialization failed: {e}") from e

    def _relay_progress(self, event: ProgressEvent) -> None:
        logger.info("Loading: %s", event)
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer(event)
