"""
Observable UI state

UiState is what presentation layer renders: Loading, Success(data) or
Error(message). StateValue holds current value and notifies observers when it
is replaced.
"""

import asyncio
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Generic, List, TypeAlias, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """Data is being fetched"""

    pass


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Error:
    message: str


UiState: TypeAlias = Loading | Success[Any] | Error

StateListener: TypeAlias = Callable[[Any], Any]


class StateValue(Generic[T]):
    """
    Holder of current value with observers, dood!

    set() replaces the value under a lock and then calls every listener with
    the new value. A raising listener is logged and does not affect others.
    Coroutine results of listeners are scheduled as tasks on the running loop.

    Example:
        >>> state = StateValue[UiState](Loading())
        >>> state.addListener(lambda value: print(value))
        >>> state.set(Success(42))
        Success(data=42)
    """

    def __init__(self, initial: T):
        self._value: T = initial
        self._lock = RLock()
        self._listeners: List[StateListener] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value
            listeners = list(self._listeners)

        for listener in listeners:
            self._notify(listener, value)

    def addListener(self, listener: StateListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def removeListener(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, listener: StateListener, value: T) -> None:
        try:
            ret = listener(value)
        except Exception as e:
            logger.error(f"Error in state listener {listener}: {e}")
            logger.exception(e)
            return

        if asyncio.iscoroutine(ret):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning(f"No running event loop for async state listener {listener}, skipping")
                ret.close()
                return
            task = loop.create_task(ret)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    def __repr__(self) -> str:
        return f"StateValue({self.value!r})"
