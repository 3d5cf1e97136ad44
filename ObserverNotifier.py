import logging
import threading
from typing import Any, Callable, List, Optional


logger = logging.getLogger(__name__)

StateCallback = Callable[[Any], None]
ErrorHandler = Callable[[Exception, StateCallback, Any], None]


class ObserverNotifier:
    """
    Ordered list of state callbacks with synchronous notification.

    Design Intent:
    ==============
    1. Callbacks are invoked in registration order
    2. The same callback may be registered several times and is then invoked once per registration
    3. Callbacks are held by strong references. They stay registered until unsubscribed
    4. The callback list is guarded by a lock. notify() works on a snapshot of it, so subscribing or
       unsubscribing from inside a callback takes effect from the next notification

    Error Handling:
    ===============
    :param error_handler: Optional callable with signature (exception, callback, state).
                          None (default): the first failing callback propagates its exception
                          and the remaining callbacks are not invoked.
                          Set: every callback is invoked, failures are passed to the handler.
                          log_observer_error() is a ready-made handler.

    Example:
    --------
    ```
    notifier = ObserverNotifier()
    notifier.subscribe(print)
    notifier.notify('state')       # prints 'state'
    notifier.unsubscribe(print)
    ```
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self.__lock = threading.Lock()
        self.__observers: List[StateCallback] = []
        self.error_handler = error_handler

    @property
    def observer_count(self) -> int:
        with self.__lock:
            return len(self.__observers)

    def subscribe(self, callback: StateCallback):
        with self.__lock:
            self.__observers.append(callback)

    def unsubscribe(self, callback: StateCallback):
        """Remove the first registration of callback. Unknown callbacks are ignored."""
        with self.__lock:
            try:
                self.__observers.remove(callback)
            except ValueError:
                pass

    def unsubscribe_all(self):
        with self.__lock:
            self.__observers.clear()

    def notify(self, state: Any):
        with self.__lock:
            observers = list(self.__observers)

        # Notify outside lock so callbacks can subscribe / unsubscribe
        for callback in observers:
            if self.error_handler is None:
                callback(state)
                continue
            try:
                callback(state)
            except Exception as e:
                self.error_handler(e, callback, state)


def log_observer_error(e: Exception, callback: StateCallback, state: Any):
    logger.error(f'Observer {callback!r} failed on state {state!r}: {str(e)}', exc_info=e)
