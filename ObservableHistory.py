from typing import Generic, List, Optional, Tuple

from NavigableHistory import NavigableHistory, DEFAULT_CAPACITY, T
from ObserverNotifier import ObserverNotifier, StateCallback


class ObservableHistory(Generic[T]):
    """
    Decorates a NavigableHistory with change notification.

    Every call that moves the present - push(), go_prev(), go_next(), go_last() and go(i) with i != 0 -
    invokes the subscribed callbacks with the new present (None when it is absent), after the history
    has been fully updated. go(0), get(), clear() and the read-only properties never notify.

    A strict history that refuses a navigation raises before any change and nothing is notified.

    Callbacks may mutate the history they observe. The nested notification runs to its end first,
    then the outer one goes on with the state it was started with.

    Args:
        history: The history to decorate. A new NavigableHistory(capacity, strict) if not provided.
        notifier: The callback list. A fail-fast ObserverNotifier if not provided.
        capacity, strict: Options of the new history. If a history is provided, the ones given
                          explicitly are applied to it, the ones left as None keep its settings.
    """

    def __init__(self,
                 history: Optional[NavigableHistory[T]] = None,
                 notifier: Optional[ObserverNotifier] = None,
                 capacity: Optional[int] = None,
                 strict: Optional[bool] = None):
        if history is None:
            history = NavigableHistory(DEFAULT_CAPACITY if capacity is None else capacity, bool(strict))
        else:
            if capacity is not None:
                if capacity < 1:
                    raise ValueError("capacity must be at least 1")
                history.capacity = capacity
            if strict is not None:
                history.strict = strict
        self.__history = history
        self.__notifier = notifier if notifier is not None else ObserverNotifier()

    @property
    def history(self) -> NavigableHistory[T]:
        return self.__history

    @property
    def notifier(self) -> ObserverNotifier:
        return self.__notifier

    # ----------------------------------------------- Observers -----------------------------------------------

    def subscribe(self, callback: StateCallback):
        self.__notifier.subscribe(callback)

    def unsubscribe(self, callback: StateCallback):
        self.__notifier.unsubscribe(callback)

    def unsubscribe_all(self):
        self.__notifier.unsubscribe_all()

    # ------------------------------------------------ Mutators ------------------------------------------------

    def push(self, state: T) -> T:
        self.__history.push(state)
        self.__notifier.notify(state)
        return state

    def go_prev(self) -> Optional[T]:
        return self.__notified(self.__history.go_prev())

    def go_next(self) -> Optional[T]:
        return self.__notified(self.__history.go_next())

    def go_last(self) -> Optional[T]:
        return self.__notified(self.__history.go_last())

    def go(self, i: int) -> Optional[T]:
        if i == 0:
            return self.__history.go(0)
        return self.__notified(self.__history.go(i))

    def clear(self):
        self.__history.clear()

    def __notified(self, state: Optional[T]) -> Optional[T]:
        self.__notifier.notify(state)
        return state

    # ------------------------------------------------ Readers -------------------------------------------------

    @property
    def capacity(self) -> int:
        return self.__history.capacity

    @capacity.setter
    def capacity(self, value: int):
        self.__history.capacity = value

    max_length = capacity

    @property
    def strict(self) -> bool:
        return self.__history.strict

    @strict.setter
    def strict(self, value: bool):
        self.__history.strict = value

    @property
    def num_prev(self) -> int:
        return self.__history.num_prev

    @property
    def num_next(self) -> int:
        return self.__history.num_next

    @property
    def has_present(self) -> bool:
        return self.__history.has_present

    @property
    def can_go_prev(self) -> bool:
        return self.__history.can_go_prev

    @property
    def can_go_next(self) -> bool:
        return self.__history.can_go_next

    def get(self, i: int) -> Optional[T]:
        return self.__history.get(i)

    def snapshot(self) -> Tuple[List[T], Optional[T], List[T]]:
        return self.__history.snapshot()

    def __len__(self) -> int:
        return len(self.__history)

    def __repr__(self) -> str:
        return f"<ObservableHistory observers={self.__notifier.observer_count} of {self.__history!r}>"
