import logging
from typing import Generic, List, Optional, Tuple, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_CAPACITY = 50


class HistoryNavigationError(IndexError):
    """Base class of the navigation failures raised by a strict history."""
    pass


class OutOfRangeNavigation(HistoryNavigationError):
    def __init__(self, offset: int, available: int):
        self.offset = offset
        self.available = available
        super().__init__(f"Cannot go {offset:+d}: only {available} entries in that direction")


class PopFromEmpty(HistoryNavigationError):
    def __init__(self, side: str):
        self.side = side
        super().__init__(f"Cannot navigate: {side} is empty")


class NavigableHistory(Generic[T]):
    """
    Bounded undo/redo history of opaque states with relative navigation.

    The history is a window of three parts: `past` (oldest first), the `present` state and
    `future` (nearest to present first). Navigation moves the present pointer through the window,
    pushing a new state drops the whole future branch.

    Attributes:
        capacity (int): Maximum length of `past`. Plain mutable value, a change is only applied
                        by the next push(). `max_length` is an alias.
        strict (bool): If True, navigation beyond the available entries raises
                       OutOfRangeNavigation / PopFromEmpty before touching any state.
                       If False (default), it fails soft: the present becomes absent and
                       None is returned.

    Methods:
        push(state):
            Archives the present, makes `state` the present, truncates the future and evicts the
            oldest past entries above `capacity`. Returns `state`.

        go_prev() / go_next():
            One step backward / forward. Same as go(-1) / go(1) but O(1).

        go_last():
            Jumps to the newest future entry. The skipped future entries are appended to the past,
            the previous present is not archived.

        go(i):
            Moves the pointer by `i` entries. go(0) is a no-op.

        get(i):
            Reads the entry `i` steps away from the present without moving.

        clear():
            Drops everything, the present becomes absent.

    Absent values:
        The present is absent right after construction or clear(), and after a lenient
        over-navigation. Reading it gives None. Whether a present exists is tracked by a flag, so a
        falsy state (0, '', None) pushed by the caller is a real state and is archived like others.
        An absent present is never archived: push() and every navigation skip it, so the past and the
        future only hold real states. After an over-navigation num_prev / num_next therefore do not
        count a placeholder for the absent present.

    Example:
        history = NavigableHistory(capacity=3)
        for state in [1, 2, 3, 4, 5]:
            history.push(state)
        history.num_prev        # 3
        history.get(-3)         # 2
        history.go_prev()       # 4
        history.push(6)         # 5 is lost, num_next == 0
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, strict: bool = False):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.strict = strict
        self.__past: List[T] = []
        self.__present: Optional[T] = None
        self.__has_present = False
        # Kept reversed: the entry right after the present is the LAST item,
        #   so single steps are plain append() / pop() on both sides.
        self.__future: List[T] = []

    # ------------------------------------------------------------------------------------------------------------------

    @property
    def max_length(self) -> int:
        return self.capacity

    @max_length.setter
    def max_length(self, value: int):
        self.capacity = value

    @property
    def num_prev(self) -> int:
        return len(self.__past)

    @property
    def num_next(self) -> int:
        return len(self.__future)

    @property
    def has_present(self) -> bool:
        return self.__has_present

    @property
    def can_go_prev(self) -> bool:
        return bool(self.__past)

    @property
    def can_go_next(self) -> bool:
        return bool(self.__future)

    def __len__(self) -> int:
        return len(self.__past) + len(self.__future) + (1 if self.__has_present else 0)

    def __repr__(self) -> str:
        present = repr(self.__present) if self.__has_present else '<absent>'
        return (f"<NavigableHistory prev={len(self.__past)} present={present} "
                f"next={len(self.__future)} capacity={self.capacity}>")

    def snapshot(self) -> Tuple[List[T], Optional[T], List[T]]:
        """
        Copy of the whole window as (past, present, future).
        past is oldest first, future is nearest to present first, present is None if absent.
        """
        return list(self.__past), self.__present, list(reversed(self.__future))

    # ------------------------------------------------------------------------------------------------------------------

    def push(self, state: T) -> T:
        if self.__has_present:
            self.__past.append(self.__present)
        self.__set_present(state)
        self.__future = []

        # Capacity is only enforced here. Navigation may leave more than `capacity` entries in the past.
        excess = len(self.__past) - self.capacity
        if excess > 0:
            del self.__past[:excess]
            logger.debug(f'History capacity {self.capacity} reached, evicted {excess} oldest entries.')

        return state

    def go_prev(self) -> Optional[T]:
        # Same as go(-1) without rebuilding the lists.
        has_new = bool(self.__past)
        if has_new:
            new_present = self.__past.pop()
        else:
            self.__refuse(PopFromEmpty('past'))
            new_present = None
        self.__archive_to_future()
        self.__set_present(new_present, has_new)
        return self.__present

    def go_next(self) -> Optional[T]:
        has_new = bool(self.__future)
        if has_new:
            new_present = self.__future.pop()
        else:
            self.__refuse(PopFromEmpty('future'))
            new_present = None
        self.__archive_to_past()
        self.__set_present(new_present, has_new)
        return self.__present

    def go_last(self) -> Optional[T]:
        if not self.__future:
            self.__refuse(PopFromEmpty('future'))
            self.__clear_present()
            return None

        # The farthest future entry becomes the present, the ones in between go to the past.
        #   The old present is dropped, it is not archived.
        new_present = self.__future[0]
        self.__past.extend(reversed(self.__future[1:]))
        self.__future = []
        self.__set_present(new_present)
        return self.__present

    def go(self, i: int) -> Optional[T]:
        if i == 0:
            return self.__present
        if i > 0:
            self.__go_forward(i)
        else:
            self.__go_backward(-i)
        return self.__present

    def get(self, i: int) -> Optional[T]:
        if i == 0:
            return self.__present
        if i > 0:
            return self.__future[-i] if i <= len(self.__future) else None
        return self.__past[i] if -i <= len(self.__past) else None

    def clear(self):
        self.__past = []
        self.__future = []
        self.__clear_present()

    # ------------------------------------------------------------------------------------------------------------------

    def __go_forward(self, steps: int):
        available = len(self.__future)
        if steps <= available:
            index = available - steps
            new_present = self.__future[index]
            skipped = self.__future[index + 1:]
            del self.__future[index:]
            has_new = True
        else:
            self.__refuse(OutOfRangeNavigation(steps, available))
            new_present = None
            skipped = self.__future
            self.__future = []
            has_new = False

        self.__archive_to_past()
        self.__past.extend(reversed(skipped))
        self.__set_present(new_present, has_new)

    def __go_backward(self, steps: int):
        available = len(self.__past)
        if steps <= available:
            start = available - steps
            new_present = self.__past[start]
            moved = self.__past[start + 1:]
            del self.__past[start:]
            has_new = True
        else:
            self.__refuse(OutOfRangeNavigation(-steps, available))
            new_present = None
            moved = self.__past
            self.__past = []
            has_new = False

        self.__archive_to_future()
        self.__future.extend(reversed(moved))
        self.__set_present(new_present, has_new)

    def __refuse(self, error: HistoryNavigationError):
        if self.strict:
            raise error
        logger.warning(f'{error}. Present state becomes absent.')

    def __archive_to_past(self):
        if self.__has_present:
            self.__past.append(self.__present)

    def __archive_to_future(self):
        if self.__has_present:
            self.__future.append(self.__present)

    def __set_present(self, state: Optional[T], has_present: bool = True):
        self.__present = state
        self.__has_present = has_present

    def __clear_present(self):
        self.__set_present(None, False)
