# min_heap.py
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from grid_errors import HeapUnderflowError

T = TypeVar("T")


def _identity(item):
    return item


class MinHeap(Generic[T]):
    """
    Binary heap over a resizable array.

    Layout is 1-based: slot 0 is unused and, for the element at slot i,
        parent = i // 2, left = 2 * i, right = 2 * i + 1.

    The ordering key is injected through ``key`` (a function item -> key).
    With ``reverse=True`` the same engine behaves as a max-heap.

    By default the heap holds any values, equal ones included, and
    membership is a linear scan. With ``indexed=True`` items act as
    unique hashable handles: a map item -> slot is kept in sync with each
    swap, which gives O(1) membership and O(log n) ``update``.

    Capacity doubles when the array is full and halves once the size
    drops to a quarter of the capacity.
    """

    def __init__(
        self,
        key: Optional[Callable[[T], object]] = None,
        capacity: int = 1,
        reverse: bool = False,
        indexed: bool = False,
    ):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._key = key if key is not None else _identity
        self._reverse = reverse
        self._data: List[Optional[T]] = [None] * (capacity + 1)
        self._size = 0
        self._pos: Optional[Dict[T, int]] = {} if indexed else None

    @property
    def indexed(self) -> bool:
        return self._pos is not None

    # ------------------------------------------------------------------ #
    # Size / capacity
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def capacity(self) -> int:
        return len(self._data) - 1

    def _resize(self, capacity: int) -> None:
        temp: List[Optional[T]] = [None] * (capacity + 1)
        temp[1 : self._size + 1] = self._data[1 : self._size + 1]
        self._data = temp

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    def insert(self, item: T) -> None:
        """
        Add an item and sift it up to restore the heap order.
        """
        if self._pos is not None and item in self._pos:
            raise ValueError(f"Item {item!r} is already queued.")
        if self._size == self.capacity:
            self._resize(2 * self.capacity)

        self._size += 1
        self._data[self._size] = item
        if self._pos is not None:
            self._pos[item] = self._size
        self._sift_up(self._size)

    push = insert

    def extract_min(self) -> T:
        """
        Remove and return the element with the smallest key
        (largest when ``reverse=True``).
        """
        top = self.peek_min()
        self._swap(1, self._size)
        self._data[self._size] = None
        self._size -= 1
        if self._pos is not None:
            del self._pos[top]
        self._sift_down(1)

        if self._size > 0 and self._size == self.capacity // 4:
            self._resize(self.capacity // 2)
        return top

    pop = extract_min

    def peek_min(self) -> T:
        if self._size == 0:
            raise HeapUnderflowError("heap underflow")
        return self._data[1]

    def contains(self, item: T) -> bool:
        if self._pos is None:
            return self.contains_linear(item)
        return item in self._pos

    __contains__ = contains

    def contains_linear(self, item: T) -> bool:
        """
        Membership by scanning the live slots with value equality.

        O(n); this is what ``contains`` does on a heap built without
        ``indexed=True``.
        """
        for i in range(1, self._size + 1):
            if self._data[i] == item:
                return True
        return False

    def update(self, item: T) -> None:
        """
        Restore the heap order after ``item``'s key has changed.

        Works for both a decreased and an increased key. Without an index
        the slot is found by a linear scan (first equal value).
        """
        if self._pos is not None:
            i = self._pos[item]
        else:
            i = self._find(item)
        i = self._sift_up(i)
        self._sift_down(i)

    def clear(self) -> None:
        self._data = [None, None]
        self._size = 0
        if self._pos is not None:
            self._pos.clear()

    def __iter__(self) -> Iterator[T]:
        """
        Iterate in priority order over a copy; the heap is not consumed.
        """
        clone: MinHeap[T] = MinHeap(
            key=self._key,
            capacity=max(self._size, 1),
            reverse=self._reverse,
            indexed=self.indexed,
        )
        for i in range(1, self._size + 1):
            clone.insert(self._data[i])
        while clone:
            yield clone.extract_min()

    def __repr__(self) -> str:
        return f"MinHeap(size={self._size}, capacity={self.capacity})"

    # ------------------------------------------------------------------ #
    # Heap internals
    # ------------------------------------------------------------------ #

    def _out_of_order(self, i: int, j: int) -> bool:
        """
        True if the element at slot i must sit below the one at slot j.
        """
        ki = self._key(self._data[i])
        kj = self._key(self._data[j])
        if self._reverse:
            return ki < kj
        return ki > kj

    def _swap(self, i: int, j: int) -> None:
        data = self._data
        data[i], data[j] = data[j], data[i]
        if self._pos is not None:
            self._pos[data[i]] = i
            self._pos[data[j]] = j

    def _find(self, item: T) -> int:
        for i in range(1, self._size + 1):
            if self._data[i] == item:
                return i
        raise KeyError(item)

    def _sift_up(self, i: int) -> int:
        while i > 1 and self._out_of_order(i // 2, i):
            self._swap(i // 2, i)
            i //= 2
        return i

    def _sift_down(self, i: int) -> int:
        while 2 * i <= self._size:
            child = 2 * i
            # pick the right child if it ranks before the left one
            if child < self._size and self._out_of_order(child, child + 1):
                child += 1
            if not self._out_of_order(i, child):
                break
            self._swap(i, child)
            i = child
        return i
