"""Size-capped priority container that keeps the highest-ranked items.

``BoundedTopK`` holds at most ``max_size`` occupants. Whenever an insertion
pushes it over capacity, the lowest-ranked occupant is evicted. Occupants are
ranked by a ``key`` callable and identified by an ``identity`` callable, so the
same logical element can be re-ranked without being duplicated.

The container is an index-assisted binary min-heap:
- Every occupant lives in a slot that tracks its own heap index
- A dict maps each identity to the slots holding it
- Re-rank, eviction and removal are all O(log n)

Ranks are read at comparison time. An item mutated in place (for example a
word count that was just incremented) must be passed back through
``insert_or_update`` before any other operation touches the container.

Which occupant is evicted when several share the minimal rank is not
guaranteed.
"""

from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from .errors import InvalidCapacityError

T = TypeVar("T")


def _self(item: Any) -> Any:
    return item


class _Slot(Generic[T]):
    """Heap cell for one occupant."""

    __slots__ = ("item", "ident", "index")

    def __init__(self, item: T, ident: Hashable, index: int) -> None:
        self.item = item
        self.ident = ident
        self.index = index


class BoundedTopK(Generic[T]):
    """Keep the ``max_size`` highest-ranked items seen so far.

    Args:
        max_size: Capacity, must be a positive integer.
        key: Returns the rank of an item. Defaults to the item itself.
        identity: Returns the hashable identity of an item. Items with equal
            identities are the same logical element. Defaults to the item itself.

    Raises:
        InvalidCapacityError: If ``max_size`` is not a positive integer.
    """

    def __init__(
        self,
        max_size: int,
        key: Callable[[T], Any] | None = None,
        identity: Callable[[T], Hashable] | None = None,
    ) -> None:
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
            raise InvalidCapacityError(max_size)
        self._max_size = max_size
        self._key: Callable[[T], Any] = key or _self
        self._identity: Callable[[T], Hashable] = identity or _self
        self._heap: list[_Slot[T]] = []
        self._slots: dict[Hashable, list[_Slot[T]]] = {}

    @property
    def max_size(self) -> int:
        """Maximum number of occupants."""
        return self._max_size

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[T]:
        """Iterate occupants in heap order (not sorted)."""
        return iter(self.to_list())

    def __contains__(self, item: object) -> bool:
        # Objects the identity function cannot handle are never held
        try:
            return self._identity(item) in self._slots  # type: ignore[arg-type]
        except (AttributeError, TypeError):
            return False

    def __repr__(self) -> str:
        return f"BoundedTopK(max_size={self._max_size}, size={len(self._heap)})"

    def insert_or_update(self, item: T) -> bool:
        """Insert an item, replacing an occupant with the same identity.

        If the container then holds more than ``max_size`` occupants, the
        current minimum is evicted. At most one occupant is evicted per call.

        Args:
            item: Item to insert or re-rank.

        Returns:
            Always True.
        """
        ident = self._identity(item)
        existing = self._slots.get(ident)
        if existing:
            self._remove(existing[0])
        self._push(item, ident)

        if len(self._heap) > self._max_size:
            self.pop_minimum()
        return True

    def insert_all_or_update(self, items: Iterable[T]) -> bool:
        """Insert a batch of items, then evict minimums down to capacity.

        Unlike ``insert_or_update``, no identity check is made: an item whose
        identity is already present (in the container or earlier in the batch)
        becomes an additional occupant. Eviction only runs after the whole
        batch is in.

        Args:
            items: Items to insert.

        Returns:
            True if the batch contained at least one item.
        """
        added = False
        for item in items:
            self._push(item, self._identity(item))
            added = True

        while len(self._heap) > self._max_size:
            self.pop_minimum()
        return added

    def peek_minimum(self) -> T | None:
        """Return the lowest-ranked occupant, or None if empty."""
        if not self._heap:
            return None
        return self._heap[0].item

    def pop_minimum(self) -> T | None:
        """Remove and return the lowest-ranked occupant, or None if empty."""
        if not self._heap:
            return None
        slot = self._heap[0]
        self._remove(slot)
        return slot.item

    def to_list(self) -> list[T]:
        """Return occupants in heap order."""
        return [slot.item for slot in self._heap]

    def ordered(self, descending: bool = True) -> list[T]:
        """Return occupants sorted by rank.

        Args:
            descending: Highest rank first when True (the default).

        Returns:
            Sorted list of occupants. Order among equal ranks is unspecified.
        """
        return sorted(self.to_list(), key=self._key, reverse=descending)

    def _less(self, i: int, j: int) -> bool:
        return bool(self._key(self._heap[i].item) < self._key(self._heap[j].item))

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].index = i
        heap[j].index = j

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(index, parent):
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._heap)
        while True:
            smallest = index
            left = 2 * index + 1
            right = left + 1
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest

    def _push(self, item: T, ident: Hashable) -> None:
        slot = _Slot(item, ident, len(self._heap))
        self._heap.append(slot)
        self._slots.setdefault(ident, []).append(slot)
        self._sift_up(slot.index)

    def _remove(self, slot: _Slot[T]) -> None:
        last = self._heap.pop()
        if last is not slot:
            # Fill the hole with the last cell and restore heap order around it
            self._heap[slot.index] = last
            last.index = slot.index
            self._sift_down(last.index)
            self._sift_up(last.index)

        owners = self._slots[slot.ident]
        owners.remove(slot)
        if not owners:
            del self._slots[slot.ident]
