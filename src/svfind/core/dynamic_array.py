"""
Growable array of fixed-shape records backed by a numpy structured buffer.

The buffer capacity and the number of active elements are tracked
separately, so the active length can shrink (``compress``, ``remove``)
without reallocating. Orderings are tuples of field names compared
lexicographically.
"""

import logging
from typing import Iterator, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Order = Sequence[str]


class DynamicArray:
    """Typed growable array with explicit active length."""

    def __init__(self, dtype, capacity: int = 4096):
        """
        Create an empty array.

        Args:
            dtype: numpy structured dtype of one element
            capacity: initial number of slots (advisory)
        """
        self.dtype = np.dtype(dtype)
        if self.dtype.names is None:
            raise TypeError(f"DynamicArray needs a structured dtype, got {self.dtype}")
        self._data = np.zeros(max(1, int(capacity)), dtype=self.dtype)
        self._max = 0

    def __len__(self) -> int:
        return self._max

    def __iter__(self) -> Iterator[np.void]:
        return iter(self._data[:self._max])

    def __getitem__(self, index: int) -> np.void:
        if not -self._max <= index < self._max:
            raise IndexError(f"index {index} out of range for array of length {self._max}")
        return self._data[index]

    def __repr__(self):
        return f"DynamicArray(len={self._max}, capacity={self.capacity}, dtype={self.dtype})"

    @property
    def capacity(self) -> int:
        return len(self._data)

    def view(self) -> np.ndarray:
        """Active elements as a numpy view (invalidated by the next resize)."""
        return self._data[:self._max]

    def _resize(self, min_capacity: int):
        new_capacity = max(2 * self.capacity, min_capacity)
        data = np.zeros(new_capacity, dtype=self.dtype)
        data[:self._max] = self._data[:self._max]
        self._data = data
        logger.debug(f"Resized array to {new_capacity} slots")

    def grow_to(self, index: int) -> np.void:
        """
        Make ``index`` an active element and return a writable view of it.

        The view stays valid until the next resize.
        """
        if index < 0:
            raise IndexError(f"negative index {index}")
        if index >= self.capacity:
            self._resize(index + 1)
        if index >= self._max:
            self._max = index + 1
        return self._data[index]

    def append(self, values: tuple) -> int:
        """Store a tuple of field values after the last active element."""
        index = self._max
        self.grow_to(index)
        self._data[index] = values
        return index

    def copy(self) -> 'DynamicArray':
        other = DynamicArray(self.dtype, self.capacity)
        other._data[:self._max] = self._data[:self._max]
        other._max = self._max
        return other

    def destroy(self):
        """Release the backing buffer."""
        self._data = np.zeros(0, dtype=self.dtype)
        self._max = 0

    # ------------------------------------------------------------------
    # Ordered operations
    # ------------------------------------------------------------------

    def _check_order(self, order: Order):
        if not order:
            raise ValueError("ordering must name at least one field")
        unknown = [name for name in order if name not in self.dtype.names]
        if unknown:
            raise KeyError(f"unknown fields in ordering: {unknown}")

    def _key(self, index: int, order: Order) -> tuple:
        record = self._data[index]
        return tuple(record[name].item() for name in order)

    def _values_key(self, values: tuple, order: Order) -> tuple:
        record = np.array([tuple(values)], dtype=self.dtype)[0]
        return tuple(record[name].item() for name in order)

    def sort(self, order: Order):
        """Sort the active elements by ``order``."""
        self._check_order(order)
        if self._max > 1:
            active = self._data[:self._max]
            self._data[:self._max] = np.sort(active, order=list(order), kind='stable')

    def compress(self, order: Order) -> bool:
        """
        Drop consecutive elements equal on every field of ``order``.

        The array must already be sorted by ``order``. Returns True if
        any element was removed.
        """
        self._check_order(order)
        n = self._max
        if n < 2:
            return False
        active = self._data[:n]
        differs = np.zeros(n - 1, dtype=bool)
        for name in order:
            differs |= active[name][1:] != active[name][:-1]
        keep = np.ones(n, dtype=bool)
        keep[1:] = differs
        kept = active[keep]
        self._data[:len(kept)] = kept
        self._max = len(kept)
        return self._max < n

    def find(self, values: tuple, order: Order) -> Tuple[bool, int]:
        """
        Binary search a sorted array.

        Returns (found, index) where index is the position of the match,
        or the position at which ``values`` would be inserted.
        """
        self._check_order(order)
        target = self._values_key(values, order)
        lo, hi = 0, self._max
        while lo < hi:
            mid = (lo + hi) // 2
            if self._key(mid, order) < target:
                lo = mid + 1
            else:
                hi = mid
        found = lo < self._max and self._key(lo, order) == target
        return found, lo

    def insert(self, values: tuple, order: Order) -> bool:
        """Insert into a sorted array unless an equal element exists."""
        found, index = self.find(values, order)
        if found:
            return False
        last = self._max
        self.grow_to(last)
        if index < last:
            self._data[index + 1:last + 1] = self._data[index:last].copy()
        self._data[index] = values
        return True

    def remove(self, values: tuple, order: Order) -> bool:
        """Remove the element equal to ``values`` from a sorted array."""
        found, index = self.find(values, order)
        if not found:
            return False
        self._data[index:self._max - 1] = self._data[index + 1:self._max].copy()
        self._max -= 1
        return True


__all__ = [
    'DynamicArray',
    'Order',
]
