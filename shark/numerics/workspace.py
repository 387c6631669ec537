"""Bounded scratch storage for adaptive quadrature.

A QuadratureWorkspace holds the subintervals of one integration call
together with their integral and error estimates. Storage for ``limit``
subintervals is allocated up front and reused across calls; ``clear()``
resets the contents without releasing it.

The subinterval with the largest error is tracked with a heap keyed on
(-error, insertion sequence), so equal errors are resolved in insertion
order.
"""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass

from shark.numerics.errors import InvalidConfigurationError, WorkspaceAllocationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subinterval:
    """One stored subinterval and its estimates."""

    left: float
    right: float
    integral: float
    error: float
    depth: int = 0


class QuadratureWorkspace:
    """Fixed-capacity store of subintervals for one integrator.

    Args:
        limit: Maximum number of subintervals held at once.

    Raises:
        InvalidConfigurationError: If limit is not a positive integer.
        WorkspaceAllocationError: If storage for limit subintervals cannot be allocated.
    """

    def __init__(self, limit: int):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidConfigurationError(f"workspace limit must be a positive integer, got {limit!r}")
        self._limit = limit
        try:
            self._left = [0.0] * limit
            self._right = [0.0] * limit
            self._integral = [0.0] * limit
            self._error = [0.0] * limit
            self._depth = [0] * limit
        except MemoryError as exc:
            raise WorkspaceAllocationError(f"cannot allocate workspace for {limit} intervals") from exc
        self._heap: list[tuple[float, int, int]] = []
        self._size = 0
        self._sequence = 0
        logger.debug("Allocated quadrature workspace with %d slots", limit)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def size(self) -> int:
        """Number of subintervals currently stored."""
        return self._size

    def is_full(self) -> bool:
        return self._size >= self._limit

    def clear(self) -> None:
        """Forget all stored subintervals; capacity is kept."""
        self._heap.clear()
        self._size = 0
        self._sequence = 0

    def initialise(self, a: float, b: float, integral: float, error: float) -> None:
        """Clear the workspace and store [a, b] as its only subinterval."""
        self.clear()
        self._store(0, Subinterval(a, b, integral, error, 0))
        self._size = 1

    def pop_max_error(self) -> int:
        """Remove the largest-error subinterval from selection and return its index.

        The subinterval stays stored until ``replace`` overwrites it.
        """
        if not self._heap:
            raise IndexError("pop from empty quadrature workspace")
        _, _, index = heapq.heappop(self._heap)
        return index

    def replace(self, index: int, left: Subinterval, right: Subinterval) -> None:
        """Replace the subinterval at index by its two children.

        The left child takes over the parent's slot and the right child is
        appended, so the stored count grows by one.
        """
        if self.is_full():
            raise IndexError(f"quadrature workspace is full ({self._limit} intervals)")
        self._store(index, left)
        self._store(self._size, right)
        self._size += 1

    def __getitem__(self, index: int) -> Subinterval:
        if not 0 <= index < self._size:
            raise IndexError(f"subinterval index {index} out of range")
        return Subinterval(
            self._left[index],
            self._right[index],
            self._integral[index],
            self._error[index],
            self._depth[index],
        )

    def __len__(self) -> int:
        return self._size

    def totals(self) -> tuple[float, float]:
        """Compensated sums of the stored integral and error estimates."""
        n = self._size
        return math.fsum(self._integral[:n]), math.fsum(self._error[:n])

    def intervals(self) -> list[Subinterval]:
        """Snapshot of the stored subintervals ordered by left endpoint."""
        return sorted((self[i] for i in range(self._size)), key=lambda s: s.left)

    def _store(self, index: int, interval: Subinterval) -> None:
        self._left[index] = interval.left
        self._right[index] = interval.right
        self._integral[index] = interval.integral
        self._error[index] = interval.error
        self._depth[index] = interval.depth
        heapq.heappush(self._heap, (-interval.error, self._sequence, index))
        self._sequence += 1
