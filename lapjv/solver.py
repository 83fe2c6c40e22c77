"""Jonker-Volgenant solver for the dense linear assignment problem.

The algorithm follows R. Jonker and A. Volgenant, "A Shortest Augmenting
Path Algorithm for Dense and Sparse Linear Assignment Problems",
Computing 38, 325-340 (1987).
"""

from __future__ import annotations

import enum
import functools
import logging
import operator
import sys
import threading
from collections.abc import Iterable, MutableSequence, Sequence

__all__ = [
    "ErrorKind",
    "LapJVError",
    "Cancellation",
    "LapJV",
    "lapjv",
    "cost",
    "find_dense",
    "find_umins_plain",
]

_log = logging.getLogger(__name__)

_MAX_VALUE = sys.float_info.max
_EPSILON = sys.float_info.epsilon


class ErrorKind(enum.Enum):
    """Kinds of failure reported by the solver."""

    MSG = "msg"
    CANCELLED = "cancelled"


class LapJVError(Exception):
    """Raised when the assignment problem cannot be solved."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        if kind is ErrorKind.CANCELLED:
            self.message = "cancelled"
        else:
            self.message = message or ""
        super().__init__(self.message)


class Cancellation:
    """Thread-safe flag that stops a running solve."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that the solve stop at its next check."""
        self._event.set()

    def is_cancelled(self) -> bool:
        """Return True once cancel() has been called."""
        return self._event.is_set()


class LapJV:
    """Solver for one square cost matrix."""

    def __init__(self, costs: Iterable[Iterable[float]]) -> None:
        self._costs: tuple[tuple[float, ...], ...] = tuple(
            tuple(float(value) for value in row) for row in costs
        )
        self._dim = len(self._costs)
        self._cancellation = Cancellation()
        self._free_rows: list[int] = []
        self._v: list[float] = []
        self._in_col: list[int | None] = []
        self._in_row: list[int] = []

    def cancellation(self) -> Cancellation:
        """Return the token that can cancel this solve from another thread."""
        return self._cancellation

    def solve(self) -> tuple[list[int], list[int]]:
        """Solve the problem.

        Returns ``(in_row, in_col)``: the column assigned to each row and the
        row assigned to each column.
        """
        if any(len(row) != self._dim for row in self._costs):
            raise LapJVError(ErrorKind.MSG, "Input error: matrix is not square")

        self._free_rows = []
        self._v = []
        self._in_col = []
        self._in_row = [0] * self._dim

        self._ccrrt_dense()

        for _ in range(2):
            if not self._free_rows:
                break
            self._check_cancelled()
            self._carr_dense()

        if self._free_rows:
            self._ca_dense()

        in_col = [row for row in self._in_col if row is not None]
        return list(self._in_row), in_col

    def _check_cancelled(self) -> None:
        if self._cancellation.is_cancelled():
            raise LapJVError(ErrorKind.CANCELLED)

    def _reduced_cost(self, i: int, j: int) -> float:
        return self._costs[i][j] - self._v[j]

    def _ccrrt_dense(self) -> None:
        """Column reduction and reduction transfer."""
        dim = self._dim
        unique = [True] * dim
        in_row_not_set = [True] * dim

        for j in range(dim):
            min_index, min_value = 0, self._costs[0][j]
            for i in range(1, dim):
                value = self._costs[i][j]
                if value < min_value:
                    min_index, min_value = i, value
            self._in_col.append(min_index)
            self._v.append(min_value)

        for j in reversed(range(dim)):
            i = self._in_col[j]
            if in_row_not_set[i]:
                self._in_row[i] = j
                in_row_not_set[i] = False
            else:
                unique[i] = False
                self._in_col[j] = None

        for i in range(dim):
            if in_row_not_set[i]:
                self._free_rows.append(i)
            elif unique[i]:
                j = self._in_row[i]
                minimum = _MAX_VALUE
                for j2 in range(dim):
                    if j2 == j:
                        continue
                    c = self._reduced_cost(i, j2)
                    if c < minimum:
                        minimum = c
                self._v[j] -= minimum

    def _carr_dense(self) -> None:
        """Augmenting row reduction."""
        _log.debug("carr_dense")
        dim = self._dim
        free_rows = self._free_rows
        v = self._v
        in_col = self._in_col
        current = 0
        new_free_rows = 0
        rr_cnt = 0
        num_free_rows = len(free_rows)

        while current < num_free_rows:
            rr_cnt += 1
            free_i = free_rows[current]
            current += 1
            v1, v2, j1, j2 = find_umins_plain(self._costs[free_i], v)

            i0 = in_col[j1]
            v1_new = v[j1] - (v2 - v1)
            v1_lowers = v1_new < v[j1]

            if rr_cnt < current * dim:
                if v1_lowers:
                    v[j1] = v1_new
                elif i0 is not None and j2 is not None:
                    j1 = j2
                    i0 = in_col[j1]
                if i0 is not None:
                    if v1_lowers:
                        current -= 1
                        free_rows[current] = i0
                    else:
                        free_rows[new_free_rows] = i0
                        new_free_rows += 1
            elif i0 is not None:
                free_rows[new_free_rows] = i0
                new_free_rows += 1
            self._in_row[free_i] = j1
            in_col[j1] = free_i

        del free_rows[new_free_rows:]

    def _ca_dense(self) -> None:
        """Augment along shortest paths from every remaining free row."""
        dim = self._dim
        pred = [0] * dim
        free_rows, self._free_rows = self._free_rows, []

        for free_row in free_rows:
            _log.debug("looking at free row %d", free_row)
            self._check_cancelled()

            i: int | None = None
            steps = 0
            j = self._find_path_dense(free_row, pred)
            while i != free_row:
                i = pred[j]
                self._in_col[j] = i
                j, self._in_row[i] = self._in_row[i], j
                steps += 1
                if steps > dim:
                    raise LapJVError(ErrorKind.MSG, "Error: ca_dense will not finish")

    def _find_path_dense(self, start_i: int, pred: list[int]) -> int:
        """Run one modified Dijkstra search; return the closest free column."""
        dim = self._dim
        collist = list(range(dim))
        d = [self._reduced_cost(start_i, j) for j in range(dim)]
        pred[:] = [start_i] * dim

        lo = hi = n_ready = 0
        final_j: int | None = None
        while final_j is None:
            if lo == hi:
                n_ready = lo
                hi = find_dense(dim, lo, d, collist)
                for j in collist[lo:hi]:
                    if self._in_col[j] is None:
                        final_j = j
            if final_j is None:
                final_j, lo, hi = self._scan_dense(lo, hi, d, collist, pred)

        mind = d[collist[lo]]
        for j in collist[:n_ready]:
            self._v[j] += d[j] - mind
        return final_j

    def _scan_dense(
        self,
        lo: int,
        hi: int,
        d: list[float],
        collist: list[int],
        pred: list[int],
    ) -> tuple[int | None, int, int]:
        """Relax the columns still to do from the columns ready to scan.

        The bounds come back unchanged when a free column is found.
        """
        start_lo, start_hi = lo, hi
        in_col = self._in_col
        while lo != hi:
            j = collist[lo]
            lo += 1
            i = in_col[j]
            mind = d[j]
            h = self._reduced_cost(i, j) - mind
            for k in range(hi, len(collist)):
                j = collist[k]
                cred_ij = self._reduced_cost(i, j) - h
                if cred_ij < d[j]:
                    d[j] = cred_ij
                    pred[j] = i
                    if abs(cred_ij - mind) < _EPSILON:
                        if in_col[j] is None:
                            return j, start_lo, start_hi
                        collist[k] = collist[hi]
                        collist[hi] = j
                        hi += 1
        return None, lo, hi


def lapjv(costs: Iterable[Iterable[float]]) -> tuple[list[int], list[int]]:
    """Solve the assignment problem for a square cost matrix."""
    return LapJV(costs).solve()


def cost(costs: Sequence[Sequence[float]], rows: Sequence[int]) -> float:
    """Total cost of the assignment giving column ``rows[i]`` to row ``i``."""
    return functools.reduce(
        operator.add,
        (costs[i][j] for i, j in enumerate(rows)),
        0.0,
    )


def find_dense(
    dim: int, lo: int, d: Sequence[float], collist: MutableSequence[int]
) -> int:
    """Gather columns of minimal distance at ``collist[lo:hi]``; return hi."""
    hi = lo + 1
    mind = d[collist[lo]]
    for k in range(hi, dim):
        j = collist[k]
        h = d[j]
        if h <= mind:
            if h < mind:
                hi = lo
                mind = h
            collist[k] = collist[hi]
            collist[hi] = j
            hi += 1
    return hi


def find_umins_plain(
    local_cost: Sequence[float], v: Sequence[float]
) -> tuple[float, float, int, int | None]:
    """Return (min, second min, min index, second min index) of reduced costs."""
    umin = local_cost[0] - v[0]
    usubmin = _MAX_VALUE
    j1 = 0
    j2: int | None = None
    for j in range(1, len(local_cost)):
        h = local_cost[j] - v[j]
        if h < usubmin:
            if h >= umin:
                usubmin = h
                j2 = j
            else:
                usubmin = umin
                umin = h
                j2 = j1
                j1 = j
    return umin, usubmin, j1, j2