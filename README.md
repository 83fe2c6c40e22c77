# lapjv

Solve the linear assignment problem for a square cost matrix using the
Jonker-Volgenant shortest augmenting path algorithm (Jonker & Volgenant,
*Computing* 38, 325-340, 1987). Pure Python, no dependencies.

## Installation

```
pip install lapjv
```

## Usage

A cost matrix is a square iterable of rows of numbers; every entry is
converted to `float`. `lapjv` returns two lists. The first gives the column
assigned to each row. The second gives the row assigned to each column.

```python
from lapjv.solver import lapjv, cost

matrix = [
    [1.0, 2.0, 3.0],
    [4.0, 5.0, 6.0],
    [7.0, 8.0, 9.0],
]
rows, cols = lapjv(matrix)
print(rows)                # [2, 0, 1]
print(cols)                # [1, 2, 0]
print(cost(matrix, rows))  # total cost of the assignment
```

`cost(costs, rows)` adds up `costs[i][rows[i]]` over every row `i`.

Entries may be `float("inf")` to forbid an assignment.

### Cancellation

A long-running solve can be stopped from another thread. `LapJV.cancellation()`
returns a `Cancellation` object; calling its `cancel()` method makes the solve
raise at its next check.

```python
import threading
from lapjv.solver import LapJV, LapJVError, ErrorKind

solver = LapJV(matrix)
stopper = solver.cancellation()
threading.Timer(1.0, stopper.cancel).start()
try:
    rows, cols = solver.solve()
except LapJVError as err:
    if err.kind is ErrorKind.CANCELLED:
        print("cancelled")
```

`Cancellation.is_cancelled()` reports whether `cancel()` has been called.

### Errors

`LapJVError` is raised in these cases:

- the matrix is not square (`ErrorKind.MSG`, message
  `"Input error: matrix is not square"`);
- the augmentation step cannot finish (`ErrorKind.MSG`);
- the solve is cancelled (`ErrorKind.CANCELLED`, message `"cancelled"`).

Its `kind` attribute tells which case it was and its `message` attribute holds
the text.

### Helpers

`lapjv.solver` also exposes two building blocks of the algorithm:

- `find_umins_plain(local_cost, v)` returns the minimum and second minimum of
  `local_cost[j] - v[j]` with their indices;
- `find_dense(dim, lo, d, collist)` moves the columns of minimal distance to
  `collist[lo:hi]` and returns `hi`.

### Limits

The package is a library only: it has no command-line tool, and it does not
handle rectangular or sparse matrices.

## Running the tests

```
pip install -e ".[test]"
pytest
```