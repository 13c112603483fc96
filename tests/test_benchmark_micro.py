"""Micro-benchmarks for the hot paths of the sparse tensor engine.

These tests rely on the ``pytest-benchmark`` plugin and are deliberately light
so they do not slow down the regular test run.  Run them with

```
pytest tests/test_benchmark_micro.py --benchmark-only
```

to get a summarised table.  Timings are informative only; the assertions
merely check that each benchmarked call produced a sane result.
"""

from __future__ import annotations

from operator import add

import pytest
pytest.importorskip("pytest_benchmark")

from tensormap import Tensor, to_torch

SIDE = 16  # keep small for CI


def _sample(side: int = SIDE) -> Tensor:
    """Checkerboard-sparse cube: roughly half the cells are holes."""
    return Tensor.generate(lambda index: sum(index.coordinates), side, side, side).compute_and_update_indices(
        lambda index, value: (index, value) if value % 2 == 0 else None
    )


def test_indices(benchmark):
    tensor = _sample()
    result = benchmark(tensor.indices)
    assert len(result) == SIDE ** 3


def test_reduce_last_axis(benchmark):
    tensor = _sample()
    result = benchmark(lambda: tensor.reduce(0, add, 2))
    assert result.order == 2


def test_transpose(benchmark):
    tensor = _sample()
    result = benchmark(tensor.transpose)
    assert len(result) == len(tensor)


def test_dense_export(benchmark):
    tensor = _sample()
    result = benchmark(lambda: to_torch(tensor))
    assert tuple(result.shape) == (SIDE, SIDE, SIDE)
