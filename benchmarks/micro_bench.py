"""Micro benchmarks for individual `Tensor` operations.

This harness relies on *torch.utils.benchmark.Timer* which gives
statistically sound timings (median, inter-quartile range).  The same
operations are exercised under *pytest-benchmark* by
`tests/test_benchmark_micro.py`.

Run standalone:

    $ python benchmarks/micro_bench.py --side 64 --fill 0.25
"""

from __future__ import annotations

from dataclasses import dataclass
from operator import add
from typing import List
import random

import torch
import tyro  # type: ignore
from torch.utils.benchmark import Timer

from tensormap import Index, Tensor, to_sparse_coo, to_torch


# -----------------------------------------------------------------------------
# Benchmark entries
# -----------------------------------------------------------------------------

@dataclass
class Entry:
    name: str
    stmt: str


def _setup(side: int, fill: float, seed: int) -> dict[str, object]:
    """Return a dict to be injected into Timer globals."""
    rng = random.Random(seed)
    sparse = Tensor.generate(lambda index: rng.random(), side, side, side)
    for index in sparse.keys():
        if rng.random() > fill:
            sparse.remove(index)
    dense = Tensor.fill(1.0, side, side)

    return dict(
        Tensor=Tensor, Index=Index, add=add, to_torch=to_torch, to_sparse_coo=to_sparse_coo,
        sparse=sparse, dense=dense, side=side,
    )


BENCHES: List[Entry] = [
    Entry("generate", "Tensor.generate(lambda i: 0, side, side)"),
    Entry("indices", "sparse.indices()"),
    Entry("transpose", "sparse.transpose()"),
    Entry("slice", "sparse.slice({2: 0})"),
    Entry("reduce", "sparse.reduce(0.0, add, 0)"),
    Entry("piecewise", "dense.piecewise(add, dense)"),
    Entry("to_string", "dense.to_string()"),
    Entry("to_torch", "to_torch(sparse)"),
    Entry("to_sparse_coo", "to_sparse_coo(sparse)"),
]


@dataclass
class Config(tyro.conf.FlagConversionOff):  # type: ignore[misc]
    side: int = 32  # edge length of the cubic sample tensor
    fill: float = 0.1  # fraction of stored entries
    seed: int = 0
    repeats: int = 20


def main(cfg: Config) -> None:
    print(f"[micro] side={cfg.side}  fill={cfg.fill}  repeats={cfg.repeats}\n")

    setup_globals = _setup(cfg.side, cfg.fill, cfg.seed)

    rows: List[tuple[str, float]] = []

    for entry in BENCHES:
        t = Timer(stmt=entry.stmt, globals=setup_globals, num_threads=torch.get_num_threads())
        median = t.timeit(cfg.repeats).median
        rows.append((entry.name, median))

    name_w = max(len(r[0]) for r in rows)
    print("Operation".ljust(name_w), "|  median time (s)")
    print("-" * (name_w + 20))
    for name, med in rows:
        print(name.ljust(name_w), f"|  {med:9.6f}")


if __name__ == "__main__":
    tyro.cli(main)
