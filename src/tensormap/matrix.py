"""Order-2 view addressed as ``(x, y)``: axis 0 is the column, axis 1 the row.

Row and column insertion shift every entry at or past the target by one and
then write the new line.  The shifted map is assembled before the wrapped
tensor is touched, so a rejected insertion leaves the matrix unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Sequence, TypeVar

from .errors import InvalidArgumentError, OutOfBoundsError
from .index import Index
from .tensor import Tensor
from .vector import Vector
from .view import TensorView

__all__ = ["Matrix"]

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Matrix(TensorView[T]):
    ORDER: ClassVar[int] = 2

    @classmethod
    def of(cls, rows: Sequence[Sequence[T]]) -> "Matrix[T]":
        """Build from row-major nested sequences: ``rows[y][x]`` lands at ``(x, y)``.

        Rows may have different lengths; the shorter ones leave holes.
        """
        return cls(Tensor.from_mapping({
            Index((x, y)): value
            for y, row in enumerate(rows)
            for x, value in enumerate(row)
        }))

    @classmethod
    def empty(cls) -> "Matrix[Any]":
        return cls(Tensor.empty())

    @classmethod
    def fill(cls, value: T, width: int, height: int) -> "Matrix[T]":
        if width < 0 or height < 0:
            raise InvalidArgumentError("Width and height must both be positive")
        return cls(Tensor.fill(value, width, height))

    @property
    def width(self) -> int:
        return self.tensor.size(0)

    @property
    def height(self) -> int:
        return self.tensor.size(1)

    def get_vector(self, axis: int, index: int) -> list[T]:
        """Stored values whose coordinate on *axis* equals *index*.

        ``get_vector(1, y)`` is row ``y`` ordered by ``x``, ``get_vector(0, x)``
        column ``x`` ordered by ``y``.
        """
        if self.is_empty() or not 0 <= axis < self.ORDER:
            raise OutOfBoundsError(f"Axis [{axis}] exceeds matrix order")
        if not 0 <= index < self.tensor.size(axis):
            raise OutOfBoundsError(f"Index [{index}] exceeds matrix size in axis [{axis}]")
        return [value for key, value in self.tensor.items() if key.get(axis) == index]

    def get_row(self, y: int) -> list[T]:
        return self.get_vector(1, y)

    def get_column(self, x: int) -> list[T]:
        return self.get_vector(0, x)

    # ------------------------------------------------------------------
    # Row / column insertion
    # ------------------------------------------------------------------

    def _insert(self, axis: int, position: int, line: Sequence[T]):
        if position < 0:
            raise InvalidArgumentError(f"Insert position [{position}] cannot be negative")

        def place(offset: int) -> Index:
            return Index((position, offset) if axis == 0 else (offset, position))

        def bump(index: Index) -> Index:
            if index.get(axis) < position:
                return index
            return Index(
                coordinate + 1 if current == axis else coordinate
                for current, coordinate in enumerate(index.coordinates)
            )

        updates = {place(offset): value for offset, value in enumerate(line)}
        self.tensor._reindex(bump, updates)

    def insert_row(self, row: Sequence[T], y: int):
        """Insert *row* at row ``y``; rows at or below ``y`` move down by one."""
        self._insert(1, y, row)

    def insert_column(self, column: Sequence[T], x: int):
        """Insert *column* at column ``x``; columns at or right of ``x`` move by one."""
        self._insert(0, x, column)

    def append_row(self, row: Sequence[T]):
        self.insert_row(row, self.height)

    def append_column(self, column: Sequence[T]):
        self.insert_column(column, self.width)

    # ------------------------------------------------------------------
    # Order-changing transforms & presentation
    # ------------------------------------------------------------------

    def reduce(
        self,
        identity: S,
        accumulator: Callable[[S, T], S],
        axis: int,
        combiner: Callable[[S, S], S] | None = None,
    ) -> Vector[S]:
        return Vector(self.tensor.reduce(identity, accumulator, axis, combiner))

    def extrude(self, size: int) -> Tensor[T]:
        return self.tensor.extrude(size)

    def to_nested_list(self, default: T | None = None) -> list[list[T | None]]:
        """Dense row-major lists; holes become *default*."""
        return [
            [self.tensor.get_or_default(default, x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    def to_formatted_string(self, default: str = " ") -> str:
        """Dense grid: tab separated cells, one row per line, *default* for holes."""
        return self.tensor.format("", "", "\t", "\n", default, True)
