#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Lazy, restartable sequences over matrix cells

A stream is described by a length and a function that maps a position to a
value. Nothing is materialized until the stream is iterated, and skipping
or counting is plain index arithmetic. Every call of iter() starts over,
so a stream can be consumed any number of times.

The streams read the backing array of their matrix when they are iterated.
Mutating the matrix while a stream over it is in use gives undefined
results.
"""

from collections.abc import Sequence
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from .errors import MatrixIndexError
from .points import Point
from .shapes import check_not_negative

T = TypeVar('T')


class IndexedStream(Generic[T]):
    """Finite sequence of values produced by getter(k) for k in [start, stop)

    Args:
        length (int):
            Number of positions the getter accepts.

        getter (function):
            Maps a position in [0, length) to a value.
    """

    __slots__ = ('_getter', '_start', '_stop')

    def __init__(self, length: int, getter: Callable[[int], T], start: int = 0):
        self._getter = getter
        self._stop = max(0, length)
        self._start = min(max(0, start), self._stop)

    @classmethod
    def empty(cls) -> 'IndexedStream':
        return cls(0, _no_values)

    def __iter__(self) -> Iterator[T]:
        getter = self._getter
        for k in range(self._start, self._stop):
            yield getter(k)

    def __len__(self) -> int:
        return self._stop - self._start

    def count(self) -> int:
        """Number of remaining values, without iterating"""
        return self._stop - self._start

    def skip(self, n: int) -> 'IndexedStream[T]':
        """Stream without the first n values"""
        check_not_negative(n, 'n')
        return IndexedStream(self._stop, self._getter, self._start + n)

    def limit(self, n: int) -> 'IndexedStream[T]':
        """Stream of at most the first n values"""
        check_not_negative(n, 'n')
        start = self._start
        getter = self._getter
        return IndexedStream(min(n, self.count()), lambda k: getter(start + k))

    def first(self) -> Optional[T]:
        return self._getter(self._start) if self._start < self._stop else None

    def to_list(self) -> List[T]:
        return list(self)

    def __repr__(self):
        return f"{type(self).__name__}(count={self.count()})"


def _no_values(k: int):
    raise MatrixIndexError(f"Empty stream has no value at position {k}")


class RowView(Sequence):
    """Read-only view on one row of a matrix

    Doesn't copy the row. The view reflects later changes of the row and is
    only meaningful as long as the matrix keeps its shape.
    """

    __slots__ = ('_row',)

    def __init__(self, row: list):
        self._row = row

    def __getitem__(self, index):
        return self._row[index]

    def __len__(self) -> int:
        return len(self._row)

    def __eq__(self, other):
        if isinstance(other, RowView):
            return self._row == other._row
        if isinstance(other, (list, tuple)):
            return list(self._row) == list(other)
        return NotImplemented

    def __repr__(self):
        return f"RowView({self._row!r})"


# Stream builders. They take the backing array a with rows x cols cells and
# expect ranges that have already been validated.


def stream_lu2rd(a: List[list], n: int) -> IndexedStream:
    return IndexedStream(n, lambda k: a[k][k])


def stream_ru2ld(a: List[list], n: int) -> IndexedStream:
    return IndexedStream(n, lambda k: a[k][n - 1 - k])


def stream_h(a: List[list], cols: int, from_row: int, to_row: int) -> IndexedStream:
    if cols == 0:
        return IndexedStream.empty()
    return IndexedStream((to_row - from_row) * cols, lambda k: a[from_row + k // cols][k % cols])


def stream_v(a: List[list], rows: int, from_col: int, to_col: int) -> IndexedStream:
    if rows == 0:
        return IndexedStream.empty()
    return IndexedStream((to_col - from_col) * rows, lambda k: a[k % rows][from_col + k // rows])


def stream_r(a: List[list], cols: int, from_row: int, to_row: int) -> IndexedStream:
    def row_stream(k: int) -> IndexedStream:
        row = a[from_row + k]
        return IndexedStream(cols, row.__getitem__)

    return IndexedStream(to_row - from_row, row_stream)


def stream_c(a: List[list], rows: int, from_col: int, to_col: int) -> IndexedStream:
    def column_stream(k: int) -> IndexedStream:
        j = from_col + k
        return IndexedStream(rows, lambda i: a[i][j])

    return IndexedStream(to_col - from_col, column_stream)


# Point streams over the index grid of a rows x cols matrix


def points_lu2rd(n: int) -> IndexedStream:
    return IndexedStream(n, lambda k: Point(k, k))


def points_ru2ld(n: int) -> IndexedStream:
    return IndexedStream(n, lambda k: Point(k, n - 1 - k))


def points_h(cols: int, from_row: int, to_row: int) -> IndexedStream:
    if cols == 0:
        return IndexedStream.empty()
    return IndexedStream((to_row - from_row) * cols, lambda k: Point(from_row + k // cols, k % cols))


def points_v(rows: int, from_col: int, to_col: int) -> IndexedStream:
    if rows == 0:
        return IndexedStream.empty()
    return IndexedStream((to_col - from_col) * rows, lambda k: Point(k % rows, from_col + k // rows))


def points_r(cols: int, from_row: int, to_row: int) -> IndexedStream:
    return IndexedStream(to_row - from_row, lambda k: IndexedStream(cols, lambda j, i=from_row + k: Point(i, j)))


def points_c(rows: int, from_col: int, to_col: int) -> IndexedStream:
    return IndexedStream(to_col - from_col, lambda k: IndexedStream(rows, lambda i, j=from_col + k: Point(i, j)))


def values_of(stream: IndexedStream) -> List[Any]:
    """Materialize a stream of streams into a list of lists"""
    return [inner.to_list() for inner in stream]
