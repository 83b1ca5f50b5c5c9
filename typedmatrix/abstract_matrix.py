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
"""Dense two-dimensional matrix with typed elements

AbstractMatrix holds every algorithm of the package once. The element type
specific parts (zero value, coercion, arithmetic) are delegated to the
ElementOperations object of the concrete subclass.

Storage is a row-major list of lists that is exclusively owned by the
matrix. Transformations always return a new matrix with its own rows;
only the methods named set*, update*, replace_if*, fill*, reverse* and
flat_op modify a matrix in place.
"""

from abc import ABC
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

import numpy as np
from scipy import sparse

from .elements import ElementOperations
from .errors import ShapeError
from .names import BY_ROW
from .points import Point
from .pool import DEFAULT_POLICY, ParallelismPolicy
from .shapes import (check_rectangular, check_square, check_same_shape, check_range, check_index,
                     check_not_negative, check_positive)
from . import streams

T = TypeVar('T')
U = TypeVar('U')


class AbstractMatrix(ABC, Generic[T]):
    """Dense matrix with rows x cols cells of one element type

    Example:
        m = IntMatrix.of([[1, 2], [3, 4]])
        m.rotate90()  # [[3, 1], [4, 2]]

    Args:
        a (list of lists):
            Rectangular array of cell values. The rows are copied and every
            value is checked against the element type. Arrays without rows
            or without columns produce an empty matrix.

        policy (optional (ParallelismPolicy)): (Default: None)
            Decides when bulk operations are split up into parallel tasks.
            Matrices derived from this one inherit the policy.
    """

    element_operations: ElementOperations = ElementOperations.instance()

    def __init__(self, a: Optional[Sequence[Sequence[T]]] = None, policy: Optional[ParallelismPolicy] = None):
        rows = [] if a is None else [list(row) for row in a]
        check_rectangular(rows)
        coerce = self.element_operations.coerce
        self._init_owned([[coerce(v) for v in row] for row in rows], policy)

    def _init_owned(self, a: List[list], policy: Optional[ParallelismPolicy]) -> None:
        if len(a) == 0 or len(a[0]) == 0:
            a = []
        self._a = a
        self.rows = len(a)
        self.cols = len(a[0]) if a else 0
        self.count = self.rows * self.cols
        self.policy = DEFAULT_POLICY if policy is None else policy

    @classmethod
    def _wrap(cls, a: List[list], policy: Optional[ParallelismPolicy] = None):
        """Take ownership of a freshly built, rectangular and coerced array"""
        matrix = cls.__new__(cls)
        matrix._init_owned(a, policy)
        return matrix

    def _new(self, a: List[list]):
        return type(self)._wrap(a, self.policy)

    def _check_compatible(self, other: 'AbstractMatrix') -> None:
        if not isinstance(other, AbstractMatrix) or other.element_operations is not self.element_operations:
            raise TypeError(f"Expected a matrix of type {type(self).__name__}, got {type(other).__name__}")

    # ---------------------------------------------------------------- factories

    @classmethod
    def of(cls, a: Optional[Sequence[Sequence[T]]], policy: Optional[ParallelismPolicy] = None):
        return cls(a, policy)

    @classmethod
    def empty(cls):
        return cls._wrap([])

    @classmethod
    def random(cls, length: int, seed: Optional[int] = None):
        """Matrix with one row of length random values"""
        check_not_negative(length, 'length')
        return cls._wrap([cls.element_operations.random_values(length, seed)])

    @classmethod
    def repeat(cls, value: T, length: int):
        """Matrix with one row holding value length times"""
        check_not_negative(length, 'length')
        return cls._wrap([[cls.element_operations.coerce(value)] * length])

    @classmethod
    def diagonal_lu2rd(cls, values: Sequence[T]):
        return cls.diagonal(values, None)

    @classmethod
    def diagonal_ru2ld(cls, values: Sequence[T]):
        return cls.diagonal(None, values)

    @classmethod
    def diagonal(cls, lu2rd: Optional[Sequence[T]] = None, ru2ld: Optional[Sequence[T]] = None):
        """Square matrix with the given diagonals and zeros elsewhere

        If both diagonals are given, they must have the same length. On a
        shared center cell, the value of ru2ld wins.
        """
        n_lu = 0 if lu2rd is None else len(lu2rd)
        n_ru = 0 if ru2ld is None else len(ru2ld)
        if n_lu and n_ru and n_lu != n_ru:
            raise ShapeError(f"The length of 'lu2rd' ({n_lu}) and 'ru2ld' ({n_ru}) must be same")
        n = max(n_lu, n_ru)
        ops = cls.element_operations
        zero = ops.zero()
        c = [[zero] * n for _ in range(n)]
        if n_lu:
            for i in range(n):
                c[i][i] = ops.coerce(lu2rd[i])
        if n_ru:
            for i in range(n):
                c[i][n - 1 - i] = ops.coerce(ru2ld[i])
        return cls._wrap(c)

    @classmethod
    def from_numpy(cls, array: np.ndarray, policy: Optional[ParallelismPolicy] = None):
        """Create a matrix from a two-dimensional numpy array"""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ShapeError(f"Expected a two-dimensional array, got {array.ndim} dimension(s)")
        return cls(array.tolist(), policy)

    @classmethod
    def from_sparse(cls, sparse_matrix, policy: Optional[ParallelismPolicy] = None):
        """Create a dense matrix from a scipy sparse matrix

        Missing entries become the zero value of the element type.
        """
        if not sparse.issparse(sparse_matrix):
            raise TypeError(f"Expected a scipy sparse matrix, got {type(sparse_matrix).__name__}")
        coo = sparse.coo_matrix(sparse_matrix, copy=True)
        coo.sum_duplicates()
        rows, cols = coo.shape
        ops = cls.element_operations
        zero = ops.zero()
        c = [[zero] * cols for _ in range(rows)]
        for i, j, v in zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist()):
            c[i][j] = ops.coerce(v)
        return cls._wrap(c, policy)

    def with_policy(self, policy: ParallelismPolicy):
        """Copy of this matrix that uses another parallelism policy"""
        return type(self)._wrap([list(row) for row in self._a], policy)

    # ---------------------------------------------------------------- shape

    def is_empty(self) -> bool:
        return self.count == 0

    def is_same_shape(self, other: 'AbstractMatrix') -> bool:
        return self.rows == other.rows and self.cols == other.cols

    def array(self) -> List[List[T]]:
        """Deep copy of the backing array"""
        return [list(row) for row in self._a]

    # ---------------------------------------------------------------- cell access

    def get(self, i, j: Optional[int] = None) -> T:
        """Value at (i, j). Also accepts a Point as the only argument."""
        if j is None:
            i, j = i
        check_index(i, self.rows, 'row index')
        check_index(j, self.cols, 'column index')
        return self._a[i][j]

    def set(self, *args) -> None:
        """set(i, j, value) or set(point, value)"""
        if len(args) == 3:
            i, j, value = args
        elif len(args) == 2:
            (i, j), value = args
        else:
            raise TypeError(f"set() expects (i, j, value) or (point, value), got {len(args)} arguments")
        check_index(i, self.rows, 'row index')
        check_index(j, self.cols, 'column index')
        self._a[i][j] = self.element_operations.coerce(value)

    def _check_cell(self, i: int, j: int) -> None:
        check_index(i, self.rows, 'row index')
        check_index(j, self.cols, 'column index')

    def up_of(self, i: int, j: int) -> Optional[T]:
        """Value above (i, j) or None at the upper edge"""
        self._check_cell(i, j)
        return None if i == 0 else self._a[i - 1][j]

    def down_of(self, i: int, j: int) -> Optional[T]:
        self._check_cell(i, j)
        return None if i == self.rows - 1 else self._a[i + 1][j]

    def left_of(self, i: int, j: int) -> Optional[T]:
        self._check_cell(i, j)
        return None if j == 0 else self._a[i][j - 1]

    def right_of(self, i: int, j: int) -> Optional[T]:
        self._check_cell(i, j)
        return None if j == self.cols - 1 else self._a[i][j + 1]

    def adjacent4_points(self, i: int, j: int) -> List[Optional[Point]]:
        """The neighbors of (i, j) in the order up, right, down, left

        Neighbors outside of the matrix are None, so the position in the list
        always identifies the direction.
        """
        self._check_cell(i, j)
        up = Point(i - 1, j) if i > 0 else None
        right = Point(i, j + 1) if j < self.cols - 1 else None
        down = Point(i + 1, j) if i < self.rows - 1 else None
        left = Point(i, j - 1) if j > 0 else None
        return [up, right, down, left]

    def adjacent8_points(self, i: int, j: int) -> List[Optional[Point]]:
        """The neighbors of (i, j) in the order left-up, up, right-up, right, right-down, down, left-down, left

        Neighbors outside of the matrix are None.
        """
        self._check_cell(i, j)
        up, right, down, left = self.adjacent4_points(i, j)
        has_up, has_down = i > 0, i < self.rows - 1
        has_left, has_right = j > 0, j < self.cols - 1
        left_up = Point(i - 1, j - 1) if has_up and has_left else None
        right_up = Point(i - 1, j + 1) if has_up and has_right else None
        right_down = Point(i + 1, j + 1) if has_down and has_right else None
        left_down = Point(i + 1, j - 1) if has_down and has_left else None
        return [left_up, up, right_up, right, right_down, down, left_down, left]

    # ---------------------------------------------------------------- rows and columns

    def row(self, i: int) -> List[T]:
        """Copy of row i"""
        check_index(i, self.rows, 'row index')
        return list(self._a[i])

    def row_view(self, i: int) -> streams.RowView:
        """Read-only view on row i without copying it"""
        check_index(i, self.rows, 'row index')
        return streams.RowView(self._a[i])

    def column(self, j: int) -> List[T]:
        """Copy of column j"""
        check_index(j, self.cols, 'column index')
        return [row[j] for row in self._a]

    def set_row(self, i: int, values: Sequence[T]) -> None:
        check_index(i, self.rows, 'row index')
        if len(values) != self.cols:
            raise ShapeError(f"The size of the specified row ({len(values)}) doesn't match the number of columns ({self.cols})")
        coerce = self.element_operations.coerce
        self._a[i][:] = [coerce(v) for v in values]

    def set_column(self, j: int, values: Sequence[T]) -> None:
        check_index(j, self.cols, 'column index')
        if len(values) != self.rows:
            raise ShapeError(f"The size of the specified column ({len(values)}) doesn't match the number of rows ({self.rows})")
        coerce = self.element_operations.coerce
        coerced = [coerce(v) for v in values]
        for row, v in zip(self._a, coerced):
            row[j] = v

    def update_row(self, i: int, func: Callable[[T], T]) -> None:
        check_index(i, self.rows, 'row index')
        coerce = self.element_operations.coerce
        row = self._a[i]
        row[:] = [coerce(func(v)) for v in row]

    def update_column(self, j: int, func: Callable[[T], T]) -> None:
        check_index(j, self.cols, 'column index')
        coerce = self.element_operations.coerce
        coerced = [coerce(func(row[j])) for row in self._a]
        for row, v in zip(self._a, coerced):
            row[j] = v

    # ---------------------------------------------------------------- diagonals

    def get_lu2rd(self) -> List[T]:
        """Values on the diagonal from the left upper to the right lower corner"""
        check_square(self.rows, self.cols)
        return [self._a[i][i] for i in range(self.rows)]

    def set_lu2rd(self, diagonal: Sequence[T]) -> None:
        check_square(self.rows, self.cols)
        if len(diagonal) < self.rows:
            raise ShapeError(f"The length of the specified diagonal ({len(diagonal)}) is less than rows={self.rows}")
        coerce = self.element_operations.coerce
        coerced = [coerce(diagonal[i]) for i in range(self.rows)]
        for i in range(self.rows):
            self._a[i][i] = coerced[i]

    def update_lu2rd(self, func: Callable[[T], T]) -> None:
        check_square(self.rows, self.cols)
        coerce = self.element_operations.coerce
        coerced = [coerce(func(self._a[i][i])) for i in range(self.rows)]
        for i in range(self.rows):
            self._a[i][i] = coerced[i]

    def get_ru2ld(self) -> List[T]:
        """Values on the diagonal from the right upper to the left lower corner"""
        check_square(self.rows, self.cols)
        return [self._a[i][self.cols - 1 - i] for i in range(self.rows)]

    def set_ru2ld(self, diagonal: Sequence[T]) -> None:
        check_square(self.rows, self.cols)
        if len(diagonal) < self.rows:
            raise ShapeError(f"The length of the specified diagonal ({len(diagonal)}) is less than rows={self.rows}")
        coerce = self.element_operations.coerce
        coerced = [coerce(diagonal[i]) for i in range(self.rows)]
        for i in range(self.rows):
            self._a[i][self.cols - 1 - i] = coerced[i]

    def update_ru2ld(self, func: Callable[[T], T]) -> None:
        check_square(self.rows, self.cols)
        coerce = self.element_operations.coerce
        last = self.cols - 1
        coerced = [coerce(func(self._a[i][last - i])) for i in range(self.rows)]
        for i in range(self.rows):
            self._a[i][last - i] = coerced[i]

    # ---------------------------------------------------------------- bulk operations

    def _fill_cells(self, out: List[list], cell: Callable[[int, int], Any]) -> None:
        """Set out[i][j] = cell(i, j) for every cell of this matrix's shape

        Consults the parallelism policy once. Each task owns one row or one
        column of out, so tasks never write the same slot.
        """
        rows, cols = self.rows, self.cols
        policy = self.policy
        parallel = policy.should_parallelize(self.count)
        if policy.choose_outer_dimension(rows, cols) == BY_ROW:

            def task(i):
                out_row = out[i]
                for j in range(cols):
                    out_row[j] = cell(i, j)

            policy.execute(rows, task, parallel)
        else:

            def task(j):
                for i in range(rows):
                    out[i][j] = cell(i, j)

            policy.execute(cols, task, parallel)

    def _blank(self, rows: int, cols: int) -> List[list]:
        return [[None] * cols for _ in range(rows)]

    def _update_cells(self, cell: Callable[[int, int], Any]) -> None:
        """Compute all new values into a buffer, then write them back

        If cell raises for any (i, j), the matrix keeps all of its old values.
        """
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, cell)
        for row, new_row in zip(self._a, out):
            row[:] = new_row

    def update_all(self, func: Callable[[T], T]) -> None:
        """Replace every value v by func(v), in place"""
        a = self._a
        coerce = self.element_operations.coerce
        self._update_cells(lambda i, j: coerce(func(a[i][j])))

    def update_all_by_point(self, func: Callable[[int, int], T]) -> None:
        """Replace the value at every (i, j) by func(i, j), in place"""
        coerce = self.element_operations.coerce
        self._update_cells(lambda i, j: coerce(func(i, j)))

    def replace_if(self, predicate: Callable[[T], bool], new_value: T) -> None:
        a = self._a
        new_value = self.element_operations.coerce(new_value)
        self._update_cells(lambda i, j: new_value if predicate(a[i][j]) else a[i][j])

    def replace_if_by_point(self, predicate: Callable[[int, int], bool], new_value: T) -> None:
        a = self._a
        new_value = self.element_operations.coerce(new_value)
        self._update_cells(lambda i, j: new_value if predicate(i, j) else a[i][j])

    def map(self, func: Callable[[T], T]):
        """New matrix of the same type with func applied to every value"""
        a = self._a
        coerce = self.element_operations.coerce
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: coerce(func(a[i][j])))
        return self._new(out)

    def map_to_obj(self, func: Callable[[T], U], cls: Optional[type] = None) -> 'AbstractMatrix[U]':
        """New matrix of type cls (default: the object Matrix) with func applied to every value"""
        if cls is None:
            from .matrix import Matrix
            cls = Matrix
        a = self._a
        coerce = cls.element_operations.coerce
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: coerce(func(a[i][j])))
        return cls._wrap(out, self.policy)

    def fill(self, value: T) -> None:
        value = self.element_operations.coerce(value)
        for row in self._a:
            row[:] = [value] * self.cols

    def fill_block(self, block: Sequence[Sequence[T]], from_row: int = 0, from_col: int = 0) -> None:
        """Copy block into this matrix with its upper left corner at (from_row, from_col)

        Parts of block that would fall outside of the matrix are silently
        cut off.
        """
        check_range(from_row, self.rows, self.rows)
        check_range(from_col, self.cols, self.cols)
        coerce = self.element_operations.coerce
        patch = []
        for i in range(min(self.rows - from_row, len(block))):
            n = min(len(block[i]), self.cols - from_col)
            patch.append([coerce(block[i][k]) for k in range(n)])
        for i, values in enumerate(patch):
            self._a[from_row + i][from_col:from_col + len(values)] = values

    def flat_op(self, op: Callable[[List[T]], Any]) -> None:
        """Flatten, call op on the flat list and write the values back

        Example:
            m.flat_op(list.sort)  # sorts all values row-major
        """
        values = self.flatten()
        op(values)
        if len(values) != self.count:
            raise ShapeError(f"The operation changed the number of values from {self.count} to {len(values)}")
        coerce = self.element_operations.coerce
        coerced = [coerce(v) for v in values]
        cols = self.cols
        for i, row in enumerate(self._a):
            row[:] = coerced[i * cols:(i + 1) * cols]

    def for_each(self, action: Callable[[int, int], Any]) -> None:
        """Call action(i, j) for every cell, row by row"""
        for i in range(self.rows):
            for j in range(self.cols):
                action(i, j)

    def for_each_value(self, action: Callable[[T], Any], from_row: int = 0, to_row: Optional[int] = None,
                       from_col: int = 0, to_col: Optional[int] = None) -> None:
        to_row = self.rows if to_row is None else to_row
        to_col = self.cols if to_col is None else to_col
        check_range(from_row, to_row, self.rows)
        check_range(from_col, to_col, self.cols)
        for i in range(from_row, to_row):
            row = self._a[i]
            for j in range(from_col, to_col):
                action(row[j])

    # ---------------------------------------------------------------- copies and padding

    def copy(self, from_row: int = 0, to_row: Optional[int] = None, from_col: int = 0, to_col: Optional[int] = None):
        """Deep copy of the sub-rectangle [from_row, to_row) x [from_col, to_col)"""
        to_row = self.rows if to_row is None else to_row
        to_col = self.cols if to_col is None else to_col
        check_range(from_row, to_row, self.rows)
        check_range(from_col, to_col, self.cols)
        return self._new([self._a[i][from_col:to_col] for i in range(from_row, to_row)])

    def extend(self, new_rows: int, new_cols: int, default: Optional[T] = None):
        """Matrix of new_rows x new_cols with this matrix in its upper left corner

        New cells get default (the zero value if not given). If the matrix
        grows in neither dimension, this is a copy of the upper left part.
        """
        check_not_negative(new_rows, 'new_rows')
        check_not_negative(new_cols, 'new_cols')
        if new_rows <= self.rows and new_cols <= self.cols:
            return self.copy(0, new_rows, 0, new_cols)
        ops = self.element_operations
        fill = ops.zero() if default is None else ops.coerce(default)
        pad = max(0, new_cols - self.cols)
        b = []
        for i in range(new_rows):
            if i < self.rows:
                b.append(self._a[i][:new_cols] + [fill] * pad)
            else:
                b.append([fill] * new_cols)
        return self._new(b)

    def extend_sides(self, to_up: int, to_down: int, to_left: int, to_right: int, default: Optional[T] = None):
        """Pad the matrix on all four sides

        The current content ends up at offset (to_up, to_left).
        """
        check_not_negative(to_up, 'to_up')
        check_not_negative(to_down, 'to_down')
        check_not_negative(to_left, 'to_left')
        check_not_negative(to_right, 'to_right')
        if to_up == 0 and to_down == 0 and to_left == 0 and to_right == 0:
            return self.copy()
        ops = self.element_operations
        fill = ops.zero() if default is None else ops.coerce(default)
        new_cols = to_left + self.cols + to_right
        b = [[fill] * new_cols for _ in range(to_up)]
        for row in self._a:
            b.append([fill] * to_left + row + [fill] * to_right)
        b.extend([fill] * new_cols for _ in range(to_down))
        return self._new(b)

    # ---------------------------------------------------------------- mirroring and rotation

    def reverse_h(self) -> None:
        """Mirror in place: the first column becomes the last one"""
        for row in self._a:
            row.reverse()

    def reverse_v(self) -> None:
        """Mirror in place: the first row becomes the last one"""
        a = self._a
        lo, hi = 0, self.rows - 1
        while lo < hi:
            a[lo][:], a[hi][:] = a[hi][:], a[lo][:]
            lo += 1
            hi -= 1

    def flip_h(self):
        res = self.copy()
        res.reverse_h()
        return res

    def flip_v(self):
        res = self.copy()
        res.reverse_v()
        return res

    def rotate90(self):
        """Rotate clockwise by 90 degrees"""
        a, rows, cols = self._a, self.rows, self.cols
        c = self._blank(cols, rows)
        if self.policy.choose_outer_dimension(rows, cols) == BY_ROW:
            for j in range(rows):
                src = a[rows - j - 1]
                for i in range(cols):
                    c[i][j] = src[i]
        else:
            for i in range(cols):
                ci = c[i]
                for j in range(rows):
                    ci[j] = a[rows - j - 1][i]
        return self._new(c)

    def rotate180(self):
        return self._new([row[::-1] for row in reversed(self._a)])

    def rotate270(self):
        """Rotate clockwise by 270 degrees"""
        a, rows, cols = self._a, self.rows, self.cols
        c = self._blank(cols, rows)
        if self.policy.choose_outer_dimension(rows, cols) == BY_ROW:
            for j in range(rows):
                src = a[j]
                for i in range(cols):
                    c[i][j] = src[cols - i - 1]
        else:
            for i in range(cols):
                ci = c[i]
                for j in range(rows):
                    ci[j] = a[j][cols - i - 1]
        return self._new(c)

    def transpose(self):
        a, rows, cols = self._a, self.rows, self.cols
        c = self._blank(cols, rows)
        if self.policy.choose_outer_dimension(rows, cols) == BY_ROW:
            for j in range(rows):
                src = a[j]
                for i in range(cols):
                    c[i][j] = src[i]
        else:
            for i in range(cols):
                ci = c[i]
                for j in range(rows):
                    ci[j] = a[j][i]
        return self._new(c)

    # ---------------------------------------------------------------- reshaping and tiling

    def reshape(self, new_rows: int, new_cols: Optional[int] = None):
        """Lay out the row-major sequence of values on a new_rows x new_cols grid

        Values that don't fit are dropped, missing values are filled with the
        zero value. With a single argument, it is taken as the number of
        columns and the number of rows is chosen to fit all values.
        """
        if new_cols is None:
            new_cols = new_rows
            check_positive(new_cols, 'new_cols')
            new_rows = -(-self.count // new_cols)
        check_not_negative(new_rows, 'new_rows')
        check_not_negative(new_cols, 'new_cols')
        total = new_rows * new_cols
        values = self.flatten()[:total]
        if len(values) < total:
            values += [self.element_operations.zero()] * (total - len(values))
        return self._new([values[i * new_cols:(i + 1) * new_cols] for i in range(new_rows)])

    def repelem(self, row_repeats: int, col_repeats: int):
        """Repeat every cell as a row_repeats x col_repeats block

        See https://www.mathworks.com/help/matlab/ref/repelem.html
        """
        check_positive(row_repeats, 'row_repeats')
        check_positive(col_repeats, 'col_repeats')
        c = []
        for row in self._a:
            expanded = [v for v in row for _ in range(col_repeats)]
            c.append(expanded)
            c.extend(list(expanded) for _ in range(row_repeats - 1))
        return self._new(c)

    def repmat(self, row_repeats: int, col_repeats: int):
        """Tile the whole matrix row_repeats x col_repeats times

        See https://www.mathworks.com/help/matlab/ref/repmat.html
        """
        check_positive(row_repeats, 'row_repeats')
        check_positive(col_repeats, 'col_repeats')
        tiled = [row * col_repeats for row in self._a]
        return self._new([list(row) for _ in range(row_repeats) for row in tiled])

    def flatten(self) -> List[T]:
        """All values in row-major order"""
        return [v for row in self._a for v in row]

    def vstack(self, other: 'AbstractMatrix[T]'):
        """Append the rows of other below this matrix"""
        self._check_compatible(other)
        if self.cols != other.cols:
            raise ShapeError(f"The number of columns of this matrix ({self.cols}) "
                             f"and the specified matrix ({other.cols}) are not equal")
        return self._new([list(row) for row in self._a] + [list(row) for row in other._a])

    def hstack(self, other: 'AbstractMatrix[T]'):
        """Append the columns of other right of this matrix"""
        self._check_compatible(other)
        if self.rows != other.rows:
            raise ShapeError(f"The number of rows of this matrix ({self.rows}) "
                             f"and the specified matrix ({other.rows}) are not equal")
        return self._new([ra + rb for ra, rb in zip(self._a, other._a)])

    def zip_with(self, other: 'AbstractMatrix[T]', func: Callable[[T, T], T]):
        """New matrix with func(a, b) for the values a, b of both matrices in each cell"""
        self._check_compatible(other)
        check_same_shape(self, other)
        a, b = self._a, other._a
        coerce = self.element_operations.coerce
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: coerce(func(a[i][j], b[i][j])))
        return self._new(out)

    def zip_with3(self, other: 'AbstractMatrix[T]', other2: 'AbstractMatrix[T]', func: Callable[[T, T, T], T]):
        self._check_compatible(other)
        self._check_compatible(other2)
        check_same_shape(self, other)
        check_same_shape(self, other2)
        a, b, c = self._a, other._a, other2._a
        coerce = self.element_operations.coerce
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: coerce(func(a[i][j], b[i][j], c[i][j])))
        return self._new(out)

    # ---------------------------------------------------------------- conversion

    def boxed(self):
        """Matrix of plain objects holding the same values"""
        from .matrix import Matrix
        return Matrix._wrap(self.array(), self.policy)

    def to_numpy(self) -> np.ndarray:
        dtype = self.element_operations.dtype
        arr = np.empty((self.rows, self.cols), dtype=dtype)
        for i, row in enumerate(self._a):
            for j, v in enumerate(row):
                arr[i, j] = v
        return arr

    # ---------------------------------------------------------------- streams

    def stream_lu2rd(self) -> streams.IndexedStream:
        check_square(self.rows, self.cols)
        return streams.stream_lu2rd(self._a, self.rows)

    def stream_ru2ld(self) -> streams.IndexedStream:
        check_square(self.rows, self.cols)
        return streams.stream_ru2ld(self._a, self.rows)

    def stream_h(self, from_row: int = 0, to_row: Optional[int] = None) -> streams.IndexedStream:
        """Values of the rows [from_row, to_row), row by row"""
        to_row = self.rows if to_row is None else to_row
        check_range(from_row, to_row, self.rows)
        return streams.stream_h(self._a, self.cols, from_row, to_row)

    def stream_h_row(self, i: int) -> streams.IndexedStream:
        return self.stream_h(i, i + 1)

    def stream_v(self, from_col: int = 0, to_col: Optional[int] = None) -> streams.IndexedStream:
        """Values of the columns [from_col, to_col), column by column"""
        to_col = self.cols if to_col is None else to_col
        check_range(from_col, to_col, self.cols)
        return streams.stream_v(self._a, self.rows, from_col, to_col)

    def stream_v_col(self, j: int) -> streams.IndexedStream:
        return self.stream_v(j, j + 1)

    def stream_r(self, from_row: int = 0, to_row: Optional[int] = None) -> streams.IndexedStream:
        """One stream per row"""
        to_row = self.rows if to_row is None else to_row
        check_range(from_row, to_row, self.rows)
        return streams.stream_r(self._a, self.cols, from_row, to_row)

    def stream_c(self, from_col: int = 0, to_col: Optional[int] = None) -> streams.IndexedStream:
        """One stream per column"""
        to_col = self.cols if to_col is None else to_col
        check_range(from_col, to_col, self.cols)
        return streams.stream_c(self._a, self.rows, from_col, to_col)

    def points_lu2rd(self) -> streams.IndexedStream:
        check_square(self.rows, self.cols)
        return streams.points_lu2rd(self.rows)

    def points_ru2ld(self) -> streams.IndexedStream:
        check_square(self.rows, self.cols)
        return streams.points_ru2ld(self.rows)

    def points_h(self, from_row: int = 0, to_row: Optional[int] = None) -> streams.IndexedStream:
        to_row = self.rows if to_row is None else to_row
        check_range(from_row, to_row, self.rows)
        return streams.points_h(self.cols, from_row, to_row)

    def points_v(self, from_col: int = 0, to_col: Optional[int] = None) -> streams.IndexedStream:
        to_col = self.cols if to_col is None else to_col
        check_range(from_col, to_col, self.cols)
        return streams.points_v(self.rows, from_col, to_col)

    def points_r(self, from_row: int = 0, to_row: Optional[int] = None) -> streams.IndexedStream:
        to_row = self.rows if to_row is None else to_row
        check_range(from_row, to_row, self.rows)
        return streams.points_r(self.cols, from_row, to_row)

    def points_c(self, from_col: int = 0, to_col: Optional[int] = None) -> streams.IndexedStream:
        to_col = self.cols if to_col is None else to_col
        check_range(from_col, to_col, self.cols)
        return streams.points_c(self.rows, from_col, to_col)

    # ---------------------------------------------------------------- equality and output

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, AbstractMatrix):
            return NotImplemented
        if type(self) is not type(other) or not self.is_same_shape(other):
            return False
        key = self.element_operations.equality_key
        return all(x is y or key(x) == key(y) for ra, rb in zip(self._a, other._a) for x, y in zip(ra, rb))

    def __hash__(self):
        """Structural hash over all cells

        The hash changes whenever the matrix is modified, so matrices must not
        be mutated while used as dict keys or set members. A Matrix of objects
        is only hashable if all of its values are.
        """
        key = self.element_operations.equality_key
        return hash((type(self).__name__, tuple(tuple(key(v) for v in row) for row in self._a)))

    def __str__(self) -> str:
        fmt = self.element_operations.format
        return '[' + ', '.join('[' + ', '.join(fmt(v) for v in row) + ']' for row in self._a) + ']'

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._a!r})"

    def to_multiline_string(self) -> str:
        fmt = self.element_operations.format
        width = max((len(fmt(v)) for row in self._a for v in row), default=0)
        return '\n'.join(' '.join(fmt(v).rjust(width) for v in row) for row in self._a)

    def println(self) -> None:
        """Print the matrix, one row per line (debugging aid)"""
        print(self.to_multiline_string())
