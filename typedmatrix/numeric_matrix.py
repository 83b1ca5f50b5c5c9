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
"""Matrices of numbers: elementwise arithmetic and the matrix product

Integer matrices wrap around like two's complement integers of their bit
width. DoubleMatrix follows IEEE 754 double arithmetic.
"""

from typing import TypeVar
import builtins
import logging
import operator

from .abstract_matrix import AbstractMatrix
from .elements import IntOperations, LongOperations, DoubleOperations
from .errors import ShapeError
from .shapes import check_same_shape

N = TypeVar('N')

LOG = logging.getLogger(__name__)


def _position(value) -> int:
    """Integer position of a range bound, characters count as their code point"""
    return ord(value) if isinstance(value, str) else operator.index(value)


class NumericMatrix(AbstractMatrix[N]):
    """Base of all matrices whose element type supports arithmetic"""

    @classmethod
    def range(cls, start, stop, step: int = 1):
        """Matrix with one row of the values start, start + step, ... up to stop (excluded)"""
        ops = cls.element_operations
        values = builtins.range(_position(start), _position(stop), step)
        return cls._wrap([[ops.from_number(v) for v in values]])

    @classmethod
    def range_closed(cls, start, stop, step: int = 1):
        """Like range, but stop is included if the steps hit it"""
        if step == 0:
            raise ValueError("'step' must not be zero.")
        ops = cls.element_operations
        stop = _position(stop)
        values = builtins.range(_position(start), stop + (1 if step > 0 else -1), step)
        return cls._wrap([[ops.from_number(v) for v in values]])

    def add(self, other: 'NumericMatrix[N]') -> 'NumericMatrix[N]':
        """Elementwise sum"""
        self._check_compatible(other)
        check_same_shape(self, other)
        a, b = self._a, other._a
        add = self.element_operations.add
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: add(a[i][j], b[i][j]))
        return self._new(out)

    def subtract(self, other: 'NumericMatrix[N]') -> 'NumericMatrix[N]':
        """Elementwise difference"""
        self._check_compatible(other)
        check_same_shape(self, other)
        a, b = self._a, other._a
        subtract = self.element_operations.subtract
        out = self._blank(self.rows, self.cols)
        self._fill_cells(out, lambda i, j: subtract(a[i][j], b[i][j]))
        return self._new(out)

    def multiply(self, other: 'NumericMatrix[N]') -> 'NumericMatrix[N]':
        """Matrix product of this (n x m) and other (m x l) matrix

        The loops are nested so that the smallest of n, m and l is iterated
        in the outermost loop. Parallel tasks always own a row or a column of
        the result, and every cell sums up its products in ascending order of
        k, so all loop orders give the same result.
        """
        self._check_compatible(other)
        if self.cols != other.rows:
            raise ShapeError(f"The number of columns of this matrix ({self.cols}) "
                             f"doesn't match the number of rows of the specified matrix ({other.rows})")
        ops = self.element_operations
        to_number = ops.to_number
        n, m, l = self.rows, self.cols, other.cols
        a = [[to_number(v) for v in row] for row in self._a]
        b = [[to_number(v) for v in row] for row in other._a]
        zero = to_number(ops.zero())
        c = [[zero] * l for _ in range(n)]

        def row_task(i):
            ai, ci = a[i], c[i]
            for k in range(m):
                aik, bk = ai[k], b[k]
                for j in range(l):
                    ci[j] += aik * bk[j]

        def column_task(j):
            for i in range(n):
                ai = a[i]
                acc = zero
                for k in range(m):
                    acc += ai[k] * b[k][j]
                c[i][j] = acc

        policy = self.policy
        parallel = policy.should_parallelize(n * l, m)
        if parallel or n <= m or l <= m:
            if n <= l:
                LOG.debug(f"Multiplying {n}x{m} by {m}x{l} row by row.")
                policy.execute(n, row_task, parallel)
            else:
                LOG.debug(f"Multiplying {n}x{m} by {m}x{l} column by column.")
                policy.execute(l, column_task, parallel)
        else:
            LOG.debug(f"Multiplying {n}x{m} by {m}x{l} with the inner dimension outermost.")
            for k in range(m):
                bk = b[k]
                for i in range(n):
                    aik, ci = a[i][k], c[i]
                    for j in range(l):
                        ci[j] += aik * bk[j]
        from_number = ops.from_number
        return self._new([[from_number(v) for v in row] for row in c])


class IntMatrix(NumericMatrix[int]):
    """Matrix of 32 bit signed integers

    Example:
        IntMatrix.range(0, 6).reshape(2, 3)  # [[0, 1, 2], [3, 4, 5]]
    """

    element_operations = IntOperations.instance()

    @classmethod
    def from_chars(cls, a) -> 'IntMatrix':
        """Integer matrix of the code points of a CharMatrix or a grid of characters"""
        from .char_matrix import CharMatrix
        if not isinstance(a, CharMatrix):
            a = CharMatrix(a)
        return cls._wrap([[ord(c) for c in row] for row in a._a], a.policy)

    def to_long_matrix(self) -> 'LongMatrix':
        return LongMatrix._wrap(self.array(), self.policy)

    def to_double_matrix(self) -> 'DoubleMatrix':
        return DoubleMatrix._wrap([[float(v) for v in row] for row in self._a], self.policy)


class LongMatrix(NumericMatrix[int]):
    """Matrix of 64 bit signed integers"""

    element_operations = LongOperations.instance()

    def to_double_matrix(self) -> 'DoubleMatrix':
        return DoubleMatrix._wrap([[float(v) for v in row] for row in self._a], self.policy)


class DoubleMatrix(NumericMatrix[float]):
    """Matrix of double precision floats"""

    element_operations = DoubleOperations.instance()
