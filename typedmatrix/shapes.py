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
"""Shape and range validation

Pure functions without side effects. They are called at the start of every
operation whose preconditions depend on the shape of its operands.
"""

from typing import Sequence

from .errors import ShapeError, RangeError, MatrixIndexError


def check_rectangular(rows: Sequence[Sequence]) -> int:
    """Verify that all rows have the length of the first row

    Args:
        rows: A list of rows

    Returns:
        (int): The common row length (0 for an empty list)
    """
    if len(rows) == 0:
        return 0
    cols = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != cols:
            raise ShapeError(f"All rows must have the same length. Row 0 has {cols} elements, row {i} has {len(row)}.")
    return cols


def check_square(rows: int, cols: int) -> None:
    """Verify that a matrix is square (required by diagonal operations)"""
    if rows != cols:
        raise ShapeError(f"'rows' and 'cols' must be same to access diagonals: rows={rows}, cols={cols}")


def check_same_shape(a, b) -> None:
    """Verify that two matrices have the same number of rows and columns"""
    if (a.rows, a.cols) != (b.rows, b.cols):
        raise ShapeError(f"Must be same shape: {a.rows}x{a.cols} vs. {b.rows}x{b.cols}")


def check_range(from_index: int, to_index: int, bound: int) -> None:
    """Verify that 0 <= from_index <= to_index <= bound"""
    if from_index < 0 or from_index > to_index or to_index > bound:
        raise RangeError(f"Range [{from_index}, {to_index}) out of bounds for length {bound}")


def check_index(index: int, bound: int, what: str = 'index') -> None:
    """Verify that 0 <= index < bound. Negative indices are never wrapped around."""
    if index < 0 or index >= bound:
        raise MatrixIndexError(f"Invalid {what}: {index}. Must be in [0, {bound}).")


def check_not_negative(value: int, name: str) -> None:
    if value < 0:
        raise RangeError(f"The '{name}' can't be negative: {value}")


def check_positive(value: int, name: str) -> None:
    if value <= 0:
        raise ShapeError(f"The '{name}' must be bigger than 0: {value}")
