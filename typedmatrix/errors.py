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
"""Exceptions raised by matrix operations

All errors are raised before an operation touches any data, so a failed call
never leaves a matrix partially modified.
"""


class MatrixError(Exception):
    """Base class of all errors raised by typedmatrix"""


class ShapeError(MatrixError, ValueError):
    """Operand shapes don't fit the operation

    Raised for non-rectangular input, non-square matrices passed to diagonal
    operations, mismatching operands, wrong row/column lengths and
    non-positive repeat factors.
    """


class RangeError(MatrixError, IndexError):
    """A half-open range [from, to) doesn't lie within [0, bound]"""


class MatrixIndexError(MatrixError, IndexError):
    """A single cell index lies outside of the matrix"""
