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
"""A (row, col) index pair"""

from typing import NamedTuple


class Point(NamedTuple):
    """Position of a cell in a matrix

    Example:
        p = Point(1, 2)
        m.get(p) == m.get(1, 2)
    """
    row: int
    col: int

    @classmethod
    def of(cls, row: int, col: int) -> 'Point':
        return cls(row, col)
