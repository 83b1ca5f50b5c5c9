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
"""Dense two-dimensional matrices with typed elements

Provides Matrix (arbitrary objects), BooleanMatrix, CharMatrix, IntMatrix,
LongMatrix and DoubleMatrix. All share one set of algorithms for element
access, diagonals, bulk updates, reshaping, tiling, rotation and lazy
streams over rows, columns and diagonals. Large bulk operations are split
up over a thread pool according to a ParallelismPolicy.
"""

from .names import *
import logging


class DisableLogger():
    """Environment in which logging is disabled"""

    def __enter__(self):
        logging.disable(logging.CRITICAL)

    def __exit__(self, exit_type, exit_value, exit_traceback):
        logging.disable(logging.NOTSET)


from .errors import *
from .shapes import *
from .pool import *
from .points import *
from .elements import *
from .streams import IndexedStream, RowView
from .abstract_matrix import AbstractMatrix
from .matrix import *
from .boolean_matrix import *
from .numeric_matrix import *
from .char_matrix import *
