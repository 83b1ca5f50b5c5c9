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
"""Matrix of booleans"""

from .abstract_matrix import AbstractMatrix
from .elements import BooleanOperations


class BooleanMatrix(AbstractMatrix[bool]):
    """Matrix of bool values, padded with False

    Only bool (and numpy.bool_) values are accepted, integers are rejected.
    """

    element_operations = BooleanOperations.instance()
