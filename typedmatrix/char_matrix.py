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
"""Matrix of 16 bit characters"""

from .elements import CharOperations
from .numeric_matrix import NumericMatrix, IntMatrix


class CharMatrix(NumericMatrix[str]):
    """Matrix of single characters

    Values are strings of length one with a code point below 2**16. Integers
    are accepted too and taken as code points. Arithmetic works on the code
    points and wraps around at 2**16.

    Example:
        CharMatrix.range_closed('a', 'f').reshape(3)  # [[a, b, c], [d, e, f]]
    """

    element_operations = CharOperations.instance()

    def to_int_matrix(self) -> IntMatrix:
        return IntMatrix.from_chars(self)
