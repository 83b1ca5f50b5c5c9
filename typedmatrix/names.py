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
"""Static strings and constants used in the typedmatrix package

    Parallel execution

        PARALLEL_THRESHOLD = 8192

        BY_ROW = 'by_row'

        BY_COLUMN = 'by_column'

        ENV_PARALLEL = 'TYPEDMATRIX_PARALLEL'

        ENV_MAX_WORKERS = 'TYPEDMATRIX_MAX_WORKERS'

    Element types

        BOOLEAN = 'boolean'

        CHAR = 'char'

        INT = 'int'

        LONG = 'long'

        DOUBLE = 'double'

        OBJECT = 'object'
"""

# parallel execution
PARALLEL_THRESHOLD = 8192
BY_ROW = 'by_row'
BY_COLUMN = 'by_column'
ENV_PARALLEL = 'TYPEDMATRIX_PARALLEL'
ENV_MAX_WORKERS = 'TYPEDMATRIX_MAX_WORKERS'

# element types
BOOLEAN = 'boolean'
CHAR = 'char'
INT = 'int'
LONG = 'long'
DOUBLE = 'double'
OBJECT = 'object'

# value ranges of the fixed-width element types
INT_BITS = 32
LONG_BITS = 64
CHAR_BITS = 16
