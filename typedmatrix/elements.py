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
"""Element operations for the supported matrix element types

Each element type is described by a singleton operations object that knows
the zero value of the type, how to coerce incoming values, whether the type
supports arithmetic and how results wrap around. Matrices delegate every
type-specific decision to these objects, so the matrix algorithms exist only
once.
"""

from numbers import Integral, Real
from typing import Any, List, Optional
import struct

import numpy as np

from .names import BOOLEAN, CHAR, INT, LONG, DOUBLE, OBJECT, INT_BITS, LONG_BITS, CHAR_BITS

_NAN_KEY = struct.pack('<d', float('nan'))


def wrap_signed(value: int, bits: int) -> int:
    """Two's complement wraparound of an integer to the given bit width"""
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


class ElementOperations:
    """Operations on matrix elements of arbitrary objects

    Implements the singleton pattern: every subclass has exactly one instance,
    obtained through instance().
    """

    name = OBJECT
    numeric = False
    dtype = object

    def __new__(cls):
        if cls.__dict__.get('_instance') is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def instance(cls) -> 'ElementOperations':
        return cls()

    def zero(self) -> Any:
        """Value of new cells, used for padding"""
        return None

    def coerce(self, value: Any) -> Any:
        """Validate a value written into a matrix and convert it to the canonical representation"""
        return value

    def to_number(self, value: Any) -> Any:
        raise TypeError(f"Elements of type '{self.name}' don't support arithmetic.")

    def from_number(self, number: Any) -> Any:
        raise TypeError(f"Elements of type '{self.name}' don't support arithmetic.")

    def add(self, a: Any, b: Any) -> Any:
        return self.from_number(self.to_number(a) + self.to_number(b))

    def subtract(self, a: Any, b: Any) -> Any:
        return self.from_number(self.to_number(a) - self.to_number(b))

    def multiply(self, a: Any, b: Any) -> Any:
        return self.from_number(self.to_number(a) * self.to_number(b))

    def random_values(self, length: int, seed: Optional[int] = None) -> List[Any]:
        raise TypeError(f"Random values of type '{self.name}' are not supported.")

    def equality_key(self, value: Any) -> Any:
        """Hashable stand-in for value; two cells are equal iff their keys are"""
        return value

    def format(self, value: Any) -> str:
        return str(value)

    def __repr__(self):
        return f"{type(self).__name__}()"


class BooleanOperations(ElementOperations):
    name = BOOLEAN
    dtype = np.bool_

    def zero(self) -> bool:
        return False

    def coerce(self, value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        raise TypeError(f"Expected a boolean, got {type(value).__name__}: {value!r}")

    def random_values(self, length: int, seed: Optional[int] = None) -> List[bool]:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 2, size=length).astype(bool).tolist()


class IntOperations(ElementOperations):
    """32 bit signed integers with two's complement wraparound"""
    name = INT
    numeric = True
    dtype = np.int32
    bits = INT_BITS

    def zero(self) -> int:
        return 0

    def coerce(self, value: Any) -> int:
        if isinstance(value, Integral) and not isinstance(value, (bool, np.bool_)):
            return wrap_signed(int(value), self.bits)
        raise TypeError(f"Expected an integer, got {type(value).__name__}: {value!r}")

    def to_number(self, value: int) -> int:
        return value

    def from_number(self, number: int) -> int:
        return wrap_signed(int(number), self.bits)

    def random_values(self, length: int, seed: Optional[int] = None) -> List[int]:
        rng = np.random.default_rng(seed)
        info = np.iinfo(self.dtype)
        return rng.integers(info.min, info.max, size=length, dtype=self.dtype, endpoint=True).tolist()


class LongOperations(IntOperations):
    """64 bit signed integers with two's complement wraparound"""
    name = LONG
    dtype = np.int64
    bits = LONG_BITS


class DoubleOperations(ElementOperations):
    name = DOUBLE
    numeric = True
    dtype = np.float64

    def zero(self) -> float:
        return 0.0

    def coerce(self, value: Any) -> float:
        if isinstance(value, Real) and not isinstance(value, (bool, np.bool_)):
            return float(value)
        raise TypeError(f"Expected a real number, got {type(value).__name__}: {value!r}")

    def to_number(self, value: float) -> float:
        return value

    def from_number(self, number: float) -> float:
        return float(number)

    def random_values(self, length: int, seed: Optional[int] = None) -> List[float]:
        rng = np.random.default_rng(seed)
        return rng.random(length).tolist()

    def equality_key(self, value: float) -> bytes:
        """Bit pattern of value. All NaNs share one key, 0.0 and -0.0 differ."""
        if value != value:
            return _NAN_KEY
        return struct.pack('<d', value)


class CharOperations(ElementOperations):
    """16 bit unsigned characters, stored as strings of length one

    Arithmetic works on the code points and wraps around at 2**16.
    """
    name = CHAR
    numeric = True
    dtype = np.dtype('<U1')
    modulus = 1 << CHAR_BITS

    def zero(self) -> str:
        return '\x00'

    def coerce(self, value: Any) -> str:
        if isinstance(value, str) and len(value) == 1:
            if ord(value) >= self.modulus:
                raise TypeError(f"Character {value!r} lies outside of the 16 bit range.")
            return value
        if isinstance(value, Integral) and not isinstance(value, (bool, np.bool_)):
            return chr(int(value) % self.modulus)
        raise TypeError(f"Expected a single character, got {type(value).__name__}: {value!r}")

    def to_number(self, value: str) -> int:
        return ord(value)

    def from_number(self, number: int) -> str:
        return chr(int(number) % self.modulus)

    def random_values(self, length: int, seed: Optional[int] = None) -> List[str]:
        rng = np.random.default_rng(seed)
        return [chr(c) for c in rng.integers(0, self.modulus, size=length).tolist()]
