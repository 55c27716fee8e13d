# custom_types.py
"""
Type definitions and aliases shared across pyquest.

We generally following the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- Annotate pluggable level -> value maps with `LevelFunction`
"""
from __future__ import annotations
from typing import Callable, TypeAlias

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

from numpy import (
    floating as NumpyFloating,
)

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
LevelFunction: TypeAlias = Callable[[NumpyArray[NumpyFloating]], NumpyArrayLike]
