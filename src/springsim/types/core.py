# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Core Types - Fundamental Building Blocks

Defines the basic numeric types used throughout springsim:
- Scalar types (time steps, frequencies, damping ratios)
- Array types (batched positions/velocities)
- Vector types for three-axis springs
- Target specifications for multi-step simulation

Usage
-----
>>> from springsim.types.core import ScalarLike, Vector3
>>>
>>> def evaluate(dt: ScalarLike) -> Vector3:
...     ...
"""

from typing import Callable, Sequence, Union

import numpy as np

# ============================================================================
# Scalar and Array Types
# ============================================================================

ScalarLike = Union[float, int, np.number]
"""
Real scalar value.

Can be Python float/int or NumPy scalar.

Examples
--------
>>> dt: ScalarLike = 1.0 / 60.0
>>> angular_frequency: ScalarLike = 10.0
"""

ArrayLike = Union[np.ndarray, Sequence[float]]
"""
Array of real values.

Used for batched positions/velocities and per-step target sequences.

Shapes:
- Batch of independent springs: (n_springs,)
- Trajectory: (n_steps + 1,)
"""

Vector3 = np.ndarray
"""
Three-component vector (x, y, z) of a vector spring.

Shape: (3,)

Examples
--------
>>> target: Vector3 = np.array([1.0, 0.0, -2.0])
>>> spring3.set_equilibrium(target)
"""

Vector3Like = Union[np.ndarray, Sequence[float]]
"""Anything convertible to a (3,) float array."""

AxisParameter = Union[ScalarLike, Sequence[float], np.ndarray]
"""
Frequency or damping for a vector spring.

A scalar is shared by all three axes; a length-3 sequence is per-axis.
"""


# ============================================================================
# Target Specifications
# ============================================================================

EquilibriumFunction = Callable[[int], float]
"""
Time-indexed target: equilibrium[k] = f(k).

Examples
--------
>>> def moving_target(k: int) -> float:
...     return 0.1 * k
"""

EquilibriumInput = Union[None, ScalarLike, Sequence[float], np.ndarray, EquilibriumFunction]
"""
Target specification for a multi-step simulation.

Can be:
- None: hold the spring's current equilibrium
- Scalar: constant target for every step
- Sequence/array: per-step target, length >= n_steps
- Callable: target policy k -> equilibrium
"""


__all__ = [
    "ScalarLike",
    "ArrayLike",
    "Vector3",
    "Vector3Like",
    "AxisParameter",
    "EquilibriumFunction",
    "EquilibriumInput",
]
