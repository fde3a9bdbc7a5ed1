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
Types Module - Type Definitions for springsim

Central import point for all type definitions.

Module Organization
------------------
- core: Scalars, arrays, vectors, target specifications
- springs: Regimes, configs, results, defaults
"""

from .core import (
    ArrayLike,
    AxisParameter,
    EquilibriumFunction,
    EquilibriumInput,
    ScalarLike,
    Vector3,
    Vector3Like,
)
from .springs import (
    DAMPING_RANGE,
    DEFAULT_CACHE_SIZE,
    DEFAULT_DAMPING,
    DEFAULT_FREQUENCY,
    EPSILON,
    FREQUENCY_RANGE,
    SETTLE_VELOCITY_THRESHOLD,
    CacheStats,
    DampingRegime,
    SpringCharacteristics,
    SpringConfig,
    SpringSimulationResult,
)

__all__ = [
    # Core
    "ArrayLike",
    "AxisParameter",
    "EquilibriumFunction",
    "EquilibriumInput",
    "ScalarLike",
    "Vector3",
    "Vector3Like",
    # Springs
    "CacheStats",
    "DampingRegime",
    "SpringCharacteristics",
    "SpringConfig",
    "SpringSimulationResult",
    # Constants
    "DAMPING_RANGE",
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_DAMPING",
    "DEFAULT_FREQUENCY",
    "EPSILON",
    "FREQUENCY_RANGE",
    "SETTLE_VELOCITY_THRESHOLD",
]
