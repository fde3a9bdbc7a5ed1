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
Spring Types

Defines types related to:
- Damping regime classification
- Spring configuration dictionaries
- Simulation and analysis results
- Coefficient cache statistics
- Default parameter values and designer slider ranges

Usage
-----
>>> from springsim.types.springs import DampingRegime, SpringSimulationResult
>>>
>>> result: SpringSimulationResult = spring.simulate(n_steps=120, dt=1/60)
>>> print(result['x'][-1], result['settled_step'])
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from typing_extensions import TypedDict

from .core import ArrayLike

# ============================================================================
# Regime Classification
# ============================================================================


class DampingRegime(Enum):
    """
    Motion regime of a damped spring.

    Attributes
    ----------
    ZERO_FREQUENCY : str
        Angular frequency below EPSILON - the spring does not move
    OVER_DAMPED : str
        Damping ratio above 1 + EPSILON - two distinct real roots
    CRITICALLY_DAMPED : str
        Damping ratio within EPSILON of 1 - repeated real root
    UNDER_DAMPED : str
        Damping ratio below 1 - EPSILON - complex conjugate roots, oscillates
    """

    ZERO_FREQUENCY = "zero_frequency"
    OVER_DAMPED = "over_damped"
    CRITICALLY_DAMPED = "critically_damped"
    UNDER_DAMPED = "under_damped"


# ============================================================================
# Configuration Types
# ============================================================================


class SpringConfig(TypedDict, total=False):
    """
    Snapshot of a scalar spring.

    Every field is a plain number so the snapshot serializes as-is.

    Attributes
    ----------
    frequency : float
        Angular frequency [rad/s]
    damping : float
        Damping ratio [-]
    equilibrium : float
        Target position
    position : float
        Current position
    velocity : float
        Current velocity
    coefficients : Dict[str, float]
        Last derived coefficient set (absent before the first evaluate)

    Examples
    --------
    >>> config: SpringConfig = spring.get_config()
    >>> restored = Spring.from_config(config)
    """

    frequency: float
    damping: float
    equilibrium: float
    position: float
    velocity: float
    coefficients: Dict[str, float]


# ============================================================================
# Result Types
# ============================================================================


class SpringSimulationResult(TypedDict, total=False):
    """
    Result from a multi-step spring rollout.

    Shape Convention
    ----------------
    - t: (n_steps + 1,) - Time points, t[0] = 0
    - x: (n_steps + 1,) - Positions, x[0] is the initial position
    - v: (n_steps + 1,) - Velocities
    - equilibrium: (n_steps,) - Target used for each transition

    Examples
    --------
    >>> result: SpringSimulationResult = spring.simulate(n_steps=60, dt=1/60)
    >>> result['x'].shape
    (61,)
    >>> result['settled_step']  # None if never settled
    """

    t: ArrayLike
    x: ArrayLike
    v: ArrayLike
    equilibrium: ArrayLike
    dt: float
    settled_step: Optional[int]
    success: bool
    message: str
    metadata: Dict[str, Any]


class SpringCharacteristics(TypedDict, total=False):
    """
    Physical characteristics of a spring.

    Attributes
    ----------
    regime : DampingRegime
        Motion regime
    angular_frequency : float
        Natural frequency ω [rad/s]
    damping_ratio : float
        Damping ratio ζ [-]
    damped_frequency : float
        ωd = ω√(1-ζ²) for under-damped, 0 otherwise
    decay_rate : float
        Slowest exponential decay rate [1/s]
    quality_factor : float
        Q = 1/(2ζ), inf when undamped
    natural_period : float
        2π/ω, inf for zero frequency
    damped_period : float
        2π/ωd, inf when not oscillating
    time_constant : float
        1/decay_rate, inf when not decaying
    settling_time : float
        2% settling time, ≈ 4·time_constant
    overshoot : float
        Percent overshoot of a step response
    """

    regime: DampingRegime
    angular_frequency: float
    damping_ratio: float
    damped_frequency: float
    decay_rate: float
    quality_factor: float
    natural_period: float
    damped_period: float
    time_constant: float
    settling_time: float
    overshoot: float


class CacheStats(TypedDict):
    """Hit/miss statistics of a coefficient cache."""

    hits: int
    misses: int
    size: int
    max_size: int


# ============================================================================
# Constants - Defaults and Ranges
# ============================================================================

EPSILON = 1e-4
"""
Regime boundary tolerance.

Governs the zero-frequency cutoff, the width of the critically damped band
around ζ = 1, and the decay target used by the duration conversion.
"""

DEFAULT_FREQUENCY = 10.0
"""Default angular frequency [rad/s]."""

DEFAULT_DAMPING = 1.0
"""Default damping ratio (critically damped)."""

FREQUENCY_RANGE: Tuple[float, float] = (0.0, 100.0)
"""
Designer slider range for the angular frequency.

Only enforced by validate_settings; the core accepts any non-negative value.
"""

DAMPING_RANGE: Tuple[float, float] = (0.0, 2.0)
"""
Designer slider range for the damping ratio.

Only enforced by validate_settings; the core accepts any non-negative value.
"""

SETTLE_VELOCITY_THRESHOLD = 0.01
"""
Absolute velocity below which a spring reports itself settled.

Known limitation: position error is ignored and the threshold is not scaled
to the units of the animated quantity.
"""

DEFAULT_CACHE_SIZE = 128
"""Default maximum number of entries held by a CoefficientCache."""


__all__ = [
    "DampingRegime",
    "SpringConfig",
    "SpringSimulationResult",
    "SpringCharacteristics",
    "CacheStats",
    "EPSILON",
    "DEFAULT_FREQUENCY",
    "DEFAULT_DAMPING",
    "FREQUENCY_RANGE",
    "DAMPING_RANGE",
    "SETTLE_VELOCITY_THRESHOLD",
    "DEFAULT_CACHE_SIZE",
]
