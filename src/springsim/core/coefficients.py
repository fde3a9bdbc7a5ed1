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
Damped Spring Coefficients

Closed-form solution of the damped harmonic oscillator

    ẍ + 2ζω·ẋ + ω²·x = 0

over one time step dt. The exact discrete-time update is linear in the
current state:

    x[k+1] = pos_pos·x[k] + pos_vel·v[k]
    v[k+1] = vel_pos·x[k] + vel_vel·v[k]

with x measured relative to the equilibrium. This module derives the four
coefficients for a given (dt, ω, ζ). Because the solution is exact, the
update is unconditionally stable for any dt, unlike explicit integrators.

Regimes
-------
The coefficient formulas depend on the roots of s² + 2ζωs + ω² = 0:

- ZERO_FREQUENCY (ω < ε): the spring does not move, identity update
- OVER_DAMPED (ζ > 1 + ε): two distinct real roots
- UNDER_DAMPED (ζ < 1 - ε): complex conjugate roots, decaying oscillation
- CRITICALLY_DAMPED (|ζ - 1| ≤ ε): repeated real root -ω

The ε band around ζ = 1 keeps the over/under-damped formulas away from their
removable singularity (division by √|ζ² - 1| → 0) so the three regimes meet
continuously.

Examples
--------
>>> coeffs = derive_coefficients(dt=0.1, angular_frequency=10.0, damping_ratio=1.0)
>>> coeffs.pos_pos  # 2/e
0.7357588823428847
>>>
>>> # Derive once, apply to many springs sharing (dt, ω, ζ)
>>> cache = CoefficientCache()
>>> coeffs = cache.get(1 / 60, 10.0, 0.5)
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from springsim.types.core import ScalarLike
from springsim.types.springs import DEFAULT_CACHE_SIZE, EPSILON, CacheStats, DampingRegime

# ============================================================================
# Coefficient Container
# ============================================================================


@dataclass(frozen=True)
class SpringCoefficients:
    """
    Cached set of motion coefficients for one (dt, ω, ζ) triple.

    Valid only for the triple it was derived from. Reusing it across
    different position/velocity states sharing that triple is the intended
    optimization.

    Attributes
    ----------
    pos_pos : float
        new_pos contribution from old_pos
    pos_vel : float
        new_pos contribution from old_vel
    vel_pos : float
        new_vel contribution from old_pos
    vel_vel : float
        new_vel contribution from old_vel
    """

    # new_pos = pos_pos*old_pos + pos_vel*old_vel
    pos_pos: float
    pos_vel: float
    # new_vel = vel_pos*old_pos + vel_vel*old_vel
    vel_pos: float
    vel_vel: float

    def as_matrix(self) -> np.ndarray:
        """
        Coefficients as the 2×2 discrete state transition matrix.

        Returns
        -------
        np.ndarray
            [[pos_pos, pos_vel], [vel_pos, vel_vel]]
        """
        return np.array([[self.pos_pos, self.pos_vel], [self.vel_pos, self.vel_vel]])

    def to_dict(self) -> Dict[str, float]:
        """Plain-field representation."""
        return {
            "pos_pos": self.pos_pos,
            "pos_vel": self.pos_vel,
            "vel_pos": self.vel_pos,
            "vel_vel": self.vel_vel,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "SpringCoefficients":
        """Rebuild from the output of to_dict()."""
        return cls(
            pos_pos=float(data["pos_pos"]),
            pos_vel=float(data["pos_vel"]),
            vel_pos=float(data["vel_pos"]),
            vel_vel=float(data["vel_vel"]),
        )


IDENTITY = SpringCoefficients(pos_pos=1.0, pos_vel=0.0, vel_pos=0.0, vel_vel=1.0)
"""Coefficients of a spring that does not move."""


# ============================================================================
# Regime Classification
# ============================================================================


def clamp_parameters(
    angular_frequency: ScalarLike, damping_ratio: ScalarLike
) -> Tuple[float, float]:
    """
    Force frequency and damping into their legal range.

    Negative values become zero. Never raises.
    """
    angular_frequency = float(angular_frequency)
    damping_ratio = float(damping_ratio)
    if damping_ratio < 0.0:
        damping_ratio = 0.0
    if angular_frequency < 0.0:
        angular_frequency = 0.0
    return angular_frequency, damping_ratio


def classify_regime(angular_frequency: ScalarLike, damping_ratio: ScalarLike) -> DampingRegime:
    """
    Classify the motion regime of a spring.

    Parameters are clamped to be non-negative before classification.

    Parameters
    ----------
    angular_frequency : float
        Natural frequency ω [rad/s]
    damping_ratio : float
        Damping ratio ζ [-]

    Returns
    -------
    DampingRegime
        One of ZERO_FREQUENCY, OVER_DAMPED, UNDER_DAMPED, CRITICALLY_DAMPED

    Examples
    --------
    >>> classify_regime(10.0, 0.5)
    <DampingRegime.UNDER_DAMPED: 'under_damped'>
    >>> classify_regime(10.0, 1.00005)
    <DampingRegime.CRITICALLY_DAMPED: 'critically_damped'>
    >>> classify_regime(-3.0, 0.5)
    <DampingRegime.ZERO_FREQUENCY: 'zero_frequency'>
    """
    angular_frequency, damping_ratio = clamp_parameters(angular_frequency, damping_ratio)

    if angular_frequency < EPSILON:
        return DampingRegime.ZERO_FREQUENCY
    if damping_ratio > 1.0 + EPSILON:
        return DampingRegime.OVER_DAMPED
    if damping_ratio < 1.0 - EPSILON:
        return DampingRegime.UNDER_DAMPED
    return DampingRegime.CRITICALLY_DAMPED


# ============================================================================
# Per-Regime Formulas
# ============================================================================


def over_damped_coefficients(
    dt: float, angular_frequency: float, damping_ratio: float
) -> SpringCoefficients:
    """
    Coefficients for ζ > 1 (two distinct real roots z1 < z2 < 0).

    Uses the factored partial-fraction form with 1/(2·zb) = 1/(z2 - z1).
    """
    za = -angular_frequency * damping_ratio
    zb = angular_frequency * np.sqrt(damping_ratio * damping_ratio - 1.0)
    z1 = za - zb
    z2 = za + zb

    e1 = np.exp(z1 * dt)
    e2 = np.exp(z2 * dt)

    inv_two_zb = 1.0 / (2.0 * zb)  # = 1 / (z2 - z1)

    e1_over_two_zb = e1 * inv_two_zb
    e2_over_two_zb = e2 * inv_two_zb

    z1e1_over_two_zb = z1 * e1_over_two_zb
    z2e2_over_two_zb = z2 * e2_over_two_zb

    return SpringCoefficients(
        pos_pos=float(e1_over_two_zb * z2 - z2e2_over_two_zb + e2),
        pos_vel=float(-e1_over_two_zb + e2_over_two_zb),
        vel_pos=float((z1e1_over_two_zb - z2e2_over_two_zb + e2) * z2),
        vel_vel=float(-z1e1_over_two_zb + z2e2_over_two_zb),
    )


def under_damped_coefficients(
    dt: float, angular_frequency: float, damping_ratio: float
) -> SpringCoefficients:
    """Coefficients for ζ < 1 (decaying oscillation at α = ω√(1-ζ²))."""
    omega_zeta = angular_frequency * damping_ratio
    alpha = angular_frequency * np.sqrt(1.0 - damping_ratio * damping_ratio)

    exp_term = np.exp(-omega_zeta * dt)
    cos_term = np.cos(alpha * dt)
    sin_term = np.sin(alpha * dt)

    inv_alpha = 1.0 / alpha

    exp_sin = exp_term * sin_term
    exp_cos = exp_term * cos_term
    exp_omega_zeta_sin_over_alpha = exp_term * omega_zeta * sin_term * inv_alpha

    return SpringCoefficients(
        pos_pos=float(exp_cos + exp_omega_zeta_sin_over_alpha),
        pos_vel=float(exp_sin * inv_alpha),
        vel_pos=float(-exp_sin * alpha - omega_zeta * exp_omega_zeta_sin_over_alpha),
        vel_vel=float(exp_cos - exp_omega_zeta_sin_over_alpha),
    )


def critically_damped_coefficients(
    dt: float, angular_frequency: float, damping_ratio: float = 1.0
) -> SpringCoefficients:
    """Coefficients for ζ ≈ 1 (repeated root -ω). damping_ratio is unused."""
    exp_term = np.exp(-angular_frequency * dt)
    time_exp = dt * exp_term
    time_exp_freq = time_exp * angular_frequency

    return SpringCoefficients(
        pos_pos=float(time_exp_freq + exp_term),
        pos_vel=float(time_exp),
        vel_pos=float(-angular_frequency * time_exp_freq),
        vel_vel=float(-time_exp_freq + exp_term),
    )


_REGIME_FORMULAS = {
    DampingRegime.OVER_DAMPED: over_damped_coefficients,
    DampingRegime.UNDER_DAMPED: under_damped_coefficients,
    DampingRegime.CRITICALLY_DAMPED: critically_damped_coefficients,
}


# ============================================================================
# Derivation
# ============================================================================


def derive_coefficients(
    dt: ScalarLike,
    angular_frequency: ScalarLike,
    damping_ratio: ScalarLike,
) -> SpringCoefficients:
    """
    Compute the coefficients that advance a damped spring by dt.

    Parameters
    ----------
    dt : float
        Time step [s]. Any real value is accepted; zero gives the identity
        (up to rounding) and negative values run the motion backwards.
    angular_frequency : float
        Natural frequency ω [rad/s], clamped to be non-negative
    damping_ratio : float
        Damping ratio ζ [-], clamped to be non-negative
            ζ > 1: over damped
            ζ = 1: critically damped
            ζ < 1: under damped

    Returns
    -------
    SpringCoefficients
        Coefficients valid for this (dt, ω, ζ) only

    Notes
    -----
    Never raises. Results are bit-reproducible for identical inputs.

    Examples
    --------
    >>> coeffs = derive_coefficients(0.1, 10.0, 1.0)
    >>> round(coeffs.pos_vel, 5)
    0.03679
    >>> derive_coefficients(0.1, 0.0, 0.3) == IDENTITY
    True
    """
    angular_frequency, damping_ratio = clamp_parameters(angular_frequency, damping_ratio)
    regime = classify_regime(angular_frequency, damping_ratio)

    # If there is no angular frequency, the spring will not move
    if regime is DampingRegime.ZERO_FREQUENCY:
        return IDENTITY

    return _REGIME_FORMULAS[regime](float(dt), angular_frequency, damping_ratio)


# ============================================================================
# Coefficient Cache
# ============================================================================


class CoefficientCache:
    """
    Memoizes derive_coefficients per (dt, ω, ζ) key.

    Useful when many springs share a time step, frequency and damping ratio:
    the transcendental functions are evaluated once per distinct triple.
    The oldest entry is evicted once max_size is reached.

    Not thread-safe; owned by its caller.

    Examples
    --------
    >>> cache = CoefficientCache(max_size=16)
    >>> a = cache.get(1 / 60, 10.0, 0.5)
    >>> b = cache.get(1 / 60, 10.0, 0.5)
    >>> a is b
    True
    >>> cache.get_stats()['hits']
    1
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._entries: Dict[Tuple[float, float, float], SpringCoefficients] = {}
        self._hits = 0
        self._misses = 0

    def get(
        self,
        dt: ScalarLike,
        angular_frequency: ScalarLike,
        damping_ratio: ScalarLike,
    ) -> SpringCoefficients:
        """Return cached coefficients, deriving them on a miss."""
        key = (float(dt), float(angular_frequency), float(damping_ratio))
        coeffs = self._entries.get(key)
        if coeffs is not None:
            self._hits += 1
            return coeffs

        self._misses += 1
        coeffs = derive_coefficients(*key)
        if len(self._entries) >= self.max_size:
            del self._entries[next(iter(self._entries))]
        self._entries[key] = coeffs
        return coeffs

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def get_stats(self) -> CacheStats:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._entries),
            "max_size": self.max_size,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[float, float, float]) -> bool:
        return tuple(float(k) for k in key) in self._entries

    def __repr__(self) -> str:
        return f"CoefficientCache({len(self._entries)}/{self.max_size} entries)"
