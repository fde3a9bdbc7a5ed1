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
Spring characteristics and reference solutions.

Physical Interpretation
-----------------------
For ẍ + 2ζω·ẋ + ω²·x = 0 the continuous-time state matrix is

    A = [[0,    1  ],
         [-ω², -2ζω]]

and the exact one-step transition matrix is expm(A·dt). The closed-form
coefficients in springsim.core must equal it; transition_matrix() computes
it numerically with scipy as an independent reference.

Key quantities:
- Damped frequency: ωd = ω√(1 - ζ²)  (under-damped only)
- Decay rate: ζω for ζ ≤ 1, ω(ζ - √(ζ² - 1)) for ζ > 1 (slowest root)
- Quality factor: Q = 1/(2ζ)
- Settling time (2% criterion): ts ≈ 4/decay_rate
- Percent overshoot: 100·exp(-ζπ/√(1 - ζ²))
"""

import numpy as np
from scipy import linalg

from springsim.core.coefficients import SpringCoefficients, clamp_parameters, classify_regime
from springsim.types.core import ScalarLike
from springsim.types.springs import DampingRegime, SpringCharacteristics


def state_matrix(angular_frequency: ScalarLike, damping_ratio: ScalarLike) -> np.ndarray:
    """Continuous-time state matrix A (2×2), parameters clamped."""
    omega, zeta = clamp_parameters(angular_frequency, damping_ratio)
    return np.array([[0.0, 1.0], [-(omega**2), -2.0 * zeta * omega]])


def transition_matrix(
    dt: ScalarLike, angular_frequency: ScalarLike, damping_ratio: ScalarLike
) -> np.ndarray:
    """
    Exact transition matrix expm(A·dt) computed with scipy.

    Parameters
    ----------
    dt : float
        Time step [s]
    angular_frequency : float
        Natural frequency ω [rad/s]
    damping_ratio : float
        Damping ratio ζ [-]

    Returns
    -------
    np.ndarray
        [[pos_pos, pos_vel], [vel_pos, vel_vel]] (2×2)

    Examples
    --------
    >>> Ad = transition_matrix(0.1, 10.0, 1.0)
    >>> coeffs = derive_coefficients(0.1, 10.0, 1.0)
    >>> np.allclose(Ad, coeffs.as_matrix())
    True
    """
    return linalg.expm(state_matrix(angular_frequency, damping_ratio) * float(dt))


def discrete_eigenvalues(coefficients: SpringCoefficients) -> np.ndarray:
    """
    Eigenvalues of the one-step transition matrix.

    For an exact discretization these are exp(s·dt) for the continuous
    poles s; all have magnitude <= 1 for dt >= 0.
    """
    return np.linalg.eigvals(coefficients.as_matrix())


def compute_characteristics(
    angular_frequency: ScalarLike, damping_ratio: ScalarLike
) -> SpringCharacteristics:
    """
    Compute physical characteristics of a spring.

    Uses the same ε-banded regime classification as the coefficient
    derivation, so a ζ within ε of 1 is reported as critically damped.

    Returns
    -------
    SpringCharacteristics
        Dictionary with regime, frequencies, periods, decay and step
        response metrics

    Examples
    --------
    >>> chars = compute_characteristics(10.0, 0.3)
    >>> chars['regime']
    <DampingRegime.UNDER_DAMPED: 'under_damped'>
    >>> round(chars['settling_time'], 3)
    1.333
    """
    omega, zeta = clamp_parameters(angular_frequency, damping_ratio)
    regime = classify_regime(omega, zeta)

    if regime is DampingRegime.ZERO_FREQUENCY:
        damped_frequency = 0.0
        decay_rate = 0.0
    elif regime is DampingRegime.UNDER_DAMPED:
        damped_frequency = omega * np.sqrt(1.0 - zeta**2)
        decay_rate = zeta * omega
    elif regime is DampingRegime.CRITICALLY_DAMPED:
        damped_frequency = 0.0
        decay_rate = omega
    else:
        damped_frequency = 0.0
        decay_rate = omega * (zeta - np.sqrt(zeta**2 - 1.0))

    if regime is DampingRegime.UNDER_DAMPED:
        overshoot = 100.0 * np.exp(-zeta * np.pi / np.sqrt(1.0 - zeta**2))
    else:
        overshoot = 0.0

    time_constant = 1.0 / decay_rate if decay_rate > 0 else np.inf

    return {
        "regime": regime,
        "angular_frequency": omega,
        "damping_ratio": zeta,
        "damped_frequency": float(damped_frequency),
        "decay_rate": float(decay_rate),
        "quality_factor": 1.0 / (2.0 * zeta) if zeta > 0 else np.inf,
        "natural_period": 2.0 * np.pi / omega if omega > 0 else np.inf,
        "damped_period": 2.0 * np.pi / damped_frequency if damped_frequency > 0 else np.inf,
        "time_constant": float(time_constant),
        "settling_time": float(4.0 * time_constant),
        "overshoot": float(overshoot),
    }
