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
Spring Motion

Applies derived coefficients to oscillator state:

    old_pos = position - equilibrium
    position = pos_pos·old_pos + pos_vel·velocity + equilibrium
    velocity = vel_pos·old_pos + vel_vel·velocity

Derivation and application are separate so a caller can derive once and
apply the same coefficients to many independent states (see step_batch).
advance() is the convenience composition used when coefficients are
recomputed every step.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from springsim.core.coefficients import CoefficientCache, SpringCoefficients, derive_coefficients
from springsim.types.core import ArrayLike, ScalarLike
from springsim.types.springs import SETTLE_VELOCITY_THRESHOLD


@dataclass
class OscillatorState:
    """
    Mutable position/velocity pair of one spring.

    Owned by whatever is being animated and mutated in place by step().
    """

    position: float = 0.0
    velocity: float = 0.0

    def copy(self) -> "OscillatorState":
        return OscillatorState(self.position, self.velocity)

    def to_dict(self) -> Dict[str, float]:
        return {"position": self.position, "velocity": self.velocity}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "OscillatorState":
        return cls(position=float(data["position"]), velocity=float(data["velocity"]))


@dataclass
class OscillatorParameters:
    """
    Physical parameters of one spring.

    Attributes
    ----------
    angular_frequency : float
        Natural frequency ω [rad/s]; negative values act as zero
    damping_ratio : float
        Damping ratio ζ [-]; negative values act as zero
    equilibrium : float
        Target the position relaxes toward. May change between steps.
    """

    angular_frequency: float
    damping_ratio: float
    equilibrium: float = 0.0


def step(
    state: OscillatorState,
    equilibrium: ScalarLike,
    coefficients: SpringCoefficients,
) -> None:
    """
    Advance a state by one step, in place.

    Parameters
    ----------
    state : OscillatorState
        State to update
    equilibrium : float
        Position to approach
    coefficients : SpringCoefficients
        Coefficients derived for the dt being advanced

    Examples
    --------
    >>> state = OscillatorState(position=1.0)
    >>> step(state, 0.0, derive_coefficients(0.1, 10.0, 1.0))
    >>> round(state.position, 4)
    0.7358
    """
    # update in equilibrium relative space
    old_pos = state.position - equilibrium
    old_vel = state.velocity

    state.position = old_pos * coefficients.pos_pos + old_vel * coefficients.pos_vel + equilibrium
    state.velocity = old_pos * coefficients.vel_pos + old_vel * coefficients.vel_vel


def step_batch(
    positions: np.ndarray,
    velocities: np.ndarray,
    equilibrium: ArrayLike,
    coefficients: SpringCoefficients,
) -> None:
    """
    Advance many independent springs sharing one coefficient set, in place.

    Parameters
    ----------
    positions : np.ndarray
        Float array of positions, any shape; overwritten
    velocities : np.ndarray
        Float array of velocities, same shape as positions; overwritten
    equilibrium : float or array
        Target(s), broadcastable to positions
    coefficients : SpringCoefficients
        Coefficients shared by every spring in the batch

    Examples
    --------
    >>> x = np.linspace(-1.0, 1.0, 1000)
    >>> v = np.zeros_like(x)
    >>> step_batch(x, v, 0.0, derive_coefficients(1 / 60, 10.0, 0.5))
    """
    if positions.shape != velocities.shape:
        raise ValueError(
            f"positions and velocities must have the same shape, "
            f"got {positions.shape} and {velocities.shape}"
        )

    equilibrium = np.asarray(equilibrium, dtype=positions.dtype)
    old_pos = positions - equilibrium
    old_vel = velocities.copy()

    np.multiply(old_pos, coefficients.pos_pos, out=positions)
    positions += old_vel * coefficients.pos_vel
    positions += equilibrium

    np.multiply(old_pos, coefficients.vel_pos, out=velocities)
    velocities += old_vel * coefficients.vel_vel


def advance(
    params: OscillatorParameters,
    state: OscillatorState,
    dt: ScalarLike,
    cache: Optional[CoefficientCache] = None,
) -> float:
    """
    Derive coefficients for dt and apply them to state.

    Parameters
    ----------
    params : OscillatorParameters
        Frequency, damping and equilibrium
    state : OscillatorState
        State to update in place
    dt : float
        Time step [s]
    cache : CoefficientCache, optional
        If given, coefficients are looked up instead of re-derived

    Returns
    -------
    float
        Updated position
    """
    if cache is not None:
        coefficients = cache.get(dt, params.angular_frequency, params.damping_ratio)
    else:
        coefficients = derive_coefficients(dt, params.angular_frequency, params.damping_ratio)
    step(state, params.equilibrium, coefficients)
    return state.position


def is_settled(state: OscillatorState, threshold: float = SETTLE_VELOCITY_THRESHOLD) -> bool:
    """
    Coarse settle check: |velocity| <= threshold.

    Position error is ignored and the threshold is absolute, so a spring
    momentarily at rest at the far end of a swing also reports settled.
    """
    return abs(state.velocity) <= threshold
