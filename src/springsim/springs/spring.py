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
Stateful scalar spring.

Wraps the closed-form spring math in an object that owns its position,
velocity, parameters and target, the way an animated property would.
"""

from typing import Callable, Optional

import numpy as np

from springsim.core.coefficients import SpringCoefficients, derive_coefficients
from springsim.core.motion import OscillatorParameters, OscillatorState, is_settled, step
from springsim.core.settings import SpringSettings
from springsim.types.core import EquilibriumInput, ScalarLike
from springsim.types.springs import SpringConfig, SpringSimulationResult


class Spring:
    """
    Damped spring animating one scalar value toward a target.

    Position, velocity and equilibrium start at zero. Every call to
    evaluate() re-derives the coefficients for the given dt, so frequency,
    damping, target and dt may all change between frames.

    Parameters
    ----------
    frequency : float
        Angular frequency ω [rad/s]; negative values act as zero
    damping : float
        Damping ratio ζ [-]; negative values act as zero

    Examples
    --------
    >>> spring = Spring(frequency=10.0, damping=0.5)
    >>> spring.set_equilibrium(1.0)
    >>> for _ in range(60):
    ...     position = spring.evaluate(1 / 60)
    >>> spring.is_settled()
    """

    def __init__(self, frequency: ScalarLike, damping: ScalarLike):
        self._params = OscillatorParameters(
            angular_frequency=float(frequency),
            damping_ratio=float(damping),
            equilibrium=0.0,
        )
        self._state = OscillatorState()
        self._coefficients: Optional[SpringCoefficients] = None

    @classmethod
    def from_settings(cls, settings: SpringSettings) -> "Spring":
        return cls(settings.frequency, settings.damping)

    @classmethod
    def from_config(cls, config: SpringConfig) -> "Spring":
        """Rebuild a spring from get_config() output."""
        spring = cls(config["frequency"], config["damping"])
        spring.set_equilibrium(config.get("equilibrium", 0.0))
        spring.set_position(config.get("position", 0.0))
        spring.set_velocity(config.get("velocity", 0.0))
        if "coefficients" in config:
            spring._coefficients = SpringCoefficients.from_dict(config["coefficients"])
        return spring

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def position(self) -> float:
        return self._state.position

    @property
    def velocity(self) -> float:
        return self._state.velocity

    @property
    def frequency(self) -> float:
        return self._params.angular_frequency

    @property
    def damping(self) -> float:
        return self._params.damping_ratio

    @property
    def equilibrium(self) -> float:
        return self._params.equilibrium

    @property
    def state(self) -> OscillatorState:
        """The live state; mutating it moves the spring."""
        return self._state

    @property
    def parameters(self) -> OscillatorParameters:
        return self._params

    @property
    def coefficients(self) -> Optional[SpringCoefficients]:
        """Coefficients used by the last evaluate(), None before the first."""
        return self._coefficients

    # ========================================================================
    # Setters
    # ========================================================================

    def set_position(self, position: ScalarLike) -> None:
        self._state.position = float(position)

    def set_velocity(self, velocity: ScalarLike) -> None:
        self._state.velocity = float(velocity)

    def set_frequency(self, frequency: ScalarLike) -> None:
        self._params.angular_frequency = float(frequency)

    def set_damping(self, damping: ScalarLike) -> None:
        self._params.damping_ratio = float(damping)

    def set_equilibrium(self, equilibrium: ScalarLike) -> None:
        self._params.equilibrium = float(equilibrium)

    def set_frequency_and_damping(self, frequency: ScalarLike, damping: ScalarLike) -> None:
        self.set_frequency(frequency)
        self.set_damping(damping)

    def reset(self) -> None:
        """Zero position and velocity and forget cached coefficients."""
        self._coefficients = None
        self._state.position = 0.0
        self._state.velocity = 0.0

    # ========================================================================
    # Evaluation
    # ========================================================================

    def evaluate(
        self,
        dt: ScalarLike,
        coefficients: Optional[SpringCoefficients] = None,
    ) -> float:
        """
        Advance the spring by dt toward its equilibrium.

        Parameters
        ----------
        dt : float
            Time step [s]
        coefficients : SpringCoefficients, optional
            Precomputed coefficients for (dt, frequency, damping). When
            omitted they are derived here. Passing coefficients derived
            for a different triple gives wrong motion.

        Returns
        -------
        float
            Updated position
        """
        if coefficients is None:
            coefficients = derive_coefficients(
                dt, self._params.angular_frequency, self._params.damping_ratio
            )
        self._coefficients = coefficients
        step(self._state, self._params.equilibrium, coefficients)
        return self._state.position

    def is_settled(self) -> bool:
        """True when |velocity| <= 0.01 (see core.motion.is_settled)."""
        return is_settled(self._state)

    # Alias kept for animation code written against is_over()
    is_over = is_settled

    def simulate(
        self,
        n_steps: int,
        dt: ScalarLike,
        equilibrium: EquilibriumInput = None,
    ) -> SpringSimulationResult:
        """
        Roll the spring forward without changing it.

        Starts from the current state and runs n_steps fixed steps of dt on a
        copy. Coefficients are derived once and reused for every step.

        Parameters
        ----------
        n_steps : int
            Number of steps, at least 1
        dt : float
            Time step [s]
        equilibrium : None, float, sequence or callable
            Target per step:
            - None: the spring's current equilibrium
            - float: constant target
            - sequence: equilibrium[k] for k < n_steps
            - callable: equilibrium(k)

        Returns
        -------
        SpringSimulationResult
            Positions and velocities including the initial state, the
            targets used, and the first step at which the spring reported
            settled (None if it never did)

        Examples
        --------
        >>> spring = Spring(frequency=10.0, damping=0.3)
        >>> result = spring.simulate(n_steps=120, dt=1 / 60, equilibrium=1.0)
        >>> result['x'].shape
        (121,)
        """
        if n_steps < 1:
            raise ValueError(f"n_steps must be at least 1, got {n_steps}")

        target_func = self._prepare_equilibrium_sequence(equilibrium, n_steps)
        coefficients = derive_coefficients(
            dt, self._params.angular_frequency, self._params.damping_ratio
        )

        state = self._state.copy()
        positions = np.zeros(n_steps + 1)
        velocities = np.zeros(n_steps + 1)
        targets = np.zeros(n_steps)
        positions[0] = state.position
        velocities[0] = state.velocity

        settled_step = None
        for k in range(n_steps):
            targets[k] = target_func(k)
            step(state, targets[k], coefficients)
            positions[k + 1] = state.position
            velocities[k + 1] = state.velocity
            if settled_step is None and is_settled(state):
                settled_step = k + 1

        if settled_step is None:
            message = f"Not settled after {n_steps} steps"
        else:
            message = f"Settled at step {settled_step}"

        return {
            "t": np.arange(n_steps + 1) * float(dt),
            "x": positions,
            "v": velocities,
            "equilibrium": targets,
            "dt": float(dt),
            "settled_step": settled_step,
            "success": True,
            "message": message,
            "metadata": {
                "frequency": self._params.angular_frequency,
                "damping": self._params.damping_ratio,
                "coefficients": coefficients.to_dict(),
            },
        }

    def _prepare_equilibrium_sequence(
        self, equilibrium: EquilibriumInput, n_steps: int
    ) -> Callable[[int], float]:
        """Convert the supported target formats to k -> target."""
        if equilibrium is None:
            target = self._params.equilibrium
            return lambda k: target

        if callable(equilibrium):
            return lambda k: float(equilibrium(k))

        targets = np.asarray(equilibrium, dtype=float)
        if targets.ndim == 0:
            target = float(targets)
            return lambda k: target

        if targets.ndim != 1 or targets.shape[0] < n_steps:
            raise ValueError(
                f"Equilibrium sequence must be 1-D with at least {n_steps} entries, "
                f"got shape {targets.shape}"
            )
        return lambda k: float(targets[k])

    # ========================================================================
    # Serialization
    # ========================================================================

    def get_config(self) -> SpringConfig:
        """Plain-number snapshot of parameters, state and last coefficients."""
        config: SpringConfig = {
            "frequency": self._params.angular_frequency,
            "damping": self._params.damping_ratio,
            "equilibrium": self._params.equilibrium,
            "position": self._state.position,
            "velocity": self._state.velocity,
        }
        if self._coefficients is not None:
            config["coefficients"] = self._coefficients.to_dict()
        return config

    def __repr__(self) -> str:
        return (
            f"Spring(frequency={self.frequency}, damping={self.damping}, "
            f"position={self.position:.4g}, velocity={self.velocity:.4g}, "
            f"equilibrium={self.equilibrium})"
        )
