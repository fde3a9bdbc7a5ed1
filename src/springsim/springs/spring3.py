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
Three-axis spring built from three independent scalar springs.

There is no coupling between axes: each axis is a plain Spring and evolves
exactly as it would on its own.
"""

from typing import Tuple

import numpy as np

from springsim.core.coefficients import derive_coefficients
from springsim.springs.spring import Spring
from springsim.types.core import AxisParameter, ScalarLike, Vector3, Vector3Like


def _per_axis(value: AxisParameter, name: str) -> np.ndarray:
    """Broadcast a scalar or length-3 value to a (3,) float array."""
    values = np.asarray(value, dtype=float)
    if values.ndim == 0:
        return np.full(3, float(values))
    if values.shape != (3,):
        raise ValueError(f"{name} must be a scalar or have shape (3,), got shape {values.shape}")
    return values


class Spring3:
    """
    Vector spring: x, y and z axes, each a Spring.

    Parameters
    ----------
    frequency : float or (3,) array
        Angular frequency shared by all axes, or one per axis
    damping : float or (3,) array
        Damping ratio shared by all axes, or one per axis

    Examples
    --------
    >>> spring = Spring3(frequency=10.0, damping=0.7)
    >>> spring.set_equilibrium([1.0, 2.0, 3.0])
    >>> position = spring.evaluate(1 / 60)
    >>>
    >>> # Per-axis tuning
    >>> spring = Spring3(frequency=[10.0, 5.0, 20.0], damping=1.0)
    >>> spring.y.set_damping(0.2)
    """

    def __init__(self, frequency: AxisParameter, damping: AxisParameter):
        frequencies = _per_axis(frequency, "frequency")
        dampings = _per_axis(damping, "damping")
        self.x = Spring(frequencies[0], dampings[0])
        self.y = Spring(frequencies[1], dampings[1])
        self.z = Spring(frequencies[2], dampings[2])

    @property
    def axes(self) -> Tuple[Spring, Spring, Spring]:
        return self.x, self.y, self.z

    @property
    def position(self) -> Vector3:
        return np.array([axis.position for axis in self.axes])

    @property
    def velocity(self) -> Vector3:
        return np.array([axis.velocity for axis in self.axes])

    @property
    def equilibrium(self) -> Vector3:
        return np.array([axis.equilibrium for axis in self.axes])

    def set_frequency(self, frequency: AxisParameter) -> None:
        for axis, value in zip(self.axes, _per_axis(frequency, "frequency")):
            axis.set_frequency(value)

    def set_damping(self, damping: AxisParameter) -> None:
        for axis, value in zip(self.axes, _per_axis(damping, "damping")):
            axis.set_damping(value)

    def set_frequency_and_damping(self, frequency: AxisParameter, damping: AxisParameter) -> None:
        frequencies = _per_axis(frequency, "frequency")
        dampings = _per_axis(damping, "damping")
        for axis, f, d in zip(self.axes, frequencies, dampings):
            axis.set_frequency_and_damping(f, d)

    def set_equilibrium(self, equilibrium: Vector3Like) -> None:
        for axis, value in zip(self.axes, _per_axis(equilibrium, "equilibrium")):
            axis.set_equilibrium(value)

    def set_position(self, position: Vector3Like) -> None:
        for axis, value in zip(self.axes, _per_axis(position, "position")):
            axis.set_position(value)

    def set_velocity(self, velocity: Vector3Like) -> None:
        for axis, value in zip(self.axes, _per_axis(velocity, "velocity")):
            axis.set_velocity(value)

    def reset(self) -> None:
        for axis in self.axes:
            axis.reset()

    def shares_parameters(self) -> bool:
        """True when all three axes have the same frequency and damping."""
        return (
            self.x.frequency == self.y.frequency == self.z.frequency
            and self.x.damping == self.y.damping == self.z.damping
        )

    def evaluate(self, dt: ScalarLike) -> Vector3:
        """
        Advance all three axes by dt.

        When the axes share frequency and damping the coefficients are
        derived once and applied to each axis.

        Returns
        -------
        np.ndarray
            Updated position (3,)
        """
        if self.shares_parameters():
            coefficients = derive_coefficients(dt, self.x.frequency, self.x.damping)
            return np.array([axis.evaluate(dt, coefficients) for axis in self.axes])
        return np.array([axis.evaluate(dt) for axis in self.axes])

    def is_settled(self) -> bool:
        """True when every axis is settled."""
        return all(axis.is_settled() for axis in self.axes)

    def __repr__(self) -> str:
        return f"Spring3(position={self.position}, equilibrium={self.equilibrium})"
