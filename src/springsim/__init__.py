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
springsim - closed-form damped springs for animation.

Advances a damped harmonic oscillator by exact per-step coefficients, so
motion is free of integration error and stable for any time step.

>>> from springsim import Spring, derive_coefficients, step, OscillatorState
>>>
>>> spring = Spring(frequency=10.0, damping=0.5)
>>> spring.set_equilibrium(1.0)
>>> spring.evaluate(1 / 60)
>>>
>>> # Derive once, apply to many states
>>> coeffs = derive_coefficients(1 / 60, 10.0, 0.5)
>>> states = [OscillatorState(position=p) for p in (0.0, 0.5, 2.0)]
>>> for state in states:
...     step(state, 1.0, coeffs)
"""

from .core import (
    IDENTITY,
    CoefficientCache,
    OscillatorParameters,
    OscillatorState,
    SpringCoefficients,
    SpringSettings,
    advance,
    classify_regime,
    derive_coefficients,
    from_settle_duration,
    is_settled,
    step,
    step_batch,
    validate_settings,
)
from .springs import Spring, Spring3
from .types import EPSILON, SETTLE_VELOCITY_THRESHOLD, DampingRegime

__version__ = "1.0.0"

__all__ = [
    "IDENTITY",
    "CoefficientCache",
    "DampingRegime",
    "EPSILON",
    "OscillatorParameters",
    "OscillatorState",
    "SETTLE_VELOCITY_THRESHOLD",
    "Spring",
    "Spring3",
    "SpringCoefficients",
    "SpringSettings",
    "advance",
    "classify_regime",
    "derive_coefficients",
    "from_settle_duration",
    "is_settled",
    "step",
    "step_batch",
    "validate_settings",
]
