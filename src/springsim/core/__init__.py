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
Core Spring Math
================

Pure functions and small value types that make up the closed-form spring:

Coefficients (coefficients.py):
    derive_coefficients(dt, ω, ζ) → SpringCoefficients
    classify_regime(ω, ζ) → DampingRegime
    CoefficientCache: per-(dt, ω, ζ) memoization

Motion (motion.py):
    step(state, equilibrium, coefficients)   in-place update
    step_batch(positions, velocities, ...)   in-place update of many springs
    advance(params, state, dt) → position    derive + step
    is_settled(state) → bool

Settings (settings.py):
    from_settle_duration(duration) → (ζ, ω)
    SpringSettings, validate_settings
"""

from .coefficients import (
    IDENTITY,
    CoefficientCache,
    SpringCoefficients,
    clamp_parameters,
    classify_regime,
    critically_damped_coefficients,
    derive_coefficients,
    over_damped_coefficients,
    under_damped_coefficients,
)
from .motion import (
    OscillatorParameters,
    OscillatorState,
    advance,
    is_settled,
    step,
    step_batch,
)
from .settings import SpringSettings, from_settle_duration, validate_settings

__all__ = [
    # Coefficients
    "IDENTITY",
    "CoefficientCache",
    "SpringCoefficients",
    "clamp_parameters",
    "classify_regime",
    "critically_damped_coefficients",
    "derive_coefficients",
    "over_damped_coefficients",
    "under_damped_coefficients",
    # Motion
    "OscillatorParameters",
    "OscillatorState",
    "advance",
    "is_settled",
    "step",
    "step_batch",
    # Settings
    "SpringSettings",
    "from_settle_duration",
    "validate_settings",
]
