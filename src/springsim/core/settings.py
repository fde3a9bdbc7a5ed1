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
Spring Settings

Designer-facing parameterization of a spring:
- SpringSettings: a (frequency, damping) value
- from_settle_duration: settle time -> (damping ratio, angular frequency)
- validate_settings: slider-range checks, done on the caller side

The core math accepts any non-negative frequency and damping; the slider
ranges (frequency in [0, 100], damping in [0, 2]) exist only here.
"""

import warnings
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from springsim.types.core import ScalarLike
from springsim.types.springs import (
    DAMPING_RANGE,
    DEFAULT_DAMPING,
    DEFAULT_FREQUENCY,
    EPSILON,
    FREQUENCY_RANGE,
)


def from_settle_duration(duration: ScalarLike) -> Tuple[float, float]:
    """
    Convert a settle duration into spring parameters.

    Closed-form, non-iterative approximation:

        ζ = -ln(ε) / (duration·√(π² + ln(ε)²))
        ω = √(1 - ζ²) / (2π·duration)

    with ε = EPSILON.

    Parameters
    ----------
    duration : float
        Settle duration [s], must be positive and finite

    Returns
    -------
    tuple
        (damping_ratio, angular_frequency)

    Raises
    ------
    ValueError
        If duration is not a positive finite number. A NaN here would
        poison every coefficient later derived for the spring.

    Notes
    -----
    ζ exceeds 1 for durations below about 0.946 s, at which point
    1 - ζ² is negative and the frequency comes out NaN. Such durations are
    rejected as well.

    Examples
    --------
    >>> damping, frequency = from_settle_duration(1.0)
    >>> round(damping, 4), round(frequency, 4)
    (0.9465, 0.0514)
    """
    duration = float(duration)
    if not np.isfinite(duration) or duration <= 0.0:
        raise ValueError(f"Settle duration must be positive and finite, got duration = {duration}")

    log_epsilon = np.log(EPSILON)
    damping_ratio = -log_epsilon / (np.sqrt(np.pi * np.pi + log_epsilon * log_epsilon) * duration)
    if damping_ratio > 1.0:
        raise ValueError(
            f"Settle duration {duration} is too short: damping ratio "
            f"{damping_ratio:.4f} exceeds 1 and the frequency is undefined"
        )
    angular_frequency = np.sqrt(1.0 - damping_ratio * damping_ratio) / (2.0 * np.pi * duration)

    return float(damping_ratio), float(angular_frequency)


@dataclass(frozen=True)
class SpringSettings:
    """
    Designer-facing spring parameters.

    Attributes
    ----------
    frequency : float
        Angular frequency [rad/s]
    damping : float
        Damping ratio [-]

    Examples
    --------
    >>> settings = SpringSettings(frequency=12.0, damping=0.6)
    >>> spring = Spring.from_settings(settings)
    >>>
    >>> settings = SpringSettings.from_duration(1.5)
    """

    frequency: float = DEFAULT_FREQUENCY
    damping: float = DEFAULT_DAMPING

    @classmethod
    def from_duration(cls, duration: ScalarLike) -> "SpringSettings":
        """Settings that settle in roughly duration seconds."""
        damping, frequency = from_settle_duration(duration)
        return cls(frequency=frequency, damping=damping)

    def clamped(self) -> "SpringSettings":
        """Copy with both fields clipped to the designer slider ranges."""
        return SpringSettings(
            frequency=float(np.clip(self.frequency, *FREQUENCY_RANGE)),
            damping=float(np.clip(self.damping, *DAMPING_RANGE)),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"frequency": self.frequency, "damping": self.damping}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "SpringSettings":
        return cls(frequency=float(data["frequency"]), damping=float(data["damping"]))


def validate_settings(settings: SpringSettings, strict: bool = False) -> SpringSettings:
    """
    Check settings against the designer slider ranges.

    Parameters
    ----------
    settings : SpringSettings
        Settings to check
    strict : bool
        If True, out-of-range values raise instead of warning

    Returns
    -------
    SpringSettings
        The settings, unchanged

    Raises
    ------
    ValueError
        If a value is not finite, or out of range with strict=True

    Warns
    -----
    UserWarning
        If a value is out of range with strict=False
    """
    checks = (
        ("frequency", settings.frequency, FREQUENCY_RANGE),
        ("damping", settings.damping, DAMPING_RANGE),
    )
    for name, value, (low, high) in checks:
        if not np.isfinite(value):
            raise ValueError(f"Spring {name} must be finite, got {name} = {value}")
        if low <= value <= high:
            continue
        message = f"Spring {name} = {value} is outside the designer range [{low}, {high}]"
        if strict:
            raise ValueError(message)
        warnings.warn(message, UserWarning)

    return settings
