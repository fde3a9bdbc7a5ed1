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

import math
import warnings

import numpy as np
import pytest

from springsim.core.settings import SpringSettings, from_settle_duration, validate_settings
from springsim.springs.spring import Spring
from springsim.types.springs import DEFAULT_DAMPING, DEFAULT_FREQUENCY, EPSILON


def expected_parameters(duration):
    log_eps = math.log(EPSILON)
    zeta = -log_eps / (duration * math.sqrt(math.pi**2 + log_eps**2))
    omega = math.sqrt(1.0 - zeta**2) / (2.0 * math.pi * duration)
    return zeta, omega


class TestFromSettleDuration:
    """Test the duration-to-parameters conversion"""

    @pytest.mark.parametrize("duration", [1.0, 1.5, 2.0, 5.0, 30.0])
    def test_matches_closed_form(self, duration):
        zeta, omega = from_settle_duration(duration)
        expected_zeta, expected_omega = expected_parameters(duration)

        assert zeta == pytest.approx(expected_zeta, rel=1e-12)
        assert omega == pytest.approx(expected_omega, rel=1e-12)

    def test_one_second(self):
        zeta, omega = from_settle_duration(1.0)
        assert zeta == pytest.approx(0.946456, abs=1e-6)
        assert omega == pytest.approx(0.0513806, abs=1e-6)

    def test_returns_damping_first(self):
        zeta, omega = from_settle_duration(3.0)
        assert 0.0 < zeta < 1.0
        assert omega > 0.0
        assert zeta == pytest.approx(0.946456 / 3.0, rel=1e-5)

    def test_longer_duration_lowers_damping(self):
        zetas = [from_settle_duration(d)[0] for d in (1.0, 2.0, 4.0, 8.0)]
        assert zetas == sorted(zetas, reverse=True)

    def test_integer_duration(self):
        assert from_settle_duration(2) == from_settle_duration(2.0)

    @pytest.mark.parametrize("duration", [0.0, -1.0, float("nan"), float("inf"), -float("inf")])
    def test_invalid_duration_raises(self, duration):
        with pytest.raises(ValueError, match="positive and finite"):
            from_settle_duration(duration)

    @pytest.mark.parametrize("duration", [0.5, 0.1, 0.9])
    def test_short_duration_raises(self, duration):
        """ζ > 1 would make the frequency NaN"""
        with pytest.raises(ValueError, match="too short"):
            from_settle_duration(duration)

    def test_results_are_finite(self):
        for duration in np.linspace(0.95, 20.0, 40):
            zeta, omega = from_settle_duration(duration)
            assert np.isfinite(zeta)
            assert np.isfinite(omega)

    def test_settle_check_within_duration(self):
        """
        One-second settings report settled well within a second.

        The frequency is tiny (≈ 0.051 rad/s), so velocity stays below the
        threshold from the first step even though position has barely moved.
        """
        damping, frequency = from_settle_duration(1.0)
        spring = Spring(frequency, damping)
        dt = 1.0 / 60.0

        result = spring.simulate(n_steps=120, dt=dt, equilibrium=1.0)

        assert result["settled_step"] is not None
        assert result["settled_step"] * dt <= 1.2
        assert np.abs(result["v"][:61]).max() < 0.01


class TestSpringSettings:
    """Test the settings value object"""

    def test_defaults(self):
        settings = SpringSettings()
        assert settings.frequency == DEFAULT_FREQUENCY
        assert settings.damping == DEFAULT_DAMPING

    def test_from_duration(self):
        settings = SpringSettings.from_duration(2.0)
        zeta, omega = from_settle_duration(2.0)
        assert settings.damping == zeta
        assert settings.frequency == omega

    def test_clamped(self):
        clamped = SpringSettings(frequency=250.0, damping=-0.5).clamped()
        assert clamped.frequency == 100.0
        assert clamped.damping == 0.0

    def test_clamped_leaves_in_range_values(self):
        settings = SpringSettings(frequency=12.0, damping=0.6)
        assert settings.clamped() == settings

    def test_frozen(self):
        settings = SpringSettings()
        with pytest.raises(Exception):
            settings.frequency = 3.0

    def test_dict_round_trip(self):
        settings = SpringSettings(frequency=7.5, damping=1.25)
        assert SpringSettings.from_dict(settings.to_dict()) == settings

    def test_builds_spring(self):
        spring = Spring.from_settings(SpringSettings(frequency=7.5, damping=1.25))
        assert spring.frequency == 7.5
        assert spring.damping == 1.25


class TestValidateSettings:
    """Test slider range checks"""

    def test_in_range_is_silent(self):
        settings = SpringSettings(frequency=50.0, damping=2.0)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert validate_settings(settings) is settings

    def test_bounds_are_inclusive(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            validate_settings(SpringSettings(frequency=0.0, damping=0.0))
            validate_settings(SpringSettings(frequency=100.0, damping=2.0))

    def test_out_of_range_warns(self):
        settings = SpringSettings(frequency=150.0, damping=0.5)
        with pytest.warns(UserWarning, match="frequency = 150.0 is outside"):
            result = validate_settings(settings)
        assert result is settings

    def test_negative_damping_warns(self):
        with pytest.warns(UserWarning, match="damping"):
            validate_settings(SpringSettings(frequency=10.0, damping=-0.1))

    def test_strict_raises(self):
        with pytest.raises(ValueError, match="outside the designer range"):
            validate_settings(SpringSettings(frequency=10.0, damping=3.0), strict=True)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_raises(self, value):
        with pytest.raises(ValueError, match="must be finite"):
            validate_settings(SpringSettings(frequency=value, damping=1.0))
