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
Symbolic closed forms of the spring coefficients.

Builds the per-regime coefficient matrices as SymPy expressions in the
symbols (t, omega, zeta), so they can be inspected, differentiated and
compiled to NumPy callables:

    M(t) = [[pos_pos(t), pos_vel(t)],
            [vel_pos(t), vel_vel(t)]]

Each column of M is the response to a unit initial position or unit
initial velocity. ode_residual() checks that both columns solve
ẍ + 2ζω·ẋ + ω²·x = 0 and that the velocity row is the derivative of the
position row.

Examples
--------
>>> M = symbolic_coefficients(DampingRegime.CRITICALLY_DAMPED)
>>> M[0, 1]
t*exp(-omega*t)
>>> f = coefficient_functions(DampingRegime.UNDER_DAMPED)
>>> f(0.1, 10.0, 0.5)  # 2×2 ndarray
"""

from typing import Callable, Tuple

import numpy as np
import sympy as sp

from springsim.types.springs import DampingRegime

t, omega, zeta = sp.symbols("t omega zeta", positive=True, real=True)
"""Time step, angular frequency and damping ratio symbols."""

SYMBOLS: Tuple[sp.Symbol, sp.Symbol, sp.Symbol] = (t, omega, zeta)


def symbolic_coefficients(regime: DampingRegime) -> sp.Matrix:
    """
    Closed-form coefficient matrix for a regime.

    Parameters
    ----------
    regime : DampingRegime
        Regime whose formulas to build

    Returns
    -------
    sp.Matrix
        2×2 matrix in the symbols (t, omega, zeta)
    """
    if regime is DampingRegime.ZERO_FREQUENCY:
        return sp.eye(2)

    if regime is DampingRegime.OVER_DAMPED:
        za = -omega * zeta
        zb = omega * sp.sqrt(zeta**2 - 1)
        z1 = za - zb
        z2 = za + zb
        e1 = sp.exp(z1 * t)
        e2 = sp.exp(z2 * t)
        inv_two_zb = 1 / (2 * zb)
        return sp.Matrix(
            [
                [
                    e1 * inv_two_zb * z2 - z2 * e2 * inv_two_zb + e2,
                    -e1 * inv_two_zb + e2 * inv_two_zb,
                ],
                [
                    (z1 * e1 * inv_two_zb - z2 * e2 * inv_two_zb + e2) * z2,
                    -z1 * e1 * inv_two_zb + z2 * e2 * inv_two_zb,
                ],
            ]
        )

    if regime is DampingRegime.UNDER_DAMPED:
        omega_zeta = omega * zeta
        alpha = omega * sp.sqrt(1 - zeta**2)
        exp_term = sp.exp(-omega_zeta * t)
        cos_term = sp.cos(alpha * t)
        sin_term = sp.sin(alpha * t)
        exp_omega_zeta_sin_over_alpha = exp_term * omega_zeta * sin_term / alpha
        return sp.Matrix(
            [
                [
                    exp_term * cos_term + exp_omega_zeta_sin_over_alpha,
                    exp_term * sin_term / alpha,
                ],
                [
                    -exp_term * sin_term * alpha - omega_zeta * exp_omega_zeta_sin_over_alpha,
                    exp_term * cos_term - exp_omega_zeta_sin_over_alpha,
                ],
            ]
        )

    if regime is DampingRegime.CRITICALLY_DAMPED:
        exp_term = sp.exp(-omega * t)
        time_exp = t * exp_term
        return sp.Matrix(
            [
                [time_exp * omega + exp_term, time_exp],
                [-omega * time_exp * omega, -time_exp * omega + exp_term],
            ]
        )

    raise ValueError(f"Unknown damping regime: {regime}")


def coefficient_functions(regime: DampingRegime) -> Callable[[float, float, float], np.ndarray]:
    """
    Compile a regime's coefficient matrix to a NumPy callable.

    Returns
    -------
    Callable
        f(t, omega, zeta) -> np.ndarray (2, 2)
    """
    compiled = sp.lambdify(SYMBOLS, symbolic_coefficients(regime), modules="numpy")

    def evaluate(dt: float, angular_frequency: float, damping_ratio: float) -> np.ndarray:
        return np.asarray(compiled(dt, angular_frequency, damping_ratio), dtype=float)

    return evaluate


def ode_residual(regime: DampingRegime) -> sp.Matrix:
    """
    Residuals of the spring equations for a regime's closed forms.

    Row 0 holds ẍ + 2ζω·ẋ + ω²·x for each column's position entry.
    Row 1 holds (velocity entry) - d/dt (position entry).
    All four entries are identically zero for an exact solution.

    Raises
    ------
    ValueError
        For ZERO_FREQUENCY, whose identity update is a short-circuit
        (the spring is frozen) rather than a solution of the ODE.
    """
    if regime is DampingRegime.ZERO_FREQUENCY:
        raise ValueError("The zero-frequency identity update is not an ODE solution")

    M = symbolic_coefficients(regime)
    residual = sp.zeros(2, 2)
    for j in range(2):
        position = M[0, j]
        d_position = sp.diff(position, t)
        residual[0, j] = sp.diff(position, t, 2) + 2 * zeta * omega * d_position + omega**2 * position
        residual[1, j] = M[1, j] - d_position
    return residual
