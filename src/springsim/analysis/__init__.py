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
Spring Analysis
===============

>>> from springsim.analysis import compute_characteristics, transition_matrix
>>>
>>> chars = compute_characteristics(10.0, 0.3)
>>> Ad = transition_matrix(1 / 60, 10.0, 0.3)   # scipy reference
>>>
>>> from springsim.analysis import symbolic_coefficients, ode_residual
>>> M = symbolic_coefficients(DampingRegime.UNDER_DAMPED)
"""

from .characteristics import (
    compute_characteristics,
    discrete_eigenvalues,
    state_matrix,
    transition_matrix,
)
from .symbolic import coefficient_functions, ode_residual, symbolic_coefficients

__all__ = [
    "compute_characteristics",
    "discrete_eigenvalues",
    "state_matrix",
    "transition_matrix",
    "coefficient_functions",
    "ode_residual",
    "symbolic_coefficients",
]
