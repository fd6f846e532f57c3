# Copyright 2019 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Symplectic evolution of Gaussian states"""
import numpy as np

from ..shared_ops import add, approx_equal, matmul, matvec, symplectic_form, transpose
from .states import GaussianState


def apply_gate(gate, state):
    r"""Apply an affine symplectic map to a Gaussian state.

    .. math::
        \bar{\mathbf{r}} \mapsto S\bar{\mathbf{r}} + \mathbf{d},\qquad
        V \mapsto S V S^T

    Args:
        gate (CVGate): the map to apply
        state (GaussianState): input state, left untouched

    Returns:
        GaussianState: the transformed state

    Raises:
        ValueError: if the gate and the state act on a different number of modes
    """
    if gate.num_modes != state.num_modes:
        raise ValueError(
            "Gate acts on {} modes but the state has {} modes.".format(
                gate.num_modes, state.num_modes
            )
        )

    S = gate.S
    mean = add(matvec(S, state.means()), gate.d)
    cov = matmul(matmul(S, state.cov()), transpose(S))
    return GaussianState(state.num_modes, mean, cov)


def is_symplectic(S, num_modes, tol=1e-8):
    r"""Checks whether :math:`S\Omega S^T = \Omega` within a tolerance.

    Args:
        S (array): :math:`2n\times 2n` matrix
        num_modes (int): number of modes :math:`n`
        tol (float): absolute tolerance per entry

    Returns:
        bool: whether ``S`` preserves the symplectic form
    """
    S = np.asarray(S, dtype=np.float64)
    omega = symplectic_form(num_modes)
    if S.shape != omega.shape:
        return False
    return approx_equal(matmul(matmul(S, omega), transpose(S)), omega, tol=tol)
