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
r"""Non-unitary Gaussian channels.

Every channel in this module is a deterministic Gaussian CPTP map
:math:`(X, Y)` acting on a single mode,

.. math::
    \bar{\mathbf{r}} \mapsto X\bar{\mathbf{r}},\qquad V \mapsto XVX^T + Y,

where :math:`X` is the identity except for the two diagonal entries of the
target mode, and :math:`Y` is non-zero only on those same entries.
"""
import numbers

import numpy as np

from schrosim.parameters import check_nbar, check_transmissivity, check_variance
from schrosim.program_utils import RegRefError

from ..shared_ops import add, identity, matmul, matvec, quad_indices, transpose, zeros
from .states import GaussianState


def _check_mode(state, mode):
    if isinstance(mode, bool) or not isinstance(mode, numbers.Integral):
        raise RegRefError("Mode must be an integer, got {!r}.".format(mode))
    if not 0 <= mode < state.num_modes:
        raise RegRefError(
            "Mode {} does not exist in a {} mode state.".format(mode, state.num_modes)
        )


def expand_xy(mode, num_modes, x, y):
    r"""Expands a single mode channel :math:`(x I_2, y I_2)` to the whole register.

    Args:
        mode (int): mode the channel acts on
        num_modes (int): total number of modes
        x (float): multiplicative factor on the mode's quadratures
        y (float): variance added to each of the mode's quadratures

    Returns:
        tuple[array, array]: the matrices ``(X, Y)``
    """
    dim = 2 * num_modes
    X = identity(dim)
    Y = zeros(dim, dim)
    for i in quad_indices(mode):
        X[i, i] = x
        Y[i, i] = y
    return X, Y


def apply_channel(state, X, Y):
    r"""Transforms the state according to a deterministic Gaussian CPTP map.

    Args:
        state (GaussianState): input state
        X (array): matrix for multiplicative part of transformation
        Y (array): matrix for additive part of transformation

    Returns:
        GaussianState: the transformed state
    """
    mean = matvec(X, state.means())
    cov = add(matmul(matmul(X, state.cov()), transpose(X)), Y)
    return GaussianState(state.num_modes, mean, cov)


def apply_loss(state, mode, T):
    r"""Implements a loss channel in a mode.

    The amplitude of the mode is attenuated by :math:`\sqrt{T}` and vacuum
    noise of variance :math:`(1-T)/2` is mixed in. For :math:`T=1` the state is
    unchanged; for :math:`T=0` the mode is replaced by the vacuum.

    Args:
        state (GaussianState): input state
        mode (int): mode that loses energy
        T (float): energy transmissivity, :math:`0\leq T\leq 1`

    Returns:
        GaussianState: the attenuated state

    Raises:
        RegRefError: if the mode does not exist
        ParameterError: if ``T`` lies outside of :math:`[0, 1]`
    """
    _check_mode(state, mode)
    T = check_transmissivity(T)

    X, Y = expand_xy(mode, state.num_modes, np.sqrt(T), (1 - T) / 2)
    return apply_channel(state, X, Y)


def apply_thermal_loss(state, mode, T, nbar):
    r"""Implements the thermal loss channel in a mode.

    Same attenuation as :func:`apply_loss`, but the environment is a thermal
    state with mean photon number :math:`\bar{n}`, so the injected variance is
    :math:`(1-T)(2\bar{n}+1)/2`. With :math:`\bar{n}=0` this is exactly the
    loss channel.

    Args:
        state (GaussianState): input state
        mode (int): mode that undergoes thermal loss
        T (float): energy transmissivity, :math:`0\leq T\leq 1`
        nbar (float): mean photon number of the thermal bath

    Returns:
        GaussianState: the attenuated state

    Raises:
        RegRefError: if the mode does not exist
        ParameterError: if ``T`` lies outside of :math:`[0, 1]`, or ``nbar`` is negative
    """
    _check_mode(state, mode)
    T = check_transmissivity(T)
    nbar = check_nbar(nbar)

    X, Y = expand_xy(mode, state.num_modes, np.sqrt(T), (1 - T) * (2 * nbar + 1) / 2)
    return apply_channel(state, X, Y)


def apply_additive_noise(state, mode, vq, vp):
    """Adds independent classical Gaussian noise to the quadratures of a mode.

    Only the two diagonal covariance entries of the mode change; the vector
    of means is untouched.

    Args:
        state (GaussianState): input state
        mode (int): mode receiving the noise
        vq (float): variance added to the position quadrature
        vp (float): variance added to the momentum quadrature

    Returns:
        GaussianState: the noisy state

    Raises:
        RegRefError: if the mode does not exist
        ParameterError: if either variance is negative or not finite
    """
    _check_mode(state, mode)
    vq = check_variance("Position noise variance", vq)
    vp = check_variance("Momentum noise variance", vp)

    iq, ip = quad_indices(mode)
    cov = np.array(state.cov())
    cov[iq, iq] += vq
    cov[ip, ip] += vp
    return GaussianState(state.num_modes, state.means(), cov)
