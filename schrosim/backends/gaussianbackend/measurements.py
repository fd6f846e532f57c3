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
r"""Gaussian measurements: conditioning and sampling.

A measurement of a linear combination :math:`\mathbf{y} = H\mathbf{r} + \boldsymbol{\epsilon}`
of the quadratures of a Gaussian state, with Gaussian measurement noise
:math:`\boldsymbol{\epsilon}\sim\mathcal{N}(0, R)`, leaves the state Gaussian.
Conditioning on an outcome is the Kalman update

.. math::
    S = HVH^T + R,\qquad K = VH^TS^{-1},\qquad
    \bar{\mathbf{r}}' = \bar{\mathbf{r}} + K(\mathbf{y} - H\bar{\mathbf{r}}),\qquad
    V' = V - KHV.

Homodyne detection measures the single quadrature
:math:`x_\phi = q\cos\phi + p\sin\phi` of one mode, optionally with a classical
noise variance :math:`v`. Heterodyne detection measures :math:`(q, p)` of one
mode jointly, with the vacuum noise :math:`R = \frac{1}{2}I_2` it inherently adds.

The sampling functions draw an outcome from the predictive distribution
:math:`\mathcal{N}(H\bar{\mathbf{r}}, S)` and then condition on it. Randomness
always comes from an explicitly supplied :class:`numpy.random.Generator`.
"""
import numbers

import numpy as np

from schrosim.parameters import check_variance
from schrosim.program_utils import RegRefError

from ..shared_ops import (
    SINGULAR_TOL,
    add,
    dot,
    inv2x2,
    matmul,
    matvec,
    outer,
    quad_indices,
    scale,
    sub,
    transpose,
    zeros,
)
from .states import GaussianState


#: array: added vacuum noise of a heterodyne measurement
HETERODYNE_NOISE = np.array([[0.5, 0.0], [0.0, 0.5]])


class MeasurementError(RuntimeError):
    """Exception raised when a measurement cannot be conditioned on or sampled from.

    E.g., a homodyne measurement of a quadrature with zero variance.
    """


def make_rng(seed=None):
    """Normalizes a source of randomness into a :class:`numpy.random.Generator`.

    Args:
        seed (None, int, numpy.random.Generator): an existing generator is returned
            unchanged; an integer seeds a new generator; ``None`` draws fresh entropy

    Returns:
        numpy.random.Generator: the random number generator
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def standard_normal(rng):
    r"""Draws one standard normal variate with the Box-Muller transform.

    .. math:: z = \sqrt{-2\ln u_1}\cos(2\pi u_2),\qquad u_1, u_2\sim U[0, 1)

    where :math:`u_1` is floored at :math:`10^{-16}` to avoid :math:`\ln 0`.

    Args:
        rng (numpy.random.Generator): source of randomness

    Returns:
        float: the sample
    """
    u1 = max(rng.random(), 1e-16)
    u2 = rng.random()
    return float(np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2))


def cholesky2x2(S, tol=SINGULAR_TOL):
    r"""Cholesky factor of a symmetric positive definite :math:`2\times 2` matrix.

    .. math::
        \begin{pmatrix}a & b\\ b & c\end{pmatrix} =
        \begin{pmatrix}l_{00} & 0\\ l_{10} & l_{11}\end{pmatrix}
        \begin{pmatrix}l_{00} & l_{10}\\ 0 & l_{11}\end{pmatrix}

    Args:
        S (array): symmetric :math:`2\times 2` matrix
        tol (float): smallest admissible squared diagonal entry

    Returns:
        tuple[float, float, float]: the entries :math:`(l_{00}, l_{10}, l_{11})`

    Raises:
        MeasurementError: if ``S`` is not positive definite
    """
    a, b, c = S[0, 0], S[0, 1], S[1, 1]
    if a <= tol:
        raise MeasurementError("Matrix is not positive definite: S[0, 0] = {}.".format(a))

    l00 = np.sqrt(a)
    l10 = b / l00
    d = c - l10 ** 2
    if d <= tol:
        raise MeasurementError("Matrix is not positive definite: Schur complement {}.".format(d))

    return float(l00), float(l10), float(np.sqrt(d))


def _check_mode(state, mode):
    if isinstance(mode, bool) or not isinstance(mode, numbers.Integral):
        raise RegRefError("Mode must be an integer, got {!r}.".format(mode))
    if not 0 <= mode < state.num_modes:
        raise RegRefError(
            "Cannot apply measurement, mode {} does not exist in a {} mode state.".format(
                mode, state.num_modes
            )
        )


def homodyne_vector(num_modes, mode, phi):
    r"""Selection vector :math:`h` with :math:`h^T\mathbf{r} = q_m\cos\phi + p_m\sin\phi`."""
    h = zeros(2 * num_modes)
    iq, ip = quad_indices(mode)
    h[iq] = np.cos(phi)
    h[ip] = np.sin(phi)
    return h


def heterodyne_matrices(num_modes, mode):
    r"""Measurement matrix :math:`H` selecting :math:`(q_m, p_m)` and the noise :math:`R`.

    Returns:
        tuple[array, array]: :math:`H` of shape ``(2, 2*num_modes)`` and :math:`R`
    """
    H = zeros(2, 2 * num_modes)
    iq, ip = quad_indices(mode)
    H[0, iq] = 1.0
    H[1, ip] = 1.0
    return H, HETERODYNE_NOISE.copy()


def _homodyne_moments(state, mode, phi, noise):
    """Predictive mean and variance of a homodyne outcome, plus ``Vh``."""
    h = homodyne_vector(state.num_modes, mode, phi)
    mu = dot(h, state.means())
    Vh = matvec(state.cov(), h)
    s2 = dot(h, Vh) + check_variance("Homodyne noise variance", noise)

    if s2 <= 0.0:
        raise MeasurementError("Non-positive measurement variance s2={}.".format(s2))

    return mu, s2, Vh


def _heterodyne_moments(state, mode):
    """Predictive mean and covariance of a heterodyne outcome, plus ``H`` and ``HV``."""
    H, R = heterodyne_matrices(state.num_modes, mode)
    mu = matvec(H, state.means())
    HV = matmul(H, state.cov())
    S = add(matmul(HV, transpose(H)), R)
    return mu, S, H, HV


def condition_homodyne(state, mode, phi, outcome, noise=0.0):
    r"""Conditions a state on the outcome of a homodyne measurement.

    With :math:`h` the selection vector of :math:`x_\phi`,

    .. math::
        s^2 = h^TVh + v,\qquad
        \bar{\mathbf{r}}' = \bar{\mathbf{r}} + Vh\,\frac{y - h^T\bar{\mathbf{r}}}{s^2},\qquad
        V' = V - \frac{(Vh)(Vh)^T}{s^2}.

    Args:
        state (GaussianState): state before the measurement
        mode (int): measured mode
        phi (float): quadrature angle, :math:`\phi=0` measures :math:`q`
        outcome (float): measurement result :math:`y`
        noise (float): classical measurement noise variance :math:`v`

    Returns:
        GaussianState: the posterior state

    Raises:
        RegRefError: if the mode does not exist
        MeasurementError: if :math:`s^2\leq 0`
        ParameterError: if the noise variance is negative or not finite
    """
    _check_mode(state, mode)
    mu, s2, Vh = _homodyne_moments(state, mode, phi, noise)

    gain = (outcome - mu) / s2
    mean = add(state.means(), scale(Vh, gain))
    cov = sub(state.cov(), scale(outer(Vh, Vh), 1.0 / s2))
    return GaussianState(state.num_modes, mean, cov)


def condition_heterodyne(state, mode, outcome, tol=SINGULAR_TOL):
    r"""Conditions a state on the outcome of a heterodyne measurement.

    Args:
        state (GaussianState): state before the measurement
        mode (int): measured mode
        outcome (tuple[float, float]): measured values :math:`(q, p)`
        tol (float): determinant magnitude below which :math:`S` is singular

    Returns:
        GaussianState: the posterior state

    Raises:
        RegRefError: if the mode does not exist
        MeasurementError: if :math:`S = HVH^T + R` cannot be inverted
    """
    _check_mode(state, mode)
    mu, S, H, HV = _heterodyne_moments(state, mode)

    S_inv = inv2x2(S, tol=tol)
    if S_inv is None:
        raise MeasurementError("Could not invert the heterodyne innovation matrix {}.".format(S))

    residual = sub(np.asarray(outcome, dtype=np.float64), mu)
    K = matmul(matmul(state.cov(), transpose(H)), S_inv)

    mean = add(state.means(), matvec(K, residual))
    cov = sub(state.cov(), matmul(K, HV))
    return GaussianState(state.num_modes, mean, cov)


def sample_homodyne(state, mode, phi, rng, noise=0.0):
    r"""Samples a homodyne outcome and conditions the state on it.

    The outcome is drawn from :math:`\mathcal{N}(h^T\bar{\mathbf{r}}, s^2)`.

    Args:
        state (GaussianState): state before the measurement
        mode (int): measured mode
        phi (float): quadrature angle
        rng (numpy.random.Generator): source of randomness
        noise (float): classical measurement noise variance

    Returns:
        tuple[float, GaussianState]: the outcome and the posterior state

    Raises:
        RegRefError: if the mode does not exist
        MeasurementError: if the outcome variance is not positive
        ParameterError: if the noise variance is negative or not finite
    """
    _check_mode(state, mode)
    mu, s2, _ = _homodyne_moments(state, mode, phi, noise)

    y = mu + np.sqrt(s2) * standard_normal(rng)
    return float(y), condition_homodyne(state, mode, phi, y, noise=noise)


def sample_heterodyne(state, mode, rng, tol=SINGULAR_TOL):
    r"""Samples a heterodyne outcome and conditions the state on it.

    Two independent standard normal variates are correlated through the
    Cholesky factor :math:`L` of :math:`S`, so that the outcome
    :math:`H\bar{\mathbf{r}} + L\mathbf{z}` has covariance :math:`S`.

    Args:
        state (GaussianState): state before the measurement
        mode (int): measured mode
        rng (numpy.random.Generator): source of randomness
        tol (float): tolerance of the Cholesky factorization

    Returns:
        tuple[tuple[float, float], GaussianState]: the outcome ``(q, p)`` and the posterior state

    Raises:
        RegRefError: if the mode does not exist
        MeasurementError: if :math:`S` is not positive definite
    """
    _check_mode(state, mode)
    mu, S, _, _ = _heterodyne_moments(state, mode)

    l00, l10, l11 = cholesky2x2(S, tol=tol)
    z0 = standard_normal(rng)
    z1 = standard_normal(rng)

    q = float(mu[0] + l00 * z0)
    p = float(mu[1] + l10 * z0 + l11 * z1)
    return (q, p), condition_heterodyne(state, mode, (q, p), tol=tol)
