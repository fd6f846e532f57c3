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
r"""Gaussian operations in the :math:`(q_1,p_1,\dots,q_n,p_n)` phase space ordering.

A Gaussian unitary acts on the quadrature vector as the affine map
:math:`\mathbf{r} \mapsto S\mathbf{r} + \mathbf{d}`, where :math:`S` is symplectic.
The single and two mode blocks are taken from :mod:`thewalrus.symplectic`, which
works in the :math:`(q_1,\dots,q_n,p_1,\dots,p_n)` ordering, and are permuted
into the ordering used by this backend.
"""
import numbers

import numpy as np
import thewalrus.symplectic as symp

from ..shared_ops import identity, quad_indices, xxpp_to_xpxp, zeros


class CVGate:
    r"""Affine symplectic map :math:`(S, \mathbf{d})` acting on the full register.

    Args:
        S (array): :math:`2n\times 2n` symplectic matrix
        d (array): displacement vector of length :math:`2n`

    Raises:
        ValueError: if ``S`` is not square, or ``d`` does not match its dimension
    """

    # pylint: disable=invalid-name

    def __init__(self, S, d):
        S = np.array(S, dtype=np.float64)
        d = np.array(d, dtype=np.float64)

        if S.ndim != 2 or S.shape[0] != S.shape[1] or S.shape[0] == 0:
            raise ValueError("Symplectic matrix must be a non-empty square matrix.")
        if d.shape != (S.shape[0],):
            raise ValueError(
                "Displacement vector of shape {} does not match a {}x{} symplectic matrix.".format(
                    d.shape, *S.shape
                )
            )

        S.setflags(write=False)
        d.setflags(write=False)
        self._S = S
        self._d = d

    @classmethod
    def identity(cls, num_modes):
        """The identity map on ``num_modes`` modes."""
        dim = 2 * num_modes
        return cls(identity(dim), zeros(dim))

    @property
    def S(self):
        """array: the symplectic matrix"""
        return self._S

    @property
    def d(self):
        """array: the displacement vector"""
        return self._d

    @property
    def num_modes(self):
        """int: number of modes the map acts on"""
        return self._S.shape[0] // 2

    def __repr__(self):
        return "<CVGate: num_modes={}>".format(self.num_modes)


def _check_mode(mode, num_modes):
    if not isinstance(mode, numbers.Integral) or not 0 <= mode < num_modes:
        raise ValueError("Mode {} does not exist in a {} mode register.".format(mode, num_modes))


def phase_shift(theta, mode, num_modes):
    r"""Phase space rotation of a single mode.

    .. math:: \begin{pmatrix}q\\p\end{pmatrix} \mapsto
        \begin{pmatrix}\cos\theta & -\sin\theta\\ \sin\theta & \cos\theta\end{pmatrix}
        \begin{pmatrix}q\\p\end{pmatrix}

    Args:
        theta (float): rotation angle
        mode (int): mode to rotate
        num_modes (int): total number of modes

    Returns:
        CVGate: rotation with zero displacement
    """
    _check_mode(mode, num_modes)
    S = symp.expand(symp.rotation(theta), mode, num_modes)
    return CVGate(xxpp_to_xpxp(S), zeros(2 * num_modes))


def squeeze(r, mode, num_modes):
    r"""Single mode squeezing, :math:`q\mapsto e^{-r}q` and :math:`p\mapsto e^{r}p`.

    Args:
        r (float): squeezing amount
        mode (int): mode to squeeze
        num_modes (int): total number of modes

    Returns:
        CVGate: squeezing with zero displacement
    """
    _check_mode(mode, num_modes)
    S = symp.expand(symp.squeezing(r, 0.0), mode, num_modes)
    return CVGate(xxpp_to_xpxp(S), zeros(2 * num_modes))


def beamsplitter(theta, mode_a, mode_b, num_modes):
    r"""Passive beamsplitter between two modes.

    The same rotation mixes the positions and the momenta of the two modes:

    .. math::
        q_a \mapsto q_a\cos\theta - q_b\sin\theta,\qquad
        q_b \mapsto q_a\sin\theta + q_b\cos\theta

    and likewise for :math:`p_a, p_b`.

    Args:
        theta (float): transmissivity angle, :math:`\theta=\pi/4` is a 50:50 beamsplitter
        mode_a (int): first input mode
        mode_b (int): second input mode
        num_modes (int): total number of modes

    Returns:
        CVGate: beamsplitter with zero displacement

    Raises:
        ValueError: if either mode does not exist or both are the same
    """
    _check_mode(mode_a, num_modes)
    _check_mode(mode_b, num_modes)
    if mode_a == mode_b:
        raise ValueError("Cannot use the same mode for beamsplitter inputs.")

    S = symp.expand(symp.beam_splitter(theta, 0.0), [mode_a, mode_b], num_modes)
    return CVGate(xxpp_to_xpxp(S), zeros(2 * num_modes))


def displacement(q, p, mode, num_modes):
    """Phase space displacement of a single mode by ``(q, p)``.

    Args:
        q (float): position displacement
        p (float): momentum displacement
        mode (int): mode to displace
        num_modes (int): total number of modes

    Returns:
        CVGate: identity symplectic matrix with the displacement in the mode's slots
    """
    _check_mode(mode, num_modes)
    d = zeros(2 * num_modes)
    iq, ip = quad_indices(mode)
    d[iq] = q
    d[ip] = p
    return CVGate(identity(2 * num_modes), d)
