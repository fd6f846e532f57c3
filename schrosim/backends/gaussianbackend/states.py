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
"""Module containing the Gaussian state value type"""
import numbers

import numpy as np
from scipy.linalg import eigvalsh

from ..shared_ops import identity, symplectic_form, zeros


class GaussianState:
    r"""Class for the representation of quantum states using the Gaussian formalism.

    Note that this class uses the Gaussian representation convention

    .. math:: \bar{\mathbf{r}} = (\bar{q}_1,\bar{p}_1,\dots,\bar{q}_N,\bar{p}_N)

    with :math:`\hbar=1`, so that the vacuum covariance matrix is :math:`\frac{1}{2}I`.

    A ``GaussianState`` is an immutable value. The vector of means and the
    covariance matrix are copied on construction and exposed as read-only
    arrays; every transformation of the state returns a new instance.

    Args:
        num_modes (int): the number of modes in the state
        mean (array): vector of means of length ``2*num_modes``, defaults to zero
        cov (array): covariance matrix of shape ``(2*num_modes, 2*num_modes)``,
            defaults to the vacuum covariance

    Raises:
        ValueError: if ``num_modes`` is not a positive integer, or the shapes of
            ``mean`` and ``cov`` do not match the number of modes
    """

    EQ_TOLERANCE = 1e-10

    def __init__(self, num_modes, mean=None, cov=None):
        if not isinstance(num_modes, numbers.Integral) or num_modes < 1:
            raise ValueError("Number of modes {} is not a positive integer.".format(num_modes))

        dim = 2 * num_modes
        mean = zeros(dim) if mean is None else np.array(mean, dtype=np.float64)
        cov = 0.5 * identity(dim) if cov is None else np.array(cov, dtype=np.float64)

        if mean.shape != (dim,):
            raise ValueError(
                "Vector of means has shape {}, expected ({},).".format(mean.shape, dim)
            )
        if cov.shape != (dim, dim):
            raise ValueError(
                "Covariance matrix has shape {}, expected ({}, {}).".format(cov.shape, dim, dim)
            )

        mean.setflags(write=False)
        cov.setflags(write=False)

        self._modes = int(num_modes)
        self._mean = mean
        self._cov = cov

    @classmethod
    def vacuum(cls, num_modes):
        r"""Vacuum state: zero means and covariance matrix :math:`\frac{1}{2}I`.

        Args:
            num_modes (int): the number of modes

        Returns:
            GaussianState: the multimode vacuum
        """
        return cls(num_modes)

    @property
    def num_modes(self):
        """int: number of modes in the state"""
        return self._modes

    @property
    def data(self):
        """tuple[array, array]: the vector of means and the covariance matrix"""
        return self._mean, self._cov

    def means(self):
        r"""The vector of means :math:`(\bar{q}_1,\bar{p}_1,\dots)` of the state.

        Returns:
            array: read-only vector of length ``2*num_modes``
        """
        return self._mean

    def cov(self):
        """The covariance matrix of the state.

        Returns:
            array: read-only matrix of shape ``(2*num_modes, 2*num_modes)``
        """
        return self._cov

    def is_valid(self, tol=1e-8):
        r"""Checks that the covariance matrix describes a physical state.

        The matrix must be symmetric and satisfy the uncertainty relation
        :math:`V + \frac{i}{2}\Omega \geq 0`.

        Args:
            tol (float): tolerance on symmetry and on the smallest eigenvalue

        Returns:
            bool: whether the state is physical
        """
        if not np.allclose(self._cov, self._cov.T, atol=tol, rtol=0):
            return False

        omega = symplectic_form(self._modes)
        eigs = eigvalsh(self._cov + 0.5j * omega)
        return bool(np.min(eigs) >= -tol)

    def __eq__(self, other):
        """Two states are equal if their means and covariances agree within ``EQ_TOLERANCE``."""
        if not isinstance(other, GaussianState):
            return NotImplemented

        if self.num_modes != other.num_modes:
            return False

        return np.allclose(
            self._mean, other.means(), atol=self.EQ_TOLERANCE, rtol=0
        ) and np.allclose(self._cov, other.cov(), atol=self.EQ_TOLERANCE, rtol=0)

    __hash__ = None

    def __repr__(self):
        return "<GaussianState: num_modes={}>".format(self.num_modes)
