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
r"""Dense real linear algebra shared by the phase space backends.

All vectors and matrices are real ``float64`` NumPy arrays. The phase space
coordinates of an :math:`n` mode system are ordered as
:math:`(q_1, p_1, \dots, q_n, p_n)`, so that mode :math:`m` owns the
indices :math:`(2m, 2m+1)`.

Combining operands of incompatible shape is a programming error and raises
a ``ValueError``; none of the functions in this module raise domain errors.
"""

import functools

import numpy as np
from thewalrus.symplectic import sympmat


#: float: determinant magnitude below which a :math:`2\times 2` matrix is treated as singular
SINGULAR_TOL = 1e-14

#: float: default tolerance for :func:`approx_equal`
EQ_TOL = 1e-9


def _as_vector(v):
    v = np.asarray(v, dtype=np.float64)
    if v.ndim != 1:
        raise ValueError("Expected a vector, received an array of shape {}.".format(v.shape))
    return v


def _as_matrix(m):
    m = np.asarray(m, dtype=np.float64)
    if m.ndim != 2:
        raise ValueError("Expected a matrix, received an array of shape {}.".format(m.shape))
    return m


def _check_same_shape(a, b):
    if a.shape != b.shape:
        raise ValueError("Operand shapes {} and {} do not match.".format(a.shape, b.shape))


# ================================+
# Constructors                    |
# ================================+


def zeros(rows, cols=None):
    """Zero vector of length ``rows``, or zero matrix if ``cols`` is given.

    Args:
        rows (int): vector length or number of matrix rows
        cols (int, None): number of matrix columns

    Returns:
        array: zero vector or matrix
    """
    if cols is None:
        return np.zeros(rows, dtype=np.float64)
    return np.zeros((rows, cols), dtype=np.float64)


def identity(n):
    r""":math:`n\times n` identity matrix."""
    return np.identity(n, dtype=np.float64)


# ================================+
# Arithmetic                      |
# ================================+


def transpose(m):
    """Matrix transpose."""
    return _as_matrix(m).T.copy()


def matmul(a, b):
    """Matrix-matrix product :math:`AB`.

    Raises:
        ValueError: if the inner dimensions do not agree
    """
    a = _as_matrix(a)
    b = _as_matrix(b)
    if a.shape[1] != b.shape[0]:
        raise ValueError("Cannot multiply matrices of shape {} and {}.".format(a.shape, b.shape))
    return a @ b


def matvec(m, v):
    """Matrix-vector product :math:`Mv`.

    Raises:
        ValueError: if the number of columns of ``m`` differs from the length of ``v``
    """
    m = _as_matrix(m)
    v = _as_vector(v)
    if m.shape[1] != v.shape[0]:
        raise ValueError(
            "Cannot multiply a matrix of shape {} with a vector of length {}.".format(
                m.shape, v.shape[0]
            )
        )
    return m @ v


def add(a, b):
    """Elementwise sum of two vectors or two matrices of equal shape."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    _check_same_shape(a, b)
    return a + b


def sub(a, b):
    """Elementwise difference of two vectors or two matrices of equal shape."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    _check_same_shape(a, b)
    return a - b


def scale(a, s):
    """Multiply a vector or a matrix by the scalar ``s``."""
    return float(s) * np.asarray(a, dtype=np.float64)


def outer(u, v):
    """Outer product :math:`uv^T` of two vectors."""
    return np.outer(_as_vector(u), _as_vector(v))


def dot(u, v):
    """Inner product of two vectors of equal length."""
    u = _as_vector(u)
    v = _as_vector(v)
    _check_same_shape(u, v)
    return float(u @ v)


def inv2x2(m, tol=SINGULAR_TOL):
    r"""Closed form inverse of a :math:`2\times 2` matrix.

    .. math:: \begin{pmatrix}a & b\\ c & d\end{pmatrix}^{-1}
        = \frac{1}{ad-bc}\begin{pmatrix}d & -b\\ -c & a\end{pmatrix}

    Args:
        m (array): :math:`2\times 2` matrix
        tol (float): determinant magnitude below which the matrix is singular

    Returns:
        array or None: the inverse, or ``None`` if :math:`|\det m| < \text{tol}`

    Raises:
        ValueError: if ``m`` is not :math:`2\times 2`
    """
    m = _as_matrix(m)
    if m.shape != (2, 2):
        raise ValueError("inv2x2 requires a 2x2 matrix, received shape {}.".format(m.shape))

    (a, b), (c, d) = m
    det = a * d - b * c
    if abs(det) < tol:
        return None

    return np.array([[d, -b], [-c, a]]) / det


def approx_equal(a, b, tol=EQ_TOL):
    """Compare two arrays entrywise within an absolute tolerance.

    Arrays of different shape are never equal.

    Args:
        a (array): first operand
        b (array): second operand
        tol (float): maximum allowed absolute difference per entry

    Returns:
        bool: whether all entries agree within ``tol``
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        return False
    if a.size == 0:
        return True
    return bool(np.max(np.abs(a - b)) <= tol)


# ================================+
# Phase space shared operations  |
# ================================+


def quad_indices(mode):
    """Phase space indices ``(2m, 2m+1)`` of the quadratures of a mode."""
    return 2 * mode, 2 * mode + 1


@functools.lru_cache()
def changebasis(n):
    r"""Change of basis matrix between the two Gaussian representation orderings.

    This is the matrix necessary to transform covariances matrices written
    in the (x_1,...,x_n,p_1,...,p_n) to the (x_1,p_1,...,x_n,p_n) ordering

    Args:
        n (int): number of modes
    Returns:
        array: :math:`2n\times 2n` matrix
    """
    m = np.zeros((2 * n, 2 * n))
    for i in range(n):
        m[2 * i, i] = 1
        m[2 * i + 1, i + n] = 1
    m.setflags(write=False)
    return m


def xxpp_to_xpxp(S):
    r"""Reorder a :math:`2n\times 2n` matrix from the ``xxpp`` to the ``xpxp`` convention.

    Args:
        S (array): matrix in the :math:`(x_1,\dots,x_n,p_1,\dots,p_n)` ordering

    Returns:
        array: the same matrix in the :math:`(x_1,p_1,\dots,x_n,p_n)` ordering
    """
    S = _as_matrix(S)
    if S.shape[0] != S.shape[1] or S.shape[0] % 2:
        raise ValueError("Expected an even-dimensional square matrix, received {}.".format(S.shape))
    P = changebasis(S.shape[0] // 2)
    return P @ S @ P.T


def symplectic_form(num_modes):
    r"""The symplectic form :math:`\Omega` in the ``xpxp`` ordering.

    :math:`\Omega` is block diagonal with blocks
    :math:`\begin{pmatrix}0 & 1\\ -1 & 0\end{pmatrix}`, one per mode.

    Args:
        num_modes (int): number of modes

    Returns:
        array: :math:`2n\times 2n` symplectic form
    """
    if num_modes < 1:
        raise ValueError("The symplectic form requires at least one mode.")
    return xxpp_to_xpxp(sympmat(num_modes))
