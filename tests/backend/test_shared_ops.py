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
r"""Unit tests for the linear algebra shared by the backends"""
import pytest

import numpy as np

import schrosim.backends.shared_ops as so


pytestmark = pytest.mark.backend


class TestConstructors:
    """Tests for zeros and identity"""

    def test_zeros_vector(self):
        """Test that a single argument gives a zero vector"""
        v = so.zeros(4)
        assert v.shape == (4,)
        assert v.dtype == np.float64
        assert np.all(v == 0)

    def test_zeros_matrix(self):
        """Test that two arguments give a zero matrix"""
        m = so.zeros(2, 3)
        assert m.shape == (2, 3)
        assert np.all(m == 0)

    def test_identity(self):
        """Test the identity matrix"""
        assert np.array_equal(so.identity(3), np.eye(3))


class TestArithmetic:
    """Tests for the arithmetic functions and their shape contract"""

    def test_transpose_copies(self):
        """Test that transpose returns a new array"""
        m = np.arange(6.0).reshape(2, 3)
        t = so.transpose(m)
        t[0, 0] = 100
        assert m[0, 0] == 0
        assert t.shape == (3, 2)

    def test_matmul(self):
        """Test the matrix product against NumPy"""
        a = np.arange(6.0).reshape(2, 3)
        b = np.arange(12.0).reshape(3, 4)
        assert np.allclose(so.matmul(a, b), a @ b)

    def test_matmul_shape_mismatch(self):
        """Test that incompatible inner dimensions raise a ValueError"""
        with pytest.raises(ValueError, match="Cannot multiply"):
            so.matmul(np.ones((2, 3)), np.ones((2, 3)))

    def test_matvec(self):
        """Test the matrix-vector product"""
        m = np.array([[1.0, 2.0], [3.0, 4.0]])
        assert np.allclose(so.matvec(m, [1.0, -1.0]), [-1.0, -1.0])

    def test_matvec_shape_mismatch(self):
        """Test that a vector of the wrong length raises a ValueError"""
        with pytest.raises(ValueError, match="Cannot multiply"):
            so.matvec(np.ones((2, 2)), np.ones(3))

    def test_matvec_requires_vector(self):
        """Test that a matrix operand in place of the vector raises a ValueError"""
        with pytest.raises(ValueError, match="Expected a vector"):
            so.matvec(np.ones((2, 2)), np.ones((2, 1)))

    @pytest.mark.parametrize("fn, expected", [(so.add, [4.0, 6.0]), (so.sub, [-2.0, -2.0])])
    def test_add_sub(self, fn, expected):
        """Test elementwise addition and subtraction"""
        assert np.allclose(fn([1.0, 2.0], [3.0, 4.0]), expected)

    @pytest.mark.parametrize("fn", [so.add, so.sub])
    def test_add_sub_shape_mismatch(self, fn):
        """Test that operands of different shape raise a ValueError"""
        with pytest.raises(ValueError, match="do not match"):
            fn(np.ones(2), np.ones(3))

    def test_scale(self):
        """Test scalar multiplication"""
        assert np.allclose(so.scale(np.ones((2, 2)), 2.5), 2.5 * np.ones((2, 2)))

    def test_outer(self):
        """Test the outer product"""
        assert np.allclose(so.outer([1.0, 2.0], [3.0, 4.0, 5.0]), [[3, 4, 5], [6, 8, 10]])

    def test_dot(self):
        """Test the inner product"""
        assert so.dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0

    def test_dot_shape_mismatch(self):
        """Test that vectors of different length raise a ValueError"""
        with pytest.raises(ValueError):
            so.dot(np.ones(2), np.ones(3))


class TestInv2x2:
    """Tests for the closed form 2x2 inverse"""

    def test_inverse(self, tol):
        """Test the inverse of a well conditioned matrix"""
        m = np.array([[2.0, 1.0], [0.5, 3.0]])
        assert np.allclose(so.inv2x2(m) @ m, np.eye(2), atol=tol, rtol=0)

    def test_singular_returns_none(self):
        """Test that a singular matrix has no inverse"""
        assert so.inv2x2(np.array([[1.0, 2.0], [2.0, 4.0]])) is None

    def test_tolerance(self):
        """Test that determinants below the tolerance count as singular"""
        m = np.array([[1e-8, 0.0], [0.0, 1e-7]])
        assert so.inv2x2(m) is None
        assert so.inv2x2(m, tol=1e-16) is not None

    def test_wrong_shape(self):
        """Test that a matrix which is not 2x2 raises a ValueError"""
        with pytest.raises(ValueError, match="2x2"):
            so.inv2x2(np.eye(3))


class TestApproxEqual:
    """Tests for approximate equality"""

    def test_within_tolerance(self):
        """Test that small differences compare equal"""
        assert so.approx_equal(np.ones(3), np.ones(3) + 1e-10)

    def test_outside_tolerance(self):
        """Test that large differences do not compare equal"""
        assert not so.approx_equal(np.ones(3), np.ones(3) + 1e-6)

    def test_custom_tolerance(self):
        """Test the caller supplied tolerance"""
        assert so.approx_equal(np.ones(3), np.ones(3) + 1e-6, tol=1e-5)

    def test_shape_mismatch(self):
        """Test that arrays of different shape are never equal"""
        assert not so.approx_equal(np.ones(2), np.ones(3))
        assert not so.approx_equal(np.ones((2, 2)), np.ones(4))


class TestSymplecticForm:
    """Tests for the symplectic form and the basis change"""

    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_block_structure(self, n):
        """Test that Omega is block diagonal in the xpxp ordering"""
        omega = so.symplectic_form(n)
        expected = np.zeros((2 * n, 2 * n))
        for k in range(n):
            expected[2 * k, 2 * k + 1] = 1
            expected[2 * k + 1, 2 * k] = -1
        assert np.array_equal(omega, expected)

    def test_no_modes(self):
        """Test that the symplectic form needs at least one mode"""
        with pytest.raises(ValueError, match="at least one mode"):
            so.symplectic_form(0)

    def test_changebasis_reorders_vectors(self):
        """Test that the change of basis maps (x1, x2, p1, p2) to (x1, p1, x2, p2)"""
        P = so.changebasis(2)
        assert np.array_equal(P @ np.array([1.0, 2.0, 3.0, 4.0]), [1.0, 3.0, 2.0, 4.0])

    def test_changebasis_read_only(self):
        """Test that the cached change of basis matrix cannot be modified"""
        with pytest.raises(ValueError):
            so.changebasis(2)[0, 0] = 5

    def test_xxpp_to_xpxp_odd_dimension(self):
        """Test that an odd dimensional matrix cannot be reordered"""
        with pytest.raises(ValueError, match="even-dimensional"):
            so.xxpp_to_xpxp(np.eye(3))

    @pytest.mark.parametrize("mode", [0, 3])
    def test_quad_indices(self, mode):
        """Test the quadrature indices of a mode"""
        assert so.quad_indices(mode) == (2 * mode, 2 * mode + 1)
