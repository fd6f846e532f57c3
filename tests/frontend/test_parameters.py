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
r"""Unit tests for the parameter checks in parameters.py"""
import pytest

import numpy as np

from schrosim.parameters import (
    ParameterError,
    check_complex,
    check_nbar,
    check_photon_number,
    check_real,
    check_transmissivity,
    check_variance,
)

pytestmark = pytest.mark.frontend


class TestChecks:
    """Tests for the parameter check functions"""

    @pytest.mark.parametrize("value", [0, -2, 0.5, np.float32(1.5)])
    def test_real(self, value):
        """Finite reals are returned as floats"""
        res = check_real("x", value)
        assert isinstance(res, float)
        assert res == pytest.approx(float(value))

    @pytest.mark.parametrize("value", [np.nan, -np.inf, 1j, "1", None, False])
    def test_real_invalid(self, value):
        """Anything but a finite real is rejected, including booleans"""
        with pytest.raises(ParameterError, match="x must be"):
            check_real("x", value)

    def test_complex(self):
        """Complex numbers are accepted, infinite ones are not"""
        assert check_complex("a", 1 + 2j) == 1 + 2j
        assert check_complex("a", 2) == 2 + 0j
        with pytest.raises(ParameterError, match="finite"):
            check_complex("a", complex(np.inf, 0))

    @pytest.mark.parametrize("T", [0, 0.3, 1])
    def test_transmissivity(self, T):
        """The closed interval [0, 1] is accepted"""
        assert check_transmissivity(T) == T

    @pytest.mark.parametrize("T", [-1e-9, 1 + 1e-9])
    def test_transmissivity_invalid(self, T):
        """Values just outside of [0, 1] are rejected"""
        with pytest.raises(ParameterError, match="between 0 and 1"):
            check_transmissivity(T)

    def test_nbar(self):
        """Zero is a valid thermal population, negative values are not"""
        assert check_nbar(0) == 0.0
        with pytest.raises(ParameterError, match="non-negative"):
            check_nbar(-0.5)

    def test_variance(self):
        """The parameter name appears in the error message"""
        assert check_variance("Noise", 0.2) == 0.2
        with pytest.raises(ParameterError, match="Noise must be non-negative"):
            check_variance("Noise", -0.2)

    def test_photon_number(self):
        """Numpy integers are accepted as photon numbers"""
        assert check_photon_number(np.int64(3)) == 3
        with pytest.raises(ParameterError, match="Photon number"):
            check_photon_number(2.0)
