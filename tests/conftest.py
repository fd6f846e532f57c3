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
"""
Default parameters, environment variables, fixtures, and common routines for the unit tests.
"""
# pylint: disable=redefined-outer-name
import os
import pytest

import numpy as np

from schrosim.engine import LocalEngine
from schrosim.program import Program
from schrosim.backends.gaussianbackend import GaussianBackend, GaussianState


# defaults
TOL = 1e-8
SEED = 42


def pytest_configure(config):
    """Register the markers used to select groups of tests."""
    config.addinivalue_line("markers", "frontend: tests of the circuit representation and engine")
    config.addinivalue_line("markers", "backend: tests of the Gaussian backend")
    config.addinivalue_line("markers", "integration: end to end simulation tests")


@pytest.fixture(scope="session")
def tol():
    """Numerical tolerance for equality tests."""
    return float(os.environ.get("TOL", TOL))


@pytest.fixture(scope="session")
def seed():
    """Seed of the random number generators used in tests"""
    return int(os.environ.get("SEED", SEED))


@pytest.fixture
def rng(seed):
    """A freshly seeded random number generator"""
    return np.random.default_rng(seed)


@pytest.fixture
def setup_backend():
    """Factory fixture, used to create a Gaussian backend of a certain number of modes.

    This fixture should only be used in backend tests, as it bypasses Engine and
    initializes the backend directly.
    """

    def _setup_backend(num_subsystems, **kwargs):
        """Factory function"""
        backend = GaussianBackend(**kwargs)
        backend.begin_circuit(num_subsystems)
        return backend

    return _setup_backend


@pytest.fixture
def setup_eng():
    """Factory fixture, used to create an Engine and a Program with a certain number of modes."""

    def _setup_eng(num_subsystems, **kwargs):
        """Factory function"""
        prog = Program(num_subsystems)
        eng = LocalEngine(backend="gaussian", backend_options=kwargs)
        return eng, prog

    return _setup_eng


@pytest.fixture
def displaced_squeezed():
    """A correlated two mode state with non-zero means"""
    mean = np.array([0.3, -0.2, 1.1, 0.4])
    cov = np.array(
        [
            [0.9, 0.1, 0.3, 0.0],
            [0.1, 0.6, 0.0, -0.2],
            [0.3, 0.0, 1.2, 0.15],
            [0.0, -0.2, 0.15, 0.8],
        ]
    )
    return GaussianState(2, mean, cov)
