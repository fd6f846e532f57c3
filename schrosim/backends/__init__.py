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
"""This package contains the modules that make up the
SchroSIM backends. This includes the Gaussian simulator,
shared numerical operations, and the state object it returns.

.. currentmodule:: schrosim.backends
.. autosummary::
    :toctree: api

    BaseBackend
    GaussianBackend
    GaussianState
"""

from .base import BaseBackend, NotApplicableError
from .gaussianbackend import CVGate, GaussianBackend, GaussianState, MeasurementError

__all__ = [
    "BaseBackend",
    "GaussianBackend",
    "GaussianState",
    "CVGate",
    "MeasurementError",
    "NotApplicableError",
]


local_backends = {b.short_name: b for b in (GaussianBackend,)}


def load_backend(name, **kwargs):
    """Loads the specified backend by mapping a string
    to the backend type, via the ``local_backends``
    dictionary. Note that this function is used by the
    frontend only, and should not be user-facing.
    """
    if name in local_backends:
        backend = local_backends[name](**kwargs)
        return backend

    raise ValueError("Backend '{}' is not supported.".format(name))
