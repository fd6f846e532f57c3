# Copyright 2018 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""

.. _gaussian_backend:

Gaussian simulator backend
############################

**Module name:** :mod:`schrosim.backends.gaussianbackend`

.. currentmodule:: schrosim.backends.gaussianbackend

The :class:`GaussianBackend` implements a simulation of continuous-variable circuits
using the Gaussian formalism. A state is a vector of means and a covariance matrix
in the :math:`(q_1,p_1,\dots,q_n,p_n)` ordering, with :math:`\hbar=1`.

The numerical work is done by pure functions that take a :class:`GaussianState`
and return a new one:

* :mod:`~.gaussianbackend.ops`: :class:`CVGate` and the gate builders
* :mod:`~.gaussianbackend.evolution`: symplectic evolution
* :mod:`~.gaussianbackend.channels`: loss, thermal loss and additive noise
* :mod:`~.gaussianbackend.measurements`: homodyne and heterodyne conditioning and sampling

:class:`GaussianBackend` strings these together into the stateful interface used by the engine.

Code details
~~~~~~~~~~~~

.. autoclass:: schrosim.backends.gaussianbackend.GaussianBackend
   :members:

.. autoclass:: schrosim.backends.gaussianbackend.GaussianState
   :members:
"""

from .backend import GaussianBackend
from .measurements import MeasurementError
from .ops import CVGate
from .states import GaussianState
