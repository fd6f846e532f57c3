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
r"""This module contains the abstract base class that defines SchroSIM
compatible simulator backends."""

# pylint: disable=no-self-use,missing-docstring


class NotApplicableError(TypeError):
    """Exception raised by the backend when the user attempts an unsupported operation.
    E.g. injecting a Fock state into a Gaussian backend.
    Conceptually different from NotImplementedError (which means "not implemented, but at some point may be").
    """


class BaseBackend:
    """Abstract base class for backends.

    A backend owns the state of a single simulation. Each operation replaces the
    stored state with a new value; an operation that fails leaves the stored
    state untouched.
    """

    #: str: short name of the backend
    short_name = "base"

    def __init__(self):
        self._supported = {}

    def __str__(self):
        """String representation."""
        return self.__class__.__name__

    def supports(self, name):
        """Check whether the backend supports the given operating mode.

        Currently supported operating modes are:

        * "gaussian": for manipulations in the Gaussian representation using the
          displacements and covariance matrices
        * "fock_basis": for manipulations in the Fock representation
        * "mixed_states": for representations where the quantum state is mixed

        Args:
            name (str): name of the operating mode which we are checking support for

        Returns:
            bool: True if this backend supports that operating mode.
        """
        return self._supported.get(name, False)

    def begin_circuit(self, num_subsystems, **kwargs):
        r"""Instantiate a quantum circuit.

        Instantiates a representation of a quantum optical state with ``num_subsystems`` modes.
        The state is initialized to vacuum unless an initial state is supplied.

        Args:
            num_subsystems (int): number of modes in the circuit

        Keyword Args:
            state (BaseState): initial state of the circuit
        """
        raise NotImplementedError

    def reset(self):
        """Reset the circuit to the initial state of the last :meth:`begin_circuit` call."""
        raise NotImplementedError

    def get_modes(self):
        """Return a list of the modes of the circuit.

        Returns:
            list[int]: sorted list of mode indices
        """
        raise NotImplementedError

    def apply_gate(self, gate):
        """Apply a lowered Gaussian gate to the whole register.

        Args:
            gate (CVGate): symplectic matrix and displacement vector
        """
        raise NotImplementedError

    def loss(self, T, mode):
        r"""Perform a loss channel operation on the specified mode.

        Args:
            T (float): loss parameter, :math:`0\leq T\leq 1`.
            mode (int): index of mode where operation is carried out
        """
        raise NotImplementedError

    def thermal_loss(self, T, nbar, mode):
        r"""Perform a thermal loss channel operation on the specified mode.

        Args:
            T (float): loss parameter, :math:`0\leq T\leq 1`.
            nbar (float): mean photon number of the environment thermal state
            mode (int): index of mode where operation is carried out
        """
        raise NotImplementedError

    def add_noise(self, vq, vp, mode):
        """Add classical Gaussian noise to the quadratures of the specified mode.

        Args:
            vq (float): variance added to the position quadrature
            vp (float): variance added to the momentum quadrature
            mode (int): index of mode where operation is carried out
        """
        raise NotImplementedError

    def measure_homodyne(self, phi, mode, rng, select=None, **kwargs):
        r"""Measure the quadrature :math:`x_\phi = q\cos\phi + p\sin\phi` of a mode.

        Args:
            phi (float): quadrature angle
            mode (int): which mode to measure
            rng (numpy.random.Generator): source of randomness
            select (None, float): desired value of the measurement result

        Returns:
            float: measured value
        """
        raise NotImplementedError

    def measure_heterodyne(self, mode, rng, select=None, **kwargs):
        """Jointly measure both quadratures of a mode.

        Args:
            mode (int): which mode to measure
            rng (numpy.random.Generator): source of randomness
            select (None, tuple[float, float]): desired values of the measurement result

        Returns:
            tuple[float, float]: measured ``(q, p)`` values
        """
        raise NotImplementedError

    def prepare_fock_state(self, n, mode):
        r"""Inject the Fock state :math:`\ket{n}` into the specified mode.

        Args:
            n (int): Fock state to prepare
            mode (int): which mode to inject into
        """
        raise NotImplementedError

    def prepare_cat_state(self, alpha, mode):
        """Inject a cat state with amplitude ``alpha`` into the specified mode.

        Args:
            alpha (complex): displacement amplitude of the superposed coherent states
            mode (int): which mode to inject into
        """
        raise NotImplementedError

    def prepare_gkp(self, delta, mode):
        """Inject a finite-energy GKP state into the specified mode.

        Args:
            delta (float): finite-energy envelope width
            mode (int): which mode to inject into
        """
        raise NotImplementedError

    def state(self, **kwargs):
        """Returns the state of the quantum simulation.

        Returns:
            BaseState: state description
        """
        raise NotImplementedError
