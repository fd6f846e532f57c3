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
# pylint: disable=too-many-public-methods
"""Gaussian backend"""
from ..base import BaseBackend, NotApplicableError
from ..shared_ops import SINGULAR_TOL
from .channels import apply_additive_noise, apply_loss, apply_thermal_loss
from .evolution import apply_gate, is_symplectic
from .measurements import (
    condition_heterodyne,
    condition_homodyne,
    sample_heterodyne,
    sample_homodyne,
)
from .states import GaussianState


class GaussianBackend(BaseBackend):
    r"""The GaussianBackend implements a simulation of continuous-variable
    circuits in NumPy using the Gaussian formalism, returning a
    :class:`~.GaussianState` state object.

    The backend keeps a single :class:`~.GaussianState`, a vector of means and a
    covariance matrix in the :math:`(q_1,p_1,\dots,q_n,p_n)` ordering. Every
    operation computes a new state from the current one and only then replaces
    it, so a failing operation leaves the backend in its previous state.

    Unitary operations arrive already lowered to a :class:`~.CVGate`; channels
    and measurements are applied directly. Non-Gaussian injections other than the
    effective GKP model raise :class:`~.NotApplicableError`.

    Args:
        singular_tol (float): tolerance below which a measurement covariance is singular
        symplectic_tol (float, None): if given, every applied gate is checked to be
            symplectic within this tolerance
    """

    short_name = "gaussian"

    def __init__(self, singular_tol=SINGULAR_TOL, symplectic_tol=None):
        """Initialize the backend."""
        super().__init__()
        self._supported["gaussian"] = True
        self._supported["mixed_states"] = True
        self.singular_tol = singular_tol
        self.symplectic_tol = symplectic_tol
        self._init_state = None
        self._state = None

    def begin_circuit(self, num_subsystems, **kwargs):
        """Instantiate a circuit on ``num_subsystems`` modes.

        Keyword Args:
            state (GaussianState): initial state, defaults to the vacuum

        Raises:
            ValueError: if the initial state does not have ``num_subsystems`` modes
        """
        state = kwargs.get("state", None)
        if state is None:
            state = GaussianState.vacuum(num_subsystems)
        elif state.num_modes != num_subsystems:
            raise ValueError(
                "Initial state has {} modes, but the circuit has {} modes.".format(
                    state.num_modes, num_subsystems
                )
            )

        self._init_state = state
        self._state = state

    def reset(self):
        """Return to the state the last :meth:`begin_circuit` call started from."""
        self._state = self._init_state

    def get_modes(self):
        return list(range(self._state.num_modes))

    def apply_gate(self, gate):
        """Apply a lowered Gaussian gate to the register.

        Raises:
            ValueError: if ``symplectic_tol`` is set and the gate is not symplectic
        """
        if self.symplectic_tol is not None and not is_symplectic(
            gate.S, gate.num_modes, tol=self.symplectic_tol
        ):
            raise ValueError("{!r} is not symplectic.".format(gate))
        self._state = apply_gate(gate, self._state)

    def loss(self, T, mode):
        self._state = apply_loss(self._state, mode, T)

    def thermal_loss(self, T, nbar, mode):
        self._state = apply_thermal_loss(self._state, mode, T, nbar)

    def add_noise(self, vq, vp, mode):
        self._state = apply_additive_noise(self._state, mode, vq, vp)

    def measure_homodyne(self, phi, mode, rng, select=None, **kwargs):
        r"""Measure a phase space quadrature of the given mode.

        See :meth:`.BaseBackend.measure_homodyne`.

        Keyword Args:
            noise (float): classical noise variance added to the measured quadrature

        Returns:
            float: measured value
        """
        noise = kwargs.get("noise", 0.0)

        if select is None:
            value, state = sample_homodyne(self._state, mode, phi, rng, noise=noise)
        else:
            value = float(select)
            state = condition_homodyne(self._state, mode, phi, value, noise=noise)

        self._state = state
        return value

    def measure_heterodyne(self, mode, rng, select=None, **kwargs):
        """Jointly measure the position and momentum of the given mode.

        See :meth:`.BaseBackend.measure_heterodyne`.

        Returns:
            tuple[float, float]: measured ``(q, p)``
        """
        if select is None:
            value, state = sample_heterodyne(self._state, mode, rng, tol=self.singular_tol)
        else:
            value = (float(select[0]), float(select[1]))
            state = condition_heterodyne(self._state, mode, value, tol=self.singular_tol)

        self._state = state
        return value

    def prepare_fock_state(self, n, mode):
        raise NotApplicableError("Fock states cannot be represented in the Gaussian backend.")

    def prepare_cat_state(self, alpha, mode):
        raise NotApplicableError("Cat states cannot be represented in the Gaussian backend.")

    def prepare_gkp(self, delta, mode):
        r"""Inject an effective finite-energy GKP state.

        The GKP state is approximated by Gaussian noise of variance
        :math:`\delta^2` added to both quadratures of the mode.
        """
        self.add_noise(delta ** 2, delta ** 2, mode)

    def state(self, **kwargs):
        return self._state
