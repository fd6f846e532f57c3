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
r"""
This module defines the Python-embedded instruction set for
continuous-variable (CV) quantum circuits.

Every concrete operation belongs to exactly one of five families, and each
family has a single way of being executed:

* :class:`Gate`: Gaussian unitaries, lowered to a :class:`~.CVGate` and applied
  by symplectic evolution.
* :class:`Channel`: non-unitary Gaussian channels, applied directly.
* :class:`Measurement`: homodyne and heterodyne detection, sampled or post-selected.
* :class:`NonGaussianInjection`: injection of a non-Gaussian resource state.
* :class:`Placeholder`: reserved instructions that no backend executes.

Operations are appended to a :class:`.Program` inside its context using the
``|`` syntax, ``ops.Sgate(0.5) | q[0]``.
"""
from collections.abc import Sequence

import numpy as np

import schrosim.program_utils as pu
from .backends.base import NotApplicableError
from .backends.gaussianbackend import ops as gops
from .parameters import (
    ParameterError,
    check_complex,
    check_nbar,
    check_photon_number,
    check_real,
    check_transmissivity,
    check_variance,
    par_str,
)
from .program_utils import LoweringError, RegRef

# pylint: disable=abstract-method
# pylint: disable=arguments-differ  # Measurement._apply introduces the "rng" argument


def _seq_to_list(s):
    "Converts a Sequence or a single object into a list."
    if not isinstance(s, Sequence):
        s = [s]
    return list(s)


def _mode_indices(reg):
    "Converts RegRefs into plain subsystem indices."
    return [r.ind if isinstance(r, RegRef) else r for r in reg]


class Operation:
    """Abstract base class for quantum operations acting on one or more subsystems.

    Operation parameters are stored in an immutable tuple. They are checked by
    :meth:`validate` when the operation is appended to a :class:`.Program`.

    Args:
        par (Sequence[Any]): Operation parameters. An empty sequence if no parameters
            are required.
    """

    # default: one-subsystem operation
    #: int: number of subsystems the operation acts on, or None if any number > 0 is ok
    ns = 1

    def __init__(self, par):
        for q in par:
            if isinstance(q, RegRef):
                raise TypeError("Operation parameters cannot be register references.")
        self._p = tuple(par)

    @property
    def p(self):
        """tuple[Any]: operation parameters"""
        return self._p

    def __str__(self):
        """String representation for the Operation using circuit notation.

        Returns:
            str: string representation
        """
        # defaults to the class name
        if not self.p:
            return self.__class__.__name__

        # class name and parameter values
        temp = [par_str(i) for i in self.p]
        return self.__class__.__name__ + "(" + ", ".join(temp) + ")"

    def __repr__(self):
        return "<{}>".format(self)

    def __or__(self, reg):
        """Apply the operation to a part of a quantum register.

        Appends the Operation to a :class:`.Program` instance.

        Args:
            reg (RegRef, Sequence[RegRef]): subsystem(s) the operation is acting on

        Returns:
            list[RegRef]: subsystem list as RegRefs
        """
        if pu.Program_current_context is None:
            raise RuntimeError("Operations can only be applied inside a Program context.")
        # into a list of subsystems
        reg = _seq_to_list(reg)
        # append it to the Program
        reg = pu.Program_current_context.append(self, reg)
        return reg

    def validate(self):
        """Check the operation parameters.

        Called by :meth:`.Program.append` before the operation joins the circuit.

        Raises:
            .ParameterError: if a parameter value is not allowed
        """

    def lower(self, reg, num_modes):
        """Lower the operation to an affine symplectic map on the whole register.

        Only :class:`Gate` instances can be lowered.

        Args:
            reg (Sequence[int, RegRef]): subsystems the operation is acting on
            num_modes (int): number of modes in the register

        Returns:
            CVGate: the corresponding Gaussian gate

        Raises:
            .LoweringError: if the operation is not a Gaussian unitary
        """
        raise LoweringError("{} cannot be lowered to a Gaussian gate.".format(self))

    def _apply(self, reg, backend, **kwargs):
        """Internal apply method. Uses numeric subsystem referencing.

        Args:
            reg (Sequence[int]): subsystem indices the operation is
                acting on (this is how the backend API wants them)
            backend (BaseBackend): backend to execute the operation

        Returns:
            Any: Measurement results, if any.
        """
        raise NotImplementedError("Missing direct implementation: {}".format(self))

    def apply(self, reg, backend, **kwargs):
        """Ask a local backend to execute the operation on the current register state right away.

        Args:
            reg (Sequence[RegRef]): subsystem(s) the operation is acting on
            backend (BaseBackend): backend to execute the operation

        Returns:
            Any: the result of self._apply
        """
        # convert RegRefs back to indices for the backend API
        temp = _mode_indices(reg)
        # call the child class specialized _apply method
        return self._apply(temp, backend, **kwargs)


# ====================================================================
# Operation families
# ====================================================================


class Gate(Operation):
    """Abstract base class for Gaussian unitary gates.

    A gate is executed by lowering it to a :class:`~.CVGate` acting on the
    whole register and applying it with symplectic evolution.
    All gate parameters must be finite real numbers.
    """

    def validate(self):
        for i, q in enumerate(self.p):
            check_real("{} parameter {}".format(self.__class__.__name__, i), q)

    def lower(self, reg, num_modes):
        return self._lower(_mode_indices(reg), num_modes)

    def _lower(self, reg, num_modes):
        """Internal lowering method defined by subclasses.

        Args:
            reg (Sequence[int]): subsystem indices the gate is acting on
            num_modes (int): number of modes in the register

        Returns:
            CVGate: the corresponding Gaussian gate
        """
        raise NotImplementedError

    def _apply(self, reg, backend, **kwargs):
        backend.apply_gate(self._lower(reg, len(backend.get_modes())))


class Channel(Operation):
    """Abstract base class for non-unitary Gaussian channels.

    Channels act on the state directly and are never lowered.
    """


class Measurement(Operation):
    """Abstract base class for subsystem measurements.

    When the measurement happens, the state of the system is updated
    to the conditional state corresponding to the measurement result.
    Measurements also support postselection, see below.

    Args:
        select (None, Any): Desired value of the measurement result.
            Allows the post-selection of specific measurement results
            instead of randomly sampling. None means no postselection.
    """

    #: str: kind of measurement recorded in the measurement events
    kind = None

    def __init__(self, par, select=None):
        super().__init__(par)
        self._select = select

    @property
    def select(self):
        """None, Any: postselection value"""
        return self._select

    @property
    def phi(self):
        """None, float: quadrature angle of the measurement, if any"""
        return None

    def __str__(self):
        # class name, parameter values, and possibly the select parameter
        temp = super().__str__()

        if self.select is not None:
            if not self.p:
                temp += f"(select={self.select})"
            else:
                temp = f"{temp[:-1]}, select={self.select})"

        return temp

    def apply(self, reg, backend, **kwargs):
        """Ask a backend to execute the measurement on the current register state right away.

        Keyword Args:
            rng (numpy.random.Generator): source of randomness for sampling

        Returns:
            tuple[float]: measured values
        """
        values = super().apply(reg, backend, **kwargs)
        return tuple(float(v) for v in np.atleast_1d(values))


class NonGaussianInjection(Operation):
    """Abstract base class for the injection of non-Gaussian resource states.

    Whether an injection can be executed depends on the backend; a backend
    that cannot represent the state raises :class:`~.NotApplicableError`.
    """


class Placeholder(Operation):
    """Abstract base class for reserved instructions that are never executed.

    Placeholders can be recorded in a circuit, but every backend rejects them.
    """

    def _apply(self, reg, backend, **kwargs):
        raise NotApplicableError("{} cannot be executed.".format(self))


# ====================================================================
# Measurements
# ====================================================================


class MeasureHomodyne(Measurement):
    r"""Performs a homodyne measurement, measures one quadrature of a mode.

    * Position basis measurement: :math:`\phi = 0`
      (also accessible via the shortcut variable ``MeasureX``).

    * Momentum basis measurement: :math:`\phi = \pi/2`.
      (also accessible via the shortcut variable ``MeasureP``)

    Args:
        phi (float): measurement angle :math:`\phi`
        select (None, float): (Optional) desired values of measurement result.
            Allows the post-selection of specific measurement results instead of randomly sampling.

    .. details::

        .. admonition:: Definition
           :class: defn

           Homodyne measurement is a Gaussian projective measurement of the
           Hermitian operator

           .. math:: \hat{x}_\phi = \cos(\phi) \hat{q} + \sin(\phi)\hat{p}.

        The outcome is drawn from the marginal distribution of :math:`x_\phi`
        and the remaining state is conditioned on it.
    """
    ns = 1
    kind = "homodyne"

    def __init__(self, phi, select=None):
        super().__init__([phi], select)

    @property
    def phi(self):
        return self.p[0]

    def validate(self):
        check_real("Homodyne angle", self.p[0])
        if self.select is not None:
            check_real("Homodyne post-selection value", self.select)

    def _apply(self, reg, backend, **kwargs):
        return backend.measure_homodyne(self.p[0], *reg, select=self.select, **kwargs)

    def __str__(self):
        if self.select is None:
            if self.p[0] == 0:
                return "MeasureX"
            if self.p[0] == np.pi / 2:
                return "MeasureP"
        return super().__str__()


class MeasureHeterodyne(Measurement):
    r"""Performs a heterodyne measurement on a mode.

    Also accessible via the shortcut variable ``MeasureHD``.

    Jointly measures both quadratures :math:`(q, p)` of the mode. The joint
    measurement adds vacuum noise of covariance :math:`\frac{1}{2}I_2`.

    Args:
        select (None, tuple[float, float]): (Optional) desired values of measurement result.
            Allows the post-selection of specific measurement results instead of randomly sampling.
    """
    ns = 1
    kind = "heterodyne"

    def __init__(self, select=None):
        if select is not None:
            select = tuple(_seq_to_list(select))
        super().__init__([], select)

    def validate(self):
        if self.select is None:
            return
        if len(self.select) != 2:
            raise ParameterError(
                "Heterodyne post-selection requires a (q, p) pair, got {!r}.".format(self.select)
            )
        for q in self.select:
            check_real("Heterodyne post-selection value", q)

    def _apply(self, reg, backend, **kwargs):
        return backend.measure_heterodyne(*reg, select=self.select, **kwargs)

    def __str__(self):
        if self.select is None:
            return "MeasureHD"
        return "MeasureHeterodyne(select={})".format(self.select)


# ====================================================================
# Channels
# ====================================================================


class LossChannel(Channel):
    r"""Perform a loss channel operation on the specified mode.

    This channel couples mode :math:`\a` to another bosonic mode :math:`\hat{b}`
    prepared in the vacuum state using the following transformation:

    .. math::
        \a \mapsto \sqrt{T} a+\sqrt{1-T} \hat{b}

    Args:
        T (float): the loss parameter :math:`0\leq T\leq 1`.

    .. details::

        On the Gaussian representation the channel attenuates the vector of
        means and the covariances touching the mode by :math:`\sqrt{T}`, and adds
        vacuum noise of variance :math:`(1-T)/2` to both quadratures.
        For :math:`T = 0` the mode is mapped to the vacuum state, and for
        :math:`T=1` one has the identity map.
    """

    def __init__(self, T):
        super().__init__([T])

    def validate(self):
        check_transmissivity(self.p[0])

    def _apply(self, reg, backend, **kwargs):
        backend.loss(self.p[0], *reg)


class ThermalLossChannel(Channel):
    r"""Perform a thermal loss channel operation on the specified mode.

    This channel couples mode :math:`\a` to another bosonic mode :math:`\hat{b}`
    prepared in a thermal state with mean photon number :math:`\bar{n}`,
    using the following transformation:

    .. math::
       \a \mapsto \sqrt{T} a+\sqrt{1-T} \hat{b}

    Args:
        T (float): the loss parameter :math:`0\leq T\leq 1`.
        nbar (float): mean photon number of the environment thermal state

    Note that if :math:`\bar{n}=0`, the thermal loss channel is equivalent to the
    :class:`LossChannel`.
    """

    def __init__(self, T, nbar):
        super().__init__([T, nbar])

    def validate(self):
        check_transmissivity(self.p[0])
        check_nbar(self.p[1])

    def _apply(self, reg, backend, **kwargs):
        backend.thermal_loss(self.p[0], self.p[1], *reg)


class AdditiveNoise(Channel):
    r"""Add classical Gaussian noise to the quadratures of the specified mode.

    .. math::
        V_{qq} \mapsto V_{qq} + v_q,\qquad V_{pp} \mapsto V_{pp} + v_p

    Args:
        vq (float): noise variance :math:`v_q\geq 0` of the position quadrature
        vp (float): noise variance :math:`v_p\geq 0` of the momentum quadrature,
            defaults to ``vq``
    """

    def __init__(self, vq, vp=None):
        if vp is None:
            vp = vq
        super().__init__([vq, vp])

    def validate(self):
        check_variance("Position noise variance", self.p[0])
        check_variance("Momentum noise variance", self.p[1])

    def _apply(self, reg, backend, **kwargs):
        backend.add_noise(self.p[0], self.p[1], *reg)


# ====================================================================
# Unitary gates
# ====================================================================


class Dgate(Gate):
    r"""Phase space displacement gate.

    .. math::
        q \mapsto q + q_0,\qquad p \mapsto p + p_0

    The symplectic part of the gate is the identity.

    Args:
        q (float): position displacement :math:`q_0`
        p (float): momentum displacement :math:`p_0`
    """

    def __init__(self, q, p=0.0):
        super().__init__([q, p])

    def _lower(self, reg, num_modes):
        return gops.displacement(self.p[0], self.p[1], reg[0], num_modes)


class Sgate(Gate):
    r"""Phase space squeezing gate.

    .. math::
        q \mapsto e^{-r}q,\qquad p \mapsto e^{r}p

    Args:
        r (float): squeezing amount
    """

    def __init__(self, r):
        super().__init__([r])

    def _lower(self, reg, num_modes):
        return gops.squeeze(self.p[0], reg[0], num_modes)


class Rgate(Gate):
    r"""Rotation phase shift gate.

    .. math::
        R(\theta) = e^{i\theta\a^\dagger\a}

    which rotates the quadratures as
    :math:`q \mapsto q\cos\theta - p\sin\theta` and
    :math:`p \mapsto q\sin\theta + p\cos\theta`.

    Args:
        theta (float): rotation angle :math:`\theta`.
    """

    def __init__(self, theta):
        super().__init__([theta])

    def _lower(self, reg, num_modes):
        return gops.phase_shift(self.p[0], reg[0], num_modes)


class BSgate(Gate):
    r"""Beamsplitter gate.

    The same rotation by :math:`\theta` mixes the positions and the momenta of
    the two modes, :math:`q_a \mapsto q_a\cos\theta - q_b\sin\theta` and
    :math:`q_b \mapsto q_a\sin\theta + q_b\cos\theta`.

    Args:
        theta (float): Transmittivity angle :math:`\theta`. The transmission amplitude of
            the beamsplitter is :math:`t = \cos(\theta)`.
            The value :math:`\theta=\pi/4` gives the 50-50 beamsplitter (default).
    """
    ns = 2

    def __init__(self, theta=np.pi / 4):
        super().__init__([theta])

    def _lower(self, reg, num_modes):
        return gops.beamsplitter(self.p[0], reg[0], reg[1], num_modes)


# ====================================================================
# Non-Gaussian injections
# ====================================================================


class Fock(NonGaussianInjection):
    r"""Inject the Fock state :math:`\ket{n}` into the specified mode.

    Args:
        n (int): Fock state to prepare
    """

    def __init__(self, n=0):
        super().__init__([n])

    def validate(self):
        check_photon_number(self.p[0])

    def _apply(self, reg, backend, **kwargs):
        backend.prepare_fock_state(self.p[0], *reg)


class Catstate(NonGaussianInjection):
    r"""Inject the even cat state :math:`\propto\ket{\alpha}+\ket{-\alpha}` into the specified mode.

    Args:
        alpha (complex): displacement amplitude of the superposed coherent states
    """

    def __init__(self, alpha=0):
        super().__init__([alpha])

    def validate(self):
        check_complex("Cat state amplitude", self.p[0])

    def _apply(self, reg, backend, **kwargs):
        backend.prepare_cat_state(self.p[0], *reg)


class GKP(NonGaussianInjection):
    r"""Inject a finite-energy GKP state into the specified mode.

    On the Gaussian backend this is approximated by adding Gaussian noise of
    variance :math:`\delta^2` to both quadratures of the mode.

    Args:
        delta (float): width :math:`\delta\geq 0` of the finite-energy envelope
    """

    def __init__(self, delta):
        super().__init__([delta])

    def validate(self):
        delta = check_real("GKP width", self.p[0])
        if delta < 0:
            raise ParameterError("GKP width must be non-negative, got {}.".format(delta))

    def _apply(self, reg, backend, **kwargs):
        backend.prepare_gkp(self.p[0], *reg)


# ====================================================================
# Placeholders
# ====================================================================


class NoisePlaceholder(Placeholder):
    """Reserved slot for a noise process that has no model yet.

    The placeholder acts on no subsystems and is rejected by every backend.

    Args:
        label (str): name of the noise process
    """
    ns = 0

    def __init__(self, label):
        super().__init__([label])

    def validate(self):
        if not isinstance(self.p[0], str):
            raise ParameterError("Placeholder label must be a string, got {!r}.".format(self.p[0]))


# ====================================================================
# Shorthands, e.g. pre-constructed singleton-like objects
# ====================================================================

MeasureX = MeasureHomodyne(0)
MeasureP = MeasureHomodyne(np.pi / 2)
MeasureHD = MeasureHeterodyne()

shorthands = ["MeasureX", "MeasureP", "MeasureHD"]

# =======================================================================
# here we list different classes of operations for unit testing purposes

one_args_gates = (Rgate, Sgate, BSgate)
two_args_gates = (Dgate,)
gates = one_args_gates + two_args_gates

channels = (LossChannel, ThermalLossChannel, AdditiveNoise)

simple_state_preparations = (Fock, Catstate, GKP)
state_preparations = simple_state_preparations

measurements = (MeasureHomodyne, MeasureHeterodyne)

placeholders = (NoisePlaceholder,)

families = (Gate, Channel, Measurement, NonGaussianInjection, Placeholder)

__all__ = [
    cls.__name__
    for cls in gates + channels + state_preparations + measurements + placeholders + families
] + shorthands
