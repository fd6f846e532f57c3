# Copyright 2019-2020 Xanadu Quantum Technologies Inc.

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
This module implements :class:`BaseEngine` and its subclasses that are responsible for
communicating quantum programs represented by :class:`.Program` objects
to a backend simulator.
One can think of each BaseEngine instance as a separate quantum computation.
"""
import abc

from schrosim.configuration import load_config
from schrosim.logger import create_logger
from schrosim.program import Program
from schrosim.result import MeasurementEvent, Result

from .backends import load_backend
from .backends.base import BaseBackend, NotApplicableError
from .backends.gaussianbackend.measurements import make_rng
from .ops import Measurement

# for automodapi, do not include the classes that should appear under the top-level schrosim namespace
__all__ = ["BaseEngine", "LocalEngine"]


class BaseEngine(abc.ABC):
    r"""Abstract base class for quantum program executor engines.

    The ``simulation`` section of the configuration provides the default seed
    and the numerical tolerances of the backend, and the ``logging`` section
    configures the engine logger, see :mod:`schrosim.configuration`.

    Args:
        backend (str, BaseBackend): backend short name, or a pre-constructed backend instance
        backend_options (Dict[str, Any]): keyword arguments for the backend
    """

    def __init__(self, backend, *, backend_options=None):
        if backend_options is None:
            backend_options = {}

        config = load_config(log=False)
        #: dict[str, Any]: the ``simulation`` configuration section
        self.config = config["simulation"]
        self.log = create_logger(
            __name__, level=config["logging"]["level"], logfile=config["logging"].get("logfile")
        )

        #: Dict[str, Any]: keyword arguments for the backend
        self.backend_options = {
            "singular_tol": self.config["singular_tol"],
            "symplectic_tol": self.config["symplectic_tol"],
        }
        self.backend_options.update(backend_options)
        #: List[Program]: list of Programs that have been run
        self.run_progs = []

        if isinstance(backend, str):
            self.backend_name = backend
            self.backend = load_backend(backend, **self.backend_options)
        elif isinstance(backend, BaseBackend):
            self.backend_name = backend.short_name
            self.backend = backend
        else:
            raise TypeError("backend must be a string or a BaseBackend instance.")

    @abc.abstractmethod
    def __str__(self):
        """String representation."""

    def reset(self):
        r"""Re-initialize the quantum computation.

        * The backend returns to the initial state of its last circuit.
        * The list of previously run Programs is cleared.

        Programs that were run stay locked.
        """
        self.run_progs.clear()

    def print_applied(self, print_fn=print):
        """Print all the Programs run since the engine was created or reset.

        This will be blank until the first call to :meth:`~.LocalEngine.run`.

        **Example:**

        >>> eng.run(prog)
        >>> eng.run(prog2)
        >>> eng.print_applied()
        Run 0:
        Sgate(0.543) | (q[0])
        BSgate(0.7854) | (q[0], q[1])
        Run 1:
        Dgate(0.06, 0) | (q[0])

        Args:
            print_fn (function): optional custom function to use for string printing.
        """
        for k, r in enumerate(self.run_progs):
            print_fn("Run {}:".format(k))
            r.print(print_fn)

    @abc.abstractmethod
    def _run_program(self, prog, **kwargs):
        """Execute a single program on the backend.

        This method should not be called directly.

        Args:
            prog (Program): program to run

        Returns:
            list[MeasurementEvent]: the measurement record of the program
        """


class LocalEngine(BaseEngine):
    """Local quantum program executor engine.

    The SchroSIM engine is used to execute :class:`.Program` instances
    on the chosen local backend, and makes the results available via :class:`.Result`.

    **Example:**

    The following example creates a SchroSIM
    quantum :class:`~.Program` and runs it using an engine.

    .. code-block:: python

        # create a program
        prog = ss.Program(2)

        with prog.context as q:
            ops.Sgate(0.543) | q[0]
            ops.BSgate() | (q[0], q[1])
            ops.MeasureHomodyne(0) | q[1]

    We initialize the engine with the name of the local backend,
    and can pass optional backend options.

    >>> eng = ss.Engine("gaussian", backend_options={"singular_tol": 1e-12})

    The :meth:`~.LocalEngine.run` method is used to execute quantum
    programs on the attached backend, and returns a :class:`.Result`
    object containing the results of the execution.

    >>> results = eng.run(prog, rng=42)

    Args:
        backend (str, BaseBackend): short name of the backend, or a pre-constructed backend instance
        backend_options (None, Dict[str, Any]): keyword arguments to be passed to the backend
    """

    def __init__(self, backend="gaussian", *, backend_options=None):
        super().__init__(backend, backend_options=backend_options)

    def __str__(self):
        return self.__class__.__name__ + "({})".format(self.backend_name)

    def reset(self):
        super().reset()
        self.backend.reset()

    def _run_program(self, prog, **kwargs):
        events = []

        for i, cmd in enumerate(prog.circuit):
            try:
                # try to apply it to the backend and, if op is a measurement, record its values
                val = cmd.op.apply(cmd.reg, self.backend, **kwargs)
            except NotApplicableError:
                # command is not applicable to the current backend type
                raise NotApplicableError(
                    "The operation {} cannot be used with {}.".format(cmd.op, self.backend)
                ) from None

            self.log.debug("Applied %s", cmd)

            if isinstance(cmd.op, Measurement):
                phi = cmd.op.phi
                events.append(
                    MeasurementEvent(
                        index=i,
                        mode=cmd.reg[0].ind,
                        kind=cmd.op.kind,
                        phi=None if phi is None else float(phi),
                        values=val,
                    )
                )

        return events

    def run(self, program, *, state=None, rng=None):
        """Execute a quantum program by sending it to the backend.

        The backend is initialized with ``state``, the program is locked, and
        the Commands are applied in order. A Command that fails aborts the run,
        no :class:`.Result` is returned and the backend returns to the initial
        state of the run. If ``state`` is rejected, the program is not locked.

        Args:
            program (Program): quantum program to run
            state (GaussianState, None): initial state, defaults to the vacuum on
                ``program.num_subsystems`` modes
            rng (numpy.random.Generator, int, None): source of randomness for the
                measurements, or a seed for it. If ``None``, the ``seed`` option of the
                ``simulation`` configuration section is used, which draws fresh entropy
                when it is unset.

        Returns:
            Result: results of the computation

        Raises:
            TypeError: if ``program`` is not a :class:`.Program`
            ValueError: if ``state`` has a different number of modes than ``program``
            NotApplicableError: if the program contains an operation the backend cannot execute
        """
        if not isinstance(program, Program):
            raise TypeError("Expected a Program, got {}.".format(type(program).__name__))

        if rng is None:
            rng = self.config.get("seed")
        rng = make_rng(rng)

        self.backend.begin_circuit(program.num_subsystems, state=state)
        program.lock()

        try:
            events = self._run_program(program, rng=rng)
        except Exception:
            # discard the partially evolved state
            self.backend.reset()
            raise

        self.run_progs.append(program)

        self.log.info(
            "Run of %s with %d commands finished with %d measurement events.",
            program,
            len(program),
            len(events),
        )
        return Result(self.backend.state(), events)


class Engine(LocalEngine):
    """dummy"""

    # alias for backwards compatibility
    __doc__ = LocalEngine.__doc__
