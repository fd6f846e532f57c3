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
This module implements the :class:`.Program` class which acts as a representation for quantum circuits.

Quantum circuit representation
------------------------------

A circuit is an ordered, append-only sequence of :class:`.Command` instances acting
on a register with a fixed number of modes. The order of the sequence is the order
in which the operations are executed; no reordering takes place.

Every Command is checked when it is appended: all the subsystems it refers to must
exist, no subsystem may be repeated, the operation must act on the right number of
subsystems, and its parameters must be admissible. A rejected Command never joins the
circuit, so a Program is structurally valid at all times.
"""
# pylint: disable=too-many-instance-attributes

import numbers

import schrosim.program_utils as pu

from .program_utils import Command, RegRef, CircuitError, RegRefError


# for automodapi, do not include the classes that should appear under the top-level schrosim namespace
__all__ = []


class Program:
    """Represents a continuous-variable quantum circuit.

    The program class provides a context manager for:

    * accessing the quantum register associated with the program, and
    * appending :mod:`~schrosim.ops` operations to the program.

    Within the context, operations are appended to the program using the
    pipe syntax

    .. code-block:: python3

        ops.GateName(arg1, arg2, ...) | (q[i], q[j], ...)

    where ``ops.GateName`` is a valid quantum operation, and ``q`` is a list
    of the programs quantum modes.
    All operations are appended to the program in the order they are
    listed within the context. Operations can equally be appended with
    :meth:`append`; both routes perform the same checks and raise the same errors.

    .. note::

        When a Program is run it is locked and no more
        operations can be appended to it.

    **Example:**

    .. code-block:: python3

        import schrosim as ss
        from schrosim import ops

        # create a 3 mode quantum program
        prog = ss.Program(3)

        with prog.context as q:
            ops.Sgate(0.54) | q[0]
            ops.Sgate(0.54) | q[1]
            ops.BSgate(0.43) | (q[0], q[2])
            ops.LossChannel(0.9) | q[2]
            ops.MeasureHomodyne(0) | q[0]

    Args:
        num_subsystems (int): number of modes (subsystems) in the quantum register
        name (str): program name (optional)

    Raises:
        .CircuitError: if ``num_subsystems`` is not a positive integer
    """

    def __init__(self, num_subsystems, name=None):
        #: str: program name
        self.name = name
        #: list[Command]: Commands constituting the quantum circuit in temporal order
        self._circuit = []
        #: bool: if True, no more Commands can be appended to the Program
        self.locked = False

        if isinstance(num_subsystems, bool) or not isinstance(num_subsystems, numbers.Integral):
            raise CircuitError(
                "Number of subsystems must be an integer, got {!r}.".format(num_subsystems)
            )
        if num_subsystems < 1:
            raise CircuitError(
                "Number of subsystems {} is not a positive integer.".format(num_subsystems)
            )

        #: int: number of subsystems
        self.init_num_subsystems = int(num_subsystems)
        #: dict[int, RegRef]: mapping from subsystem indices to corresponding RegRef objects
        self.reg_refs = {}
        self._add_subsystems(self.init_num_subsystems)

    def __str__(self):
        """String representation."""
        return self.__class__.__name__ + "({}, {} subsystems, {} commands)".format(
            self.name, self.num_subsystems, len(self)
        )

    def __len__(self):
        """Program length.

        Returns:
            int: number of Commands in the program
        """
        return len(self._circuit)

    @property
    def circuit(self):
        """tuple[Command]: the Commands of the program in temporal order"""
        return tuple(self._circuit)

    def print(self, print_fn=print):
        """Print the program contents using circuit notation.

        **Example:**

        .. code-block:: python

            # create a 2 mode quantum program
            prog = ss.Program(2)

            with prog.context as q:
                ops.Sgate(0.54) | q[0]
                ops.BSgate(0.43) | (q[0], q[1])
                ops.MeasureHomodyne(0) | q[1]

        >>> prog.print()
        Sgate(0.54) | (q[0])
        BSgate(0.43) | (q[0], q[1])
        MeasureX | (q[1])

        Args:
            print_fn (function): optional custom function to use for string printing
        """
        for k in self._circuit:
            print_fn(str(k))

    @property
    def context(self):
        """Syntactic sugar for defining a Program using the :code:`with` statement.

        The Program object itself acts as the context manager.
        """
        return self

    def __enter__(self):
        """Enter the context for this program.

        Returns:
            tuple[RegRef]: subsystem references
        """
        if pu.Program_current_context is None:
            pu.Program_current_context = self
        else:
            raise RuntimeError("Only one Program context can be active at a time.")
        return self.register

    def __exit__(self, ex_type, ex_value, ex_tb):
        """Exit the quantum circuit context."""
        pu.Program_current_context = None

    # =================================================
    #  RegRef accounting
    # =================================================
    @property
    def register(self):
        """Return a tuple of all the quantum modes.

        Returns:
            tuple[RegRef]: subsystem references
        """
        return tuple(self.reg_refs.values())

    @property
    def num_subsystems(self):
        """Return the number of quantum modes.

        Returns:
            int: number of register subsystems
        """
        return len(self.reg_refs)

    def _add_subsystems(self, n):
        """Create new subsystem references, add them to the reg_ref dictionary.

        .. note:: This is the only place where :class:`RegRef` instances are constructed.

        Args:
            n (int): number of subsystems to add
        Returns:
            tuple[RegRef]: tuple of the newly added subsystem references
        """
        first_unassigned_index = len(self.reg_refs)
        # create a list of RegRefs
        inds = [first_unassigned_index + i for i in range(n)]
        refs = tuple(RegRef(i) for i in inds)
        # add them to the index map
        for r in refs:
            self.reg_refs[r.ind] = r
        return refs

    def lock(self):
        """Finalize the program.

        When a Program is locked, no more Commands can be appended to it.
        The locking happens when the program is run.
        """
        self.locked = True

    def _index_to_regref(self, ind):
        """Try to find a RegRef corresponding to a given subsystem index.

        Args:
            ind (int): subsystem index
        Returns:
            RegRef: corresponding register reference
        Raises:
            .RegRefError: if the subsystem cannot be found
        """
        # index must be found in the dict
        if ind not in self.reg_refs:
            raise RegRefError("Subsystem {} does not exist.".format(ind))
        return self.reg_refs[ind]

    def _test_regrefs(self, reg):
        """Make sure reg is a valid selection of subsystems, convert them to RegRefs.

        A register reference is valid if it is properly recorded in self.reg_refs.
        The selection is valid if it contains only valid RegRefs and no subsystem
        is repeated.

        Args:
            reg (Iterable[int, RegRef]): subsystem references
        Returns:
            list[RegRef]: converted subsystem references
        Raises:
            .RegRefError: if an invalid subsystem reference is found
        """
        temp = []
        for rr in reg:
            # must be either an integer or a RegRef
            if isinstance(rr, RegRef):
                if self.reg_refs.get(rr.ind) is not rr:
                    raise RegRefError("Unknown RegRef {}.".format(rr))
            elif isinstance(rr, numbers.Integral) and not isinstance(rr, bool):
                rr = self._index_to_regref(rr)
            else:
                raise RegRefError("Subsystems can only be indexed using integers and RegRefs.")

            if rr in temp:
                raise RegRefError("Trying to act on the same subsystem more than once.")
            temp.append(rr)
        return temp

    def append(self, op, reg):
        """Append a command to the program.

        The command is only appended if every check passes.

        Args:
            op (Operation): quantum operation
            reg (list[int, RegRef]): register subsystem(s) to apply it to
        Returns:
            list[RegRef]: subsystem list as RegRefs
        Raises:
            .CircuitError: if the program is locked
            .RegRefError: if the subsystems are invalid or of the wrong number
            .ParameterError: if the operation parameters are invalid
        """
        if self.locked:
            raise CircuitError("The Program is locked, no more Commands can be appended to it.")

        # test that the target subsystem references are ok
        reg = self._test_regrefs(reg)
        if op.ns is None:
            if not reg:
                raise RegRefError("{} must act on at least one subsystem.".format(op))
        elif len(reg) != op.ns:
            raise RegRefError(
                "Wrong number of subsystems: {} acts on {}, got {}.".format(op, op.ns, len(reg))
            )
        # test the operation parameters
        op.validate()

        self._circuit.append(Command(op, reg))
        return reg
