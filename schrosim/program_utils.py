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
This module contains various utility classes and functions used
within the :class:`~.Program` class.
"""

from collections.abc import Sequence


__all__ = [
    "Program_current_context",
    "RegRefError",
    "CircuitError",
    "LoweringError",
    "Command",
    "RegRef",
]


Program_current_context = None
"""Context for inputting a Program. Used to be a class attribute of :class:`.Program`, placed
here to avoid cyclic imports."""


class RegRefError(IndexError):
    """Exception raised by :class:`.Program` when it encounters an invalid register reference.

    E.g., trying to apply a gate to a nonexistent subsystem.
    """


class CircuitError(RuntimeError):
    """Exception raised by :class:`.Program` when it encounters an illegal
    operation in the quantum circuit.

    E.g., trying to append to a Program that has already been run.
    """


class LoweringError(RuntimeError):
    """Exception raised by :meth:`schrosim.ops.Operation.lower` when an
    Operation has no representation as an affine symplectic map.

    E.g., trying to lower a measurement or a loss channel to a Gaussian gate.
    """


class Command:
    """Represents a quantum operation applied on specific subsystems of the register.

    A Command instance is immutable once created, and can be shared between
    several :class:`.Program` instances.

    Args:
        op (~schrosim.ops.Operation): quantum operation to apply
        reg (Sequence[RegRef]): Subsystems to which the operation is applied.
            Note that the order matters here.
    """

    # pylint: disable=too-few-public-methods

    __slots__ = ("_op", "_reg")

    def __init__(self, op, reg):
        # accept a single RegRef in addition to a Sequence
        if not isinstance(reg, Sequence):
            reg = [reg]

        object.__setattr__(self, "_op", op)
        object.__setattr__(self, "_reg", tuple(reg))

    def __setattr__(self, name, value):
        raise AttributeError("Command instances are immutable.")

    @property
    def op(self):
        """Operation: quantum operation to apply"""
        return self._op

    @property
    def reg(self):
        """tuple[RegRef]: subsystems to which the operation is applied"""
        return self._reg

    @property
    def modes(self):
        """tuple[int]: indices of the subsystems the operation is applied to"""
        return tuple(r.ind for r in self._reg)

    def __str__(self):
        """
        Return a string containing the command in circuit notation.
        """

        operation = str(self.op)
        if self.op.ns == 0:
            # op takes no subsystems as parameters, do not print anything more
            code = operation
        else:
            subsystems = ", ".join([str(r) for r in self.reg])
            code = "{} | ({})".format(operation, subsystems)
        return code

    def __repr__(self):
        return "<Command: {}>".format(self)


class RegRef:
    """Quantum register reference.

    The objects of this class refer to a specific subsystem (mode) of
    a quantum register.

    Within the scope of each :class:`.Program` instance, only one RegRef instance
    exists per subsystem. Program keeps the authoritative mapping
    of subsystem indices to RegRef instances.

    The RegRefs are constructed in :meth:`.Program._add_subsystems`.

    Args:
        ind (int): index of the register subsystem referred to
    """

    # pylint: disable=too-few-public-methods

    def __init__(self, ind):
        self.ind = ind  #: int: subsystem index

    def __str__(self):
        return "q[{}]".format(self.ind)

    def __repr__(self):
        return "<RegRef: q[{}]>".format(self.ind)

    def __hash__(self):
        """Hashing method.

        NOTE: Has to match :meth:`__eq__` such that if two RegRefs compare equal they must have equal hashes.
        """
        return hash(self.ind)

    def __eq__(self, other):
        """Equality comparison.

        Compares the index of the two RegRefs.
        NOTE: Affects the hashability of RegRefs, see also :meth:`__hash__`.
        """
        if other.__class__ != self.__class__:
            return False
        return self.ind == other.ind
