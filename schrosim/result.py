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
This module provides a class that represents the result of a quantum computation.
"""

from typing import List, Mapping, NamedTuple, Optional, Sequence, Tuple

from schrosim.backends import GaussianState


class MeasurementEvent(NamedTuple):
    """Record of a single measurement performed during a simulation.

    Args:
        index (int): position of the measurement in the program
        mode (int): measured mode
        kind (str): ``"homodyne"`` or ``"heterodyne"``
        phi (float, None): quadrature angle of a homodyne measurement, ``None`` for heterodyne
        values (tuple[float]): one value for homodyne, ``(q, p)`` for heterodyne
    """

    index: int
    mode: int
    kind: str
    phi: Optional[float]
    values: Tuple[float, ...]


class Result:
    """Result of a quantum computation.

    Represents the results of the execution of a quantum program on the local
    Gaussian simulator.

    The returned :class:`~Result` object provides several useful properties
    for accessing the results of your program execution:

    * ``results.state``: The final :class:`~.GaussianState` of the circuit.

    * ``results.measurements``: The :class:`MeasurementEvent` records of all the
      measurements performed, in execution order.

    * ``results.samples_dict``: Measurement outcomes sorted by measured mode.

    **Example:**

    >>> eng = ss.Engine("gaussian")
    >>> results = eng.run(prog, rng=42)
    >>> print(results)
    <Result: num_modes=2, num_measurements=1, contains state=True>
    >>> results.measurements[0].values
    (0.2167,)

    Args:
        state (GaussianState): final state of the simulation
        measurements (Sequence[MeasurementEvent]): measurement record in execution order
    """

    def __init__(
        self, state: Optional[GaussianState], measurements: Sequence[MeasurementEvent] = ()
    ) -> None:
        self._state = None
        self._measurements = tuple(measurements)
        self.state = state

    @property
    def measurements(self) -> Tuple[MeasurementEvent, ...]:
        """Measurement record.

        Returns:
            tuple[MeasurementEvent]: one event per measurement, in execution order
        """
        return self._measurements

    @property
    def samples(self) -> List[Tuple[float, ...]]:
        """Measurement outcomes in execution order.

        Returns:
            list[tuple[float]]: the values of every measurement event
        """
        return [event.values for event in self._measurements]

    @property
    def samples_dict(self) -> Mapping[int, List]:
        """All measurement outcomes as a dictionary.

        Returns a dictionary which associates each mode (keys) with the list of
        measurements outcomes (values), including modes that are being measured
        several times.

        Returns:
            Mapping[int, list]: mode index associated with the list of measurement outcomes
        """
        samples = {}
        for event in self._measurements:
            samples.setdefault(event.mode, []).append(event.values)
        return samples

    @property
    def state(self) -> Optional[GaussianState]:
        """The final quantum state of the simulation.

        Returns:
            GaussianState: quantum state returned from program execution
        """
        return self._state

    @state.setter
    def state(self, state: Optional[GaussianState]) -> None:
        """Set the state if not previously set.

        Raises:
            TypeError: if state is already set, or is not a ``GaussianState``
        """
        if self._state is not None:
            raise TypeError("State already set and cannot be changed.")
        if not (isinstance(state, GaussianState) or state is None):
            raise TypeError(f"State must be of type 'GaussianState', not '{type(state)}'")

        self._state = state

    def __repr__(self) -> str:
        """String representation."""
        modes = self._state.num_modes if self._state is not None else 0
        return (
            f"<Result: num_modes={modes}, num_measurements={len(self._measurements)}, "
            f"contains state={self._state is not None}>"
        )
