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
r"""Unit tests for engine.py"""
import logging

import pytest

import numpy as np

import schrosim as ss
from schrosim import ops
from schrosim.backends.base import NotApplicableError
from schrosim.backends.gaussianbackend import GaussianBackend, GaussianState
from schrosim.backends.gaussianbackend.measurements import condition_homodyne
from schrosim.program_utils import CircuitError
from schrosim.result import MeasurementEvent, Result

pytestmark = pytest.mark.frontend


@pytest.fixture
def eng():
    """Engine fixture."""
    return ss.LocalEngine("gaussian")


@pytest.fixture
def prog():
    """Program fixture."""
    prog = ss.Program(2)
    with prog.context as q:
        ops.Sgate(0.3) | q[0]
        ops.BSgate() | (q[0], q[1])
    return prog


class TestEngine:
    """Test basic engine functionality"""

    def test_load_backend(self):
        """Backend can be correctly loaded via strings"""
        eng = ss.LocalEngine("gaussian")
        assert isinstance(eng.backend, GaussianBackend)

    def test_default_backend(self):
        """The Gaussian backend is the default"""
        assert ss.Engine().backend_name == "gaussian"

    def test_backend_instance(self):
        """A pre-constructed backend can be used"""
        backend = GaussianBackend()
        eng = ss.LocalEngine(backend)
        assert eng.backend is backend
        assert eng.backend_name == "gaussian"

    def test_bad_backend(self):
        """Backend must be a string or a BaseBackend instance."""
        with pytest.raises(TypeError, match="backend must be a string or a BaseBackend instance"):
            ss.LocalEngine(0)

    def test_unknown_backend(self):
        """An unknown backend name raises a ValueError"""
        with pytest.raises(ValueError, match="not supported"):
            ss.LocalEngine("fock")

    def test_backend_options(self):
        """Backend options are passed to the backend and override the configuration"""
        eng = ss.LocalEngine("gaussian", backend_options={"singular_tol": 1e-10})
        assert eng.backend.singular_tol == 1e-10
        assert eng.backend.symplectic_tol == eng.config["symplectic_tol"]

    def test_str(self, eng):
        """String representation of the engine"""
        assert str(eng) == "LocalEngine(gaussian)"

    def test_engine_alias_doc(self):
        """The Engine alias carries the LocalEngine documentation"""
        assert ss.Engine.__doc__ == ss.LocalEngine.__doc__


class TestRun:
    """Tests for the run method"""

    def test_returns_result(self, eng, prog):
        """Running a program returns a Result with the final state"""
        res = eng.run(prog)
        assert isinstance(res, Result)
        assert isinstance(res.state, GaussianState)
        assert res.state.num_modes == 2
        assert res.measurements == ()

    def test_program_locked(self, eng, prog):
        """A program that was run cannot be appended to."""
        eng.run(prog)
        assert prog.locked
        with pytest.raises(CircuitError, match="locked"):
            prog.append(ops.Sgate(0.1), [0])

    def test_not_a_program(self, eng):
        """Only Programs can be run"""
        with pytest.raises(TypeError, match="Expected a Program"):
            eng.run([ops.Sgate(0.1)])

    def test_initial_state(self, eng, displaced_squeezed):
        """An empty program returns the supplied initial state"""
        res = eng.run(ss.Program(2), state=displaced_squeezed)
        assert res.state == displaced_squeezed

    def test_initial_state_mismatch(self, eng):
        """An initial state of the wrong size raises a ValueError"""
        with pytest.raises(ValueError, match="modes"):
            eng.run(ss.Program(2), state=GaussianState.vacuum(3))

    def test_rejected_state_does_not_lock(self, eng):
        """A program whose initial state is rejected can still be appended to and run"""
        prog = ss.Program(2)
        with pytest.raises(ValueError, match="Initial state has 1 modes"):
            eng.run(prog, state=GaussianState.vacuum(1))

        assert not prog.locked
        prog.append(ops.Sgate(0.1), [0])
        assert len(eng.run(prog).state.means()) == 4

    def test_failed_run_resets_backend(self, eng, displaced_squeezed):
        """A run aborted mid-circuit leaves the backend in the initial state of the run"""
        prog = ss.Program(2)
        with prog.context as q:
            ops.Dgate(1.0, 0.0) | q[0]
            ops.Fock(1) | q[0]

        with pytest.raises(NotApplicableError):
            eng.run(prog, state=displaced_squeezed)

        assert eng.backend.state() == displaced_squeezed
        assert eng.run_progs == []

    def test_no_measurement_events(self, eng, tol):
        """Gates and channels do not produce measurement events"""
        prog = ss.Program(2)
        with prog.context as q:
            ops.Dgate(2.0, -4.0) | q[0]
            ops.LossChannel(0.25) | q[0]
            ops.ThermalLossChannel(0.5, 0.2) | q[1]
            ops.AdditiveNoise(0.1) | q[1]
            ops.Rgate(0.3) | q[1]

        res = eng.run(prog)
        assert res.measurements == ()
        assert np.allclose(res.state.means()[:2], [1.0, -2.0], atol=tol, rtol=0)

    def test_measurement_events(self, eng):
        """k measurements produce k events in order, tagged with their positions"""
        prog = ss.Program(3)
        with prog.context as q:
            ops.Sgate(0.4) | q[0]
            ops.MeasureHomodyne(0.0) | q[0]
            ops.BSgate(0.2) | (q[1], q[2])
            ops.MeasureHeterodyne() | q[2]
            ops.MeasureHomodyne(np.pi / 2) | q[1]

        res = eng.run(prog, rng=1)
        events = res.measurements
        assert [e.index for e in events] == [1, 3, 4]
        assert [e.mode for e in events] == [0, 2, 1]
        assert [e.kind for e in events] == ["homodyne", "heterodyne", "homodyne"]
        assert events[0].phi == 0.0
        assert events[1].phi is None
        assert events[2].phi == np.pi / 2
        assert [len(e.values) for e in events] == [1, 2, 1]
        assert all(isinstance(v, float) for e in events for v in e.values)

    def test_seed_reproducible(self, eng):
        """A fixed seed reproduces the measurement record exactly"""

        def make():
            prog = ss.Program(2)
            with prog.context as q:
                ops.Sgate(0.5) | q[0]
                ops.BSgate() | (q[0], q[1])
                ops.MeasureHeterodyne() | q[0]
                ops.MeasureHomodyne(0.2) | q[1]
            return prog

        res1 = eng.run(make(), rng=1234)
        res2 = ss.LocalEngine().run(make(), rng=np.random.default_rng(1234))
        assert res1.measurements == res2.measurements
        assert res1.state == res2.state

    def test_configured_seed(self, monkeypatch):
        """The configured seed is used when no rng is given"""
        with monkeypatch.context() as m:
            m.setenv("SCHROSIM_SIMULATION_SEED", "99")
            eng = ss.LocalEngine()

        prog1 = ss.Program(1)
        prog2 = ss.Program(1)
        for p in (prog1, prog2):
            with p.context as q:
                ops.MeasureHomodyne(0.0) | q[0]

        assert eng.config["seed"] == 99
        assert eng.run(prog1).samples == eng.run(prog2).samples

    def test_post_selection(self, eng):
        """Post-selected measurements record the selected value and condition on it"""
        prog = ss.Program(1)
        with prog.context as q:
            ops.MeasureHomodyne(0.0, select=0.4) | q[0]

        res = eng.run(prog)
        assert res.measurements[0].values == (0.4,)
        assert res.state == condition_homodyne(GaussianState.vacuum(1), 0, 0.0, 0.4)

    def test_gkp_noise(self, eng, tol):
        """A GKP injection inflates both variances of the mode by delta**2"""
        prog = ss.Program(2)
        with prog.context as q:
            ops.GKP(0.5) | q[1]

        cov = eng.run(prog).state.cov()
        assert np.allclose(np.diag(cov), [0.5, 0.5, 0.75, 0.75], atol=tol, rtol=0)

    @pytest.mark.parametrize(
        "op", [ops.Fock(1), ops.Catstate(0.3)], ids=["Fock", "Catstate"]
    )
    def test_non_gaussian_rejected(self, eng, op):
        """Fock and cat state injections raise NotApplicableError naming the operation"""
        prog = ss.Program(1)
        with prog.context as q:
            ops.Sgate(0.1) | q[0]
            op | q[0]

        with pytest.raises(NotApplicableError, match=r"The operation {}\(".format(
            type(op).__name__
        )):
            eng.run(prog)
        assert eng.run_progs == []

    def test_placeholder_rejected(self, eng):
        """A noise placeholder is always rejected"""
        prog = ss.Program(1)
        with prog.context:
            ops.NoisePlaceholder("crosstalk") | ()

        with pytest.raises(NotApplicableError, match="NoisePlaceholder"):
            eng.run(prog)

    def test_logging(self, eng, prog, caplog):
        """Each command is logged at debug level and each run at info level"""
        with caplog.at_level(logging.DEBUG, logger="schrosim.engine"):
            eng.run(prog)

        assert "Applied Sgate(0.3) | (q[0])" in caplog.text
        assert "finished with 0 measurement events" in caplog.text


class TestHistory:
    """Tests for the record of programs run"""

    def test_history(self, eng, prog):
        """Engine history."""
        # no programs have been run
        assert not eng.run_progs
        eng.run(prog)
        # one program has been run
        assert len(eng.run_progs) == 1
        assert eng.run_progs[-1] == prog

    def test_reset(self, eng, prog):
        """Running independent programs with an engine reset in between."""
        eng.run(prog)
        eng.reset()
        assert not eng.run_progs
        assert eng.backend.state() == GaussianState.vacuum(2)

    def test_print_applied(self, eng):
        """Tests the printing of executed programs."""
        a = 0.23
        r = 0.1

        def inspect():
            res = []
            print_fn = lambda x: res.append(x.__str__())
            eng.print_applied(print_fn)
            return res

        p1 = ss.Program(2)
        with p1.context as q:
            ops.Sgate(r) | q[1]
            ops.BSgate(a) | (q[1], q[0])

        eng.run(p1)
        expected1 = ["Run 0:", "Sgate(0.1) | (q[1])", "BSgate(0.23) | (q[1], q[0])"]
        assert inspect() == expected1

        p2 = ss.Program(2)
        with p2.context as q:
            ops.Dgate(1.0) | q[0]

        eng.run(p2)
        expected2 = expected1 + ["Run 1:", "Dgate(1, 0) | (q[0])"]
        assert inspect() == expected2


class TestResult:
    """Tests for the Result class"""

    def test_samples_dict(self):
        """Measurement values are grouped by mode"""
        events = [
            MeasurementEvent(0, 1, "homodyne", 0.0, (0.5,)),
            MeasurementEvent(1, 0, "heterodyne", None, (0.1, 0.2)),
            MeasurementEvent(2, 1, "homodyne", 0.0, (-0.5,)),
        ]
        res = Result(GaussianState.vacuum(2), events)
        assert res.samples == [(0.5,), (0.1, 0.2), (-0.5,)]
        assert res.samples_dict == {1: [(0.5,), (-0.5,)], 0: [(0.1, 0.2)]}

    def test_state_set_once(self):
        """The state of a Result cannot be replaced"""
        res = Result(GaussianState.vacuum(1))
        with pytest.raises(TypeError, match="already set"):
            res.state = GaussianState.vacuum(1)

    def test_state_type(self):
        """The state of a Result must be a GaussianState"""
        with pytest.raises(TypeError, match="GaussianState"):
            Result(np.zeros(2))

    def test_repr(self):
        """String representation of a Result"""
        res = Result(GaussianState.vacuum(2), [MeasurementEvent(0, 1, "homodyne", 0.0, (0.5,))])
        assert repr(res) == "<Result: num_modes=2, num_measurements=1, contains state=True>"
