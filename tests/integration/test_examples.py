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
r"""Integration tests that run the example scripts"""
import os
import runpy

import pytest

import numpy as np

pytestmark = pytest.mark.integration

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "examples")


def test_loss_channel_example(capsys, tol):
    """The loss channel example shrinks the means by sqrt(eta) and adds vacuum noise"""
    namespace = runpy.run_path(os.path.join(EXAMPLES_DIR, "loss_channel.py"), run_name="__main__")
    out, _ = capsys.readouterr()
    assert out

    eta = namespace["eta"]
    state = namespace["state"]
    assert np.allclose(state.means(), np.sqrt(eta) * np.array([1.0, 0.5]), atol=tol, rtol=0)
    assert state.is_valid()

    result = namespace["result"]
    assert len(result.measurements) == 1
    assert result.measurements[0].kind == "homodyne"
    assert len(namespace["eng"].run_progs) == 2
