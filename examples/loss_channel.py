#!/usr/bin/env python3
import numpy as np

import schrosim as ss
from schrosim.ops import Dgate, LossChannel, MeasureX, Sgate

prog = ss.Program(1)

eta = 0.6

with prog.context as q:
    # displaced squeezed state
    Sgate(0.5) | q[0]
    Dgate(1.0, 0.5) | q[0]

    # attenuate the mode
    LossChannel(eta) | q[0]

eng = ss.Engine("gaussian")
state = eng.run(prog, rng=42).state

# the means shrink by sqrt(eta), and the covariance gains (1 - eta)/2 of vacuum noise
print(state.means())
print(state.cov())
print(np.sqrt(eta) * np.array([1.0, 0.5]))

# homodyne detection of the attenuated mode
prog_measure = ss.Program(1)

with prog_measure.context as q:
    Sgate(0.5) | q[0]
    Dgate(1.0, 0.5) | q[0]
    LossChannel(eta) | q[0]
    MeasureX | q[0]

result = eng.run(prog_measure, rng=42)
print(result.samples)
