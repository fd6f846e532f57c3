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
The SchroSIM codebase is separated into frontend components (programs,
operations and the engine) and backend components, all found within the
:mod:`schrosim.backends` submodule.
"""
from . import ops
from ._version import __version__
from .backends import GaussianState
from .configuration import store_config, active_configs, reset_config, delete_config
from .engine import Engine, LocalEngine
from .program import Program
from .result import MeasurementEvent, Result

__all__ = [
    "Engine",
    "LocalEngine",
    "Program",
    "Result",
    "MeasurementEvent",
    "GaussianState",
    "store_config",
    "active_configs",
    "reset_config",
    "delete_config",
    "version",
    "about",
]


def version():
    r"""
    Version number of SchroSIM.

    Returns:
      str: package version number
    """
    return __version__


def about():
    """SchroSIM information.

    Prints the installed version numbers for SchroSIM and its dependencies,
    and some system info. Please include this information in bug reports.

    **Example:**

    .. code-block:: pycon

        >>> ss.about()
        SchroSIM: a Python library for Gaussian continuous-variable quantum circuits.

        Python version:            3.11.4
        Platform info:             Linux-6.2.0-x86_64-with-glibc2.35
        Installation path:         /home/schrosim/
        SchroSIM version:          0.1.0
        Numpy version:             1.26.4
        Scipy version:             1.11.4
        The Walrus version:        0.21.0
        Toml version:              0.10.2
        Appdirs version:           1.4.4
    """
    # pylint: disable=import-outside-toplevel
    import sys
    import platform
    import os
    import numpy
    import scipy
    import thewalrus
    import toml
    import appdirs

    print("\nSchroSIM: a Python library for Gaussian continuous-variable quantum circuits.\n")

    print("Python version:            {}.{}.{}".format(*sys.version_info[0:3]))
    print("Platform info:             {}".format(platform.platform()))
    print("Installation path:         {}".format(os.path.dirname(__file__)))
    print("SchroSIM version:          {}".format(__version__))
    print("Numpy version:             {}".format(numpy.__version__))
    print("Scipy version:             {}".format(scipy.__version__))
    print("The Walrus version:        {}".format(thewalrus.__version__))
    print("Toml version:              {}".format(toml.__version__))
    print("Appdirs version:           {}".format(appdirs.__version__))
