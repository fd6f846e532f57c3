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
This module contains the numeric parameter checks shared by the circuit
representation and the Gaussian channels.

Operation parameters are plain Python or NumPy numbers. They are checked
when an :class:`.Operation` is appended to a :class:`.Program`, and the
channel functions of the Gaussian backend repeat the physical checks so
that they are safe to call directly.

A failed check raises :class:`ParameterError`, carrying the offending value.
"""
import numbers

import numpy as np


__all__ = [
    "ParameterError",
    "par_str",
    "check_real",
    "check_complex",
    "check_transmissivity",
    "check_nbar",
    "check_variance",
    "check_photon_number",
]


class ParameterError(RuntimeError):
    """Exception raised when an Operation or a channel receives an illegal parameter value.

    E.g., a loss channel with a transmissivity outside of :math:`[0, 1]`.
    """


def par_str(p):
    """String representation of the Operation parameter.

    Args:
        p (Any): Operation parameter

    Returns:
        str: string representation
    """
    if isinstance(p, np.ndarray):
        np.set_printoptions(precision=4)
        return str(p)
    if isinstance(p, numbers.Number):
        return "{:.4g}".format(p)
    return repr(p)


def check_real(name, value):
    """Require a finite real number.

    Args:
        name (str): parameter name used in the error message
        value (Any): parameter value

    Returns:
        float: the value as a float

    Raises:
        ParameterError: if the value is not a finite real number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ParameterError("{} must be a real number, got {!r}.".format(name, value))
    if not np.isfinite(value):
        raise ParameterError("{} must be finite, got {}.".format(name, value))
    return float(value)


def check_complex(name, value):
    """Require a finite real or complex number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Complex):
        raise ParameterError("{} must be a number, got {!r}.".format(name, value))
    if not np.isfinite(value):
        raise ParameterError("{} must be finite, got {}.".format(name, value))
    return complex(value)


def check_transmissivity(T):
    r"""Require a loss parameter :math:`0\leq T\leq 1`.

    Raises:
        ParameterError: if ``T`` is not finite or lies outside of :math:`[0, 1]`
    """
    T = check_real("Loss parameter", T)
    if not 0.0 <= T <= 1.0:
        raise ParameterError("Loss parameter must be between 0 and 1, got {}.".format(T))
    return T


def check_nbar(nbar):
    """Require a finite, non-negative thermal population.

    Raises:
        ParameterError: if ``nbar`` is negative or not finite
    """
    nbar = check_real("Thermal population", nbar)
    if nbar < 0:
        raise ParameterError("Thermal population must be non-negative, got {}.".format(nbar))
    return nbar


def check_variance(name, value):
    """Require a finite, non-negative noise variance.

    Raises:
        ParameterError: if the variance is negative or not finite
    """
    value = check_real(name, value)
    if value < 0:
        raise ParameterError("{} must be non-negative, got {}.".format(name, value))
    return value


def check_photon_number(n):
    """Require a non-negative integer photon number.

    Raises:
        ParameterError: if ``n`` is not a non-negative integer
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise ParameterError("Photon number must be a non-negative integer, got {!r}.".format(n))
    return int(n)
