# Copyright 2010 Pallets

# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:

# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
# 3. Neither the name of the copyright holder nor the names of its contributors
#    may be used to endorse or promote products derived from this software
#    without specific prior written permission.

# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

# Copyright 2020 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
r"""Unit tests for the logging mechanism used in SchroSIM.

The implementation of these unit tests is based on the solution used for testing logging in
the Flask web application framework:
https://github.com/pallets/flask/blob/master/tests/test_logging.py
"""

import logging

import pytest

import schrosim as ss
import schrosim.configuration as configuration
import schrosim.engine as engine

from schrosim.logger import _level_from_name, create_logger, default_handler, logging_handler_defined

pytestmark = pytest.mark.frontend

modules_contain_logging = [engine, configuration]


def schrosim_loggers():
    """All loggers of the ``schrosim`` package created so far."""
    names = [name for name in logging.root.manager.loggerDict if name.split(".")[0] == "schrosim"]
    return [logging.getLogger(name) for name in names]


@pytest.fixture(autouse=True)
def reset_logging(pytestconfig):
    """Reset the logging specific configurations such as handlers or levels as
    well as manage pytest's LoggingPlugin."""
    root_handlers = logging.root.handlers[:]
    logging.root.handlers = []
    root_level = logging.root.level
    logging.root.setLevel(logging.WARNING)

    logging_plugin = pytestconfig.pluginmanager.unregister(name="logging-plugin")

    yield

    logging.root.handlers[:] = root_handlers
    logging.root.setLevel(root_level)

    if logging_plugin:
        pytestconfig.pluginmanager.register(logging_plugin, "logging-plugin")


def _clear(logger):
    for handler in logger.handlers:
        if handler is not default_handler:
            handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def reset_logging_module():
    """Reset the logging specific configurations such as handlers or levels for
    the SchroSIM loggers, which other tests may already have configured."""
    for logger in schrosim_loggers():
        _clear(logger)

    yield

    for logger in schrosim_loggers():
        _clear(logger)


@pytest.mark.parametrize("module", modules_contain_logging)
class TestLogger:
    """Tests for the functions that are used to create a logger"""

    def test_logging_handler_defined(self, module):
        """Tests that the logging_handler_defined function works correctly in
        the following cases:

        1. When a custom logger was just created and by default has no level
           handler
        2. Adding a handler to the root logger affects the custom logger
        3. When propagation is set to False, only the handlers of the custom
        logger are checked"""
        logger = logging.getLogger(module.__name__)
        assert not logging_handler_defined(logger)

        handler = logging.StreamHandler()
        logging.root.addHandler(handler)
        assert logging_handler_defined(logger)

        logger.propagate = False
        assert not logging_handler_defined(logger)

    def test_create_logger(self, module):
        """Tests that the create_logger function returns a logger with the
        default configuration set for a SchroSIM logger"""
        logger = create_logger(module.__name__)
        assert logger.level == logging.INFO
        assert logging_handler_defined(logger)
        assert logger.handlers[0] == default_handler

    def test_create_logger_level_name(self, module):
        """Tests that the level can be given by name, as in the configuration file"""
        logger = create_logger(module.__name__, level="debug")
        assert logger.level == logging.DEBUG

    def test_create_logger_logfile(self, module, tmpdir):
        """Tests that records are written to the log file if one is given"""
        logfile = tmpdir.join("schrosim.log")
        logger = create_logger(module.__name__, logfile=str(logfile))

        assert isinstance(logger.handlers[0], logging.FileHandler)
        logger.info("A log entry.")
        logger.handlers[0].flush()
        assert "INFO - A log entry." in logfile.read()


class TestLevelFromName:
    """Tests for the conversion of level names"""

    @pytest.mark.parametrize(
        "name, level",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), ("Warning", logging.WARNING), (40, 40)],
    )
    def test_known_levels(self, name, level):
        """Tests that level names are case insensitive and integers pass through"""
        assert _level_from_name(name) == level

    def test_unknown_level(self):
        """Tests that an unknown level name raises a ValueError"""
        with pytest.raises(ValueError, match="Unknown logging level"):
            _level_from_name("chatty")


class TestLoggerIntegration:
    """Tests that the SchroSIM logger integrates well with user defined logging
    configurations."""

    def test_custom_configuration_without_schrosim_logger(self, tmpdir):
        """Tests that if there was no SchroSIM logger created, custom logging
        configurations work as expected and no configuration details were set
        incorrectly."""

        level = logging.DEBUG

        test_file = tmpdir.join("test_file")
        logging.basicConfig(filename=test_file, level=level)
        logging.debug("A log entry.")

        assert "A log entry." in test_file.read()

    @pytest.mark.parametrize("module", modules_contain_logging)
    def test_default_schrosim_logger(self, module):
        """Tests that the stream handler is set for the SchroSIM logger by default
        if there were not other configurations made."""
        logger = create_logger(module.__name__)
        assert len(logger.handlers) == 1
        assert logger.handlers[0] is default_handler
        assert isinstance(default_handler, logging.StreamHandler)
        assert not isinstance(default_handler, logging.FileHandler)

    @pytest.mark.parametrize("module", modules_contain_logging)
    def test_custom_logger_before_schrosim_logger_with_higher_level(self, module):
        """Tests that a custom logger created before a SchroSIM logger will define
        the level for logging as expected and the SchroSIM logger does not overwrite
        the user configuration.

        The logic of the test goes as follows:
        1. Manually setting the level for logging for DEBUG level
        2. Creating a SchroSIM logger with level WARNING, that is higher than DEBUG
        3. Checking that the SchroSIM logger did not affect the handlers defined or
           the effective level of the logger
        """
        custom_level = logging.DEBUG
        schrosim_level = logging.WARNING

        logger = logging.getLogger(module.__name__)
        logging.basicConfig(level=custom_level)

        create_logger(module.__name__, level=schrosim_level)

        assert logging_handler_defined(logger)
        assert logger.getEffectiveLevel() == custom_level
        assert not logger.handlers

    def test_engine_logs_runs(self, tmpdir):
        """Tests that the engine writes a record for each run to its logger"""
        test_file = tmpdir.join("test_file")
        logging.basicConfig(filename=test_file, level=logging.DEBUG)

        prog = ss.Program(1)
        with prog.context as q:
            ss.ops.Sgate(0.1) | q[0]
        ss.LocalEngine().run(prog)

        contents = test_file.read()
        assert "Applied Sgate(0.1) | (q[0])" in contents
        assert "finished with 0 measurement events" in contents
