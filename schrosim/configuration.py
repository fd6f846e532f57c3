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
r"""
This module contains functions used to load, store, save, and modify
configuration options for SchroSIM.

Configuration options are read from a TOML file, from environment variables
of the form ``SCHROSIM_<SECTION>_<OPTION>``, and from keyword arguments, in
increasing order of precedence.

.. code-block:: toml

    [simulation]
    seed = 1234
    singular_tol = 1e-14
    symplectic_tol = 1e-8

    [logging]
    level = "debug"
"""
import collections.abc
import os

import toml
from appdirs import user_config_dir


DEFAULT_CONFIG_SPEC = {
    "simulation": {
        "seed": ((int, type(None)), None),
        "singular_tol": (float, 1e-14),
        "symplectic_tol": (float, 1e-8),
    },
    "logging": {"level": (str, "info"), "logfile": ((str, type(None)), None)},
}
"""dict: Nested dictionary representing the allowed configuration
sections, options, default values, and allowed types for SchroSIM
configurations. For each configuration option key, the
corresponding value is a length-2 tuple, containing:

* A type or tuple of types, representing the allowed type
  for that configuration option.

* The default value for that configuration option.

.. note::

    By TOML convention, keys with a default value of ``None``
    will **not** be present in the generated/loaded configuration
    file. This is because TOML has no concept of ``NoneType`` or ``Null``,
    instead, the non-presence of a key indicates that the configuration
    value is not set.
"""


class ConfigurationError(Exception):
    """Exception used for configuration errors"""


def _deep_update(source, overrides):
    """Recursively update a nested dictionary.

    This function is a generalization of Python's built in
    ``dict.update`` method, modified to recursively update
    keys with nested dictionaries.
    """
    for key, value in overrides.items():
        if isinstance(value, collections.abc.Mapping) and value:
            # Override value is a non-empty dictionary.
            # Update the source key with the override dictionary.
            returned = _deep_update(source.get(key, {}), value)
            source[key] = returned
        elif value != {}:
            # Override value is not an empty dictionary.
            source[key] = overrides[key]
    return source


def _generate_config(config_spec, **kwargs):
    """Generates a configuration, given a SchroSIM configuration
    specification.

    See :attr:`~.DEFAULT_CONFIG_SPEC` for an example of a valid configuration
    specification.

    Optional keyword arguments may be provided to override default values
    in the configuration specification. If the provided override values
    do not match the expected type defined in the configuration spec,
    a ``ConfigurationError`` is raised. Integers are accepted for
    floating point options.

    **Example**

    >>> _generate_config(DEFAULT_CONFIG_SPEC, simulation={"seed": 42})
    {
        "simulation": {
            "seed": 42,
            "singular_tol": 1e-14,
            "symplectic_tol": 1e-08,
        },
        "logging": {"level": "info"},
    }

    Args:
        config_spec (dict): nested dictionary representing the
            configuration specification

    Keyword Args:
        Provided keyword arguments may overwrite default values of
        matching keys.

    Returns:
        dict: the default configuration defined by the input config spec

    Raises:
        ConfigurationError: if provided keyword argument overrides do not
        match the expected type defined in the configuration spec.
    """
    res = {}
    for k, v in config_spec.items():
        if isinstance(v, tuple):
            # config spec value v represents the allowed type and default value

            if k in kwargs:
                value = kwargs[k]
                if v[0] is float and isinstance(value, int) and not isinstance(value, bool):
                    value = float(value)

                # Key also exists as a keyword argument.
                # Perform type validation.
                if isinstance(value, bool) and v[0] is not bool or not isinstance(value, v[0]):
                    raise ConfigurationError(
                        "Expected type {} for option {}, received {}".format(
                            v[0], k, type(value)
                        )
                    )

                if value is not None:
                    # Only add the key to the configuration object
                    # if the provided override is not None.
                    res[k] = value
            else:
                if v[1] is not None:
                    # Only add the key to the configuration object
                    # if the default value is not None.
                    res[k] = v[1]

        elif isinstance(v, dict):
            # config spec value is a dictionary of more options
            res[k] = _generate_config(v, **kwargs.get(k, {}))
    return res


def load_config(filename="config.toml", log=True, **kwargs):
    """Load configuration from keyword arguments, configuration file or
    environment variables.

    .. note::

        The configuration dictionary will be created based on the following
        (order defines the importance, going from most important to least
        important):

        1. keyword arguments passed to ``load_config``
        2. data contained in environmental variables (if any)
        3. data contained in a configuration file (if exists)

    Args:
        filename (str): the name of the configuration file to look for
        log (bool): whether or not to log details

    Keyword Args:
        Additional configuration options, one dictionary per section,
        e.g. ``simulation={"seed": 42}``

    Returns:
        dict[str, dict[str, Union[str, float, int]]]: the configuration
    """
    filepath = find_config_file(filename=filename)

    if log:
        # pylint: disable=import-outside-toplevel
        from schrosim.logger import create_logger

        logger = create_logger(__name__)

    if filepath is not None:
        # load the configuration file
        with open(filepath, "r") as f:
            config = toml.load(f)

        if log:
            logger.debug("Configuration file %s loaded", filepath)

    else:
        config = {}

        if log:
            logger.debug("No SchroSIM configuration file found.")

    # update the configuration from environment variables
    update_from_environment_variables(config)

    # update the configuration from keyword arguments
    for config_section, section_options in kwargs.items():
        _deep_update(config, {config_section: section_options})

    # generate the configuration object by using the defined
    # configuration specification at the top of the file
    config = _generate_config(DEFAULT_CONFIG_SPEC, **config)

    if log:
        logger.debug("Loaded configuration: %s", config)

    return config


def store_config(filename="config.toml", location="user_config", **kwargs):
    r"""Save SchroSIM configuration options to a TOML file.

    The configuration file can be created in the following locations:

    - A global user configuration directory (``"user_config"``)
    - The current working directory (``"local"``)

    Options already present in an existing file are kept unless overridden.

    **Example:**

    >>> store_config(location="local", simulation={"seed": 42})

    This creates the following ``"config.toml"`` file in the **current working directory**:

    .. code-block:: toml

        [simulation]
        seed = 42
        singular_tol = 1e-14
        symplectic_tol = 1e-8

        [logging]
        level = "info"

    Keyword Args:
        location (str): determines where the configuration file should be saved
        filename (str): the name of the configuration file

    Additional configuration options are passed as one dictionary per section.

    Returns:
        str: path of the written file

    Raises:
        ConfigurationError: if the location is not recognized or an option has the wrong type
    """
    if location == "user_config":
        directory = user_config_dir("schrosim")

        # Create target Directory if it doesn't exist
        os.makedirs(directory, exist_ok=True)
    elif location == "local":
        directory = os.getcwd()
    else:
        raise ConfigurationError("This location is not recognized.")

    filepath = os.path.join(directory, filename)

    config = {}

    # load the existing config if it already exists
    if os.path.isfile(filepath):
        with open(filepath, "r") as f:
            config = toml.load(f)

    for config_section, section_options in kwargs.items():
        _deep_update(config, {config_section: section_options})

    config = _generate_config(DEFAULT_CONFIG_SPEC, **config)

    with open(filepath, "w") as f:
        toml.dump(config, f)

    return filepath


def delete_config(filename="config.toml", directory=None):
    """Delete a configuration file.

    If called with no arguments, the currently active configuration file is deleted.

    Keyword Args:
        filename (str): the filename of the configuration file to delete
        directory (str): the directory of the configuration file to delete
            If ``None``, the currently active configuration file is deleted.
    """
    if directory is None:
        file_path = find_config_file(filename)
    else:
        file_path = os.path.join(directory, filename)

    os.remove(file_path)


def reset_config(filename="config.toml"):
    """Delete all active configuration files

    .. warning::
        This will delete all configuration files with the specified filename
        (default ``config.toml``) found in the configuration directories.

    Keyword Args:
        filename (str): the filename of the configuration files to reset
    """
    for config in get_available_config_paths(filename):
        delete_config(os.path.basename(config), os.path.dirname(config))


def find_config_file(filename="config.toml"):
    """Get the filepath of the first configuration file found from the defined
    configuration directories (if any).

    .. note::

        The following directories are checked (in the following order):

        * The current working directory
        * The directory specified by the environment variable ``SCHROSIM_CONF`` (if specified)
        * The user configuration directory (if specified)

    Keyword Args:
        filename (str): the configuration file to look for

    Returns:
         Union[str, None]: the filepath to the configuration file or None, if
             no file was found
    """
    directories = get_available_config_paths(filename=filename)

    if directories:
        return directories[0]

    return None


def directories_to_check():
    """Returns the list of directories that should be checked for a configuration file.

    .. note::

        The following directories are checked (in the following order):

        * The current working directory
        * The directory specified by the environment variable ``SCHROSIM_CONF`` (if specified)
        * The user configuration directory (if specified)

    Returns:
        list: the list of directories to check
    """
    directories = []

    current_dir = os.getcwd()
    env_config_dir = os.environ.get("SCHROSIM_CONF", "")
    schrosim_user_config_dir = user_config_dir("schrosim")

    directories.append(current_dir)

    if env_config_dir:
        directories.append(env_config_dir)

    directories.append(schrosim_user_config_dir)

    return directories


def update_from_environment_variables(config):
    """Updates the current configuration object from data stored in environment
    variables.

    Every option of :attr:`DEFAULT_CONFIG_SPEC` can be set through the variable
    ``SCHROSIM_<SECTION>_<OPTION>``, e.g. ``SCHROSIM_SIMULATION_SEED``.

    Args:
        config (dict[str, dict[str, Union[str, float, int]]]): the
            configuration to be updated, modified in place
    """
    for section, section_spec in DEFAULT_CONFIG_SPEC.items():
        env_prefix = "SCHROSIM_{}_".format(section.upper())
        for key in section_spec:
            env = env_prefix + key.upper()
            if env in os.environ:
                config.setdefault(section, {})[key] = _parse_environment_variable(
                    section, key, os.environ[env]
                )


def _parse_environment_variable(section, key, value):
    """Parse a value stored in an environment variable.

    Args:
        section (str): configuration section name
        key (str): the name of the environment variable
        value (str): the value obtained from the environment variable

    Returns:
        [str, bool, int, float]: the parsed value

    Raises:
        ConfigurationError: if the value cannot be converted to the option type
    """
    trues = (True, "true", "True", "TRUE", "1", 1)
    falses = (False, "false", "False", "FALSE", "0", 0)

    allowed = DEFAULT_CONFIG_SPEC[section][key][0]
    if not isinstance(allowed, tuple):
        allowed = (allowed,)

    try:
        if bool in allowed:
            if value in trues:
                return True

            if value in falses:
                return False

            raise ConfigurationError("Boolean could not be parsed")

        if int in allowed:
            return int(value)

        if float in allowed:
            return float(value)
    except ValueError as e:
        raise ConfigurationError(
            "Could not parse {!r} for option {} of section {}.".format(value, key, section)
        ) from e

    return value


def active_configs(filename="config.toml"):
    """Prints the filepaths for existing configuration files to the standard
    output and marks the one that is active.

    This function relies on the precedence ordering of directories to check
    when marking the active configuration.

    Args:
        filename (str): the name of the configuration files to look for
    """
    active_configs_list = get_available_config_paths(filename)

    # print the active configurations found based on the filename specified
    if active_configs_list:
        active = True

        print(
            "\nThe following SchroSIM configuration files were found "
            'with the name "{}":\n'.format(filename)
        )

        for config in active_configs_list:
            if active:
                config += " (active)"
                active = False

            print("* " + config)
    else:
        print(
            "\nNo SchroSIM configuration files were found with the "
            'name "{}".\n'.format(filename)
        )

    # print the directores that are being checked for a configuration file
    directories = directories_to_check()

    print("\nThe following directories were checked:\n")
    for directory in directories:
        print("* " + directory)


def get_available_config_paths(filename="config.toml"):
    """Get the paths for the configuration files available to SchroSIM.

    Args:
        filename (str): the name of the configuration files to look for

    Returns:
        list[str]: the filepaths for the active configurations
    """
    active_configs_list = []

    directories = directories_to_check()

    for directory in directories:
        filepath = os.path.join(directory, filename)
        if os.path.exists(filepath):
            active_configs_list.append(filepath)

    return active_configs_list


DEFAULT_CONFIG = _generate_config(DEFAULT_CONFIG_SPEC)
SESSION_CONFIG = load_config(log=False)
