"""
Loading of the stock logging configurations shipped in ``configurations/``.

The YAML files are plain :py:func:`logging.config.dictConfig` dictionaries, extended by a few local
tags so that levels can be tuned through the environment without editing the files:

* ``!LOG_LEVEL``: level of the ``seqrepo_lite`` loggers, from ``LOG_LEVEL``.
* ``!SQL_LOG_LEVEL``: level of ``sqlalchemy.engine``, which echoes every statement at ``INFO``,
  from ``SQL_LOG_LEVEL``.
* ``!coalesce``: the first value of a sequence which is not null.
"""

import os
from importlib import resources

import yaml

CONFIGURATIONS_DIR = "configurations"


def load_stock_config(name="default"):
    """
    Loads the configuration ``configurations/<name>.yaml`` shipped with this package.

    Raises :py:class:`ValueError` for a *name* that is not a bare file name, and
    :py:class:`FileNotFoundError` if no configuration of that name exists.
    """
    if not name or os.path.basename(name) != name:
        raise ValueError(f"Invalid logging configuration name {name!r}")

    resource = resources.files(__package__).joinpath(CONFIGURATIONS_DIR).joinpath(f"{name}.yaml")
    with resource.open("r") as file:
        return load_config(file)


def load_config(config):
    """
    Loads a logging *config* written in YAML, either a string or an open file.

    >>> os.environ["SQL_LOG_LEVEL"] = "info"
    >>> load_config("level: !SQL_LOG_LEVEL")
    {'level': 'INFO'}

    >>> del os.environ["SQL_LOG_LEVEL"]
    >>> load_config('''
    ... level: !coalesce
    ...   - !SQL_LOG_LEVEL
    ...   - WARNING
    ... ''')
    {'level': 'WARNING'}
    """
    return yaml.load(config, Loader=LogConfigLoader)


class LogConfigLoader(yaml.SafeLoader):
    """A :py:class:`yaml.SafeLoader` subclass implementing the local tags listed above."""

    pass


def environment_level_constructor(variable):
    """
    Builds a constructor producing the uppercased value of the environment *variable*, or ``None``
    if it is unset or empty. Reading happens when the YAML is loaded, not when the tag is registered.
    """

    def constructor(loader, node):
        level = os.environ.get(variable)
        return level.upper() if level else None

    return constructor


def coalesce_constructor(loader, node):
    values = loader.construct_sequence(node)
    return next((value for value in values if value is not None), None)


LogConfigLoader.add_constructor("!LOG_LEVEL", environment_level_constructor("LOG_LEVEL"))
LogConfigLoader.add_constructor("!SQL_LOG_LEVEL", environment_level_constructor("SQL_LOG_LEVEL"))
LogConfigLoader.add_constructor("!coalesce", coalesce_constructor)
