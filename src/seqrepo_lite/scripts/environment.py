"""
Environment setup for scripts.
"""

import logging
from functools import wraps

import click

from seqrepo_lite import deps
from seqrepo_lite.lib.exceptions import SeqRepoError
from seqrepo_lite.lib.repository import SeqRepo

logger = logging.getLogger(__name__)


def with_seqrepo(command=None):
    """
    Decorator to provide an open :py:class:`SeqRepo` and error handling for a *command*.

    The *command* callable must be a :py:class:`click.Command` instance.

    The decorated *command* is called with an ``sr`` keyword argument holding the repository
    selected by two new options, ``--root-directory`` (``SEQREPO_ROOT_DIR``) and ``--instance-name``
    (``SEQREPO_INSTANCE``). The repository is closed once the command returns. Repository errors
    are logged and turned into a :py:class:`click.ClickException` so the process exits non-zero with
    a readable message rather than a traceback.

    >>> @click.command
    ... @with_seqrepo
    ... def cmd(sr: SeqRepo):
    ...     pass
    """

    def decorator(command):
        @click.option(
            "--root-directory",
            "-r",
            help="Root directory of the SeqRepo",
            default=lambda: deps.SEQREPO_ROOT_DIR,
            show_default="SEQREPO_ROOT_DIR or ~/seqrepo-data",
            type=click.Path(file_okay=False),
        )
        @click.option(
            "--instance-name",
            "-i",
            help="Name of the SeqRepo instance",
            default=lambda: deps.SEQREPO_INSTANCE,
            show_default="SEQREPO_INSTANCE or latest",
        )
        @wraps(command)
        def decorated(*args, root_directory, instance_name, **kwargs):
            try:
                sr = SeqRepo(root_directory, instance_name)
            except SeqRepoError as error:
                logger.error(f"Could not open SeqRepo at {root_directory}/{instance_name}: {error}")
                raise click.ClickException(str(error)) from None

            kwargs["sr"] = sr
            try:
                command(*args, **kwargs)

            except SeqRepoError as error:
                logger.error(f"Aborting with error: {error}")
                raise click.ClickException(str(error)) from None

            finally:
                sr.close()

        return decorated

    return decorator(command) if command else decorator
