import logging
import logging.config
import os
import sys

from .config import load_stock_config

LOG_CONFIG = os.environ.get("LOG_CONFIG")

logger = logging.getLogger(__name__)


def configure(name=None):
    """
    Configures logging for the seqrepo-lite command line tools and returns the configuration applied.

    The stock configuration *name*, else ``LOG_CONFIG``, else ``default`` is loaded from
    ``seqrepo_lite/logging/configurations``. Library warnings are then captured at ``WARNING`` and
    uncaught exceptions are logged at ``CRITICAL`` before the process exits.

    Code using seqrepo-lite as a library should configure logging itself rather than call this.
    """
    config_name = name or LOG_CONFIG or "default"
    stock_config = load_stock_config(config_name)
    logging.config.dictConfig(stock_config)

    logging.captureWarnings(True)
    sys.excepthook = lambda *args: logging.getLogger().critical("Uncaught exception:", exc_info=args)  # type: ignore

    logger.debug(f"Configured logging from stock configuration {config_name!r}")
    return stock_config
