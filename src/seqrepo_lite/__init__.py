import logging as module_logging

logger = module_logging.getLogger(__name__)

__project__ = "seqrepo-lite"
__version__ = "2025.1.0"
