from seqrepo_lite.lib.logging.context import logging_context, save_to_logging_context

__all__ = [
    "logging_context",
    "save_to_logging_context",
]
