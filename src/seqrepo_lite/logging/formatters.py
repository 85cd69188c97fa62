import logging
from typing import Any

from pythonjsonlogger.jsonlogger import JsonFormatter

from seqrepo_lite import __project__, __version__


class SeqRepoJsonFormatter(JsonFormatter):
    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]) -> None:
        """
        Override JsonFormatter to add level, logger and filepath to emitted messages.

        Records logged outside of a logging scope carry no application details, so these default to
        this package.
        """
        message_dict["level"] = record.levelname
        message_dict["logger"] = record.name
        message_dict["filepath"] = record.pathname

        super(SeqRepoJsonFormatter, self).add_fields(log_record, record, message_dict)

        log_record.setdefault("application", __project__)
        log_record.setdefault("version", __version__)
