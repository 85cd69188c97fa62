"""
A per-call logging context.

Library calls may run in any thread, so the context is held in a :py:class:`contextvars.ContextVar`
rather than in a request scoped store. Callers open a scope with :py:func:`logging_scope`; outside of
a scope nothing is recorded and :py:func:`logging_context` returns an empty dictionary.
"""

import contextvars
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from seqrepo_lite import __project__, __version__

logger = logging.getLogger(__name__)

_context: contextvars.ContextVar[Optional[dict[str, Any]]] = contextvars.ContextVar(
    "seqrepo_lite_logging_context", default=None
)


@contextmanager
def logging_scope(**initial: Any) -> Iterator[dict[str, Any]]:
    ctx: dict[str, Any] = {"application": __project__, "version": __version__, **initial}
    token = _context.set(ctx)
    try:
        yield ctx
    finally:
        _context.reset(token)


def save_to_logging_context(ctx: dict) -> dict:
    context = _context.get()
    if context is None:
        logger.debug("Skipped saving to context. Context does not exist.")
        return {}

    for k, v in ctx.items():
        # Don't overwrite existing context mappings but create a list if a duplicated key is added.
        if k in context:
            existing_ctx = context[k]
            if isinstance(existing_ctx, list):
                context[k].append(v)
            else:
                context[k] = [existing_ctx, v]
        else:
            context[k] = v

    return context


def logging_context() -> dict:
    context = _context.get()
    if context is None:
        return {}

    return context
