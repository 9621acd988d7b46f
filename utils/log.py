"""Logging configuration and helpers.

Everything uses the standard :mod:`logging` library. Modules log dotted event
names (``table.sort.set``) and pass structured fields through
``extra=log_context(...)``; the console formatter appends those fields as
``key=value`` pairs.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

_CONTEXT_ATTR = 'ctx'


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        ctx = getattr(record, _CONTEXT_ATTR, None)
        if not ctx:
            return base
        pairs = ' '.join(f"{k}={v}" for k, v in ctx.items())
        return f"{base} {pairs}"


def log_context(**extra: Any) -> Dict[str, Any]:
    """Build a consistent `extra` payload for structured logs.

    Example:
        logger.info("records.delete.success",
                    extra=log_context(collection='cases', deleted=3))
    """
    return {_CONTEXT_ATTR: {k: v for k, v in extra.items() if v is not None}}


def configure_logging(level: str = 'INFO') -> None:
    """Install a single console handler on the root logger (idempotent)."""
    root = logging.getLogger()
    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root.setLevel(resolved)
    for handler in root.handlers:
        if getattr(handler, '_legal_tables', False):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(KeyValueFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s'))
    handler._legal_tables = True
    root.addHandler(handler)
