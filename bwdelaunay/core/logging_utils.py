"""Logging utilities for bwdelaunay.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All package code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Union

_ROOT_NAME = 'bwdelaunay'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Ensure the 'bwdelaunay' logger has a single stream handler and is
    isolated from the process root logger. Returns the 'bwdelaunay' logger.
    """
    pkg_root = logging.getLogger(_ROOT_NAME)
    # NullHandlers (added by the package __init__) are replaced by a StreamHandler
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in pkg_root.handlers)
    if not has_non_null:
        for h in list(pkg_root.handlers):
            pkg_root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        pkg_root.addHandler(handler)
    pkg_root.propagate = False
    return pkg_root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = getattr(logging, str(level).upper(), None)
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'bwdelaunay' logger family level and optional external noise suppression.

    This does NOT modify the process root logger.
    """
    pkg_root = _ensure_package_root()
    lvl = _to_level(level)
    pkg_root.setLevel(lvl)
    # matplotlib is very chatty at DEBUG
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'bwdelaunay' namespace.

    The logger is left at NOTSET so it inherits the level of the
    'bwdelaunay' parent configured via configure_logging().
    """
    _ensure_package_root()
    log = logging.getLogger(name)
    log.setLevel(logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
