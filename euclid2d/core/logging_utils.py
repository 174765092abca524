"""Logging utilities for euclid2d.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All euclid2d code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'euclid2d'
_HANDLER_NAME = 'euclid2d.stdout'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Return the 'euclid2d' logger, isolated from the process root logger.

    The NullHandler added by the package __init__ is kept until
    configure_logging() asks for visible output.
    """
    root = logging.getLogger(_ROOT_NAME)
    root.propagate = False
    return root


def _is_stdout_handler(h: logging.Handler) -> bool:
    # FileHandler and test capture handlers subclass StreamHandler too
    return h.get_name() == _HANDLER_NAME


def _attach_stream_handler(root: logging.Logger) -> None:
    # Replace NullHandlers with a single stdout handler
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    if not any(_is_stdout_handler(h) for h in root.handlers):
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'euclid2d' logger family level and stdout output.

    This does NOT modify the process root logger. With mute_external the
    matplotlib loggers stay at INFO when DEBUG is requested here.
    """
    root = _ensure_package_root()
    _attach_stream_handler(root)
    lvl = _to_level(level)
    root.setLevel(lvl)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'euclid2d' namespace.

    If a level is provided it is set on the logger; otherwise the logger is
    left at NOTSET so it inherits from the 'euclid2d' parent configured via
    configure_logging().
    """
    _ensure_package_root()
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
