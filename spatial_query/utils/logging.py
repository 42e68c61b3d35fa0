"""Logging configuration for hosts embedding the engine."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from spatial_query.config import EngineConfig

PACKAGE_LOGGER = "spatial_query"


def setup_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach a single stream handler to the engine's logger and return it.

    Only the ``spatial_query`` logger tree is touched by default, so the
    host's own logging setup is left alone. Pass ``logger_name=""`` to
    configure the root logger instead.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    target = logging.getLogger(logger_name)
    target.setLevel(numeric_level)
    target.handlers.clear()
    target.addHandler(handler)
    if logger_name:
        target.propagate = False
    return target


def setup_logging_from_config(config: EngineConfig, stream: TextIO | None = None) -> logging.Logger:
    return setup_logging(config.log_level, stream=stream)
