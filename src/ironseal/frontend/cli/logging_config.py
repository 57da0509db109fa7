"""Logging setup for the ironseal command line.

Log records go to stderr; stdout carries only tokens and payloads.
"""

import logging
import sys
from typing import Union


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    # accepts logging.INFO or "INFO"
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
