"""Logging setup for kht scripts; the library itself only creates module loggers."""

import logging
import sys
from typing import Optional, TextIO


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    # Root logger only; kht modules never log key material, so one format fits all.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=stream if stream is not None else sys.stdout,
        force=force,
    )
