# dokdash/core/logging.py
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


class _DokdashHandler(logging.StreamHandler):
    """Marker type for the handler installed by ``configure_logging``."""


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = _DokdashHandler(sys.stdout)
    if json_format:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)

    # Replace our own handler on reload; handlers added by others stay
    for existing in [h for h in root.handlers if isinstance(h, _DokdashHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
