"""
Logging configuration for processes hosting the lookup backend.

Root logger stays at INFO to keep botocore/urllib3 quiet; only the
hiera_aws_sm namespace follows the requested level.
"""

import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_MARKER = "_hiera_aws_sm_handler"


def configure_logging(level: str = "INFO") -> None:
    """Install a stdout handler on the root logger and set the package level.

    Safe to call multiple times; it will not duplicate handlers.
    """
    root = logging.getLogger()
    package_level = getattr(logging, level.upper(), logging.INFO)

    if not any(getattr(h, _MARKER, False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        setattr(handler, _MARKER, True)
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    logging.getLogger("hiera_aws_sm").setLevel(package_level)
