from __future__ import annotations

import logging
import sys
from typing import Union

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ServiceHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces only our own handler."""


# PUBLIC_INTERFACE
def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Handler:
    """
    Configure root logging with a single stderr handler.

    Safe to call more than once: a handler installed by an earlier call is
    replaced, handlers added by anyone else are left alone.
    Returns the installed handler.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        if isinstance(h, _ServiceHandler):
            root.removeHandler(h)

    handler = _ServiceHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    logging.captureWarnings(True)
    return handler
