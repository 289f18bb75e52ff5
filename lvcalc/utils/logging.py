"""Package logging.

Every module logs through a child of the ``lvcalc`` logger, so a single stream
handler on the package logger serves the whole calculation.
"""
import logging
from typing import Optional, Union

PACKAGE_LOGGER = "lvcalc"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = PACKAGE_LOGGER, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return ``name`` (usually a module ``__name__``) under the package logger.

    The stream handler is attached once to ``lvcalc``; ``level`` updates the
    package level for every module logger.
    """

    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
        package.setLevel(logging.INFO)
    if level is not None:
        package.setLevel(level)

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
