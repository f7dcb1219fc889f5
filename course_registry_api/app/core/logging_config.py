"""
Logging setup for the registry API.

``setup_logging`` attaches a console handler (and, when ``LOG_FILE`` is
set, a file handler) to the root logger.  Modules log through
``logging.getLogger(__name__)``; store rollbacks are reported at
ERROR, entity mutations at INFO.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP client libraries used by the client module and the test client
# log every request at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "urllib3")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to INFO.
    logfile : Optional[str]
        File to append log records to, in addition to the console.
    quiet : Iterable[str]
        Logger names raised to WARNING regardless of ``level``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
