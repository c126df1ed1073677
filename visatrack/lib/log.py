"""Logging setup for the visatrack CLI (library modules only call getLogger)"""

import logging
import sys
from pathlib import Path
from typing import Optional

from visatrack.lib.config import get_log_file, get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_LEVEL = "WARNING"


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Attach stderr (and optional file) handlers to the "visatrack" logger.

    Safe to call more than once; handlers are only added the first time.
    Unknown level names fall back to WARNING.
    """
    log = logging.getLogger("visatrack")

    requested = (level or get_log_level()).upper()
    unknown_level = requested not in logging.getLevelNamesMapping()
    log.setLevel(DEFAULT_LEVEL if unknown_level else requested)

    if not getattr(log, "_visatrack_configured", False):
        fmt = logging.Formatter(LOG_FORMAT)
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(fmt)
        log.addHandler(sh)

        log_file = log_file or get_log_file()
        if log_file:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding="utf-8")
            except OSError as e:
                log.warning("could not open log file %s: %s", log_file, e)
            else:
                fh.setFormatter(fmt)
                log.addHandler(fh)

        log._visatrack_configured = True

    if unknown_level:
        log.warning("unknown log level %r, using %s", requested, DEFAULT_LEVEL)
    return log
