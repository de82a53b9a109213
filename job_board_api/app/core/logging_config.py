"""
Logging setup for the API process.

Log lines go to stderr and, when ``LOG_FILE`` is set, to that file as
well.  ``DEBUG=true`` lowers every logger to DEBUG, including uvicorn's
per-request access log, which otherwise only reports warnings.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers, silenced below WARNING unless debugging.
QUIET_LOGGERS = ("uvicorn.access",)


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure the root logger for the job board.

    Handlers are attached only once per process (a second
    ``create_app`` call or a test runner that already captures logs
    keeps its handlers), but levels are applied on every call.

    Parameters
    ----------
    level : str
        Level name such as ``"INFO"``; unknown names fall back to INFO.
    logfile : Optional[str]
        Extra file to write to.  Its directory is created if needed.
    debug : bool
        Force DEBUG everywhere, access log included.
    """
    root = logging.getLogger()
    if not root.handlers:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        for handler in _build_handlers(logfile):
            handler.setFormatter(formatter)
            root.addHandler(handler)

    root.setLevel(logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
