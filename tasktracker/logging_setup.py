import logging
import sys
from pathlib import Path

from tasktracker.config import settings


def setup_logging(level: str | None = None, error_log: str | Path | None = None) -> None:
    """
    Console handler at the configured level plus a file that keeps ERROR and
    above with tracebacks. Safe to call more than once.
    """
    level = (level or settings.LOG_LEVEL).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"
    error_log = Path(error_log or settings.ERROR_LOG_PATH)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    error_log.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(str(error_log), encoding="utf-8")
    fh.setLevel(logging.ERROR)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # SQL echo stays off unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
