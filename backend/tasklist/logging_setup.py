from __future__ import annotations

import logging
import sys
from pathlib import Path


class _NoiseFilter(logging.Filter):
    """Keep tasklist logs; let third-party libraries through only at WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasklist" or record.name.startswith("tasklist."):
            return True
        # uvicorn access/error lines are useful when serving
        if record.name.startswith("uvicorn"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.INFO, log_dir: str | Path | None = None) -> None:
    """
    Configure root logging once at startup:
    - console handler on stderr, filtered
    - optional file handler (everything) when log_dir is set
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_dir else level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_NoiseFilter())
    root.addHandler(ch)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "tasklist.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
