from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    # Streamlit reruns the script; replace rather than stack handlers.
    for handler in list(root.handlers):
        if getattr(handler, "_tempsim", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._tempsim = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # Quiet Streamlit's watcher chatter
    logging.getLogger("watchdog").setLevel(logging.WARNING)
