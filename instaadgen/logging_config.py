"""Process-wide logging setup for the InstaAdGen web app."""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root_logger.setLevel(log_level)

    # Idempotent: create_app() may run more than once per process (tests, reloader)
    if not any(getattr(h, "_instaadgen", False) for h in root_logger.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        console._instaadgen = True
        root_logger.addHandler(console)

    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
