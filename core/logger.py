"""Logger helpers.

All service loggers live under the ``pdf_quiz`` namespace so the level can be
set in one place.
"""

import logging
import sys

NAMESPACE = "pdf_quiz"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Installs a stderr handler on the service namespace (idempotent)."""
    global _configured

    root = logging.getLogger(NAMESPACE)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Returns a child logger of the service namespace."""
    return logging.getLogger(f"{NAMESPACE}.{name}")
