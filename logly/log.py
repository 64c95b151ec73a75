"""Console loggers tagged with the name of the service that owns them."""

from __future__ import annotations

import logging
import sys


class _StdoutHandler(logging.Handler):
    """Writes to whatever sys.stdout is at the time of emitting."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stream = sys.stdout
            stream.write(message + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def new_logger(service: str) -> logging.Logger:
    """Return a debug-level logger writing timestamped lines to stdout."""
    logger = logging.getLogger(f"logly.{service}")
    if not any(isinstance(h, _StdoutHandler) for h in logger.handlers):
        handler = _StdoutHandler()
        escaped = service.replace("%", "%%")
        handler.setFormatter(
            logging.Formatter(f"%(asctime)s %(levelname)-5s service={escaped} %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger