"""Logging setup for the web app."""

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Route rewindpix logs to stderr.

    Safe to call once per app instance; the handler is only added the first
    time, while the level always follows the latest call.
    """
    logger = logging.getLogger("rewindpix")
    logger.setLevel(level)
    if not any(getattr(h, "_rewindpix", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._rewindpix = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = False
    return logger
