"""Logging setup for the API process and the setup scripts."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "todo-app"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the root logger.

    Safe to call more than once; the handler is only added the first time,
    later calls just adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
