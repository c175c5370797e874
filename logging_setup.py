from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handler_attached = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger once per process.

    Streamlit re-executes the app script on every interaction, so repeated
    calls only adjust the level.
    """
    global _handler_attached
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    if _handler_attached:
        return

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(console)
    _handler_attached = True
