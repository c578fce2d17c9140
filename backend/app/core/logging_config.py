"""
Logging setup for Clipper LMS.

Modules log through ``logging.getLogger(__name__)``; this only configures the
root handler and level once per process.
"""

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
    # SQL echo is controlled by the DEBUG setting on the engine
    logging.getLogger("passlib").setLevel(logging.ERROR)
