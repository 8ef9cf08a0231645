"""Process-wide logging setup for the CLI and API server."""
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> logging.Logger:
    """Configure root logging once; module-level loggers inherit it.

    Level comes from the argument, else LOG_LEVEL, else WARNING.
    """
    level = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("recipe_optimizer")
