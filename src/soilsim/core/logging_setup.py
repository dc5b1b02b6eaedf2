"""Logging setup for scripts and applications embedding the solvers."""
import logging
from typing import Optional

from soilsim.core.config import LoggingConfig, get_config


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Apply level and format from configuration to the root logger.

    The library never calls this itself; solver modules only create loggers.
    """
    config = config or get_config().logging
    logging.basicConfig(level=config.log_level, format=config.log_format)
    logging.getLogger("soilsim").setLevel(config.log_level)
