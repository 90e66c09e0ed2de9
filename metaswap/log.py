"""structlog configuration.

Library modules only call structlog.get_logger(). Applications and the test
suite call configure_logging() once at startup.
"""

import logging

import structlog

from metaswap.config import LogSettings


def configure_logging(settings: LogSettings | None = None) -> None:
    """Install the structlog processor chain.

    Args:
        settings: Logging settings. Read from the environment if not provided.
    """
    settings = settings or LogSettings.from_env()
    log_level = getattr(logging, settings.level)
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
