"""structlog configuration.

Modules log through ``structlog.get_logger()`` with dotted event names
(``auth.login_failed``) and keyword context. Request-scoped values such as
``request_id`` and ``user_id`` come from contextvars bound by middleware.
"""

import logging

import structlog


def configure_logging(environment: str = "development", debug: bool = False) -> None:
    """Configure structlog once at app creation."""
    level = logging.DEBUG if debug else logging.INFO

    renderer = (
        structlog.dev.ConsoleRenderer()
        if environment == "development"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
