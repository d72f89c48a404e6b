"""
Structured logging for the marketplace.

Stdlib logging is configured through Django's ``LOGGING`` setting and every
record (ours and Django's) is rendered by ``structlog.stdlib.ProcessorFormatter``.
Application code logs through ``structlog.get_logger(__name__)`` with
key/value context.
"""

import structlog


SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt='iso', utc=True),
]


def build_logging_config(*, debug: bool, level: str = 'INFO') -> dict:
    """
    Return a ``dictConfig`` mapping for Django's ``LOGGING`` setting.

    JSON lines in production, the structlog console renderer when DEBUG is on.
    """
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.processors.JSONRenderer(),
                'foreign_pre_chain': SHARED_PROCESSORS,
            },
            'console': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.dev.ConsoleRenderer(colors=False),
                'foreign_pre_chain': SHARED_PROCESSORS,
            },
        },
        'handlers': {
            'default': {
                'class': 'logging.StreamHandler',
                'formatter': 'console' if debug else 'json',
            },
        },
        'root': {
            'handlers': ['default'],
            'level': level,
        },
        'loggers': {
            'django.db.backends': {
                'level': 'WARNING',
            },
        },
    }


def configure_structlog() -> None:
    """Route structlog through stdlib logging so LOGGING handlers apply."""
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
