import logging
import logging.config
import os
from typing import Any

import structlog
from asgi_correlation_id.context import correlation_id
from structlog.stdlib import LoggerFactory


def _logger(env_var: str, default: str = 'INFO') -> dict:
    return {
        'handlers': ['consoleHandler'],
        'level': os.getenv(env_var, default),
        'propagate': False,
    }


config = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'correlation_id': {
            '()': 'asgi_correlation_id.CorrelationIdFilter',
            'uuid_length': 32,
            'default_value': '-',
        },
    },
    'formatters': {
        'structFormatter': {
            'class': 'logging.Formatter',
            'format': '[%(correlation_id)s] %(message)s'
        }
    },
    'handlers': {
        'consoleHandler': {
            'class': 'logging.StreamHandler',
            'filters': ['correlation_id'],
            'level': 'DEBUG',
            'formatter': 'structFormatter'
        }
    },
    'root': _logger('LOGGING_LEVEL_ROOT'),
    'loggers': {
        '__main__': _logger('LOGGING_LEVEL_MAIN'),
        'src': _logger('LOGGING_LEVEL_STATUS'),
        # Request lines from HTTP probes
        'httpx': _logger('LOGGING_LEVEL_HTTPX', 'WARNING'),
    }
}


def add_correlation(logger: logging.Logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """processor function for structlog that adds correlation ID to log messages """
    if request_id := correlation_id.get():
        event_dict["request_id"] = request_id
    return event_dict


def configure_logging():
    """
    Routes structlog through the standard library loggers configured above, rendering each event as JSON.
    """
    structlog.configure(
        logger_factory=LoggerFactory(), processors=[
            add_correlation,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=None,
        cache_logger_on_first_use=True
    )
    logging.config.dictConfig(config)
