"""
Logging configuration for the hotel property management system.
Provides structured logging with console and JSON formatters.
"""

import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from hotelpms.config.settings import Settings, settings as default_settings
from hotelpms.core.logging import RequestContextFilter


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    environment: str = default_settings.ENVIRONMENT

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = self.environment

        # Request correlation is attached by RequestContextFilter
        request_id = getattr(record, 'request_id', None)
        if request_id:
            log_record['request_id'] = request_id

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


def build_logging_config(config: Settings) -> Dict[str, Any]:
    """Create the dictConfig mapping for the given settings."""
    if config.LOG_JSON:
        console_formatter = 'json'
    elif config.is_development():
        console_formatter = 'colored'
    else:
        console_formatter = 'standard'

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'request_context': {
                '()': RequestContextFilter,
            },
        },
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
            },
            'colored': {
                '()': 'colorlog.ColoredFormatter',
                'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            }
        },
        'handlers': {
            'console': {
                'level': 'DEBUG' if config.DEBUG else config.LOG_LEVEL,
                'class': 'logging.StreamHandler',
                'formatter': console_formatter,
                'filters': ['request_context'],
            },
        },
        'loggers': {
            '': {  # Root logger
                'handlers': ['console'],
                'level': config.LOG_LEVEL,
            },
            'hotelpms': {
                'handlers': ['console'],
                'level': config.LOG_LEVEL,
                'propagate': False
            },
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'INFO' if config.DATABASE_ECHO else 'WARNING',
                'propagate': False
            },
            'uvicorn.access': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': False
            }
        }
    }


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure application logging"""
    config = config or default_settings
    CustomJsonFormatter.environment = config.ENVIRONMENT
    logging.config.dictConfig(build_logging_config(config))
    logger = logging.getLogger("hotelpms")
    logger.info(f"Logging initialized with level: {config.LOG_LEVEL}")
    return logger
