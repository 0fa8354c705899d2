"""
Logging utilities.

Request-scoped context attached to log records.
"""

import logging
from contextvars import ContextVar
from typing import Optional

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class RequestContextFilter(logging.Filter):
    """Add request context to log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        req_id = request_id.get()
        if req_id and not hasattr(record, 'request_id'):
            record.request_id = req_id
        return True

