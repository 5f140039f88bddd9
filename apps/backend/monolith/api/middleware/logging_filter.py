"""
Logging filter that stamps every record with the request's correlation ID.
"""
import logging
from threading import local

_thread_locals = local()

NO_REQUEST_ID = 'no-request-id'


def set_correlation_id(correlation_id: str) -> None:
    _thread_locals.correlation_id = correlation_id


def get_correlation_id() -> str | None:
    return getattr(_thread_locals, 'correlation_id', None)


def clear_correlation_id() -> None:
    _thread_locals.correlation_id = None


class CorrelationIDFilter(logging.Filter):
    """
    Adds ``correlation_id`` to log records (see LOGGING in settings).

    Records emitted outside a request get ``no-request-id``.
    """

    def filter(self, record):
        record.correlation_id = get_correlation_id() or NO_REQUEST_ID
        return True
