"""
Correlation ID middleware for request tracing.

Every request gets an ID: the caller's ``X-Request-ID`` when it is usable,
a fresh UUID otherwise. The ID is available to log records for the whole
request and echoed back in the response header.
"""
import re
import uuid

from .logging_filter import clear_correlation_id, set_correlation_id

HEADER = 'X-Request-ID'
_ACCEPTED_ID = re.compile(r'^[A-Za-z0-9._-]{1,128}$')


class CorrelationIDMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.META.get('HTTP_X_REQUEST_ID', '')
        # Never log caller-controlled junk
        if not _ACCEPTED_ID.match(request_id):
            request_id = str(uuid.uuid4())

        request.correlation_id = request_id
        set_correlation_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            # Thread-local must not leak into the next request on this worker
            clear_correlation_id()

        response[HEADER] = request_id
        return response
