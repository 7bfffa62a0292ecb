from starlette.middleware.base import BaseHTTPMiddleware

from user_events.core.config import config
from user_events.utils.correlation_id import (
    extract_correlation_id_from_headers,
    set_correlation_id,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to extract or generate correlation IDs for requests.
    Sets the correlation ID in the context for use throughout the request lifecycle.
    """

    async def dispatch(self, request, call_next):
        correlation_id = extract_correlation_id_from_headers(request.headers, config.correlation_id_header)

        set_correlation_id(correlation_id)

        response = await call_next(request)

        # Echo the correlation ID using the configured header name
        response.headers[config.correlation_id_header] = correlation_id

        return response
