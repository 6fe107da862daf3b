"""Per-request id for log correlation."""

import contextvars
import logging
import uuid

request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdFilter(logging.Filter):
    """Attach request_id to every LogRecord so the formatter can include it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


class RequestIdMiddleware:
    """Tag each request with an id and log its outcome.

    An incoming ``X-Request-ID`` is reused; otherwise a new one is generated.
    The id is echoed back on the response.
    """

    def __init__(self, get_response) -> None:
        self.get_response = get_response
        self.logger = logging.getLogger("theater.requests")

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_ctx.set(request_id)
        try:
            response = self.get_response(request)
            self.logger.info(
                "%s %s -> %s", request.method, request.path, response.status_code
            )
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_ctx.reset(token)
