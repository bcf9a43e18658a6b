# fintrack/observability.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root handler for the app's named loggers; no-op if one is configured."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()

        # only read session if SessionMiddleware already attached it
        sess = request.scope.get("session")
        user_id = sess.get("user_id") if sess else None

        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logging.getLogger("fintrack.req").info(
            "%s %s -> %s in %.1fms user=%s",
            request.method,
            request.url.path,
            response.status_code,
            ms,
            user_id,
        )
        return response
