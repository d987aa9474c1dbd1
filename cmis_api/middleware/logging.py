### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Request Logging Middleware -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Request Logging Middleware

Logs all API requests with attribution information:
- Who: signed-in user and acting role
- What: Endpoint, method, parameters
- When: Timestamp
- Result: Status code, response time

Logs to the daily request log file.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cmis_api.utils import setup_logger

# Set up request logger
request_logger = setup_logger("cmis_requests", log_to_file=True, log_to_console=False)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all API requests

    Captures:
    - Request ID (UUID)
    - Method and path
    - Signed-in user (set by get_current_user)
    - Client IP
    - Response status
    - Response time

    Document downloads are logged without the signed token in the path.
    """

    REDACT_PREFIXES = ("/api/v1/documents/",)

    def _display_path(self, path: str) -> str:
        for prefix in self.REDACT_PREFIXES:
            if path.startswith(prefix):
                return prefix + "<token>"
        return path

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        method = request.method
        path = self._display_path(request.url.path)
        query = str(request.url.query) if request.url.query else ""
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            request_logger.error(f"[{request_id}] ERROR {method} {path} - {e!s}")
            raise

        response_time = (time.time() - start_time) * 1000  # ms

        current_user = getattr(request.state, "current_user", None)
        user_label = (
            f"{current_user.email} ({current_user.acting_role or 'no role'})"
            if current_user
            else "anonymous"
        )

        log_entry = (
            f"[{request_id}] "
            f"{method} {path}"
            f"{f'?{query}' if query else ''} "
            f"| user={user_label} "
            f"| ip={client_ip} "
            f"| status={status_code} "
            f"| time={response_time:.2f}ms"
        )

        if status_code >= 500:
            request_logger.error(log_entry)
        elif status_code >= 400:
            request_logger.warning(log_entry)
        else:
            request_logger.info(log_entry)

        response.headers["X-Request-ID"] = request_id
        return response
