"""
Access Log Middleware

Writes one line per HTTP request:
    127.0.0.1 "GET /search" 200 3.2ms

Implemented as a plain ASGI middleware so every response message passes
through untouched.
"""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("bookbrowser.access")


class AccessLogMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        status_code = 500

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            client = scope.get("client")
            host = client[0] if client else "-"
            logger.info(
                f'{host} "{scope["method"]} {scope["path"]}" '
                f"{status_code} {elapsed_ms:.1f}ms"
            )
