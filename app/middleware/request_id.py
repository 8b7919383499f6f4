"""Request ID middleware: injects X-Request-ID into context for logging.

If the incoming request has an X-Request-ID header it is reused, otherwise a
UUID4 is generated. The value reaches every log line through RequestIdFilter
and is echoed back in the response headers.
"""

from __future__ import annotations

import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.packages.crucible.core.logger import set_request_id


class RequestIdMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1").lower(): v.decode("latin-1") for k, v in scope.get("headers", [])}
        rid = headers.get("x-request-id") or str(uuid.uuid4())
        set_request_id(rid)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers_out = list(message.get("headers", []))
                headers_out.append((b"x-request-id", rid.encode("latin-1")))
                message["headers"] = headers_out
            await send(message)

        await self.app(scope, receive, send_with_request_id)
