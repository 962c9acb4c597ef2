"""Response types and the writer that emits them."""
from __future__ import annotations

import json
import sys
from typing import IO, Any

from starlette.responses import Response as StarletteResponse


class Response:
    """Response with .body (bytes), .media_type and .status_code."""

    def __init__(
        self,
        content: bytes | str,
        media_type: str = "application/json",
        status_code: int = 200,
    ) -> None:
        self.body = content if isinstance(content, bytes) else content.encode()
        self.media_type = media_type
        self.status_code = status_code

    def to_starlette(self) -> StarletteResponse:
        """Same body, type and status as a Starlette response for ASGI hosts."""
        return StarletteResponse(self.body, status_code=self.status_code, media_type=self.media_type)


class JSONResponse(Response):
    """JSON response; content is serialized compactly: {"asd":"asd"}."""

    def __init__(
        self,
        content: dict[str, Any] | list[Any],
        status_code: int = 200,
    ) -> None:
        body = json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        super().__init__(body, media_type="application/json", status_code=status_code)


class HttpResponse:
    """
    Writes one response to a text stream (sys.stdout by default) in a single write.
    Headers and status of the last response are kept for the host to send.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self.status_code = 200
        self.headers: dict[str, str] = {}

    def respond(self, response: Response | dict[str, Any] | list[Any]) -> None:
        if not isinstance(response, Response):
            response = JSONResponse(response)
        self.status_code = response.status_code
        self.headers["Content-Type"] = response.media_type
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(response.body.decode("utf-8"))
