"""
RequestContext: explicit snapshot of one inbound request.
Built once by the host integration (Starlette or WSGI) and handed to HttpRequest.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from python_multipart import MultipartParser, parse_form
from python_multipart.exceptions import FormParserError
from python_multipart.multipart import parse_options_header
from starlette.datastructures import Headers, QueryParams, UploadFile
from starlette.requests import Request, cookie_parser

from facet.core.errors import BadRequestException
from facet.files.file import UploadedFile

logger = logging.getLogger(__name__)

# Server field names (CGI convention) for the decoded basic-auth credentials.
AUTH_USER = "AUTH_USER"
AUTH_PW = "AUTH_PW"

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _is_form(content_type: str) -> bool:
    return content_type.split(";")[0].strip().lower() in _FORM_TYPES


def _basic_credentials(authorization: str | None) -> dict[str, str]:
    """'Basic dXNlcjpwdw==' -> {AUTH_USER: 'user', AUTH_PW: 'pw'}; anything else -> {}."""
    if not authorization:
        return {}
    scheme, _, encoded = authorization.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return {}
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return {}
    if ":" not in decoded:
        return {}
    username, _, password = decoded.partition(":")
    return {AUTH_USER: username, AUTH_PW: password}


def _server_fields(method: str, headers: Headers, remote_addr: str | None, query_string: str) -> dict[str, str]:
    server = {"REQUEST_METHOD": method, "QUERY_STRING": query_string}
    if remote_addr is not None:
        server["REMOTE_ADDR"] = remote_addr
    for name, value in headers.items():
        key = name.upper().replace("-", "_")
        if key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            server[key] = value
        else:
            server[f"HTTP_{key}"] = value
    server.update(_basic_credentials(headers.get("authorization")))
    return server


class _PartCollector:
    """MultipartParser callbacks: collects each part's headers and data, then files it as a field or an upload."""

    def __init__(self) -> None:
        self.form: dict[str, str] = {}
        self.files: dict[str, UploadedFile] = {}
        self._headers: dict[str, str] = {}
        self._field = b""
        self._value = b""
        self._data: list[bytes] = []

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = []

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._field.decode("latin-1").lower()] = self._value.decode("latin-1")
        self._field = self._value = b""

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data.append(data[start:end])

    def on_part_end(self) -> None:
        _, options = parse_options_header(self._headers.get("content-disposition"))
        name = options.get(b"name", b"").decode("utf-8", "replace")
        data = b"".join(self._data)
        if b"filename" in options:
            self.files[name] = UploadedFile(
                filename=options[b"filename"].decode("utf-8", "replace"),
                content_type=self._headers.get("content-type") or "application/octet-stream",
                data=data,
            )
        else:
            self.form[name] = data.decode("utf-8", "replace")


def _parse_form_body(content_type: str, body: bytes) -> tuple[dict[str, str], dict[str, UploadedFile]]:
    """Form fields and uploads of a urlencoded or multipart body. Malformed bodies raise BadRequestException."""
    ctype, options = parse_options_header(content_type)
    try:
        if ctype == b"multipart/form-data":
            boundary = options.get(b"boundary")
            if not boundary:
                raise BadRequestException("multipart body without boundary")
            collector = _PartCollector()
            parser = MultipartParser(boundary, collector.callbacks())
            parser.write(body)
            parser.finalize()
            return collector.form, collector.files

        form: dict[str, str] = {}

        def on_field(f: Any) -> None:
            form[f.field_name.decode("latin-1")] = (f.value or b"").decode("utf-8", "replace")

        parse_form(
            {"Content-Type": content_type.encode("latin-1"), "Content-Length": str(len(body)).encode()},
            io.BytesIO(body),
            on_field,
            lambda f: None,
        )
        return form, {}
    except FormParserError as e:
        logger.warning("malformed %s body: %s", ctype.decode("latin-1"), e)
        raise BadRequestException(f"malformed {ctype.decode('latin-1')} body") from e


@dataclass
class RequestContext:
    """
    method, query, form, cookies, raw body, headers, uploaded files, server fields.
    headers accepts a plain dict; it is wrapped in case-insensitive starlette Headers.
    """
    method: str
    query: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    headers: Headers = field(default_factory=Headers)
    files: Mapping[str, UploadedFile] = field(default_factory=dict)
    server: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(headers=dict(self.headers))

    @property
    def request_fields(self) -> dict[str, str]:
        """Query, then form, then cookies; later sources win."""
        return {**self.query, **self.form, **self.cookies}

    @classmethod
    async def from_starlette(cls, request: Request) -> RequestContext:
        """Read body (and form, for form content types) once; everything after is synchronous."""
        body = await request.body()
        form: dict[str, str] = {}
        files: dict[str, UploadedFile] = {}
        if _is_form(request.headers.get("content-type", "")):
            async with request.form() as form_data:
                for name, value in form_data.multi_items():
                    if isinstance(value, UploadFile):
                        files[name] = UploadedFile(
                            filename=value.filename or "",
                            content_type=value.content_type or "application/octet-stream",
                            data=await value.read(),
                        )
                    else:
                        form[name] = value
        remote_addr = request.client.host if request.client else None
        return cls(
            method=request.method,
            query=dict(request.query_params),
            form=form,
            cookies=dict(request.cookies),
            body=body,
            headers=request.headers,
            files=files,
            server=_server_fields(request.method, request.headers, remote_addr, request.url.query),
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> RequestContext:
        """WSGI: reads wsgi.input up to CONTENT_LENGTH. String environ entries become server fields."""
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        stream = environ.get("wsgi.input")
        body = stream.read(length) if stream is not None and length > 0 else b""

        raw_headers: dict[str, str] = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                raw_headers[key[5:].replace("_", "-").lower()] = value
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH") and value:
                raw_headers[key.replace("_", "-").lower()] = value
        headers = Headers(headers=raw_headers)

        form: dict[str, str] = {}
        files: dict[str, UploadedFile] = {}
        content_type = headers.get("content-type", "")
        if body and _is_form(content_type):
            form, files = _parse_form_body(content_type, body)

        server = {k: v for k, v in environ.items() if isinstance(v, str)}
        for k, v in _basic_credentials(headers.get("authorization")).items():
            server.setdefault(k, v)
        return cls(
            method=str(environ.get("REQUEST_METHOD", "GET")),
            query=dict(QueryParams(str(environ.get("QUERY_STRING", "")))),
            form=form,
            cookies=cookie_parser(headers.get("cookie", "")),
            body=body,
            headers=headers,
            files=files,
            server=server,
        )
