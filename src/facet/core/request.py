"""
HttpRequest: one facade over a RequestContext, whatever the verb.
Parameters, uploaded files, basic-auth credentials, bearer token, validation.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from starlette.datastructures import QueryParams

from facet.core.context import AUTH_PW, AUTH_USER, RequestContext
from facet.core.errors import NotFoundException
from facet.files.file import File
from facet.files.file_manager import FileManager
from facet.validation.request_validator import HttpRequestValidator

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>?")
_BEARER_RE = re.compile(r"Bearer\s(\S+)")


class Verb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: str) -> Verb:
        try:
            return cls(method.upper())
        except ValueError:
            raise ValueError(f"unsupported HTTP method {method!r}") from None


@dataclass(frozen=True)
class BasicAuthenticationDetails:
    username: str
    password: str


def sanitize_string(value: Any) -> str:
    """Legacy string filter: drop NUL bytes and tags, encode both quote kinds."""
    text = str(value).replace("\x00", "")
    text = _TAG_RE.sub("", text)
    return text.replace("'", "&#39;").replace('"', "&#34;")


def _short_name(controller: Any) -> str:
    if isinstance(controller, str):
        return controller.rsplit(".", 1)[-1]
    cls = controller if isinstance(controller, type) else type(controller)
    return cls.__name__


class HttpRequest:
    """
    Request wrapper: get_parameter() hides where a value comes from.
    Lookup order: set_parameter() overlay (a None value counts as unset), then the accessor
    of the verb captured at construction.
    GET/POST accessors return None for a missing name; PUT/PATCH/DELETE raise NotFoundException.
    """

    def __init__(
        self,
        context: RequestContext,
        file_manager: FileManager,
        validator: HttpRequestValidator,
    ) -> None:
        self._context = context
        self._file_manager = file_manager
        self._validator = validator
        self._verb = Verb.parse(context.method)
        self._params: dict[str, Any] = {}
        accessors: dict[Verb, Callable[[str], Any]] = {
            Verb.GET: self.get,
            Verb.OPTIONS: self.get,
            Verb.POST: self.post,
            Verb.PUT: self.put,
            Verb.PATCH: self.patch,
            Verb.DELETE: self.delete,
        }
        self._accessor = accessors[self._verb]

    @property
    def context(self) -> RequestContext:
        return self._context

    @property
    def request_type(self) -> str:
        return self._verb.value

    def get_request_type(self) -> str:
        return self._verb.value

    # --- parameters -------------------------------------------------------

    def get_parameter(self, name: str) -> Any:
        if self._params.get(name) is not None:
            return self._params[name]
        logger.debug("parameter %r via %s accessor", name, self._verb.value, extra={"verb": self._verb.value})
        return self._accessor(name)

    def set_parameter(self, name: str, value: Any) -> None:
        self._params[name] = value

    def get(self, name: str) -> str | None:
        value = self._context.query.get(name)
        return None if value is None else sanitize_string(value)

    def post(self, name: str) -> str | None:
        value = self._context.form.get(name)
        return None if value is None else sanitize_string(value)

    def put(self, name: str) -> str:
        return self.get_parameter_from_stream(name)

    def patch(self, name: str) -> str:
        return self.get_parameter_from_stream(name)

    def delete(self, name: str) -> str:
        return self.get_parameter_from_stream(name)

    def get_parameter_from_stream(self, name: str) -> str:
        stream_content = self.get_parameters_from_stream()
        if name not in stream_content:
            raise NotFoundException("parameter not found")
        return stream_content[name]

    def get_parameters_from_stream(self) -> dict[str, str]:
        """Raw body parsed as URL-encoded pairs; blank values kept, last duplicate wins."""
        return dict(QueryParams(self._context.body.decode("utf-8", "replace")))

    def get_parameters_from_request(self) -> dict[str, str]:
        return self._context.request_fields

    # --- verb -------------------------------------------------------------

    def is_get(self) -> bool:
        return self._verb is Verb.GET

    def is_post(self) -> bool:
        return self._verb is Verb.POST

    def is_put(self) -> bool:
        return self._verb is Verb.PUT

    def is_patch(self) -> bool:
        return self._verb is Verb.PATCH

    def is_delete(self) -> bool:
        return self._verb is Verb.DELETE

    def is_options(self) -> bool:
        return self._verb is Verb.OPTIONS

    def is_ajax(self) -> bool:
        requested_with = self._context.headers.get("x-requested-with") or self._context.server.get(
            "HTTP_X_REQUESTED_WITH"
        )
        return bool(requested_with) and requested_with.lower() == "xmlhttprequest"

    # --- files ------------------------------------------------------------

    def move_file_to_directory(self, directory: Any, file: File) -> bool:
        """Raises NotFoundException / InvalidFileTypeException from the file manager."""
        return self._file_manager.save_to_file_system(directory, file)

    def get_file_by_property_name(self, property_name: str, changed_name: str | None = None) -> File:
        self._file_manager.build_files_from_source(self._context.files, changed_name)
        return self._file_manager.get_by_name(property_name)

    # --- credentials ------------------------------------------------------

    def get_auth_details(self) -> BasicAuthenticationDetails | None:
        server = self._context.server
        if AUTH_USER not in server or AUTH_PW not in server:
            return None
        return BasicAuthenticationDetails(server[AUTH_USER], server[AUTH_PW])

    def get_ip(self) -> str | None:
        return self._context.server.get("REMOTE_ADDR")

    def get_authorization_header(self) -> str | None:
        """Server 'Authorization', then 'HTTP_AUTHORIZATION' (proxies, nginx), then any header spelling."""
        server = self._context.server
        if "Authorization" in server:
            return server["Authorization"].strip()
        if "HTTP_AUTHORIZATION" in server:
            return server["HTTP_AUTHORIZATION"].strip()
        for name, value in self._context.headers.items():
            if name.lower() == "authorization":
                return value.strip()
        return None

    def get_bearer_token(self) -> str | None:
        header = self.get_authorization_header()
        if header:
            match = _BEARER_RE.search(header)
            if match:
                return match.group(1)
        return None

    # --- validation -------------------------------------------------------

    def validate(self, controller: Any, method: str) -> bool:
        """
        Validate against the rules of controller.method.
        controller: name, class or instance (short class name is used).
        """
        if not controller or not method:
            raise ValueError("validate() needs the calling controller and method")
        fields = (
            self.get_parameters_from_request()
            if self.is_get() or self.is_post()
            else self.get_parameters_from_stream()
        )
        return self._validator.validate(_short_name(controller), method, fields, dict(self._context.headers))
