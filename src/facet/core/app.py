"""Application is the composition root: config, DI container, modules; builds one HttpRequest per call."""
from __future__ import annotations

import logging
from typing import IO, Any

from starlette.requests import Request

from facet.core.config import Config
from facet.core.container import Container
from facet.core.context import RequestContext
from facet.core.module import Module
from facet.core.observability import setup_logging
from facet.core.request import HttpRequest
from facet.core.responses import HttpResponse, Response
from facet.files.file_manager import FileManager
from facet.files.files_module import FilesModule
from facet.validation.request_validator import HttpRequestValidator
from facet.validation.validation_module import ValidationModule

logger = logging.getLogger(__name__)


class Application:
    """
    Application. Composed from modules via register(module).
    Modules not registered explicitly (files, validation) get their defaults on first request().
    """

    def __init__(self, config: Config | None = None) -> None:
        self._modules: list[Module] = []
        self._container = Container()
        self._config = config or Config()
        self._container.register_instance(Config, self._config)
        self._container.register_instance("config", self._config)
        if self._config.log_level:
            setup_logging(self._config.log_level, self._config.log_format)

    def register(self, module: Module) -> Application:
        """Register a module (FilesModule, ValidationModule, ...). Returns self for chaining."""
        module.register_into(self)
        self._modules.append(module)
        return self

    @property
    def container(self) -> Container:
        """DI container: registration and resolution of dependencies."""
        return self._container

    @property
    def config(self) -> Config:
        return self._config

    def _ensure_defaults(self) -> None:
        if FileManager not in self._container:
            logger.debug("no FilesModule registered, using defaults")
            self.register(FilesModule())
        if HttpRequestValidator not in self._container:
            logger.debug("no ValidationModule registered, using defaults")
            self.register(ValidationModule())

    def request(self, context: RequestContext) -> HttpRequest:
        """New facade for one request; collaborators come from the container."""
        self._ensure_defaults()
        return self._container.build(HttpRequest, context=context)

    async def request_from_starlette(self, request: Request) -> HttpRequest:
        return self.request(await RequestContext.from_starlette(request))

    def request_from_environ(self, environ: dict[str, Any]) -> HttpRequest:
        return self.request(RequestContext.from_environ(environ))

    def respond(self, payload: Response | dict[str, Any] | list[Any], stream: IO[str] | None = None) -> HttpResponse:
        """Write payload (JSON unless a Response is given); returns the writer with status and headers."""
        writer = HttpResponse(stream)
        writer.respond(payload)
        return writer
