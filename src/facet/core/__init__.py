from facet.core.app import Application
from facet.core.config import Config
from facet.core.container import Container
from facet.core.context import RequestContext
from facet.core.errors import (
    BadRequestException,
    FacetError,
    InvalidFileTypeException,
    NotFoundException,
    ValidationConfigError,
)
from facet.core.module import Module
from facet.core.request import BasicAuthenticationDetails, HttpRequest, Verb, sanitize_string
from facet.core.responses import HttpResponse, JSONResponse, Response

__all__ = [
    "Application",
    "Config",
    "Container",
    "RequestContext",
    "BadRequestException",
    "FacetError",
    "InvalidFileTypeException",
    "NotFoundException",
    "ValidationConfigError",
    "Module",
    "BasicAuthenticationDetails",
    "HttpRequest",
    "Verb",
    "sanitize_string",
    "HttpResponse",
    "JSONResponse",
    "Response",
]
