"""
Facet: request facade for small web applications.
One HttpRequest per call: verb-aware parameters, uploads, credentials, validation; JSON responses.
"""
from facet.core import (
    Application,
    BasicAuthenticationDetails,
    Config,
    Container,
    HttpRequest,
    HttpResponse,
    InvalidFileTypeException,
    JSONResponse,
    Module,
    NotFoundException,
    RequestContext,
    Verb,
)

__all__ = [
    "Application",
    "BasicAuthenticationDetails",
    "Config",
    "Container",
    "HttpRequest",
    "HttpResponse",
    "InvalidFileTypeException",
    "JSONResponse",
    "Module",
    "NotFoundException",
    "RequestContext",
    "Verb",
]
