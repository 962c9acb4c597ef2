"""Root conftest: shared fixtures for building requests."""

import pytest

from facet.core.config import Config
from facet.core.context import RequestContext
from facet.core.request import HttpRequest
from facet.files.file_manager import FileManager
from facet.validation.request_validator import HttpRequestValidator
from facet.validation.service import ValidationService


@pytest.fixture
def config(tmp_path):
    return Config(upload_dir=str(tmp_path))


@pytest.fixture
def make_request(config):
    """make_request(method, rules=None, **context_fields) -> HttpRequest."""

    def _make(method: str = "GET", rules=None, **fields) -> HttpRequest:
        context = RequestContext(method=method, **fields)
        validator = HttpRequestValidator(ValidationService(), rules)
        return HttpRequest(context, FileManager(config), validator)

    return _make
