"""
ValidationModule: building block for request validation.
Rules from a dict (.rules()) or a JSON file (.from_file() or config.validation_rules_path).
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from facet.core.config import Config
from facet.core.errors import ValidationConfigError
from facet.core.module import Module
from facet.validation.request_validator import HttpRequestValidator, RuleTable, check_rule_table
from facet.validation.service import ValidationService

if TYPE_CHECKING:
    from facet.core.app import Application


def load_rules(path: str | Path) -> dict[str, Any]:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ValidationConfigError(f"validation rules file {str(path)!r} not found") from None
    except json.JSONDecodeError as e:
        raise ValidationConfigError(f"validation rules file {str(path)!r} is not valid JSON: {e}") from None


class ValidationModule(Module):
    """Validation as object: one ValidationService per app, one HttpRequestValidator per request."""

    def __init__(self) -> None:
        self._rules: RuleTable | None = None
        self._path: str | Path | None = None
        self._service = ValidationService()

    def rules(self, rules: RuleTable) -> ValidationModule:
        self._rules = rules
        return self

    def from_file(self, path: str | Path) -> ValidationModule:
        self._path = path
        return self

    def service(self, service: ValidationService) -> ValidationModule:
        """Use a service with custom rules (add_rule)."""
        self._service = service
        return self

    def register_into(self, app: Application) -> None:
        rules = self._rules
        path = self._path
        if rules is None and path is None and Config in app.container:
            path = app.container.resolve(Config).validation_rules_path
        if rules is None and path is not None:
            rules = load_rules(path)
        check_rule_table(rules or {})
        service = self._service
        app.container.register_instance(ValidationService, service)
        # per request: the validator keeps the errors of the last validate()
        app.container.register(
            HttpRequestValidator, lambda: HttpRequestValidator(service, rules), singleton=False
        )
