"""HttpRequestValidator: per (controller, method) field and header rules."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from facet.core.errors import ValidationConfigError
from facet.validation.service import ValidationService

logger = logging.getLogger(__name__)

# controller -> method -> {"fields": {name: rules}, "headers": {name: rules}}
RuleTable = Mapping[str, Mapping[str, Mapping[str, Mapping[str, str]]]]


def check_rule_table(rules: Any) -> None:
    """Raise ValidationConfigError unless rules has the RuleTable shape."""
    if not isinstance(rules, Mapping):
        raise ValidationConfigError("validation rules must be a mapping of controllers")
    for controller, methods in rules.items():
        if not isinstance(methods, Mapping):
            raise ValidationConfigError(f"rules for {controller!r} must be a mapping of methods")
        for method, sections in methods.items():
            if not isinstance(sections, Mapping):
                raise ValidationConfigError(f"rules for {controller}.{method} must be a mapping")
            for section, entries in sections.items():
                if section not in ("fields", "headers"):
                    raise ValidationConfigError(f"unknown section {section!r} in {controller}.{method}")
                if not isinstance(entries, Mapping) or not all(isinstance(r, str) for r in entries.values()):
                    raise ValidationConfigError(f"{controller}.{method}.{section} must map names to rule strings")


class HttpRequestValidator:
    """
    Looks up the rules of the calling controller method and applies them.
    No rules registered for the pair: the request is valid.
    """

    def __init__(self, service: ValidationService, rules: RuleTable | None = None) -> None:
        rules = rules or {}
        check_rule_table(rules)
        self._service = service
        self._rules = rules
        self.errors: dict[str, str] = {}

    def validate(
        self,
        controller: str,
        method: str,
        fields: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> bool:
        self.errors = {}
        entry = self._rules.get(controller, {}).get(method)
        if entry is None:
            return True

        for name, rules in entry.get("fields", {}).items():
            if not self._service.is_valid(fields.get(name), rules):
                self.errors[name] = rules

        lowered = {k.lower(): v for k, v in headers.items()}
        for name, rules in entry.get("headers", {}).items():
            if not self._service.is_valid(lowered.get(name.lower()), rules):
                self.errors[f"header:{name}"] = rules

        if self.errors:
            logger.warning(
                "validation failed for %s.%s: %s",
                controller,
                method,
                ", ".join(self.errors),
                extra={"controller": controller, "method": method},
            )
            return False
        return True
