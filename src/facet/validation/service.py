"""ValidationService: pipe-separated rule strings applied to a single value."""
from __future__ import annotations

import re
from typing import Any, Callable

from facet.core.errors import ValidationConfigError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _length(value: Any) -> int:
    return len(value) if isinstance(value, (str, bytes, list, tuple, dict)) else len(str(value))


def _as_number(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class ValidationService:
    """
    Rules: required, email, numeric, alpha, min:N, max:N (length), joined with '|'.
    Every rule except required passes for an empty value.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Callable[[Any, str | None], bool]] = {
            "required": lambda v, _: not _is_empty(v),
            "email": lambda v, _: bool(_EMAIL_RE.match(str(v))),
            "numeric": lambda v, _: _as_number(v) is not None,
            "alpha": lambda v, _: str(v).isalpha(),
            "min": lambda v, arg: _length(v) >= int(arg or 0),
            "max": lambda v, arg: _length(v) <= int(arg or 0),
        }

    def add_rule(self, name: str, check: Callable[[Any, str | None], bool]) -> None:
        """Register a custom rule: check(value, argument) -> bool."""
        self._rules[name] = check

    def is_valid(self, value: Any, rules: str) -> bool:
        for rule in filter(None, (r.strip() for r in rules.split("|"))):
            name, _, arg = rule.partition(":")
            if name not in self._rules:
                raise ValidationConfigError(f"unknown validation rule {name!r}")
            if name != "required" and _is_empty(value):
                continue
            if not self._rules[name](value, arg or None):
                return False
        return True
