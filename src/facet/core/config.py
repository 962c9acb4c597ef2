"""Single config object: user passes it when creating the app; available via DI."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any


def _split_csv(value: str | list[str] | tuple[str, ...]) -> list[str]:
    if isinstance(value, str):
        return [part.strip().lower() for part in value.split(",") if part.strip()]
    return [str(part).lower() for part in value]


@dataclass
class Config:
    """
    Application config. Create directly or via Config.from_env()
    and pass to Application(config=...); then available via container.resolve(Config).
    """

    upload_dir: str = "uploads"
    allowed_file_types: list[str] = field(default_factory=list)  # empty: any type
    validation_rules_path: str | None = None
    log_level: str | None = None
    log_format: str = "text"

    def __post_init__(self) -> None:
        self.allowed_file_types = _split_csv(self.allowed_file_types)

    @classmethod
    def load_from_env(cls, prefix: str = "FACET_", **defaults: Any) -> dict[str, Any]:
        """Load from os.environ with prefix and defaults. Returns dict for Config(**Config.load_from_env())."""
        result = dict(defaults)
        known = set(cls.__dataclass_fields__)
        for key, value in os.environ.items():
            if key.startswith(prefix):
                name = key[len(prefix):].lower()
                if name in known:
                    result[name] = value
        return result

    @classmethod
    def from_env(cls, prefix: str = "FACET_", **defaults: Any) -> Config:
        """FACET_UPLOAD_DIR=/srv/up FACET_ALLOWED_FILE_TYPES=image/png,image/jpeg -> Config(...)."""
        return cls(**cls.load_from_env(prefix, **defaults))
