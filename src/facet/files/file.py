"""Uploaded file as delivered by the host, and the File the application works with."""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """One multipart upload: original filename, declared content type, content."""
    filename: str
    content_type: str
    data: bytes


@dataclass
class File:
    """File bound to the form field (property) it was uploaded under."""
    property_name: str
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1]
