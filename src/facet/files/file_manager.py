"""FileManager: builds the per-request file collection and stores files on disk."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from facet.core.config import Config
from facet.core.errors import InvalidFileTypeException, NotFoundException
from facet.files.file import File, UploadedFile

logger = logging.getLogger(__name__)


class FileManager:
    """
    Collection of uploaded files keyed by form field name.
    Relative directories passed to save_to_file_system() are resolved under config.upload_dir.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._files: dict[str, File] = {}

    def build_files_from_source(
        self, source: Mapping[str, UploadedFile], changed_name: str | None = None
    ) -> None:
        """Rebuild the collection. changed_name renames every file, keeping its extension."""
        self._files = {}
        for property_name, upload in source.items():
            name = os.path.basename(upload.filename)
            if changed_name:
                name = changed_name + os.path.splitext(name)[1]
            self._files[property_name] = File(
                property_name=property_name,
                name=name,
                content_type=upload.content_type,
                data=upload.data,
            )
        logger.debug("built %d file(s) from upload source", len(self._files))

    def get_by_name(self, property_name: str) -> File:
        if property_name not in self._files:
            raise NotFoundException(f"file {property_name!r} not found")
        return self._files[property_name]

    def save_to_file_system(self, directory: str | os.PathLike[str], file: File) -> bool:
        """Write file into directory. Directory must exist; content type must be allowed."""
        target_dir = Path(directory)
        if not target_dir.is_absolute():
            target_dir = Path(self._config.upload_dir) / target_dir
        if not target_dir.is_dir():
            raise NotFoundException(f"directory {str(target_dir)!r} not found")

        allowed = self._config.allowed_file_types
        if allowed and file.content_type.lower() not in allowed:
            logger.warning("rejected upload %r with type %s", file.name, file.content_type)
            raise InvalidFileTypeException(file.content_type)

        (target_dir / os.path.basename(file.name)).write_bytes(file.data)
        return True
