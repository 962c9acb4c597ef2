"""
FilesModule: building block for uploads.
Register with app.register(FilesModule()); FileManager is then resolvable from the container.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from facet.core.module import Module
from facet.files.file_manager import FileManager

if TYPE_CHECKING:
    from facet.core.app import Application


class FilesModule(Module):
    """Upload handling as object: .manager(cls) swaps the FileManager implementation."""

    def __init__(self) -> None:
        self._manager_cls: type[FileManager] = FileManager

    def manager(self, cls: type[FileManager]) -> FilesModule:
        self._manager_cls = cls
        return self

    def register_into(self, app: Application) -> None:
        # per request: the manager keeps the file collection of one request
        app.container.register_class(self._manager_cls, singleton=False)
        if self._manager_cls is not FileManager:
            app.container.register(
                FileManager, lambda c=app.container, m=self._manager_cls: c.resolve(m), singleton=False
            )
