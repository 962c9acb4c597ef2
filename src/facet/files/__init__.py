from facet.files.file import File, UploadedFile
from facet.files.file_manager import FileManager
from facet.files.files_module import FilesModule

__all__ = ["File", "UploadedFile", "FileManager", "FilesModule"]
