"""Files: tests for FileManager and the facade's file operations."""

import pytest

from facet.core.config import Config
from facet.core.errors import InvalidFileTypeException, NotFoundException
from facet.files.file import File, UploadedFile
from facet.files.file_manager import FileManager

UPLOADS = {
    "avatar": UploadedFile("me.png", "image/png", b"png-bytes"),
    "resume": UploadedFile("../cv.pdf", "application/pdf", b"pdf-bytes"),
}


def test_build_and_get_by_name(config):
    manager = FileManager(config)
    manager.build_files_from_source(UPLOADS)
    avatar = manager.get_by_name("avatar")
    assert avatar.name == "me.png"
    assert avatar.size == 9
    assert avatar.extension == ".png"
    assert manager.get_by_name("resume").name == "cv.pdf"


def test_rename_keeps_extension(config):
    manager = FileManager(config)
    manager.build_files_from_source(UPLOADS, "user-42")
    assert manager.get_by_name("avatar").name == "user-42.png"
    assert manager.get_by_name("resume").name == "user-42.pdf"


def test_get_by_name_missing(config):
    manager = FileManager(config)
    manager.build_files_from_source({})
    with pytest.raises(NotFoundException):
        manager.get_by_name("avatar")


def test_save_relative_directory_under_upload_dir(tmp_path, config):
    (tmp_path / "avatars").mkdir()
    manager = FileManager(config)
    file = File("avatar", "me.png", "image/png", b"png-bytes")
    assert manager.save_to_file_system("avatars", file)
    assert (tmp_path / "avatars" / "me.png").read_bytes() == b"png-bytes"


def test_save_missing_directory(tmp_path, config):
    manager = FileManager(config)
    with pytest.raises(NotFoundException):
        manager.save_to_file_system(tmp_path / "nope", File("a", "a.png", "image/png", b""))


def test_save_rejects_disallowed_type(tmp_path):
    manager = FileManager(Config(upload_dir=str(tmp_path), allowed_file_types="image/png, image/jpeg"))
    with pytest.raises(InvalidFileTypeException) as exc:
        manager.save_to_file_system(tmp_path, File("doc", "cv.pdf", "application/pdf", b"x"))
    assert exc.value.http_status == 415
    assert not (tmp_path / "cv.pdf").exists()


def test_request_file_roundtrip(make_request, tmp_path):
    request = make_request("POST", files=UPLOADS)
    file = request.get_file_by_property_name("avatar", "renamed")
    assert file.name == "renamed.png"
    assert request.move_file_to_directory(tmp_path, file)
    assert (tmp_path / "renamed.png").read_bytes() == b"png-bytes"


def test_request_missing_file(make_request):
    with pytest.raises(NotFoundException):
        make_request("POST").get_file_by_property_name("avatar")


def test_request_propagates_invalid_file_type(tmp_path):
    from facet.core.context import RequestContext
    from facet.core.request import HttpRequest
    from facet.validation.request_validator import HttpRequestValidator
    from facet.validation.service import ValidationService

    config = Config(upload_dir=str(tmp_path), allowed_file_types=["image/png"])
    request = HttpRequest(
        RequestContext(method="POST", files=UPLOADS),
        FileManager(config),
        HttpRequestValidator(ValidationService()),
    )
    with pytest.raises(InvalidFileTypeException):
        request.move_file_to_directory(tmp_path, request.get_file_by_property_name("resume"))
