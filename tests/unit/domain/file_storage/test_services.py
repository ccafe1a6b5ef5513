"""
Unit tests for the FileManager domain service.
"""

import pytest

from file_hosting.domain.errors import (
    FileAccessDeniedError,
    FileAlreadyDeletedError,
    FileAlreadyUploadedError,
    FileNotDownloadableError,
    FileNotFoundError,
    FileSizeExceededError,
    InvalidFileLocationError,
)
from file_hosting.domain.events import (
    FileDeletedEvent,
    FilePurgedEvent,
    FileRegisteredEvent,
    FileUploadedEvent,
)
from file_hosting.domain.file_storage import FileStatus
from tests.fixtures import create_file


def register(file_manager, **overrides):
    values = {
        "file_name": "photo.jpg",
        "file_size": 2048,
        "mime_type": "image/jpeg",
        "owner_id": "user-123",
        "container": "my-bucket",
    }
    values.update(overrides)
    return file_manager.register_file(**values)


class TestBuildLocation:
    def test_layout_with_explicit_key(self, file_manager):
        location = file_manager.build_location("bucket", "user-1", "a.pdf", object_key="k1")
        assert location.get_full_path() == "bucket/uploads/user-1/k1/a.pdf"

    def test_generates_distinct_keys(self, file_manager):
        first = file_manager.build_location("bucket", "user-1", "a.pdf")
        second = file_manager.build_location("bucket", "user-1", "a.pdf")
        assert first != second

    def test_rejects_owner_ids_that_escape_the_prefix(self, file_manager):
        with pytest.raises(InvalidFileLocationError):
            file_manager.build_location("bucket", "..", "a.pdf")


class TestRegisterFile:
    def test_registers_pending_file_and_saves_it(self, file_manager, mock_file_repository):
        file, event = register(file_manager)

        assert file.status is FileStatus.PENDING
        assert file.location.container == "my-bucket"
        assert file.location.path.startswith("uploads/user-123/")
        assert file.location.path.endswith("/photo.jpg")
        assert isinstance(event, FileRegisteredEvent)
        assert event.aggregate_id == file.id
        assert mock_file_repository.get_record(file.id)["status"] == "PENDING"

    def test_invalid_metadata_is_not_saved(self, file_manager, mock_file_repository):
        with pytest.raises(FileSizeExceededError):
            register(file_manager, file_size=0)

        assert "save" not in mock_file_repository.called_methods()

    def test_invalid_container_is_not_saved(self, file_manager, mock_file_repository):
        with pytest.raises(InvalidFileLocationError):
            register(file_manager, container=" ")

        assert "save" not in mock_file_repository.called_methods()


class TestLookup:
    def test_get_file_raises_when_missing(self, file_manager):
        with pytest.raises(FileNotFoundError) as exc_info:
            file_manager.get_file("missing")
        assert exc_info.value.file_id == "missing"

    def test_get_owned_file_checks_owner(self, file_manager):
        file, _ = register(file_manager)

        assert file_manager.get_owned_file(file.id, "user-123") == file
        with pytest.raises(FileAccessDeniedError) as exc_info:
            file_manager.get_owned_file(file.id, "intruder")
        assert exc_info.value.requester_id == "intruder"


class TestTransitions:
    def test_confirm_upload_persists_new_status(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)

        updated, event = file_manager.confirm_upload(file.id)

        assert updated.status is FileStatus.UPLOADED
        assert isinstance(event, FileUploadedEvent)
        assert mock_file_repository.get_record(file.id)["status"] == "UPLOADED"

    def test_confirm_upload_twice_fails(self, file_manager):
        file, _ = register(file_manager)
        file_manager.confirm_upload(file.id)

        with pytest.raises(FileAlreadyUploadedError):
            file_manager.confirm_upload(file.id)

    def test_confirm_upload_checks_owner_when_given(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)

        with pytest.raises(FileAccessDeniedError):
            file_manager.confirm_upload(file.id, owner_id="intruder")
        assert mock_file_repository.get_record(file.id)["status"] == "PENDING"

    def test_soft_delete_keeps_record(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)

        deleted, event = file_manager.soft_delete(file.id)

        assert deleted.status is FileStatus.DELETED
        assert isinstance(event, FileDeletedEvent)
        assert mock_file_repository.get_record(file.id)["status"] == "DELETED"

    def test_failed_transition_does_not_save(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)
        file_manager.soft_delete(file.id)
        mock_file_repository.clear_call_history()

        with pytest.raises(FileAlreadyDeletedError):
            file_manager.confirm_upload(file.id)

        assert mock_file_repository.called_methods() == ["find_by_id"]

    def test_missing_file_transition_raises_not_found(self, file_manager):
        with pytest.raises(FileNotFoundError):
            file_manager.soft_delete("missing")


class TestPurge:
    def test_purge_removes_record(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)

        event = file_manager.purge(file.id)

        assert isinstance(event, FilePurgedEvent)
        assert mock_file_repository.get_record(file.id) is None

    def test_purge_unknown_file_is_noop(self, file_manager, mock_file_repository):
        assert file_manager.purge("missing") is None
        assert "delete" not in mock_file_repository.called_methods()

    def test_purge_checks_owner(self, file_manager, mock_file_repository):
        file, _ = register(file_manager)

        with pytest.raises(FileAccessDeniedError):
            file_manager.purge(file.id, owner_id="intruder")
        assert mock_file_repository.get_record(file.id) is not None


class TestListing:
    def test_list_files_hides_deleted_by_default(self, file_manager, mock_file_repository):
        kept = create_file(FileStatus.UPLOADED)
        deleted = create_file(FileStatus.DELETED)
        other_owner = create_file(owner_id="user-456")
        for f in (kept, deleted, other_owner):
            mock_file_repository.save(f)

        assert file_manager.list_files("user-123") == [kept]
        assert set(file_manager.list_files("user-123", include_deleted=True)) == {kept, deleted}

    def test_list_files_for_unknown_owner_is_empty(self, file_manager):
        assert file_manager.list_files("nobody") == []


class TestDownloadable:
    def test_uploaded_file_is_downloadable(self, file_manager):
        file, _ = register(file_manager)
        file_manager.confirm_upload(file.id)

        assert file_manager.get_downloadable_file(file.id, "user-123") == file

    @pytest.mark.parametrize("delete_first", [False, True])
    def test_not_uploaded_file_is_rejected(self, file_manager, delete_first):
        file, _ = register(file_manager)
        if delete_first:
            file_manager.soft_delete(file.id)

        with pytest.raises(FileNotDownloadableError) as exc_info:
            file_manager.get_downloadable_file(file.id, "user-123")
        assert exc_info.value.status == ("DELETED" if delete_first else "PENDING")
