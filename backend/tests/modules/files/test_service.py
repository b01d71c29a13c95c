"""Tests for the file service."""

import pytest

from modules.collections.exceptions import CollectionNotFoundError
from modules.collections.repository import CollectionRepository
from modules.files.exceptions import FileAccessDeniedError, FileRecordNotFoundError
from modules.files.models import UpdateFileRequest, UploadFileRequest
from modules.files.repository import FileRepository
from modules.files.service import FileService
from modules.users.repository import UserRepository
from shared.config import Settings
from shared.exceptions import UploadLimitError
from shared.models import PaginationOptions


@pytest.fixture
def users() -> UserRepository:
    return UserRepository()


@pytest.fixture
def files() -> FileRepository:
    return FileRepository()


@pytest.fixture
def collections() -> CollectionRepository:
    return CollectionRepository()


@pytest.fixture
def service(files, collections) -> FileService:
    settings = Settings(
        environment="test",
        max_upload_bytes=1000,
        max_metadata_fields=3,
        max_field_name_length=10,
        max_field_value_length=20,
    )
    return FileService(files, collections=collections, settings=settings)


@pytest.fixture
def actor(users):
    return lambda user_id: users.find_by_id(user_id).to_auth_user()


class TestFileService:
    @pytest.mark.asyncio
    async def test_get_all_files(self, service):
        result = await service.get_all_files(PaginationOptions(limit=4))
        assert result.total == 6
        assert len(result.items) == 4

    @pytest.mark.asyncio
    async def test_get_unknown_file(self, service):
        with pytest.raises(FileRecordNotFoundError) as exc_info:
            await service.get_file_by_id("file_999")
        assert exc_info.value.code == "FILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_recent_files_only_own_newest_first(self, service):
        recent = await service.get_recent_files("user_3")
        assert [f.id for f in recent] == ["file_2", "file_3"]

    @pytest.mark.asyncio
    async def test_upload_then_fetch(self, service, actor):
        uploaded = await service.upload_file(
            actor("user_5"), UploadFileRequest(name="notes.txt", type="txt", size=120, tags=["notes"])
        )
        assert uploaded.mime_type == "text/plain"
        assert (await service.get_file_by_id(uploaded.id)) == uploaded

    @pytest.mark.asyncio
    async def test_upload_into_collection_updates_counts(self, service, collections, actor):
        before = collections.find_by_id("product-documentation")
        await service.upload_file(
            actor("user_3"),
            UploadFileRequest(name="datasheet.pdf", type="pdf", size=500, collection_id="product-documentation"),
        )
        after = collections.find_by_id("product-documentation")
        assert after.file_count == before.file_count + 1
        assert after.size == before.size + 500

    @pytest.mark.asyncio
    async def test_upload_into_unknown_collection(self, service, actor):
        with pytest.raises(CollectionNotFoundError):
            await service.upload_file(
                actor("user_5"), UploadFileRequest(name="a.pdf", type="pdf", size=1, collection_id="missing")
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_kwargs,reason",
        [
            ({"size": 5000}, "LIMIT_FILE_SIZE"),
            ({"metadata": {"a": 1, "b": 2, "c": 3, "d": 4}}, "LIMIT_FIELD_COUNT"),
            ({"metadata": {"a-very-long-field-name": 1}}, "LIMIT_FIELD_KEY"),
            ({"metadata": {"note": "x" * 50}}, "LIMIT_FIELD_VALUE"),
        ],
    )
    async def test_upload_limits(self, service, actor, request_kwargs, reason):
        data = {"name": "big.bin", "type": "bin", "size": 10, **request_kwargs}
        with pytest.raises(UploadLimitError) as exc_info:
            await service.upload_file(actor("user_5"), UploadFileRequest(**data))
        assert exc_info.value.reason == reason

    @pytest.mark.asyncio
    async def test_owner_updates_and_metadata_merges(self, service, actor):
        updated = await service.update_file(
            "file_4", actor("user_5"), UpdateFileRequest(name="Q3 Report.xlsx", metadata={"quarter": "Q3"})
        )
        assert updated.name == "Q3 Report.xlsx"
        assert updated.metadata == {"category": "finance", "quarter": "Q3"}

    @pytest.mark.asyncio
    async def test_admin_may_update_any_file(self, service, actor):
        updated = await service.update_file("file_4", actor("user_1"), UpdateFileRequest(tags=["audited"]))
        assert updated.tags == ["audited"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, service, actor):
        with pytest.raises(FileAccessDeniedError):
            await service.update_file("file_4", actor("user_4"), UpdateFileRequest(name="mine now"))

    @pytest.mark.asyncio
    async def test_delete_updates_collection(self, service, collections, actor):
        before = collections.find_by_id("marketing-resources").file_count
        await service.delete_file("file_1", actor("user_2"))
        assert collections.find_by_id("marketing-resources").file_count == before - 1
        with pytest.raises(FileRecordNotFoundError):
            await service.get_file_by_id("file_1")

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, service, actor):
        with pytest.raises(FileAccessDeniedError):
            await service.delete_file("file_1", actor("user_5"))

    @pytest.mark.asyncio
    async def test_preview(self, service):
        preview = await service.get_file_preview("file_5")
        assert preview.file_id == "file_5"
        assert preview.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_history(self, service):
        history = await service.get_file_history("file_1", PaginationOptions())
        assert history.total == 5
        assert [entry.version for entry in history.items] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_history_unknown_file(self, service):
        with pytest.raises(FileRecordNotFoundError):
            await service.get_file_history("file_999", PaginationOptions())
