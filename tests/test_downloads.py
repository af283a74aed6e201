"""Downloads: upload, publication, redirect and two-step deletion."""

import io

import pytest

from inkwell.core.config import StorageSettings
from inkwell.core.container import ApplicationContainer
from inkwell.core.errors import InvalidInputError, StorageUnavailableError
from inkwell.infrastructure.database.repositories.download_repository import SqlDownloadRepository
from inkwell.infrastructure.storage import BlobMetadata, LocalBlobStore
from inkwell.main import create_app

FILE = ("report.pdf", b"%PDF-1.4 not really a pdf", "application/pdf")
FORM = {"filename": "Annual report", "image_path": "thumbs/report.png"}


class BytesStream:
    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


class UndeletableBlobStore(LocalBlobStore):
    async def delete(self, object_id: str) -> None:
        raise StorageUnavailableError("Blob backend is down")


async def _upload(client, member, form=FORM, file=FILE):
    return await client.post("/api/unduhan/upload", data=form, files={"file": file}, headers=member.headers)


@pytest.fixture
async def pending(client, user):
    response = await _upload(client, user)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def published(client, admin):
    response = await _upload(client, admin, form={"filename": "Syllabus", "image_path": "thumbs/s.png"})
    assert response.status_code == 201, response.text
    return response.json()


def _blob_files(settings):
    return sorted(path.name for path in settings.storage.blob_dir.iterdir())


class TestUpload:
    async def test_admin_upload_is_published(self, published):
        assert published["is_published"] is True
        assert published["filename"] == "report.pdf"
        assert published["title"] == "Syllabus"
        assert published["mime_type"] == "application/pdf"
        assert published["size_bytes"] == len(FILE[1])
        assert published["file_url"].startswith("/blobs/")
        assert "object_id" not in published

    async def test_user_upload_waits_for_review(self, pending, user):
        assert pending["is_published"] is False
        assert pending["uploaded_by"] == user.id

    async def test_requires_authentication(self, client):
        client.cookies.clear()
        response = await client.post("/api/unduhan/upload", data=FORM, files={"file": FILE})
        assert response.status_code == 401

    async def test_form_fields_are_required(self, client, user, settings):
        response = await _upload(client, user, form={"filename": "No thumbnail"})
        assert response.status_code == 400
        assert _blob_files(settings) == []

    async def test_empty_file_is_rejected(self, client, user, settings):
        response = await _upload(client, user, file=("empty.txt", b"", "text/plain"))
        assert response.status_code == 400
        assert _blob_files(settings) == []


class TestListing:
    async def test_published_list_is_public(self, client, pending, published):
        client.cookies.clear()
        response = await client.get("/api/unduhan/published")
        assert response.status_code == 200
        entries = response.json()
        assert [entry["id"] for entry in entries] == [published["id"]]
        assert "object_id" not in entries[0]

    async def test_full_list_is_admin_only(self, client, pending, published, user, admin):
        assert (await client.get("/api/unduhan/", headers=user.headers)).status_code == 403

        response = await client.get("/api/unduhan/", headers=admin.headers)
        entries = response.json()
        assert {entry["id"] for entry in entries} == {pending["id"], published["id"]}
        assert all(entry["object_id"] for entry in entries)

    async def test_force_publish(self, client, pending, user, admin):
        response = await client.patch(f"/api/unduhan/{pending['id']}/publish", headers=user.headers)
        assert response.status_code == 403

        response = await client.patch(f"/api/unduhan/{pending['id']}/publish", headers=admin.headers)
        assert response.status_code == 200
        assert response.json()["is_published"] is True
        published_ids = [entry["id"] for entry in (await client.get("/api/unduhan/published")).json()]
        assert pending["id"] in published_ids

    async def test_publish_missing(self, client, admin):
        response = await client.patch("/api/unduhan/missing/publish", headers=admin.headers)
        assert response.status_code == 404


class TestRedirect:
    async def test_published_entry_redirects_anyone(self, client, published):
        client.cookies.clear()
        response = await client.get(f"/api/unduhan/download/{published['id']}")
        assert response.status_code == 307
        assert response.headers["location"] == published["file_url"]

        blob = await client.get(published["file_url"])
        assert blob.status_code == 200
        assert blob.content == FILE[1]

    async def test_pending_entry_visibility(self, client, pending, user, admin, make_member):
        client.cookies.clear()
        url = f"/api/unduhan/download/{pending['id']}"
        assert (await client.get(url)).status_code == 404

        stranger = await make_member(username="stranger")
        assert (await client.get(url, headers=stranger.headers)).status_code == 404
        assert (await client.get(url, headers=user.headers)).status_code == 307
        assert (await client.get(url, headers=admin.headers)).status_code == 307

    async def test_stale_token_does_not_block_public_download(self, client, published):
        response = await client.get(
            f"/api/unduhan/download/{published['id']}",
            headers={"Authorization": "Bearer expired-or-garbage"},
        )
        assert response.status_code == 307


class TestDelete:
    async def test_uploader_deletes_blob_and_record(self, client, pending, user, settings):
        assert len(_blob_files(settings)) == 1
        response = await client.delete(f"/api/unduhan/{pending['id']}", headers=user.headers)
        assert response.status_code == 200
        assert _blob_files(settings) == []
        assert (await client.get(f"/api/unduhan/download/{pending['id']}", headers=user.headers)).status_code == 404

    async def test_stranger_cannot_delete(self, client, pending, make_member, settings):
        stranger = await make_member(username="stranger")
        response = await client.delete(f"/api/unduhan/{pending['id']}", headers=stranger.headers)
        assert response.status_code == 403
        assert len(_blob_files(settings)) == 1

    async def test_admin_deletes_any(self, client, pending, admin):
        response = await client.delete(f"/api/unduhan/{pending['id']}", headers=admin.headers)
        assert response.status_code == 200

    async def test_blob_failure_keeps_record(self, client, container, settings, published, admin):
        container.blob_store = UndeletableBlobStore.from_settings(settings)

        response = await client.delete(f"/api/unduhan/{published['id']}", headers=admin.headers)
        assert response.status_code == 503
        assert response.json()["kind"] == "storage_unavailable"
        assert (await client.get(f"/api/unduhan/download/{published['id']}")).status_code == 307

    async def test_record_failure_after_blob_removal_is_reported(
        self, client, settings, published, admin, monkeypatch
    ):
        async def broken_delete(self, download_id):
            raise StorageUnavailableError()

        monkeypatch.setattr(SqlDownloadRepository, "delete_download", broken_delete)

        response = await client.delete(f"/api/unduhan/{published['id']}", headers=admin.headers)
        assert response.status_code == 500
        assert response.json()["kind"] == "partial_failure"
        assert _blob_files(settings) == []


class TestLocalBlobStore:
    async def test_upload_and_delete(self, tmp_path):
        store = LocalBlobStore(tmp_path / "objects", "/files/")
        stored = await store.upload(BytesStream(b"hello"), BlobMetadata(filename="../../etc/Notes.TXT"))
        assert stored.object_id.endswith(".txt")
        assert stored.url == f"/files/{stored.object_id}"
        assert (tmp_path / "objects" / stored.object_id).read_bytes() == b"hello"

        await store.delete(stored.object_id)
        assert not (tmp_path / "objects" / stored.object_id).exists()

    async def test_size_limit(self, tmp_path):
        store = LocalBlobStore(tmp_path, "/files", max_bytes=4)
        with pytest.raises(InvalidInputError):
            await store.upload(BytesStream(b"too large"), BlobMetadata(filename="a.bin"))
        assert list(tmp_path.iterdir()) == []

    async def test_delete_rejects_paths_outside_root(self, tmp_path):
        store = LocalBlobStore(tmp_path / "objects", "/files")
        with pytest.raises(InvalidInputError):
            await store.delete("../escape.txt")


class TestBlobMount:
    def _blob_mounts(self, settings):
        app = create_app(container=ApplicationContainer(settings=settings))
        return [route.path for route in app.routes if getattr(route, "name", None) == "blobs"]

    def test_relative_base_url_is_served_locally(self, settings):
        assert self._blob_mounts(settings) == ["/blobs"]

    def test_absolute_base_url_is_not_mounted(self, settings):
        settings.storage = StorageSettings(
            blob_dir=settings.storage.blob_dir, blob_base_url="https://cdn.example.com/blobs"
        )
        assert settings.storage.served_path is None
        assert self._blob_mounts(settings) == []

    def test_explicit_mount_path_with_external_base_url(self, settings):
        settings.storage = StorageSettings(
            blob_dir=settings.storage.blob_dir,
            blob_base_url="https://cdn.example.com/files",
            blob_mount_path="/files",
        )
        assert self._blob_mounts(settings) == ["/files"]
