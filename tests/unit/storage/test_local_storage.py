"""Unit tests for LocalStorage."""

from __future__ import annotations

import errno
from datetime import date

import aiofiles.os
import pytest

from svc_uploads.exceptions import FileTooLarge, InternalFailure, InvalidParameter, NotFound
from svc_uploads.storage.local import LocalStorage
from svc_uploads.storage.paths import TenantKey
from tests.helpers import stored_files

TENANT = TenantKey(company_name="acme", entity="products", entity_id="42")
TODAY = date(2024, 3, 7)


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


@pytest.mark.storage
@pytest.mark.asyncio
class TestLocalStorage:
    @pytest.fixture
    def storage(self, tmp_path):
        return LocalStorage(tmp_path / "uploads")

    async def test_save_writes_under_tenant_directory(self, storage):
        stored = await storage.save(TENANT, "logo.png", _chunks(b"abc", b"def"), today=TODAY, max_bytes=100)

        assert stored.path.parent == storage.root / "acme" / "products" / "42" / "2024" / "03"
        assert stored.path.read_bytes() == b"abcdef"
        assert stored.size == 6
        assert stored.name.endswith(".png")
        assert stored.url == f"/uploads/acme/products/42/2024/03/{stored.name}"

    async def test_save_twice_gives_distinct_files(self, storage):
        first = await storage.save(TENANT, "a.png", _chunks(b"1"), today=TODAY, max_bytes=100)
        second = await storage.save(TENANT, "a.png", _chunks(b"2"), today=TODAY, max_bytes=100)

        assert first.name != second.name
        assert first.path.parent == second.path.parent
        assert len(stored_files(storage.root)) == 2

    async def test_save_over_limit_leaves_no_file(self, storage):
        with pytest.raises(FileTooLarge):
            await storage.save(TENANT, "big.png", _chunks(b"x" * 6, b"x" * 6), today=TODAY, max_bytes=10)
        assert stored_files(storage.root) == []

    async def test_open_file_returns_existing_file(self, storage):
        stored = await storage.save(TENANT, "logo.png", _chunks(b"data"), today=TODAY, max_bytes=100)
        relative = stored.url.removeprefix("/uploads/")

        path = await storage.open_file(relative)
        assert path == stored.path.resolve()

    async def test_open_file_missing(self, storage):
        with pytest.raises(NotFound):
            await storage.open_file("acme/nothing/here.png")

    async def test_open_file_directory_is_not_found(self, storage):
        await storage.save(TENANT, "logo.png", _chunks(b"data"), today=TODAY, max_bytes=100)
        with pytest.raises(NotFound):
            await storage.open_file("acme/products")

    async def test_open_file_outside_root_is_not_found(self, storage, tmp_path):
        secret = tmp_path / "secret.txt"
        secret.write_text("top secret")
        storage.root.mkdir(parents=True)

        with pytest.raises(NotFound):
            await storage.open_file("../secret.txt")

    async def test_open_file_io_error_is_internal(self, storage, monkeypatch):
        async def _denied(path, *args, **kwargs):
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

        monkeypatch.setattr(aiofiles.os, "stat", _denied)
        with pytest.raises(InternalFailure):
            await storage.open_file("acme/products/42/2024/03/x.png")

    async def test_iter_files_names_relative_to_root(self, storage):
        a = await storage.save(TENANT, "a.png", _chunks(b"a"), today=TODAY, max_bytes=100)
        b = await storage.save(
            TenantKey("other", "users", "7"), "b.pdf", _chunks(b"b"), today=TODAY, max_bytes=100
        )

        names = {name for _, name in storage.iter_files()}
        assert names == {
            a.url.removeprefix("/uploads/"),
            b.url.removeprefix("/uploads/"),
        }

    async def test_iter_files_missing_root(self, storage):
        assert list(storage.iter_files()) == []

    async def test_save_refuses_directory_outside_root(self, storage, tmp_path):
        escaping = TenantKey(company_name="..", entity="..", entity_id="x")

        with pytest.raises(InvalidParameter):
            await storage.save(escaping, "logo.png", _chunks(b"data"), today=TODAY, max_bytes=100)
        assert stored_files(tmp_path) == []

    async def test_open_file_with_nul_byte_is_not_found(self, storage):
        storage.root.mkdir(parents=True)
        with pytest.raises(NotFound):
            await storage.open_file("a\x00b")
