"""Unit tests for the filesystem adapters."""

from pathlib import Path

import pytest

from review_queue.config import VaultSettings
from review_queue.errors import DocumentNotFoundError, StorageIOError
from review_queue.infra.filesystem import FileDocumentStorage, FileLinkResolver


class TestFileDocumentStorage:
    """Tests for FileDocumentStorage."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path)

        await storage.write("IW-Queues/IW-Queue.md", "queue text")

        assert (tmp_path / "IW-Queues" / "IW-Queue.md").read_text() == "queue text"
        assert await storage.read("IW-Queues/IW-Queue.md") == "queue text"
        assert not (tmp_path / "IW-Queues" / "IW-Queue.md.tmp").exists()

    @pytest.mark.asyncio
    async def test_overwrite(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path)
        await storage.write("q.md", "old")
        await storage.write("q.md", "new")
        assert await storage.read("q.md") == "new"

    @pytest.mark.asyncio
    async def test_exists(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path)
        assert not await storage.exists("q.md")
        (tmp_path / "q.md").write_text("x")
        assert await storage.exists("q.md")

    @pytest.mark.asyncio
    async def test_read_missing(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path)
        with pytest.raises(DocumentNotFoundError) as exc_info:
            await storage.read("missing.md")
        assert exc_info.value.queue_id == "missing.md"

    @pytest.mark.asyncio
    async def test_read_directory_fails(self, tmp_path: Path) -> None:
        (tmp_path / "folder.md").mkdir()
        storage = FileDocumentStorage(tmp_path)
        with pytest.raises(StorageIOError):
            await storage.read("folder.md")

    @pytest.mark.asyncio
    async def test_unencodable_text(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path, encoding="ascii")

        with pytest.raises(StorageIOError):
            await storage.write("q.md", "Week \u00fc")

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_undecodable_text(self, tmp_path: Path) -> None:
        (tmp_path / "q.md").write_bytes(b"\xff\xfe broken")
        storage = FileDocumentStorage(tmp_path)
        with pytest.raises(StorageIOError):
            await storage.read("q.md")

    def test_path_outside_root_rejected(self, tmp_path: Path) -> None:
        storage = FileDocumentStorage(tmp_path / "vault")
        with pytest.raises(StorageIOError, match="escapes vault root"):
            storage.path_for("../outside.md")

    @pytest.mark.asyncio
    async def test_from_config(self, tmp_path: Path) -> None:
        storage = await FileDocumentStorage.from_config(VaultSettings(root=tmp_path))
        assert storage.root == tmp_path

    @pytest.mark.asyncio
    async def test_from_dict(self, tmp_path: Path) -> None:
        storage = await FileDocumentStorage.from_dict({"root": str(tmp_path)})
        assert storage.root == tmp_path


class TestFileLinkResolver:
    """Tests for FileLinkResolver."""

    @pytest.fixture
    def vault(self, tmp_path: Path) -> Path:
        (tmp_path / "IW-Queues").mkdir()
        (tmp_path / "Reading").mkdir()
        (tmp_path / "Reading" / "Paper.md").write_text("# Paper")
        (tmp_path / "IW-Queues" / "Local.md").write_text("# Local")
        (tmp_path / "diagram.png").write_bytes(b"")
        return tmp_path

    def test_link_relative_to_root(self, vault: Path) -> None:
        resolver = FileLinkResolver(vault)
        assert resolver.is_live("Reading/Paper", "IW-Queues/IW-Queue.md")

    def test_link_relative_to_source(self, vault: Path) -> None:
        resolver = FileLinkResolver(vault)
        assert resolver.is_live("Local", "IW-Queues/IW-Queue.md")
        assert not resolver.is_live("Local", "Other/Queue.md")

    def test_anchor_and_extension(self, vault: Path) -> None:
        resolver = FileLinkResolver(vault)
        assert resolver.is_live("[[Reading/Paper#Methods]]", "IW-Queues/IW-Queue.md")
        assert resolver.is_live("Reading/Paper.md", "IW-Queues/IW-Queue.md")
        assert resolver.is_live("diagram.png", "IW-Queues/IW-Queue.md")

    def test_dead_links(self, vault: Path) -> None:
        resolver = FileLinkResolver(vault)
        assert not resolver.is_live("Reading/Missing", "IW-Queues/IW-Queue.md")
        assert not resolver.is_live("", "IW-Queues/IW-Queue.md")
        assert not resolver.is_live("Reading", "IW-Queues/IW-Queue.md")
