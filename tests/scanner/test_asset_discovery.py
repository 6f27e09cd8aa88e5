"""Tests for file discovery."""

from pathlib import Path

import pytest
from PIL import Image

from livephoto_repair.scanner.discovery import discover_assets, is_hidden, should_scan_file

# Minimal QuickTime header: 20-byte ftyp box with major brand "qt  "
MOV_BYTES = b"\x00\x00\x00\x14ftypqt  \x00\x00\x00\x00qt  " + b"\x00" * 16


def write_jpeg(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (8, 8), color="red").save(path, "JPEG")
    return path


def write_mov(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(MOV_BYTES)
    return path


class TestDiscoverAssets:
    """Tests for discover_assets."""

    def test_splits_images_and_videos(self, tmp_path):
        """Images and videos are separated by content."""
        write_jpeg(tmp_path / "IMG_0001.jpg")
        write_mov(tmp_path / "IMG_0001.mov")
        (tmp_path / "notes.txt").write_text("hello")

        result = discover_assets(tmp_path)

        assert result.images == [tmp_path / "IMG_0001.jpg"]
        assert result.videos == [tmp_path / "IMG_0001.mov"]
        assert result.skipped == [tmp_path / "notes.txt"]
        assert result.total_files == 3

    def test_recursive_and_sorted(self, tmp_path):
        """Subfolders are walked and results are sorted by path."""
        write_jpeg(tmp_path / "b" / "IMG_0002.jpg")
        write_jpeg(tmp_path / "a" / "IMG_0009.jpg")
        write_jpeg(tmp_path / "a" / "IMG_0001.jpg")

        result = discover_assets(tmp_path)

        assert result.images == [
            tmp_path / "a" / "IMG_0001.jpg",
            tmp_path / "a" / "IMG_0009.jpg",
            tmp_path / "b" / "IMG_0002.jpg",
        ]

    def test_hidden_files_and_folders_skipped(self, tmp_path):
        """Dot files and anything inside dot folders are skipped."""
        write_jpeg(tmp_path / ".hidden.jpg")
        write_jpeg(tmp_path / ".thumbnails" / "IMG_0001.jpg")
        write_jpeg(tmp_path / "IMG_0001.jpg")

        result = discover_assets(tmp_path)

        assert result.images == [tmp_path / "IMG_0001.jpg"]
        assert len(result.skipped) == 2

    def test_system_and_temp_files_skipped(self, tmp_path):
        """Thumbs.db and temporary files are never sniffed."""
        (tmp_path / "Thumbs.db").write_bytes(b"\x00" * 32)
        write_jpeg(tmp_path / "IMG_0001.jpg.tmp")

        result = discover_assets(tmp_path)

        assert result.images == []
        assert sorted(p.name for p in result.skipped) == ["IMG_0001.jpg.tmp", "Thumbs.db"]

    def test_extension_fallback_for_unknown_content(self, tmp_path):
        """Unrecognised bytes with a media extension are classified by extension."""
        (tmp_path / "IMG_0001.HEIC").write_bytes(b"not really a heic")
        (tmp_path / "IMG_0001.MP4").write_bytes(b"not really an mp4")

        result = discover_assets(tmp_path)

        assert result.images == [tmp_path / "IMG_0001.HEIC"]
        assert result.videos == [tmp_path / "IMG_0001.MP4"]

    def test_content_wins_over_extension(self, tmp_path):
        """A JPEG named .mov is an image."""
        write_jpeg(tmp_path / "IMG_0001.mov")

        result = discover_assets(tmp_path)

        assert result.images == [tmp_path / "IMG_0001.mov"]
        assert result.videos == []

    def test_empty_directory(self, tmp_path):
        """An empty tree gives empty lists."""
        result = discover_assets(tmp_path)
        assert result.total_files == 0

    def test_not_a_directory(self, tmp_path):
        """A missing root raises."""
        with pytest.raises(NotADirectoryError):
            discover_assets(tmp_path / "missing")


class TestFilters:
    """Tests for is_hidden and should_scan_file."""

    def test_is_hidden(self, tmp_path):
        """Dot-prefixed components below the root are hidden."""
        assert is_hidden(tmp_path / ".a" / "b.jpg", tmp_path)
        assert is_hidden(tmp_path / ".b.jpg", tmp_path)
        assert not is_hidden(tmp_path / "a" / "b.jpg", tmp_path)

    def test_hidden_root_itself_is_allowed(self, tmp_path):
        """A root that happens to start with a dot is still scanned."""
        root = tmp_path / ".library"
        assert not is_hidden(root / "IMG_0001.jpg", root)

    def test_should_scan_file(self):
        """System and temporary files are excluded."""
        assert not should_scan_file(Path("desktop.ini"))
        assert not should_scan_file(Path("DESKTOP.INI"))
        assert not should_scan_file(Path("clip.mov.part"))
        assert should_scan_file(Path("IMG_0001.HEIC"))
