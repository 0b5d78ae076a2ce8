from pathlib import Path

import pytest

from techdoc.storage.file_storage import FileStorage, document_file_path, safe_extension


class TestSafeExtension:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("manual.PDF", ".pdf"),
            ("photo.jpeg", ".jpeg"),
            ("archive.tar.gz", ".gz"),
            ("no_extension", ""),
            ("evil.p$f", ""),
            ("..\\..\\windows.exe", ".exe"),
            ("name.abcdefghijkl", ""),
        ],
    )
    def test_sanitizes(self, filename: str, expected: str) -> None:
        assert safe_extension(filename) == expected


class TestDocumentFilePath:
    def test_uses_owner_folder_and_document_id(self, tmp_path: Path) -> None:
        path = document_file_path(tmp_path, "user-1", "doc-1", "../../etc/passwd.txt")
        assert path == tmp_path / "user-1" / "doc-1.txt"


class TestFileStorage:
    def test_save_and_read(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path)
        path = storage.save("user-1", "doc-1", "manual.pdf", b"%PDF")
        assert path.parent == tmp_path / "user-1"
        assert storage.exists(path)
        assert storage.read(path) == b"%PDF"

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileStorage(tmp_path).read(tmp_path / "missing.pdf")

    def test_delete(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path)
        path = storage.save("user-1", "doc-1", "manual.pdf", b"%PDF")
        assert storage.delete(path) is True
        assert not storage.exists(path)
        assert storage.delete(path) is False
