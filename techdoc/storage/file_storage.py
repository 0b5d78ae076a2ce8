import re
from pathlib import Path, PurePath

from techdoc.storage.exceptions import StorageError

_EXTENSION_RE = re.compile(r"^[a-z0-9]{1,10}$")


def safe_extension(filename: str) -> str:
    """Return a sanitized '.ext' from a user-supplied filename, or '' if unusable."""
    suffix = PurePath(filename.replace("\\", "/")).suffix.lower().lstrip(".")
    if not _EXTENSION_RE.match(suffix):
        return ""
    return f".{suffix}"


def document_file_path(upload_root: Path, user_id: str, document_id: str, filename: str) -> Path:
    """Build path to document file: {upload_root}/{user_id}/{document_id}{ext}"""
    return upload_root / str(user_id) / f"{document_id}{safe_extension(filename)}"


class FileStorage:
    """Owner-scoped local disk storage for uploaded files.

    Stored names derive from the document id; the user-supplied filename only
    contributes a sanitized extension.
    """

    def __init__(self, upload_root: Path) -> None:
        self._upload_root = upload_root

    def save(self, user_id: str, document_id: str, filename: str, content: bytes) -> Path:
        """Write content to the owner's folder and return the stored path.

        Raises:
            StorageError: if the file cannot be written.
        """
        path = document_file_path(self._upload_root, user_id, document_id, filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Failed to store file {path}: {exc}") from exc
        return path

    def exists(self, path: str | Path) -> bool:
        return Path(path).is_file()

    def read(self, path: str | Path) -> bytes:
        """Read stored bytes.

        Raises:
            FileNotFoundError: if the file does not exist at path.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")
        return file_path.read_bytes()

    def delete(self, path: str | Path) -> bool:
        """Remove a stored file. Returns False when it was already gone."""
        file_path = Path(path)
        try:
            file_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Failed to delete file {file_path}: {exc}") from exc
        return True
