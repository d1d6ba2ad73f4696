"""Local file discovery and metadata (size, checksum, content type)."""

import base64
import hashlib
from dataclasses import dataclass
from pathlib import Path

CONTENT_TYPES = {
    ".geojson": "application/geo+json",
    ".json": "application/json",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".shp": "application/octet-stream",
    ".kml": "application/vnd.google-earth.kml+xml",
    ".kmz": "application/vnd.google-earth.kmz",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_CHUNK_SIZE = 1024 * 1024


@dataclass
class FileProps:
    """Metadata the API needs before it will hand out an upload slot."""

    path: Path
    filename: str
    byte_size: int
    checksum: str
    content_type: str


def content_type_for(path: Path | str) -> str:
    """Guess the MIME type from the file extension."""
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def md5_checksum(path: Path | str) -> str:
    """Base64-encoded MD5 digest of the file content."""
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return base64.b64encode(digest.digest()).decode("ascii")


def read_file_paths(files_path: Path | str, file_ext: str = "*.*") -> list[Path]:
    """
    List the files in a directory matching a glob pattern.

    Args:
        files_path: Directory containing the files
        file_ext: Glob pattern, e.g. "*.jpg"

    Returns:
        Sorted list of matching file paths

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    directory = Path(files_path)
    if not directory.is_dir():
        raise FileNotFoundError(f"Files path {directory} does not exist")

    return sorted(p for p in directory.glob(file_ext) if p.is_file())


def read_file_props(path: Path | str, content_type: str | None = None) -> FileProps:
    """Read size, checksum and content type for a single file."""
    path = Path(path)
    return FileProps(
        path=path,
        filename=path.name,
        byte_size=path.stat().st_size,
        checksum=md5_checksum(path),
        content_type=content_type or content_type_for(path),
    )


def read_files_props(files_path: Path | str, file_ext: str = "*.*") -> list[FileProps]:
    """Read FileProps for every file in a directory matching file_ext."""
    return [read_file_props(p) for p in read_file_paths(files_path, file_ext)]
