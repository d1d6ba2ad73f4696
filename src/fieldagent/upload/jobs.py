"""Upload job and result types, and pairing of upload slots with local files."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fieldagent.errors import UploadError, WorkflowError
from fieldagent.models import FileUpload


@dataclass(frozen=True)
class UploadJob:
    """One local file and the pre-signed URL it should be PUT to."""

    destination_url: str
    local_path: Path
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)


@dataclass
class UploadResult:
    """Outcome of one UploadJob."""

    job: UploadJob
    status_code: int | None = None
    error: UploadError | None = None

    @property
    def ok(self) -> bool:
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )


def jobs_for_uploads(
    file_uploads: Sequence[FileUpload],
    paths: Sequence[Path | str],
) -> list[UploadJob]:
    """
    Pair upload slots with local files by position.

    The create_*_uploads mutations return one slot per requested file, in
    request order, so slot i belongs to paths[i].

    Raises:
        WorkflowError: If the two sequences differ in length
    """
    if len(file_uploads) != len(paths):
        raise WorkflowError(
            f"Got {len(file_uploads)} upload slots for {len(paths)} files"
        )

    return [
        UploadJob(
            destination_url=file_upload.upload_url,
            local_path=Path(path),
            headers=dict(file_upload.headers),
        )
        for file_upload, path in zip(file_uploads, paths)
    ]


def failed_results(results: Iterable[UploadResult]) -> list[UploadResult]:
    return [r for r in results if not r.ok]
