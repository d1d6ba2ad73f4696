"""Shared types and steps for upload workflows."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console

from fieldagent.upload import FileUploader, UploadJob, UploadResult, failed_results, summarize_results


@dataclass
class WorkflowResult:
    """Results from an upload workflow."""

    uploaded: int = 0
    upload_results: list[UploadResult] = field(default_factory=list)
    sentera_ids: list[str] = field(default_factory=list)
    status: str | None = None
    failed: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def run_uploads(
    uploader: FileUploader,
    jobs: Sequence[UploadJob],
    result: WorkflowResult,
    console: Console,
) -> bool:
    """
    Upload a batch and record the outcome on the workflow result.

    Returns:
        True if every upload succeeded. The per-file summary is always
        printed; on failure each failed file is added to result.failed.
    """
    console.print(f"\n[bold]Uploading {len(jobs)} file(s)...[/bold]")
    upload_results = uploader.upload_files(jobs, show_progress=len(jobs) > 1)
    result.upload_results.extend(upload_results)

    failures = failed_results(upload_results)
    result.uploaded += len(upload_results) - len(failures)

    summarize_results(upload_results, console)
    if failures:
        for failure in failures:
            result.failed.append({"id": str(failure.job.local_path), "error": str(failure.error)})
        console.print(f"[red]{len(failures)} upload(s) failed, skipping the remaining steps.[/red]")
        return False

    console.print(f"[green]Uploaded {len(upload_results)} file(s).[/green]")
    return True


def record_upsert_failures(result: WorkflowResult, owner_id: str, details: list[str]):
    """Add mutation failures (or a generic one) to the workflow result."""
    if not details:
        details = ["No records were created"]
    for detail in details:
        result.failed.append({"id": owner_id, "error": detail})
