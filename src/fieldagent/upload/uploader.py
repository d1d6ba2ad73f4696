"""Bounded parallel upload of local files to pre-signed storage URLs."""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import requests
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from fieldagent.config import DEFAULT_CONCURRENCY_LIMIT, ClientConfig
from fieldagent.errors import FileReadError, RemoteRejectionError, TransportError, UploadError
from fieldagent.upload.jobs import UploadJob, UploadResult

logger = logging.getLogger(__name__)


class FileUploader:
    """
    PUTs local files to pre-signed URLs with at most `concurrency_limit`
    requests in flight.

    Failures never escape: each one is recorded on the result of the job
    that caused it, and the rest of the batch carries on. No retries.
    """

    def __init__(
        self,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        timeout: float = 60.0,
    ):
        if concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be >= 1, got {concurrency_limit}")
        self.concurrency_limit = concurrency_limit
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig) -> "FileUploader":
        return cls(concurrency_limit=config.concurrency_limit, timeout=config.timeout)

    def upload_file(self, job: UploadJob) -> UploadResult:
        """
        Upload a single job.

        Reads the whole file into memory and sends it as the PUT body with
        the job's headers attached.

        Returns:
            UploadResult with the HTTP status, or an error if the file could
            not be read, the request failed, or the response was not 2xx
        """
        path = Path(job.local_path)
        try:
            body = path.read_bytes()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return UploadResult(job=job, error=FileReadError(path, str(e)))

        logger.info("Upload %s (%d bytes)", path, len(body))
        try:
            response = requests.put(
                job.destination_url,
                data=body,
                headers=dict(job.headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Upload of %s failed: %s", path, e)
            return UploadResult(job=job, error=TransportError(path, str(e)))

        status = response.status_code
        if not 200 <= status < 300:
            logger.warning("Upload of %s rejected, response.code = %d", path, status)
            return UploadResult(
                job=job,
                status_code=status,
                error=RemoteRejectionError(path, status, response.text),
            )

        logger.info("Done uploading %s, response.code = %d", path, status)
        return UploadResult(job=job, status_code=status)

    def upload_files(
        self,
        jobs: Sequence[UploadJob],
        show_progress: bool = False,
    ) -> list[UploadResult]:
        """
        Upload a batch of jobs in parallel.

        Args:
            jobs: Jobs to run
            show_progress: Display a tqdm progress bar

        Returns:
            One UploadResult per job, in completion order
        """
        if not jobs:
            return []

        results: list[UploadResult] = []
        max_workers = min(self.concurrency_limit, len(jobs))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_job = {executor.submit(self.upload_file, job): job for job in jobs}
            for future in tqdm(
                as_completed(future_to_job),
                total=len(future_to_job),
                desc="Uploading files",
                disable=not show_progress,
            ):
                job = future_to_job[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.exception("Unexpected error uploading %s", job.local_path)
                    results.append(
                        UploadResult(job=job, error=UploadError(Path(job.local_path), repr(e)))
                    )

        return results


def summarize_results(results: Sequence[UploadResult], console: Console):
    """Print one row per upload: path, HTTP status and outcome."""
    table = Table(title=f"Uploads ({len(results)})", show_header=True)
    table.add_column("File")
    table.add_column("Status", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("Error", style="dim")

    for result in sorted(results, key=lambda r: str(r.job.local_path)):
        status = str(result.status_code) if result.status_code is not None else "-"
        outcome = "[green]OK[/green]" if result.ok else "[red]FAILED[/red]"
        error = str(result.error) if result.error else ""
        table.add_row(str(result.job.local_path), status, outcome, error)

    console.print(table)
