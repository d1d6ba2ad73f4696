"""Parallel upload of local files to pre-signed storage URLs."""

from fieldagent.upload.jobs import UploadJob, UploadResult, failed_results, jobs_for_uploads
from fieldagent.upload.uploader import FileUploader, summarize_results

__all__ = [
    "FileUploader",
    "UploadJob",
    "UploadResult",
    "failed_results",
    "jobs_for_uploads",
    "summarize_results",
]
