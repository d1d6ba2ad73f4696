"""Exception types raised by the FieldAgent client and workflows."""

from pathlib import Path
from typing import Any


class FieldAgentError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(FieldAgentError):
    """Client configuration is missing or invalid."""


class GraphQLError(FieldAgentError):
    """A GraphQL request failed or returned errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class WorkflowError(FieldAgentError):
    """A workflow step produced no usable result."""


class UploadError(FieldAgentError):
    """Upload of a single local file failed."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class FileReadError(UploadError):
    """The local file could not be read."""


class TransportError(UploadError):
    """The PUT request never produced a response (connection, timeout, TLS)."""


class RemoteRejectionError(UploadError):
    """The storage backend answered the PUT with a non-2xx status."""

    def __init__(self, path: Path, status_code: int, body: str = ""):
        super().__init__(path, f"upload rejected with HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body
