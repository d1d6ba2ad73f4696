from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator


class FileUpload(BaseModel):
    """Upload slot returned by the create_*_upload(s) mutations."""

    id: str
    upload_url: str
    headers: dict[str, str] = Field(default_factory=dict)
    owner_sentera_id: str | None = None
    s3_url: str | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def _parse_headers(cls, v: Any) -> dict[str, str]:
        # The headers field is a JSON scalar and may arrive encoded as a string
        if v is None:
            return {}
        if isinstance(v, str):
            v = json.loads(v) if v else {}
        if not isinstance(v, dict):
            raise ValueError(f"headers must be a JSON object, got {type(v).__name__}")
        return {str(k): str(val) for k, val in v.items()}


class FileUploadOwner(BaseModel):
    owner_type: str | None = None
    owner_sentera_id: str | None = None
    parent_sentera_id: str | None = None

    def to_variables(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class FailedAttribute(BaseModel):
    key: str | None = None
    details: str | None = None
    attribute: str | None = None


class MutationFailure(BaseModel):
    attributes: list[FailedAttribute] = Field(default_factory=list)


class UpsertResult(BaseModel):
    """Result shape shared by the upsert_* mutations."""

    succeeded: list[dict[str, Any]] = Field(default_factory=list)
    failed: list[MutationFailure] = Field(default_factory=list)

    @field_validator("succeeded", "failed", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def ok(self) -> bool:
        return bool(self.succeeded)

    @property
    def sentera_ids(self) -> list[str]:
        return [item["sentera_id"] for item in self.succeeded if item.get("sentera_id")]

    def failure_details(self) -> list[str]:
        """Flatten failures into readable 'attribute: details' strings."""
        return [
            f"{attr.attribute or attr.key}: {attr.details}"
            for failure in self.failed
            for attr in failure.attributes
        ]


class ImportResult(BaseModel):
    """Result of the import_* mutations, which queue work server-side."""

    status: str | None = None
