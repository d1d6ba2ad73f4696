"""Input records for the upsert_* mutations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class GraphQLInput(BaseModel):
    def to_variables(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class SurveyImport(GraphQLInput):
    start_time: datetime = Field(default_factory=_utcnow)
    end_time: datetime | None = None
    notes: str | None = None

    @classmethod
    def starting_now(cls, duration: timedelta = timedelta(hours=1), notes: str | None = None):
        start = _utcnow()
        return cls(start_time=start, end_time=start + duration, notes=notes)


class FileImport(GraphQLInput):
    file_key: str
    file_type: str = "DOCUMENT"
    filename: str
    path: str | None = None
    size: int
    version: int = 1


class ImageImport(GraphQLInput):
    # Required when creating images with upsert_images; adjust as needed
    key: str
    filename: str
    size: int
    sensor_type: str = "UNKNOWN"
    captured_at: datetime = Field(default_factory=_utcnow)
    altitude: float = 0
    latitude: float = 0
    longitude: float = 0
    calculated_index: str = "UNKNOWN"
    color_applied: str = "UNKNOWN"
    gps_carrier_phase_status: str = "STANDARD"
    gps_horizontal_accuracy: float = 0
    gps_vertical_accuracy: float = 0


class MosaicImport(GraphQLInput):
    sentera_id: str | None = None
    quality: str = "FULL"
    mosaic_type: str = "RGB"
    captured_at: datetime = Field(default_factory=_utcnow)
    file_keys: list[str]


class FeatureSetImport(GraphQLInput):
    sentera_id: str | None = None
    name: str = "My Feature Set"
    # Use the type matching the feature set geometry
    type: str = "UNKNOWN"
    geometry: str | None = None
    annotation_file_keys: list[str] = Field(default_factory=list)
