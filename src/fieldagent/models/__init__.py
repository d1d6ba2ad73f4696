"""Typed request and response models for the FieldAgent GraphQL API."""

from fieldagent.models.imports import (
    FeatureSetImport,
    FileImport,
    ImageImport,
    MosaicImport,
    SurveyImport,
)
from fieldagent.models.uploads import (
    FailedAttribute,
    FileUpload,
    FileUploadOwner,
    ImportResult,
    MutationFailure,
    UpsertResult,
)

__all__ = [
    "FailedAttribute",
    "FeatureSetImport",
    "FileImport",
    "FileUpload",
    "FileUploadOwner",
    "ImageImport",
    "ImportResult",
    "MosaicImport",
    "MutationFailure",
    "SurveyImport",
    "UpsertResult",
]
