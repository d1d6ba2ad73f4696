"""Typed wrappers around the FieldAgent upload mutations."""

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from fieldagent.errors import WorkflowError
from fieldagent.files import FileProps
from fieldagent.graphql import _mutations
from fieldagent.graphql.client import GraphQLClient
from fieldagent.models import (
    FeatureSetImport,
    FileImport,
    FileUpload,
    FileUploadOwner,
    ImageImport,
    ImportResult,
    MosaicImport,
    SurveyImport,
    UpsertResult,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field(data: dict[str, Any], name: str) -> Any:
    value = data.get(name)
    if value is None:
        raise WorkflowError(f"GraphQL response did not include {name}")
    return value


def _parse(model: type[ModelT], data: dict[str, Any], name: str) -> ModelT:
    """Validate data[name] against model, raising WorkflowError on a malformed reply."""
    try:
        return model.model_validate(_field(data, name))
    except ValidationError as e:
        raise WorkflowError(f"Unexpected {name} response: {e}") from e


def _parse_list(model: type[ModelT], data: dict[str, Any], name: str) -> list[ModelT]:
    items = _field(data, name)
    if not isinstance(items, list):
        raise WorkflowError(f"Unexpected {name} response: expected a list, got {items!r}")
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise WorkflowError(f"Unexpected {name} response: {e}") from e


def _upload_input(props: FileProps) -> dict[str, Any]:
    return {
        "filename": props.filename,
        "byte_size": props.byte_size,
        "checksum": props.checksum,
        "content_type": props.content_type,
    }


def create_file_upload(
    client: GraphQLClient,
    props: FileProps,
    owner: FileUploadOwner | None = None,
) -> FileUpload:
    """Request a single upload slot for a file."""
    variables = _upload_input(props)
    if owner is not None:
        variables["file_upload_owner"] = owner.to_variables()

    data = client.execute(_mutations.CREATE_FILE_UPLOAD, variables)
    return _parse(FileUpload, data, "create_file_upload")


def create_file_uploads(
    client: GraphQLClient,
    props_list: Sequence[FileProps],
    owner: FileUploadOwner | None = None,
) -> list[FileUpload]:
    """Request one upload slot per file, returned in request order."""
    variables: dict[str, Any] = {"files": [_upload_input(p) for p in props_list]}
    if owner is not None:
        variables["file_upload_owner"] = owner.to_variables()

    data = client.execute(_mutations.CREATE_FILE_UPLOADS, variables)
    return _parse_list(FileUpload, data, "create_file_uploads")


def create_image_uploads(
    client: GraphQLClient,
    props_list: Sequence[FileProps],
    survey_sentera_id: str,
    sensor_type: str = "UNKNOWN",
) -> list[FileUpload]:
    """Request one upload slot per image under a survey, in request order."""
    images = [{**_upload_input(p), "sensor_type": sensor_type} for p in props_list]
    variables = {"survey_sentera_id": survey_sentera_id, "images": images}

    data = client.execute(_mutations.CREATE_IMAGE_UPLOADS, variables)
    return _parse_list(FileUpload, data, "create_image_uploads")


def upsert_surveys(
    client: GraphQLClient,
    field_sentera_id: str,
    surveys: Sequence[SurveyImport],
) -> UpsertResult:
    variables = {
        "field_sentera_id": field_sentera_id,
        "surveys": [s.to_variables() for s in surveys],
    }
    data = client.execute(_mutations.UPSERT_SURVEYS, variables)
    return _parse(UpsertResult, data, "upsert_surveys")


def create_survey(client: GraphQLClient, field_sentera_id: str, notes: str | None = None) -> str:
    """
    Create a one-hour survey starting now in a field.

    Returns:
        Sentera ID of the new survey

    Raises:
        WorkflowError: If the survey was not created
    """
    result = upsert_surveys(client, field_sentera_id, [SurveyImport.starting_now(notes=notes)])
    if not result.sentera_ids:
        raise WorkflowError(f"Failed to create survey in field {field_sentera_id}")
    return result.sentera_ids[0]


def upsert_files(
    client: GraphQLClient,
    owner_sentera_id: str,
    owner_type: str,
    files: Sequence[FileImport],
) -> UpsertResult:
    """Attach previously uploaded files to an owner record."""
    variables = {
        "owner": {"sentera_id": owner_sentera_id, "owner_type": owner_type},
        "files": [f.to_variables() for f in files],
    }
    data = client.execute(_mutations.UPSERT_FILES, variables)
    return _parse(UpsertResult, data, "upsert_files")


def import_files(
    client: GraphQLClient,
    file_keys: Sequence[str],
    file_type: str,
    owner_type: str,
    owner_sentera_id: str,
) -> ImportResult:
    """Queue previously uploaded files for server-side import."""
    variables = {
        "file_keys": list(file_keys),
        "file_type": file_type,
        "owner_type": owner_type,
        "owner_sentera_id": owner_sentera_id,
    }
    data = client.execute(_mutations.IMPORT_FILES, variables)
    return _parse(ImportResult, data, "import_files")


def upsert_images(
    client: GraphQLClient,
    survey_sentera_id: str,
    images: Sequence[ImageImport],
) -> UpsertResult:
    variables = {
        "survey_sentera_id": survey_sentera_id,
        "images": [i.to_variables() for i in images],
    }
    data = client.execute(_mutations.UPSERT_IMAGES, variables)
    return _parse(UpsertResult, data, "upsert_images")


def upsert_mosaics(
    client: GraphQLClient,
    survey_sentera_id: str,
    mosaics: Sequence[MosaicImport],
) -> UpsertResult:
    variables = {
        "survey_sentera_id": survey_sentera_id,
        "mosaics": [m.to_variables() for m in mosaics],
    }
    data = client.execute(_mutations.UPSERT_MOSAICS, variables)
    return _parse(UpsertResult, data, "upsert_mosaics")


def upsert_feature_set(
    client: GraphQLClient,
    survey_sentera_id: str,
    feature_set: FeatureSetImport,
) -> UpsertResult:
    variables = {
        "owner": {"owner_type": "SURVEY", "sentera_id": survey_sentera_id},
        "feature_set": feature_set.to_variables(),
    }
    data = client.execute(_mutations.UPSERT_FEATURE_SET, variables)
    return _parse(UpsertResult, data, "upsert_feature_set")


def import_feature_set(
    client: GraphQLClient,
    feature_set_sentera_id: str | None,
    geometry_file_key: str | None,
    annotation_file_keys: Sequence[str],
    name: str = "My Feature Set",
    feature_set_type: str = "UNKNOWN",
) -> ImportResult:
    """Queue a feature set for import from uploaded geometry and annotation files."""
    variables = {
        "feature_set_sentera_id": feature_set_sentera_id,
        "name": name,
        "type": feature_set_type,
        "geometry_file_key": geometry_file_key,
        "annotation_file_keys": list(annotation_file_keys),
    }
    data = client.execute(_mutations.IMPORT_FEATURE_SET, variables)
    return _parse(ImportResult, data, "import_feature_set")
