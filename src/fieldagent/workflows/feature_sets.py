"""Workflows for creating feature sets with annotation files."""

from pathlib import Path

from rich.console import Console

from fieldagent.errors import WorkflowError
from fieldagent.files import read_file_props, read_files_props
from fieldagent.graphql import GraphQLClient, operations
from fieldagent.models import FeatureSetImport, FileUploadOwner
from fieldagent.upload import FileUploader, jobs_for_uploads
from fieldagent.workflows._shared import WorkflowResult, record_upsert_failures, run_uploads

ANNOTATION_CONTENT_TYPE = "application/octet-stream"
GEOMETRY_CONTENT_TYPE = "application/geo+json"


def _annotation_props(files_path: Path, file_ext: str):
    props = read_files_props(files_path, file_ext)
    for p in props:
        p.content_type = ANNOTATION_CONTENT_TYPE
    return props


def upsert_feature_set(
    client: GraphQLClient,
    uploader: FileUploader,
    files_path: Path,
    file_ext: str,
    geometry_path: Path,
    console: Console,
    field_sentera_id: str | None = None,
    survey_sentera_id: str | None = None,
) -> WorkflowResult:
    """
    Upload annotation files and create a feature set with inline geometry.

    Flow:
    1. Create a survey in the field, unless a survey ID was given
    2. Create file uploads owned by a new feature set
    3. Upload the annotation files in parallel
    4. Upsert the feature set with the geometry and annotation file keys

    Args:
        files_path: Directory containing annotation files
        file_ext: Glob pattern for annotation files
        geometry_path: GeoJSON file with the feature set geometry
        field_sentera_id: Field to create a survey in (when no survey given)
        survey_sentera_id: Existing survey to own the feature set

    Raises:
        WorkflowError: If neither ID is given or no annotation files match
        FileNotFoundError: If geometry_path does not exist
    """
    if survey_sentera_id is None and field_sentera_id is None:
        raise WorkflowError("Either a survey or a field Sentera ID must be specified")

    result = WorkflowResult()

    annotation_props = _annotation_props(files_path, file_ext)
    if not annotation_props:
        raise WorkflowError(f"No files matching {file_ext} in {files_path}")
    if not geometry_path.exists():
        raise FileNotFoundError(f"Geometry path {geometry_path} does not exist")
    geometry = geometry_path.read_text(encoding="utf-8")

    if survey_sentera_id is None:
        console.print("\n[bold]Creating survey...[/bold]")
        survey_sentera_id = operations.create_survey(client, field_sentera_id)
        console.print(f"Created survey {survey_sentera_id} in field {field_sentera_id}")

    console.print("\n[bold]Creating file uploads...[/bold]")
    owner = FileUploadOwner(owner_type="FEATURE_SET", parent_sentera_id=survey_sentera_id)
    file_uploads = operations.create_file_uploads(client, annotation_props, owner)
    if not file_uploads:
        raise WorkflowError("No file uploads were created")
    feature_set_sentera_id = file_uploads[0].owner_sentera_id

    jobs = jobs_for_uploads(file_uploads, [p.path for p in annotation_props])
    if not run_uploads(uploader, jobs, result, console):
        return result

    console.print("\n[bold]Upserting feature set...[/bold]")
    feature_set = FeatureSetImport(
        sentera_id=feature_set_sentera_id,
        geometry=geometry,
        annotation_file_keys=[u.id for u in file_uploads],
    )
    upsert = operations.upsert_feature_set(client, survey_sentera_id, feature_set)

    if not upsert.ok:
        record_upsert_failures(result, survey_sentera_id, upsert.failure_details())
        return result

    result.sentera_ids = upsert.sentera_ids
    console.print(
        f"[green]Done! Feature set {feature_set_sentera_id} was created "
        f"with {len(file_uploads)} annotation files.[/green]"
    )
    return result


def import_feature_set(
    client: GraphQLClient,
    uploader: FileUploader,
    files_path: Path,
    file_ext: str,
    geometry_path: Path,
    survey_sentera_id: str,
    console: Console,
) -> WorkflowResult:
    """
    Upload a geometry file plus annotations and queue a feature set import.

    Flow:
    1. Create a geometry file upload, which assigns the feature set ID
    2. Create annotation file uploads owned by that feature set
    3. Upload geometry and annotation files in one parallel batch
    4. Import the feature set (processed asynchronously server-side)
    """
    result = WorkflowResult()

    console.print("\n[bold]Creating geometry file upload...[/bold]")
    geometry_props = read_file_props(geometry_path, GEOMETRY_CONTENT_TYPE)
    geometry_owner = FileUploadOwner(owner_type="FEATURE_SET", parent_sentera_id=survey_sentera_id)
    geometry_upload = operations.create_file_upload(client, geometry_props, geometry_owner)
    feature_set_sentera_id = geometry_upload.owner_sentera_id

    annotation_props = _annotation_props(files_path, file_ext)
    file_uploads = []
    if annotation_props:
        console.print("\n[bold]Creating file uploads...[/bold]")
        owner = FileUploadOwner(
            owner_sentera_id=feature_set_sentera_id,
            parent_sentera_id=survey_sentera_id,
        )
        file_uploads = operations.create_file_uploads(client, annotation_props, owner)

    jobs = jobs_for_uploads(
        [geometry_upload, *file_uploads],
        [geometry_props.path, *(p.path for p in annotation_props)],
    )
    if not run_uploads(uploader, jobs, result, console):
        return result

    console.print("\n[bold]Importing feature set...[/bold]")
    imported = operations.import_feature_set(
        client,
        feature_set_sentera_id=feature_set_sentera_id,
        geometry_file_key=geometry_upload.id,
        annotation_file_keys=[u.id for u in file_uploads],
    )
    result.status = imported.status
    if feature_set_sentera_id:
        result.sentera_ids = [feature_set_sentera_id]
    console.print(
        f"[green]Done! Feature set {feature_set_sentera_id} with {len(file_uploads)} files "
        "was queued for importing.[/green]"
    )
    return result
