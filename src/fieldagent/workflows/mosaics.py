"""Workflow for attaching a mosaic to a survey."""

from pathlib import Path

from rich.console import Console

from fieldagent.files import DEFAULT_CONTENT_TYPE, content_type_for, read_file_props
from fieldagent.graphql import GraphQLClient, operations
from fieldagent.models import FileUploadOwner, MosaicImport
from fieldagent.upload import FileUploader, jobs_for_uploads
from fieldagent.workflows._shared import WorkflowResult, record_upsert_failures, run_uploads


def upsert_mosaic(
    client: GraphQLClient,
    uploader: FileUploader,
    file_path: Path,
    survey_sentera_id: str,
    console: Console,
) -> WorkflowResult:
    """
    Upload a mosaic file and create the mosaic under a survey.

    The mosaic's Sentera ID is assigned by the create_file_upload mutation
    (returned as owner_sentera_id) and reused when upserting the mosaic.
    """
    result = WorkflowResult()

    content_type = content_type_for(file_path)
    if content_type == DEFAULT_CONTENT_TYPE:
        content_type = "image/tiff"

    console.print("\n[bold]Creating file upload...[/bold]")
    props = read_file_props(file_path, content_type)
    owner = FileUploadOwner(owner_type="MOSAIC", parent_sentera_id=survey_sentera_id)
    file_upload = operations.create_file_upload(client, props, owner)
    mosaic_sentera_id = file_upload.owner_sentera_id

    if not run_uploads(uploader, jobs_for_uploads([file_upload], [props.path]), result, console):
        return result

    console.print("\n[bold]Upserting mosaic...[/bold]")
    mosaic = MosaicImport(sentera_id=mosaic_sentera_id, file_keys=[file_upload.id])
    upsert = operations.upsert_mosaics(client, survey_sentera_id, [mosaic])

    if not upsert.ok:
        record_upsert_failures(result, survey_sentera_id, upsert.failure_details())
        return result

    result.sentera_ids = upsert.sentera_ids
    console.print(
        f"[green]Done! Mosaic {', '.join(result.sentera_ids)} was created "
        f"and attached to survey {survey_sentera_id}.[/green]"
    )
    return result
