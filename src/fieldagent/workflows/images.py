"""Workflow for creating survey images from a folder of files."""

from pathlib import Path

from rich.console import Console

from fieldagent.errors import WorkflowError
from fieldagent.files import read_files_props
from fieldagent.graphql import GraphQLClient, operations
from fieldagent.models import ImageImport
from fieldagent.upload import FileUploader, jobs_for_uploads
from fieldagent.workflows._shared import WorkflowResult, record_upsert_failures, run_uploads


def upsert_images(
    client: GraphQLClient,
    uploader: FileUploader,
    images_path: Path,
    file_ext: str,
    sensor_type: str,
    survey_sentera_id: str,
    console: Console,
) -> WorkflowResult:
    """
    Upload images and create them under a survey.

    Flow:
    1. Read image properties and create one image upload per file
    2. Upload the images in parallel
    3. Upsert the images, referencing each upload by its key

    Raises:
        WorkflowError: If no images match file_ext
    """
    result = WorkflowResult()

    image_props = read_files_props(images_path, file_ext)
    if not image_props:
        raise WorkflowError(f"No files matching {file_ext} in {images_path}")
    console.print(f"Found {len(image_props)} image(s) in {images_path}")

    console.print("\n[bold]Creating image uploads...[/bold]")
    image_uploads = operations.create_image_uploads(
        client, image_props, survey_sentera_id, sensor_type
    )

    jobs = jobs_for_uploads(image_uploads, [p.path for p in image_props])
    if not run_uploads(uploader, jobs, result, console):
        return result

    console.print("\n[bold]Upserting images...[/bold]")
    images = [
        ImageImport(
            key=image_upload.id,
            filename=props.filename,
            size=props.byte_size,
            sensor_type=sensor_type,
        )
        for image_upload, props in zip(image_uploads, image_props)
    ]
    upsert = operations.upsert_images(client, survey_sentera_id, images)

    if not upsert.ok:
        record_upsert_failures(result, survey_sentera_id, upsert.failure_details())
        return result

    result.sentera_ids = upsert.sentera_ids
    console.print(
        f"[green]Done! {len(result.sentera_ids)} image(s) for {survey_sentera_id} "
        "were created in FieldAgent.[/green]"
    )
    return result
