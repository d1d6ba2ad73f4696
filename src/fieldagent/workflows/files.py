"""Workflows for attaching documents to a field."""

from pathlib import Path

from rich.console import Console

from fieldagent.files import read_file_props
from fieldagent.graphql import GraphQLClient, operations
from fieldagent.models import FileImport, FileUploadOwner
from fieldagent.upload import FileUploader, jobs_for_uploads
from fieldagent.workflows._shared import WorkflowResult, record_upsert_failures, run_uploads


def upsert_file(
    client: GraphQLClient,
    uploader: FileUploader,
    file_path: Path,
    content_type: str | None,
    field_sentera_id: str,
    organization_sentera_id: str,
    console: Console,
) -> WorkflowResult:
    """
    Upload a document and attach it to a field.

    Flow:
    1. Create a file upload owned by the field
    2. Upload the file
    3. Upsert the file, which associates it with the field

    Args:
        client: GraphQL client
        uploader: File uploader
        file_path: Path of the file to upload
        content_type: MIME type, guessed from the extension if None
        field_sentera_id: Field to attach the file to
        organization_sentera_id: Organization that owns the field
        console: Rich console for output

    Returns:
        WorkflowResult with the new file's Sentera ID, or failures
    """
    result = WorkflowResult()

    console.print("\n[bold]Creating file upload...[/bold]")
    props = read_file_props(file_path, content_type)
    owner = FileUploadOwner(
        owner_type="FIELD",
        owner_sentera_id=field_sentera_id,
        parent_sentera_id=organization_sentera_id,
    )
    file_upload = operations.create_file_upload(client, props, owner)

    if not run_uploads(uploader, jobs_for_uploads([file_upload], [props.path]), result, console):
        return result

    console.print("\n[bold]Upserting file...[/bold]")
    file_import = FileImport(
        file_key=file_upload.id,
        file_type="DOCUMENT",
        filename=props.filename,
        path=f"{field_sentera_id}\\Files",
        size=props.byte_size,
        version=1,
    )
    upsert = operations.upsert_files(client, field_sentera_id, "FIELD", [file_import])

    if not upsert.ok:
        record_upsert_failures(result, field_sentera_id, upsert.failure_details())
        return result

    result.sentera_ids = upsert.sentera_ids
    console.print(
        f"[green]Done! File {', '.join(result.sentera_ids)} was created "
        f"and attached to field {field_sentera_id}.[/green]"
    )
    return result


def import_file(
    client: GraphQLClient,
    uploader: FileUploader,
    file_path: Path,
    content_type: str | None,
    field_sentera_id: str,
    console: Console,
) -> WorkflowResult:
    """
    Upload a document and queue it for import into a field.

    Flow:
    1. Create an ownerless file upload
    2. Upload the file
    3. Import the file into the field (processed asynchronously server-side)
    """
    result = WorkflowResult()

    console.print("\n[bold]Creating file upload...[/bold]")
    props = read_file_props(file_path, content_type)
    file_upload = operations.create_file_upload(client, props)

    if not run_uploads(uploader, jobs_for_uploads([file_upload], [props.path]), result, console):
        return result

    console.print("\n[bold]Importing file...[/bold]")
    imported = operations.import_files(
        client,
        file_keys=[file_upload.id],
        file_type="DOCUMENT",
        owner_type="FIELD",
        owner_sentera_id=field_sentera_id,
    )
    result.status = imported.status
    console.print(f"[green]Done! File was queued for importing (status: {imported.status}).[/green]")
    return result
