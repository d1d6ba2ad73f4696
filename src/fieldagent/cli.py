"""CLI entrypoint for FieldAgent upload workflows."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from fieldagent.config import load_client_config
from fieldagent.errors import FieldAgentError

app = typer.Typer(
    name="fieldagent",
    help="Upload files to FieldAgent through its GraphQL API",
    no_args_is_help=True,
)
console = Console()

# Default config path (relative to package root: src/fieldagent/cli.py -> project root)
PACKAGE_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG = PACKAGE_ROOT / "configs" / "fieldagent.yaml"

ConfigOption = Annotated[Path | None, typer.Option("--config", "-c", help="Client config YAML path")]
ConcurrencyOption = Annotated[
    int | None, typer.Option(min=1, help="Max parallel uploads (overrides config)")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log requests and responses")]


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _run(
    workflow: Callable,
    config: Path | None,
    concurrency: int | None,
    verbose: bool,
    **kwargs,
):
    """Build the client and uploader, run a workflow and exit non-zero on failure."""
    from fieldagent.graphql import GraphQLClient
    from fieldagent.upload import FileUploader

    _setup_logging(verbose)

    try:
        if config is None and DEFAULT_CONFIG.exists():
            config = DEFAULT_CONFIG
        client_config = load_client_config(config)
        if concurrency is not None:
            client_config = client_config.model_copy(update={"concurrency_limit": concurrency})

        console.print(f"[bold]Server: {client_config.endpoint}[/bold]")
        uploader = FileUploader.from_config(client_config)
        with GraphQLClient(client_config) as client:
            result = workflow(client=client, uploader=uploader, console=console, **kwargs)
    except (FieldAgentError, FileNotFoundError) as e:
        console.print(f"[red]Failed: {e}[/red]")
        raise typer.Exit(code=1)

    if not result.ok:
        console.print("\n[red]Failed due to error:[/red]")
        for fail in result.failed[:10]:
            console.print(f"  {fail['id']}: {fail.get('error', 'Unknown')}")
        raise typer.Exit(code=1)


@app.command("upsert-file")
def upsert_file_cmd(
    field_sentera_id: Annotated[
        str, typer.Option(envvar="FIELD_SENTERA_ID", help="Field to attach the file to")
    ],
    organization_sentera_id: Annotated[
        str, typer.Option(envvar="ORGANIZATION_SENTERA_ID", help="Organization owning the field")
    ],
    file_path: Annotated[
        Path, typer.Option(envvar="FILE_PATH", exists=True, dir_okay=False, help="File to upload")
    ] = Path("test_files/test.geojson"),
    content_type: Annotated[
        str | None, typer.Option(envvar="CONTENT_TYPE", help="MIME type (default: from extension)")
    ] = None,
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload a file and attach it to a field."""
    from fieldagent.workflows import upsert_file

    _run(
        upsert_file,
        config,
        concurrency,
        verbose,
        file_path=file_path,
        content_type=content_type,
        field_sentera_id=field_sentera_id,
        organization_sentera_id=organization_sentera_id,
    )


@app.command("import-file")
def import_file_cmd(
    field_sentera_id: Annotated[
        str, typer.Option(envvar="FIELD_SENTERA_ID", help="Field to import the file into")
    ],
    file_path: Annotated[
        Path, typer.Option(envvar="FILE_PATH", exists=True, dir_okay=False, help="File to upload")
    ] = Path("test_files/test.geojson"),
    content_type: Annotated[
        str | None, typer.Option(envvar="CONTENT_TYPE", help="MIME type (default: from extension)")
    ] = None,
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload a file and queue it for import into a field."""
    from fieldagent.workflows import import_file

    _run(
        import_file,
        config,
        concurrency,
        verbose,
        file_path=file_path,
        content_type=content_type,
        field_sentera_id=field_sentera_id,
    )


@app.command("upsert-images")
def upsert_images_cmd(
    survey_sentera_id: Annotated[
        str, typer.Option(envvar="SURVEY_SENTERA_ID", help="Survey to create the images under")
    ],
    images_path: Annotated[
        Path, typer.Option(envvar="IMAGES_PATH", exists=True, file_okay=False, help="Image folder")
    ] = Path("."),
    file_ext: Annotated[str, typer.Option(envvar="FILE_EXT", help="Image glob pattern")] = "*.*",
    sensor_type: Annotated[
        str, typer.Option(envvar="SENSOR_TYPE", help="Sensor that captured the images")
    ] = "UNKNOWN",
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload a folder of images and create them in a survey."""
    from fieldagent.workflows import upsert_images

    _run(
        upsert_images,
        config,
        concurrency,
        verbose,
        images_path=images_path,
        file_ext=file_ext,
        sensor_type=sensor_type,
        survey_sentera_id=survey_sentera_id,
    )


@app.command("upsert-mosaic")
def upsert_mosaic_cmd(
    survey_sentera_id: Annotated[
        str, typer.Option(envvar="SURVEY_SENTERA_ID", help="Survey to attach the mosaic to")
    ],
    file_path: Annotated[
        Path, typer.Option(envvar="FILE_PATH", exists=True, dir_okay=False, help="Mosaic file")
    ] = Path("test_files/test.tif"),
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload a mosaic and attach it to a survey."""
    from fieldagent.workflows import upsert_mosaic

    _run(
        upsert_mosaic,
        config,
        concurrency,
        verbose,
        file_path=file_path,
        survey_sentera_id=survey_sentera_id,
    )


@app.command("upsert-feature-set")
def upsert_feature_set_cmd(
    files_path: Annotated[
        Path, typer.Option(envvar="FILES_PATH", exists=True, file_okay=False, help="Annotation folder")
    ] = Path("."),
    file_ext: Annotated[str, typer.Option(envvar="FILE_EXT", help="Annotation glob pattern")] = "*.*",
    geometry_path: Annotated[
        Path, typer.Option(envvar="GEOMETRY_PATH", help="GeoJSON geometry file")
    ] = Path("test_files/test.geojson"),
    field_sentera_id: Annotated[
        str | None,
        typer.Option(envvar="FIELD_SENTERA_ID", help="Field to create a survey in"),
    ] = None,
    survey_sentera_id: Annotated[
        str | None,
        typer.Option(envvar="SURVEY_SENTERA_ID", help="Existing survey (skips survey creation)"),
    ] = None,
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload annotation files and create a feature set."""
    from fieldagent.workflows import upsert_feature_set

    if survey_sentera_id is None and field_sentera_id is None:
        console.print("[red]Either --survey-sentera-id or --field-sentera-id must be specified[/red]")
        raise typer.Exit(code=1)

    _run(
        upsert_feature_set,
        config,
        concurrency,
        verbose,
        files_path=files_path,
        file_ext=file_ext,
        geometry_path=geometry_path,
        field_sentera_id=field_sentera_id,
        survey_sentera_id=survey_sentera_id,
    )


@app.command("import-feature-set")
def import_feature_set_cmd(
    survey_sentera_id: Annotated[
        str, typer.Option(envvar="SURVEY_SENTERA_ID", help="Survey to own the feature set")
    ],
    files_path: Annotated[
        Path, typer.Option(envvar="FILES_PATH", exists=True, file_okay=False, help="Annotation folder")
    ] = Path("."),
    file_ext: Annotated[str, typer.Option(envvar="FILE_EXT", help="Annotation glob pattern")] = "*.*",
    geometry_path: Annotated[
        Path, typer.Option(envvar="GEOMETRY_PATH", exists=True, dir_okay=False, help="GeoJSON file")
    ] = Path("test_files/test.geojson"),
    config: ConfigOption = None,
    concurrency: ConcurrencyOption = None,
    verbose: VerboseOption = False,
):
    """Upload geometry and annotation files and queue a feature set import."""
    from fieldagent.workflows import import_feature_set

    _run(
        import_feature_set,
        config,
        concurrency,
        verbose,
        files_path=files_path,
        file_ext=file_ext,
        geometry_path=geometry_path,
        survey_sentera_id=survey_sentera_id,
    )


@app.command()
def version():
    """Show version information."""
    from fieldagent import __version__

    console.print(f"fieldagent version {__version__}")


if __name__ == "__main__":
    app()
