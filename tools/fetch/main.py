"""
Blob fetch CLI tool.

Runs the container plugin once and writes the fetched content to a file or
stdout.

Usage:
    poetry run fetch-blob --container images --blob batch1/img.jpg --output img.jpg
    poetry run fetch-blob --container images --blob notes.txt --account myacct --use-default-credentials
"""

from pathlib import Path

import click
import structlog

from src.config import configure_logging, get_settings
from src.models import ExecutionContext
from src.plugins import CONTENT_ATTR, ContainerPlugin

logger = structlog.get_logger(__name__)


def build_context(
    container: str,
    blob: str,
    account: str | None,
    use_default_credentials: bool,
) -> ExecutionContext:
    """Build the plugin context from command line values."""
    context = ExecutionContext()
    context.add_text_attr("container_name", container)
    context.add_text_attr("blob_name", blob)
    if account:
        context.add_text_attr("account_name", account)
    context.enable("use_default_credentials", use_default_credentials)
    return context


@click.command()
@click.option("--container", required=True, help="Container holding the blob")
@click.option("--blob", required=True, help="Name of the blob to fetch")
@click.option(
    "--account",
    default=None,
    help="Storage account name (defaults to STORAGE_ACCOUNT)",
)
@click.option(
    "--use-default-credentials",
    is_flag=True,
    help="Authenticate with the default Azure credential chain instead of an access key",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Bytes per ranged request (default: FETCH_CHUNK_SIZE or 8192)",
)
@click.option(
    "--mode",
    type=click.Choice(["first_chunk", "full"]),
    default=None,
    help="Stop after the first chunk, or read every chunk (default: FETCH_DOWNLOAD_MODE)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="File to write content to (default: stdout)",
)
def main(
    container: str,
    blob: str,
    account: str | None,
    use_default_credentials: bool,
    chunk_size: int | None,
    mode: str | None,
    output: Path | None,
):
    """Fetch a blob from Azure Blob Storage."""
    settings = get_settings()
    overrides = {}
    if chunk_size is not None:
        overrides["fetch_chunk_size"] = chunk_size
    if mode is not None:
        overrides["fetch_download_mode"] = mode
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings)

    context = build_context(container, blob, account, use_default_credentials)
    result = ContainerPlugin(settings).run(context)
    if result is None:
        click.echo(f"Error: no content fetched for {container}/{blob}", err=True)
        raise SystemExit(1)

    content = result.find_binary(CONTENT_ATTR)
    if output is None:
        click.get_binary_stream("stdout").write(content)
    else:
        output.write_bytes(content)
        click.echo(f"Wrote {len(content)} bytes to {output}", err=True)


if __name__ == "__main__":
    main()
