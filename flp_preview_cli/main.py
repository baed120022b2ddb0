"""flp-preview CLI - resolve custom UI5 libraries for previewed applications."""

import asyncio
import json
import logging
import sys

import click
from rich.table import Table

from .app_index import AppIndexError
from .console import console
from .dependencies import CustomDependencySet
from .dependencies import RegistrationResult
from .dependencies import collect_custom_dependencies
from .dependencies import register_component_dependency_paths
from .loader_paths import LoaderPathTable
from .logging_setup import init_json_logging
from .namespaces import UI5_NAMESPACES
from .settings import PreviewSettings
from .settings import create_http_client
from .settings import get_settings

logger = logging.getLogger(__name__)


def _load_settings(server: str | None, sap_client: str | None = None) -> PreviewSettings:
    """Effective settings with command-line overrides applied."""
    settings = get_settings()
    updates = {}
    if server:
        updates["server_url"] = server
    if sap_client:
        updates["sap_client"] = sap_client
    return settings.model_copy(update=updates) if updates else settings


async def _collect(app_urls: list[str], settings: PreviewSettings) -> CustomDependencySet:
    async with create_http_client(settings) as client:
        return await collect_custom_dependencies(app_urls, client)


async def _register(app_urls: list[str], settings: PreviewSettings, table: LoaderPathTable) -> RegistrationResult:
    async with create_http_client(settings) as client:
        return await register_component_dependency_paths(
            app_urls, table, sap_client=settings.sap_client, client=client
        )


def _print_skipped(dependencies: CustomDependencySet) -> None:
    for skipped in dependencies.skipped:
        console.print(f"[yellow]Skipped {skipped.url}:[/yellow] {skipped.reason}")


@click.group()
@click.option("--log-level", default=None, help="Log level for the JSONL log (default: INFO)")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="JSONL log file path")
def cli(log_level: str | None, log_file: str | None):
    """Resolve custom UI5 libraries used by previewed applications."""
    init_json_logging(path=log_file, level=log_level)


@cli.command("deps")
@click.argument("app_urls", nargs=-1, required=True)
@click.option("--server", help="Base URL for relative application URLs")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def deps_command(app_urls: tuple[str, ...], server: str | None, output_json: bool):
    """List custom dependencies declared in the applications' manifests.

    Example:

        flp-preview deps /apps/travel /apps/booking --server http://localhost:8080
    """
    settings = _load_settings(server)
    dependencies = asyncio.run(_collect(list(app_urls), settings))

    if output_json:
        output = {
            "dependencies": sorted(dependencies),
            "skipped": [{"url": s.url, "reason": s.reason} for s in dependencies.skipped],
        }
        print(json.dumps(output, indent=2))
        return

    if dependencies:
        console.print(f"[bold]Custom dependencies ({len(dependencies)}):[/bold]")
        for identifier in sorted(dependencies):
            console.print(f"  [cyan]{identifier}[/cyan]")
    else:
        console.print("[dim]No custom dependencies found[/dim]")
    _print_skipped(dependencies)


@cli.command("register")
@click.argument("app_urls", nargs=-1, required=True)
@click.option("--server", help="Base URL of the backend serving applications and the app index")
@click.option("--sap-client", help="SAP client forwarded to the app index (3 characters)")
@click.option("--json", "output_json", is_flag=True, help="Output loader config as JSON")
def register_command(app_urls: tuple[str, ...], server: str | None, sap_client: str | None, output_json: bool):
    """Resolve custom libraries and show the resulting loader paths.

    Example:

        flp-preview register /apps/travel --sap-client 100
    """
    settings = _load_settings(server, sap_client)
    table = LoaderPathTable()

    try:
        result = asyncio.run(_register(list(app_urls), settings, table))
    except AppIndexError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if output_json:
        print(json.dumps(table.to_loader_config(), indent=2))
        return

    _print_skipped(result.dependencies)
    if not table:
        console.print("[dim]No loader paths registered[/dim]")
        return

    rich_table = Table(title="Loader Paths", show_header=True, header_style="bold cyan")
    rich_table.add_column("Path", style="green")
    rich_table.add_column("URL")
    for prefix, url in table.items():
        rich_table.add_row(prefix, url)
    console.print(rich_table)

    unresolved = sorted(set(result.dependencies) - {p.replace("/", ".") for p in result.registered})
    if unresolved:
        console.print(f"[yellow]No servable location for:[/yellow] {', '.join(unresolved)}")


@cli.command("namespaces")
def namespaces_command():
    """List UI5 platform namespaces that never need loader paths."""
    for namespace in UI5_NAMESPACES:
        console.print(namespace)


def main():
    """Entry point for the flp-preview command."""
    cli()


if __name__ == "__main__":
    main()
