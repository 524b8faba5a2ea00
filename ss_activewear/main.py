"""
S&S Activewear catalog bridge - CLI Entry Point.
Runs the stdio tool server and exposes each catalog operation as a command
using Click and Rich.
"""

import sys
import asyncio
import json
from functools import wraps
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ss_activewear.config.settings import get_settings
from ss_activewear.handlers.catalog_handlers import CatalogOperations
from ss_activewear.services.catalog_client import SSActivewearClient
from ss_activewear.utils.errors import ErrorHandler
from ss_activewear.utils.logger import setup_logging

# Results go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)

# =============================================================================
# Helper Functions
# =============================================================================

def async_command(f):
    """Decorator to run async click commands."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))
    return wrapper

def setup_logger(verbose: bool):
    """Configure logging based on verbosity."""
    setup_logging(
        level="DEBUG" if verbose else "WARNING",
        json_format=False,
        handler=RichHandler(console=err_console, rich_tracebacks=True),
    )

async def _run(operation) -> str:
    """Run one catalog operation against the live API."""
    settings = get_settings()
    async with SSActivewearClient(settings) as client:
        return await operation(CatalogOperations(client, settings))

def _emit(payload: str, output: Optional[str] = None) -> None:
    """Print a JSON payload prettily, anything else verbatim, or write it to a file."""
    if output:
        Path(output).write_text(payload, encoding="utf-8")
        err_console.print(f"[green]✓[/green] Wrote {len(payload):,} characters to {output}")
        return
    try:
        json.loads(payload)
    except ValueError:
        click.echo(payload)
    else:
        console.print_json(payload)

def _fail(error: Exception, verbose: bool = False) -> None:
    err_console.print(f"[bold red]{ErrorHandler.format_error(error)}[/bold red]")
    if verbose:
        err_console.print_exception()
    sys.exit(1)

# =============================================================================
# CLI Group
# =============================================================================

@click.group()
@click.version_option(version="1.0.0")
def cli():
    """S&S Activewear catalog bridge"""
    pass

# =============================================================================
# Commands
# =============================================================================

@cli.command()
def serve():
    """Run the stdio tool server."""
    from ss_activewear.server import run
    run()


@cli.command()
@click.argument('query')
@click.option('--brand', default=None, help='Brand filter')
@click.option('--category', default=None, help='Category filter')
@click.option('--limit', default=20, show_default=True, type=click.IntRange(min=0), help='Maximum results')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def search(query: str, brand: Optional[str], category: Optional[str], limit: int, verbose: bool):
    """
    Search products by SKU, GTIN, style number, or keyword.

    QUERY: e.g. B00760004, 2000, or "heavy cotton"
    """
    setup_logger(verbose)
    try:
        payload = await _run(
            lambda ops: ops.search_products(query, category=category, brand=brand, limit=limit)
        )
    except Exception as e:
        _fail(e, verbose)
    _emit(payload)


@cli.command()
@click.argument('identifier')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def details(identifier: str, verbose: bool):
    """
    Show the full record for a SKU, GTIN, or Style ID.
    """
    setup_logger(verbose)
    try:
        payload = await _run(lambda ops: ops.get_product_details(identifier))
    except Exception as e:
        _fail(e, verbose)
    _emit(payload)


@cli.command()
@click.argument('identifiers', nargs=-1, required=True)
@click.option('--warehouse', default=None, help='Warehouse code, e.g. IL')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def inventory(identifiers: tuple[str, ...], warehouse: Optional[str], verbose: bool):
    """
    Check warehouse inventory for one or more identifiers.
    """
    setup_logger(verbose)
    try:
        payload = await _run(lambda ops: ops.check_inventory(list(identifiers), warehouse=warehouse))
    except Exception as e:
        _fail(e, verbose)
    _emit(payload)


@cli.command()
@click.argument('identifiers', nargs=-1, required=True)
@click.option('--quantity', default=1, show_default=True, type=click.IntRange(min=1), help='Order quantity')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def pricing(identifiers: tuple[str, ...], quantity: int, verbose: bool):
    """
    Show price breaks and the unit price at a quantity.
    """
    setup_logger(verbose)
    try:
        payload = await _run(lambda ops: ops.get_pricing(list(identifiers), quantity=quantity))
    except Exception as e:
        _fail(e, verbose)
    _emit(payload)


@cli.command()
@click.option('--format', 'export_format', type=click.Choice(['csv', 'xml', 'json']), default='csv', help='Output format')
@click.option('--no-inventory', is_flag=True, help='Leave warehouse quantities out')
@click.option('--output', '-o', default=None, type=click.Path(dir_okay=False), help='Write to file instead of stdout')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def export(export_format: str, no_inventory: bool, output: Optional[str], verbose: bool):
    """
    Download the product catalog.
    """
    setup_logger(verbose)
    try:
        payload = await _run(
            lambda ops: ops.download_product_data(format=export_format, include_inventory=not no_inventory)
        )
    except Exception as e:
        _fail(e, verbose)
    _emit(payload, output)


@cli.command()
def validate_setup():
    """Check credentials and environment configuration."""
    console.print("[bold]Validating Setup...[/bold]")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Details")

    missing = settings.missing_credentials()
    for name in ("SS_ACCOUNT_NUMBER", "SS_API_KEY"):
        status = "[red]Fail[/red]" if name in missing else "[green]Pass[/green]"
        table.add_row(name, status, "missing" if name in missing else "configured")

    table.add_row("Region", "[blue]Info[/blue]", f"{settings.region} ({settings.base_url})")
    warehouses = ", ".join(settings.preferred_warehouse_codes) or "none"
    table.add_row("Preferred Warehouses", "[blue]Info[/blue]", warehouses)
    table.add_row("Debug", "[blue]Info[/blue]", "enabled" if settings.debug else "disabled")

    console.print(table)

    if missing:
        console.print(f"\n[yellow]Missing required environment variables: {', '.join(missing)}[/yellow]")
        sys.exit(1)

if __name__ == "__main__":
    cli()
