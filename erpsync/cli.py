"""Click-based CLI for erpsync - bulk import and delete of Odoo data."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.markup import escape

from erpsync import __version__
from erpsync.client import OdooClient
from erpsync.config import (
    ErpSyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from erpsync.errors import CatalogError, EmptySelectionError, RemoteError, SelectionError
from erpsync.output import Console, create_console
from erpsync.sync import (
    Classification,
    EntityCatalog,
    HistoryManager,
    ImportMode,
    JobMode,
    RunRecord,
    SelectionModel,
    SyncExecutor,
    SyncJob,
    summarize,
    validate_job,
)
from erpsync.utils.paths import expand_path

EXIT_PARTIAL = 1
EXIT_EMPTY_SELECTION = 2


@click.group()
@click.version_option(version=__version__, prog_name="erpsync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (default: $ERPSYNC_CONFIG or ~/.config/erpsync/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """erpsync - bulk import and delete of Odoo ERP data.

    Imports entities (countries, clients, products, orders, safes, ...)
    in dependency order and deletes them in the exact reverse order.
    One failing entity never stops the others.

    \b
    Examples:
        erpsync entities                      # Show catalog and order
        erpsync import countries clients      # Import two entities
        erpsync import --all --mode replace   # Import everything
        erpsync delete safes safe_transactions
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _load_config(ctx: click.Context) -> ErpSyncConfig:
    """Load config or exit with an error message."""
    try:
        return load_config(ctx.obj.get("config_path"))
    except FileNotFoundError as e:
        create_console().print_error(escape(str(e)))
        sys.exit(1)
    except ValidationError as e:
        create_console().print_error(f"Invalid configuration:\n{escape(str(e))}")
        sys.exit(1)


def _console_for(config: ErpSyncConfig, verbose: bool = False) -> Console:
    return create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)


def _load_catalog(config: ErpSyncConfig, console: Console) -> EntityCatalog:
    """Build the entity catalog or exit with an error message."""
    try:
        return EntityCatalog.from_config(config)
    except CatalogError as e:
        console.print_error(f"Invalid entity catalog: {escape(str(e))}")
        sys.exit(1)


def _history_for(config: ErpSyncConfig) -> HistoryManager:
    path = expand_path(config.output.history_file) if config.output.history_file else None
    return HistoryManager(path, limit=config.output.history_limit)


def _build_selection(
    catalog: EntityCatalog,
    console: Console,
    entities: tuple[str, ...],
    select_all: bool,
) -> SelectionModel:
    """Fresh selection for one job. Unknown keys exit; disabled keys are reported and ignored."""
    selection = SelectionModel(catalog)

    if select_all:
        selection.select_all()
        return selection

    unknown = [key for key in entities if key not in catalog]
    if unknown:
        console.print_error(f"Unknown entities: {escape(', '.join(unknown))}")
        console.print("[dim]→ List entities: erpsync entities[/dim]")
        sys.exit(1)

    for key in entities:
        descriptor = catalog.get(key)
        if descriptor is not None and not descriptor.enabled:
            console.print_warning(f"Entity '{key}' is disabled and will be ignored")
        selection.select(key)

    return selection


def _require_integration(config: ErpSyncConfig, console: Console) -> None:
    if not config.odoo.enabled:
        console.print_error("Odoo integration is disabled. Set 'odoo.enabled: true' in the configuration.")
        sys.exit(1)


def _run_job(
    config: ErpSyncConfig,
    catalog: EntityCatalog,
    console: Console,
    job: SyncJob,
    *,
    assume_yes: bool,
) -> None:
    """Validate, confirm, execute and report a job, then exit with its status."""
    try:
        validate_job(job, catalog)
    except EmptySelectionError:
        action = "import" if job.is_import else "delete"
        console.print_warning(f"No entities selected to {action}. Pass entity keys or --all.")
        sys.exit(EXIT_EMPTY_SELECTION)
    except (KeyError, SelectionError) as e:
        console.print_error(escape(str(e)))
        sys.exit(1)

    with OdooClient(config.connection) as client:
        executor = SyncExecutor(catalog, client)
        order = executor.resolve_order(job)

        if job.mode == JobMode.DELETE:
            console.print_plan(catalog, order, job.mode)
            console.print("[bold red]Deleted data cannot be restored.[/bold red]")
            if not assume_yes and not console.confirm("Delete the selected data?", default=False):
                console.print_warning("Delete cancelled")
                return
        elif console.verbose:
            console.print_plan(catalog, order, job.mode)

        started_at = datetime.now()
        description = "Importing" if job.is_import else "Deleting"
        with console.progress(len(order), description=description) as progress:
            results = executor.run(job, on_progress=progress)

    console.print_results(results, mode=job.mode)
    console.print_summary(results, mode=job.mode, dry_run=job.dry_run)

    try:
        _history_for(config).record(RunRecord.from_job(job, results, started_at))
    except OSError as e:
        console.print_warning(f"Could not write run history: {escape(str(e))}")

    if summarize(results).classification != Classification.SUCCESS:
        sys.exit(EXIT_PARTIAL)


@cli.command()
@click.option("--all", "-a", "show_all", is_flag=True, help="Include disabled entities")
@click.pass_context
def entities(ctx: click.Context, show_all: bool) -> None:
    """List importable entities in import order.

    \b
    Examples:
        erpsync entities          # Enabled entities
        erpsync entities --all    # Include disabled entities
    """
    config = _load_config(ctx)
    console = _console_for(config)
    catalog = _load_catalog(config, console)
    console.print_entities(catalog, show_all=show_all)


@cli.command("import")
@click.argument("entity_keys", nargs=-1)
@click.option("--all", "-a", "select_all", is_flag=True, help="Select every enabled entity")
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in ImportMode]),
    default=ImportMode.UPDATE.value,
    show_default=True,
    help="update merges into existing records, replace overwrites them",
)
@click.option("--dry-run", "-n", is_flag=True, help="Ask the backend to report without writing")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompts")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def import_(
    ctx: click.Context,
    entity_keys: tuple[str, ...],
    select_all: bool,
    mode: str,
    dry_run: bool,
    yes: bool,
    verbose: bool,
) -> None:
    """Import entities from Odoo in dependency order.

    \b
    Examples:
        erpsync import countries governorates clients
        erpsync import --all --mode replace
        erpsync import products --dry-run
    """
    config = _load_config(ctx)
    console = _console_for(config, verbose)
    _require_integration(config, console)
    catalog = _load_catalog(config, console)

    selection = _build_selection(catalog, console, entity_keys, select_all)
    selection.set_mode(mode)
    job = selection.to_job(JobMode.IMPORT, dry_run=dry_run)

    _run_job(config, catalog, console, job, assume_yes=yes)


@cli.command()
@click.argument("entity_keys", nargs=-1)
@click.option("--all", "-a", "select_all", is_flag=True, help="Select every enabled entity")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def delete(
    ctx: click.Context,
    entity_keys: tuple[str, ...],
    select_all: bool,
    yes: bool,
    verbose: bool,
) -> None:
    """Delete imported data, most dependent entities first.

    \b
    Examples:
        erpsync delete safes safe_transactions
        erpsync delete --all --yes
    """
    config = _load_config(ctx)
    console = _console_for(config, verbose)
    _require_integration(config, console)
    catalog = _load_catalog(config, console)

    selection = _build_selection(catalog, console, entity_keys, select_all)
    job = selection.to_job(JobMode.DELETE)

    _run_job(config, catalog, console, job, assume_yes=yes)


@cli.command("test-connection")
@click.pass_context
def test_connection(ctx: click.Context) -> None:
    """Check that the backend can log in to Odoo with the configured credentials."""
    config = _load_config(ctx)
    console = _console_for(config)

    try:
        with OdooClient(config.connection) as client:
            response = client.test_connection(config.odoo)
    except RemoteError as e:
        console.print_error(escape(str(e)))
        sys.exit(1)

    console.print_success(escape(response.get("message") or "Connection successful"))


@cli.command()
@click.option("--limit", "-l", type=click.IntRange(min=1), default=10, show_default=True, help="Number of runs")
@click.option("--clear", is_flag=True, help="Delete all recorded runs")
@click.pass_context
def history(ctx: click.Context, limit: int, clear: bool) -> None:
    """Show recent import and delete runs."""
    config = _load_config(ctx)
    console = _console_for(config)
    manager = _history_for(config)

    if clear:
        manager.clear()
        console.print_success("History cleared")
        return

    console.print_history(manager.latest(limit))


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group("config")
def config_group() -> None:
    """Configuration file commands."""
    pass


@config_group.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Create the default configuration file."""
    console = create_console()
    path, created = ensure_config_exists(ctx.obj.get("config_path"), overwrite=force)

    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_warning(f"Configuration already exists: {path} (use --force to overwrite)")


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration (password hidden)."""
    config = _load_config(ctx)
    console = _console_for(config)

    data = config.model_dump(mode="json", exclude={"entities"})
    if data["odoo"].get("password"):
        data["odoo"]["password"] = "********"

    for section, values in data.items():
        console.print(f"[bold]{section}[/bold]")
        for key, value in values.items():
            console.print(f"  {key}: {escape(str(value))}")
    console.print(f"[bold]entities[/bold]: {len(config.entities)} ({len(config.get_enabled_entities())} enabled)")


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file and entity dependency graph."""
    console = create_console()
    path = ctx.obj.get("config_path") or get_config_path()
    is_valid, errors = validate_config_file(path)

    if is_valid:
        console.print_success(f"Configuration is valid: {path}")
        return

    console.print_error(f"Configuration is invalid: {path}")
    for error in errors:
        console.print(f"  [red]•[/red] {escape(error)}")
    sys.exit(1)


@config_group.command("path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file path."""
    click.echo(str(ctx.obj.get("config_path") or get_config_path()))


if __name__ == "__main__":
    cli()
