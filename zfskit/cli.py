#!/usr/bin/env python3
"""zfskit CLI - inspect and configure ZFS pools and datasets."""
from typing import Dict, List, Optional

import humanfriendly
import typer
from rich.console import Console
from rich.table import Table

from zfskit.core.config import ZFSKitConfig, get_config
from zfskit.core.errors import ZFSKitError
from zfskit.core.logger import get_logger, set_verbose, setup_file_logging
from zfskit.core.properties import Properties
from zfskit.core.runner import SudoRunner
from zfskit.core.zfs_manager import ZFSManager
from zfskit.models.dataset import DatasetType, join_types

app = typer.Typer(
    name="zfskit",
    help="""zfskit - typed access to zfs and zpool

Quick start:
  zfskit pools                    # Pool health and capacity
  zfskit datasets tank            # Datasets below tank
  zfskit dataset tank/media       # All properties of one dataset
  zfskit set tank/media atime=off # Change a property
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _manager(ctx: typer.Context) -> ZFSManager:
    return ctx.obj["manager"]


def _fail(err: Exception):
    console.print(f"[red]Error:[/red] {err}")
    raise typer.Exit(1) from err


def _size(value: int, ok: bool) -> str:
    if not ok:
        return "-"
    return humanfriendly.format_size(value, binary=True)


def _parse_assignments(assignments: List[str]) -> Dict[str, str]:
    props: Dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep:
            raise typer.BadParameter(f"expected property=value, got '{assignment}'")
        props[name] = value
    return props


def _properties_table(title: str, properties: Properties) -> Table:
    table = Table(title=title)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for name in sorted(properties):
        prop = properties[name]
        table.add_row(prop.name, prop.value, prop.source)
    return table


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    sudo: bool = typer.Option(False, "--sudo", help="Run zfs/zpool via sudo -n"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every executed command"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
) -> None:
    """Set up configuration, logging and the command runner."""
    try:
        config: ZFSKitConfig = ZFSKitConfig.from_file(config_path) if config_path else get_config()
    except (FileNotFoundError, ZFSKitError) as err:
        _fail(err)

    if verbose:
        set_verbose(True)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    runner = SudoRunner() if sudo and not config.mock else None
    ctx.obj = {"manager": ZFSManager(runner=runner, config=config)}


@app.command("pools")
def list_pools(ctx: typer.Context) -> None:
    """Show health and capacity of all imported pools."""
    try:
        pools = _manager(ctx).list_pools(
            "health", "size", "allocated", "free", "capacity", "fragmentation",
        )
    except ZFSKitError as err:
        _fail(err)

    table = Table(title="ZFS Pools")
    for column in ("Name", "Health", "Size", "Allocated", "Free", "Capacity", "Fragmentation"):
        table.add_column(column)

    for pool in sorted(pools, key=lambda p: p.name):
        health, _ = pool.health()
        style = "green" if pool.is_healthy else "red"
        capacity, cap_ok = pool.capacity()
        fragmentation, frag_ok = pool.fragmentation()
        table.add_row(
            pool.name,
            f"[{style}]{health or '-'}[/{style}]",
            _size(*pool.size()),
            _size(*pool.allocated()),
            _size(*pool.free()),
            f"{capacity}%" if cap_ok else "-",
            f"{fragmentation}%" if frag_ok else "-",
        )

    console.print(table)


@app.command("pool")
def show_pool(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Pool name"),
    properties: Optional[List[str]] = typer.Argument(None, help="Properties to show (default: all)"),
) -> None:
    """Show the properties of one pool."""
    try:
        pool = _manager(ctx).get_pool(name, *(properties or []))
    except ZFSKitError as err:
        _fail(err)

    console.print(_properties_table(f"Pool {pool.name}", pool.properties))


@app.command("datasets")
def list_datasets(
    ctx: typer.Context,
    filter: str = typer.Argument("", help="Dataset to start from (default: all pools)"),
    depth: int = typer.Option(0, "--depth", "-d", help="Recursion depth (0 = unlimited)"),
    types: Optional[List[DatasetType]] = typer.Option(None, "--type", "-t", help="Dataset type, repeatable"),
) -> None:
    """List datasets with usage and mountpoint."""
    dataset_type = join_types(*types) if types else DatasetType.FILESYSTEM
    try:
        datasets = _manager(ctx).list_datasets(
            filter, depth, dataset_type, ("type", "used", "available", "mountpoint"),
        )
    except ZFSKitError as err:
        _fail(err)

    table = Table(title="ZFS Datasets")
    for column in ("Name", "Type", "Used", "Available", "Mountpoint"):
        table.add_column(column)

    for dataset in sorted(datasets, key=lambda d: d.name):
        kind, _ = dataset.dataset_type()
        mountpoint, mp_ok = dataset.mountpoint()
        table.add_row(
            dataset.name,
            str(kind) or "-",
            _size(*dataset.used()),
            _size(*dataset.available()),
            (mountpoint or "none") if mp_ok else "-",
        )

    console.print(table)


@app.command("dataset")
def show_dataset(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Full dataset name"),
    properties: Optional[List[str]] = typer.Argument(None, help="Properties to show (default: all)"),
) -> None:
    """Show the properties of one dataset."""
    try:
        dataset = _manager(ctx).get_dataset(name, *(properties or []))
    except ZFSKitError as err:
        _fail(err)

    console.print(_properties_table(f"Dataset {dataset.name}", dataset.properties))


@app.command("set")
def set_properties(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Dataset or pool name"),
    assignments: List[str] = typer.Argument(..., help="property=value pairs"),
    pool: bool = typer.Option(False, "--pool", "-p", help="Set pool properties instead of dataset properties"),
) -> None:
    """Set one or more properties.

    Dataset properties that already hold the value are skipped. Sizes are
    compared in bytes, so quota=10G matches a current 10737418240.
    """
    props = _parse_assignments(assignments)
    manager = _manager(ctx)

    try:
        if pool:
            manager.set_pool_properties(name, props)
            changed = sorted(props)
        else:
            changed = manager.sync_dataset_properties(name, props)
    except ZFSKitError as err:
        _fail(err)

    if changed:
        console.print(f"[green]✓[/green] Updated {name}: {', '.join(changed)}")
    else:
        console.print(f"[green]✓[/green] {name} already up to date")


if __name__ == "__main__":
    app()
