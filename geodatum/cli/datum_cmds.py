"""Datum inspection and transformation commands."""

import typer

from geodatum.catalog import default_catalog
from geodatum.cli.main import app
from geodatum.datum import Datum
from geodatum.operations import CoordinateOperationError


def _get_datum(name: str) -> Datum:
    """Look up a datum in the built-in catalog, exiting with code 1 if unknown."""
    try:
        return default_catalog().get(name)
    except KeyError as e:
        typer.echo(f"Error: {e.args[0]}", err=True)
        raise typer.Exit(code=1) from None


@app.command("list")
def list_command() -> None:
    """List the datums of the built-in catalog."""
    for datum in default_catalog():
        kind = datum.kind.value if datum.kind else "-"
        typer.echo(f"{datum.short_name:<8} {datum.identifier.key:<10} {kind:<11} {datum.name}")


@app.command("describe")
def describe_command(
    name: str = typer.Argument(..., help="Datum code or short name (e.g., 'NTF')"),
) -> None:
    """Show a datum's attributes and its cached transformation targets."""
    datum = _get_datum(name)
    typer.echo(datum.describe())
    typer.echo(f"  Name:   {datum.name}")
    typer.echo(f"  Origin: {datum.origin or '-'}")
    typer.echo(f"  Epoch:  {datum.epoch or '-'}")
    typer.echo(f"  Extent: {datum.extent.name if datum.extent else '-'}")


@app.command("resolve")
def resolve_command(
    source: str = typer.Argument(..., help="Source datum"),
    target: str = typer.Argument(..., help="Target datum"),
) -> None:
    """List the operations transforming SOURCE coordinates to TARGET."""
    source_datum = _get_datum(source)
    target_datum = _get_datum(target)

    ops = source_datum.resolve(target_datum)
    if not ops:
        typer.echo(
            f"No transformation known from {source_datum.short_name} "
            f"to {target_datum.short_name}"
        )
        return

    for index, op in enumerate(ops):
        marker = "*" if index == 0 else " "
        typer.echo(f"{marker} {op.name} (precision: {op.precision:g} m)")


@app.command("transform")
def transform_command(
    source: str = typer.Argument(..., help="Source datum"),
    target: str = typer.Argument(..., help="Target datum"),
    x: float = typer.Argument(..., help="Geocentric X in meters"),
    y: float = typer.Argument(..., help="Geocentric Y in meters"),
    z: float = typer.Argument(..., help="Geocentric Z in meters"),
) -> None:
    """Transform a geocentric coordinate from SOURCE to TARGET.

    Uses the preferred (first) resolved operation.
    """
    source_datum = _get_datum(source)
    target_datum = _get_datum(target)

    ops = source_datum.resolve(target_datum)
    if not ops:
        typer.echo(
            f"Error: no transformation known from {source_datum.short_name} "
            f"to {target_datum.short_name}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        result = ops[0].apply((x, y, z))
    except CoordinateOperationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"{result[0]:.3f} {result[1]:.3f} {result[2]:.3f}")
