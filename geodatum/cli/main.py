"""Main Typer CLI application for datum tools."""

from pathlib import Path

import typer

from geodatum.catalog import configure
from geodatum.config import GeodatumConfig

app = typer.Typer(
    help="Geodetic datum catalog and transformation resolution",
    no_args_is_help=True,
)


@app.callback()
def main(
    config: Path | None = typer.Option(
        None, "--config", help="YAML settings file with a 'geodatum' section"
    ),
) -> None:
    """Load settings before running a command."""
    if config is None:
        return
    try:
        configure(GeodatumConfig.from_yaml(str(config)))
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def _register_commands() -> None:
    """
    Import command modules to register commands with the app.

    Commands use the @app.command() decorator and register themselves when
    the module is imported.
    """
    from geodatum.cli import datum_cmds

    _ = datum_cmds


_register_commands()


if __name__ == "__main__":
    app()
