from pathlib import Path
from typing import NoReturn

import typer
import yaml  # type: ignore[import-untyped]

from ..core.config import Settings
from ..core.errors import TagstitchError
from ..core.logging import log, setup_logging

app = typer.Typer(add_completion=False, help="tagstitch CLI")


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _parse_vars(pairs: list[str] | None) -> dict:
    """Turn ``name=value`` pairs into a mapping; values are read as YAML scalars."""
    variables = {}
    for pair in pairs or []:
        name, sep, raw = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {pair!r}", param_hint="--var")
        variables[name] = yaml.safe_load(raw) if raw.strip() else ""
    return variables


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
    typer.echo(f"✅ Wrote {output}", err=True)


def _fail(e: Exception) -> NoReturn:
    typer.echo(f"❌ {e}", err=True)
    if e.__cause__ is not None:
        typer.echo(f"   caused by: {type(e.__cause__).__name__}: {e.__cause__}", err=True)
    raise typer.Exit(1) from e


@app.callback()
def _init(
    ctx: typer.Context,
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.tagstitch.yaml auto-discovered)",
    ),
    log_format: str | None = typer.Option(None, "--log-format", help="json|plain|auto"),
) -> None:
    settings = Settings.load_config(config_file)
    setup_logging(log_format or settings.LOG_FORMAT)  # type: ignore[arg-type]
    ctx.obj = {"settings": settings}


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config(ctx: typer.Context) -> None:
    """Print the effective settings."""
    for k, v in _settings(ctx).model_dump().items():
        typer.echo(f"{k}={v}")


@app.command()
def expand(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template file to expand"),
    open_delim: str | None = typer.Option(None, "--open", help="Opening tag delimiter"),
    close_delim: str | None = typer.Option(None, "--close", help="Closing tag delimiter"),
    var: list[str] | None = typer.Option(None, "--var", "-v", help="Variable as NAME=VALUE (repeatable)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
) -> None:
    """Expand the {{ }} tags in a template file."""
    from ..expand import expand_file

    settings = _settings(ctx)
    delimiters = (open_delim or settings.DELIM_OPEN, close_delim or settings.DELIM_CLOSE)
    variables = _parse_vars(var)

    try:
        text = expand_file(file, delimiters, variables)
    except TagstitchError as e:
        log.error("expand.failed", path=str(file), error=str(e))
        _fail(e)

    _emit(text, output)


@app.command()
def stitch(
    ctx: typer.Context,
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source script to stitch"),
    template: str | None = typer.Option(
        None, "--template", "-t", help="Built-in template name or template path"
    ),
    var: list[str] | None = typer.Option(None, "--var", "-v", help="Template variable as NAME=VALUE"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
) -> None:
    """Merge a script into a host template as labelled chunks."""
    from ..stitch import stitch as run_stitch

    settings = _settings(ctx)
    try:
        result = run_stitch(
            script,
            template,
            context=_parse_vars(var),
            settings=settings,
        )
    except TagstitchError as e:
        log.error("stitch.failed", path=str(script), error=str(e))
        _fail(e)

    _emit(result.text, output)


@app.command()
def templates() -> None:
    """List the built-in templates."""
    from ..stitch import list_templates

    for name in list_templates():
        typer.echo(name)


if __name__ == "__main__":
    app()
