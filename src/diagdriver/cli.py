# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point for collecting analysis tool diagnostics."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from .config import ConfigError, DriverSettings, load_settings
from .driver import StandaloneDriver
from .errors import DriverError
from .models import serialize_result
from .reporting import fail, render_result

app = typer.Typer(help="Collect and normalise analysis tool diagnostics.", no_args_is_help=True)


@app.callback()
def main() -> None:
    """Collect and normalise analysis tool diagnostics."""


def _build_settings(
    config: Path | None,
    *,
    project_root: Path | None,
    analyzer: str | None,
) -> DriverSettings:
    overrides = {"project_root": project_root, "analyzer": analyzer}
    if config is not None:
        return load_settings(config, **overrides)
    return DriverSettings.model_validate({key: value for key, value in overrides.items() if value is not None})


@app.command()
def collect(
    directory: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=False, dir_okay=True, help="Target project directory."),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", exists=True, dir_okay=False, help="TOML or pyproject.toml file with driver settings."),
    ] = None,
    project_root: Annotated[
        Path | None,
        typer.Option("--project-root", file_okay=False, help="Directory holding the build and the tool binary."),
    ] = None,
    analyzer: Annotated[str | None, typer.Option("--analyzer", help="Analyzer key in the tool report.")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit the result as JSON.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Log build and tool commands.")] = False,
) -> None:
    """Run the analysis tool on DIRECTORY and print one diagnostic per position."""

    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    use_emoji = not no_emoji
    use_color = not no_color
    try:
        settings = _build_settings(config, project_root=project_root, analyzer=analyzer)
        result = StandaloneDriver(settings).run(directory)
    except (ConfigError, DriverError) as exc:
        fail(exc, color=use_color, use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(serialize_result(result), indent=2))
        return
    render_result(result, color=use_color)


__all__ = ["app", "collect", "main"]
