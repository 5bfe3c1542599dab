"""Command line interface: simplify path strings and typeface JSON files."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from avpath.command import PathCommandProcessor
from avpath.config import DEFAULT_CONFIG, FONT_GLYPH_CONFIG, SimplifyConfig
from avpath.font import AvFontSimplifier
from avpath.preview import AvSvgPreview
from avpath.simplifier import AvPathSimplifier
from avpath.svgpath import AvSvgPath

logger = logging.getLogger(__name__)

app = typer.Typer(help="Simplify vector path outlines")


# ---------------------------
# Helpers
# ---------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load_config(config_file: Optional[Path], base: SimplifyConfig, **overrides) -> SimplifyConfig:
    """Config from file (or _base_) with the given non-None options applied on top."""
    config = SimplifyConfig.from_json_file(config_file) if config_file else base
    changes = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(config, **changes) if changes else config


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


# ---------------------------
# Commands
# ---------------------------


@app.command()
def simplify(
    path: str = typer.Argument(..., help='Path string, e.g. "m 0 0 l 10 0 l 20 0"'),
    window_size: Optional[int] = typer.Option(None, "--window-size", "-w", help="Commands replaced at once"),
    threshold: Optional[float] = typer.Option(None, "--threshold", "-t", help="Accepted mean error"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Samples per command"),
    approximator: Optional[str] = typer.Option(None, "--approximator", "-a", help="auto, line, quadratic or cubic"),
    config_file: Optional[Path] = typer.Option(None, "--config", exists=True, help="Config JSON"),
    preview: Optional[Path] = typer.Option(None, "--preview", help="Write an SVG comparing input and output"),
    strict: bool = typer.Option(False, "--strict", help="Reject malformed commands instead of keeping them"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages"),
):
    """
    Simplify a single path string and print the result.
    """
    _setup_logging(verbose)
    try:
        config = _load_config(
            config_file,
            DEFAULT_CONFIG,
            window_size=window_size,
            threshold=threshold,
            precision=precision,
            approximator=approximator,
        )
    except (ValueError, OSError) as e:
        _fail(str(e))
    logger.debug("Using %s", config)

    cmds = AvSvgPath.parse(path)
    if strict:
        try:
            PathCommandProcessor.validate_command_sequence(cmds)
        except ValueError as e:
            _fail(str(e))

    simplified = AvPathSimplifier.simplify(
        cmds, config.build_approximator(), config.window_size, config.threshold, config.precision
    )
    logger.info("%d -> %d commands", len(cmds), len(simplified))
    typer.echo(AvSvgPath.serialize(simplified))

    if preview:
        try:
            AvSvgPreview.render(cmds, simplified, str(preview), config.precision)
        except OSError as e:
            _fail(str(e))
        logger.info("Preview written to %s", preview)


@app.command()
def font(
    input_file: Path = typer.Argument(..., exists=True, help="Typeface JSON (.json or .json.gz)"),
    output_file: Path = typer.Argument(..., help="Where to write the simplified typeface JSON"),
    config_file: Optional[Path] = typer.Option(None, "--config", exists=True, help="Config JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages"),
):
    """
    Simplify every glyph outline of a typeface JSON file.
    """
    _setup_logging(verbose)
    try:
        config = _load_config(config_file, FONT_GLYPH_CONFIG)
        data = AvFontSimplifier.load_font_data(input_file)
        simplified, stats = AvFontSimplifier.simplify_font_data(data, config)
        AvFontSimplifier.save_font_data(simplified, output_file)
    except (ValueError, OSError) as e:
        _fail(str(e))
    typer.echo(f"{stats.glyphs} glyphs, {stats.commands_before} -> {stats.commands_after} commands")


def main():
    """Entry point of the avpath script."""
    app()


if __name__ == "__main__":
    main()
