"""Command line interface for demoshader.

This module provides commands to build the shader definition of a demo, to
print the assembled GLSL of a pass, and to rebuild on every change.
"""

import asyncio
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from demoshader.build import build_shader_definition
from demoshader.config import Config, load_config
from demoshader.export import render_glsl, write_header
from demoshader.pipeline.errors import ShaderBuildError
from demoshader.pipeline.models import ShaderDefinition

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="demoshader",
    help=(
        "Assemble the shaders of a size-constrained demo into one compilation "
        "unit per pass. Commands: build, show, watch."
    ),
    add_completion=False,
)

DIRECTORY_OPTION = typer.Option(
    None, "--directory", "--dir", "-d", help="Home of your demo-specific files"
)
MINIFY_OPTION = typer.Option(
    None, "--minify/--no-minify", "-m/-M", help="Minify the shader code"
)
CAPTURE_OPTION = typer.Option(
    False, "--capture", "-c", help="Force the capture resolution"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logs")
OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Header path (default: <build>/shaders.h)"
)


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _load_config(directory: Path | None, minify: bool | None, capture: bool) -> Config:
    try:
        return load_config(
            directory, overrides={"minify": minify, "capture": capture or None}
        )
    except ShaderBuildError as e:
        logger.error(e.message)
        raise typer.Exit(1) from e


def _build(config: Config) -> ShaderDefinition:
    """Run the pipeline, turning build failures into a CLI exit."""
    try:
        return asyncio.run(build_shader_definition(config))
    except ShaderBuildError as e:
        logger.error(f"Shader build failed: {e.message}")
        raise typer.Exit(1) from e


def _header_path(config: Config, output: Path | None) -> Path:
    return output or config.build_directory / "shaders.h"


@typed_command(app.command("build"))
def build_command(
    directory: Optional[Path] = DIRECTORY_OPTION,
    minify: Optional[bool] = MINIFY_OPTION,
    capture: bool = CAPTURE_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Build the shaders and write them as a C header.

    Example: demoshader build --dir demo --no-minify
    """
    _setup_logging(verbose)
    config = _load_config(directory, minify, capture)

    definition = _build(config)
    write_header(definition, _header_path(config, output))
    logger.info(f"✓ Built {len(definition.passes)} pass(es)")


@typed_command(app.command("show"))
def show_command(
    directory: Optional[Path] = DIRECTORY_OPTION,
    minify: Optional[bool] = MINIFY_OPTION,
    capture: bool = CAPTURE_OPTION,
    pass_index: int = typer.Option(0, "--pass", "-p", help="Pass to show"),
    stage: str = typer.Option(
        "fragment", "--stage", "-s", help="Stage to show (vertex, fragment)"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the assembled GLSL of one pass stage.

    Example: demoshader show --pass 1 --stage vertex
    """
    _setup_logging(verbose)
    config = _load_config(directory, minify, capture)

    definition = _build(config)
    try:
        typer.echo(render_glsl(definition, pass_index, stage))
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e


class DemoChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler flagging changes in the demo directory."""

    def __init__(self, output: Path):
        self.output = os.path.abspath(output)
        self.needs_rebuild = True

    def on_any_event(self, event: watchdog.events.FileSystemEvent) -> None:
        if event.is_directory or os.path.abspath(event.src_path) == self.output:
            return
        logger.info(f"Detected changes in {event.src_path}")
        self.needs_rebuild = True


@typed_command(app.command("watch"))
def watch_command(
    directory: Optional[Path] = DIRECTORY_OPTION,
    minify: Optional[bool] = MINIFY_OPTION,
    capture: bool = CAPTURE_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Rebuild the shader header whenever a demo file changes.

    Example: demoshader watch --dir demo
    """
    _setup_logging(verbose)
    config = _load_config(directory, minify, capture)
    header_path = _header_path(config, output)

    handler = DemoChangeHandler(header_path)
    observer = watchdog.observers.Observer()
    observer.schedule(handler, path=str(config.directory), recursive=True)
    observer.start()
    logger.info(f"Watching {config.directory} (press Ctrl+C to exit)...")

    try:
        while True:
            if handler.needs_rebuild:
                handler.needs_rebuild = False
                try:
                    # Config files may have changed too
                    config = load_config(
                        directory,
                        overrides={"minify": minify, "capture": capture or None},
                    )
                    definition = asyncio.run(build_shader_definition(config))
                    write_header(definition, header_path)
                except ShaderBuildError as e:
                    logger.error(f"Shader build failed: {e.message}")
            time.sleep(0.1)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
