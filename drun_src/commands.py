#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI entry point for the container launcher.
"""

from typing import Annotated, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_settings
from .context import HostContext
from .launcher import ContainerExitError, LaunchError, Launcher
from .models import InvocationRequest
from .process import SubprocessRunner

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="drun",
    help="Run a command in a new container",
    add_completion=False,
)


def _fail(message: str, code: int = 1):
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(code)


def _print_help(ctx: typer.Context):
    # the rich formatter renders help itself and hands back an empty string
    text = ctx.get_help()
    if text:
        console.print(text, markup=False, highlight=False)


# ============================================================================
# CLI Commands
# ============================================================================


@app.command(
    context_settings={
        # -h/--help is a regular flag below so it lands in InvocationRequest
        "help_option_names": [],
        # everything after IMAGE belongs to the container command
        "allow_interspersed_args": False,
    },
)
def run(
    ctx: typer.Context,
    image: Annotated[
        Optional[str],
        typer.Argument(metavar="IMAGE", help="Image to run", show_default=False),
    ] = None,
    command: Annotated[
        Optional[list[str]],
        typer.Argument(
            metavar="[COMMAND] [ARG...]",
            help="Command and arguments run inside the container",
            show_default=False,
        ),
    ] = None,
    dry: Annotated[
        bool, typer.Option("-dry", "--dry", help="Print the command instead of running it")
    ] = False,
    version: Annotated[
        bool, typer.Option("-v", "--version", help="Show version and exit")
    ] = False,
    show_help: Annotated[
        bool, typer.Option("-h", "--help", help="Show this message and exit")
    ] = False,
):
    """Run a command in a new container.

    The working directory and every existing directory named by an argument
    (or containing a file named by an argument) are bind-mounted read-write at
    the same path.
    """
    try:
        request = InvocationRequest(
            image=image, command=command or [], dry=dry, version=version, help=show_help
        )
    except ValueError as e:
        _fail(str(e))

    if request.help:
        _print_help(ctx)
        raise typer.Exit()

    if request.version:
        console.print(__version__, markup=False, highlight=False)
        raise typer.Exit()

    if request.image is None:
        err_console.print(ctx.get_usage(), markup=False, highlight=False)
        err_console.print(f"Try '{ctx.command_path} -h' for help.", markup=False)
        _fail("Missing argument 'IMAGE'.")

    context = HostContext()
    try:
        settings = load_settings(context)
    except (ValueError, OSError, yaml.YAMLError) as e:
        _fail(f"invalid settings: {e}")

    launcher = Launcher(
        context=context,
        settings=settings,
        runner=SubprocessRunner(),
        output=console,
    )
    try:
        status = launcher.launch(request)
    except ContainerExitError as e:
        _fail(f"{settings.docker} failed: {e}", e.exit_code)
    except LaunchError as e:
        _fail(str(e), e.exit_code)

    if status != 0:
        raise typer.Exit(status)


def main():
    """Main entry point"""
    app()
