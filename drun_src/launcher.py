#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Container launcher: derive mounts, assemble docker run, print or execute.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from .context import HostContext
from .models import InvocationRequest, Settings, UserInfo
from .process import ProcessRunner, SubprocessRunner, signal_name
from .runspec import RunSpec, build_run_spec
from .volumes import ROOT_DIR, VolumeSet, derive_volumes

# Rich Console for diagnostics
console = Console(stderr=True)


# ============================================================================
# Errors
# ============================================================================


class LaunchError(Exception):
    """Base class for launcher failures"""

    exit_code = 1


class ResolutionError(LaunchError):
    """Working directory, user or path could not be resolved"""


class ContainerStartError(LaunchError):
    """The docker executable could not be started"""


class ContainerExitError(LaunchError):
    """docker exited with a non-zero status"""

    def __init__(self, status: int):
        super().__init__(signal_name(status))
        self.status = status


# ============================================================================
# Core Launcher
# ============================================================================


class Launcher:
    """Builds and runs one container invocation"""

    def __init__(
        self,
        context: Optional[HostContext] = None,
        settings: Optional[Settings] = None,
        runner: Optional[ProcessRunner] = None,
        output: Optional[Console] = None,
    ):
        self.context = context or HostContext()
        self.settings = settings or Settings()
        self.runner = runner or SubprocessRunner()
        self.output = output or Console()

    def resolve_workdir(self) -> str:
        try:
            return self.context.getcwd()
        except OSError as e:
            raise ResolutionError(f"cannot resolve working directory: {e}") from e

    def resolve_user(self) -> UserInfo:
        try:
            return self.context.user()
        except (KeyError, OSError) as e:
            raise ResolutionError(f"cannot resolve current user: {e}") from e

    def derive_volumes(self, workdir: str, arguments: list[str]) -> VolumeSet:
        try:
            volumes = derive_volumes(workdir, arguments, self.context)
        except OSError as e:
            raise ResolutionError(f"cannot resolve path: {e}") from e

        # docker refuses / as a bind destination
        if ROOT_DIR in list(volumes)[1:]:
            raise ResolutionError(
                "cannot mount /: an argument resolves to the filesystem root"
            )
        return volumes

    def build(self, request: InvocationRequest) -> RunSpec:
        """Assemble the docker run command for ``request``"""
        if request.image is None:
            raise LaunchError("no image given")
        workdir = self.resolve_workdir()
        user = self.resolve_user()
        volumes = self.derive_volumes(workdir, request.command)
        return build_run_spec(request, user, volumes, self.context, self.settings)

    def execute(self, spec: RunSpec) -> int:
        """Run ``spec`` with inherited stdio; raise on failure"""
        cmd = spec.command_line()
        if self.settings.echo:
            console.print(
                f"[dim]Running: {escape(' '.join(cmd))}[/dim]",
                highlight=False,
                soft_wrap=True,
            )

        try:
            status = self.runner.run(cmd)
        except OSError as e:
            raise ContainerStartError(f"cannot start {cmd[0]}: {e}") from e
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            return 130

        if status != 0:
            raise ContainerExitError(status)
        return 0

    def launch(self, request: InvocationRequest) -> int:
        """Print (dry run) or execute the container command"""
        spec = self.build(request)
        if request.dry:
            self.output.print(
                str(spec), markup=False, highlight=False, emoji=False, soft_wrap=True
            )
            return 0
        return self.execute(spec)
