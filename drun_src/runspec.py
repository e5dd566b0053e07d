#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Assembly of the docker run argument vector.
"""

import os
from typing import Optional

from .context import HostContext
from .models import InvocationRequest, Settings, UserInfo
from .volumes import VolumeSet

LOCALTIME_PATH = "/etc/localtime"
CONTAINER_XAUTHORITY = "/root/.Xauthority"

LOCALE_VARIABLES = ("LANG", "LANGUAGE", "LC_ALL")
TERMINAL_VARIABLES = ("TERM", "COLORTERM")


class RunSpec:
    """Builder for the arguments of ``docker run``"""

    def __init__(self, docker: str = "docker"):
        self.docker = docker
        self._args: list[str] = ["run"]

    def flag(self, name: str, value: Optional[str] = None) -> "RunSpec":
        self._args.append(name)
        if value is not None:
            self._args.append(value)
        return self

    def env(self, name: str, value: str) -> "RunSpec":
        return self.flag("--env", f"{name}={value}")

    def volume(self, source: str, target: str, mode: str = "rw") -> "RunSpec":
        return self.flag("--volume", f"{source}:{target}:{mode}")

    def extend(self, args: list[str]) -> "RunSpec":
        self._args.extend(args)
        return self

    def argv(self) -> list[str]:
        """Arguments passed to the docker executable"""
        return list(self._args)

    def command_line(self) -> list[str]:
        """Full command including the docker executable"""
        return [self.docker] + self._args

    def __str__(self) -> str:
        return " ".join(self.command_line())


def _forward(spec: RunSpec, context: HostContext, names: tuple[str, ...]):
    for name in names:
        value = context.getenv(name)
        if value is not None:
            spec.env(name, value)


def build_run_spec(
    request: InvocationRequest,
    user: UserInfo,
    volumes: VolumeSet,
    context: HostContext,
    settings: Optional[Settings] = None,
) -> RunSpec:
    """Assemble docker run arguments in their fixed order"""
    if settings is None:
        settings = Settings()

    spec = RunSpec(settings.docker)
    spec.flag("--interactive").flag("--rm")
    spec.flag("--network", settings.network)
    spec.flag("--user", user.spec)
    spec.flag("--workdir", volumes.workdir)
    spec.env("debian_chroot", settings.chroot_name)

    hostname = context.hostname()
    if hostname:
        spec.flag("--hostname", hostname)

    # Timezone
    if context.exists(LOCALTIME_PATH):
        spec.volume(LOCALTIME_PATH, LOCALTIME_PATH, "ro")
    else:
        spec.env("TZ", context.timezone())

    _forward(spec, context, LOCALE_VARIABLES)

    # X11
    display = context.getenv("DISPLAY")
    if display is not None:
        spec.env("DISPLAY", display)
        xauthority = context.getenv("XAUTHORITY")
        if xauthority is None:
            xauthority = os.path.join(user.home, ".Xauthority")
        if context.exists(xauthority):
            spec.volume(xauthority, CONTAINER_XAUTHORITY, "ro")
            spec.env("XAUTHORITY", CONTAINER_XAUTHORITY)

    _forward(spec, context, TERMINAL_VARIABLES)

    if context.stdin_isatty():
        spec.flag("--tty")
        size = context.terminal_size()
        if size is not None:
            columns, lines = size
            spec.env("COLUMNS", str(columns))
            spec.env("LINES", str(lines))

    for path in volumes:
        spec.volume(path, path, "rw")

    spec.extend([request.image] + request.command)
    return spec
