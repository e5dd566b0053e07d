#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Container launcher package.
"""

__version__ = "1.1.0"

from .commands import app, main
from .context import HostContext
from .launcher import (
    ContainerExitError,
    ContainerStartError,
    LaunchError,
    Launcher,
    ResolutionError,
)
from .models import InvocationRequest, Settings, UserInfo
from .process import ProcessRunner, SubprocessRunner
from .runspec import RunSpec, build_run_spec
from .volumes import VolumeSet, derive_mount_root, derive_volumes

__all__ = [
    "__version__",
    # Commands
    "app",
    "main",
    # Launcher
    "Launcher",
    "LaunchError",
    "ResolutionError",
    "ContainerStartError",
    "ContainerExitError",
    # Host access
    "HostContext",
    "ProcessRunner",
    "SubprocessRunner",
    # Models
    "InvocationRequest",
    "UserInfo",
    "Settings",
    # Run assembly
    "RunSpec",
    "build_run_spec",
    "VolumeSet",
    "derive_mount_root",
    "derive_volumes",
]
