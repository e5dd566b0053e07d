#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Bind mount derivation from command arguments.
"""

import os
from typing import Iterable, Iterator, Optional

from .context import HostContext

ROOT_DIR = os.sep


def derive_mount_root(argument: str, context: HostContext) -> Optional[str]:
    """Nearest existing directory for a path-like argument.

    The argument is normalised and its last component stripped until an
    existing entry is found. A file yields its containing directory.
    Returns None when no prefix of the argument exists. Absolute arguments
    always reach an existing prefix, at worst ROOT_DIR.
    """
    path = os.path.normpath(argument)
    while path and not context.exists(path):
        parent = os.path.dirname(path)
        if parent == path:
            return None
        path = parent

    if not path:
        return None

    root = context.abspath(path)
    if not context.is_dir(path):
        root = os.path.dirname(root)
    return root


class VolumeSet:
    """Ordered host directories mounted read-write at the same path"""

    def __init__(self, workdir: str):
        self._paths = [workdir]

    @property
    def workdir(self) -> str:
        return self._paths[0]

    def add(self, path: str) -> None:
        # duplicates are kept, docker accepts repeated identical binds
        self._paths.append(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"VolumeSet({self._paths!r})"


def derive_volumes(
    workdir: str, arguments: Iterable[str], context: HostContext
) -> VolumeSet:
    """Working directory followed by the mount root of every path argument"""
    volumes = VolumeSet(workdir)
    for argument in arguments:
        root = derive_mount_root(argument, context)
        if root is not None:
            volumes.add(root)
    return volumes
