#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Read-only view of the invoking host.
"""

import os
import pwd
import socket
import sys
from datetime import datetime
from typing import Mapping, Optional

from .models import UserInfo


class HostContext:
    """Environment, filesystem and terminal lookups used by the launcher.

    Every host read goes through this object so that tests can pin the
    environment and the working directory. Relative paths are resolved
    against ``cwd``, not against the process working directory.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
    ):
        self.environ = dict(os.environ if environ is None else environ)
        self._cwd = cwd

    def getenv(self, name: str) -> Optional[str]:
        """Value of an environment variable, None when unset"""
        return self.environ.get(name)

    def getcwd(self) -> str:
        """Absolute working directory"""
        if self._cwd is None:
            return os.getcwd()
        return os.path.abspath(self._cwd)

    def abspath(self, path: str) -> str:
        """Absolute, normalised form of ``path``"""
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(self.getcwd(), path))

    def exists(self, path: str) -> bool:
        return os.path.exists(self.abspath(path)) if path else False

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(self.abspath(path)) if path else False

    def user(self) -> UserInfo:
        """Invoking user (raises KeyError when the uid has no passwd entry)"""
        uid = os.getuid()
        gid = os.getgid()
        entry = pwd.getpwuid(uid)
        return UserInfo(uid=uid, gid=gid, name=entry.pw_name, home=entry.pw_dir)

    def hostname(self) -> Optional[str]:
        try:
            return socket.gethostname() or None
        except OSError:
            return None

    def timezone(self) -> str:
        """Abbreviated name of the local time zone (e.g. 'CET')"""
        return datetime.now().astimezone().tzname() or "UTC"

    def stdin_isatty(self) -> bool:
        try:
            return sys.stdin is not None and sys.stdin.isatty()
        except ValueError:
            # stdin already closed
            return False

    def terminal_size(self) -> Optional[tuple[int, int]]:
        """(columns, lines) of the terminal attached to stdin"""
        try:
            size = os.get_terminal_size(sys.stdin.fileno())
        except (AttributeError, OSError, ValueError):
            return None
        return size.columns, size.lines
