# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.


from typing import Optional

import pytest

from drun_src.context import HostContext
from drun_src.models import UserInfo
from drun_src.runspec import LOCALTIME_PATH

DRUN_ENV = ("DRUN_DOCKER", "DRUN_NETWORK", "DRUN_CHROOT_NAME", "DRUN_ECHO")


class StubContext(HostContext):
    """HostContext with pinned user, terminal and clock"""

    def __init__(
        self,
        environ=None,
        cwd="/home/u/proj",
        *,
        user: Optional[UserInfo] = None,
        hostname: Optional[str] = "buildhost",
        timezone: str = "UTC",
        localtime: bool = True,
        tty: bool = False,
        size: Optional[tuple[int, int]] = None,
    ):
        super().__init__(environ=environ or {}, cwd=cwd)
        self._user = user or UserInfo(uid=1000, gid=100, name="u", home="/home/u")
        self._hostname = hostname
        self._timezone = timezone
        self._localtime = localtime
        self._tty = tty
        self._size = size

    def exists(self, path: str) -> bool:
        if path == LOCALTIME_PATH:
            return self._localtime
        return super().exists(path)

    def user(self) -> UserInfo:
        return self._user

    def hostname(self) -> Optional[str]:
        return self._hostname

    def timezone(self) -> str:
        return self._timezone

    def stdin_isatty(self) -> bool:
        return self._tty

    def terminal_size(self) -> Optional[tuple[int, int]]:
        return self._size


class RecordingRunner:
    """ProcessRunner that records commands instead of running them"""

    def __init__(self, status: int = 0, error: Optional[BaseException] = None):
        self.status = status
        self.error = error
        self.calls: list[list[str]] = []

    def run(self, cmd: list[str]) -> int:
        self.calls.append(list(cmd))
        if self.error is not None:
            raise self.error
        return self.status


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and config file"""
    for name in DRUN_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DRUN_CONFIG", str(tmp_path / "no-such-config.yaml"))
    return monkeypatch
