#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
External process execution.
"""

import signal
import subprocess
from typing import Protocol


class ProcessRunner(Protocol):
    """Runs a command with inherited stdio and returns its exit status"""

    def run(self, cmd: list[str]) -> int: ...


class SubprocessRunner:
    """ProcessRunner backed by subprocess.run"""

    def run(self, cmd: list[str]) -> int:
        """Run ``cmd`` in the foreground.

        Raises OSError when the executable cannot be started. A child
        killed by a signal reports 128 + signal number, as a shell would.
        """
        result = subprocess.run(cmd)
        if result.returncode < 0:
            return 128 + abs(result.returncode)
        return result.returncode


def signal_name(status: int) -> str:
    """Human readable form of an exit status"""
    if status > 128:
        try:
            return signal.Signals(status - 128).name
        except ValueError:
            pass
    return f"exit status {status}"
