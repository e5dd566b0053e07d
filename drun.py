#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Run a command in a new docker container with the working directory mounted.

This is the script entry point that delegates to drun_src/.
"""

from drun_src.commands import main

if __name__ == "__main__":
    main()
