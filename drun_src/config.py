#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Settings file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

from .context import HostContext
from .models import Settings

ENV_PREFIX = "DRUN_"


def settings_path(context: HostContext) -> Path:
    """Location of the optional YAML settings file"""
    explicit = context.getenv("DRUN_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    config_home = context.getenv("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "drun" / "config.yaml"

    home = context.getenv("HOME")
    base = Path(home) if home else Path.home()
    return base / ".config" / "drun" / "config.yaml"


def environment_overrides(context: HostContext) -> dict[str, Any]:
    """DRUN_* variables of the context, keyed by settings field"""
    overrides: dict[str, Any] = {}
    for name, value in context.environ.items():
        if not name.upper().startswith(ENV_PREFIX):
            continue
        field = name[len(ENV_PREFIX) :].lower()
        if field in Settings.model_fields:
            overrides[field] = value
    return overrides


def load_settings(context: Optional[HostContext] = None) -> Settings:
    """Load settings: DRUN_* environment > YAML file > defaults

    The context's environment is layered over the file. pydantic-settings
    additionally reads the process environment, which wins over both; for the
    CLI the two environments are the same mapping.
    """
    context = context or HostContext()
    path = settings_path(context)

    data: dict[str, Any] = {}
    if path.is_file():
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(
                f"{path}: expected a mapping, got {type(loaded).__name__}"
            )
        data.update(loaded or {})

    data.update(environment_overrides(context))
    return Settings(**data)
