#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Data models for the container launcher.
"""

from typing import Optional, Tuple, Type
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

# ============================================================================
# Invocation Models
# ============================================================================


class InvocationRequest(BaseModel):
    """Parsed command line intent"""

    image: Optional[str] = Field(
        default=None, description="Image reference to run (None when not given)"
    )
    command: list[str] = Field(
        default_factory=list,
        description="Command and arguments executed inside the container",
    )
    dry: bool = Field(default=False, description="Print instead of run")
    version: bool = Field(default=False, description="Print version and exit")
    help: bool = Field(default=False, description="Print usage and exit")

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank image references"""
        if v is not None and not v.strip():
            raise ValueError("image must not be empty")
        return v


class UserInfo(BaseModel):
    """Invoking host user"""

    uid: int = Field(ge=0, description="Numeric user id")
    gid: int = Field(ge=0, description="Numeric group id")
    name: str = Field(default="", description="Login name")
    home: str = Field(default="", description="Home directory")

    @property
    def spec(self) -> str:
        """uid:gid pair as accepted by docker --user"""
        return f"{self.uid}:{self.gid}"


# ============================================================================
# Settings
# ============================================================================


class Settings(BaseSettings):
    """Launcher settings"""

    model_config = SettingsConfigDict(
        env_prefix="DRUN_",
        case_sensitive=False,
        extra="ignore",
    )

    docker: str = Field(default="docker", description="Docker executable")
    network: str = Field(default="host", description="Container network")
    chroot_name: str = Field(
        default="drun", description="Prompt label exported as debian_chroot"
    )
    echo: bool = Field(
        default=False, description="Print the docker command before running it"
    )

    @field_validator("docker", "network")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank values"""
        if not v.strip():
            raise ValueError("value must not be empty")
        return v.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > YAML (init) > defaults
        """
        return env_settings, init_settings
