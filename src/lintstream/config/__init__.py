# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration resolution and settings loading."""

from __future__ import annotations

from .resolver import ConfigResolver, NearestConfigResolver
from .sources import ProjectSettings, load_config_file, load_project_settings

__all__ = [
    "ConfigResolver",
    "NearestConfigResolver",
    "ProjectSettings",
    "load_config_file",
    "load_project_settings",
]
