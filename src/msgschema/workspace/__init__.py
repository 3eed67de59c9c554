# Copyright 2026 MsgSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration."""

from msgschema.workspace.config import (
    CONFIG_FILENAME,
    ProjectConfig,
    ProjectConfigError,
    load_project_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ProjectConfig",
    "ProjectConfigError",
    "load_project_config",
]
