# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""CLI context: the loaded configuration shared by every command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sfmeta.config import load_config

if TYPE_CHECKING:
    from sfmeta.config import Config


@dataclass(slots=True, frozen=True)
class CLIContext:
    """Resolved configuration shared by CLI commands.

    Attributes:
        config: Loaded configuration.
        config_path: File the configuration was read from, if any.
    """

    config: Config
    config_path: Path | None

    @property
    def project_root(self) -> Path:
        return self.config.project_root

    @property
    def manifest_path(self) -> Path:
        return self.config.retrieve.manifest_path


def build_cli_context(config_path: Path | None, *, cwd: Path | None = None) -> CLIContext:
    """Load configuration for a CLI invocation.

    Args:
        config_path: Explicit ``--config`` value, if given.
        cwd: Directory searched for a configuration file (defaults to the
            current working directory).

    Returns:
        CLIContext wrapping the loaded configuration.

    Raises:
        ConfigValidationError: If the configuration cannot be read or is invalid.
    """
    working_dir = (cwd or Path.cwd()).resolve()
    config = load_config(config_path, project_root=working_dir)
    return CLIContext(config=config, config_path=config.source)


__all__ = ["CLIContext", "build_cli_context"]
