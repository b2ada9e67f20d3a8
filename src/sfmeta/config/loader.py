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


"""Configuration loading and path resolution for sfmeta.

Configuration is read from ``sfmeta.toml``, ``.sfmeta.toml`` or the
``[tool.sfmeta]`` table of ``pyproject.toml``, whichever is found first in the
project directory. Relative paths are resolved against the directory that
holds the configuration file.
"""

from __future__ import annotations

import logging
import tomllib as toml
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from sfmeta.core.model_types import LogComponent
from sfmeta.logging import structured_extra

from .models import Config, ConfigModel, ConfigReadError, InvalidConfigFileError, RetrieveConfig, config_from_model

logger: logging.Logger = logging.getLogger("sfmeta.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("sfmeta.toml", ".sfmeta.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
TOOL_SECTION: Final[str] = "sfmeta"


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return toml.loads(path.read_text(encoding="utf-8"))
    except (OSError, toml.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def _tool_section(raw_map: dict[str, object]) -> dict[str, object] | None:
    tool_obj = raw_map.get("tool")
    if isinstance(tool_obj, dict):
        section = cast("dict[str, object]", tool_obj).get(TOOL_SECTION)
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    return None


def resolve_path_fields(base_dir: Path, retrieve: RetrieveConfig) -> None:
    """Resolve the relative manifest path in ``retrieve`` against ``base_dir``."""
    if not retrieve.manifest_path.is_absolute():
        retrieve.manifest_path = (base_dir / retrieve.manifest_path).resolve()


def discover_config_path(root: Path) -> Path | None:
    """Return the first configuration file found in ``root``, if any.

    ``pyproject.toml`` only counts when it carries a ``[tool.sfmeta]`` table.
    """
    for filename in CONFIG_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file() and _tool_section(_read_toml(pyproject)) is not None:
        return pyproject
    return None


def load_config(explicit_path: Path | None = None, *, project_root: Path | None = None) -> Config:
    """Load sfmeta configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional configuration file. When given it must exist.
        project_root: Directory to search when ``explicit_path`` is not given.
            Defaults to the current working directory.

    Returns:
        A Config with the manifest path resolved to an absolute path. The
        project root is the directory holding the configuration file, or the
        searched directory when no file was found.

    Raises:
        ConfigReadError: If the file cannot be read or is not valid TOML.
        InvalidConfigFileError: If the file contents fail validation.
    """
    root = (project_root or Path.cwd()).resolve()
    candidate = explicit_path if explicit_path is not None else discover_config_path(root)
    if candidate is None:
        config = Config(project_root=root)
        resolve_path_fields(root, config.retrieve)
        logger.debug(
            "No configuration file found; using defaults",
            extra=structured_extra(component=LogComponent.CONFIG, path=root),
        )
        return config
    raw_map = _read_toml(candidate)
    raw_map = _tool_section(raw_map) or raw_map
    try:
        model = ConfigModel.model_validate(raw_map)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    base_dir = candidate.parent.resolve()
    config = config_from_model(model, project_root=base_dir, source=candidate)
    resolve_path_fields(base_dir, config.retrieve)
    logger.debug(
        "Loaded configuration from %s",
        candidate,
        extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
    )
    return config


__all__ = ["CONFIG_FILENAMES", "discover_config_path", "load_config", "resolve_path_fields"]
