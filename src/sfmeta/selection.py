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


"""JSON selection files and reconcile outcome serialisation.

Component selections cross the CLI boundary as JSON arrays of
``{"name", "apiName", "type"}`` objects, the same shape the selection UI
exchanges with the manifest. Validation is performed with pydantic so that
malformed files are reported with field-level detail.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from sfmeta.core.type_aliases import ApiName, TypeName
from sfmeta.core.types import Component
from sfmeta.exceptions import SfmetaValidationError
from sfmeta.json import JSONMapping, normalize_enums_for_json

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from sfmeta.core.types import ReconcileOutcome


class SelectionError(SfmetaValidationError):
    """Raised when a selection file cannot be read or fails validation."""

    def __init__(self, source: str, error: Exception) -> None:
        """Initialize the exception with the offending source and its cause.

        Args:
            source: File path or label describing where the selection came from.
            error: The underlying read or validation error.
        """
        self.source = source
        self.error = error
        super().__init__(f"Invalid selection in {source}: {error}")


class ComponentModel(BaseModel):
    """Pydantic model for one selected component in its JSON form.

    Attributes:
        name: Display label. Defaults to ``apiName`` when omitted.
        api_name: Member identifier (serialised as ``apiName``).
        type: Metadata type name.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True, extra="ignore")
    name: str = ""
    api_name: str = Field(alias="apiName", min_length=1)
    type: str = Field(min_length=1)

    @field_validator("api_name", "type", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    def to_component(self) -> Component:
        return Component(name=self.name or self.api_name, api_name=ApiName(self.api_name), type=TypeName(self.type))

    @classmethod
    def from_component(cls, component: Component) -> ComponentModel:
        return cls(name=component.name, api_name=component.api_name, type=component.type)


_SELECTION_ADAPTER: Final[TypeAdapter[list[ComponentModel]]] = TypeAdapter(list[ComponentModel])


def parse_selection(text: str, *, source: str = "<selection>") -> list[Component]:
    """Validate selection JSON text and return the components it lists.

    Raises:
        SelectionError: If the text is not a JSON array of component objects.
    """
    try:
        models = _SELECTION_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise SelectionError(source, exc) from exc
    return [model.to_component() for model in models]


def load_selection(path: Path) -> list[Component]:
    """Read a selection file from disk.

    Args:
        path: JSON file holding an array of component objects.

    Returns:
        Components in file order.

    Raises:
        SelectionError: If the file cannot be read or fails validation.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SelectionError(str(path), exc) from exc
    return parse_selection(text, source=str(path))


def dump_selection(components: Iterable[Component]) -> str:
    """Serialise components to selection JSON (``apiName`` keys, two-space indent)."""
    models = [ComponentModel.from_component(component) for component in components]
    return _SELECTION_ADAPTER.dump_json(models, by_alias=True, indent=2).decode("utf-8")


def outcome_to_json(outcome: ReconcileOutcome) -> JSONMapping:
    """Return the JSON payload describing a reconcile outcome."""
    payload = {
        "results": [
            {"index": result.index, "status": result.status, "errorMessage": result.error_message}
            for result in outcome.results
        ],
        "errorMessage": outcome.error_message,
        "errorType": outcome.error_type,
    }
    normalised = normalize_enums_for_json(payload)
    return normalised if isinstance(normalised, dict) else {}


def dump_outcome(outcome: ReconcileOutcome) -> str:
    return json.dumps(outcome_to_json(outcome), indent=2, ensure_ascii=False)


__all__ = [
    "ComponentModel",
    "SelectionError",
    "dump_outcome",
    "dump_selection",
    "load_selection",
    "outcome_to_json",
    "parse_selection",
]
