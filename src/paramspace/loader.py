"""
Build search spaces from plain mappings or JSON files.

A definition lists parameters (discriminated by ``type``) and the conditions
between them:

    {
        "parameters": [
            {"type": "categorical", "id": "branch", "levels": ["pca", "nop"]},
            {"type": "int", "id": "pca.rank", "lower": 1, "upper": 10}
        ],
        "conditions": [
            {"parameter": "pca.rank", "on": "branch",
             "predicate": {"type": "equal", "value": "pca"}}
        ]
    }

Structural problems surface as pydantic ``ValidationError``; semantic ones
(duplicate ids, unknown references, cycles) as the library's own errors.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from paramspace.core.space import SearchSpace
from paramspace.models.conditions import Condition
from paramspace.models.parameters import ParameterSpec
from paramspace.utils.logging import get_logger

logger = get_logger(__name__)


class SearchSpaceDefinition(BaseModel):
    """Serializable description of a search space."""

    model_config = ConfigDict(extra="forbid")

    parameters: list[ParameterSpec] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)

    @classmethod
    def from_space(cls, space: SearchSpace) -> "SearchSpaceDefinition":
        return cls(parameters=space.parameters, conditions=space.conditions)

    def build(self) -> SearchSpace:
        return SearchSpace(parameters=self.parameters, conditions=self.conditions)


def build_space(definition: dict[str, Any]) -> SearchSpace:
    """
    Build a search space from a mapping.

    Raises:
            pydantic.ValidationError: If the mapping is malformed
            SearchSpaceError: If the definition is semantically invalid
    """
    return SearchSpaceDefinition.model_validate(definition).build()


def load_space(path: str | Path) -> SearchSpace:
    """
    Load a search space definition from a JSON file.

    Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If the definition is malformed
            SearchSpaceError: If the definition is semantically invalid
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Search space definition not found: {file_path}")

    with file_path.open(encoding="utf-8") as f:
        data = json.load(f)

    space = build_space(data)
    logger.info("Loaded search space", path=str(file_path), n_parameters=len(space))
    return space


def dump_space(space: SearchSpace, path: str | Path) -> None:
    """Write ``space`` as a JSON definition that ``load_space`` reads back."""
    definition = SearchSpaceDefinition.from_space(space)
    Path(path).write_text(definition.model_dump_json(indent=2), encoding="utf-8")
