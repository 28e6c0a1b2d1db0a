"""Define a Pydantic model for validating planner configuration files."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from symbolic_planning.io.yaml_utils import load_yaml_data


class GroundingStrategy(StrEnum):
    """Enumeration of the available grounding strategies."""

    NAIVE = "naive"
    """Instantiate every type-consistent atom and operator binding."""

    RELAXED_GRAPH = "relaxed_graph"
    """Instantiate only the bindings reachable in the delete-relaxed planning graph."""


class SearchStrategy(StrEnum):
    """Enumeration of the uninformed strategies used by the forward-search planner."""

    BREADTH_FIRST = "breadth_first"
    DEPTH_FIRST = "depth_first"


class PlannerConfiguration(BaseModel):
    """Named options consumed by the preprocessor, the grounder, and the planner."""

    keep_disjunctions: bool = Field(
        default=False,
        description="Skip DNF conversion and operator splitting, retaining nested disjunctions",
    )
    grounding: GroundingStrategy = Field(
        default=GroundingStrategy.RELAXED_GRAPH,
        description="Strategy used to instantiate the lifted problem",
    )
    search: SearchStrategy = Field(
        default=SearchStrategy.BREADTH_FIRST,
        description="Order in which the forward search expands states",
    )
    max_expansions: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum number of states expanded before the search gives up",
    )
    time_limit_s: Optional[float] = Field(
        default=None,
        gt=0,
        description="Wall-clock limit (seconds) checked between search expansions",
    )
    validate_plan: bool = Field(
        default=True,
        description="Replay any found plan through the validator",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> PlannerConfiguration:
        """Load and validate a planner configuration from a YAML file.

        :param yaml_path: Path to a YAML file mapping option names to values
        :return: Validated configuration
        :raises ValueError: If the file's contents don't match the configuration schema
        """
        yaml_data = load_yaml_data(yaml_path)
        if not isinstance(yaml_data, dict):
            raise ValueError(f"Expected a mapping of options in {yaml_path}, found: {yaml_data!r}")

        try:
            return cls.model_validate(yaml_data)
        except ValidationError as error:
            raise ValueError(f"Invalid planner configuration in {yaml_path}:\n{error}") from error

    def with_overrides(self, **overrides: Any) -> PlannerConfiguration:
        """Return a copy of the configuration with the non-None overrides applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **updates})
