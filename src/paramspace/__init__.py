"""
paramspace: conditional hyperparameter search spaces.

Declare tunable parameters, make some of them depend on a branch selector,
then enumerate a pruned grid, draw seeded random configurations, or let Optuna
suggest them, optionally mapping each point to consumer units with a
transform.
"""

from paramspace.core import (
    Chain,
    Derive,
    Drop,
    FanOut,
    FloorToInt,
    GridEnumerator,
    PowerOf,
    RandomSampler,
    Rename,
    SearchSpace,
    Transform,
    apply_transform,
    check_transform,
    generate_design_grid,
    generate_design_random,
    generate_grid,
    optimize,
    sample_random,
    suggest_configuration,
)
from paramspace.errors import (
    CycleError,
    DomainError,
    DuplicateIdError,
    MissingValueError,
    OrphanValueError,
    SearchSpaceError,
    SpaceClosedError,
    UnknownParameterError,
)
from paramspace.loader import SearchSpaceDefinition, build_space, dump_space, load_space
from paramspace.models import (
    AnyOf,
    BoolParameter,
    CategoricalParameter,
    Condition,
    Configuration,
    DesignPoint,
    Equal,
    IntParameter,
    RealParameter,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "IntParameter",
    "RealParameter",
    "CategoricalParameter",
    "BoolParameter",
    "Condition",
    "Equal",
    "AnyOf",
    "Configuration",
    "DesignPoint",
    # Space and generators
    "SearchSpace",
    "GridEnumerator",
    "generate_grid",
    "RandomSampler",
    "sample_random",
    "generate_design_grid",
    "generate_design_random",
    # Transforms
    "Transform",
    "apply_transform",
    "check_transform",
    "Rename",
    "FloorToInt",
    "PowerOf",
    "FanOut",
    "Derive",
    "Drop",
    "Chain",
    # Optuna
    "suggest_configuration",
    "optimize",
    # Loading
    "SearchSpaceDefinition",
    "build_space",
    "load_space",
    "dump_space",
    # Errors
    "SearchSpaceError",
    "DuplicateIdError",
    "UnknownParameterError",
    "CycleError",
    "DomainError",
    "OrphanValueError",
    "MissingValueError",
    "SpaceClosedError",
]
