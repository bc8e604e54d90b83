"""Core services: the search space, its enumerators and Optuna integration."""

from paramspace.core.design import design_points, generate_design_grid, generate_design_random
from paramspace.core.grid import GridEnumerator, generate_grid
from paramspace.core.sampling import RandomSampler, sample_random
from paramspace.core.space import SearchSpace
from paramspace.core.transforms import (
    Chain,
    Derive,
    Drop,
    FanOut,
    FloorToInt,
    PowerOf,
    Rename,
    Transform,
    apply_transform,
    check_transform,
)
from paramspace.core.tuning import create_sampler, optimize, suggest_configuration

__all__ = [
    "SearchSpace",
    # Enumeration and sampling
    "GridEnumerator",
    "generate_grid",
    "RandomSampler",
    "sample_random",
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
    # Designs
    "design_points",
    "generate_design_grid",
    "generate_design_random",
    # Optuna
    "create_sampler",
    "suggest_configuration",
    "optimize",
]
