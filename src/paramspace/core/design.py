"""Designs: raw configurations paired with their transformed values."""

from collections.abc import Iterable, Iterator, Mapping

from paramspace.core.grid import GridEnumerator
from paramspace.core.sampling import RandomSampler
from paramspace.core.space import SearchSpace
from paramspace.core.transforms import Transform, apply_transform
from paramspace.models.configuration import Configuration, DesignPoint


def design_points(
    configurations: Iterable[Configuration],
    space: SearchSpace,
    transform: Transform | None = None,
) -> Iterator[DesignPoint]:
    """Pair each configuration with ``transform`` applied to it, if given."""
    for configuration in configurations:
        transformed = None
        if transform is not None:
            transformed = Configuration(apply_transform(transform, configuration, space))
        yield DesignPoint(raw=configuration, transformed=transformed)


def generate_design_grid(
    space: SearchSpace,
    resolution: int | None = None,
    *,
    param_resolutions: Mapping[str, int] | None = None,
    transform: Transform | None = None,
) -> Iterator[DesignPoint]:
    """Grid design over ``space``; see ``GridEnumerator`` for ordering and pruning."""
    grid = GridEnumerator(space, resolution, param_resolutions=param_resolutions)
    return design_points(grid, space, transform)


def generate_design_random(
    space: SearchSpace,
    n: int,
    *,
    seed: int | None = None,
    transform: Transform | None = None,
) -> Iterator[DesignPoint]:
    """Random design of ``n`` points; reproducible for a fixed seed."""
    sampler = RandomSampler(space, seed)
    return design_points(sampler.sample(n), space, transform)
