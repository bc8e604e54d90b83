"""Exhaustive grid enumeration over a conditional search space."""

from collections.abc import Iterator, Mapping
from typing import Any

from paramspace.config import get_settings
from paramspace.core.space import SearchSpace
from paramspace.errors import UnknownParameterError
from paramspace.models.configuration import Configuration
from paramspace.models.parameters import check_resolution
from paramspace.utils.logging import get_logger

logger = get_logger(__name__)


class GridEnumerator:
    """Lazily enumerate every grid configuration of a search space.

    Parameters are assigned by backtracking in activation order. A parameter
    that is inactive under the partial assignment is skipped for that branch:
    it gets no value and its domain is not enumerated, so the number of
    configurations is the sum over branches of the product of the active
    cardinalities, never the naive full product.

    Output is lexicographic in declaration order of the varying parameters and
    identical across runs for a fixed space and resolution.
    """

    def __init__(
        self,
        space: SearchSpace,
        resolution: int | None = None,
        *,
        param_resolutions: Mapping[str, int] | None = None,
    ) -> None:
        """Initialize the enumerator and close the space.

        Args:
            space: Search space to enumerate.
            resolution: Points per numeric parameter. Defaults to
                ``Settings.default_resolution``.
            param_resolutions: Per-parameter overrides of ``resolution``.

        Raises:
            ValueError: If a resolution is below 1.
            UnknownParameterError: If an override names an unknown parameter.
        """
        if resolution is None:
            resolution = get_settings().default_resolution
        check_resolution(resolution)
        overrides = dict(param_resolutions or {})
        for parameter_id, value in overrides.items():
            if parameter_id not in space:
                raise UnknownParameterError(parameter_id, "resolution override")
            check_resolution(value)

        self.space = space.close()
        self.resolution = resolution
        self.param_resolutions = overrides
        self._order = space.activation_order()
        self._dependees = {c.on for c in space.conditions}
        self._points: dict[str, list[Any]] = {
            spec.id: spec.grid(overrides.get(spec.id, resolution)) for spec in space
        }

    def points(self, parameter_id: str) -> list[Any]:
        """Discretized values of one parameter."""
        if parameter_id not in self._points:
            raise UnknownParameterError(parameter_id)
        return list(self._points[parameter_id])

    def __iter__(self) -> Iterator[Configuration]:
        logger.debug(
            "Enumerating grid",
            n_parameters=len(self._order),
            resolution=self.resolution,
        )
        n_configurations = 0
        for configuration in self._expand(0, {}):
            n_configurations += 1
            yield configuration
        logger.debug("Grid enumeration finished", n_configurations=n_configurations)

    def count(self) -> int:
        """Number of configurations the grid yields, without building them."""
        return self._count(0, {})

    def _expand(self, index: int, assignment: dict[str, Any]) -> Iterator[Configuration]:
        if index == len(self._order):
            yield self.space.configuration(assignment)
            return

        parameter_id = self._order[index]
        if not self.space.is_active(parameter_id, assignment):
            yield from self._expand(index + 1, assignment)
            return

        for value in self._points[parameter_id]:
            assignment[parameter_id] = value
            yield from self._expand(index + 1, assignment)
        del assignment[parameter_id]

    def _count(self, index: int, assignment: dict[str, Any]) -> int:
        if index == len(self._order):
            return 1

        parameter_id = self._order[index]
        if not self.space.is_active(parameter_id, assignment):
            return self._count(index + 1, assignment)

        # values of parameters nobody depends on cannot change activation below
        if parameter_id not in self._dependees:
            return len(self._points[parameter_id]) * self._count(index + 1, assignment)

        total = 0
        for value in self._points[parameter_id]:
            assignment[parameter_id] = value
            total += self._count(index + 1, assignment)
        del assignment[parameter_id]
        return total


def generate_grid(
    space: SearchSpace,
    resolution: int | None = None,
    *,
    param_resolutions: Mapping[str, int] | None = None,
) -> Iterator[Configuration]:
    """Shorthand for iterating a ``GridEnumerator``."""
    return iter(GridEnumerator(space, resolution, param_resolutions=param_resolutions))
