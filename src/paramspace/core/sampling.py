"""Seeded random sampling over a conditional search space."""

from collections.abc import Iterator
from random import Random
from typing import Any

from paramspace.config import get_settings
from paramspace.core.space import SearchSpace
from paramspace.models.configuration import Configuration
from paramspace.utils.logging import get_logger

logger = get_logger(__name__)


class RandomSampler:
    """Draw independent configurations that respect activation conditions.

    Each draw walks the parameters in activation order and samples only the
    active ones, uniformly from their domain. All draws of one sampler share a
    single random stream, so a fixed seed reproduces the whole sequence.
    """

    def __init__(self, space: SearchSpace, seed: int | None = None) -> None:
        """Initialize the sampler and close the space.

        Args:
            space: Search space to sample from.
            seed: Random seed. Defaults to ``Settings.seed``; None draws from
                system entropy.
        """
        if seed is None:
            seed = get_settings().seed
        self.space = space.close()
        self.seed = seed
        self._order = space.activation_order()
        self._rng = Random(seed)

    def draw(self) -> Configuration:
        """Draw one configuration."""
        assignment: dict[str, Any] = {}
        for parameter_id in self._order:
            if self.space.is_active(parameter_id, assignment):
                assignment[parameter_id] = self.space[parameter_id].draw(self._rng)
        return self.space.configuration(assignment)

    def sample(self, n: int) -> Iterator[Configuration]:
        """Lazily draw ``n`` configurations.

        Raises:
            ValueError: If ``n`` is negative.
        """
        if n < 0:
            msg = f"Number of samples must be non-negative, got {n}"
            raise ValueError(msg)
        return self._sample(n)

    def _sample(self, n: int) -> Iterator[Configuration]:
        logger.debug("Sampling configurations", n=n, seed=self.seed)
        for _ in range(n):
            yield self.draw()


def sample_random(space: SearchSpace, n: int, *, seed: int | None = None) -> Iterator[Configuration]:
    """Shorthand for ``RandomSampler(space, seed).sample(n)``."""
    return RandomSampler(space, seed).sample(n)
