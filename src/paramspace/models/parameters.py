"""Parameter domain models."""

from random import Random
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from paramspace.errors import DomainError

ParameterKind = Literal["int", "real", "categorical", "bool"]


def check_resolution(resolution: int) -> None:
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        msg = f"Resolution must be an integer, got {resolution!r}"
        raise TypeError(msg)
    if resolution < 1:
        msg = f"Resolution must be at least 1, got {resolution}"
        raise ValueError(msg)


class _Parameter(BaseModel):
    """Fields shared by every parameter kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1)
    tags: frozenset[str] = frozenset()

    @model_validator(mode="after")
    def _check_domain(self) -> "_Parameter":
        lower = getattr(self, "lower", None)
        upper = getattr(self, "upper", None)
        if lower is not None and upper is not None and lower > upper:
            msg = f"lower ({lower}) must not exceed upper ({upper})"
            raise ValueError(msg)
        default = getattr(self, "default", None)
        if default is not None:
            reason = self.violation(default)
            if reason is not None:
                msg = f"default {default!r} is invalid: {reason}"
                raise ValueError(msg)
        return self

    @property
    def is_numeric(self) -> bool:
        return False

    def violation(self, value: Any) -> str | None:
        """Return why ``value`` is outside the domain, or None if it is inside."""
        raise NotImplementedError

    def contains(self, value: Any) -> bool:
        return self.violation(value) is None

    def check_value(self, value: Any) -> None:
        """Raise DomainError if ``value`` is outside the domain."""
        reason = self.violation(value)
        if reason is not None:
            raise DomainError(self.id, value, reason)

    def grid(self, resolution: int) -> list[Any]:
        """Discretize the domain into grid points."""
        raise NotImplementedError

    def draw(self, rng: Random) -> Any:
        """Draw one value uniformly from the domain."""
        raise NotImplementedError


class IntParameter(_Parameter):
    """Integer parameter on the closed range [lower, upper]."""

    type: Literal["int"] = "int"
    lower: int
    upper: int
    default: int | None = None

    @property
    def is_numeric(self) -> bool:
        return True

    def violation(self, value: Any) -> str | None:
        if isinstance(value, bool) or not isinstance(value, int):
            return f"expected int, got {type(value).__name__}"
        if not self.lower <= value <= self.upper:
            return f"outside [{self.lower}, {self.upper}]"
        return None

    def grid(self, resolution: int) -> list[int]:
        """Equally spaced points rounded down, duplicates dropped in order."""
        check_resolution(resolution)
        if resolution == 1 or self.lower == self.upper:
            return [self.lower]
        steps = resolution - 1
        span = self.upper - self.lower
        points: list[int] = []
        for i in range(resolution):
            point = self.lower + (span * i) // steps
            if not points or points[-1] != point:
                points.append(point)
        return points

    def draw(self, rng: Random) -> int:
        return rng.randint(self.lower, self.upper)


class RealParameter(_Parameter):
    """Continuous parameter on the closed range [lower, upper]."""

    model_config = ConfigDict(allow_inf_nan=False)

    type: Literal["real"] = "real"
    lower: float
    upper: float
    default: float | None = None

    @property
    def is_numeric(self) -> bool:
        return True

    def violation(self, value: Any) -> str | None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return f"expected real number, got {type(value).__name__}"
        if value != value:
            return "NaN is not allowed"
        if not self.lower <= value <= self.upper:
            return f"outside [{self.lower}, {self.upper}]"
        return None

    def grid(self, resolution: int) -> list[float]:
        check_resolution(resolution)
        if resolution == 1 or self.lower == self.upper:
            return [self.lower]
        steps = resolution - 1
        span = self.upper - self.lower
        points = [self.lower + span * i / steps for i in range(steps)]
        # exact upper bound, free of accumulated float error
        points.append(self.upper)
        return points

    def draw(self, rng: Random) -> float:
        return min(max(rng.uniform(self.lower, self.upper), self.lower), self.upper)


class CategoricalParameter(_Parameter):
    """Categorical parameter with a non-empty, duplicate-free set of levels."""

    type: Literal["categorical"] = "categorical"
    levels: tuple[str, ...]
    default: str | None = None

    @field_validator("levels")
    @classmethod
    def _check_levels(cls, levels: tuple[str, ...]) -> tuple[str, ...]:
        if not levels:
            msg = "levels must not be empty"
            raise ValueError(msg)
        duplicates = sorted({level for level in levels if levels.count(level) > 1})
        if duplicates:
            msg = f"levels must be unique, duplicated: {duplicates}"
            raise ValueError(msg)
        return levels

    def violation(self, value: Any) -> str | None:
        if value not in self.levels:
            return f"not one of {list(self.levels)}"
        return None

    def grid(self, resolution: int) -> list[str]:
        check_resolution(resolution)
        return list(self.levels)

    def draw(self, rng: Random) -> str:
        return rng.choice(self.levels)


class BoolParameter(_Parameter):
    """Logical parameter."""

    type: Literal["bool"] = "bool"
    default: bool | None = None

    def violation(self, value: Any) -> str | None:
        if not isinstance(value, bool):
            return f"expected bool, got {type(value).__name__}"
        return None

    def grid(self, resolution: int) -> list[bool]:
        check_resolution(resolution)
        return [False, True]

    def draw(self, rng: Random) -> bool:
        return rng.choice((False, True))


ParameterSpec = Annotated[
    IntParameter | RealParameter | CategoricalParameter | BoolParameter,
    Field(discriminator="type"),
]
