"""Activation conditions between parameters."""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LiteralValue = str | int | float | bool


class Equal(BaseModel):
    """Holds when the "on" parameter equals ``value``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["equal"] = "equal"
    value: LiteralValue

    def __init__(self, value: Any = None, **data: Any) -> None:
        if value is not None:
            data["value"] = value
        super().__init__(**data)

    def __call__(self, value: Any) -> bool:
        return _same(value, self.value)

    def literals(self) -> tuple[Any, ...]:
        return (self.value,)

    def __repr__(self) -> str:
        return f"Equal({self.value!r})"


class AnyOf(BaseModel):
    """Holds when the "on" parameter takes one of ``values``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["any_of"] = "any_of"
    values: tuple[LiteralValue, ...]

    def __init__(self, values: Any = None, **data: Any) -> None:
        if values is not None:
            data["values"] = values
        super().__init__(**data)

    @field_validator("values")
    @classmethod
    def _check_values(cls, values: tuple[Any, ...]) -> tuple[Any, ...]:
        if not values:
            msg = "values must not be empty"
            raise ValueError(msg)
        return values

    def __call__(self, value: Any) -> bool:
        return any(_same(value, candidate) for candidate in self.values)

    def literals(self) -> tuple[Any, ...]:
        return self.values

    def __repr__(self) -> str:
        return f"AnyOf({list(self.values)!r})"


Predicate = Annotated[Equal | AnyOf, Field(discriminator="type")]


def _same(left: Any, right: Any) -> bool:
    # True == 1 in Python; a logical selector must not match an integer level
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


class Condition(BaseModel):
    """``parameter`` is active only while ``predicate`` holds for the value of ``on``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    parameter: str = Field(..., min_length=1)
    on: str = Field(..., min_length=1)
    predicate: Predicate

    def holds(self, assignment: Mapping[str, Any]) -> bool:
        """Evaluate the predicate; a missing "on" value never satisfies it."""
        if self.on not in assignment:
            return False
        return self.predicate(assignment[self.on])

    def __repr__(self) -> str:
        return f"Condition({self.parameter!r} on {self.on!r}: {self.predicate!r})"
