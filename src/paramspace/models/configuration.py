"""Immutable configurations and design points."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


class Configuration(Mapping[str, Any]):
    """Read-only mapping from active parameter id to value.

    Compares equal to any mapping with the same items, so tests and callers can
    use plain dict literals.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Configuration({self._values!r})"

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


@dataclass(frozen=True)
class DesignPoint:
    """A raw configuration and, when a transform was given, its transformed values.

    Attributes:
        raw: Configuration in search-space units.
        transformed: Configuration in consumer units, or None without a transform.
    """

    raw: Configuration
    transformed: Configuration | None = None

    @property
    def values(self) -> Mapping[str, Any]:
        """Consumer-facing values: transformed if available, raw otherwise."""
        return self.raw if self.transformed is None else self.transformed
