"""Transforms from search-space units to consumer units.

A transform is any pure callable ``(configuration, space) -> mapping``. It may
rename, drop, add or derive keys, but must never bring back a parameter that
is inactive for the raw configuration; ``check_transform`` verifies that.

The building blocks below only touch keys that are present, so a conditioned
parameter that is inactive simply passes through as absent. A callable that
needs a key unconditionally (``Derive``) raises ``KeyError`` when the key is
inactive: that is a precondition violation of the caller, not a recoverable
state.
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from paramspace.core.space import SearchSpace
from paramspace.errors import OrphanValueError
from paramspace.models.configuration import Configuration

Transform = Callable[[Configuration, SearchSpace], Mapping[str, Any]]


def apply_transform(
    transform: Transform, configuration: Configuration, space: SearchSpace
) -> dict[str, Any]:
    """Apply ``transform`` and return its output as a fresh dict."""
    return dict(transform(configuration, space))


def check_transform(
    transform: Transform, configuration: Configuration, space: SearchSpace
) -> dict[str, Any]:
    """Apply ``transform`` and verify it reintroduces no inactive parameter.

    Raises:
        OrphanValueError: If the output holds a parameter of ``space`` that is
            inactive for ``configuration``.
    """
    result = apply_transform(transform, configuration, space)
    for key, value in result.items():
        if key in space and not space.is_active(key, configuration):
            raise OrphanValueError(key, value)
    return result


@dataclass(frozen=True)
class Rename:
    """Rename keys; keys not in ``mapping`` pass through."""

    mapping: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        return {self.mapping.get(key, key): value for key, value in configuration.items()}


@dataclass(frozen=True)
class FloorToInt:
    """Round real-valued surrogates down to integers."""

    ids: tuple[str, ...]

    def __init__(self, *ids: str) -> None:
        object.__setattr__(self, "ids", ids)

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        result = dict(configuration)
        for key in self.ids:
            if key in result:
                result[key] = math.floor(result[key])
        return result


@dataclass(frozen=True)
class PowerOf:
    """Map ``x`` to ``base ** x``, the usual trafo for log-scale tuning."""

    base: float
    ids: tuple[str, ...]

    def __init__(self, base: float, *ids: str) -> None:
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "ids", ids)

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        result = dict(configuration)
        for key in self.ids:
            if key in result:
                result[key] = self.base ** result[key]
        return result


@dataclass(frozen=True)
class FanOut:
    """Copy one sampled value to several consumer keys, dropping the source key."""

    source: str
    targets: tuple[str, ...]
    keep_source: bool = False

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        result = dict(configuration)
        if self.source not in result:
            return result
        value = result[self.source] if self.keep_source else result.pop(self.source)
        for target in self.targets:
            result[target] = value
        return result


@dataclass(frozen=True)
class Derive:
    """Add ``key`` computed from the raw configuration by ``fn``.

    ``fn`` must be pure. Indexing an inactive key inside ``fn`` raises
    ``KeyError``.
    """

    key: str
    fn: Callable[[Configuration], Any]

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        result = dict(configuration)
        result[self.key] = self.fn(configuration)
        return result


@dataclass(frozen=True)
class Drop:
    """Remove keys, e.g. a branch selector the consumer does not understand."""

    ids: tuple[str, ...]

    def __init__(self, *ids: str) -> None:
        object.__setattr__(self, "ids", ids)

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        return {key: value for key, value in configuration.items() if key not in self.ids}


@dataclass(frozen=True)
class Chain:
    """Apply transforms left to right; each sees the previous output."""

    transforms: tuple[Transform, ...]

    def __init__(self, *transforms: Transform) -> None:
        object.__setattr__(self, "transforms", transforms)

    def __call__(self, configuration: Configuration, space: SearchSpace) -> dict[str, Any]:
        current: Mapping[str, Any] = configuration
        for transform in self.transforms:
            current = transform(Configuration(current), space)
        return dict(current)
