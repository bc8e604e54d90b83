"""Conditional search space: parameter domains plus activation conditions."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from paramspace.errors import (
    CycleError,
    DuplicateIdError,
    MissingValueError,
    OrphanValueError,
    SpaceClosedError,
    UnknownParameterError,
)
from paramspace.models.conditions import AnyOf, Condition, Equal, Predicate
from paramspace.models.configuration import Configuration
from paramspace.models.parameters import (
    BoolParameter,
    CategoricalParameter,
    IntParameter,
    ParameterSpec,
    RealParameter,
)
from paramspace.utils.logging import get_logger

logger = get_logger(__name__)

_PARAMETER_TYPES = (IntParameter, RealParameter, CategoricalParameter, BoolParameter)


class SearchSpace:
    """Ordered set of parameters with conjunctive activation conditions.

    Parameters and conditions are added while the space is open. Grid
    enumeration and random sampling close the space; after that it is
    read-only and can be shared freely.

    A parameter is active for an assignment when every condition attached to
    it holds. A condition holds when the parameter it is "on" has a value in
    the assignment, is itself active, and that value satisfies the predicate.
    """

    def __init__(
        self,
        parameters: Iterable[ParameterSpec] = (),
        conditions: Iterable[Condition] = (),
    ) -> None:
        self._parameters: dict[str, ParameterSpec] = {}
        self._conditions: dict[str, list[Condition]] = {}
        self._order: list[str] | None = None
        self._closed = False

        for spec in parameters:
            self.add_parameter(spec)
        for condition in conditions:
            self.add_condition(condition.parameter, condition.on, condition.predicate)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_parameter(self, spec: ParameterSpec) -> ParameterSpec:
        """Add a parameter.

        Raises:
            DuplicateIdError: If a parameter with the same id exists.
            SpaceClosedError: If the space is closed.
        """
        self._require_open("add parameter")
        if not isinstance(spec, _PARAMETER_TYPES):
            msg = f"Expected a parameter model, got {type(spec).__name__}"
            raise TypeError(msg)
        if spec.id in self._parameters:
            raise DuplicateIdError(spec.id)

        self._parameters[spec.id] = spec
        self._order = None
        logger.debug("Added parameter", parameter=spec.id, kind=spec.type)
        return spec

    def add_condition(self, dependent_id: str, on_id: str, predicate: Predicate) -> Condition:
        """Make ``dependent_id`` active only while ``predicate`` holds for ``on_id``.

        The space is left unchanged when the call fails.

        Raises:
            UnknownParameterError: If either id is not in the space.
            DomainError: If a predicate literal is not a value of ``on_id``.
            CycleError: If the condition would create a dependency cycle.
            SpaceClosedError: If the space is closed.
        """
        self._require_open("add condition")
        self._require(dependent_id, "dependent of condition")
        on_spec = self._require(on_id, "target of condition")
        for literal in predicate.literals():
            on_spec.check_value(literal)

        cycle = self._find_path(on_id, dependent_id)
        if cycle is not None:
            raise CycleError([dependent_id, *cycle])

        condition = Condition(parameter=dependent_id, on=on_id, predicate=predicate)
        self._conditions.setdefault(dependent_id, []).append(condition)
        self._order = None
        logger.debug("Added condition", parameter=dependent_id, on=on_id, predicate=repr(predicate))
        return condition

    def add_branch(
        self,
        selector_id: str,
        variants: Mapping[str, Sequence[ParameterSpec]],
        *,
        default: str | None = None,
        tags: Iterable[str] = (),
    ) -> CategoricalParameter:
        """Add a categorical selector and the parameters of each variant.

        Each variant name becomes a level of the selector. A parameter listed
        under one variant is conditioned with ``Equal(variant)``; a parameter
        shared by several variants (the same spec under each) is declared once
        and conditioned with ``AnyOf``.

        Raises:
            DuplicateIdError: If an id already exists, or two variants declare
                different specs under the same id.
        """
        self._require_open("add branch")
        if selector_id in self._parameters:
            raise DuplicateIdError(selector_id)

        owners: dict[str, list[str]] = {}
        specs: dict[str, ParameterSpec] = {}
        for variant, members in variants.items():
            for spec in members:
                if spec.id in self._parameters or spec.id == selector_id:
                    raise DuplicateIdError(spec.id)
                if spec.id in specs and specs[spec.id] != spec:
                    raise DuplicateIdError(spec.id)
                specs.setdefault(spec.id, spec)
                owners.setdefault(spec.id, []).append(variant)

        selector = CategoricalParameter(
            id=selector_id,
            levels=tuple(variants),
            default=default,
            tags=frozenset(tags),
        )
        self.add_parameter(selector)
        for parameter_id, spec in specs.items():
            self.add_parameter(spec)
            branches = owners[parameter_id]
            predicate = Equal(branches[0]) if len(branches) == 1 else AnyOf(branches)
            self.add_condition(parameter_id, selector_id, predicate)
        return selector

    def close(self) -> "SearchSpace":
        """Freeze the space; further additions raise SpaceClosedError."""
        if not self._closed:
            self._closed = True
            logger.debug(
                "Closed search space",
                n_parameters=len(self._parameters),
                n_conditions=sum(len(c) for c in self._conditions.values()),
            )
        return self

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> list[ParameterSpec]:
        """Parameters in declaration order."""
        return list(self._parameters.values())

    @property
    def ids(self) -> list[str]:
        return list(self._parameters)

    @property
    def conditions(self) -> list[Condition]:
        """All conditions, grouped by dependent in declaration order."""
        return [c for pid in self._parameters for c in self._conditions.get(pid, ())]

    def conditions_for(self, parameter_id: str) -> list[Condition]:
        self._require(parameter_id)
        return list(self._conditions.get(parameter_id, ()))

    def ids_with_tags(self, *tags: str) -> list[str]:
        """Ids of parameters carrying every one of ``tags``."""
        wanted = set(tags)
        return [pid for pid, spec in self._parameters.items() if wanted <= spec.tags]

    def is_conditional(self) -> bool:
        return any(self._conditions.values())

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, parameter_id: object) -> bool:
        return parameter_id in self._parameters

    def __getitem__(self, parameter_id: str) -> ParameterSpec:
        return self._require(parameter_id)

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self._parameters.values())

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"SearchSpace({self.ids!r}, {state})"

    def activation_order(self) -> list[str]:
        """Parameter ids ordered so every parameter follows the ones it depends on.

        Ties are broken by declaration order, so the result equals declaration
        order whenever dependencies are declared first.
        """
        if self._order is None:
            placed: set[str] = set()
            order: list[str] = []
            pending = list(self._parameters)
            while pending:
                for pid in pending:
                    if all(c.on in placed for c in self._conditions.get(pid, ())):
                        break
                order.append(pid)
                placed.add(pid)
                pending.remove(pid)
            self._order = order
        return list(self._order)

    # ------------------------------------------------------------------
    # Activation and validation
    # ------------------------------------------------------------------

    def is_active(self, parameter_id: str, assignment: Mapping[str, Any]) -> bool:
        """Whether ``parameter_id`` is active given a (possibly partial) assignment.

        Raises:
            UnknownParameterError: If the id is not in the space.
        """
        self._require(parameter_id)
        return self._active(parameter_id, assignment)

    def validate(self, configuration: Mapping[str, Any], *, complete: bool = False) -> None:
        """Check a configuration against domains and activation.

        Args:
            configuration: Mapping of parameter id to value.
            complete: Also require a value for every active parameter.

        Raises:
            UnknownParameterError: For keys that are not parameters of the space.
            DomainError: For values outside their parameter's domain.
            OrphanValueError: For values of inactive parameters.
            MissingValueError: With ``complete``, for active parameters without value.
        """
        for parameter_id, value in configuration.items():
            spec = self._parameters.get(parameter_id)
            if spec is None:
                raise UnknownParameterError(parameter_id, "configuration key")
            spec.check_value(value)

        memo: dict[str, bool] = {}
        for parameter_id, value in configuration.items():
            if not self._active(parameter_id, configuration, memo):
                raise OrphanValueError(parameter_id, value)

        if complete:
            for parameter_id in self._parameters:
                if parameter_id not in configuration and self._active(
                    parameter_id, configuration, memo
                ):
                    raise MissingValueError(parameter_id)

    def configuration(self, assignment: Mapping[str, Any]) -> Configuration:
        """Wrap an assignment as a Configuration with keys in declaration order.

        No validation is performed; call ``validate`` for that.
        """
        return Configuration({pid: assignment[pid] for pid in self._parameters if pid in assignment})

    def default_configuration(self) -> Configuration:
        """Configuration of parameter defaults, restricted to active parameters.

        Active parameters without a default are left out, which also
        deactivates everything conditioned on them.
        """
        assignment: dict[str, Any] = {}
        for parameter_id in self.activation_order():
            spec = self._parameters[parameter_id]
            if spec.default is not None and self._active(parameter_id, assignment):
                assignment[parameter_id] = spec.default
        return self.configuration(assignment)

    def subspace(self, parameter_ids: Iterable[str]) -> "SearchSpace":
        """New open space with the given parameters and the conditions among them.

        Raises:
            UnknownParameterError: If an id is unknown, or a kept parameter is
                conditioned on one that is not kept.
        """
        keep = set(parameter_ids)
        for parameter_id in keep:
            self._require(parameter_id)
        for parameter_id in keep:
            for condition in self._conditions.get(parameter_id, ()):
                if condition.on not in keep:
                    raise UnknownParameterError(
                        condition.on, f"'{parameter_id}' depends on it but it is not kept"
                    )
        return SearchSpace(
            parameters=[spec for pid, spec in self._parameters.items() if pid in keep],
            conditions=[c for c in self.conditions if c.parameter in keep],
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _active(
        self,
        parameter_id: str,
        assignment: Mapping[str, Any],
        memo: dict[str, bool] | None = None,
    ) -> bool:
        """Activity of one parameter; ``memo`` caches results for the same assignment."""
        if memo is None:
            memo = {}
        if parameter_id not in memo:
            memo[parameter_id] = all(
                condition.holds(assignment) and self._active(condition.on, assignment, memo)
                for condition in self._conditions.get(parameter_id, ())
            )
        return memo[parameter_id]

    def _find_path(self, start: str, target: str) -> list[str] | None:
        """Depth-first search along "on" edges; the path from start to target, if any."""
        stack: list[tuple[str, list[str]]] = [(start, [start])]
        seen: set[str] = set()
        while stack:
            node, path = stack.pop()
            if node == target:
                return path
            if node in seen:
                continue
            seen.add(node)
            for condition in self._conditions.get(node, ()):
                stack.append((condition.on, [*path, condition.on]))
        return None

    def _require(self, parameter_id: str, context: str | None = None) -> ParameterSpec:
        spec = self._parameters.get(parameter_id)
        if spec is None:
            raise UnknownParameterError(parameter_id, context)
        return spec

    def _require_open(self, operation: str) -> None:
        if self._closed:
            raise SpaceClosedError(operation)
