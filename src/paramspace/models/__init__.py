"""Data models for parameters, conditions and configurations."""

from paramspace.models.conditions import AnyOf, Condition, Equal, Predicate
from paramspace.models.configuration import Configuration, DesignPoint
from paramspace.models.parameters import (
    BoolParameter,
    CategoricalParameter,
    IntParameter,
    ParameterKind,
    ParameterSpec,
    RealParameter,
)

__all__ = [
    # Parameters
    "ParameterSpec",
    "ParameterKind",
    "IntParameter",
    "RealParameter",
    "CategoricalParameter",
    "BoolParameter",
    # Conditions
    "Condition",
    "Predicate",
    "Equal",
    "AnyOf",
    # Configurations
    "Configuration",
    "DesignPoint",
]
