"""Test fixtures for paramspace tests."""

from collections.abc import Iterator
from typing import Any

import optuna
import pytest

from paramspace import (
    BoolParameter,
    CategoricalParameter,
    Equal,
    IntParameter,
    RealParameter,
    SearchSpace,
)
from paramspace.config import get_settings

optuna.logging.set_verbosity(optuna.logging.WARNING)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from PARAMSPACE_* variables and the settings cache."""
    for var in (
        "PARAMSPACE_DEFAULT_RESOLUTION",
        "PARAMSPACE_SEED",
        "PARAMSPACE_LOG_LEVEL",
        "PARAMSPACE_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pruning_space() -> SearchSpace:
    """A has 3 levels, B (4 grid points at resolution 4) only when A == "x", C has 2 levels."""
    space = SearchSpace()
    space.add_parameter(CategoricalParameter(id="A", levels=("x", "y", "z")))
    space.add_parameter(RealParameter(id="B", lower=0.0, upper=3.0))
    space.add_parameter(CategoricalParameter(id="C", levels=("c1", "c2")))
    space.add_condition("B", "A", Equal("x"))
    return space


@pytest.fixture
def branch_space() -> SearchSpace:
    """Selector with one integer parameter per branch."""
    space = SearchSpace()
    space.add_parameter(CategoricalParameter(id="branch", levels=("left", "right")))
    space.add_parameter(IntParameter(id="x", lower=1, upper=10))
    space.add_parameter(IntParameter(id="y", lower=1, upper=10))
    space.add_condition("x", "branch", Equal("left"))
    space.add_condition("y", "branch", Equal("right"))
    return space


@pytest.fixture
def pipeline_space() -> SearchSpace:
    """Preprocessing branch followed by an SVM with a kernel-dependent gamma."""
    space = SearchSpace()
    space.add_branch(
        "branch.selection",
        {
            "pca": [IntParameter(id="pca.rank", lower=1, upper=10, tags={"train"})],
            "filter": [RealParameter(id="filter.frac", lower=0.1, upper=1.0, tags={"train"})],
            "nop": [],
        },
        default="nop",
    )
    space.add_parameter(
        RealParameter(id="svm.cost", lower=-5.0, upper=5.0, default=0.0, tags={"train", "svm"})
    )
    space.add_parameter(
        CategoricalParameter(
            id="svm.kernel",
            levels=("linear", "radial"),
            default="radial",
            tags={"train", "svm"},
        )
    )
    space.add_parameter(
        RealParameter(id="svm.gamma", lower=-5.0, upper=5.0, tags={"train", "svm"})
    )
    space.add_parameter(BoolParameter(id="svm.shrinking", default=True, tags={"svm"}))
    space.add_condition("svm.gamma", "svm.kernel", Equal("radial"))
    return space


@pytest.fixture
def sample_definition() -> dict[str, Any]:
    """Search space definition in its serialized form."""
    return {
        "parameters": [
            {"type": "categorical", "id": "branch", "levels": ["left", "right"]},
            {"type": "int", "id": "x", "lower": 1, "upper": 10},
            {"type": "real", "id": "y", "lower": 0.0, "upper": 1.0, "tags": ["train"]},
            {"type": "bool", "id": "flag", "default": False},
        ],
        "conditions": [
            {"parameter": "x", "on": "branch", "predicate": {"type": "equal", "value": "left"}},
            {
                "parameter": "y",
                "on": "branch",
                "predicate": {"type": "any_of", "values": ["right"]},
            },
        ],
    }
