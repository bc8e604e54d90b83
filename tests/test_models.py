"""Tests for parameter, condition and configuration models."""

from random import Random

import pytest
from pydantic import TypeAdapter, ValidationError

from paramspace.errors import DomainError
from paramspace.models import (
    AnyOf,
    BoolParameter,
    CategoricalParameter,
    Condition,
    Configuration,
    DesignPoint,
    Equal,
    IntParameter,
    ParameterSpec,
    RealParameter,
)


class TestIntParameter:
    """Tests for IntParameter model."""

    def test_valid_int_parameter(self) -> None:
        """Test creating a valid int parameter."""
        param = IntParameter(id="rank", lower=1, upper=10, tags={"train"})
        assert param.type == "int"
        assert param.lower == 1
        assert param.upper == 10
        assert param.default is None
        assert param.tags == frozenset({"train"})
        assert param.is_numeric is True

    def test_lower_above_upper_rejected(self) -> None:
        """Test that inverted bounds are rejected."""
        with pytest.raises(ValidationError):
            IntParameter(id="rank", lower=10, upper=1)

    def test_default_outside_domain_rejected(self) -> None:
        """Test that a default outside the bounds is rejected."""
        with pytest.raises(ValidationError):
            IntParameter(id="rank", lower=1, upper=10, default=11)

    def test_forbids_extra(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            IntParameter(id="rank", lower=1, upper=10, log=True)

    def test_empty_id_rejected(self) -> None:
        """Test that an empty id is rejected."""
        with pytest.raises(ValidationError):
            IntParameter(id="", lower=1, upper=10)

    def test_is_frozen(self) -> None:
        """Test that parameters cannot be mutated."""
        param = IntParameter(id="rank", lower=1, upper=10)
        with pytest.raises(ValidationError):
            param.lower = 0

    def test_contains(self) -> None:
        """Test domain membership."""
        param = IntParameter(id="rank", lower=1, upper=10)
        assert param.contains(1)
        assert param.contains(10)
        assert not param.contains(0)
        assert not param.contains(2.5)
        assert not param.contains(True)

    def test_check_value_raises_domain_error(self) -> None:
        """Test that check_value reports the offending value."""
        param = IntParameter(id="rank", lower=1, upper=10)
        with pytest.raises(DomainError) as exc_info:
            param.check_value(42)
        assert exc_info.value.parameter_id == "rank"
        assert exc_info.value.value == 42

    @pytest.mark.parametrize(
        ("lower", "upper", "resolution", "expected"),
        [
            (1, 10, 3, [1, 5, 10]),
            (0, 10, 4, [0, 3, 6, 10]),
            (1, 3, 5, [1, 2, 3]),
            (1, 10, 1, [1]),
            (4, 4, 5, [4]),
        ],
    )
    def test_grid(self, lower: int, upper: int, resolution: int, expected: list[int]) -> None:
        """Test integer grid points are floored and de-duplicated."""
        param = IntParameter(id="n", lower=lower, upper=upper)
        assert param.grid(resolution) == expected

    def test_draw_within_bounds(self) -> None:
        """Test that draws stay inside the bounds."""
        param = IntParameter(id="n", lower=-3, upper=3)
        rng = Random(0)
        assert all(param.contains(param.draw(rng)) for _ in range(200))


class TestRealParameter:
    """Tests for RealParameter model."""

    def test_int_bounds_coerced(self) -> None:
        """Test that integer bounds are accepted as reals."""
        param = RealParameter(id="cost", lower=0, upper=1)
        assert param.lower == 0.0
        assert param.upper == 1.0

    def test_nan_bound_rejected(self) -> None:
        """Test that NaN bounds are rejected."""
        with pytest.raises(ValidationError):
            RealParameter(id="cost", lower=float("nan"), upper=1.0)

    def test_contains(self) -> None:
        """Test domain membership."""
        param = RealParameter(id="cost", lower=-1.0, upper=1.0)
        assert param.contains(0)
        assert param.contains(0.5)
        assert not param.contains(1.5)
        assert not param.contains(float("nan"))
        assert not param.contains("0.5")

    def test_grid_two_points(self) -> None:
        """Test resolution 2 yields exactly the bounds."""
        param = RealParameter(id="x", lower=0.0, upper=1.0)
        assert param.grid(2) == [0.0, 1.0]

    def test_grid_equal_spacing(self) -> None:
        """Test interior grid points are equally spaced."""
        param = RealParameter(id="x", lower=0.0, upper=3.0)
        assert param.grid(4) == [0.0, 1.0, 2.0, 3.0]

    def test_grid_last_point_is_upper(self) -> None:
        """Test the last grid point equals upper exactly."""
        param = RealParameter(id="x", lower=0.1, upper=0.7)
        points = param.grid(7)
        assert len(points) == 7
        assert points[0] == 0.1
        assert points[-1] == 0.7

    @pytest.mark.parametrize("resolution", [1, 2, 5])
    def test_degenerate_range_single_point(self, resolution: int) -> None:
        """Test lower == upper yields a single point."""
        param = RealParameter(id="x", lower=2.0, upper=2.0)
        assert param.grid(resolution) == [2.0]

    def test_grid_rejects_zero_resolution(self) -> None:
        """Test resolution below 1 is rejected."""
        param = RealParameter(id="x", lower=0.0, upper=1.0)
        with pytest.raises(ValueError):
            param.grid(0)

    def test_grid_rejects_non_integer_resolution(self) -> None:
        """Test a non-integer resolution is rejected."""
        param = RealParameter(id="x", lower=0.0, upper=1.0)
        with pytest.raises(TypeError):
            param.grid(2.5)  # type: ignore[arg-type]


class TestCategoricalParameter:
    """Tests for CategoricalParameter model."""

    def test_valid_categorical(self) -> None:
        """Test creating a valid categorical parameter."""
        param = CategoricalParameter(id="kernel", levels=["linear", "radial"], default="radial")
        assert param.levels == ("linear", "radial")
        assert param.is_numeric is False

    def test_empty_levels_rejected(self) -> None:
        """Test that an empty level set is rejected."""
        with pytest.raises(ValidationError):
            CategoricalParameter(id="kernel", levels=[])

    def test_duplicate_levels_rejected(self) -> None:
        """Test that duplicate levels are rejected."""
        with pytest.raises(ValidationError):
            CategoricalParameter(id="kernel", levels=["a", "b", "a"])

    def test_default_must_be_a_level(self) -> None:
        """Test that the default must be one of the levels."""
        with pytest.raises(ValidationError):
            CategoricalParameter(id="kernel", levels=["a", "b"], default="c")

    def test_grid_ignores_resolution(self) -> None:
        """Test that the grid is always the level set."""
        param = CategoricalParameter(id="kernel", levels=["a", "b", "c"])
        assert param.grid(1) == ["a", "b", "c"]
        assert param.grid(10) == ["a", "b", "c"]


class TestBoolParameter:
    """Tests for BoolParameter model."""

    def test_grid(self) -> None:
        """Test the logical grid."""
        assert BoolParameter(id="flag").grid(3) == [False, True]

    def test_rejects_integers(self) -> None:
        """Test that 0 and 1 are not logical values."""
        param = BoolParameter(id="flag")
        assert param.contains(True)
        assert not param.contains(1)


class TestParameterSpec:
    """Tests for the discriminated parameter union."""

    def test_dispatches_on_type(self) -> None:
        """Test that the type field selects the model."""
        adapter = TypeAdapter(ParameterSpec)
        param = adapter.validate_python({"type": "real", "id": "x", "lower": 0, "upper": 1})
        assert isinstance(param, RealParameter)

    def test_unknown_type_rejected(self) -> None:
        """Test that an unknown type is rejected."""
        adapter = TypeAdapter(ParameterSpec)
        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "complex", "id": "x"})


class TestPredicates:
    """Tests for Equal and AnyOf predicates."""

    def test_equal(self) -> None:
        """Test Equal matches a single literal."""
        predicate = Equal("radial")
        assert predicate("radial")
        assert not predicate("linear")

    def test_equal_keyword(self) -> None:
        """Test Equal accepts its value by keyword."""
        assert Equal(value=3) == Equal(3)

    def test_equal_does_not_confuse_bool_and_int(self) -> None:
        """Test True and 1 are different literals."""
        assert not Equal(True)(1)
        assert not Equal(1)(True)
        assert Equal(True)(True)

    def test_any_of(self) -> None:
        """Test AnyOf matches any listed literal."""
        predicate = AnyOf(["pca", "ica"])
        assert predicate("pca")
        assert predicate("ica")
        assert not predicate("nop")

    def test_any_of_empty_rejected(self) -> None:
        """Test AnyOf needs at least one value."""
        with pytest.raises(ValidationError):
            AnyOf([])

    def test_repr(self) -> None:
        """Test readable predicate representations."""
        assert repr(Equal("a")) == "Equal('a')"
        assert repr(AnyOf(["a", "b"])) == "AnyOf(['a', 'b'])"


class TestCondition:
    """Tests for Condition model."""

    def test_holds(self) -> None:
        """Test condition evaluation against an assignment."""
        condition = Condition(parameter="gamma", on="kernel", predicate=Equal("radial"))
        assert condition.holds({"kernel": "radial"})
        assert not condition.holds({"kernel": "linear"})

    def test_missing_on_value_never_holds(self) -> None:
        """Test a missing "on" value does not satisfy the predicate."""
        condition = Condition(parameter="gamma", on="kernel", predicate=Equal("radial"))
        assert not condition.holds({})

    def test_predicate_from_dict(self) -> None:
        """Test the predicate is parsed by its type field."""
        condition = Condition.model_validate(
            {"parameter": "p", "on": "s", "predicate": {"type": "any_of", "values": ["a"]}}
        )
        assert isinstance(condition.predicate, AnyOf)


class TestConfiguration:
    """Tests for Configuration and DesignPoint."""

    def test_mapping_behaviour(self) -> None:
        """Test Configuration behaves as a read-only mapping."""
        config = Configuration({"a": 1, "b": "x"})
        assert config["a"] == 1
        assert list(config) == ["a", "b"]
        assert len(config) == 2
        assert config == {"a": 1, "b": "x"}
        with pytest.raises(TypeError):
            config["a"] = 2  # type: ignore[index]

    def test_hashable(self) -> None:
        """Test equal configurations hash equally."""
        first = Configuration({"a": 1})
        second = Configuration({"a": 1})
        assert len({first, second}) == 1

    def test_hash_ignores_key_order(self) -> None:
        """Test configurations equal in any key order hash equally."""
        forward = Configuration({"a": 1, "b": 2})
        backward = Configuration({"b": 2, "a": 1})
        assert forward == backward
        assert hash(forward) == hash(backward)
        assert len({forward, backward}) == 1

    def test_to_dict_is_a_copy(self) -> None:
        """Test to_dict returns an independent dict."""
        config = Configuration({"a": 1})
        values = config.to_dict()
        values["a"] = 2
        assert config["a"] == 1

    def test_design_point_values(self) -> None:
        """Test values prefers transformed output when present."""
        raw = Configuration({"a": 1})
        assert DesignPoint(raw=raw).values == {"a": 1}
        assert DesignPoint(raw=raw, transformed=Configuration({"b": 2})).values == {"b": 2}

    def test_design_point_hashable(self) -> None:
        """Test design points with transformed values can be hashed and deduplicated."""
        raw = Configuration({"a": 1})
        first = DesignPoint(raw=raw, transformed=Configuration({"b": 2}))
        second = DesignPoint(raw=Configuration({"a": 1}), transformed=Configuration({"b": 2}))
        assert hash(first) == hash(second)
        assert len({first, second, DesignPoint(raw=raw)}) == 2
