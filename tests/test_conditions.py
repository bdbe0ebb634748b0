"""Tests for dependency conditions."""

import pytest

from paramspace.parameters import AnyOf, Equals, any_of, boolean_param, categorical_param, integer_param
from paramspace.parameters.conditions import validate_condition


class TestEquals:
    """Tests for the Equals condition."""

    def test_satisfied_by_equal_value(self):
        """Test that Equals holds only for its value."""
        cond = Equals("poly")
        assert cond.is_satisfied("poly")
        assert not cond.is_satisfied("rbf")

    def test_boolean_operand_not_matched_by_integer(self):
        """Test that Equals(False) is not satisfied by 0."""
        cond = Equals(False)
        assert cond.is_satisfied(False)
        assert not cond.is_satisfied(0)

    def test_kind_and_operand(self):
        """Test the exported kind and operand."""
        cond = Equals(3)
        assert cond.kind == "equals"
        assert cond.operand == 3
        assert str(cond) == "== 3"


class TestAnyOf:
    """Tests for the AnyOf condition."""

    def test_membership(self):
        """Test that AnyOf holds for any listed value."""
        cond = AnyOf(("x", "y"))
        assert cond.is_satisfied("x")
        assert cond.is_satisfied("y")
        assert not cond.is_satisfied("z")

    def test_duplicates_removed(self):
        """Test that repeated values are collapsed in order."""
        assert AnyOf(("a", "b", "a")).values == ("a", "b")

    def test_empty_raises(self):
        """Test that an empty value collection is rejected."""
        with pytest.raises(ValueError, match="at least one value"):
            AnyOf(())

    def test_single_string_raises(self):
        """Test that a bare string is not treated as a collection of characters."""
        with pytest.raises(TypeError, match="not a single string"):
            AnyOf("xy")

    def test_any_of_helper(self):
        """Test building AnyOf from an arbitrary iterable."""
        cond = any_of(v for v in [1, 2])
        assert cond.kind == "any_of"
        assert cond.operand == (1, 2)


class TestValidateCondition:
    """Tests for checking conditions against the dependee."""

    def test_valid_operand(self):
        """Test that a legal operand passes."""
        validate_condition(AnyOf(("x", "y")), categorical_param("D", ["x", "y", "z"]))

    def test_operand_outside_levels(self):
        """Test that an operand the dependee can never take is rejected."""
        with pytest.raises(ValueError, match="can never hold for D"):
            validate_condition(Equals("w"), categorical_param("D", ["x", "y", "z"]))

    def test_operand_wrong_type(self):
        """Test that a mistyped operand is rejected."""
        with pytest.raises(ValueError, match="can never hold for A"):
            validate_condition(Equals(0), boolean_param("A"))

    def test_operand_out_of_bounds(self):
        """Test that an AnyOf with one out-of-bounds value is rejected."""
        with pytest.raises(ValueError, match="can never hold"):
            validate_condition(AnyOf((1, 20)), integer_param("n", 0, 10))

    def test_non_condition_raises(self):
        """Test that arbitrary objects are not accepted as conditions."""
        with pytest.raises(TypeError, match="Expected Equals or AnyOf"):
            validate_condition(lambda v: True, boolean_param("A"))
