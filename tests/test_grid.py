"""Tests for grid design generation."""

import logging

import pytest

from paramspace import EmptySamplingDomainError, UnknownParameterIdError
from paramspace.parameters import (
    ParameterSet,
    boolean_param,
    categorical_param,
    integer_param,
    opaque_param,
    real_param,
)
from paramspace.sampling import generate_grid, grid_size, grid_values


class TestGridValues:
    """Tests for per-parameter grid values."""

    def test_real_linspace(self):
        """Test evenly spaced real values including both bounds."""
        assert grid_values(real_param("x", 0.0, 1.0), 5) == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_integer_points_deduplicated(self):
        """Test that rounded integer points are de-duplicated."""
        assert grid_values(integer_param("n", 0, 2), 10) == [0, 1, 2]

    def test_integer_points_are_ints(self):
        """Test that integer grid points are Python ints."""
        values = grid_values(integer_param("n", 0, 100), 3)
        assert values == [0, 50, 100]
        assert all(type(v) is int for v in values)

    def test_discrete_levels_ignore_resolution(self):
        """Test that discrete parameters enumerate all levels."""
        assert grid_values(categorical_param("c", ["a", "b", "c"]), 2) == ["a", "b", "c"]
        assert grid_values(boolean_param("f"), 1) == [True, False]

    def test_resolution_one(self):
        """Test that a single point is the lower bound."""
        assert grid_values(real_param("x", 2.0, 4.0), 1) == [2.0]

    def test_invalid_resolution_raises(self):
        """Test that the resolution must be a positive integer."""
        with pytest.raises(ValueError, match="positive integer"):
            grid_values(real_param("x", 0.0, 1.0), 0)

    def test_unbounded_raises(self):
        """Test that unbounded parameters have no grid."""
        with pytest.raises(EmptySamplingDomainError, match="no finite domain"):
            grid_values(real_param("x", 0.0), 5)

    def test_opaque_raises(self):
        """Test that opaque parameters have no grid."""
        with pytest.raises(EmptySamplingDomainError):
            grid_values(opaque_param("blob"), 5)


class TestGenerateGrid:
    """Tests for full grid designs."""

    def test_cartesian_product(self, flat_set):
        """Test that the grid is the product of all axes."""
        design = generate_grid(flat_set, 3)
        assert len(design) == 2 * 3 * 3
        assert design.columns == ("flag", "rate", "count")
        assert grid_size(flat_set, 3) == 18

    def test_lexicographic_order(self):
        """Test that the last parameter varies fastest."""
        ps = ParameterSet([boolean_param("a"), integer_param("b", 0, 1)])
        rows = generate_grid(ps, 2).transpose()
        assert rows == [
            {"a": True, "b": 0},
            {"a": True, "b": 1},
            {"a": False, "b": 0},
            {"a": False, "b": 1},
        ]

    def test_per_parameter_resolution(self, flat_set):
        """Test a resolution mapping with defaults for missing ids."""
        design = generate_grid(flat_set, {"rate": 2})
        assert sorted(set(design.column("rate"))) == [0.0, 1.0]
        assert grid_size(flat_set, {"rate": 2}) == 2 * 2 * 3

    def test_unknown_resolution_id_raises(self, flat_set):
        """Test that resolutions for unknown ids are rejected."""
        with pytest.raises(UnknownParameterIdError):
            generate_grid(flat_set, {"nope": 3})

    def test_empty_set_raises(self):
        """Test that an empty set has no grid."""
        with pytest.raises(EmptySamplingDomainError, match="empty parameter set"):
            generate_grid(ParameterSet())

    def test_unbounded_parameter_raises(self, flat_set):
        """Test that a single unbounded parameter makes the grid impossible."""
        flat_set.add(real_param("tol", 0.0))
        with pytest.raises(EmptySamplingDomainError):
            generate_grid(flat_set)

    def test_values_pass_parameter_checks(self, svm_set):
        """Test that every grid value is legal for its parameter."""
        design = generate_grid(svm_set, 4)
        for row in design:
            for pid, value in row.items():
                assert svm_set[pid].test(value)

    def test_dependencies_not_applied(self, gated_set, caplog):
        """Test that the grid fills gated parameters and logs that it did."""
        with caplog.at_level(logging.INFO, logger="paramspace.sampling.grid"):
            design = generate_grid(gated_set, 3)
        assert len(design) == 2 * 3 * 3
        assert "ignores 2 dependency edge(s)" in caplog.text
        legal = [a for a in design.transpose() if gated_set.test(a)]
        assert legal == [a for a in legal if a["A"] is False and a["D"] in ("x", "y")]
        assert len(legal) == 2 * 3

    def test_round_trip_without_dependencies(self, flat_set):
        """Test that every grid row of an independent set is a legal assignment."""
        assert all(flat_set.test(a) for a in generate_grid(flat_set, 4).transpose())


class TestSmallGrid:
    """A boolean crossed with a real parameter."""

    def test_boolean_by_real(self):
        """Test that resolution 3 yields 2 x 3 rows spanning the bounds."""
        ps = ParameterSet([boolean_param("flag"), real_param("x", -1.0, 1.0)])
        rows = generate_grid(ps, 3).transpose(apply_trafo=False)
        assert len(rows) == 6
        assert {r["flag"] for r in rows} == {True, False}
        assert sorted({r["x"] for r in rows}) == [-1.0, 0.0, 1.0]
        assert all(ps.test(r) for r in rows)
