"""Tests for the pspace command line interface."""

import json
import textwrap

import pytest
from typer.testing import CliRunner

from paramspace.cli import load_parameter_set, load_symbol
from paramspace.cli.__main__ import app

SPACE_MODULE = textwrap.dedent('''
    from paramspace import (
        AnyOf, Equals, ParameterSet, boolean_param, categorical_param, integer_param, real_param,
    )

    def build():
        ps = ParameterSet([
            boolean_param("A"),
            categorical_param("D", ["x", "y", "z"]),
            integer_param("B", 0, 10),
        ])
        ps.add_dependency("D", "A", Equals(False))
        ps.add_dependency("B", "D", AnyOf(("x", "y")))
        return ps

    space = build()

    flat = ParameterSet([real_param("rate", 0.0, 1.0), integer_param("count", 1, 3)])

    scaled = ParameterSet(
        [real_param("log_c", -2.0, 2.0)],
        trafo=lambda a, ps: {"c": 10 ** a["log_c"]},
    )

    not_a_space = 42
''')


def json_lines(output):
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


@pytest.fixture
def space_file(tmp_path, monkeypatch):
    """Write a module declaring parameter sets and run from its directory."""
    path = tmp_path / "spaces.py"
    path.write_text(SPACE_MODULE)
    monkeypatch.chdir(tmp_path)
    return path


class TestLoading:
    """Tests for resolving parameter set references."""

    def test_load_from_file(self, space_file):
        """Test loading a set from a file path."""
        ps = load_parameter_set(f"{space_file}:space")
        assert ps.ids() == ["A", "D", "B"]

    def test_load_factory(self, space_file):
        """Test that zero-argument factories are called."""
        ps = load_parameter_set(f"{space_file}:build")
        assert len(ps.dependencies) == 2

    def test_load_from_module_path(self, space_file):
        """Test loading from a module path relative to the project root."""
        ps = load_parameter_set("spaces:flat", project_root=str(space_file.parent))
        assert ps.ids() == ["rate", "count"]

    def test_missing_separator_raises(self):
        """Test that references need a ':' separator."""
        with pytest.raises(ValueError, match="module_or_file:name"):
            load_symbol("spaces.py")

    def test_missing_attribute_raises(self, space_file):
        """Test that unknown names raise AttributeError."""
        with pytest.raises(AttributeError, match="no attribute 'nope'"):
            load_symbol(f"{space_file}:nope")

    def test_not_a_parameter_set_raises(self, space_file):
        """Test that other objects are rejected."""
        with pytest.raises(TypeError, match="expected a ParameterSet"):
            load_parameter_set(f"{space_file}:not_a_space")


class TestCommands:
    """Tests for pspace commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_no_command_shows_help(self):
        """Test that running without a command exits with an error."""
        result = self.runner.invoke(app, [])
        assert result.exit_code == 1
        assert "Usage" in result.output

    def test_version(self):
        """Test the version command."""
        result = self.runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "paramspace version" in result.output

    def test_describe(self, space_file):
        """Test describing a parameter set."""
        result = self.runner.invoke(app, ["describe", f"{space_file}:space"])
        assert result.exit_code == 0, result.output
        assert "Parameters (3)" in result.output
        assert "Dependencies (2)" in result.output

    def test_describe_bad_reference(self, space_file):
        """Test that load failures exit with status 1."""
        result = self.runner.invoke(app, ["describe", f"{space_file}:not_a_space"])
        assert result.exit_code == 1
        assert "Could not load parameter set" in result.output

    def test_grid_json(self, space_file):
        """Test grid output as JSON lines."""
        result = self.runner.invoke(app, ["grid", f"{space_file}:flat", "-r", "2", "-f", "json"])
        assert result.exit_code == 0, result.output
        rows = json_lines(result.output)
        assert len(rows) == 2 * 2
        assert rows[0] == {"rate": 0.0, "count": 1}
        assert rows[-1] == {"rate": 1.0, "count": 3}

    def test_grid_table(self, space_file):
        """Test grid output as a table."""
        result = self.runner.invoke(app, ["grid", f"{space_file}:flat", "-r", "2"])
        assert result.exit_code == 0, result.output
        assert "rate" in result.output and "count" in result.output

    def test_sample_hierarchical(self, space_file):
        """Test that hierarchical samples satisfy dependencies."""
        result = self.runner.invoke(app, ["sample", f"{space_file}:build", "-n", "25", "--seed", "1", "-f", "json"])
        assert result.exit_code == 0, result.output
        rows = json_lines(result.output)
        assert len(rows) == 25
        for row in rows:
            if row["A"]:
                assert set(row) == {"A"}

    def test_sample_lhs(self, space_file):
        """Test a Latin hypercube sample."""
        result = self.runner.invoke(app, ["sample", f"{space_file}:flat", "-n", "8", "-m", "lhs", "--seed", "0", "-f", "json"])
        assert result.exit_code == 0, result.output
        assert len(json_lines(result.output)) == 8

    def test_sample_applies_trafo(self, space_file):
        """Test that the trafo is applied unless --raw is given."""
        args = ["sample", f"{space_file}:scaled", "-n", "3", "--seed", "0", "-f", "json"]
        transformed = json_lines(self.runner.invoke(app, args).output)
        raw = json_lines(self.runner.invoke(app, args + ["--raw"]).output)
        assert all(set(r) == {"c"} for r in transformed)
        assert all(set(r) == {"log_c"} for r in raw)

    def test_sample_unknown_method(self, space_file):
        """Test that unknown methods exit with status 1."""
        result = self.runner.invoke(app, ["sample", f"{space_file}:flat", "-m", "halton"])
        assert result.exit_code == 1
        assert "unknown method" in result.output

    def test_check_ok(self, space_file):
        """Test validating a legal assignment."""
        result = self.runner.invoke(app, ["check", f"{space_file}:space", '{"A": false, "D": "x", "B": 3}'])
        assert result.exit_code == 0, result.output
        assert "OK" in result.output

    def test_check_violation(self, space_file):
        """Test that violations are reported with their kind."""
        result = self.runner.invoke(app, ["check", f"{space_file}:space", '{"A": true, "D": "x"}'])
        assert result.exit_code == 1
        assert "dependency_unmet" in result.output

    def test_check_invalid_json(self, space_file):
        """Test that malformed assignments are rejected."""
        result = self.runner.invoke(app, ["check", f"{space_file}:space", "{A: 1"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_invalid_config_exits(self, space_file):
        """Test that an invalid [tool.paramspace] table stops the CLI."""
        (space_file.parent / "pyproject.toml").write_text("[tool.paramspace]\nmethod = 'halton'\n")
        result = self.runner.invoke(app, ["describe", f"{space_file}:space"])
        assert result.exit_code == 1
        assert "Invalid [tool.paramspace] configuration" in result.output
