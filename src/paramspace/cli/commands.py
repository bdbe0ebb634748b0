"""Commands for inspecting, sampling and validating parameter sets.

Results are printed, never written to disk.
"""

import json
from typing import Any, Optional

import typer
from typer.models import ArgumentInfo, OptionInfo

from ..config import SAMPLE_METHODS, load_settings
from ..errors import ParameterSpaceError
from ..parameters import ParameterSet
from ..sampling import Design, HierarchicalSampler, generate_design, generate_grid
from .loading import load_parameter_set


def _normalize_option_value(value):
    """Support calling the Typer command functions directly in tests."""
    return value.default if isinstance(value, (OptionInfo, ArgumentInfo)) else value


def _load(space: str, project_root: Optional[str]) -> ParameterSet:
    try:
        return load_parameter_set(space, project_root)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as e:
        typer.echo(f"Error: Could not load parameter set '{space}': {e}", err=True)
        raise typer.Exit(1)


def _emit(design: Design, fmt: str, raw: bool) -> None:
    if fmt == "json":
        for assignment in design.transpose(apply_trafo=not raw):
            typer.echo(json.dumps(assignment, default=str))
    elif fmt == "table":
        typer.echo(str(design.to_frame()))
    else:
        typer.echo(f"Error: unknown format '{fmt}' (expected table or json)", err=True)
        raise typer.Exit(1)


def describe_command(
    space: str = typer.Argument(..., help="Parameter set reference (e.g., spaces.svm:space)"),
    project_root: Optional[str] = typer.Option(None, "--project-root", help="Project root to add to sys.path (default: cwd)"),
):
    """Print parameter metadata and dependency edges."""
    project_root = _normalize_option_value(project_root)
    ps = _load(space, project_root)

    typer.echo(f"Parameters ({len(ps)}):")
    typer.echo(str(ps.to_frame().select(["id", "kind", "lower", "upper", "levels", "default", "tags"])))
    if ps.has_dependencies():
        typer.echo(f"\nDependencies ({len(ps.dependencies)}):")
        typer.echo(str(ps.dependencies_frame()))
    else:
        typer.echo("\nDependencies: (none)")


def grid_command(
    space: str = typer.Argument(..., help="Parameter set reference"),
    resolution: Optional[int] = typer.Option(None, "--resolution", "-r", help="Grid points per numeric parameter"),
    fmt: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    raw: bool = typer.Option(False, "--raw", help="Do not apply the parameter set's trafo (json only)"),
    project_root: Optional[str] = typer.Option(None, "--project-root", help="Project root to add to sys.path (default: cwd)"),
):
    """Enumerate the grid design of a parameter set."""
    resolution = _normalize_option_value(resolution)
    fmt = _normalize_option_value(fmt)
    raw = _normalize_option_value(raw)
    project_root = _normalize_option_value(project_root)

    settings = load_settings()
    ps = _load(space, project_root)
    try:
        design = generate_grid(ps, resolution if resolution is not None else settings.resolution)
    except ParameterSpaceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Generated {len(design)} grid points for {len(design.columns)} parameters", err=True)
    _emit(design, fmt, raw)


def sample_command(
    space: str = typer.Argument(..., help="Parameter set reference"),
    n_samples: int = typer.Option(10, "--n-samples", "-n", help="Number of rows to draw"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help=f"One of {', '.join(SAMPLE_METHODS)}"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducibility"),
    fmt: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    raw: bool = typer.Option(False, "--raw", help="Do not apply the parameter set's trafo (json only)"),
    project_root: Optional[str] = typer.Option(None, "--project-root", help="Project root to add to sys.path (default: cwd)"),
):
    """Draw a random or space-filling design from a parameter set.

    Sobol designs are balanced only when --n-samples is a power of 2.
    """
    n_samples = _normalize_option_value(n_samples)
    method = _normalize_option_value(method)
    seed = _normalize_option_value(seed)
    fmt = _normalize_option_value(fmt)
    raw = _normalize_option_value(raw)
    project_root = _normalize_option_value(project_root)

    settings = load_settings()
    method = method or settings.method
    seed = seed if seed is not None else settings.seed
    if method not in SAMPLE_METHODS:
        typer.echo(f"Error: unknown method '{method}'. Available: {', '.join(SAMPLE_METHODS)}", err=True)
        raise typer.Exit(1)

    ps = _load(space, project_root)
    try:
        if method == "hierarchical":
            design = HierarchicalSampler(ps).sample(n_samples, seed)
        else:
            design = generate_design(ps, n_samples, method=method, seed=seed)
    except (ParameterSpaceError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Generated {len(design)} {method} samples for {len(design.columns)} parameters", err=True)
    _emit(design, fmt, raw)


def check_command(
    space: str = typer.Argument(..., help="Parameter set reference"),
    assignment: str = typer.Argument(..., help='Assignment as a JSON object, e.g. \'{"A": false, "B": 3}\''),
    project_root: Optional[str] = typer.Option(None, "--project-root", help="Project root to add to sys.path (default: cwd)"),
):
    """Validate an assignment; exits with status 1 if it is not legal."""
    assignment = _normalize_option_value(assignment)
    project_root = _normalize_option_value(project_root)

    try:
        values: Any = json.loads(assignment)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: assignment is not valid JSON: {e}", err=True)
        raise typer.Exit(1)
    if not isinstance(values, dict):
        typer.echo("Error: assignment must be a JSON object", err=True)
        raise typer.Exit(1)

    ps = _load(space, project_root)
    violation = ps.check(values)
    if violation is None:
        typer.echo("✓ OK")
        return
    typer.echo(f"✗ {violation.kind.value}: {violation.message}")
    raise typer.Exit(1)
