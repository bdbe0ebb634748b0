"""Grid design generation.

Enumerates the Cartesian product of every parameter's grid values: all
levels of discrete parameters and evenly spaced points over the bounds of
numeric ones.

Dependency edges are not applied here. Rows whose gated parameters are
inactive are still emitted with those parameters filled in; callers that need
strict dependency compliance filter the transposed assignments with
``ParameterSet.test``.
"""

import itertools
import logging
import numbers
from typing import Any, List, Mapping, Union

import numpy as np

from ..constants import DEFAULT_RESOLUTION
from ..errors import EmptySamplingDomainError, UnknownParameterIdError
from ..parameters import Parameter, ParameterKind, ParameterSet
from .design import Design

logger = logging.getLogger(__name__)

Resolution = Union[int, Mapping[str, int]]


def _check_resolution(pid: str, n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 1:
        raise ValueError(f"Grid resolution for {pid} must be a positive integer, got {n!r}")
    return int(n)


def grid_values(param: Parameter, resolution: int = DEFAULT_RESOLUTION) -> List[Any]:
    """Grid values for a single parameter.

    Args:
        param: Parameter to enumerate
        resolution: Number of evenly spaced points for numeric parameters

    Returns:
        List of values; integer points are rounded and de-duplicated

    Raises:
        EmptySamplingDomainError: If the parameter is opaque or unbounded
    """
    resolution = _check_resolution(param.id, resolution)
    if param.is_discrete:
        return list(param.domain_levels)
    if not param.is_bounded:
        raise EmptySamplingDomainError(
            f"Cannot build a grid for {param.id}: {param.kind.value} parameter "
            f"with bounds [{param.lower}, {param.upper}] has no finite domain"
        )

    points = np.linspace(param.lower, param.upper, resolution)
    if param.kind == ParameterKind.INTEGER:
        values = [int(round(v)) for v in points]
    else:
        values = [float(v) for v in points]
    # dict keeps first occurrence order
    return list(dict.fromkeys(values))


def generate_grid(parameter_set: ParameterSet, resolution: Resolution = DEFAULT_RESOLUTION) -> Design:
    """Generate the full grid design of a parameter set.

    Args:
        parameter_set: Set to enumerate, every parameter must be finite
        resolution: Points per numeric parameter, either one integer for all
            or a mapping id -> points (missing ids use the default resolution)

    Returns:
        Design with one row per grid point, in lexicographic order of the
        parameters' insertion order

    Raises:
        EmptySamplingDomainError: If the set is empty or holds an opaque or
            unbounded parameter
        ValueError: If a resolution is not a positive integer
    """
    if len(parameter_set) == 0:
        raise EmptySamplingDomainError("Cannot build a grid for an empty parameter set")

    if isinstance(resolution, Mapping):
        unknown = sorted(set(resolution) - set(parameter_set.ids()))
        if unknown:
            raise UnknownParameterIdError(f"Resolution given for unknown parameters: {unknown}")
        per_param = {p.id: resolution.get(p.id, DEFAULT_RESOLUTION) for p in parameter_set}
    else:
        per_param = {p.id: resolution for p in parameter_set}

    axes = {p.id: grid_values(p, per_param[p.id]) for p in parameter_set}

    if parameter_set.has_dependencies():
        logger.info(
            f"Grid over {list(axes)} ignores {len(parameter_set.dependencies)} dependency edge(s); "
            f"filter assignments with ParameterSet.test for strict compliance"
        )

    names = list(axes)
    rows = [dict(zip(names, combination)) for combination in itertools.product(*axes.values())]
    logger.debug(f"Generated {len(rows)} grid points for {len(names)} parameters")
    return Design(parameter_set, tuple(rows), tuple(names))


def grid_size(parameter_set: ParameterSet, resolution: Resolution = DEFAULT_RESOLUTION) -> int:
    """Number of rows :func:`generate_grid` would produce."""
    size = 1
    for p in parameter_set:
        n = resolution.get(p.id, DEFAULT_RESOLUTION) if isinstance(resolution, Mapping) else resolution
        size *= len(grid_values(p, n))
    return size
