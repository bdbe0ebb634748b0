"""Space-filling designs (Latin hypercube, Sobol, plain random).

Points are drawn in the unit hypercube, one dimension per parameter, and
mapped onto each parameter's domain. Dependencies are honoured the same way
as in HierarchicalSampler: inactive parameters are left NOT_SAMPLED.
"""

import logging
from typing import Any, Optional

import numpy as np
from scipy.stats import qmc

from ..constants import DESIGN_METHODS, NOT_SAMPLED
from ..errors import EmptySamplingDomainError
from ..parameters import Parameter, ParameterKind, ParameterSet
from .base import validate_sample_size
from .design import Design

logger = logging.getLogger(__name__)


def from_unit(param: Parameter, u: float) -> Any:
    """Map a value in [0, 1] onto the domain of ``param``.

    Integers and levels use equal-width bins so every value is equally likely.
    """
    if param.kind == ParameterKind.REAL:
        return float(param.lower + u * (param.upper - param.lower))
    if param.kind == ParameterKind.INTEGER:
        width = param.upper - param.lower + 1
        return int(min(param.lower + int(u * width), param.upper))
    if param.is_discrete:
        levels = param.domain_levels
        return levels[min(int(u * len(levels)), len(levels) - 1)]
    raise EmptySamplingDomainError(f"Cannot map unit values onto {param.kind.value} parameter {param.id}")


def _unit_points(method: str, n: int, d: int, seed: Optional[int]) -> np.ndarray:
    if method == "lhs":
        return qmc.LatinHypercube(d=d, seed=seed).random(n)
    if method == "sobol":
        engine = qmc.Sobol(d=d, scramble=True, seed=seed)
        if n & (n - 1) == 0:
            return engine.random_base2(n.bit_length() - 1)
        # scipy warns that the balance properties need a power of 2
        return engine.random(n)
    return np.random.default_rng(seed).random((n, d))


def generate_design(
    parameter_set: ParameterSet,
    n: int,
    method: str = "lhs",
    seed: Optional[int] = None,
) -> Design:
    """Generate a space-filling design.

    Args:
        parameter_set: Set to sample, every parameter must be bounded
        n: Number of rows
        method: "lhs" (Latin hypercube), "sobol" (scrambled Sobol sequence) or "random".
            Sobol designs are balanced only when n is a power of 2; other sizes
            work but scipy emits a UserWarning.
        seed: Seed for reproducibility

    Returns:
        Design bound to ``parameter_set``

    Raises:
        ValueError: If method is unknown
        EmptySamplingDomainError: If the set is empty or holds an unbounded or opaque parameter
    """
    if method not in DESIGN_METHODS:
        raise ValueError(f"Unknown design method {method!r}. Available: {list(DESIGN_METHODS)}")
    n = validate_sample_size(n)
    params = list(parameter_set)
    if not params:
        raise EmptySamplingDomainError("Cannot build a design for an empty parameter set")
    unbounded = [p.id for p in params if not p.is_bounded]
    if unbounded:
        raise EmptySamplingDomainError(f"Parameters {unbounded} have no finite domain to sample from")

    columns = tuple(p.id for p in params)
    if n == 0:
        return Design(parameter_set, (), columns)

    unit = _unit_points(method, n, len(params), seed)
    column_of = {p.id: j for j, p in enumerate(params)}
    order = parameter_set.topological_order()

    rows = []
    for point in unit:
        row = {}
        for pid in order:
            if parameter_set.is_active(pid, row):
                row[pid] = from_unit(parameter_set.get(pid), float(point[column_of[pid]]))
        rows.append({c: row.get(c, NOT_SAMPLED) for c in columns})

    logger.debug(f"Generated {method} design with {n} rows over {list(columns)}")
    return Design(parameter_set, tuple(rows), columns)
