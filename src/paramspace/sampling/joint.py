"""Joint sampler for mutually independent parameters."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import DuplicateParameterIdError, UnknownParameterIdError
from ..parameters import ParameterSet
from .base import Sampler, check_declaration


class JointSampler(Sampler):
    """Combine samplers over disjoint, mutually independent parameters.

    Each child sampler draws independently; rows are assembled by column
    union. When a ParameterSet is given, every column must be declared in it
    with the same Parameter the child draws from, and no column may be gated
    by a dependency edge.

    Args:
        samplers: Child samplers with disjoint columns
        parameter_set: Optional owning set (default: union of the children's sets)
    """

    def __init__(self, samplers: Sequence[Sampler], parameter_set: Optional[ParameterSet] = None):
        samplers = tuple(samplers)
        if not samplers:
            raise ValueError("JointSampler requires at least one sampler")
        for s in samplers:
            if not isinstance(s, Sampler):
                raise TypeError(f"Expected Sampler, got {type(s).__name__}")

        columns: List[str] = []
        for s in samplers:
            for c in s.columns:
                if c in columns:
                    raise DuplicateParameterIdError(f"Parameter {c} is bound to more than one sampler")
                columns.append(c)

        if parameter_set is None:
            parameter_set = ParameterSet(s.parameter_set.deep_copy().subset(s.columns) for s in samplers)
        else:
            unknown = [c for c in columns if c not in parameter_set]
            if unknown:
                raise UnknownParameterIdError(f"Sampled parameters {unknown} are not declared in the parameter set")
            for s in samplers:
                for c in s.columns:
                    check_declaration(c, s.parameter_set[c], parameter_set[c])
            for c in columns:
                edges = parameter_set.requirements(c)
                if edges:
                    raise ValueError(
                        f"JointSampler requires mutually independent parameters, "
                        f"but {c} depends on {edges[0].dependee}; use HierarchicalSampler"
                    )

        self.samplers = samplers
        self._columns = tuple(columns)
        self._parameter_set = parameter_set

    @property
    def parameter_set(self) -> ParameterSet:
        return self._parameter_set

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    def _sample_rows(self, n: int, rng: np.random.Generator) -> List[Dict[str, Any]]:
        designs = [s.sample(n, rng) for s in self.samplers]
        rows = []
        for i in range(n):
            row: Dict[str, Any] = {}
            for design in designs:
                row.update(design.rows[i])
            rows.append(row)
        return rows

    def method_name(self) -> str:
        return "joint"
