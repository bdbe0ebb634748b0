"""Dependency-aware sampler over a whole ParameterSet."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from ..constants import NOT_SAMPLED
from ..errors import UnknownParameterIdError
from ..parameters import ParameterSet
from .base import RngLike, Sampler, check_declaration
from .design import Design
from .univariate import UniformSampler, UnivariateSampler

logger = logging.getLogger(__name__)


class HierarchicalSampler(Sampler):
    """Sample a ParameterSet respecting its dependency graph.

    Parameters are processed in topological order (dependees first, ties
    broken by insertion order). In every row, a parameter whose dependencies
    hold gets a value from its univariate sampler; otherwise it is left
    ``NOT_SAMPLED`` and disappears from the transposed assignment.

    Args:
        parameter_set: Set to sample
        samplers: Univariate sampler per parameter id, as a mapping or an
            iterable of samplers. Parameters without one get a UniformSampler.

    Raises:
        EmptySamplingDomainError: If a parameter without an explicit sampler
            cannot be sampled uniformly (opaque or unbounded)
    """

    def __init__(
        self,
        parameter_set: ParameterSet,
        samplers: Optional[Union[Mapping[str, UnivariateSampler], Iterable[UnivariateSampler]]] = None,
    ):
        if not isinstance(parameter_set, ParameterSet):
            raise TypeError(f"Expected ParameterSet, got {type(parameter_set).__name__}")

        if samplers is None:
            given: Dict[str, UnivariateSampler] = {}
        elif isinstance(samplers, Mapping):
            given = dict(samplers)
        else:
            given = {s.parameter.id: s for s in samplers}

        for pid, sampler in given.items():
            if not isinstance(sampler, UnivariateSampler):
                raise TypeError(f"Sampler for {pid} must be a UnivariateSampler, got {type(sampler).__name__}")
            if pid not in parameter_set:
                raise UnknownParameterIdError(f"Sampler given for undeclared parameter {pid}")
            if sampler.parameter.id != pid:
                raise ValueError(f"Sampler registered for {pid} is bound to {sampler.parameter.id}")
            check_declaration(pid, sampler.parameter, parameter_set[pid])

        resolved: Dict[str, UnivariateSampler] = {}
        for param in parameter_set:
            resolved[param.id] = given.get(param.id) or UniformSampler(param)

        self._parameter_set = parameter_set
        self.samplers: Mapping[str, UnivariateSampler] = resolved

    @property
    def parameter_set(self) -> ParameterSet:
        return self._parameter_set

    def _sample_rows(self, n: int, rng: np.random.Generator) -> List[Dict[str, Any]]:
        ps = self._parameter_set
        order = ps.topological_order()
        missing = [pid for pid in order if pid not in self.samplers]
        if missing:
            raise ValueError(f"Parameter set changed after sampler construction; no sampler for {missing}")

        rows: List[Dict[str, Any]] = [{} for _ in range(n)]
        for pid in order:
            if ps.requirements(pid):
                active = [i for i, row in enumerate(rows) if ps.is_active(pid, row)]
            else:
                active = list(range(n))
            if not active:
                logger.debug(f"Parameter {pid} inactive in all {n} rows")
                continue
            values = self.samplers[pid].draw(len(active), rng)
            for i, value in zip(active, values):
                rows[i][pid] = value

        columns = ps.ids()
        return [{c: row.get(c, NOT_SAMPLED) for c in columns} for row in rows]

    def method_name(self) -> str:
        return "hierarchical"


def generate_random_design(parameter_set: ParameterSet, n: int, rng: RngLike = None) -> Design:
    """Uniform random design honouring dependencies.

    Shortcut for ``HierarchicalSampler(parameter_set).sample(n, rng)``.
    """
    return HierarchicalSampler(parameter_set).sample(n, rng)
