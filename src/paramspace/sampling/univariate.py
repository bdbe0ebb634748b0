"""One-dimensional samplers bound to a single Parameter.

- UniformSampler: uniform over numeric bounds or over levels
- CategoricalSampler: levels of a categorical/boolean parameter, optionally weighted
- TruncatedNormalSampler: normal distribution truncated to the numeric bounds
- CustomSampler: caller-supplied generator, validated after each draw
"""

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
from scipy.stats import truncnorm

from ..errors import EmptySamplingDomainError
from ..parameters import Parameter, ParameterKind, ParameterSet
from .base import Sampler, to_python


class UnivariateSampler(Sampler):
    """Sampler for exactly one parameter.

    Subclasses implement :meth:`draw`, which combinators call directly to
    fill a single column.
    """

    def __init__(self, parameter: Parameter):
        if not isinstance(parameter, Parameter):
            raise TypeError(f"Expected Parameter, got {type(parameter).__name__}")
        self.parameter = parameter
        self._validate_domain()
        self._parameter_set = ParameterSet([parameter])

    def _validate_domain(self) -> None:
        """Raise EmptySamplingDomainError if the parameter cannot be drawn from."""
        if not self.parameter.is_bounded:
            raise EmptySamplingDomainError(
                f"{type(self).__name__} requires a bounded parameter, "
                f"{self.parameter.id} is {self.parameter.kind.value} "
                f"with bounds [{self.parameter.lower}, {self.parameter.upper}]"
            )

    @property
    def parameter_set(self) -> ParameterSet:
        return self._parameter_set

    @abstractmethod
    def draw(self, n: int, rng: np.random.Generator) -> List[Any]:
        """Draw ``n`` values as plain Python objects."""

    def _sample_rows(self, n: int, rng: np.random.Generator) -> List[Dict[str, Any]]:
        pid = self.parameter.id
        return [{pid: v} for v in self.draw(n, rng)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameter.id})"


class UniformSampler(UnivariateSampler):
    """Uniform over ``[lower, upper]`` for numeric kinds, over levels otherwise."""

    def draw(self, n: int, rng: np.random.Generator) -> List[Any]:
        p = self.parameter
        if p.kind == ParameterKind.INTEGER:
            return [int(v) for v in rng.integers(p.lower, p.upper, endpoint=True, size=n)]
        if p.kind == ParameterKind.REAL:
            return [float(v) for v in rng.uniform(p.lower, p.upper, size=n)]
        levels = p.domain_levels
        return [levels[i] for i in rng.integers(0, len(levels), size=n)]

    def method_name(self) -> str:
        return "uniform"


class CategoricalSampler(UnivariateSampler):
    """Draws levels of a categorical or boolean parameter.

    Args:
        parameter: Categorical or boolean parameter
        weights: Optional non-negative weight per level, normalized internally
    """

    def __init__(self, parameter: Parameter, weights: Optional[Sequence[float]] = None):
        super().__init__(parameter)
        self.weights: Optional[np.ndarray] = None
        if weights is not None:
            w = np.asarray(weights, dtype=float)
            k = len(parameter.domain_levels)
            if w.shape != (k,):
                raise ValueError(f"Expected {k} weights for {parameter.id}, got {len(weights)}")
            if np.any(w < 0) or not np.isfinite(w).all() or w.sum() <= 0:
                raise ValueError(f"Weights for {parameter.id} must be non-negative with a positive sum")
            self.weights = w / w.sum()

    def _validate_domain(self) -> None:
        if not self.parameter.is_discrete:
            raise EmptySamplingDomainError(
                f"CategoricalSampler requires a categorical or boolean parameter, "
                f"{self.parameter.id} is {self.parameter.kind.value}"
            )

    def draw(self, n: int, rng: np.random.Generator) -> List[Any]:
        levels = self.parameter.domain_levels
        idx = rng.choice(len(levels), size=n, p=self.weights)
        return [levels[i] for i in idx]

    def method_name(self) -> str:
        return "categorical"


class TruncatedNormalSampler(UnivariateSampler):
    """Normal distribution truncated to the parameter bounds.

    Truncation is exact (scipy's truncnorm), which is equivalent to
    re-drawing until the value falls inside ``[lower, upper]``. Integer
    parameters get rounded draws.

    Args:
        parameter: Numeric parameter with finite bounds
        mean: Mean of the untruncated normal (default: midpoint of the bounds)
        sd: Standard deviation (default: a quarter of the range)
    """

    def __init__(self, parameter: Parameter, mean: Optional[float] = None, sd: Optional[float] = None):
        super().__init__(parameter)
        lo, hi = float(parameter.lower), float(parameter.upper)
        self.mean = (lo + hi) / 2.0 if mean is None else float(mean)
        self.sd = (hi - lo) / 4.0 if sd is None else float(sd)
        if not np.isfinite(self.mean):
            raise ValueError(f"Mean for {parameter.id} must be finite, got {mean}")
        if self.sd <= 0 and hi > lo:
            raise ValueError(f"Standard deviation for {parameter.id} must be positive, got {self.sd}")

    def _validate_domain(self) -> None:
        if not self.parameter.is_numeric:
            raise EmptySamplingDomainError(
                f"TruncatedNormalSampler requires a numeric parameter, "
                f"{self.parameter.id} is {self.parameter.kind.value}"
            )
        super()._validate_domain()

    def draw(self, n: int, rng: np.random.Generator) -> List[Any]:
        p = self.parameter
        lo, hi = float(p.lower), float(p.upper)
        if lo == hi:
            values = np.full(n, lo)
        else:
            a = (lo - self.mean) / self.sd
            b = (hi - self.mean) / self.sd
            values = truncnorm.rvs(a, b, loc=self.mean, scale=self.sd, size=n, random_state=rng)
            values = np.clip(values, lo, hi)
        if p.kind == ParameterKind.INTEGER:
            return [int(v) for v in np.clip(np.rint(values), p.lower, p.upper)]
        return [float(v) for v in values]

    def method_name(self) -> str:
        return "truncated_normal"


class CustomSampler(UnivariateSampler):
    """Draws values from a caller-supplied generator.

    Works for every kind, including opaque parameters. Each draw is checked
    against the parameter and an illegal value raises ParameterValueError.

    Args:
        parameter: Parameter to draw for
        generator: Function ``rng -> value`` producing one value per call
    """

    def __init__(self, parameter: Parameter, generator: Callable[[np.random.Generator], Any]):
        if not callable(generator):
            raise TypeError("CustomSampler generator must be callable")
        self.generator = generator
        super().__init__(parameter)

    def _validate_domain(self) -> None:
        # Any domain works; values are validated per draw
        return None

    def draw(self, n: int, rng: np.random.Generator) -> List[Any]:
        values = []
        for _ in range(n):
            value = to_python(self.generator(rng))
            self.parameter.assert_valid(value)
            values.append(value)
        return values

    def method_name(self) -> str:
        return "custom"
