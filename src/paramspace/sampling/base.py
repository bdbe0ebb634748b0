"""Base class for samplers."""

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple, Union

import numpy as np

from ..parameters import Parameter, ParameterSet
from .design import Design

logger = logging.getLogger(__name__)

RngLike = Union[None, int, np.random.Generator]


def make_rng(rng: RngLike = None) -> np.random.Generator:
    """Return ``rng`` if it is a Generator, else a new one seeded with it."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def to_python(value: Any) -> Any:
    """Convert numpy scalars to the equivalent Python values."""
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    return value


def validate_sample_size(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise ValueError(f"Sample size must be a non-negative integer, got {n!r}")
    return int(n)


def check_declaration(pid: str, bound: Parameter, declared: Parameter) -> None:
    """Raise ValueError unless a child sampler draws from the declared parameter.

    ``custom_check`` is excluded from Parameter equality, so it is compared
    by identity here.
    """
    if bound != declared or bound.custom_check is not declared.custom_check:
        raise ValueError(
            f"Sampler for {pid} is bound to {bound!r}, which differs from the "
            f"declaration {declared!r} in the parameter set"
        )


class Sampler(ABC):
    """Base class for all samplers.

    A sampler is bound at construction to one Parameter or one ParameterSet
    and holds no random state: randomness comes from the ``rng`` argument
    of each :meth:`sample` call, so repeated calls are independent draws
    unless a seed or the same Generator is passed.
    """

    @property
    @abstractmethod
    def parameter_set(self) -> ParameterSet:
        """The set produced designs are bound to."""

    @property
    def columns(self) -> Tuple[str, ...]:
        """Ids of the columns this sampler fills."""
        return tuple(self.parameter_set.ids())

    @abstractmethod
    def _sample_rows(self, n: int, rng: np.random.Generator) -> List[Dict[str, Any]]:
        """Draw ``n`` raw rows (n >= 1)."""

    def sample(self, n: int, rng: RngLike = None) -> Design:
        """Draw ``n`` rows.

        Args:
            n: Number of rows, zero yields an empty Design
            rng: None, an integer seed, or a numpy Generator

        Returns:
            Design bound to this sampler's parameter set
        """
        n = validate_sample_size(n)
        if n == 0:
            return Design(self.parameter_set, (), self.columns)
        rows = self._sample_rows(n, make_rng(rng))
        logger.debug(f"{self.method_name()} sampler drew {n} rows over {list(self.columns)}")
        return Design(self.parameter_set, tuple(rows), self.columns)

    @abstractmethod
    def method_name(self) -> str:
        """Return the name of this sampling method."""
