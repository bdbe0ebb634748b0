"""Samplers and design generators.

This module provides the ways of turning a parameter declaration into
candidate configurations: univariate, joint and hierarchical samplers, grid
enumeration, and space-filling designs.
"""

from .design import Design
from .base import Sampler, make_rng
from .univariate import (
    UnivariateSampler,
    UniformSampler,
    CategoricalSampler,
    TruncatedNormalSampler,
    CustomSampler,
)
from .joint import JointSampler
from .hierarchical import HierarchicalSampler, generate_random_design
from .grid import generate_grid, grid_size, grid_values
from .space_filling import generate_design

__all__ = [
    "Design",
    "Sampler",
    "make_rng",
    "UnivariateSampler",
    "UniformSampler",
    "CategoricalSampler",
    "TruncatedNormalSampler",
    "CustomSampler",
    "JointSampler",
    "HierarchicalSampler",
    "generate_random_design",
    "generate_grid",
    "grid_size",
    "grid_values",
    "generate_design",
]
