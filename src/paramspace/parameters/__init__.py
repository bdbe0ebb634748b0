"""Parameter declarations, conditions and parameter sets.

This module provides the declaration side of paramspace: typed parameters,
the conditions that gate them, and the mutable ParameterSet that ties them
together with a dependency graph.
"""

from .types import (
    Parameter,
    ParameterKind,
    check_value,
    same_value,
    integer_param,
    real_param,
    categorical_param,
    boolean_param,
    opaque_param,
)
from .conditions import Condition, Equals, AnyOf, any_of
from .graph import DependencyEdge, DependencyGraph
from .space import (
    Assignment,
    ParameterSet,
    ParameterRecord,
    DependencyRecord,
    repeat,
    repeat_tag,
)

__all__ = [
    # Types
    "Parameter",
    "ParameterKind",
    "check_value",
    "same_value",
    "integer_param",
    "real_param",
    "categorical_param",
    "boolean_param",
    "opaque_param",
    # Conditions
    "Condition",
    "Equals",
    "AnyOf",
    "any_of",
    # Graph
    "DependencyEdge",
    "DependencyGraph",
    # Sets
    "Assignment",
    "ParameterSet",
    "ParameterRecord",
    "DependencyRecord",
    "repeat",
    "repeat_tag",
]
