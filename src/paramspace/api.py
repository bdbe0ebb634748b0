"""Public API for paramspace.

This module provides the complete public API: parameter declarations,
parameter sets, samplers, design generators, errors and configuration.
"""

# Parameters
from .parameters import (
    Parameter,
    ParameterKind,
    check_value,
    integer_param,
    real_param,
    categorical_param,
    boolean_param,
    opaque_param,
    # Conditions
    Condition,
    Equals,
    AnyOf,
    any_of,
    # Sets
    DependencyEdge,
    ParameterSet,
    ParameterRecord,
    DependencyRecord,
    repeat,
)

# Sampling
from .sampling import (
    Design,
    Sampler,
    UnivariateSampler,
    UniformSampler,
    CategoricalSampler,
    TruncatedNormalSampler,
    CustomSampler,
    JointSampler,
    HierarchicalSampler,
    generate_random_design,
    generate_grid,
    generate_design,
)

# Errors
from .errors import (
    Violation,
    ViolationKind,
    ParameterSpaceError,
    ParameterValueError,
    DuplicateParameterIdError,
    CyclicDependencyError,
    EmptySamplingDomainError,
    UnknownParameterIdError,
)

# Constants
from .constants import NOT_SAMPLED, DEFAULT_RESOLUTION

# Configuration
from .config import Settings, load_settings, read_pyproject, validate_settings

# Version
try:
    from importlib.metadata import version
    __version__ = version("paramspace")
except Exception:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Parameters
    "Parameter",
    "ParameterKind",
    "check_value",
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

    # Sets
    "DependencyEdge",
    "ParameterSet",
    "ParameterRecord",
    "DependencyRecord",
    "repeat",

    # Sampling
    "Design",
    "Sampler",
    "UnivariateSampler",
    "UniformSampler",
    "CategoricalSampler",
    "TruncatedNormalSampler",
    "CustomSampler",
    "JointSampler",
    "HierarchicalSampler",
    "generate_random_design",
    "generate_grid",
    "generate_design",

    # Errors
    "Violation",
    "ViolationKind",
    "ParameterSpaceError",
    "ParameterValueError",
    "DuplicateParameterIdError",
    "CyclicDependencyError",
    "EmptySamplingDomainError",
    "UnknownParameterIdError",

    # Constants
    "NOT_SAMPLED",
    "DEFAULT_RESOLUTION",

    # Configuration
    "Settings",
    "load_settings",
    "read_pyproject",
    "validate_settings",

    # Version
    "__version__",
]
