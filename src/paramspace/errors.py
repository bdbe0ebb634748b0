"""Error taxonomy for parameter declarations, validation and sampling.

Validation results are reported as :class:`Violation` records. Structural
problems (duplicate ids, cycles, unsamplable domains) are raised immediately
as exceptions that also derive from the matching builtin, so callers can
catch either ``ParameterSpaceError`` or plain ``ValueError``/``KeyError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ViolationKind(str, Enum):
    """Reason a value or assignment failed validation."""

    TYPE = "type"
    BOUNDS = "bounds"
    LEVEL = "level"
    CUSTOM_CHECK = "custom_check"
    DEPENDENCY_UNMET = "dependency_unmet"
    UNKNOWN_PARAMETER_ID = "unknown_parameter_id"


@dataclass(frozen=True)
class Violation:
    """Description of the first failed check.

    Attributes:
        kind: Category of the failure
        param_id: Parameter the failure is attributed to (None for anonymous checks)
        message: Human-readable description
    """
    kind: ViolationKind
    param_id: Optional[str]
    message: str

    def __str__(self) -> str:
        return self.message


class ParameterSpaceError(Exception):
    """Base class for all paramspace errors."""


class ParameterValueError(ParameterSpaceError, ValueError):
    """A value or assignment does not satisfy its declaration."""

    def __init__(self, violation: Violation):
        super().__init__(violation.message)
        self.violation = violation

    @property
    def kind(self) -> ViolationKind:
        return self.violation.kind


class DuplicateParameterIdError(ParameterSpaceError, ValueError):
    """A parameter id is already declared in the target set."""


class CyclicDependencyError(ParameterSpaceError, ValueError):
    """A dependency edge would close a cycle in the dependency graph."""


class EmptySamplingDomainError(ParameterSpaceError, ValueError):
    """A sampler or generator was asked to draw from an unsamplable domain."""


class UnknownParameterIdError(ParameterSpaceError, KeyError):
    """A structural operation referenced an id that is not declared."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
