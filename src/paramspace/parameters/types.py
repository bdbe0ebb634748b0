"""Core parameter declaration type.

This module implements the single-parameter building block:
- ParameterKind: the closed set of parameter kinds
- Parameter: immutable declaration of one parameter (bounds, levels,
  default, special values, tags and an optional custom predicate)
- check_value: the ordered validity check shared by all kinds

Parameters are value objects. Build a new Parameter (for example with
``dataclasses.replace``) instead of mutating an existing one.
"""

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, FrozenSet, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import ParameterValueError, Violation, ViolationKind

# Predicate result: True/None pass, False or a message string fail
CustomCheck = Callable[[Any], Union[bool, str, None]]


class ParameterKind(str, Enum):
    """Kind of values a parameter accepts."""

    INTEGER = "integer"
    REAL = "real"
    CATEGORICAL = "categorical"
    BOOLEAN = "boolean"
    OPAQUE = "opaque"

    @classmethod
    def parse(cls, value: Union[str, "ParameterKind"]) -> "ParameterKind":
        """Resolve a kind from its name or one of the accepted aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            names = sorted([k.value for k in cls] + list(_KIND_ALIASES))
            raise ValueError(f"Parameter kind must be one of {names}, got {value!r}") from None


_KIND_ALIASES = {
    "int": "integer",
    "float": "real",
    "numeric": "real",
    "discrete": "categorical",
    "choice": "categorical",
    "bool": "boolean",
    "logical": "boolean",
    "untyped": "opaque",
}


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_nan(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not _is_bool(value) and math.isnan(value)


def same_value(a: Any, b: Any) -> bool:
    """Compare two parameter values.

    Booleans only ever equal booleans (``True`` is not ``1`` here), and NaN
    equals NaN so it can be declared as a special value.
    """
    if a is b:
        return True
    if _is_bool(a) or _is_bool(b):
        return _is_bool(a) and _is_bool(b) and bool(a) == bool(b)
    if _is_nan(a) or _is_nan(b):
        return _is_nan(a) and _is_nan(b)
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def contains_value(candidates: Iterable[Any], value: Any) -> bool:
    """Membership test using :func:`same_value`."""
    return any(same_value(c, value) for c in candidates)


@dataclass(frozen=True)
class Parameter:
    """Declaration of a single parameter.

    Attributes:
        id: Parameter identifier, unique within its ParameterSet
        kind: Kind of accepted values (integer, real, categorical, boolean, opaque)
        lower: Lower bound for numeric kinds (None = unbounded)
        upper: Upper bound for numeric kinds (None = unbounded)
        levels: Allowed values of a categorical parameter, in order
        default: Optional default value, must pass the parameter's own check
        special_values: Values accepted unconditionally
        tags: Labels for grouping and lookup
        custom_check: Extra predicate, the only check for opaque parameters
        doc: Human-readable description
    """
    id: str
    kind: ParameterKind
    lower: Optional[Union[int, float]] = None
    upper: Optional[Union[int, float]] = None
    levels: Optional[Tuple[Any, ...]] = None
    default: Any = None
    special_values: Tuple[Any, ...] = ()
    tags: FrozenSet[str] = field(default_factory=frozenset)
    custom_check: Optional[CustomCheck] = field(default=None, compare=False)
    doc: str = ""

    def __post_init__(self):
        """Normalize and validate the declaration."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Parameter id must be a non-empty string, got {self.id!r}")

        kind = ParameterKind.parse(self.kind)
        object.__setattr__(self, "kind", kind)

        if kind in (ParameterKind.INTEGER, ParameterKind.REAL):
            self._validate_bounds()
        elif self.lower is not None or self.upper is not None:
            raise ValueError(f"Parameter {self.id}: bounds are only allowed for numeric parameters")

        if kind == ParameterKind.CATEGORICAL:
            self._validate_levels()
        elif self.levels is not None:
            raise ValueError(f"Parameter {self.id}: levels are only allowed for categorical parameters")

        object.__setattr__(self, "special_values", tuple(self.special_values))
        tags = self.tags
        if isinstance(tags, str):
            tags = (tags,)
        object.__setattr__(self, "tags", frozenset(tags))

        if self.custom_check is not None and not callable(self.custom_check):
            raise TypeError(f"Parameter {self.id}: custom_check must be callable")

        if self.default is not None:
            violation = self.check(self.default)
            if violation is not None:
                raise ValueError(f"Parameter {self.id}: invalid default {self.default!r}: {violation.message}")

    def _validate_bounds(self) -> None:
        for name in ("lower", "upper"):
            bound = getattr(self, name)
            if bound is None:
                continue
            if _is_bool(bound) or not isinstance(bound, numbers.Real) or math.isnan(bound):
                raise ValueError(f"Parameter {self.id}: {name} bound must be a number, got {bound!r}")
            if self.kind == ParameterKind.INTEGER and not isinstance(bound, numbers.Integral):
                if math.isinf(bound):
                    # Infinite integer bounds mean unbounded
                    object.__setattr__(self, name, None)
                    continue
                raise ValueError(f"Integer parameter {self.id} must have integer bounds")

        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise ValueError(f"Parameter {self.id}: lower ({self.lower}) > upper ({self.upper})")

    def _validate_levels(self) -> None:
        if self.levels is None or isinstance(self.levels, (str, bytes)):
            raise ValueError(f"Categorical parameter {self.id} requires a sequence of levels")
        levels = tuple(self.levels)
        if not levels:
            raise ValueError(f"Categorical parameter {self.id} requires at least one level")
        for i, level in enumerate(levels):
            if contains_value(levels[:i], level):
                raise ValueError(f"Categorical parameter {self.id} has duplicate level {level!r}")
        object.__setattr__(self, "levels", levels)

    # ------------------------------------------------------------------
    # Derived facts
    # ------------------------------------------------------------------

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ParameterKind.INTEGER, ParameterKind.REAL)

    @property
    def is_categorical(self) -> bool:
        return self.kind == ParameterKind.CATEGORICAL

    @property
    def is_discrete(self) -> bool:
        """Whether the domain is a finite list of levels (categorical or boolean)."""
        return self.kind in (ParameterKind.CATEGORICAL, ParameterKind.BOOLEAN)

    @property
    def is_bounded(self) -> bool:
        """Whether values can be drawn without further information.

        Discrete parameters are always bounded; numeric parameters need two
        finite bounds; opaque parameters never are.
        """
        if self.is_discrete:
            return True
        if self.is_numeric:
            return (
                self.lower is not None
                and self.upper is not None
                and math.isfinite(self.lower)
                and math.isfinite(self.upper)
            )
        return False

    @property
    def domain_levels(self) -> Optional[Tuple[Any, ...]]:
        """Levels of a discrete parameter (booleans use ``(True, False)``)."""
        if self.kind == ParameterKind.BOOLEAN:
            return (True, False)
        return self.levels

    @property
    def cardinality(self) -> Optional[int]:
        """Number of distinct legal values for finite parameters, else None."""
        if self.is_discrete:
            return len(self.domain_levels)
        if self.kind == ParameterKind.INTEGER and self.is_bounded:
            return int(self.upper - self.lower + 1)
        return None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check(self, value: Any) -> Optional[Violation]:
        """Check a value against this declaration.

        Returns:
            None if the value is legal, else the first Violation found
        """
        return check_value(self, value)

    def test(self, value: Any) -> bool:
        """Return True if the value is legal."""
        return check_value(self, value) is None

    def assert_valid(self, value: Any) -> None:
        """Raise ParameterValueError if the value is not legal."""
        violation = check_value(self, value)
        if violation is not None:
            raise ParameterValueError(violation)

    def __repr__(self) -> str:
        if self.is_numeric:
            domain = f"[{self.lower}, {self.upper}]"
        elif self.is_discrete:
            domain = "{" + ", ".join(repr(v) for v in self.domain_levels) + "}"
        else:
            domain = "*"
        return f"Parameter({self.id}: {self.kind.value} {domain})"


def check_value(param: Parameter, value: Any) -> Optional[Violation]:
    """Ordered validity check of a value against a parameter.

    The order is: special values, type, numeric bounds, categorical levels,
    custom predicate. The first failing step decides the Violation.
    """
    if contains_value(param.special_values, value):
        return None

    kind = param.kind
    pid = param.id

    if kind == ParameterKind.INTEGER:
        integral = isinstance(value, numbers.Integral) or (
            isinstance(value, float) and math.isfinite(value) and value == math.floor(value)
        )
        if _is_bool(value) or not integral:
            return Violation(ViolationKind.TYPE, pid, f"Parameter {pid} requires integer value, got {type(value).__name__} {value!r}")
    elif kind == ParameterKind.REAL:
        if _is_bool(value) or not isinstance(value, numbers.Real):
            return Violation(ViolationKind.TYPE, pid, f"Parameter {pid} requires numeric value, got {type(value).__name__}")
        if math.isnan(value):
            return Violation(ViolationKind.TYPE, pid, f"Parameter {pid} cannot be NaN")
    elif kind == ParameterKind.BOOLEAN:
        if not _is_bool(value):
            return Violation(ViolationKind.TYPE, pid, f"Parameter {pid} requires boolean value, got {type(value).__name__}")

    if param.is_numeric:
        if (param.lower is not None and value < param.lower) or (param.upper is not None and value > param.upper):
            return Violation(ViolationKind.BOUNDS, pid, f"Parameter {pid}={value!r} outside bounds [{param.lower}, {param.upper}]")

    if kind == ParameterKind.CATEGORICAL and not contains_value(param.levels, value):
        return Violation(ViolationKind.LEVEL, pid, f"Parameter {pid}={value!r} is not one of the levels {list(param.levels)}")

    if param.custom_check is not None:
        outcome = param.custom_check(value)
        if outcome is not True and outcome is not None:
            reason = outcome if isinstance(outcome, str) else "predicate returned False"
            return Violation(ViolationKind.CUSTOM_CHECK, pid, f"Parameter {pid}={value!r} failed custom check: {reason}")

    return None


# ----------------------------------------------------------------------
# Convenience constructors
# ----------------------------------------------------------------------

def integer_param(id: str, lower: Optional[int] = None, upper: Optional[int] = None, **kwargs: Any) -> Parameter:
    """Create an integer parameter over [lower, upper]."""
    return Parameter(id, ParameterKind.INTEGER, lower=lower, upper=upper, **kwargs)


def real_param(id: str, lower: Optional[float] = None, upper: Optional[float] = None, **kwargs: Any) -> Parameter:
    """Create a real-valued parameter over [lower, upper]."""
    return Parameter(id, ParameterKind.REAL, lower=lower, upper=upper, **kwargs)


def categorical_param(id: str, levels: Sequence[Any], **kwargs: Any) -> Parameter:
    """Create a categorical parameter with the given levels."""
    return Parameter(id, ParameterKind.CATEGORICAL, levels=tuple(levels), **kwargs)


def boolean_param(id: str, **kwargs: Any) -> Parameter:
    """Create a boolean parameter."""
    return Parameter(id, ParameterKind.BOOLEAN, **kwargs)


def opaque_param(id: str, custom_check: Optional[CustomCheck] = None, **kwargs: Any) -> Parameter:
    """Create an opaque parameter validated only by ``custom_check``."""
    return Parameter(id, ParameterKind.OPAQUE, custom_check=custom_check, **kwargs)
