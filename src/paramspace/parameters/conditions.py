"""Conditions gating one parameter on the value of another.

A condition is attached to a dependency edge and evaluated against the
dependee's value. Two variants exist:

- Equals: the dependee must equal a single value
- AnyOf: the dependee must be one of several values
"""

from dataclasses import dataclass
from typing import Any, Iterable, Tuple, Union

from .types import Parameter, contains_value, same_value


@dataclass(frozen=True)
class Equals:
    """Satisfied iff the dependee's value equals ``value``."""
    value: Any

    @property
    def kind(self) -> str:
        return "equals"

    @property
    def operand(self) -> Any:
        return self.value

    def operands(self) -> Tuple[Any, ...]:
        return (self.value,)

    def is_satisfied(self, value: Any) -> bool:
        return same_value(self.value, value)

    def __str__(self) -> str:
        return f"== {self.value!r}"


@dataclass(frozen=True)
class AnyOf:
    """Satisfied iff the dependee's value is one of ``values``."""
    values: Tuple[Any, ...]

    def __post_init__(self):
        if isinstance(self.values, (str, bytes)):
            raise TypeError("AnyOf expects a collection of values, not a single string")
        unique = []
        for v in self.values:
            if not contains_value(unique, v):
                unique.append(v)
        if not unique:
            raise ValueError("AnyOf requires at least one value")
        object.__setattr__(self, "values", tuple(unique))

    @property
    def kind(self) -> str:
        return "any_of"

    @property
    def operand(self) -> Tuple[Any, ...]:
        return self.values

    def operands(self) -> Tuple[Any, ...]:
        return self.values

    def is_satisfied(self, value: Any) -> bool:
        return contains_value(self.values, value)

    def __str__(self) -> str:
        return "in {" + ", ".join(repr(v) for v in self.values) + "}"


Condition = Union[Equals, AnyOf]


def any_of(values: Iterable[Any]) -> AnyOf:
    """Create an AnyOf condition from any iterable."""
    return AnyOf(tuple(values))


def validate_condition(condition: Condition, dependee: Parameter) -> None:
    """Type-check a condition against the parameter it will be evaluated on.

    Raises:
        TypeError: If condition is not a known condition type
        ValueError: If an operand can never be a legal value of the dependee
    """
    if not isinstance(condition, (Equals, AnyOf)):
        raise TypeError(f"Expected Equals or AnyOf condition, got {type(condition).__name__}")
    for operand in condition.operands():
        violation = dependee.check(operand)
        if violation is not None:
            raise ValueError(
                f"Condition {condition} can never hold for {dependee.id}: {violation.message}"
            )
