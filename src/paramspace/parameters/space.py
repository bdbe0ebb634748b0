"""ParameterSet: ordered, mutable aggregation of parameters.

A ParameterSet owns:
- an insertion-ordered mapping id -> Parameter
- a dependency graph whose edges gate one parameter on another's value
- an optional trafo, applied when designs are transposed
- an optional current value assignment, re-validated on every write

Unlike Parameter, a ParameterSet is a shared mutable handle: binding it to a
second name creates an alias. Use :meth:`ParameterSet.deep_copy` to hand an
independent set to another owner (for example a parallel sampling worker).
"""

import copy
import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import polars as pl

from ..constants import REPEAT_ID_SEPARATOR, REPEAT_TAG_PREFIX
from ..errors import (
    DuplicateParameterIdError,
    ParameterValueError,
    UnknownParameterIdError,
    Violation,
    ViolationKind,
)
from .conditions import Condition, validate_condition
from .graph import DependencyEdge, DependencyGraph
from .types import Parameter, ParameterKind

logger = logging.getLogger(__name__)

Assignment = Dict[str, Any]
Trafo = Callable[[Assignment, "ParameterSet"], Assignment]


@dataclass(frozen=True)
class ParameterRecord:
    """One row of the parameter metadata export."""
    id: str
    kind: str
    lower: Optional[float]
    upper: Optional[float]
    levels: Optional[Tuple[Any, ...]]
    default: Any
    special_values: Tuple[Any, ...]
    tags: Tuple[str, ...]
    has_custom_check: bool
    cardinality: Optional[int]
    doc: str


@dataclass(frozen=True)
class DependencyRecord:
    """One row of the dependency edge export."""
    depender: str
    dependee: str
    condition_kind: str
    condition_operand: Any


class ParameterSet:
    """Ordered collection of parameters with conditional dependencies.

    Example:
        >>> ps = ParameterSet([
        ...     boolean_param("A"),
        ...     categorical_param("D", ["x", "y", "z"]),
        ...     integer_param("B", 0, 10),
        ... ])
        >>> ps.add_dependency("D", "A", Equals(False))
        >>> ps.add_dependency("B", "D", AnyOf(("x", "y")))
        >>> ps.test({"A": False, "D": "x", "B": 1})
        True
    """

    def __init__(
        self,
        parameters: Iterable[Union[Parameter, "ParameterSet"]] = (),
        trafo: Optional[Trafo] = None,
        values: Optional[Mapping[str, Any]] = None,
    ):
        self._parameters: Dict[str, Parameter] = {}
        self._graph = DependencyGraph()
        self._values: Optional[Assignment] = None
        self._trafo: Optional[Trafo] = None

        for item in parameters:
            self.add(item)
        self.trafo = trafo
        self.values = values

    # ------------------------------------------------------------------
    # Aggregation and mutation
    # ------------------------------------------------------------------

    def add(self, item: Union[Parameter, "ParameterSet"]) -> "ParameterSet":
        """Add a parameter, or merge all parameters and edges of another set.

        Nothing is added if any incoming id is already declared.

        Returns:
            self, for chaining

        Raises:
            DuplicateParameterIdError: If an id is already declared
            TypeError: If item is neither a Parameter nor a ParameterSet
        """
        if isinstance(item, Parameter):
            incoming = [item]
            edges: Tuple[DependencyEdge, ...] = ()
        elif isinstance(item, ParameterSet):
            incoming = list(item._parameters.values())
            edges = item._graph.edges()
        else:
            raise TypeError(f"Can only add Parameter or ParameterSet, got {type(item).__name__}")

        seen = set()
        duplicates = []
        for param in incoming:
            if param.id in self._parameters or param.id in seen:
                duplicates.append(param.id)
            seen.add(param.id)
        if duplicates:
            raise DuplicateParameterIdError(f"Duplicate parameter ids: {sorted(set(duplicates))}")

        for param in incoming:
            self._parameters[param.id] = param
        for edge in edges:
            self._graph.add(edge)

        logger.debug(f"Added {len(incoming)} parameter(s) and {len(edges)} dependency edge(s)")
        return self

    def subset(self, ids: Iterable[str]) -> "ParameterSet":
        """Keep only the named parameters, in place.

        Dependency edges with a removed endpoint are dropped, as are values of
        removed parameters. Call :meth:`deep_copy` first to keep the original.

        Returns:
            self, for chaining

        Raises:
            UnknownParameterIdError: If a named id is not declared
        """
        if isinstance(ids, str):
            ids = [ids]
        keep = set(ids)
        unknown = sorted(keep - set(self._parameters))
        if unknown:
            raise UnknownParameterIdError(f"Unknown parameters: {unknown}. Available: {list(self._parameters)}")

        removed = [pid for pid in self._parameters if pid not in keep]
        self._parameters = {pid: p for pid, p in self._parameters.items() if pid in keep}
        dropped = self._graph.retain(keep)
        if self._values is not None:
            self._values = {k: v for k, v in self._values.items() if k in keep}

        logger.debug(f"Subset removed parameters {removed} and {len(dropped)} dependency edge(s)")
        return self

    def add_dependency(self, depender: str, dependee: str, condition: Condition) -> DependencyEdge:
        """Make ``depender`` active only when ``dependee`` satisfies ``condition``.

        Raises:
            UnknownParameterIdError: If either id is not declared
            CyclicDependencyError: If the edge is a self-reference or closes a cycle
            ParameterValueError: If the current values violate the new edge
        """
        self.get(depender)
        dependee_param = self.get(dependee)
        validate_condition(condition, dependee_param)

        edge = DependencyEdge(depender, dependee, condition)
        self._graph.add(edge)

        if self._values is not None:
            violation = self.check(self._values)
            if violation is not None:
                self._graph.remove(edge)
                raise ParameterValueError(violation)

        logger.debug(f"Parameter {depender} now requires {dependee} {condition}")
        return edge

    def deep_copy(self) -> "ParameterSet":
        """Return an independent copy (parameters, edges, trafo and values)."""
        clone = ParameterSet()
        clone._parameters = dict(self._parameters)
        clone._graph = self._graph.copy()
        clone._trafo = self._trafo
        clone._values = copy.deepcopy(self._values)
        return clone

    def __deepcopy__(self, memo) -> "ParameterSet":
        return self.deep_copy()

    # ------------------------------------------------------------------
    # Lookup and inspection
    # ------------------------------------------------------------------

    def get(self, pid: str) -> Parameter:
        """Get a parameter by id.

        Raises:
            UnknownParameterIdError: If the id is not declared
        """
        if pid not in self._parameters:
            raise UnknownParameterIdError(f"Unknown parameter: {pid}. Available: {list(self._parameters)}")
        return self._parameters[pid]

    __getitem__ = get

    def __contains__(self, pid: object) -> bool:
        return pid in self._parameters

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._parameters.values()))

    @property
    def parameters(self) -> Mapping[str, Parameter]:
        """Read-only snapshot of the id -> Parameter mapping."""
        return MappingProxyType(dict(self._parameters))

    @property
    def dependencies(self) -> Tuple[DependencyEdge, ...]:
        return self._graph.edges()

    def ids(self, kind: Optional[Union[str, ParameterKind]] = None, tag: Optional[str] = None) -> List[str]:
        """Parameter ids in insertion order, optionally filtered by kind or tag."""
        wanted = ParameterKind.parse(kind) if kind is not None else None
        return [
            p.id for p in self._parameters.values()
            if (wanted is None or p.kind == wanted) and (tag is None or tag in p.tags)
        ]

    def requirements(self, pid: str) -> Tuple[DependencyEdge, ...]:
        """Edges gating ``pid``."""
        self.get(pid)
        return self._graph.edges_of(pid)

    def has_dependencies(self) -> bool:
        return bool(self._graph)

    def is_bounded(self) -> bool:
        """Whether every parameter can be sampled without extra information."""
        return all(p.is_bounded for p in self._parameters.values())

    def topological_order(self) -> List[str]:
        """Ids ordered so dependees come first, ties broken by insertion order."""
        return self._graph.topological_order(list(self._parameters))

    def lower(self) -> Dict[str, Any]:
        return {p.id: p.lower for p in self._parameters.values() if p.is_numeric}

    def upper(self) -> Dict[str, Any]:
        return {p.id: p.upper for p in self._parameters.values() if p.is_numeric}

    def defaults(self) -> Assignment:
        """Assignment of declared defaults.

        Parameters whose dependencies do not hold under the defaults themselves
        are left out, so the result always passes :meth:`check`.
        """
        result: Assignment = {}
        for pid in self.topological_order():
            default = self._parameters[pid].default
            if default is not None and self.is_active(pid, result):
                result[pid] = default
        return result

    def is_active(self, pid: str, assignment: Mapping[str, Any]) -> bool:
        """Whether every dependency of ``pid`` holds under ``assignment``."""
        for edge in self._graph.edges_of(pid):
            if edge.dependee not in assignment:
                return False
            if not edge.condition.is_satisfied(assignment[edge.dependee]):
                return False
        return True

    def records(self) -> Tuple[ParameterRecord, ...]:
        """Metadata of all parameters, one record per parameter."""
        return tuple(
            ParameterRecord(
                id=p.id,
                kind=p.kind.value,
                lower=p.lower,
                upper=p.upper,
                levels=p.domain_levels,
                default=p.default,
                special_values=p.special_values,
                tags=tuple(sorted(p.tags)),
                has_custom_check=p.custom_check is not None,
                cardinality=p.cardinality,
                doc=p.doc,
            )
            for p in self._parameters.values()
        )

    def dependency_records(self) -> Tuple[DependencyRecord, ...]:
        """Dependency edges, one record per edge."""
        return tuple(
            DependencyRecord(e.depender, e.dependee, e.condition.kind, e.condition.operand)
            for e in self._graph.edges()
        )

    def to_frame(self) -> pl.DataFrame:
        """Parameter metadata as a polars DataFrame.

        Levels, defaults and special values are rendered as strings since
        their types differ between parameters.
        """
        records = self.records()

        def _num(x):
            return None if x is None else float(x)

        def _strs(xs):
            return None if xs is None else [str(x) for x in xs]

        return pl.DataFrame(
            {
                "id": [r.id for r in records],
                "kind": [r.kind for r in records],
                "lower": [_num(r.lower) for r in records],
                "upper": [_num(r.upper) for r in records],
                "levels": [_strs(r.levels) for r in records],
                "default": [None if r.default is None else str(r.default) for r in records],
                "special_values": [_strs(r.special_values) for r in records],
                "tags": [list(r.tags) for r in records],
                "has_custom_check": [r.has_custom_check for r in records],
                "cardinality": [r.cardinality for r in records],
                "doc": [r.doc for r in records],
            },
            schema={
                "id": pl.Utf8,
                "kind": pl.Utf8,
                "lower": pl.Float64,
                "upper": pl.Float64,
                "levels": pl.List(pl.Utf8),
                "default": pl.Utf8,
                "special_values": pl.List(pl.Utf8),
                "tags": pl.List(pl.Utf8),
                "has_custom_check": pl.Boolean,
                "cardinality": pl.Int64,
                "doc": pl.Utf8,
            },
        )

    def dependencies_frame(self) -> pl.DataFrame:
        """Dependency edges as a polars DataFrame."""
        records = self.dependency_records()
        return pl.DataFrame(
            {
                "depender": [r.depender for r in records],
                "dependee": [r.dependee for r in records],
                "condition_kind": [r.condition_kind for r in records],
                "condition_operand": [str(r.condition_operand) for r in records],
            },
            schema={
                "depender": pl.Utf8,
                "dependee": pl.Utf8,
                "condition_kind": pl.Utf8,
                "condition_operand": pl.Utf8,
            },
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check(self, assignment: Mapping[str, Any]) -> Optional[Violation]:
        """Validate an assignment against all declarations and dependencies.

        Each declared parameter present in the assignment is checked in
        insertion order: its own value first, then every edge gating it.
        Ids that are not declared are reported after that. Absent parameters
        are always legal.

        Returns:
            None if the assignment is legal, else the first Violation found
        """
        if not isinstance(assignment, Mapping):
            raise TypeError(f"Assignment must be a mapping, got {type(assignment).__name__}")

        for pid, param in self._parameters.items():
            if pid not in assignment:
                continue
            violation = param.check(assignment[pid])
            if violation is not None:
                return violation
            for edge in self._graph.edges_of(pid):
                if edge.dependee not in assignment:
                    return Violation(
                        ViolationKind.DEPENDENCY_UNMET,
                        pid,
                        f"Parameter {pid} requires {edge.dependee} {edge.condition}, but {edge.dependee} is absent",
                    )
                dependee_value = assignment[edge.dependee]
                if not edge.condition.is_satisfied(dependee_value):
                    return Violation(
                        ViolationKind.DEPENDENCY_UNMET,
                        pid,
                        f"Parameter {pid} requires {edge.dependee} {edge.condition}, got {edge.dependee}={dependee_value!r}",
                    )

        for pid in assignment:
            if pid not in self._parameters:
                return Violation(
                    ViolationKind.UNKNOWN_PARAMETER_ID,
                    pid,
                    f"Unknown parameter {pid!r}. Available: {list(self._parameters)}",
                )
        return None

    def test(self, assignment: Mapping[str, Any]) -> bool:
        return self.check(assignment) is None

    def assert_valid(self, assignment: Mapping[str, Any]) -> None:
        """Raise ParameterValueError if the assignment is not legal."""
        violation = self.check(assignment)
        if violation is not None:
            raise ParameterValueError(violation)

    # ------------------------------------------------------------------
    # Current values and trafo
    # ------------------------------------------------------------------

    @property
    def values(self) -> Optional[Assignment]:
        """Copy of the current assignment (None when unset)."""
        return None if self._values is None else dict(self._values)

    @values.setter
    def values(self, assignment: Optional[Mapping[str, Any]]) -> None:
        if assignment is None:
            self._values = None
            return
        candidate = dict(assignment)
        self.assert_valid(candidate)
        self._values = candidate

    @property
    def trafo(self) -> Optional[Trafo]:
        """Caller-supplied ``(assignment, parameter_set) -> assignment`` function.

        The engine only invokes it; its result is not validated.
        """
        return self._trafo

    @trafo.setter
    def trafo(self, fn: Optional[Trafo]) -> None:
        if fn is not None and not callable(fn):
            raise TypeError(f"trafo must be callable, got {type(fn).__name__}")
        self._trafo = fn

    # ------------------------------------------------------------------
    # Repetition groups
    # ------------------------------------------------------------------

    def collect_repeated(self, assignment: Mapping[str, Any], base_id: str) -> List[Any]:
        """Rebuild the vector value of a repetition group from its atomic copies.

        Members missing from the assignment yield None at their position.

        Raises:
            UnknownParameterIdError: If the set has no repetition group for base_id
        """
        members = self.ids(tag=repeat_tag(base_id))
        if not members:
            raise UnknownParameterIdError(f"No repeated parameters for {base_id}")
        return [assignment.get(pid) for pid in members]

    def __repr__(self) -> str:
        ids = list(self._parameters)
        preview = ", ".join(ids[:5]) + (", ..." if len(ids) > 5 else "")
        return f"ParameterSet({preview}; {len(self._graph)} dependencies)"


def repeat_tag(base_id: str) -> str:
    """Tag shared by all copies produced by :func:`repeat`."""
    return f"{REPEAT_TAG_PREFIX}{base_id}"


def repeat(parameter: Parameter, n: int) -> ParameterSet:
    """Create a ParameterSet of ``n`` independent copies of ``parameter``.

    Copies are named ``<id>_1`` ... ``<id>_n`` and share the tag
    ``repeat:<id>``, so :meth:`ParameterSet.collect_repeated` can rebuild
    the vector value later.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError(f"repeat() requires a non-negative integer count, got {n!r}")
    tag = repeat_tag(parameter.id)
    copies = [
        replace(parameter, id=f"{parameter.id}{REPEAT_ID_SEPARATOR}{i}", tags=parameter.tags | {tag})
        for i in range(1, n + 1)
    ]
    return ParameterSet(copies)
