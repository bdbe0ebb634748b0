"""Dependency graph between parameters of one ParameterSet.

Edges are stored per depender in insertion order. The graph direction used
for cycle detection and ordering is dependee -> depender: a dependee must be
decided before anything that depends on it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from ..errors import CyclicDependencyError
from .conditions import Condition


@dataclass(frozen=True)
class DependencyEdge:
    """``depender`` is only active when ``dependee`` satisfies ``condition``."""
    depender: str
    dependee: str
    condition: Condition


class DependencyGraph:
    """Adjacency structure of dependency edges.

    All insertions go through :meth:`add`, which rejects self-references,
    duplicate edges and cycles before committing.
    """

    def __init__(self, edges: Iterable[DependencyEdge] = ()):
        self._by_depender: Dict[str, List[DependencyEdge]] = {}
        for edge in edges:
            self.add(edge)

    def add(self, edge: DependencyEdge) -> None:
        if edge.depender == edge.dependee:
            raise CyclicDependencyError(f"Parameter {edge.depender} cannot depend on itself")
        for existing in self._by_depender.get(edge.depender, ()):
            if existing.dependee == edge.dependee:
                raise ValueError(f"Parameter {edge.depender} already depends on {edge.dependee}")
        # A cycle closes iff the dependee already (transitively) depends on the depender
        path = self._dependency_path(edge.dependee, edge.depender)
        if path is not None:
            chain = " -> ".join([edge.depender] + path)
            raise CyclicDependencyError(
                f"Dependency {edge.depender} on {edge.dependee} would create a cycle: {chain}"
            )
        self._by_depender.setdefault(edge.depender, []).append(edge)

    def remove(self, edge: DependencyEdge) -> None:
        edges = self._by_depender.get(edge.depender, [])
        edges.remove(edge)
        if not edges:
            self._by_depender.pop(edge.depender, None)

    def _dependency_path(self, start: str, target: str):
        """Return the chain of dependees leading from ``start`` to ``target``, or None."""
        stack = [(start, [start])]
        seen: Set[str] = set()
        while stack:
            node, path = stack.pop()
            if node == target:
                return path
            if node in seen:
                continue
            seen.add(node)
            for edge in self._by_depender.get(node, ()):
                stack.append((edge.dependee, path + [edge.dependee]))
        return None

    def edges(self) -> Tuple[DependencyEdge, ...]:
        return tuple(e for edges in self._by_depender.values() for e in edges)

    def edges_of(self, depender: str) -> Tuple[DependencyEdge, ...]:
        """Edges where ``depender`` is the gated parameter."""
        return tuple(self._by_depender.get(depender, ()))

    def dependers_of(self, dependee: str) -> Tuple[str, ...]:
        return tuple(e.depender for e in self.edges() if e.dependee == dependee)

    def connects(self, a: str, b: str) -> bool:
        """Whether a direct edge links ``a`` and ``b`` in either direction."""
        return any({e.depender, e.dependee} == {a, b} for e in self.edges())

    def retain(self, ids: Iterable[str]) -> List[DependencyEdge]:
        """Keep only edges whose endpoints are both in ``ids``; return dropped edges."""
        keep = set(ids)
        dropped = []
        for depender in list(self._by_depender):
            kept = []
            for edge in self._by_depender[depender]:
                if edge.depender in keep and edge.dependee in keep:
                    kept.append(edge)
                else:
                    dropped.append(edge)
            if kept:
                self._by_depender[depender] = kept
            else:
                del self._by_depender[depender]
        return dropped

    def topological_order(self, ids: Sequence[str]) -> List[str]:
        """Order ``ids`` so every dependee precedes its dependers.

        Ties are broken by the position in ``ids`` (the set's insertion order).
        """
        position = {pid: i for i, pid in enumerate(ids)}
        pending = {
            pid: {e.dependee for e in self._by_depender.get(pid, ()) if e.dependee in position}
            for pid in ids
        }
        order: List[str] = []
        while pending:
            ready = [pid for pid, deps in pending.items() if not deps]
            if not ready:
                raise CyclicDependencyError(f"Circular dependency among {sorted(pending)}")
            nxt = min(ready, key=position.__getitem__)
            order.append(nxt)
            del pending[nxt]
            for deps in pending.values():
                deps.discard(nxt)
        return order

    def copy(self) -> "DependencyGraph":
        clone = DependencyGraph()
        clone._by_depender = {k: list(v) for k, v in self._by_depender.items()}
        return clone

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_depender.values())

    def __bool__(self) -> bool:
        return bool(self._by_depender)
