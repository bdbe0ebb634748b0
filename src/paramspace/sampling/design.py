"""Design: raw sampled rows bound to the ParameterSet they were drawn from."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

import polars as pl

from ..constants import NOT_SAMPLED
from ..parameters import Assignment, ParameterSet


@dataclass(frozen=True, eq=False)
class Design:
    """Tabular collection of raw sampled rows.

    Every row holds one cell per column; parameters that were not sampled in
    a row (unmet dependency) hold ``NOT_SAMPLED``. Rows are read-only.

    Attributes:
        parameter_set: Independent copy of the set the design was produced against
        rows: Raw rows, values before any trafo
        columns: Parameter ids, in display order
    """
    parameter_set: ParameterSet
    rows: Tuple[Mapping[str, Any], ...] = ()
    columns: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        """Snapshot the parameter set, fill in default columns and freeze the rows."""
        object.__setattr__(self, "parameter_set", self.parameter_set.deep_copy())
        columns = tuple(self.columns) if self.columns is not None else tuple(self.parameter_set.ids())
        unknown = [c for c in columns if c not in self.parameter_set]
        if unknown:
            raise ValueError(f"Design columns {unknown} are not declared in the parameter set")

        frozen = []
        for i, row in enumerate(self.rows):
            extra = set(row) - set(columns)
            if extra:
                raise ValueError(f"Design row {i} has unexpected columns: {sorted(extra)}")
            frozen.append(MappingProxyType({c: row.get(c, NOT_SAMPLED) for c in columns}))

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "rows", tuple(frozen))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self.rows)

    def column(self, pid: str) -> List[Any]:
        """Raw values of one column, NOT_SAMPLED included."""
        if pid not in self.columns:
            raise KeyError(f"Column {pid} not in design. Available: {list(self.columns)}")
        return [row[pid] for row in self.rows]

    def transpose(self, apply_trafo: bool = True, validate: bool = True) -> List[Assignment]:
        """Convert rows into value assignments.

        Unsampled cells are dropped, so gated parameters are absent rather
        than present with a placeholder.

        Args:
            apply_trafo: Pass each assignment through the parameter set's trafo
            validate: Check every present value against its Parameter first

        Returns:
            One assignment per row, in row order

        Raises:
            ParameterValueError: If validate is set and a raw value is illegal
        """
        ps = self.parameter_set
        trafo = ps.trafo if apply_trafo else None
        assignments = []
        for row in self.rows:
            assignment = {k: v for k, v in row.items() if v is not NOT_SAMPLED}
            if validate:
                for pid, value in assignment.items():
                    ps.get(pid).assert_valid(value)
            if trafo is not None:
                assignment = trafo(assignment, ps)
            assignments.append(assignment)
        return assignments

    def to_frame(self) -> pl.DataFrame:
        """Rows as a polars DataFrame with nulls where nothing was sampled."""
        data = {
            c: [None if row[c] is NOT_SAMPLED else row[c] for row in self.rows]
            for c in self.columns
        }
        return pl.DataFrame(data, strict=False)

    def __repr__(self) -> str:
        return f"Design({len(self.rows)} rows × {len(self.columns)} columns)"


def empty_design(parameter_set: ParameterSet, columns: Optional[Sequence[str]] = None) -> Design:
    """Design with no rows."""
    return Design(parameter_set, (), None if columns is None else tuple(columns))
