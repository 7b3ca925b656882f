"""Dynamic column buffer for projected events (universal layout).

`Column` is an append-only columnar buffer where *any* projected param name
becomes its own column.

Design notes
------------
- Base columns (`contract_id`, `event`) are always present.
- Dynamic columns are stored as rendered strings so 128/256-bit integers
  survive Arrow/Parquet exactly.
- Dynamic columns are created lazily and padded with None for rows that
  did not carry them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pyarrow as pa

from specmatch.core.values import ScVal
from specmatch.decoding.utils import render_value

_BASE_FIELDS: list[tuple[str, pa.DataType]] = [
    ("contract_id", pa.string()),
    ("event", pa.string()),
]


@dataclass(slots=True)
class Column:
    """Dynamic columnar buffer of projected events."""

    contract_id: list[str | None] = field(default_factory=list)
    event: list[str] = field(default_factory=list)

    # Dynamic columns created on-demand for any projected name
    dyn: dict[str, list[str | None]] = field(default_factory=dict)
    _rows: int = 0

    def size(self) -> int:
        """Number of rows currently stored."""
        return self._rows

    def _append_base(self, contract_id: str | None, event: str) -> None:
        """Append one row to base columns and pad existing dynamic cols."""
        self.contract_id.append(contract_id)
        self.event.append(event)
        self._rows += 1
        for col in self.dyn.values():
            col.append(None)

    def _ensure_dyn_col(self, name: str) -> list[str | None]:
        """Ensure a dynamic column exists and is aligned to current row count."""
        col = self.dyn.get(name)
        if col is None:
            col = [None] * self._rows
            self.dyn[name] = col
        return col

    def append_projection(
        self,
        *,
        spec_name: str,
        contract_id: str | None,
        values: dict[str, ScVal],
    ) -> None:
        """Append one projected event (all names become columns)."""
        self._append_base(contract_id, spec_name)
        for k, v in values.items():
            self._ensure_dyn_col(k)[-1] = render_value(v)

    def to_arrow_table(self) -> pa.Table:
        """Convert the buffer to an Arrow table (dynamic columns in first-seen order)."""
        fields = [pa.field(n, t) for n, t in _BASE_FIELDS]
        arrays: dict[str, pa.Array] = {
            "contract_id": pa.array(self.contract_id, type=pa.string()),
            "event": pa.array(self.event, type=pa.string()),
        }
        for name, col in self.dyn.items():
            if name in arrays:
                # projected name collides with a base column
                name = f"param_{name}"
            fields.append(pa.field(name, pa.string()))
            arrays[name] = pa.array(col, type=pa.string())
        return pa.Table.from_pydict(arrays, schema=pa.schema(fields))
