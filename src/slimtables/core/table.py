"""In-memory table model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from slimtables.core.results import TestResult

if TYPE_CHECKING:
    from slimtables.core.tables.base import SlimTable

CellSubstitution = Callable[[str], str]


@dataclass
class Table:
    """A grid of string cells.

    Rows may have different lengths. Results are recorded next to the cells
    they belong to, so the grid itself is never rewritten.
    """
    rows: list[list[str]] = field(default_factory=list)
    cell_results: dict[tuple[int, int], TestResult] = field(default_factory=dict)
    row_results: dict[int, TestResult] = field(default_factory=dict)
    children: dict[int, list["SlimTable"]] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, rows: list[list]) -> "Table":
        return cls(rows=[["" if c is None else str(c) for c in row] for row in rows])

    def get_row_count(self) -> int:
        return len(self.rows)

    def get_column_count_in_row(self, row: int) -> int:
        if row >= len(self.rows):
            return 0
        return len(self.rows[row])

    def get_cell_contents(self, col: int, row: int) -> str:
        return self.rows[row][col]

    def get_row(self, row: int) -> list[str]:
        return list(self.rows[row])

    def as_template(self, substitution: CellSubstitution) -> "Table":
        """Clone the table, passing every cell through ``substitution``.

        Raises whatever ``substitution`` raises; in that case no clone is
        returned and this table is left as it was.
        """
        return Table(rows=[[substitution(cell) for cell in row] for row in self.rows])

    def add_child_table(self, child: "SlimTable", row: int) -> None:
        self.children.setdefault(row, []).append(child)

    def update_cell(self, col: int, row: int, result: TestResult) -> None:
        self.cell_results[(col, row)] = result

    def update_row(self, row: int, result: TestResult) -> None:
        self.row_results[row] = result

    def row_status(self, row: int) -> Optional[TestResult]:
        return self.row_results.get(row)
