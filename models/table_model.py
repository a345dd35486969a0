import math
import numbers
from typing import Any, List, Optional

ASC = "asc"
DESC = "desc"


class TableData:
    """
    Representa la hoja en memoria:
      - columns: lista de encabezados (pueden repetirse)
      - rows: lista de listas; NO se normalizan al largo de columns
    """
    def __init__(self, columns=None, rows=None):
        self.columns = list(columns) if columns else []
        self.rows = [list(r) for r in rows] if rows else []

    @property
    def is_empty(self) -> bool:
        return not self.columns and not self.rows

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        """Ancho máximo entre encabezados y filas (las filas largas agregan columnas sin título)."""
        return max([len(self.columns)] + [len(r) for r in self.rows])

    def copy(self) -> "TableData":
        return TableData(self.columns, self.rows)

    def __eq__(self, other):
        if not isinstance(other, TableData):
            return NotImplemented
        return self.columns == other.columns and self.rows == other.rows

    def __repr__(self):
        return f"TableData(columns={self.columns!r}, rows={len(self.rows)})"


class SortState:
    def __init__(self, column: Optional[str] = None, direction: str = ASC):
        self.column = column
        self.direction = direction

    @property
    def active(self) -> bool:
        return self.column is not None

    def toggle(self, column: str) -> "SortState":
        # Misma columna: invierte. Columna nueva: ascendente.
        if self.column == column:
            direction = DESC if self.direction == ASC else ASC
        else:
            direction = ASC
        return SortState(column, direction)

    def __eq__(self, other):
        if not isinstance(other, SortState):
            return NotImplemented
        return self.column == other.column and self.direction == other.direction

    def __repr__(self):
        return f"SortState(column={self.column!r}, direction={self.direction!r})"


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, numbers.Real):
        return not (isinstance(value, float) and math.isnan(value))
    return False


def cell_text(value: Any) -> str:
    """Texto de una celda tal como se muestra, se busca y se exporta."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_texts(row: List[Any]) -> List[str]:
    return [cell_text(c) for c in row]


def heading_labels(columns: List[str], sort_state: Optional[SortState] = None) -> List[str]:
    """Títulos de encabezado; sólo la columna realmente ordenada lleva ↑/↓."""
    labels = list(columns)
    if sort_state is None or not sort_state.active or sort_state.column not in labels:
        return labels
    # Con encabezados repetidos se ordena por la primera coincidencia
    index = labels.index(sort_state.column)
    arrow = '↑' if sort_state.direction == ASC else '↓'
    labels[index] = f"{labels[index]} {arrow}"
    return labels
