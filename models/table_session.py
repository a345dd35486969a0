import locale
import logging
from contextlib import contextmanager
from functools import cmp_to_key
from typing import Any, Callable, List, Optional

from config import ExportOptions, LoadOptions
from models.table_model import ASC, SortState, TableData, cell_text, is_numeric
from services.errors import ParseError
from services.export_service import ExportService
from services.spreadsheet_service import SpreadsheetService

logger = logging.getLogger(__name__)


def compare_cells(a: Any, b: Any) -> int:
    """Numérico si ambas celdas son números; si no, texto según el locale."""
    if is_numeric(a) and is_numeric(b):
        return (a > b) - (a < b)
    return locale.strcoll(cell_text(a), cell_text(b))


def sort_rows(rows: List[List[Any]], index: int, direction: str = ASC) -> List[List[Any]]:
    # sorted() es estable: los empates conservan el orden de carga en ambas direcciones
    sign = 1 if direction == ASC else -1

    def _cmp(r1, r2):
        a = r1[index] if index < len(r1) else None
        b = r2[index] if index < len(r2) else None
        return sign * compare_cells(a, b)

    return sorted(rows, key=cmp_to_key(_cmp))


def row_matches(row: List[Any], query: str) -> bool:
    q = query.lower()
    return any(q in cell_text(cell).lower() for cell in row)


class TableSession:
    """
    Estado de la única pantalla: datos cargados, texto de búsqueda, orden
    activo y bandera de carga en curso.

    Las mutaciones (set_filter, sort) devuelven la proyección resultante.
    El orden siempre se calcula sobre los datos completos en orden de carga
    y el filtro se aplica después.
    """

    def __init__(self, decoder: Optional[SpreadsheetService] = None,
                 options: Optional[LoadOptions] = None,
                 export_options: Optional[ExportOptions] = None):
        self.decoder = decoder or SpreadsheetService()
        self.options = options or LoadOptions()
        self.export_options = export_options or ExportOptions()
        self._data = TableData()
        self._filter = ""
        self._sort = SortState()
        self._busy = False

    # --- ESTADO ---
    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def dataset(self) -> TableData:
        return self._data.copy()

    @property
    def columns(self) -> List[str]:
        return list(self._data.columns)

    @property
    def rows(self) -> List[List[Any]]:
        return [list(r) for r in self._data.rows]

    @property
    def filter_text(self) -> str:
        return self._filter

    @property
    def sort_state(self) -> SortState:
        return SortState(self._sort.column, self._sort.direction)

    # --- CARGA ---
    @contextmanager
    def loading(self):
        """Guarda de vuelo único: entrega False si ya hay una carga en curso."""
        if self._busy:
            logger.warning("Carga ignorada: ya hay una carga en curso.")
            yield False
            return
        self._busy = True
        try:
            yield True
        finally:
            self._busy = False

    def load(self, content_b64: str) -> Optional[TableData]:
        with self.loading() as acquired:
            if not acquired:
                return None
            return self._load_content(content_b64)

    def load_from(self, fetch: Callable[[], str]) -> Optional[TableData]:
        """Igual que load, pero la lectura (fetch) también corre bajo la guarda."""
        with self.loading() as acquired:
            if not acquired:
                return None
            return self._load_content(fetch())

    def _load_content(self, content_b64: str) -> TableData:
        grid = self.decoder.decode(content_b64, sheet=self.options.sheet)
        if grid is None:
            raise ParseError("El decodificador no devolvió datos.")

        header_row = self.options.header_row
        if header_row < len(grid):
            columns = [cell_text(c) for c in grid[header_row]]
            rows = grid[header_row + 1:]
        else:
            columns, rows = [], []

        self._data = TableData(columns, rows)
        self._filter = ""
        self._sort = SortState()

        ragged = sum(1 for r in self._data.rows if len(r) != len(columns))
        if ragged:
            logger.warning("%d filas no coinciden con el ancho de los encabezados (%d)", ragged, len(columns))
        logger.info("Cargadas %d columnas y %d filas", len(columns), self._data.row_count)
        return self.projection()

    # --- BÚSQUEDA / ORDEN ---
    def set_filter(self, query: str) -> TableData:
        self._filter = query or ""
        logger.debug("Filtro: %r", self._filter)
        return self.projection()

    def sort(self, column: str) -> TableData:
        self._sort = self._sort.toggle(column)
        logger.debug("Orden: %s %s", self._sort.column, self._sort.direction)
        return self.projection()

    def _column_index(self, column: Optional[str]) -> Optional[int]:
        # Con encabezados repetidos gana la primera columna
        try:
            return self._data.columns.index(column)
        except ValueError:
            return None

    def projection(self) -> TableData:
        rows = self._data.rows
        if self._sort.active:
            index = self._column_index(self._sort.column)
            if index is not None:
                rows = sort_rows(rows, index, self._sort.direction)
        if self._filter:
            rows = [r for r in rows if row_matches(r, self._filter)]
        return TableData(self._data.columns, rows)

    def summary(self) -> str:
        total = self._data.row_count
        if not self._filter:
            return f"Total: {total} registros"
        shown = self.projection().row_count
        return f"Mostrando {shown} de {total} registros"

    # --- EXPORTACIÓN ---
    def export(self) -> str:
        view = self.projection()
        return ExportService.to_text(
            view.columns,
            view.rows,
            mode=self.export_options.mode,
            delimiter=self.export_options.delimiter,
        )
