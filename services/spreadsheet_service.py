import base64
import binascii
import codecs
import csv
import io
import logging
import re
from typing import Any, List, Optional

import pandas as pd

import config
from services.errors import ParseError

logger = logging.getLogger(__name__)

XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0"

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?")


class SpreadsheetService:
    """
    Decodifica el contenido base64 de un CSV, XLS o XLSX a una grilla 2-D.
    - El formato se detecta por la firma de los bytes, no por la extensión.
    - CSV: soporta múltiples codificaciones y detecta el delimitador.
    - Excel: sólo se lee una hoja (por defecto la primera).
    La primera fila de la grilla es la de encabezados; este servicio no la separa.
    """

    def __init__(self, encodings=None, delimiters=None):
        self.encodings = encodings or list(config.CSV_ENCODINGS)
        self.delimiters = delimiters or list(config.CSV_DELIMITERS)

    def decode(self, content_b64: str, sheet=0) -> List[List[Any]]:
        raw = self._b64_to_bytes(content_b64)
        if not raw.strip():
            return []

        if raw.startswith(XLSX_MAGIC):
            grid = self._read_workbook(raw, sheet, engine="openpyxl", label="XLSX")
        elif raw.startswith(XLS_MAGIC):
            grid = self._read_workbook(raw, sheet, engine="xlrd", label="XLS")
        else:
            grid = self._read_delimited(raw)

        logger.debug("Grilla decodificada: %d filas", len(grid))
        return grid

    # --- BASE64 ---
    @staticmethod
    def _b64_to_bytes(content_b64: str) -> bytes:
        if isinstance(content_b64, bytes):
            content_b64 = content_b64.decode("ascii", errors="replace")
        compact = "".join((content_b64 or "").split())
        try:
            return base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ParseError(f"Contenido base64 inválido: {e}") from e

    # --- EXCEL ---
    def _read_workbook(self, raw: bytes, sheet, engine: str, label: str) -> List[List[Any]]:
        try:
            df = pd.read_excel(io.BytesIO(raw), sheet_name=sheet, header=None, engine=engine, dtype=object)
        except Exception as e:
            raise ParseError(f"No se pudo leer el libro {label}: {e}") from e

        grid = []
        for row in df.itertuples(index=False, name=None):
            cells = [None if _is_missing(v) else v for v in row]
            grid.append(cells)
        return _clean_grid(grid)

    # --- CSV ---
    def _read_delimited(self, raw: bytes) -> List[List[Any]]:
        text = self._decode_text(raw)

        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            return []

        # Detectar delimitador basado en la primera línea (Header)
        delimiter = self.detect_delimiter(lines[0])

        # Parsear; las filas irregulares se conservan tal cual
        try:
            reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
            grid = [[_coerce_cell(cell) for cell in row] for row in reader]
        except csv.Error as e:
            raise ParseError(f"CSV mal formado: {e}") from e
        return _clean_grid(grid)

    def _decode_text(self, raw: bytes) -> str:
        # "Texto Unicode" de Excel: UTF-16 con BOM, normalmente separado por tabs
        if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
            try:
                text = raw.decode("utf-16")
            except UnicodeDecodeError as e:
                raise ParseError(f"Texto UTF-16 inválido: {e}") from e
            logger.debug("CSV decodificado con utf-16")
            return text

        if b"\x00" in raw:
            raise ParseError("Contenido binario no reconocido como hoja de cálculo.")

        # Intentar decodificar con diferentes codificaciones
        for enc in self.encodings:
            try:
                text = raw.decode(enc)
                logger.debug("CSV decodificado con %s", enc)
                return text
            except (UnicodeDecodeError, LookupError):
                continue
        raise ParseError("No se pudo decodificar el archivo (revise codificación).")

    def detect_delimiter(self, header_line: str) -> str:
        delimiter = max(self.delimiters, key=lambda d: header_line.count(d))
        # Si no encontró ninguno, por defecto coma
        if header_line.count(delimiter) == 0:
            delimiter = ','
        return delimiter


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _coerce_cell(text: str) -> Optional[Any]:
    """
    Convierte el texto de una celda CSV a número cuando lo parece.
    Los espacios sólo se ignoran para decidir; el texto se devuelve intacto.
    """
    value = text.strip()
    if not value:
        return None
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    return text


def _clean_grid(grid: List[List[Any]]) -> List[List[Any]]:
    cleaned = []
    for row in grid:
        # Quitar celdas vacías al final; las filas vacías se descartan
        end = len(row)
        while end and row[end - 1] is None:
            end -= 1
        if end:
            cleaned.append(list(row[:end]))
    return cleaned
