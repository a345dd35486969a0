"""
Configuración global del visor de tablas.

Centraliza los valores por defecto de la ventana, los filtros de archivo,
la lectura de CSV, la exportación y el logging.
"""
import logging
import os
from dataclasses import dataclass

# =====================================
#  APLICACIÓN / VENTANA
# =====================================
APP_NAME = "visor-tablas"
WINDOW_TITLE = "Visor de Tablas - CSV / Excel"
WINDOW_GEOMETRY = "1200x800"
COLUMN_WIDTH = 160

# Tipos admitidos por el selector de archivos
SUPPORTED_FILETYPES = [
    ("Hojas de cálculo", "*.csv *.xls *.xlsx"),
    ("CSV", "*.csv"),
    ("Excel 97-2003", "*.xls"),
    ("Excel", "*.xlsx"),
]

# =====================================
#  LECTURA
# =====================================
CSV_ENCODINGS = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']
CSV_DELIMITERS = [',', ';', '\t', '|']

# =====================================
#  EXPORTACIÓN
# =====================================
EXPORT_FILENAME = "exported_data.csv"
EXPORT_DIR = os.path.join(os.path.expanduser("~"), "Documents")
# "naive": une con comas sin escapar (igual que las exportaciones anteriores)
# "quoted": entrecomilla campos con delimitador, comillas o saltos de línea
EXPORT_MODE = "naive"
EXPORT_MODES = ("naive", "quoted")

# =====================================
#  LOGGING
# =====================================
LOG_LEVEL = os.getenv("TABLE_VIEWER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE = None
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUP_COUNT = 3


def log_level() -> int:
    return getattr(logging, LOG_LEVEL, logging.INFO)


@dataclass
class LoadOptions:
    """
    Supuestos de lectura explícitos:
      - header_row: índice de la fila que contiene los encabezados
      - sheet: índice de la hoja a leer en libros Excel
    """
    header_row: int = 0
    sheet: int = 0


@dataclass
class ExportOptions:
    mode: str = EXPORT_MODE
    delimiter: str = ","
    filename: str = EXPORT_FILENAME
    directory: str = EXPORT_DIR
