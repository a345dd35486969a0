import csv
import io
import logging
from typing import Any, List, Sequence

import config
from models.table_model import row_texts

logger = logging.getLogger(__name__)


class ExportService:
    """
    Serializa columnas + filas a texto delimitado.
      - "naive": une con el delimitador sin escapar nada (formato histórico).
        Una coma o salto de línea dentro de una celda rompe la estructura.
      - "quoted": RFC 4180, entrecomilla sólo los campos que lo necesitan.
    Nunca agrega salto de línea final.
    """

    @staticmethod
    def to_text(columns: Sequence[Any], rows: Sequence[Sequence[Any]], mode: str = "naive", delimiter: str = ",") -> str:
        if mode not in config.EXPORT_MODES:
            raise ValueError(f"Modo de exportación desconocido: {mode}")

        lines: List[List[str]] = [row_texts(columns)] + [row_texts(r) for r in rows]

        if mode == "naive":
            return "\n".join(delimiter.join(line) for line in lines)

        buf = io.StringIO()
        writer = csv.writer(buf, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerows(lines)
        text = buf.getvalue()
        return text[:-1] if text.endswith("\n") else text
