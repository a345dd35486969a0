import base64
import logging
import os
import subprocess
import sys

import config
from services.errors import ExportError, PickCancelled, ReadError

logger = logging.getLogger(__name__)


class PickerService:
    """Selector de archivos limitado a CSV / XLS / XLSX."""

    def __init__(self, filetypes=None, parent=None):
        self.filetypes = filetypes or config.SUPPORTED_FILETYPES
        self.parent = parent

    def pick(self) -> str:
        from tkinter import filedialog
        path = filedialog.askopenfilename(parent=self.parent, filetypes=self.filetypes)
        if not path:
            raise PickCancelled("Selección cancelada por el usuario.")
        return path


class FileService:

    @staticmethod
    def read_base64(path: str) -> str:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise ReadError(f"Error de lectura: {e}") from e
        logger.info("Leído %s (%d bytes)", os.path.basename(path), len(raw))
        return base64.b64encode(raw).decode("ascii")

    @staticmethod
    def write_text(path: str, text: str) -> str:
        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            raise ExportError(f"Error de escritura: {e}") from e
        logger.info("Exportado a %s", path)
        return path

    @staticmethod
    def export_path(directory=None, filename=None) -> str:
        directory = directory or config.EXPORT_DIR
        if not os.path.isdir(directory):
            directory = os.path.expanduser("~")
        return os.path.join(directory, filename or config.EXPORT_FILENAME)


class ShareService:
    """Abre el archivo exportado con la aplicación predeterminada del sistema."""

    def share(self, path: str) -> None:
        try:
            if sys.platform.startswith("win"):
                os.startfile(path)  # type: ignore[attr-defined]
            else:
                opener = "open" if sys.platform == "darwin" else "xdg-open"
                # El lanzador termina en cuanto entrega el archivo; un código != 0 es un fallo
                subprocess.run([opener, path], check=True, capture_output=True)
        except subprocess.CalledProcessError as e:
            raise ExportError(f"No se pudo compartir {path}: {e.cmd[0]} terminó con código {e.returncode}") from e
        except OSError as e:
            raise ExportError(f"No se pudo compartir {path}: {e}") from e
        logger.info("Compartido %s", path)
