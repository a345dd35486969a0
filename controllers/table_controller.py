import logging
from typing import Optional

from config import ExportOptions
from models.table_model import TableData
from models.table_session import TableSession
from services.errors import PickCancelled, TableViewerError
from services.file_service import FileService, PickerService, ShareService

logger = logging.getLogger(__name__)


class TableController:
    """
    Une la sesión con los servicios externos (selector, lectura, escritura,
    compartir). Todos los errores se capturan aquí: se registran, quedan en
    last_error y la proyección anterior sigue visible.
    """

    def __init__(self, session: Optional[TableSession] = None, picker=None, files=None, sharer=None,
                 export_options: Optional[ExportOptions] = None):
        self.session = session or TableSession(export_options=export_options)
        if export_options is not None:
            self.session.export_options = export_options
        self.picker = picker or PickerService()
        self.files = files or FileService()
        self.sharer = sharer or ShareService()
        self.last_error: str | None = None
        self.last_export_path: str | None = None

    @property
    def busy(self) -> bool:
        return self.session.busy

    @property
    def has_data(self) -> bool:
        # Sólo encabezados no cuenta como datos: no hay nada que exportar
        return bool(self.session.rows)

    # --- LECTURA ---
    def open_file(self, path: Optional[str] = None) -> Optional[TableData]:
        """Selecciona (si no hay path), lee y carga. Devuelve None si se ignoró o falló."""
        self.last_error = None

        def _fetch():
            target = path or self.picker.pick()
            logger.info("Abriendo %s", target)
            return self.files.read_base64(target)

        try:
            return self.session.load_from(_fetch)
        except PickCancelled:
            logger.info("Selección de archivo cancelada.")
            return None
        except TableViewerError as e:
            self._fail("Error al abrir archivo", e)
            return None

    # --- VISTA ---
    def projection(self) -> TableData:
        return self.session.projection()

    def search(self, query: str) -> TableData:
        return self.session.set_filter(query)

    def sort_by(self, column: str) -> TableData:
        return self.session.sort(column)

    def status_text(self) -> str:
        if self.last_error:
            return f"❌ {self.last_error}"
        if not self.session.columns:
            return "Sin datos"
        return self.session.summary()

    # --- EXPORTACIÓN ---
    def export_csv(self, directory: Optional[str] = None) -> Optional[str]:
        self.last_error = None
        if not self.has_data:
            logger.info("Exportación omitida: no hay datos cargados.")
            return None

        opts = self.session.export_options
        try:
            text = self.session.export()
            path = self.files.export_path(directory or opts.directory, opts.filename)
            self.files.write_text(path, text)
            self.sharer.share(path)
        except TableViewerError as e:
            self._fail("Error al exportar CSV", e)
            return None
        except ValueError as e:
            # Modo de exportación mal configurado
            self._fail("Error al exportar CSV", e)
            return None

        self.last_export_path = path
        return path

    def _fail(self, context: str, error: Exception):
        logger.error("%s: %s", context, error)
        self.last_error = getattr(error, "user_message", None) or str(error)
