class TableViewerError(Exception):
    """Base de los errores que el controlador captura y registra."""
    user_message = "Ocurrió un error inesperado."


class PickCancelled(TableViewerError):
    """El usuario cerró el selector sin elegir archivo. No es un fallo."""
    user_message = ""


class ReadError(TableViewerError):
    user_message = "No se pudo leer el archivo."


class ParseError(TableViewerError):
    user_message = "El archivo no es una hoja de cálculo válida."


class ExportError(TableViewerError):
    user_message = "No se pudo exportar la tabla."
