"""
Configuración del logging de la aplicación.

Consola siempre; archivo rotativo sólo si se indica una ruta.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

import config


def setup_logging(level=None, log_file=None):
    """Configura el logger raíz y devuelve el logger de la aplicación."""
    level = level if level is not None else config.log_level()
    log_file = log_file if log_file is not None else config.LOG_FILE

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.LOG_FILE_MAX_BYTES,
            backupCount=config.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return logging.getLogger(config.APP_NAME)
