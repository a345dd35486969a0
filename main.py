import locale
import logging

from logger_setup import setup_logging


def main():
    logger = setup_logging()
    logging.captureWarnings(True)
    try:
        # Orden de texto según el idioma del sistema
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("Locale del sistema no disponible; se usa orden por código de carácter.")

    from ui.main_window import MainWindow
    logger.info("Iniciando interfaz...")
    app = MainWindow()
    app.run()


if __name__ == "__main__":
    main()
