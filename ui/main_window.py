import tkinter as tk
from tkinter import ttk, messagebox
import logging

import config
from controllers.table_controller import TableController
from services.file_service import PickerService
from ui.table_view import TableView

logger = logging.getLogger(__name__)

class MainWindow:
    def __init__(self, controller=None):
        self.window = tk.Tk()
        self.window.title(config.WINDOW_TITLE)
        self.window.geometry(config.WINDOW_GEOMETRY)
        self.window.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.controller = controller or TableController(picker=PickerService(parent=self.window))

        self.toolbar = ttk.Frame(self.window, relief=tk.RAISED, borderwidth=1)
        self.toolbar.pack(side="top", fill="x")
        ttk.Label(self.toolbar, text="Visor de Datos", font=("Arial", 14, "bold")).pack(side="left", padx=10, pady=5)
        self.btn_export = ttk.Button(self.toolbar, text="💾 Exportar CSV", command=self.export_action, state="disabled")
        self.btn_export.pack(side="right", padx=5, pady=5)
        self.btn_load = ttk.Button(self.toolbar, text="📂 Cargar CSV/Excel", command=self.load_action)
        self.btn_load.pack(side="right", padx=5, pady=5)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_status = ttk.Label(self.status_frame, text="Listo", anchor="w")
        self.lbl_status.pack(side="left", fill="x")
        self.progress = ttk.Progressbar(self.status_frame, mode='indeterminate', length=200)

        self.table = TableView(self.window, on_search=self.search_action, on_sort=self.sort_action)
        self.table.pack(fill="both", expand=True, padx=10, pady=10)

    def run_task(self, description, func):
        self.window.config(cursor="watch")
        self.lbl_status.config(text=f"⏳ {description}...")
        self.progress.pack(side="right", padx=10)
        self.progress.start(10)
        self.window.update()
        try:
            func()
            if self.controller.last_error:
                self.lbl_status.config(text="❌ Error")
                messagebox.showerror("Error", self.controller.last_error)
            else:
                self.lbl_status.config(text="✅ Listo")
        finally:
            self.progress.stop()
            self.progress.pack_forget()
            self.window.config(cursor="")

    # --- ACCIONES ---
    def load_action(self):
        # window.update() dentro de run_task puede procesar otro clic;
        # la guarda de la sesión descarta esa segunda carga
        if self.controller.busy: return
        def _load():
            if self.controller.open_file() is not None:
                self.table.reset_search(enabled=self.controller.has_data)
            self._refresh()
        self.run_task("Cargando archivo", _load)

    def export_action(self):
        def _export():
            path = self.controller.export_csv()
            if path: logger.info("Tabla compartida desde %s", path)
        self.run_task("Exportando CSV", _export)

    def search_action(self, text):
        self.controller.search(text)
        self._refresh()

    def sort_action(self, column):
        self.controller.sort_by(column)
        self._refresh()

    def _refresh(self):
        session = self.controller.session
        self.table.show(self.controller.projection(), session.sort_state)
        self.table.set_status(self.controller.status_text())
        self.btn_export.config(state="normal" if self.controller.has_data else "disabled")

    def on_closing(self):
        self.window.destroy()

    def run(self):
        self.window.mainloop()
