import tkinter as tk
from tkinter import ttk

import config
from models.table_model import heading_labels, row_texts

class TableView(ttk.Frame):
    """
    Tabla con búsqueda y encabezados ordenables.
    on_search recibe (texto: str); on_sort recibe (columna: str).
    """

    def __init__(self, parent, on_search=None, on_sort=None, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_search = on_search
        self.on_sort = on_sort
        control_frame = ttk.Frame(self)
        control_frame.pack(fill="x", pady=(0, 5))
        ttk.Label(control_frame, text="Buscar:").pack(side="left", padx=(0, 5))
        self.search_var = tk.StringVar()
        self.search_entry = ttk.Entry(control_frame, textvariable=self.search_var, width=30, state="disabled")
        self.search_entry.pack(side="left", padx=(0, 10))
        self.search_entry.bind("<KeyRelease>", self._on_search)
        self.clear_search_btn = ttk.Button(control_frame, text="Limpiar", command=self._clear_search)
        self.clear_search_btn.pack(side="left")
        self.status_label = ttk.Label(control_frame, text="")
        self.status_label.pack(side="right")
        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings")
        self._tree.pack(side="left", fill="both", expand=True)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._scroll_y.set)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)

    def _on_search(self, event=None):
        if self.on_search:
            self.on_search(self.search_var.get())

    def _clear_search(self):
        self.search_var.set("")
        self._on_search()

    def _handle_sort(self, column):
        if self.on_sort:
            self.on_sort(column)

    def set_status(self, text):
        self.status_label.config(text=text)

    def reset_search(self, enabled=True):
        self.search_var.set("")
        self.search_entry.config(state="normal" if enabled else "disabled")

    def clear(self):
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()

    def show(self, table, sort_state=None):
        """Dibuja la proyección; las filas largas agregan columnas sin título."""
        self.clear()
        width = table.width
        if not width: return
        ids = [f"c{i}" for i in range(width)]
        self._tree["columns"] = tuple(ids)
        labels = heading_labels(table.columns, sort_state)
        for i, cid in enumerate(ids):
            title = labels[i] if i < len(labels) else ""
            command = (lambda c=table.columns[i]: self._handle_sort(c)) if i < len(table.columns) else ""
            self._tree.heading(cid, text=title, command=command)
            self._tree.column(cid, anchor="w", width=config.COLUMN_WIDTH)
        for row in table.rows:
            safe = row_texts(row) + [""] * (width - len(row))
            self._tree.insert("", "end", values=tuple(safe))
