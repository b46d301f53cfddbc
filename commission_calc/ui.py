"""
Design (ui.py)
- Purpose: Build and manage the Tkinter UI (input form, history Treeview, totals, logs).
- Inputs: History (entries + counter) and an optional notify callback.
- Outputs: None (renders UI, records entries through History).
- Side effects: Creates windows; History persists after each mutation.
- Thread-safety: UI code runs on main thread only.
"""

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, Dict, Optional

from .config import FIELD_LABELS, UNIT_RANGES
from .models import Entry
from .repository import History
from .utils import (
    TextWidgetHandler,
    describe_entry,
    entry_status,
    format_money,
)
from .validation import validate

logger = logging.getLogger(__name__)

BG = "#1e1e1e"
FG = "white"
ERROR_FG = "#FF6A6A"


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications after a valid calculation
        show_logs (tk.BooleanVar): toggles visibility of the logs panel
    - Public methods:
        calculate(): validate the form and record an entry
        reset_form(): clear inputs and inline errors
        clear_history(): drop all entries after confirmation
        refresh_ui(): repaint table, totals and button state from History
    """

    def __init__(self, root: tk.Tk, history: History, notify: Optional[Callable[[Entry], None]] = None):
        self.root = root
        self.history = history
        self.notify = notify

        # UI state variables
        self.enable_notifications = tk.BooleanVar(value=True)
        self.show_logs = tk.BooleanVar(value=False)
        self.sort_state = {"column": None, "order": None}
        self.inputs: Dict[str, tk.StringVar] = {}
        self.error_labels: Dict[str, tk.Label] = {}
        self._rows: Dict[str, Entry] = {}  # Treeview item id -> Entry shown on that row

        # Window
        self.root.title("Commission Calculator")
        self.root.rowconfigure(0, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg=BG)

        # Paned window: top = content (form, table, totals), bottom = logs (when shown)
        self.paned = ttk.PanedWindow(self.root, orient=tk.VERTICAL)
        self.paned.grid(row=0, column=0, sticky="nsew")

        content_frame = tk.Frame(self.paned, bg=BG)
        content_frame.rowconfigure(2, weight=1)
        content_frame.columnconfigure(0, weight=1)
        self.paned.add(content_frame, weight=1)

        self.bottom_frame = tk.Frame(self.paned, bg=BG)
        self.logs_box = tk.Text(self.bottom_frame, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.paned.add(self.bottom_frame, weight=0)  # start collapsed; expand when Logs checked

        self.log_handler = TextWidgetHandler(self.logs_box)
        self.log_handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%d %H:%M:%S"))
        logging.getLogger("commission_calc").addHandler(self.log_handler)

        # Style
        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background="#2b2b2b",
            foreground="#f0f0f0",
            fieldbackground="#2b2b2b",
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background=BG,
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[("selected", "#444")], foreground=[])

        self._build_form(content_frame)
        self._build_buttons(content_frame)
        self._build_table(content_frame)

        # Totals + details
        self.totals_var = tk.StringVar()
        tk.Label(content_frame, textvariable=self.totals_var, fg=FG, bg=BG, font=("Segoe UI", 10, "bold"),
                 anchor="w").grid(row=3, column=0, sticky="ew", padx=10, pady=(0, 5))
        self.details_box = tk.Text(content_frame, height=7, bg="#2b2b2b", fg=FG)
        self.details_box.grid(row=4, column=0, sticky="ew", padx=10, pady=(0, 10))
        self.details_box.configure(state="disabled")

        # Initial paint
        self.refresh_ui()

    # ---------- Layout ----------

    def _build_form(self, parent: tk.Frame) -> None:
        form = tk.Frame(parent, bg=BG)
        form.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))

        for row, field_name in enumerate(("name", "locks", "stocks", "barrels")):
            label = FIELD_LABELS[field_name]
            if field_name in UNIT_RANGES:
                low, high = UNIT_RANGES[field_name]
                label = f"{label} ({low}-{high})"
            tk.Label(form, text=label, fg=FG, bg=BG).grid(row=row, column=0, sticky="e", padx=5, pady=3)

            var = tk.StringVar()
            # editing a field clears its inline error
            var.trace_add("write", lambda *_args, f=field_name: self._set_field_error(f, ""))
            tk.Entry(form, textvariable=var, width=30).grid(row=row, column=1, sticky="w", padx=5, pady=3)
            self.inputs[field_name] = var

            err = tk.Label(form, text="", fg=ERROR_FG, bg=BG, font=("Segoe UI", 9), anchor="w")
            err.grid(row=row, column=2, sticky="w", padx=(5, 0))
            self.error_labels[field_name] = err

    def _build_buttons(self, parent: tk.Frame) -> None:
        button_frame = tk.Frame(parent, bg=BG)
        button_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 5))

        ttk.Button(button_frame, text="Calculate", command=self.calculate).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Reset", command=self.reset_form).pack(side=tk.LEFT, padx=5)
        self.clear_button = ttk.Button(button_frame, text="Clear History", command=self.clear_history)
        self.clear_button.pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg=FG,
            bg=BG,
            selectcolor="#2b2b2b",
            activebackground=BG,
            activeforeground=FG,
        ).pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Show Logs",
            variable=self.show_logs,
            fg=FG,
            bg=BG,
            selectcolor="#2b2b2b",
            command=self.toggle_logs,
        ).pack(side=tk.LEFT, padx=5)

    def _build_table(self, parent: tk.Frame) -> None:
        self.columns = ("id", "name", "locks", "stocks", "barrels", "sales", "commission", "status")
        self.tree = ttk.Treeview(parent, columns=self.columns, show="headings", height=8)
        self.tree.grid(row=2, column=0, sticky="nsew", padx=10, pady=5)
        self.tree.tag_configure("valid", foreground="#7CFC00")
        self.tree.tag_configure("invalid", foreground=ERROR_FG)

        headers = {
            "id": "No.",
            "name": "Name",
            "locks": "Locks",
            "stocks": "Stocks",
            "barrels": "Barrels",
            "sales": "Sales",
            "commission": "Commission",
            "status": "Status",
        }
        widths = {"id": 50, "name": 140, "locks": 60, "stocks": 60, "barrels": 60,
                  "sales": 100, "commission": 100, "status": 260}
        for col in self.columns:
            self.tree.heading(col, text=headers[col], command=lambda c=col: self.sort_by_column(c))
            self.tree.column(col, width=widths[col], anchor="w" if col in ("name", "status") else "e")

        self.tree.bind("<<TreeviewSelect>>", self.on_select)

    # ---------- Actions ----------

    def calculate(self) -> None:
        """
        Purpose: Validate the form, show inline errors, and record the entry.
        Side effects: Appends to History (persisted); may fire a notification.
        """
        raw = {f: var.get() for f, var in self.inputs.items()}
        result = validate(raw["name"], raw["locks"], raw["stocks"], raw["barrels"])
        for field_name in self.inputs:
            messages = [issue.message for issue in result.issues_for(field_name)]
            self._set_field_error(field_name, "; ".join(messages))

        entry = self.history.record_result(raw["name"], result)
        self.refresh_ui()
        self._show_details(entry)

        if entry.is_valid and self.enable_notifications.get() and self.notify is not None:
            self.notify(entry)

    def reset_form(self) -> None:
        for var in self.inputs.values():
            var.set("")
        for field_name in self.error_labels:
            self._set_field_error(field_name, "")

    def clear_history(self) -> None:
        """
        Purpose: Remove all entries after user confirmation.
        Side effects: Mutates History, which rewrites the stored keys.
        """
        if not messagebox.askyesno("Clear History", "Remove all entries from the history? This cannot be undone."):
            return
        self.history.clear()
        self._show_text("")
        self.refresh_ui()

    def toggle_logs(self) -> None:
        """Show or hide logs in the bottom pane. Resize pane to show/hide."""
        if self.show_logs.get():
            self.paned.pane(self.bottom_frame, weight=1)
            self.logs_box.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 6))
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, int(total * 0.75))
        else:
            self.logs_box.pack_forget()
            self.paned.pane(self.bottom_frame, weight=0)
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, total)

    # ---------- Rendering ----------

    def refresh_ui(self) -> None:
        """
        Purpose: Rebuild the Tree rows from the history snapshot, apply sorting,
                 update totals and the Clear History button.
        """
        entries = list(self.history.entries())

        col, order = self.sort_state["column"], self.sort_state["order"]
        if col:
            reverse = (order == "desc")
            if col == "status":
                entries.sort(key=lambda e: (not e.is_valid, entry_status(e)), reverse=reverse)
            elif col == "name":
                entries.sort(key=lambda e: e.name.lower(), reverse=reverse)
            else:
                entries.sort(key=lambda e: getattr(e, col), reverse=reverse)

        self.tree.delete(*self.tree.get_children())
        self._rows = {}
        for entry in entries:
            values = (
                f"No.{entry.id}",
                entry.name,
                entry.locks,
                entry.stocks,
                entry.barrels,
                format_money(entry.sales),
                format_money(entry.commission),
                entry_status(entry),
            )
            tag = "valid" if entry.is_valid else "invalid"
            row_id = self.tree.insert("", "end", values=values, tags=(tag,))
            self._rows[row_id] = entry

        total_sales, total_commission = self.history.totals()
        self.totals_var.set(
            f"Total Sales: {format_money(total_sales)}    Total Commission: {format_money(total_commission)}"
        )
        self.clear_button.state(["!disabled"] if len(self.history) else ["disabled"])

    def on_select(self, _event=None) -> None:
        """Show the selected entry in the details box."""
        selected = self.tree.selection()
        if not selected:
            return
        entry = self._rows.get(selected[0])
        if entry is not None:
            self._show_details(entry)

    def sort_by_column(self, col: str) -> None:
        """
        Purpose: Toggle header sort order and refresh.
        Inputs: col (column key from self.columns).
        """
        order = "asc"
        if self.sort_state["column"] == col and self.sort_state["order"] == "asc":
            order = "desc"
        elif self.sort_state["column"] == col and self.sort_state["order"] == "desc":
            col, order = None, None  # reset sort
        self.sort_state["column"] = col
        self.sort_state["order"] = order
        self.refresh_ui()

    # ---------- internal helpers ----------

    def _set_field_error(self, field_name: str, message: str) -> None:
        self.error_labels[field_name].configure(text=message)

    def _show_details(self, entry: Entry) -> None:
        self._show_text(describe_entry(entry))

    def _show_text(self, text: str) -> None:
        self.details_box.configure(state="normal")
        self.details_box.delete("1.0", "end")
        self.details_box.insert("end", text)
        self.details_box.configure(state="disabled")
