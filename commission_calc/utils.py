"""
Design (utils.py)
- Purpose: Reusable display helpers: money formatting, entry status text, mapping
           error messages back to the fields they concern, and the log-panel handler.
- Inputs: Various helper parameters (amounts, entries, widgets).
- Outputs: Helper results (strings, sets).
- Side effects: TextWidgetHandler writes into a Tk Text widget via after().
- Thread-safety: Formatting helpers are stateless; the handler reschedules onto the Tk thread.
"""

import logging
from typing import Set

from .config import FIELD_LABELS, LOG_MAX_LINES
from .models import Entry


def format_money(amount: float) -> str:
    """
    Purpose: Render an amount as dollars with cents, e.g. 1420 -> "$1,420.00".
    Side Effects: None.
    """
    return f"${amount:,.2f}"


def entry_status(entry: Entry) -> str:
    """Short status for the history table: 'Valid' or the joined error messages."""
    if entry.is_valid:
        return "Valid"
    return "; ".join(entry.errors) or "Invalid Input"


def fields_with_errors(entry: Entry) -> Set[str]:
    """
    Purpose: Which unit-count fields an invalid entry complained about.
    Outputs: Subset of {"locks", "stocks", "barrels"}.
    """
    flagged: Set[str] = set()
    if entry.is_valid:
        return flagged
    for field_name in ("locks", "stocks", "barrels"):
        label = FIELD_LABELS[field_name]
        if any(label in message for message in entry.errors):
            flagged.add(field_name)
    return flagged


def describe_entry(entry: Entry) -> str:
    """Multi-line detail text for one entry (the detail panel under the table)."""
    flagged = fields_with_errors(entry)
    counts = "   ".join(
        f"{FIELD_LABELS[f]}: {getattr(entry, f)}" + (" (!)" if f in flagged else "")
        for f in ("locks", "stocks", "barrels")
    )
    lines = [
        f"Number #{entry.id}",
        f"Name: {entry.name}",
        counts,
    ]
    if entry.is_valid:
        lines.append(f"Sales: {format_money(entry.sales)}")
        lines.append(f"Commission: {format_money(entry.commission)}")
    else:
        lines.append("Invalid Input")
        lines.extend(f"  - {message}" for message in entry.errors)
    if entry.created_at:
        lines.append(f"Recorded: {entry.created_at}")
    return "\n".join(lines)


class TextWidgetHandler(logging.Handler):
    """
    Design (TextWidgetHandler)
    - Purpose: Mirror log records into the Logs panel, trimmed to LOG_MAX_LINES.
    - Thread-safety: emit() may be called from anywhere; the widget is only touched
                     on the Tk thread via after().
    """

    def __init__(self, text_widget, max_lines: int = LOG_MAX_LINES) -> None:
        super().__init__()
        self.text_widget = text_widget
        self.max_lines = max_lines

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + "\n"
        except Exception:
            self.handleError(record)
            return
        self.text_widget.after(0, lambda: self._append(line))

    def _append(self, text: str) -> None:
        widget = self.text_widget
        widget.configure(state="normal")
        widget.insert("end", text)
        widget.see("end")
        # Trim oldest lines if exceeding cap
        total_lines = int(widget.index("end-1c").split(".")[0])
        if total_lines > self.max_lines:
            remove = total_lines - self.max_lines
            widget.delete("1.0", f"{remove + 1}.0")
        widget.configure(state="disabled")
