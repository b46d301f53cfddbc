#!/usr/bin/env python3
"""
Commission Calculator - Main Entry Point
"""

import logging
import tkinter as tk

from plyer import notification

from commission_calc.config import LOG_LEVEL, NOTIFICATION_TIMEOUT_SEC
from commission_calc.models import Entry
from commission_calc.repository import History
from commission_calc.storage import EntryStore, JsonFileStore, get_history_path
from commission_calc.ui import AppUI
from commission_calc.utils import format_money

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def notify_entry(entry: Entry) -> None:
    """Desktop notification for a freshly recorded valid entry"""
    try:
        notification.notify(
            title="Commission Calculated",
            message=f"{entry.name}: sales {format_money(entry.sales)}, commission {format_money(entry.commission)}",
            timeout=NOTIFICATION_TIMEOUT_SEC
        )
    except Exception as e:
        # plyer raises NotImplementedError where no notification backend exists
        logger.warning(f"Notification failed: {e}")


def main():
    """Load history and start the window"""
    path = get_history_path()
    logger.info(f"History file: {path}")
    history = History(EntryStore(JsonFileStore(path)))

    root = tk.Tk()
    AppUI(root, history, notify=notify_entry)

    logger.info("Commission Calculator started")
    try:
        root.mainloop()
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
