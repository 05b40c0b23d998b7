import logging
import tkinter as tk

from weekplanner.core.config import ENDPOINT_URL, LOG_LEVEL, REQUEST_TIMEOUT, SAVE_DEBOUNCE_MS, WIRE_FORMAT
from weekplanner.core.week import compute_current_week
from weekplanner.storage.remote import RemoteSyncClient
from weekplanner.controller.planner_controller import PlannerController
from weekplanner.gui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    week = compute_current_week()
    client = RemoteSyncClient(ENDPOINT_URL, week, wire_format=WIRE_FORMAT, timeout=REQUEST_TIMEOUT)

    try:
        ui = MainWindow()
    except tk.TclError as e:
        logger.error("Cannot open the planner window: %s", e)
        return 1

    controller = PlannerController(
        client,
        ui,
        week=week,
        confirm=ui.confirm,
        notify_error=ui.show_error,
        runner=ui.runner,
        debounce_ms=SAVE_DEBOUNCE_MS,
    )
    ui.bind_controller(controller)
    ui.after_idle(controller.start)
    ui.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
