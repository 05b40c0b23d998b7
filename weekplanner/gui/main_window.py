import logging
import threading
import time
import tkinter as tk
from tkinter import ttk, messagebox as mb

from weekplanner.controller.planner_controller import PlannerController
from weekplanner.core.config import TOPMOST, WINDOW_GEOMETRY
from weekplanner.core.exceptions import PlannerError
from weekplanner.core.models import WeekDay
from weekplanner.gui.task_list import DayTaskList

logger = logging.getLogger(__name__)


class ThreadRunner:
    """Runs network jobs on worker threads and reports back on the Tk loop."""
    def __init__(self, root: tk.Tk):
        self.root = root
        self.closing = False
        self._threads = []

    def __call__(self, job, done):
        def work():
            try:
                result, error = job(), None
            except Exception as e:
                if not isinstance(e, PlannerError):
                    logger.exception("Unexpected error in network job")
                result, error = None, e
            if self.closing:
                return
            try:
                self.root.after(0, lambda: done(result, error))
            except (tk.TclError, RuntimeError):
                pass  # window already gone

        t = threading.Thread(target=work, daemon=True)
        self._threads = [th for th in self._threads if th.is_alive()]
        self._threads.append(t)
        t.start()

    def drain(self, timeout: float):
        """Wait for running jobs while keeping the Tk loop serviced."""
        self.closing = True
        deadline = time.monotonic() + timeout
        while any(t.is_alive() for t in self._threads) and time.monotonic() < deadline:
            # workers blocked in a cross-thread after() need the main loop to run
            self.root.update()
            time.sleep(0.02)


class MainWindow(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Weekly Planner")
        self.geometry(WINDOW_GEOMETRY)
        self.configure(padx=8, pady=8)
        if TOPMOST:
            self.attributes("-topmost", True)
        self.runner = ThreadRunner(self)
        self.controller = None
        self._syncing = False  # True while widgets are written from state

    def confirm(self, message: str) -> bool:
        return mb.askyesno("Reset", message, parent=self)

    def show_error(self, title: str, message: str):
        mb.showerror(title, message, parent=self)

    def bind_controller(self, controller: PlannerController):
        self.controller = controller
        self._build(controller.week)
        controller.subscribe(self._render)
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._render()

    # ---------- layout ----------
    def _build(self, week):
        top = ttk.Frame(self)
        top.pack(fill="x", pady=(0, 6))
        ttk.Label(top, text="Weekly Planner", font=("TkDefaultFont", 14, "bold")).pack(side="left")
        self.reset_btn = ttk.Button(top, text="Reset", command=self._on_reset)
        self.reset_btn.pack(side="right")
        self.status_var = tk.StringVar(value="Loading…")
        ttk.Label(top, textvariable=self.status_var).pack(side="right", padx=(0, 10))

        goal = ttk.LabelFrame(self, text="This week's goal")
        goal.pack(fill="x", pady=(0, 6))
        self.goal_var = tk.StringVar()
        self.goal_entry = ttk.Entry(goal, textvariable=self.goal_var)
        self.goal_entry.pack(fill="x", padx=6, pady=6)
        self.goal_var.trace_add("write", self._on_goal_changed)

        grid = ttk.Frame(self)
        grid.pack(fill="both", expand=True)
        for c in range(4):
            grid.columnconfigure(c, weight=1, uniform="day")
        for r in range(2):
            grid.rowconfigure(r, weight=1)

        self.columns = {}
        for i, day in enumerate(week):
            col = DayColumn(grid, self, day)
            col.grid(row=i // 4, column=i % 4, sticky="nsew", padx=3, pady=3)
            self.columns[day.key] = col

        memo = ttk.LabelFrame(grid, text="Notes & review")
        memo.grid(row=1, column=3, sticky="nsew", padx=3, pady=3)
        self.memo_text = tk.Text(memo, wrap="word", height=8, relief="flat", background="#FEF9C3")
        self.memo_text.pack(fill="both", expand=True, padx=4, pady=4)
        self.memo_text.bind("<<Modified>>", self._on_memo_modified)

        ttk.Label(self, text="Changes are saved to the sheet automatically.", foreground="#9CA3AF").pack(pady=(4, 0))

    # ---------- state -> widgets ----------
    def _render(self):
        c = self.controller
        if not c.is_ready:
            self.status_var.set("Loading…")
        elif c.is_saving:
            self.status_var.set("Saving…")
        elif c.save_pending:
            self.status_var.set("Unsaved changes")
        else:
            self.status_var.set("Saved ✓")

        widget_state = "normal" if c.is_ready else "disabled"
        self.reset_btn.configure(state=widget_state)
        self.goal_entry.configure(state=widget_state)
        self.memo_text.configure(state=widget_state)

        self._syncing = True
        try:
            if self.goal_var.get() != c.state.week_goal:
                self.goal_var.set(c.state.week_goal)
            if self.memo_text.get("1.0", "end-1c") != c.state.memo:
                self.memo_text.delete("1.0", "end")
                self.memo_text.insert("1.0", c.state.memo)
                self.memo_text.edit_modified(False)
            for key, col in self.columns.items():
                col.render(c, widget_state)
        finally:
            self._syncing = False

    # ---------- widgets -> controller ----------
    def _on_goal_changed(self, *_):
        if not self._syncing and self.controller.is_ready:
            self.controller.set_week_goal(self.goal_var.get())

    def _on_memo_modified(self, _event=None):
        if not self.memo_text.edit_modified():
            return
        self.memo_text.edit_modified(False)
        if not self._syncing and self.controller.is_ready:
            self.controller.set_memo(self.memo_text.get("1.0", "end-1c"))

    def _on_reset(self):
        if self.controller.is_ready:
            self.controller.reset_all()

    def _on_close(self):
        if self.runner.closing:
            return
        if self.controller.is_ready and self.controller.flush():
            self.status_var.set("Saving…")
            self.update_idletasks()
        self.runner.drain(timeout=5)
        self.destroy()


class DayColumn(ttk.LabelFrame):
    def __init__(self, parent, window: MainWindow, day: WeekDay):
        super().__init__(parent, text=day.label)
        self.window = window
        self.day = day

        self.count_var = tk.StringVar(value="0/0")
        ttk.Label(self, textvariable=self.count_var, foreground="#6B7280").pack(anchor="e", padx=6)

        self.task_list = DayTaskList(
            self,
            on_toggle=lambda task_id: window.controller.toggle_task(day.key, task_id),
            on_delete=lambda task_id: window.controller.delete_task(day.key, task_id),
        )
        self.task_list.pack(fill="both", expand=True)

        bottom = ttk.Frame(self)
        bottom.pack(fill="x", pady=(4, 4), padx=4)
        self.input_var = tk.StringVar()
        self.entry = ttk.Entry(bottom, textvariable=self.input_var)
        self.entry.pack(side="left", fill="x", expand=True)
        self.entry.bind("<Return>", self._on_add)
        self.input_var.trace_add("write", self._on_input_changed)
        self.add_btn = ttk.Button(bottom, text="+", width=3, command=self._on_add)
        self.add_btn.pack(side="left", padx=(4, 0))

    def render(self, controller: PlannerController, widget_state: str):
        done, total = controller.state.progress(self.day.key)
        self.count_var.set(f"{done}/{total}")
        self.task_list.set_tasks(controller.state.tasks_by_day[self.day.key])

        pending = controller.pending
        if pending.day != self.day.key and self.input_var.get():
            # the single pending slot moved to another day
            self.input_var.set("")
        self.entry.configure(state=widget_state)
        can_add = controller.is_ready and pending.day == self.day.key and bool(pending.text.strip())
        self.add_btn.configure(state="normal" if can_add else "disabled")

    def _on_input_changed(self, *_):
        if self.window._syncing or not self.window.controller.is_ready:
            return
        self.window.controller.set_pending_input(self.day.key, self.input_var.get())
        self.window._render()

    def _on_add(self, _event=None):
        if self.window.controller.add_task(self.day.key) is not None:
            self.window._syncing = True
            try:
                self.input_var.set("")
            finally:
                self.window._syncing = False
