"""
Scrollable day-column task list for Tkinter
-------------------------------------------
Each task is its own row (a Frame) inside a scrollable Canvas, with:
- a Checkbutton to mark completion
- the task text (wrapping, struck through when completed)
- a delete button

The widget is view-only state. Changes go through the controller via the
callbacks passed in the constructor; the window then calls `set_tasks()`
again with the fresh list.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional
import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk

from weekplanner.core.models import Task


class TaskRow(ttk.Frame):
    """A single task row with checkbox, text and delete button."""
    def __init__(
        self,
        master,
        task: Task,
        on_toggle: Optional[Callable[[int], None]] = None,
        on_delete: Optional[Callable[[int], None]] = None,
        wrap: int = 220,
    ):
        super().__init__(master)
        self.task_id = task.id
        self._on_toggle = on_toggle
        self._on_delete = on_delete
        self.var = tk.BooleanVar(value=task.completed)

        self.columnconfigure(1, weight=1)

        self.chk = ttk.Checkbutton(self, variable=self.var, command=self._toggle)
        self.chk.grid(row=0, column=0, padx=(4, 4), pady=2, sticky="nw")

        self.lbl = ttk.Label(self, text=task.text, wraplength=wrap, anchor="w", justify="left")
        self.lbl.grid(row=0, column=1, sticky="we")

        self.del_btn = ttk.Button(self, text="✕", width=2, command=self._delete)
        self.del_btn.grid(row=0, column=2, padx=(4, 4))

        self._apply_done_style(task.completed)

    def _apply_done_style(self, done: bool):
        self.lbl.configure(style="Task.Done.TLabel" if done else "Task.Normal.TLabel")

    def _toggle(self):
        self._apply_done_style(bool(self.var.get()))
        if self._on_toggle:
            self._on_toggle(self.task_id)

    def _delete(self):
        if self._on_delete:
            self._on_delete(self.task_id)


class DayTaskList(ttk.Frame):
    """Canvas + interior Frame pattern with mousewheel support."""
    def __init__(
        self,
        master,
        on_toggle: Optional[Callable[[int], None]] = None,
        on_delete: Optional[Callable[[int], None]] = None,
        row_wrap: int = 220,
        empty_text: str = "No tasks yet.",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._on_toggle = on_toggle
        self._on_delete = on_delete
        self._row_wrap = row_wrap
        self._rows: Dict[int, TaskRow] = {}
        self._shown: List[Task] = []

        style = ttk.Style(self)
        style.configure("Task.Normal.TLabel")
        done_font = tkfont.nametofont("TkDefaultFont").copy()
        done_font.configure(overstrike=True)
        self._done_font = done_font
        style.configure("Task.Done.TLabel", foreground="#888888", font=done_font)
        style.configure("Task.Empty.TLabel", foreground="#9CA3AF")

        self.canvas = tk.Canvas(self, highlightthickness=0, height=150)
        self.vbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=self.vbar.set)

        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.vbar.grid(row=0, column=1, sticky="ns")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self.interior = ttk.Frame(self.canvas)
        self.interior.columnconfigure(0, weight=1)
        self._win_id = self.canvas.create_window(0, 0, window=self.interior, anchor="nw")
        self.empty_lbl = ttk.Label(self.interior, text=empty_text, style="Task.Empty.TLabel", anchor="center")

        self.interior.bind("<Configure>", self._on_interior_configure)
        self.canvas.bind("<Configure>", self._on_canvas_configure)

        # wheel only scrolls the list under the pointer
        self.canvas.bind("<Enter>", lambda e: self._bind_mousewheel())
        self.canvas.bind("<Leave>", lambda e: self._unbind_mousewheel())

    # --- Public API ---
    def set_tasks(self, tasks: List[Task]):
        """Replace all rows; skipped when nothing visible changed."""
        fresh = [Task(t.id, t.text, t.completed) for t in tasks]
        if fresh == self._shown:
            return
        self._shown = fresh

        for row in list(self._rows.values()):
            row.destroy()
        self._rows.clear()

        for task in fresh:
            row = TaskRow(
                self.interior,
                task,
                on_toggle=self._on_toggle,
                on_delete=self._on_delete,
                wrap=self._row_wrap,
            )
            self._rows[task.id] = row

        if fresh:
            self.empty_lbl.grid_forget()
        else:
            self.empty_lbl.grid(row=0, column=0, sticky="we", pady=24)
        self._repack_rows()

    # --- Internals ---
    def _repack_rows(self):
        for i, row in enumerate(self._rows.values()):
            row.grid(row=i, column=0, sticky="we", padx=(2, 2), pady=(1, 1))
        self._update_scrollregion()

    def _update_scrollregion(self):
        self.update_idletasks()
        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _on_interior_configure(self, _):
        self._update_scrollregion()

    def _on_canvas_configure(self, event):
        self.canvas.itemconfigure(self._win_id, width=event.width)
        for row in self._rows.values():
            row.lbl.configure(wraplength=max(event.width - 80, 60))

    def _bind_mousewheel(self):
        self.canvas.bind_all("<MouseWheel>", self._on_mousewheel_windows_mac)
        self.canvas.bind_all("<Button-4>", self._on_mousewheel_linux)
        self.canvas.bind_all("<Button-5>", self._on_mousewheel_linux)

    def _unbind_mousewheel(self):
        self.canvas.unbind_all("<MouseWheel>")
        self.canvas.unbind_all("<Button-4>")
        self.canvas.unbind_all("<Button-5>")

    def _on_mousewheel_windows_mac(self, event):
        # On Windows, event.delta is usually +/-120; on macOS it's different.
        delta = int(-1 * (event.delta / 120))
        self.canvas.yview_scroll(delta, "units")

    def _on_mousewheel_linux(self, event):
        if event.num == 4:
            self.canvas.yview_scroll(-1, "units")
        elif event.num == 5:
            self.canvas.yview_scroll(1, "units")
