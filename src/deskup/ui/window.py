"""Tkinter window - draws the Panel and forwards clicks."""

import logging
import tkinter as tk
from datetime import datetime
from pathlib import Path
from tkinter import ttk
from typing import Callable

from deskup.adapters.launcher import LaunchError
from deskup.core.dashboard import Group, Line, Panel, Section, build_panel
from deskup.core.slots import Status
from deskup.ports import Launcher
from deskup.refresh import Dashboard

logger = logging.getLogger(__name__)

TICK_MS = 500
WRAP = 560

STATUS_COLORS = {
    Status.LOADING: "gray40",
    Status.FAILED: "firebrick",
    Status.NOT_CONFIGURED: "darkorange3",
    Status.READY: "black",
}


class DashboardWindow:
    """
    Single-window panel.

    Every tick: refresh() dispatches missing fetches, then the panel is
    rebuilt from a snapshot. Widgets are only recreated when the panel
    value actually changes.
    """

    def __init__(
        self,
        dashboard: Dashboard,
        launcher: Launcher,
        config_path: Path,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.dashboard = dashboard
        self.launcher = launcher
        self.config_path = config_path
        self._now = now
        self._panel: Panel | None = None
        self._expanded: set[tuple[str, int, str]] = set()
        self._completing: set[str] = set()

        self.root = tk.Tk()
        self.root.title("DeskUp")
        self.root.geometry("680x820")
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.body = ttk.Frame(self.root, padding=16)
        self.body.pack(fill=tk.BOTH, expand=True)

    def run(self) -> None:
        self.dashboard.start()
        self._tick()
        self.root.mainloop()

    def close(self) -> None:
        self.dashboard.shutdown()
        self.root.destroy()

    def _tick(self) -> None:
        self.dashboard.refresh()
        state = self.dashboard.snapshot()
        # Failed completions get their checkbox back
        self._completing -= state.failed_completions
        panel = build_panel(state, self.dashboard.settings, self._now())
        if panel != self._panel:
            self._panel = panel
            self._draw()
        self.root.after(TICK_MS, self._tick)

    # ============== Actions ==============

    def _launch(self, target: str) -> None:
        try:
            self.launcher.launch(target)
        except LaunchError as e:
            logger.error(str(e))

    def _complete(self, task_id: str) -> None:
        self._completing.add(task_id)
        self.dashboard.mark_done(task_id)

    def _retry(self) -> None:
        self.dashboard.retry_failed()

    def _toggle(self, key: tuple[str, int, str]) -> None:
        if key in self._expanded:
            self._expanded.discard(key)
        else:
            self._expanded.add(key)
        self._draw()

    # ============== Drawing ==============

    def _draw(self) -> None:
        for child in self.body.winfo_children():
            child.destroy()

        panel = self._panel
        ttk.Label(self.body, text=panel.title, font=("TkDefaultFont", 18, "bold")).pack(anchor=tk.W)

        for section in panel.sections:
            if section.key == "greeting":
                ttk.Label(self.body, text=section.heading, font=("TkDefaultFont", 14)).pack(
                    anchor=tk.W, pady=(8, 0)
                )
                continue
            frame = ttk.Frame(self.body)
            frame.pack(fill=tk.X, anchor=tk.W, pady=(16, 0))
            if section.key == "settings":
                self._draw_footer(frame, panel)
                continue
            ttk.Label(frame, text=section.heading, font=("TkDefaultFont", 12, "bold")).pack(anchor=tk.W)
            if section.columns:
                self._draw_columns(frame, section)
            else:
                for line in section.lines:
                    self._draw_line(frame, line)
                for group in section.groups:
                    self._draw_group(frame, section, group)

    def _draw_columns(self, parent: ttk.Frame, section: Section) -> None:
        grid = ttk.Frame(parent)
        grid.pack(fill=tk.X, anchor=tk.W)
        for index, title in enumerate(section.columns):
            column = ttk.Frame(grid)
            column.grid(row=0, column=index, sticky=tk.NW, padx=(0, 20))
            grid.columnconfigure(index, minsize=300)
            ttk.Label(column, text=title).pack(anchor=tk.W)
            for group in section.groups:
                if group.column == index:
                    self._draw_group(column, section, group)

    def _draw_group(self, parent: ttk.Frame, section: Section, group: Group) -> None:
        key = (section.key, group.column, group.title)
        expanded = key in self._expanded
        marker = "▼" if expanded else "▶"
        ttk.Button(
            parent,
            text=f"{marker} {group.title}",
            style="Toolbutton",
            command=lambda: self._toggle(key),
        ).pack(anchor=tk.W)
        if expanded:
            inner = ttk.Frame(parent, padding=(16, 0, 0, 0))
            inner.pack(fill=tk.X, anchor=tk.W)
            for line in group.lines:
                self._draw_line(inner, line)

    def _draw_line(self, parent: ttk.Frame, line: Line) -> None:
        if line.launch_target:
            target = line.launch_target
            ttk.Button(parent, text=line.text, command=lambda: self._launch(target)).pack(anchor=tk.W)
        elif line.task_id:
            task_id = line.task_id
            checked = tk.BooleanVar(value=task_id in self._completing)
            box = ttk.Checkbutton(
                parent,
                text=line.text,
                variable=checked,
                command=lambda: self._complete(task_id),
            )
            if task_id in self._completing:
                box.state(["disabled"])
            box.var = checked
            box.pack(anchor=tk.W)
        else:
            tk.Label(
                parent,
                text=line.text,
                fg=STATUS_COLORS[line.status],
                wraplength=WRAP,
                justify=tk.LEFT,
            ).pack(anchor=tk.W)

    def _draw_footer(self, parent: ttk.Frame, panel: Panel) -> None:
        ttk.Button(
            parent,
            text="Settings",
            command=lambda: self._launch(str(self.config_path)),
        ).pack(side=tk.LEFT)
        if panel.can_retry:
            ttk.Button(parent, text="Retry", command=self._retry).pack(side=tk.LEFT, padx=(8, 0))
