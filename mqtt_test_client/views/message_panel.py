"""
Message Panel View.

Responsibility: Show the latest raw payload and the raw sample history.
"""

import logging
import tkinter as tk
from tkinter import ttk
from tkinter.scrolledtext import ScrolledText

from ..models.state_store import DashboardState
from .formatting import format_history, format_latest_header, format_latest_raw

logger = logging.getLogger(__name__)


class MessagePanel:
    """Latest message (raw) and message history (raw), side by side."""

    def __init__(self, parent: tk.Widget):
        self.parent = parent

        self.latest_header_var = tk.StringVar(value=format_latest_header("", None))
        self.history_header_var = tk.StringVar(value=format_latest_header("", None))

        self.latest_text = None
        self.history_text = None
        self._rendered_series = None

        self._setup_ui()

        logger.info("MessagePanel initialized")

    def _setup_ui(self):
        container = ttk.Frame(self.parent)
        container.pack(fill=tk.BOTH, expand=True)
        container.grid_columnconfigure(0, weight=1)
        container.grid_columnconfigure(1, weight=1)
        container.grid_rowconfigure(0, weight=1)

        self.latest_text = self._create_section(
            container, "Latest message (raw)", self.latest_header_var, column=0)
        self.history_text = self._create_section(
            container, "Message history (raw)", self.history_header_var, column=1)

        self._set_text(self.latest_text, format_latest_raw(""))
        self._set_text(self.history_text, format_history(()))

    def _create_section(self, parent, title: str, header_var: tk.StringVar, column: int):
        frame = ttk.LabelFrame(parent, text=title, padding="5")
        frame.grid(row=0, column=column, sticky="nsew", padx=(0, 10) if column == 0 else 0)

        ttk.Label(frame, textvariable=header_var, foreground="#666").pack(fill=tk.X)

        text = ScrolledText(frame, height=8, wrap=tk.WORD, font=("Consolas", 9))
        text.pack(fill=tk.BOTH, expand=True, pady=(5, 0))
        text.configure(state=tk.DISABLED)
        return text

    def _set_text(self, widget, content: str):
        widget.configure(state=tk.NORMAL)
        widget.delete("1.0", tk.END)
        widget.insert(tk.END, content)
        widget.configure(state=tk.DISABLED)

    def on_state_changed(self, state: DashboardState):
        """State store listener."""
        header = format_latest_header(state.latest_topic, state.latest_time)
        self.latest_header_var.set(header)
        self.history_header_var.set(header)
        self._set_text(self.latest_text, format_latest_raw(state.latest_raw))

        if state.series is not self._rendered_series:
            self._set_text(self.history_text, format_history(state.series))
            self._rendered_series = state.series
