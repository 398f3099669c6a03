"""
Status Bar View for the MQTT test client.

Responsibility: Display connection badge, status text and sample count.
No business logic - only status display and formatting.
"""

import logging
import tkinter as tk
from tkinter import ttk

from ..models.state_store import DashboardState

logger = logging.getLogger(__name__)

BADGE_COLORS = {
    True: '#e9fff1',
    False: '#fff2f2',
}


class StatusBar:
    """
    Status display.

    Features:
    - CONNECTED / DISCONNECTED badge
    - Human readable connection status
    - Sample counter
    """

    def __init__(self, parent: tk.Widget):
        self.parent = parent

        self.status_var = tk.StringVar(value="Idle")
        self.badge_var = tk.StringVar(value="DISCONNECTED")
        self.sample_count_var = tk.StringVar(value="0")

        self.badge_label = None
        self.status_label = None

        self._setup_ui()

        logger.info("StatusBar initialized")

    def _setup_ui(self):
        status_frame = ttk.LabelFrame(self.parent, text="📊 Status", padding="10")
        status_frame.pack(fill=tk.X)

        self.status_label = ttk.Label(status_frame, textvariable=self.status_var,
                                      font=("TkDefaultFont", 10))
        self.status_label.pack(side=tk.LEFT)

        self.badge_label = tk.Label(
            status_frame, textvariable=self.badge_var,
            font=("TkDefaultFont", 9, "bold"), relief=tk.GROOVE,
            padx=10, pady=3, background=BADGE_COLORS[False]
        )
        self.badge_label.pack(side=tk.RIGHT)

        ttk.Label(status_frame, textvariable=self.sample_count_var).pack(side=tk.RIGHT, padx=(0, 5))
        ttk.Label(status_frame, text="Samples:").pack(side=tk.RIGHT, padx=(0, 5))

    def on_state_changed(self, state: DashboardState):
        """State store listener."""
        self.status_var.set(state.status)
        self.badge_var.set("CONNECTED" if state.is_connected else "DISCONNECTED")
        self.badge_label.configure(background=BADGE_COLORS[state.is_connected])
        self.sample_count_var.set(f"{len(state.series):,}")
