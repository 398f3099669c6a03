"""
Control Panel View for the MQTT test client.

Responsibility: Broker URL / topic inputs and the action buttons.
No business logic - only UI and callback forwarding.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class ControlPanel:
    """
    Connection form and actions.

    Features:
    - Broker URL (ws/wss) and topic entries
    - Connect / Reconnect, Disconnect
    - Test message and clear series
    """

    def __init__(self, parent: tk.Widget, broker_url: str = "", topic: str = ""):
        self.parent = parent

        # Callbacks to presenter (injected later)
        self.on_connect: Optional[Callable] = None
        self.on_disconnect: Optional[Callable] = None
        self.on_test_message: Optional[Callable] = None
        self.on_clear_series: Optional[Callable] = None

        self.broker_url_var = tk.StringVar(value=broker_url)
        self.topic_var = tk.StringVar(value=topic)

        self._setup_ui()

        logger.info("ControlPanel initialized")

    def _setup_ui(self):
        control_frame = ttk.LabelFrame(self.parent, text="🌐 Broker", padding="10")
        control_frame.pack(fill=tk.X)
        control_frame.grid_columnconfigure(0, weight=1)
        control_frame.grid_columnconfigure(1, weight=1)

        ttk.Label(control_frame, text="Broker URL (ws/wss)",
                  font=("TkDefaultFont", 9, "bold")).grid(row=0, column=0, sticky="w")
        ttk.Entry(control_frame, textvariable=self.broker_url_var).grid(
            row=1, column=0, sticky="ew", padx=(0, 10))

        ttk.Label(control_frame, text="Topic",
                  font=("TkDefaultFont", 9, "bold")).grid(row=0, column=1, sticky="w")
        ttk.Entry(control_frame, textvariable=self.topic_var).grid(row=1, column=1, sticky="ew")

        button_frame = ttk.Frame(control_frame)
        button_frame.grid(row=2, column=0, columnspan=2, sticky="w", pady=(10, 0))

        ttk.Button(button_frame, text="Connect / Reconnect",
                   command=self._on_connect_click).pack(side=tk.LEFT, padx=(0, 5))
        ttk.Button(button_frame, text="Disconnect",
                   command=self._on_disconnect_click).pack(side=tk.LEFT, padx=(0, 5))
        ttk.Button(button_frame, text="🧪 Test",
                   command=self._on_test_click).pack(side=tk.LEFT, padx=(0, 5))
        ttk.Button(button_frame, text="🗑 Clear",
                   command=self._on_clear_click).pack(side=tk.LEFT)

    def set_callbacks(self, callbacks: Dict[str, Callable]):
        self.on_connect = callbacks.get('on_connect')
        self.on_disconnect = callbacks.get('on_disconnect')
        self.on_test_message = callbacks.get('on_test_message')
        self.on_clear_series = callbacks.get('on_clear_series')

    def _on_connect_click(self):
        if self.on_connect:
            self.on_connect(self.broker_url_var.get().strip(), self.topic_var.get().strip())

    def _on_disconnect_click(self):
        if self.on_disconnect:
            self.on_disconnect()

    def _on_test_click(self):
        if self.on_test_message:
            self.on_test_message()

    def _on_clear_click(self):
        if self.on_clear_series:
            self.on_clear_series()
