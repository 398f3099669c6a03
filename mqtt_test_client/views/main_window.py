"""
Main Window View for the MQTT test client.

Responsibility: Main UI layout and component coordination.
Components subscribe to the state store; user actions are forwarded
to the presenter through callbacks.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

from ..models.state_store import StateStore
from .chart_widget import ChartWidget
from .control_panel import ControlPanel
from .message_panel import MessagePanel
from .status_bar import StatusBar

logger = logging.getLogger(__name__)


class MainWindow:
	"""
	Main window view component.

	Coordinates separate UI components:
	- ChartWidget: Live series chart
	- ControlPanel: Broker form and actions
	- StatusBar: Connection status
	- MessagePanel: Latest payload and raw history
	"""

	def __init__(self, root: tk.Tk, store: StateStore, title: str = "MQTT Test Client",
	             chart_padding: float = 0.3):
		self.root = root
		self.store = store
		self.root.title(title)
		self.root.geometry("1100x900")
		self.root.minsize(800, 600)

		# Callbacks to presenter (injected later)
		self.presenter_callbacks: Dict[str, Callable] = {}

		self.chart_widget = None
		self.control_panel = None
		self.status_bar = None
		self.message_panel = None

		# Event pump
		self._poll_callback: Optional[Callable] = None
		self._poll_interval_ms = 100
		self._poll_job = None

		self._unsubscribers = []

		self._setup_ui(title, chart_padding)
		self._setup_window_callbacks()
		self._subscribe_components()

		logger.info("MainWindow initialized")

	def _setup_ui(self, title: str, chart_padding: float):
		"""Creates the main UI layout."""
		self.root.grid_rowconfigure(0, weight=1)
		self.root.grid_columnconfigure(0, weight=1)

		main_container = ttk.Frame(self.root, padding="10")
		main_container.grid(row=0, column=0, sticky='nsew')
		main_container.grid_columnconfigure(0, weight=1)
		main_container.grid_rowconfigure(1, weight=1)

		header = ttk.Frame(main_container)
		header.grid(row=0, column=0, sticky='ew', pady=(0, 10))
		ttk.Label(header, text=title, font=("TkDefaultFont", 14, "bold")).pack(anchor="w")
		ttk.Label(header, text="Simple standalone MQTT client for IoT testing (WebSocket brokers).",
		          foreground="#555").pack(anchor="w")

		# 1. Chart
		chart_frame = ttk.LabelFrame(main_container, text="📈 Live Data", padding="5")
		chart_frame.grid(row=1, column=0, sticky='nsew', pady=(0, 10))
		self.chart_widget = ChartWidget(chart_frame, padding=chart_padding)

		# 2. Broker form and actions
		control_container = ttk.Frame(main_container)
		control_container.grid(row=2, column=0, sticky='ew', pady=(0, 10))
		state = self.store.state
		self.control_panel = ControlPanel(control_container, state.broker_url, state.topic)

		# 3. Status
		status_container = ttk.Frame(main_container)
		status_container.grid(row=3, column=0, sticky='ew', pady=(0, 10))
		self.status_bar = StatusBar(status_container)

		# 4. Messages
		message_container = ttk.Frame(main_container)
		message_container.grid(row=4, column=0, sticky='nsew')
		self.message_panel = MessagePanel(message_container)

		ttk.Label(main_container,
		          text="Tip: many MQTT brokers require WebSockets. Use wss:// when secure mode is enabled.",
		          foreground="#666").grid(row=5, column=0, sticky='w', pady=(10, 0))

	def _setup_window_callbacks(self):
		self.root.protocol("WM_DELETE_WINDOW", self._on_window_close)

	def _subscribe_components(self):
		for component in (self.chart_widget, self.status_bar, self.message_panel):
			self._unsubscribers.append(self.store.subscribe(component.on_state_changed))
			component.on_state_changed(self.store.state)

	def _on_window_close(self):
		callback = self.presenter_callbacks.get('on_closing')
		if callback:
			callback()
		else:
			self.destroy()

	def set_callbacks(self, callbacks: Dict[str, Callable]):
		"""Sets presenter callbacks and distributes them to components."""
		self.presenter_callbacks = dict(callbacks)
		self.control_panel.set_callbacks(self.presenter_callbacks)
		logger.info("View callbacks configured")

	# =================================================================
	# Event pump
	# =================================================================

	def start_polling(self, callback: Callable[[], None], interval_ms: int = 100):
		"""Calls callback every interval_ms on the Tk main thread."""
		self.stop_polling()
		self._poll_callback = callback
		self._poll_interval_ms = interval_ms
		self._poll_job = self.root.after(interval_ms, self._poll)

	def stop_polling(self):
		if self._poll_job is not None:
			try:
				self.root.after_cancel(self._poll_job)
			except tk.TclError:
				pass
			self._poll_job = None
		self._poll_callback = None

	def _poll(self):
		self._poll_job = None
		callback = self._poll_callback
		if callback is None:
			return
		try:
			callback()
		except Exception as e:
			logger.error(f"Poll callback error: {e}", exc_info=True)
		if self._poll_callback is not None:
			self._poll_job = self.root.after(self._poll_interval_ms, self._poll)

	def destroy(self):
		self.stop_polling()
		for unsubscribe in self._unsubscribers:
			unsubscribe()
		self._unsubscribers.clear()
		try:
			self.root.destroy()
		except tk.TclError:
			pass
