"""
Main entry point for the MQTT Test Client.

Wires the MVP components together:
- Models: state store, series, settings
- Presenter: connection handling and payload interpretation
- Views: Tk main window with chart, form, status and message panels

Usage:
    mqtt-test-client [--config path/to/config.yaml] [--debug]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config.config_model import Settings
from .config.manager import ConfigError, ConfigManager
from .models.state_store import DashboardState, StateStore
from .presenters.main_presenter import MainPresenter
from .processing.mqtt_client import ConnectionManager, ConnectionOptions

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "mqtt_test_client.log"


def connection_options_from(settings: Settings) -> ConnectionOptions:
	"""Maps the MQTT settings section to connection options."""
	mqtt_settings = settings.mqtt
	return ConnectionOptions(
		clean_session=mqtt_settings.clean_session,
		connect_timeout=mqtt_settings.connect_timeout,
		reconnect_interval=mqtt_settings.reconnect_interval,
		keepalive=mqtt_settings.keepalive,
		client_id_prefix=mqtt_settings.client_id_prefix,
		secure_context=mqtt_settings.secure_context,
		default_ws_path=mqtt_settings.ws_path,
	)


class MqttTestClientApp:
	"""
	Main application class that wires together the MVP components.
	"""

	def __init__(self, settings: Settings):
		self.settings = settings

		self.root = None
		self.view = None
		self.presenter = None
		self.store = None
		self.connection_manager = None

		logger.info("MqttTestClientApp initialized")

	def initialize(self):
		"""Initialize all application components."""
		import tkinter as tk
		from .views.main_window import MainWindow

		try:
			self.root = tk.Tk()

			self.store = StateStore(DashboardState(
				broker_url=self.settings.mqtt.broker_url,
				topic=self.settings.mqtt.topic,
			))
			self.connection_manager = ConnectionManager(connection_options_from(self.settings))

			self.view = MainWindow(
				self.root,
				self.store,
				title=self.settings.gui.window_title,
				chart_padding=self.settings.gui.chart_padding,
			)

			self.presenter = MainPresenter(
				self.store,
				self.connection_manager,
				max_samples=self.settings.series.max_samples,
			)
			self.presenter.initialize(self.view, self.settings.gui.poll_interval_ms)

			logger.info("Application components initialized successfully")

		except Exception as e:
			logger.error(f"Application initialization failed: {e}", exc_info=True)
			raise

	def run(self):
		"""Run the application main loop."""
		try:
			if not self.root:
				raise RuntimeError("Application not initialized. Call initialize() first.")

			logger.info("Starting application main loop")
			self.root.mainloop()

		except KeyboardInterrupt:
			logger.info("Application interrupted by user")
		finally:
			self.shutdown()

	def shutdown(self):
		"""Clean shutdown of all components."""
		logger.info("Shutting down application...")
		if self.presenter:
			logger.info(f"Session status: {self.presenter.get_status()}")
			self.presenter.shutdown()
		logger.info("Application shutdown complete")


def setup_logging(level: str = "INFO", debug: bool = False, log_file: Optional[str] = None):
	"""Configure application logging with UTF-8 support."""
	log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

	console_handler = logging.StreamHandler(sys.stdout)
	if hasattr(console_handler.stream, 'reconfigure'):
		console_handler.stream.reconfigure(encoding='utf-8')
	console_handler.setLevel(log_level)

	if debug and not log_file:
		log_file = DEFAULT_LOG_FILE

	file_handler = None
	if log_file:
		file_handler = logging.FileHandler(log_file, encoding='utf-8')
		file_handler.setLevel(logging.DEBUG)

	formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
	console_handler.setFormatter(formatter)
	if file_handler:
		file_handler.setFormatter(formatter)

	root_logger = logging.getLogger()
	root_logger.setLevel(logging.DEBUG if file_handler else log_level)

	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	root_logger.addHandler(console_handler)
	if file_handler:
		root_logger.addHandler(file_handler)

	# Reduce matplotlib logging noise
	logging.getLogger('matplotlib').setLevel(logging.WARNING)
	logging.getLogger('PIL').setLevel(logging.WARNING)

	logger.info(f"Logging configured (level: {logging.getLevelName(log_level)})")


SAMPLE_CONFIG = """# MQTT Test Client Configuration

mqtt:
  broker_url: "wss://broker.example.com:8884/mqtt"
  topic: "sensors/sound"
  secure_context: true      # only wss:// brokers are accepted
  connect_timeout: 10.0
  reconnect_interval: 2.0

series:
  max_samples: null         # null keeps the whole session history

gui:
  poll_interval_ms: 100
  chart_padding: 0.3

logging:
  level: INFO
  file: null
"""


def create_sample_config(path: str = "mqtt_test_client.yaml") -> Optional[str]:
	"""Create a sample configuration file."""
	config_path = Path(path)
	try:
		config_path.write_text(SAMPLE_CONFIG, encoding='utf-8')
		print(f"✅ Sample configuration created: {config_path}")
		return str(config_path)
	except OSError as e:
		print(f"❌ Failed to create config file: {e}")
		return None


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		description="MQTT Test Client - live chart for WebSocket MQTT brokers",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  mqtt-test-client                                  # Run with defaults
  mqtt-test-client --debug                          # Enable debug logging
  mqtt-test-client --config my_config.yaml          # Use custom config
  mqtt-test-client --broker wss://host:8884/mqtt --topic sensors/sound
  mqtt-test-client --create-config                  # Create sample config
  mqtt-test-client --topic t/1 --save-config my.yaml   # Save effective config
        """
	)

	parser.add_argument("--config", help="Path to configuration file (YAML format)")
	parser.add_argument("--debug", action="store_true", help="Enable debug logging and file output")
	parser.add_argument("--broker", help="Broker URL to prefill (ws:// or wss://)")
	parser.add_argument("--topic", help="Topic to prefill")
	parser.add_argument("--insecure", action="store_true", help="Also accept plain ws:// brokers")
	parser.add_argument("--create-config", action="store_true",
	                    help="Create sample configuration file and exit")
	parser.add_argument("--save-config", metavar="PATH",
	                    help="Write the effective configuration (file, environment, flags) to PATH and exit")
	return parser


def load_config(args: argparse.Namespace) -> ConfigManager:
	"""Configuration from config file, environment and command line."""
	config_manager = ConfigManager(args.config)
	config_manager.apply_overrides({
		"mqtt": {
			"broker_url": args.broker,
			"topic": args.topic,
			"secure_context": False if args.insecure else None,
		},
	})
	return config_manager


def load_settings(args: argparse.Namespace) -> Settings:
	return load_config(args).settings


def main(argv=None):
	"""Main entry point."""
	args = build_parser().parse_args(argv)

	if args.create_config:
		create_sample_config(args.config or "mqtt_test_client.yaml")
		return 0

	try:
		config_manager = load_config(args)
	except ConfigError as e:
		print(f"❌ {e}")
		return 2

	if args.save_config:
		if not config_manager.save_configuration(args.save_config):
			print(f"❌ Failed to save configuration to {args.save_config}")
			return 1
		print(f"✅ Configuration saved: {args.save_config}")
		return 0

	settings = config_manager.settings

	setup_logging(settings.logging.level, args.debug, settings.logging.file)

	try:
		app = MqttTestClientApp(settings)
		app.initialize()
		app.run()
	except Exception as e:
		logger.error(f"Application failed: {e}", exc_info=True)
		print(f"\n❌ Application failed: {e}")
		return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
