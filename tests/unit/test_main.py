"""
Unit tests for the command line entry point helpers.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import yaml

from mqtt_test_client.config.config_model import Settings
from mqtt_test_client.main import (
    MqttTestClientApp,
    build_parser,
    connection_options_from,
    create_sample_config,
    load_settings,
    main,
)
from mqtt_test_client.config.manager import ConfigManager

CLEAN_ENV = {k: v for k, v in os.environ.items() if not k.startswith("MQTT_TEST_CLIENT_")}


@mock.patch.dict(os.environ, CLEAN_ENV, clear=True)
class TestMainHelpers(unittest.TestCase):

    def test_connection_options_from_settings(self):
        settings = Settings.model_validate({"mqtt": {"reconnect_interval": 3.0, "secure_context": False}})
        options = connection_options_from(settings)

        self.assertEqual(options.reconnect_interval, 3.0)
        self.assertEqual(options.connect_timeout, 10.0)
        self.assertFalse(options.secure_context)
        self.assertTrue(options.clean_session)
        self.assertEqual(options.default_ws_path, "/mqtt")

    def test_cli_overrides(self):
        args = build_parser().parse_args(
            ["--broker", "ws://localhost:9001", "--topic", "t/1", "--insecure"])
        settings = load_settings(args)

        self.assertEqual(settings.mqtt.broker_url, "ws://localhost:9001")
        self.assertEqual(settings.mqtt.topic, "t/1")
        self.assertFalse(settings.mqtt.secure_context)

    def test_secure_by_default(self):
        settings = load_settings(build_parser().parse_args([]))
        self.assertTrue(settings.mqtt.secure_context)

    def test_sample_config_is_loadable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sample.yaml"
            self.assertEqual(create_sample_config(str(path)), str(path))

            settings = ConfigManager(str(path)).settings

        self.assertEqual(settings.mqtt.topic, "sensors/sound")
        self.assertIsNone(settings.series.max_samples)

    def test_create_config_flag_exits(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yaml"
            self.assertEqual(main(["--create-config", "--config", str(path)]), 0)
            self.assertTrue(path.exists())

    def test_invalid_config_returns_error_code(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yaml"
            path.write_text("mqtt:\n  reconnect_interval: 0\n", encoding="utf-8")
            self.assertEqual(main(["--config", str(path)]), 2)

    def test_invalid_environment_returns_error_code(self):
        with mock.patch.dict(os.environ, {"MQTT_TEST_CLIENT_SERIES_MAX_SAMPLES": "0"}):
            self.assertEqual(main([]), 2)

    def test_save_config_writes_effective_settings(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "effective.yaml"
            with mock.patch.dict(os.environ, {"MQTT_TEST_CLIENT_SERIES_MAX_SAMPLES": "50"}):
                self.assertEqual(main(["--topic", "cli/topic", "--insecure", "--save-config", str(path)]), 0)

            saved = yaml.safe_load(path.read_text(encoding="utf-8"))

        self.assertEqual(saved["mqtt"]["topic"], "cli/topic")
        self.assertFalse(saved["mqtt"]["secure_context"])
        self.assertEqual(saved["series"]["max_samples"], 50)

    def test_shutdown_logs_session_status(self):
        app = MqttTestClientApp(Settings())
        app.presenter = mock.Mock()
        app.presenter.get_status.return_value = {"samples": 3}

        with self.assertLogs("mqtt_test_client.main", level="INFO") as logs:
            app.shutdown()

        self.assertTrue(any("samples" in line for line in logs.output))
        app.presenter.shutdown.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
