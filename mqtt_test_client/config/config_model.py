"""
Central settings model for the MQTT test client.

Uses Pydantic for validation; defaults can be overridden through
MQTT_TEST_CLIENT_* environment variables.
"""
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

ENV_PREFIX = "MQTT_TEST_CLIENT_"


def get_env_value(env_name: str, default: Any = None) -> Any:
	"""Reads a value from the environment"""
	return os.environ.get(env_name, default)


class MQTTSettings(BaseModel):
	broker_url: str = ""
	topic: str = ""
	secure_context: bool = True
	clean_session: bool = True
	connect_timeout: float = 10.0
	reconnect_interval: float = 2.0
	keepalive: int = 60
	client_id_prefix: str = "mqtt-test-client"
	ws_path: str = "/mqtt"

	@field_validator("connect_timeout", "reconnect_interval")
	@classmethod
	def validate_positive(cls, v):
		if v <= 0:
			raise ValueError(f"must be positive, got {v}")
		return v

	@model_validator(mode="before")
	@classmethod
	def load_from_env(cls, values: Dict[str, Any]) -> Dict[str, Any]:
		prefix = ENV_PREFIX + "MQTT_"
		values = dict(values or {})

		if "broker_url" not in values:
			values["broker_url"] = get_env_value(prefix + "BROKER_URL", "")
		if "topic" not in values:
			values["topic"] = get_env_value(prefix + "TOPIC", "")
		if "secure_context" not in values:
			secure_value = get_env_value(prefix + "SECURE", "true")
			values["secure_context"] = secure_value.strip().lower() not in ("0", "false", "no", "off")

		return values


class SeriesSettings(BaseModel):
	# None keeps the whole session history
	max_samples: Optional[int] = None

	@field_validator("max_samples")
	@classmethod
	def validate_max_samples(cls, v):
		if v is not None and v < 1:
			raise ValueError(f"max_samples must be positive, got {v}")
		return v

	@model_validator(mode="before")
	@classmethod
	def load_from_env(cls, values: Dict[str, Any]) -> Dict[str, Any]:
		values = dict(values or {})

		if "max_samples" not in values:
			max_value = get_env_value(ENV_PREFIX + "SERIES_MAX_SAMPLES", "")
			values["max_samples"] = int(max_value) if max_value.isdigit() else None

		return values


class GUISettings(BaseModel):
	poll_interval_ms: int = 100
	window_title: str = "MQTT Test Client"
	chart_padding: float = 0.3


class LoggingSettings(BaseModel):
	level: str = "INFO"
	file: Optional[str] = None

	@model_validator(mode="before")
	@classmethod
	def load_from_env(cls, values: Dict[str, Any]) -> Dict[str, Any]:
		values = dict(values or {})

		if "level" not in values:
			values["level"] = get_env_value(ENV_PREFIX + "LOG_LEVEL", "INFO")

		return values


class Settings(BaseModel):
	mqtt: MQTTSettings = Field(default_factory=MQTTSettings)
	series: SeriesSettings = Field(default_factory=SeriesSettings)
	gui: GUISettings = Field(default_factory=GUISettings)
	logging: LoggingSettings = Field(default_factory=LoggingSettings)
