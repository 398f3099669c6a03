"""
Verifies that the package modules import without a display.
The Tk views are left out; they need a running X server.
"""

import importlib

import pytest

MODULES = [
    "mqtt_test_client",
    "mqtt_test_client.config",
    "mqtt_test_client.models",
    "mqtt_test_client.processing",
    "mqtt_test_client.processing.mqtt_client",
    "mqtt_test_client.presenters.main_presenter",
    "mqtt_test_client.views",
    "mqtt_test_client.views.series_chart",
    "mqtt_test_client.views.formatting",
    "mqtt_test_client.main",
]


@pytest.mark.parametrize("name", MODULES)
def test_import(name):
    assert importlib.import_module(name) is not None


def test_views_package_does_not_pull_in_tkinter_widgets():
    import mqtt_test_client.views as views

    assert not hasattr(views, "MainWindow")
