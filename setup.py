from setuptools import setup, find_packages

setup(
    name="mqtt-test-client",
    version="0.1.0",
    description="Desktop dashboard charting min/max/average readings received over MQTT WebSockets",
    packages=find_packages(include=["mqtt_test_client", "mqtt_test_client.*"]),
    install_requires=[
        "paho-mqtt>=2.0.0",  # CallbackAPIVersion.VERSION2
        "numpy",
        "matplotlib",
        "pydantic>=2.0",  # field_validator / model_validator
        "pyyaml>=5.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mqtt-test-client=mqtt_test_client.main:main",
        ],
    },
    python_requires=">=3.8",
)
