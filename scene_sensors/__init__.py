"""Sensor management for embodied 3D simulation: typed configuration, sensor specs, sensors and suites."""

from .config import Configuration, ValueKind
from .errors import ConfigFormatError, InvalidSpecError, KeyNotFoundError, SceneSensorsError, TypeMismatchError
from .sensors import Sensor, SensorSpec, SensorSubtype, SensorSuite, SensorType, is_borrowable_type

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ValueKind",
    "ConfigFormatError",
    "InvalidSpecError",
    "KeyNotFoundError",
    "SceneSensorsError",
    "TypeMismatchError",
    "Sensor",
    "SensorSpec",
    "SensorSubtype",
    "SensorSuite",
    "SensorType",
    "is_borrowable_type",
]
