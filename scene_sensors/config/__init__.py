from .configuration import Configuration, ValueKind
from .defaults import DEFAULTS, SensorDefaults
from .textfile import dumps_configuration, load_configuration, loads_configuration, save_configuration

__all__ = [
    "Configuration",
    "ValueKind",
    "DEFAULTS",
    "SensorDefaults",
    "dumps_configuration",
    "load_configuration",
    "loads_configuration",
    "save_configuration",
]
