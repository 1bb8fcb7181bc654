from .sensor import Describable, Placed, Sensor
from .specs import SensorSpec, SensorSubtype, SensorType, is_borrowable_type
from .suite import SensorSuite, SensorSuiteStats, count_render_passes

__all__ = [
    "Describable",
    "Placed",
    "Sensor",
    "SensorSpec",
    "SensorSubtype",
    "SensorType",
    "is_borrowable_type",
    "SensorSuite",
    "SensorSuiteStats",
    "count_render_passes",
]
