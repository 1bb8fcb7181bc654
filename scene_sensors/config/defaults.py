from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class SensorDefaults:
    sensor_type: str = "color"
    sensor_subtype: str = "pinhole"
    parameters: Dict[str, str] = field(default_factory=lambda: {"near": "0.01", "far": "1000", "hfov": "90"})
    position: Tuple[float, float, float] = (0.0, 1.5, 0.0)  # agent-local, meters
    orientation: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # radians about local x, y, z
    resolution: Tuple[int, int] = (84, 84)  # rows, cols
    channels: int = 4
    encoding: str = "rgba_uint8"
    observation_space: str = ""
    noise_model: str = "None"
    gpu2gpu_transfer: bool = False


DEFAULTS = SensorDefaults()
