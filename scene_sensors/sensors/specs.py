from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from scene_sensors.config.defaults import DEFAULTS
from scene_sensors.errors import InvalidSpecError
from scene_sensors.sim.geometry import Vector3


class _ParsableEnum(Enum):
    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for member in cls:
            if key.upper() == member.name or key.lower() == member.value:
                return member
        raise InvalidSpecError(f"unknown {cls.__name__} '{value}'")


class SensorType(_ParsableEnum):
    NONE = "none"
    COLOR = "color"
    DEPTH = "depth"
    NORMAL = "normal"
    SEMANTIC = "semantic"
    PATH = "path"
    GOAL = "goal"
    FORCE = "force"
    TENSOR = "tensor"
    TEXT = "text"


class SensorSubtype(_ParsableEnum):
    NONE = "none"
    PINHOLE = "pinhole"
    ORTHOGRAPHIC = "orthographic"
    FISHEYE = "fisheye"


VISUAL_TYPES = (SensorType.COLOR, SensorType.DEPTH, SensorType.NORMAL, SensorType.SEMANTIC)


def is_borrowable_type(sensor_type: SensorType, allow_semantic_borrow: bool) -> bool:
    """Whether a rendered image of this type may be shared with another sensor."""
    if sensor_type in (SensorType.COLOR, SensorType.DEPTH):
        return True
    if sensor_type is SensorType.SEMANTIC:
        return allow_semantic_borrow
    return False


@dataclass(frozen=True)
class SensorSpec:
    """Descriptor of a sensor: what it is, where it sits on its node, what it outputs.

    Specs are shared between every sensor built from them and are never
    mutated in place; use ``dataclasses.replace`` to derive a modified copy.
    ``orientation`` holds radians applied about the local x, then y, then z
    axis.
    """

    uuid: str = ""
    sensor_type: SensorType = SensorType.COLOR
    sensor_subtype: SensorSubtype = SensorSubtype.PINHOLE
    parameters: Mapping[str, Union[str, float, int]] = field(default_factory=lambda: dict(DEFAULTS.parameters))
    position: Vector3 = Vector3(*DEFAULTS.position)
    orientation: Vector3 = Vector3(*DEFAULTS.orientation)
    resolution: Tuple[int, int] = DEFAULTS.resolution
    channels: int = DEFAULTS.channels
    encoding: str = DEFAULTS.encoding
    observation_space: str = DEFAULTS.observation_space
    noise_model: str = DEFAULTS.noise_model
    gpu2gpu_transfer: bool = DEFAULTS.gpu2gpu_transfer

    def __post_init__(self):
        set_ = object.__setattr__
        set_(self, "sensor_type", SensorType.parse(self.sensor_type))
        set_(self, "sensor_subtype", SensorSubtype.parse(self.sensor_subtype))
        set_(self, "parameters", MappingProxyType(dict(self.parameters)))
        try:
            set_(self, "position", Vector3.of(self.position))
            set_(self, "orientation", Vector3.of(self.orientation))
        except (TypeError, ValueError) as exc:
            raise InvalidSpecError(f"sensor '{self.uuid}': {exc}") from exc
        res = tuple(int(v) for v in self.resolution)
        if len(res) != 2:
            raise InvalidSpecError(f"sensor '{self.uuid}': resolution needs 2 values, got {len(res)}")
        set_(self, "resolution", res)
        set_(self, "channels", int(self.channels))
        set_(self, "gpu2gpu_transfer", bool(self.gpu2gpu_transfer))

    def is_visual(self) -> bool:
        return self.sensor_type in VISUAL_TYPES

    def can_borrow_rendering_from(self, other: "SensorSpec", allow_semantic_borrow: bool = False) -> bool:
        """True when ``other``'s rendered buffer can stand in for this sensor's own render.

        Semantic renders are only shared between semantic sensors, even with
        ``allow_semantic_borrow``. This is stricter than a plain type check,
        which would let a semantic sensor reuse a color render and read
        colors as object ids. Beyond the type, only the capture geometry is
        compared. Channels, encoding, observation space, noise model and
        transfer mode only change how an already rendered image is
        post-processed.
        """
        return (
            is_borrowable_type(self.sensor_type, allow_semantic_borrow)
            and is_borrowable_type(other.sensor_type, allow_semantic_borrow)
            and (self.sensor_type is SensorType.SEMANTIC) == (other.sensor_type is SensorType.SEMANTIC)
            and self.sensor_subtype == other.sensor_subtype
            and dict(self.parameters) == dict(other.parameters)
            and self.position == other.position
            and self.orientation == other.orientation
            and self.resolution == other.resolution
        )

    def __hash__(self):
        return hash(
            (
                self.uuid,
                self.sensor_type,
                self.sensor_subtype,
                self.position,
                self.orientation,
                self.resolution,
                self.channels,
                self.encoding,
            )
        )
