from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from scene_sensors.diagnostics import Diagnostics, print_sink
from scene_sensors.errors import InvalidSpecError
from scene_sensors.sensors.specs import SensorSpec
from scene_sensors.sim.scene_node import SceneNode, SceneNodeType


@runtime_checkable
class Placed(Protocol):
    @property
    def node(self) -> SceneNode:
        ...

    def set_transformation_from_spec(self):
        ...


@runtime_checkable
class Describable(Protocol):
    def specification(self) -> Optional[SensorSpec]:
        ...


class Sensor:
    """A sensor attached as a feature to a scene node.

    The node is not owned: destroying the node detaches the sensor. The
    node's local transform is always a pure function of the spec.
    """

    def __init__(self, node: SceneNode, spec: SensorSpec, diagnostics: Optional[Diagnostics] = None):
        self._diagnostics = diagnostics or print_sink
        if spec is None:
            self._diagnostics("[Sensor] Cannot initialize sensor. The specification is null.")
            raise InvalidSpecError("cannot create a sensor without a specification")
        self._node: Optional[SceneNode] = node
        self._spec: Optional[SensorSpec] = spec
        node.set_type(SceneNodeType.SENSOR)
        node.add_feature(self)
        self.set_transformation_from_spec()

    @property
    def node(self) -> SceneNode:
        if self._node is None:
            raise RuntimeError(f"sensor '{self.uuid}' is detached from its node")
        return self._node

    @property
    def uuid(self) -> str:
        return self._spec.uuid if self._spec is not None else ""

    @property
    def is_attached(self) -> bool:
        return self._node is not None

    def specification(self) -> Optional[SensorSpec]:
        return self._spec

    def set_transformation_from_spec(self):
        """Place the node: identity, translate, then rotate about local x, y, z in turn."""
        if self._spec is None:
            self._diagnostics("[Sensor] Cannot place sensor. The specification is null.")
            return
        node = self.node
        node.reset_transformation()
        node.translate(self._spec.position)
        node.rotate_x(self._spec.orientation[0])
        node.rotate_y(self._spec.orientation[1])
        node.rotate_z(self._spec.orientation[2])

    def detach(self):
        self._node = None

    def __repr__(self) -> str:
        kind = self._spec.sensor_type.value if self._spec is not None else "none"
        return f"Sensor(uuid={self.uuid!r}, type={kind}, attached={self.is_attached})"
