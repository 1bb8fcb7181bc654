import math

import numpy as np
import pytest

from scene_sensors.diagnostics import CollectingSink
from scene_sensors.errors import InvalidSpecError
from scene_sensors.sensors import Describable, Placed, Sensor, SensorSpec
from scene_sensors.sim import SceneNodeType, TransformNode, rotation_x, rotation_y, rotation_z, translation_matrix


class RecordingNode:
    """Node double that records the calls a sensor makes."""

    def __init__(self):
        self.calls = []
        self.features = []

    def reset_transformation(self):
        self.calls.append(("reset",))

    def translate(self, vector):
        self.calls.append(("translate", tuple(vector)))

    def rotate_x(self, angle):
        self.calls.append(("rotate_x", angle))

    def rotate_y(self, angle):
        self.calls.append(("rotate_y", angle))

    def rotate_z(self, angle):
        self.calls.append(("rotate_z", angle))

    def set_type(self, node_type):
        self.calls.append(("set_type", node_type))

    def add_feature(self, feature):
        self.features.append(feature)


def test_construction_places_node_in_fixed_order():
    node = RecordingNode()
    spec = SensorSpec(uuid="rgb", position=(1.0, 2.0, 3.0), orientation=(0.1, 0.2, 0.3))
    sensor = Sensor(node, spec)
    assert node.calls == [
        ("set_type", SceneNodeType.SENSOR),
        ("reset",),
        ("translate", (1.0, 2.0, 3.0)),
        ("rotate_x", 0.1),
        ("rotate_y", 0.2),
        ("rotate_z", 0.3),
    ]
    assert node.features == [sensor]


def test_specification_is_shared():
    spec = SensorSpec(uuid="rgb")
    a = Sensor(TransformNode(), spec)
    b = Sensor(TransformNode(), spec)
    assert a.specification() is spec
    assert b.specification() is spec
    assert a.uuid == "rgb"


def test_translation_only():
    node = TransformNode()
    Sensor(node, SensorSpec(position=(1.0, 2.0, 3.0), orientation=(0.0, 0.0, 0.0)))
    np.testing.assert_allclose(node.transformation(), translation_matrix((1.0, 2.0, 3.0)))
    assert node.node_type is SceneNodeType.SENSOR


def test_placement_is_deterministic_and_idempotent():
    spec = SensorSpec(uuid="cam", position=(0.2, 1.5, -0.1), orientation=(0.3, -1.1, 2.0))
    n1, n2 = TransformNode(), TransformNode()
    n2.translate((5.0, 5.0, 5.0)).rotate_y(1.0)
    s1 = Sensor(n1, spec)
    Sensor(n2, spec)
    np.testing.assert_allclose(n1.transformation(), n2.transformation())
    before = n1.transformation()
    n1.rotate_z(0.5)
    s1.set_transformation_from_spec()
    np.testing.assert_allclose(n1.transformation(), before)


def test_rotation_is_local_x_then_y_then_z():
    half_pi = math.pi / 2
    node = TransformNode()
    Sensor(node, SensorSpec(position=(1.0, 0.0, 0.0), orientation=(half_pi, half_pi, 0.0)))
    expected = translation_matrix((1.0, 0.0, 0.0)) @ rotation_x(half_pi) @ rotation_y(half_pi) @ rotation_z(0.0)
    swapped = translation_matrix((1.0, 0.0, 0.0)) @ rotation_y(half_pi) @ rotation_x(half_pi)
    np.testing.assert_allclose(node.transformation(), expected, atol=1e-12)
    assert not np.allclose(node.transformation(), swapped)
    np.testing.assert_allclose(node.translation(), [1.0, 0.0, 0.0])


def test_child_sensor_composes_with_agent():
    agent = TransformNode(name="agent")
    agent.translate((10.0, 0.0, 0.0))
    node = agent.create_child("rgb")
    Sensor(node, SensorSpec(position=(0.0, 1.5, 0.0), orientation=(0.0, 0.0, 0.0)))
    np.testing.assert_allclose(node.absolute_transformation()[:3, 3], [10.0, 1.5, 0.0])


def test_null_spec_is_fatal():
    sink = CollectingSink()
    node = TransformNode()
    with pytest.raises(InvalidSpecError):
        Sensor(node, None, diagnostics=sink)
    assert len(sink.messages) == 1
    assert "specification is null" in sink.messages[0]
    assert node.features == []
    assert node.node_type is SceneNodeType.EMPTY


def test_reapply_without_spec_only_reports():
    sink = CollectingSink()
    node = TransformNode()
    sensor = Sensor(node, SensorSpec(position=(1.0, 1.0, 1.0)), diagnostics=sink)
    before = node.transformation()
    sensor._spec = None
    sensor.set_transformation_from_spec()
    assert len(sink.messages) == 1
    np.testing.assert_allclose(node.transformation(), before)
    assert sensor.is_attached


def test_destroying_node_detaches_sensor():
    agent = TransformNode(name="agent")
    node = agent.create_child("depth")
    sensor = Sensor(node, SensorSpec(uuid="depth"))
    agent.destroy()
    assert node.destroyed
    assert not sensor.is_attached
    with pytest.raises(RuntimeError):
        sensor.node
    with pytest.raises(RuntimeError):
        Sensor(node, SensorSpec(uuid="late"))


def test_sensor_satisfies_capability_protocols():
    sensor = Sensor(TransformNode(), SensorSpec(uuid="rgb"))
    assert isinstance(sensor, Placed)
    assert isinstance(sensor, Describable)
    assert not isinstance(object(), Describable)
    assert not isinstance(RecordingNode(), Placed)
