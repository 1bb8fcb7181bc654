import pytest

from scene_sensors.errors import KeyNotFoundError
from scene_sensors.sensors import Sensor, SensorSpec, SensorSuite, SensorType, count_render_passes
from scene_sensors.sim import TransformNode


def make_sensor(uuid, **kwargs):
    return Sensor(TransformNode(name=uuid), SensorSpec(uuid=uuid, **kwargs))


def test_add_and_get():
    suite = SensorSuite()
    rgb = make_sensor("rgb")
    suite.add(rgb)
    assert suite.get("rgb") is rgb
    assert "rgb" in suite
    assert len(suite) == 1


def test_add_same_uuid_replaces():
    suite = SensorSuite()
    a = make_sensor("cam", position=(0.0, 1.0, 0.0))
    b = make_sensor("cam", position=(0.0, 2.0, 0.0))
    suite.add(a)
    suite.add(b)
    assert suite.get("cam") is b
    assert suite.get("cam").specification().position[1] == 2.0
    assert len(suite) == 1
    assert suite.stats.replaced == 1
    assert a.is_attached


def test_get_missing():
    suite = SensorSuite()
    with pytest.raises(KeyNotFoundError):
        suite.get("nonexistent")


def test_remove_and_clear():
    suite = SensorSuite()
    rgb, depth = make_sensor("rgb"), make_sensor("depth", sensor_type=SensorType.DEPTH)
    suite.add(rgb)
    suite.add(depth)
    assert suite.remove("rgb") is rgb
    with pytest.raises(KeyNotFoundError):
        suite.remove("rgb")
    suite.clear()
    assert len(suite) == 0
    assert list(suite) == []
    assert depth.is_attached


def test_sensors_returns_copy():
    suite = SensorSuite()
    suite.add(make_sensor("rgb"))
    suite.sensors().clear()
    assert len(suite) == 1


def test_rendering_plan():
    suite = SensorSuite()
    suite.add(make_sensor("a_rgb"))
    suite.add(make_sensor("b_depth", sensor_type=SensorType.DEPTH, channels=1))
    suite.add(make_sensor("c_rgb_high", position=(0.0, 2.0, 0.0)))
    suite.add(make_sensor("d_sem", sensor_type=SensorType.SEMANTIC))
    suite.add(make_sensor("e_sem", sensor_type=SensorType.SEMANTIC))
    assert suite.rendering_plan() == {
        "a_rgb": None,
        "b_depth": "a_rgb",
        "c_rgb_high": None,
        "d_sem": None,
        "e_sem": None,
    }
    assert suite.render_passes() == 4
    assert suite.rendering_plan(allow_semantic_borrow=True)["e_sem"] == "d_sem"
    assert suite.render_passes(allow_semantic_borrow=True) == 3


class SpecOnly:
    def __init__(self, spec):
        self._spec = spec

    def specification(self):
        return self._spec


def test_add_accepts_any_describable():
    suite = SensorSuite()
    entry = SpecOnly(SensorSpec(uuid="virtual"))
    suite.add(entry)
    assert suite.get("virtual") is entry
    assert suite.rendering_plan() == {"virtual": None}


@pytest.mark.parametrize("entry", [object(), SpecOnly(None)])
def test_add_rejects_entries_without_spec(entry):
    suite = SensorSuite()
    with pytest.raises(TypeError):
        suite.add(entry)
    assert len(suite) == 0
    assert suite.stats.added == 0


def test_count_render_passes():
    assert count_render_passes({}) == 0
    assert count_render_passes({"a": None, "b": "a", "c": None}) == 2
