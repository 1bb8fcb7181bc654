from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from scene_sensors.errors import KeyNotFoundError
from scene_sensors.sensors.sensor import Describable, Sensor


def count_render_passes(plan: Dict[str, Optional[str]]) -> int:
    return sum(1 for source in plan.values() if source is None)


@dataclass
class SensorSuiteStats:
    added: int = 0
    replaced: int = 0


class SensorSuite:
    """Sensors keyed by the uuid of their spec.

    The suite only holds references: removing or replacing an entry never
    destroys the sensor, its node does.
    """

    def __init__(self):
        self._sensors: Dict[str, Describable] = {}
        self.stats = SensorSuiteStats()

    def add(self, sensor: Describable):
        if not isinstance(sensor, Describable) or sensor.specification() is None:
            raise TypeError(f"cannot add {sensor!r}: it carries no sensor spec")
        uuid = sensor.specification().uuid
        if uuid in self._sensors:
            self.stats.replaced += 1
        self._sensors[uuid] = sensor
        self.stats.added += 1

    def get(self, uuid: str) -> Sensor:
        try:
            return self._sensors[uuid]
        except KeyError:
            raise KeyNotFoundError(uuid, "sensor suite") from None

    def remove(self, uuid: str) -> Sensor:
        try:
            return self._sensors.pop(uuid)
        except KeyError:
            raise KeyNotFoundError(uuid, "sensor suite") from None

    def clear(self):
        self._sensors.clear()

    def sensors(self) -> Dict[str, Sensor]:
        return dict(self._sensors)

    def rendering_plan(self, allow_semantic_borrow: bool = False) -> Dict[str, Optional[str]]:
        """Map each uuid to the uuid whose render it reuses, or None if it renders itself.

        Sensors are visited in uuid order; only sensors that render
        themselves are offered as sources, so borrowing never chains.
        """
        plan: Dict[str, Optional[str]] = {}
        renderers: List[str] = []
        for uuid in sorted(self._sensors):
            spec = self._sensors[uuid].specification()
            source = None
            for cand in renderers:
                if spec.can_borrow_rendering_from(self._sensors[cand].specification(), allow_semantic_borrow):
                    source = cand
                    break
            plan[uuid] = source
            if source is None:
                renderers.append(uuid)
        return plan

    def render_passes(self, allow_semantic_borrow: bool = False) -> int:
        return count_render_passes(self.rendering_plan(allow_semantic_borrow))

    def __len__(self) -> int:
        return len(self._sensors)

    def __contains__(self, uuid: str) -> bool:
        return uuid in self._sensors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sensors))
