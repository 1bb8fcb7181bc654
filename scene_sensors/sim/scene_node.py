from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence

import numpy as np

from scene_sensors.sim.geometry import rotation_x, rotation_y, rotation_z, translation_matrix


class SceneNodeType(Enum):
    EMPTY = "empty"
    SENSOR = "sensor"
    AGENT = "agent"
    OBJECT = "object"


class SceneNode(Protocol):
    """What a sensor needs from the node it is attached to."""

    def reset_transformation(self):
        ...

    def translate(self, vector: Sequence[float]):
        ...

    def rotate_x(self, angle: float):
        ...

    def rotate_y(self, angle: float):
        ...

    def rotate_z(self, angle: float):
        ...

    def set_type(self, node_type: SceneNodeType):
        ...

    def add_feature(self, feature: Any):
        ...


class TransformNode:
    """In-memory scene graph node with a 4x4 local transform.

    Translations and rotations compose in the node's own frame, so
    ``rotate_x`` turns the node about its local X axis as it stands after
    all previous calls.
    """

    def __init__(self, parent: Optional["TransformNode"] = None, name: str = ""):
        self.name = name
        self.parent = parent
        self.node_type = SceneNodeType.EMPTY
        self.children: List[TransformNode] = []
        self.features: List[Any] = []
        self.destroyed = False
        self._local = np.eye(4, dtype=float)
        if parent is not None:
            parent.children.append(self)

    def create_child(self, name: str = "") -> "TransformNode":
        return TransformNode(parent=self, name=name)

    def reset_transformation(self):
        self._local = np.eye(4, dtype=float)
        return self

    def translate(self, vector: Sequence[float]):
        self._local = self._local @ translation_matrix(vector)
        return self

    def rotate_x(self, angle: float):
        self._local = self._local @ rotation_x(angle)
        return self

    def rotate_y(self, angle: float):
        self._local = self._local @ rotation_y(angle)
        return self

    def rotate_z(self, angle: float):
        self._local = self._local @ rotation_z(angle)
        return self

    def set_type(self, node_type: SceneNodeType):
        self.node_type = node_type

    def add_feature(self, feature: Any):
        if self.destroyed:
            raise RuntimeError(f"cannot attach a feature to destroyed node '{self.name}'")
        self.features.append(feature)

    def transformation(self) -> np.ndarray:
        return self._local.copy()

    def absolute_transformation(self) -> np.ndarray:
        T = self._local.copy()
        cur = self.parent
        while cur is not None:
            T = cur._local @ T
            cur = cur.parent
        return T

    def translation(self) -> np.ndarray:
        return self._local[:3, 3].copy()

    def destroy(self):
        if self.destroyed:
            return
        for child in list(self.children):
            child.destroy()
        for feature in self.features:
            detach = getattr(feature, "detach", None)
            if detach is not None:
                detach()
        self.features = []
        if self.parent is not None and self in self.parent.children:
            self.parent.children.remove(self)
        self.destroyed = True

    def __repr__(self) -> str:
        return f"TransformNode(name={self.name!r}, type={self.node_type.value})"
