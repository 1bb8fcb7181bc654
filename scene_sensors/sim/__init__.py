from .geometry import Quaternion, Vector3, rotation_x, rotation_y, rotation_z, translation_matrix
from .scene_node import SceneNode, SceneNodeType, TransformNode

__all__ = [
    "Quaternion",
    "Vector3",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "translation_matrix",
    "SceneNode",
    "SceneNodeType",
    "TransformNode",
]
