from __future__ import annotations

import numbers
from enum import Enum
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

import numpy as np

from scene_sensors.errors import KeyNotFoundError, TypeMismatchError
from scene_sensors.sim.geometry import Quaternion, Vector3

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ValueKind(Enum):
    BOOL = "bool"
    FLOAT = "float"
    DOUBLE = "double"
    INT = "int"
    STRING = "string"
    VEC3 = "vec3"
    QUAT = "quat"
    GROUP = "group"


class _Entry(NamedTuple):
    kind: ValueKind
    value: Any


def _to_int(value) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise TypeError(f"expected an int, got {type(value).__name__}")
    out = int(value)
    if out != value:
        raise ValueError(f"{value!r} is not integral")
    if not INT32_MIN <= out <= INT32_MAX:
        raise ValueError(f"{out} does not fit in a 32-bit int")
    return out


def _to_string(value) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value


def _to_bool(value) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return bool(value)


def _to_double(value) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise TypeError(f"expected a real number, got {type(value).__name__}")
    return float(value)


def _to_components(cls):
    def convert(value):
        if isinstance(value, (str, bytes)):
            raise TypeError(f"expected {cls.__name__} components, got {type(value).__name__}")
        return cls.of(value)

    return convert


_NORMALIZERS = {
    ValueKind.BOOL: _to_bool,
    ValueKind.FLOAT: lambda v: float(np.float32(_to_double(v))),
    ValueKind.DOUBLE: _to_double,
    ValueKind.INT: _to_int,
    ValueKind.STRING: _to_string,
    ValueKind.VEC3: _to_components(Vector3),
    ValueKind.QUAT: _to_components(Quaternion),
}


def infer_kind(value) -> ValueKind:
    if isinstance(value, (bool, np.bool_)):
        return ValueKind.BOOL
    if isinstance(value, (int, np.integer)):
        return ValueKind.INT
    if isinstance(value, np.float32):
        return ValueKind.FLOAT
    if isinstance(value, (float, np.floating)):
        return ValueKind.DOUBLE
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Quaternion):
        return ValueKind.QUAT
    if isinstance(value, Vector3):
        return ValueKind.VEC3
    if isinstance(value, (tuple, list, np.ndarray)) and len(value) in (3, 4):
        return ValueKind.VEC3 if len(value) == 3 else ValueKind.QUAT
    raise TypeError(f"no configuration kind for value of type {type(value).__name__}")


class Configuration:
    """Typed key/value store.

    Each key holds exactly one kind of content: a scalar (bool, float,
    double, int, string, vec3, quat) or an ordered group of strings. Reading
    a key with a different kind than it was stored with raises
    TypeMismatchError; values are never converted on the way out.
    """

    def __init__(self):
        self._values: Dict[str, _Entry] = {}

    def set(self, key: str, value, kind: Optional[ValueKind] = None) -> bool:
        """Store a scalar; returns True when the key already held content."""
        if kind is None:
            kind = infer_kind(value)
        if kind is ValueKind.GROUP:
            raise TypeError("use add_string_to_group for group values")
        existed = key in self._values
        self._values[key] = _Entry(kind, _NORMALIZERS[kind](value))
        return existed

    def get(self, key: str, kind: ValueKind):
        entry = self._entry(key)
        if entry.kind is not kind:
            raise TypeMismatchError(key, kind, entry.kind)
        if kind is ValueKind.GROUP:
            return list(entry.value)
        return entry.value

    def set_bool(self, key: str, value: bool) -> bool:
        return self.set(key, value, ValueKind.BOOL)

    def set_float(self, key: str, value: float) -> bool:
        return self.set(key, value, ValueKind.FLOAT)

    def set_double(self, key: str, value: float) -> bool:
        return self.set(key, value, ValueKind.DOUBLE)

    def set_int(self, key: str, value: int) -> bool:
        return self.set(key, value, ValueKind.INT)

    def set_string(self, key: str, value: str) -> bool:
        return self.set(key, value, ValueKind.STRING)

    def set_vec3(self, key: str, value) -> bool:
        return self.set(key, value, ValueKind.VEC3)

    def set_quat(self, key: str, value) -> bool:
        return self.set(key, value, ValueKind.QUAT)

    def get_bool(self, key: str) -> bool:
        return self.get(key, ValueKind.BOOL)

    def get_float(self, key: str) -> float:
        return self.get(key, ValueKind.FLOAT)

    def get_double(self, key: str) -> float:
        return self.get(key, ValueKind.DOUBLE)

    def get_int(self, key: str) -> int:
        return self.get(key, ValueKind.INT)

    def get_string(self, key: str) -> str:
        return self.get(key, ValueKind.STRING)

    def get_vec3(self, key: str) -> Vector3:
        return self.get(key, ValueKind.VEC3)

    def get_quat(self, key: str) -> Quaternion:
        return self.get(key, ValueKind.QUAT)

    def add_string_to_group(self, key: str, value: str) -> int:
        """Append a string to a group and return the resulting group size."""
        entry = self._values.get(key)
        if entry is None:
            entry = _Entry(ValueKind.GROUP, [])
            self._values[key] = entry
        elif entry.kind is not ValueKind.GROUP:
            raise TypeMismatchError(key, ValueKind.GROUP, entry.kind)
        entry.value.append(_to_string(value))
        return len(entry.value)

    def get_string_group(self, key: str) -> List[str]:
        entry = self._values.get(key)
        if entry is None:
            return []
        if entry.kind is not ValueKind.GROUP:
            raise TypeMismatchError(key, ValueKind.GROUP, entry.kind)
        return list(entry.value)

    def has_value(self, key: str) -> bool:
        return key in self._values

    def remove_value(self, key: str) -> bool:
        return self._values.pop(key, None) is not None

    def kind_of(self, key: str) -> ValueKind:
        return self._entry(key).kind

    def keys(self) -> List[str]:
        return list(self._values)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, entry in self._values.items():
            if entry.kind is ValueKind.GROUP:
                out[key] = list(entry.value)
            elif entry.kind in (ValueKind.VEC3, ValueKind.QUAT):
                out[key] = list(entry.value)
            else:
                out[key] = entry.value
        return out

    def _entry(self, key: str) -> _Entry:
        try:
            return self._values[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __repr__(self) -> str:
        return f"Configuration({len(self._values)} keys)"
