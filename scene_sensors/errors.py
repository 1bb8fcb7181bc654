from __future__ import annotations


class SceneSensorsError(Exception):
    """Base class for errors raised by scene_sensors."""


class KeyNotFoundError(SceneSensorsError, KeyError):
    def __init__(self, key: str, where: str = "configuration"):
        super().__init__(f"key '{key}' not found in {where}")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class TypeMismatchError(SceneSensorsError, TypeError):
    def __init__(self, key: str, expected, actual):
        super().__init__(f"key '{key}' holds {actual.name}, requested {expected.name}")
        self.key = key
        self.expected = expected
        self.actual = actual


class InvalidSpecError(SceneSensorsError, ValueError):
    """Raised when a sensor cannot be built from the given specification."""


class ConfigFormatError(SceneSensorsError, ValueError):
    def __init__(self, message: str, line: int = 0):
        super().__init__(f"line {line}: {message}" if line else message)
        self.line = line
