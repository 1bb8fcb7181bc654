from __future__ import annotations

import json
import math
import warnings
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from scene_sensors.config.configuration import Configuration, ValueKind
from scene_sensors.config.defaults import DEFAULTS
from scene_sensors.errors import InvalidSpecError
from scene_sensors.sensors.specs import SensorSpec, SensorSubtype, SensorType

RIG_KEYS = {"name", "version", "sensors"}
_YAML_SUFFIXES = (".yaml", ".yml")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in _YAML_SUFFIXES


def load_rig_file(path: Union[str, Path]) -> Dict:
    """Read a rig from YAML (by suffix) or JSON; the top level must be a mapping."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"rig file not found: {path}")
    parse = yaml.safe_load if _is_yaml(p) else json.loads
    rig = parse(p.read_text()) or {}
    if not isinstance(rig, dict):
        raise InvalidSpecError(f"rig file {p} holds {type(rig).__name__}, expected a mapping")
    return rig


def apply_overrides(rig: Dict, overrides: List[str]) -> Dict:
    """Apply ``a.b.0.c=value`` overrides to a copy of ``rig``; values are parsed as YAML."""
    out = deepcopy(rig)
    for ov in overrides:
        if "=" not in ov:
            continue
        path, raw = ov.split("=", 1)
        val = yaml.safe_load(raw.strip())
        keys = path.strip().split(".")
        cur: Any = out
        for k in keys[:-1]:
            if isinstance(cur, list):
                cur = cur[int(k)]
                continue
            if k not in cur or not isinstance(cur[k], (dict, list)):
                cur[k] = {}
            cur = cur[k]
        last = keys[-1]
        if isinstance(cur, list):
            cur[int(last)] = val
        else:
            cur[last] = val
    return out


def spec_from_dict(s: Dict) -> SensorSpec:
    if "id" not in s:
        raise InvalidSpecError(f"sensor entry without id: {s}")
    if "orientation_deg" in s:
        orientation = [math.radians(v) for v in s["orientation_deg"]]
    else:
        orientation = s.get("orientation", DEFAULTS.orientation)
    # an explicit empty map stays empty, only a missing key falls back to defaults
    params = s["parameters"] if "parameters" in s else DEFAULTS.parameters
    return SensorSpec(
        uuid=str(s["id"]),
        sensor_type=s.get("type", DEFAULTS.sensor_type),
        sensor_subtype=s.get("subtype", DEFAULTS.sensor_subtype),
        parameters={k: str(v) for k, v in (params or {}).items()},
        position=s.get("position", DEFAULTS.position),
        orientation=orientation,
        resolution=s.get("resolution", DEFAULTS.resolution),
        channels=s.get("channels", DEFAULTS.channels),
        encoding=s.get("encoding", DEFAULTS.encoding),
        observation_space=s.get("observation_space", DEFAULTS.observation_space),
        noise_model=s.get("noise_model", DEFAULTS.noise_model),
        gpu2gpu_transfer=s.get("gpu2gpu_transfer", DEFAULTS.gpu2gpu_transfer),
    )


def spec_to_dict(spec: SensorSpec) -> Dict:
    return {
        "id": spec.uuid,
        "type": spec.sensor_type.value,
        "subtype": spec.sensor_subtype.value,
        "parameters": dict(spec.parameters),
        "position": list(spec.position),
        "orientation": list(spec.orientation),
        "resolution": list(spec.resolution),
        "channels": spec.channels,
        "encoding": spec.encoding,
        "observation_space": spec.observation_space,
        "noise_model": spec.noise_model,
        "gpu2gpu_transfer": spec.gpu2gpu_transfer,
    }


def rig_to_specs(rig: Dict) -> List[SensorSpec]:
    unknown = set(rig) - RIG_KEYS
    if unknown:
        warnings.warn(f"[rig] ignoring unknown keys: {sorted(unknown)}")
    specs: List[SensorSpec] = []
    seen = set()
    for s in rig.get("sensors", []) or []:
        if not s.get("enabled", True):
            continue
        spec = spec_from_dict(s)
        if spec.uuid in seen:
            raise InvalidSpecError(f"duplicate sensor id '{spec.uuid}' in rig")
        seen.add(spec.uuid)
        specs.append(spec)
    return specs


def dump_specs(specs: List[SensorSpec], path: Union[str, Path], name: str = "") -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    rig = {"name": name or p.stem, "sensors": [spec_to_dict(s) for s in specs]}
    if _is_yaml(p):
        p.write_text(yaml.safe_dump(rig, sort_keys=False))
    else:
        p.write_text(json.dumps(rig, indent=2))
    return p


def spec_to_configuration(spec: SensorSpec, cfg: Configuration, prefix: str = "sensor") -> Configuration:
    cfg.set_string(f"{prefix}/uuid", spec.uuid)
    cfg.set_string(f"{prefix}/sensorType", spec.sensor_type.value)
    cfg.set_string(f"{prefix}/sensorSubtype", spec.sensor_subtype.value)
    cfg.set_vec3(f"{prefix}/position", spec.position)
    cfg.set_vec3(f"{prefix}/orientation", spec.orientation)
    cfg.set_int(f"{prefix}/resolution/rows", spec.resolution[0])
    cfg.set_int(f"{prefix}/resolution/cols", spec.resolution[1])
    cfg.set_int(f"{prefix}/channels", spec.channels)
    cfg.set_string(f"{prefix}/encoding", spec.encoding)
    cfg.set_string(f"{prefix}/observationSpace", spec.observation_space)
    cfg.set_string(f"{prefix}/noiseModel", spec.noise_model)
    cfg.set_bool(f"{prefix}/gpu2gpuTransfer", spec.gpu2gpu_transfer)
    param_prefix = f"{prefix}/parameters/"
    for key in [k for k in cfg.keys() if k.startswith(param_prefix)]:
        cfg.remove_value(key)
    cfg.set_int(f"{prefix}/parameterCount", len(spec.parameters))
    for k, v in spec.parameters.items():
        cfg.set_string(f"{prefix}/parameters/{k}", str(v))
    return cfg


def _string_value(cfg: Configuration, key: str) -> str:
    # text files infer numbers, so a parameter like "90" may come back as an int
    kind = cfg.kind_of(key)
    if kind is ValueKind.STRING:
        return cfg.get_string(key)
    if kind is ValueKind.BOOL:
        return "true" if cfg.get_bool(key) else "false"
    if kind in (ValueKind.INT, ValueKind.FLOAT, ValueKind.DOUBLE):
        return str(cfg.get(key, kind))
    raise InvalidSpecError(f"'{key}' holds {kind.name}, expected a scalar parameter")


def spec_from_configuration(cfg: Configuration, prefix: str = "sensor") -> SensorSpec:
    def opt(name, getter, default):
        key = f"{prefix}/{name}"
        return getter(key) if cfg.has_value(key) else default

    param_prefix = f"{prefix}/parameters/"
    params = {k[len(param_prefix):]: _string_value(cfg, k) for k in cfg.keys() if k.startswith(param_prefix)}
    count_key = f"{prefix}/parameterCount"
    if cfg.has_value(count_key):
        if cfg.get_int(count_key) != len(params):
            raise InvalidSpecError(f"'{count_key}' is {cfg.get_int(count_key)}, found {len(params)} parameters")
    elif not params:
        params = dict(DEFAULTS.parameters)
    rows = opt("resolution/rows", cfg.get_int, DEFAULTS.resolution[0])
    cols = opt("resolution/cols", cfg.get_int, DEFAULTS.resolution[1])
    return SensorSpec(
        uuid=opt("uuid", lambda k: _string_value(cfg, k), ""),
        sensor_type=SensorType.parse(opt("sensorType", cfg.get_string, DEFAULTS.sensor_type)),
        sensor_subtype=SensorSubtype.parse(opt("sensorSubtype", cfg.get_string, DEFAULTS.sensor_subtype)),
        parameters=params,
        position=opt("position", cfg.get_vec3, DEFAULTS.position),
        orientation=opt("orientation", cfg.get_vec3, DEFAULTS.orientation),
        resolution=(rows, cols),
        channels=opt("channels", cfg.get_int, DEFAULTS.channels),
        encoding=opt("encoding", cfg.get_string, DEFAULTS.encoding),
        observation_space=opt("observationSpace", cfg.get_string, DEFAULTS.observation_space),
        noise_model=opt("noiseModel", cfg.get_string, DEFAULTS.noise_model),
        gpu2gpu_transfer=opt("gpu2gpuTransfer", cfg.get_bool, DEFAULTS.gpu2gpu_transfer),
    )
