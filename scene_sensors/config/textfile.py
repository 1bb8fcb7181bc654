from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

from scene_sensors.config.configuration import INT32_MAX, INT32_MIN, Configuration, ValueKind
from scene_sensors.errors import ConfigFormatError
from scene_sensors.sim.geometry import format_components, parse_components

# Corrade-style text configuration:
#
#   rootKey=value
#   [group/sub]
#   key=1 2 3
#   repeated=a
#   repeated=b
#
# Keys under [group/sub] map to "group/sub/key" in the store. A key that
# occurs more than once in the same group becomes a string group.

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$|^[+-]?(inf|nan)$")
_COMMENT_PREFIXES = ("#", ";")


def _is_number(tok: str) -> bool:
    return bool(_FLOAT_RE.match(tok))


def infer_literal(text: str) -> Tuple[ValueKind, object]:
    low = text.lower()
    if low in ("true", "false"):
        return ValueKind.BOOL, low == "true"
    if _INT_RE.match(text):
        val = int(text)
        if INT32_MIN <= val <= INT32_MAX:
            return ValueKind.INT, val
        return ValueKind.STRING, text
    if _FLOAT_RE.match(text):
        return ValueKind.DOUBLE, float(text)
    toks = text.split()
    if len(toks) in (3, 4) and all(_is_number(t) for t in toks):
        comps = parse_components(text)
        return (ValueKind.VEC3 if len(toks) == 3 else ValueKind.QUAT), comps
    return ValueKind.STRING, text


def _unquote(raw: str) -> Tuple[str, bool]:
    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        return raw[1:-1], True
    return raw, False


def loads_configuration(text: str, cfg: Configuration = None) -> Configuration:
    cfg = cfg if cfg is not None else Configuration()
    group = ""
    seen: Dict[str, List[Tuple[str, bool]]] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue
        if stripped.startswith("["):
            if not stripped.endswith("]"):
                raise ConfigFormatError(f"unterminated group header {stripped!r}", lineno)
            group = stripped[1:-1].strip().strip("/")
            if not group:
                raise ConfigFormatError("empty group name", lineno)
            continue
        if "=" not in stripped:
            raise ConfigFormatError(f"expected key=value, got {stripped!r}", lineno)
        key, raw = stripped.split("=", 1)
        key = key.strip()
        if not key:
            raise ConfigFormatError("empty key", lineno)
        full_key = f"{group}/{key}" if group else key
        seen.setdefault(full_key, []).append(_unquote(raw.strip()))

    for key, values in seen.items():
        if len(values) > 1:
            for value, _ in values:
                cfg.add_string_to_group(key, value)
            continue
        value, quoted = values[0]
        if quoted:
            cfg.set_string(key, value)
        else:
            kind, parsed = infer_literal(value)
            cfg.set(key, parsed, kind)
    return cfg


def load_configuration(path: Union[str, Path], cfg: Configuration = None) -> Configuration:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"configuration file not found: {path}")
    return loads_configuration(p.read_text(), cfg)


def _needs_quotes(text: str) -> bool:
    return (
        text == ""
        or text != text.strip()
        or text.startswith(('"', "[") + _COMMENT_PREFIXES)
    )


def _format_string(text: str, as_scalar: bool) -> str:
    if "\n" in text or "\r" in text:
        raise ConfigFormatError(f"multi-line value {text!r} cannot be written")
    if _needs_quotes(text) or (as_scalar and infer_literal(text)[0] is not ValueKind.STRING):
        return f'"{text}"'
    return text


def _format_scalar(kind: ValueKind, value) -> str:
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.INT:
        return str(value)
    if kind in (ValueKind.FLOAT, ValueKind.DOUBLE):
        return repr(float(value))
    if kind in (ValueKind.VEC3, ValueKind.QUAT):
        return format_components(value)
    return _format_string(value, as_scalar=True)


def _writable_segment(segment: str) -> bool:
    # a leading comment character would turn the line into a comment on reload
    return (
        bool(segment)
        and segment.strip() == segment
        and "=" not in segment
        and "]" not in segment
        and not segment.startswith(("[",) + _COMMENT_PREFIXES)
    )


def _split_key(key: str) -> Tuple[str, str]:
    group, _, name = key.rpartition("/")
    if not all(_writable_segment(seg) for seg in key.split("/")):
        raise ConfigFormatError(f"key {key!r} cannot be written")
    return group, name


def dumps_configuration(cfg: Configuration) -> str:
    groups: Dict[str, List[str]] = {}
    for key in cfg.keys():
        group, name = _split_key(key)
        kind = cfg.kind_of(key)
        lines = groups.setdefault(group, [])
        if kind is ValueKind.GROUP:
            for item in cfg.get_string_group(key):
                lines.append(f"{name}={_format_string(item, as_scalar=False)}")
        else:
            lines.append(f"{name}={_format_scalar(kind, cfg.get(key, kind))}")

    out: List[str] = list(groups.pop("", []))
    for group in sorted(groups):
        if out:
            out.append("")
        out.append(f"[{group}]")
        out.extend(groups[group])
    return "\n".join(out) + "\n" if out else ""


def save_configuration(cfg: Configuration, path: Union[str, Path]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dumps_configuration(cfg))
    return p
