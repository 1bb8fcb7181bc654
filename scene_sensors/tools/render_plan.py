from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional

from scene_sensors.config.spec_loader import apply_overrides, load_rig_file, rig_to_specs
from scene_sensors.sensors import Sensor, SensorSpec, SensorSuite, count_render_passes
from scene_sensors.sim import SceneNodeType, TransformNode


def build_suite(specs: List[SensorSpec], agent: Optional[TransformNode] = None) -> SensorSuite:
    """Attach one sensor per spec to a fresh child of ``agent``."""
    agent = agent or TransformNode(name="agent")
    agent.set_type(SceneNodeType.AGENT)
    suite = SensorSuite()
    for spec in specs:
        suite.add(Sensor(agent.create_child(spec.uuid), spec))
    return suite


def format_plan(plan: Dict[str, Optional[str]]) -> List[str]:
    lines = []
    for uuid, source in plan.items():
        lines.append(f"{uuid}: render" if source is None else f"{uuid}: borrow from {source}")
    return lines


def main(argv=None):
    ap = argparse.ArgumentParser(description="Show which sensors of a rig can share a render pass")
    ap.add_argument("--rig", required=True, type=Path, help="rig file (.yaml/.yml/.json)")
    ap.add_argument("--override", action="append", default=[], help="dotted key=value overrides")
    ap.add_argument("--allow-semantic-borrow", action="store_true")
    ap.add_argument("--json", action="store_true", help="print the plan as JSON")
    args = ap.parse_args(argv)

    rig = apply_overrides(load_rig_file(args.rig), args.override)
    suite = build_suite(rig_to_specs(rig))
    plan = suite.rendering_plan(args.allow_semantic_borrow)
    passes = count_render_passes(plan)
    if args.json:
        print(json.dumps({"rig": rig.get("name"), "plan": plan, "render_passes": passes}, indent=2))
    else:
        print(f"[render_plan] rig={rig.get('name')} sensors={len(suite)} render_passes={passes}")
        for line in format_plan(plan):
            print(f"  {line}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
