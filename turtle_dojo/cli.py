# turtle_dojo/cli.py
import argparse
import json
import logging
import sys
from typing import List, Optional

from .core import AppConfig, evaluate_attempt, preview_level, request_hint
from .domains.turtle.engine import execute
from .levels import LEVELS, get_level
from .render import write_svg

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="turtle-dojo",
        description="Run turtle scripts and check them against the dojo levels.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log interpreter activity.")

    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("run", help="Run a script and print its final state.")
    pr.add_argument("script", help="Path to the script file.")
    pr.add_argument("--svg", default=None, help="Also draw the trace to this SVG file.")
    pr.add_argument("--json", action="store_true", help="Print the full trace as JSON.")

    sub.add_parser("levels", help="List the available levels.")

    pc = sub.add_parser("check", help="Check a script against a level.")
    pc.add_argument("level", type=int, help="Level id.")
    pc.add_argument("script", help="Path to the script file.")
    pc.add_argument("--hint", action="store_true", help="Ask the hint helper when the check fails.")
    pc.add_argument("--model", default=AppConfig.DEFAULT_MODEL, help="Model used for hints.")

    pp = sub.add_parser("preview", help="Draw a level's target shape to an SVG file.")
    pp.add_argument("level", type=int, help="Level id.")
    pp.add_argument("output", help="Path to write the SVG output.")

    return p

def _read_script(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

# --- Commands ---

def cmd_run(script_path: str, svg_path: Optional[str], as_json: bool) -> int:
    result = execute(_read_script(script_path))
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        final = result.final_state
        print(f"steps: {len(result.steps)}")
        print(f"final: x={final.x:.2f} y={final.y:.2f} heading={final.heading:g}")
        print(f"path length: {result.path_length:g}")
        print(f"total turns: {result.total_turns:g}")
    if svg_path:
        write_svg(result, svg_path, title=script_path)
    if result.error:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    return 0

def cmd_levels() -> int:
    for level in LEVELS:
        print(f"{level.id}. {level.title} ({level.target_shape_name})")
        print(f"   {level.description}")
    return 0

def cmd_check(level_id: int, script_path: str, with_hint: bool, model_name: str) -> int:
    level = get_level(level_id)
    script = _read_script(script_path)
    evaluation = evaluate_attempt(level, script)
    result = evaluation["result"]
    if evaluation["success"]:
        print(f"Level {level.id} cleared: {level.title}")
        return 0

    if result.error:
        print(f"Error: {result.error}", file=sys.stderr)
    print(f"Not quite: the drawing is not a {level.target_shape_name.lower()} yet.")
    if with_hint:
        print(f"Hint: {request_hint(level, script, result.error, model_name)}")
    return 1

def cmd_preview(level_id: int, output_path: str) -> int:
    level = get_level(level_id)
    write_svg(preview_level(level), output_path, title=level.title)
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.cmd == "run":
            return cmd_run(args.script, args.svg, args.json)
        elif args.cmd == "levels":
            return cmd_levels()
        elif args.cmd == "check":
            return cmd_check(args.level, args.script, args.hint, args.model)
        elif args.cmd == "preview":
            return cmd_preview(args.level, args.output)
        else:
            raise AssertionError("unreachable")
    except LookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2

if __name__ == "__main__":
    raise SystemExit(main())
