# turtle_dojo/render.py
import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .domains.turtle.result import ExecutionResult, Step

Point = Tuple[float, float]

@dataclass
class Polyline:
    color: str
    points: List[Point] = field(default_factory=list)

def trace_to_polylines(steps: Sequence[Step]) -> List[Polyline]:
    """
    Splits a trace into drawn runs.

    The segment between two steps is drawn with the pen state and color of the
    earlier step; a new polyline starts wherever either of them changes.
    """
    polylines: List[Polyline] = []
    current: Optional[Polyline] = None
    for previous, step in zip(steps, steps[1:]):
        start = (previous.state.x, previous.state.y)
        end = (step.state.x, step.state.y)
        if not previous.state.pen_down:
            current = None
            continue
        if start == end:
            continue

        if current is None or current.color != previous.state.color or current.points[-1] != start:
            current = Polyline(previous.state.color, [start])
            polylines.append(current)
        current.points.append(end)
    return polylines

def compute_bounds(steps: Sequence[Step]) -> Tuple[float, float, float, float]:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for step in steps:
        min_x = min(min_x, step.state.x)
        max_x = max(max_x, step.state.x)
        min_y = min(min_y, step.state.y)
        max_y = max(max_y, step.state.y)
    return (min_x, min_y, max_x, max_y)

def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in SVG output.
    if not x:
        x = 0.0
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s if s not in ("", "-0") else "0"

def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")

def render_svg(
    result: ExecutionResult,
    *,
    title: Optional[str] = None,
    margin: float = 20.0,
    precision: int = 2,
    stroke_width: float = 3.0,
) -> str:
    """Draws a trace as an SVG document, y axis pointing up, with a marker at the final cursor."""
    steps = result.steps
    min_x, min_y, max_x, max_y = compute_bounds(steps) if steps else (0.0, 0.0, 0.0, 0.0)
    min_x -= margin
    min_y -= margin
    max_x += margin
    max_y += margin
    view_box = " ".join(_fmt(v, precision) for v in (min_x, min_y, max_x - min_x, max_y - min_y))

    lines: List[str] = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.append(f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="{view_box}">')
    if title:
        lines.append(f"  <title>{_escape(title)}</title>")

    # Flip about the vertical center so plane coordinates keep y pointing up.
    lines.append(f'  <g transform="translate(0,{_fmt(min_y + max_y, precision)}) scale(1,-1)">')
    for polyline in trace_to_polylines(steps):
        pts = " ".join(f"{_fmt(x, precision)},{_fmt(y, precision)}" for x, y in polyline.points)
        lines.append(
            f'    <polyline points="{pts}" stroke="{_escape(polyline.color)}" '
            f'stroke-width="{_fmt(stroke_width, precision)}" fill="none" '
            'stroke-linecap="round" stroke-linejoin="round" />'
        )

    final = result.final_state
    if final is not None:
        lines.append(
            f'    <circle cx="{_fmt(final.x, precision)}" cy="{_fmt(final.y, precision)}" '
            f'r="{_fmt(stroke_width * 2, precision)}" fill="{_escape(final.color)}" />'
        )
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"

def write_svg(result: ExecutionResult, out_path: str, **kwargs) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(out_path)) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(render_svg(result, **kwargs))
