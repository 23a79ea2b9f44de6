# turtle_dojo/domains/turtle/state.py
from dataclasses import dataclass, replace
from typing import Optional, Tuple

DEFAULT_COLOR = "#34d399"

@dataclass(frozen=True)
class CursorState:
    """Position in abstract plane units; heading in degrees, counter-clockwise from +x."""
    x: float = 0.0
    y: float = 0.0
    heading: float = 90.0
    pen_down: bool = True
    color: str = DEFAULT_COLOR

@dataclass(frozen=True)
class CommandEffect:
    position_delta: Tuple[float, float] = (0.0, 0.0)
    heading_delta: float = 0.0
    color_override: Optional[str] = None
    pen_down_override: Optional[bool] = None
    contributes_to_path: bool = False
    contributes_to_turn: bool = False
    magnitude: float = 0.0

def apply(state: CursorState, effect: CommandEffect) -> CursorState:
    # Heading is never wrapped into [0, 360); turns accumulate as typed.
    dx, dy = effect.position_delta
    return replace(
        state,
        x=state.x + dx,
        y=state.y + dy,
        heading=state.heading + effect.heading_delta,
        pen_down=state.pen_down if effect.pen_down_override is None else effect.pen_down_override,
        color=state.color if effect.color_override is None else effect.color_override,
    )
