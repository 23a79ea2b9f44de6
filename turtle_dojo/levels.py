# turtle_dojo/levels.py
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from .domains.turtle.state import CursorState

SuccessCheck = Callable[[CursorState, float, float], bool]

@dataclass(frozen=True)
class Level:
    id: int
    title: str
    description: str
    target_shape_name: str
    initial_script: str
    solution_script: str
    check_success: SuccessCheck
    hints: Tuple[str, ...] = field(default_factory=tuple)

def _returns_home(state: CursorState, tolerance: float = 5.0) -> bool:
    return abs(state.x) < tolerance and abs(state.y) < tolerance

# --- Level Catalog ---
LEVELS: List[Level] = [
    Level(
        id=1,
        title="First Steps",
        description="Welcome to the dojo! Move the turtle forward to draw a line. "
                    "Press the 'forward' button or type `forward(100)`.",
        target_shape_name="Straight line",
        initial_script="# Your code goes here",
        solution_script="forward(100)",
        check_success=lambda state, length, turns: length >= 100 and turns == 0,
        hints=("`forward(distance)` moves the turtle.", "A distance of about 100 works well."),
    ),
    Level(
        id=2,
        title="Around the Corner",
        description="Time to turn. Move forward, turn right by 90 degrees, "
                    "then move forward again to draw an L.",
        target_shape_name="L shape",
        initial_script="# Your code goes here\n",
        solution_script="forward(100)\nright(90)\nforward(100)",
        check_success=lambda state, length, turns: length >= 200 and turns == 90,
        hints=("`right(90)` turns right by 90 degrees.", "Don't forget to move again after turning."),
    ),
    Level(
        id=3,
        title="The Square Secret",
        description="Draw a square with a loop. The same move repeats four times, "
                    "so a `for` loop saves typing.",
        target_shape_name="Square",
        initial_script="# Try the loop block\nfor i in range(4):\n    pass",
        solution_script="for i in range(4):\n    forward(100)\n    right(90)",
        check_success=lambda state, length, turns: (
            length >= 400 and turns >= 270 and _returns_home(state)
        ),
        hints=(
            "A square has four sides and four corners.",
            "Each corner is 90 degrees.",
            "Put a move and a turn inside the loop.",
        ),
    ),
    Level(
        id=4,
        title="Triangle Power",
        description="Draw an equilateral triangle. Remember that the exterior angle "
                    "of a triangle is 120 degrees (360 / 3).",
        target_shape_name="Equilateral triangle",
        initial_script="for i in range(3):\n    # Fill in the body",
        solution_script="for i in range(3):\n    forward(150)\n    left(120)",
        check_success=lambda state, length, turns: (
            length >= 300 and turns >= 240 and _returns_home(state)
        ),
        hints=("The turn is 120 degrees, not 60.", "Use a loop that repeats three times."),
    ),
    Level(
        id=5,
        title="Pentagon Patrol",
        description="Draw a regular pentagon. The angle is 360 / 5.",
        target_shape_name="Regular pentagon",
        initial_script="# 360 / 5 = 72 degrees\n",
        solution_script="for i in range(5):\n    forward(100)\n    right(72)",
        check_success=lambda state, length, turns: (
            length >= 500 and turns >= 288 and _returns_home(state)
        ),
        hints=("360 divided by 5 is 72.", "You need to repeat five times."),
    ),
]

def get_level(level_id: int) -> Level:
    """Looks up a level by id."""
    for level in LEVELS:
        if level.id == level_id:
            return level
    raise LookupError(f"Unknown level {level_id}. Valid levels: {[level.id for level in LEVELS]}")
