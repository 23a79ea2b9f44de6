# turtle_dojo/domains/turtle/interpreter.py
import math
import os
import re
from dataclasses import dataclass
from typing import Optional, Union

from lark.exceptions import UnexpectedInput

from ...framework.base_interpreter import BaseInterpreter, execute_dsl, v_args
from .errors import MalformedArgumentError, MalformedRepetitionCountError
from .state import CommandEffect, CursorState

GRAMMAR_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "grammar.dsl")

_DISTANCE = re.compile(r"[0-9]+")
_DEGREES = re.compile(r"[+-]?[0-9]+")
_COUNT = re.compile(r"[0-9]+")

@dataclass(frozen=True)
class Argument:
    text: str
    quoted: bool

@dataclass(frozen=True)
class CommandCall:
    keyword: str
    argument: Optional[Argument]

@dataclass(frozen=True)
class HeaderLine:
    variable: str
    argument: Argument

@dataclass(frozen=True)
class LoopHeader:
    variable: str
    count: int

class LineInterpreter(BaseInterpreter):
    """
    Turns the parse tree of a single line into a CommandCall or a HeaderLine.
    Arguments are kept as text; they are validated when the command runs.
    """

    @v_args(inline=True)
    def quoted_argument(self, text):
        return Argument(text, quoted=True)

    @v_args(inline=True)
    def raw_argument(self, text):
        return Argument(str(text).strip(), quoted=False)

    @v_args(inline=True)
    def qualifier(self, name):
        return name

    # The qualifier (`turtle.`, `t.`) is accepted and ignored.
    @v_args(inline=True)
    def command(self, qualifier, keyword, argument):
        return CommandCall(keyword, argument)

    @v_args(inline=True)
    def loop_header(self, variable, argument):
        return HeaderLine(variable, argument)

# --- Argument Rules ---

def _shown(argument: Optional[Argument]) -> str:
    if argument is None:
        return ""
    return f'"{argument.text}"' if argument.quoted else argument.text

def _whole_number(call: CommandCall, pattern, line_number) -> int:
    argument = call.argument
    if argument is None or argument.quoted or not pattern.fullmatch(argument.text):
        expected = "a whole number" if pattern is _DEGREES else "a non-negative whole number"
        raise MalformedArgumentError(
            f"{call.keyword}() expects {expected}, got '{_shown(argument)}'", line_number
        )
    return int(argument.text)

# --- Command Rules ---
# Each rule takes (call, state, line_number) and returns a CommandEffect.

def _move(direction: int):
    def rule(call, state, line_number):
        distance = _whole_number(call, _DISTANCE, line_number)
        rad = math.radians(state.heading)
        return CommandEffect(
            position_delta=(direction * distance * math.cos(rad), direction * distance * math.sin(rad)),
            contributes_to_path=True,
            magnitude=distance,
        )
    return rule

def _turn(direction: int):
    def rule(call, state, line_number):
        degrees = _whole_number(call, _DEGREES, line_number)
        return CommandEffect(
            heading_delta=direction * degrees,
            contributes_to_turn=True,
            magnitude=abs(degrees),
        )
    return rule

def _pen(down: bool):
    def rule(call, state, line_number):
        if call.argument is not None:
            raise MalformedArgumentError(
                f"{call.keyword}() takes no argument, got '{_shown(call.argument)}'", line_number
            )
        return CommandEffect(pen_down_override=down)
    return rule

def _color(call, state, line_number):
    argument = call.argument
    if argument is None or not argument.quoted or not argument.text:
        raise MalformedArgumentError(
            f"{call.keyword}() expects a quoted color name such as \"red\", got '{_shown(argument)}'",
            line_number,
        )
    return CommandEffect(color_override=argument.text)

COMMANDS = {
    "forward": _move(1), "fd": _move(1),
    "backward": _move(-1), "back": _move(-1), "bk": _move(-1),
    "left": _turn(1), "lt": _turn(1),
    "right": _turn(-1), "rt": _turn(-1),
    "pencolor": _color, "color": _color,
    "penup": _pen(False), "pu": _pen(False), "up": _pen(False),
    "pendown": _pen(True), "pd": _pen(True), "down": _pen(True),
}

# --- Classification ---

def is_blank_or_comment(line: str) -> bool:
    text = line.strip()
    return not text or text.startswith("#")

def parse_loop_header(header: HeaderLine, line_number=None) -> LoopHeader:
    argument = header.argument
    if argument.quoted or not _COUNT.fullmatch(argument.text):
        raise MalformedRepetitionCountError(
            f"range() expects a non-negative whole number of repetitions, got '{_shown(argument)}'",
            line_number,
        )
    return LoopHeader(header.variable, int(argument.text))

def _classify_unparsable(line: str, line_number):
    words = line.split()
    if words[0] == "for":
        raise MalformedRepetitionCountError(
            "could not read the loop header, expected 'for <name> in range(<count>):'", line_number
        )

    head, paren, _ = line.partition("(")
    keyword = head.strip().rpartition(".")[2]
    if paren and keyword in COMMANDS:
        raise MalformedArgumentError(f"could not read the call to {keyword}()", line_number)
    return None

def classify(line: str, line_number=None) -> Union[CommandCall, LoopHeader, None]:
    """
    Classifies one trimmed, non-blank, non-comment line.

    Returns None for "not a command": such lines are skipped by the driver.
    Raises a ScriptError when a known keyword or a loop header is malformed.
    """
    try:
        parsed = execute_dsl(line, GRAMMAR_PATH, LineInterpreter())
    except UnexpectedInput:
        return _classify_unparsable(line, line_number)

    if isinstance(parsed, HeaderLine):
        return parse_loop_header(parsed, line_number)
    if parsed.keyword not in COMMANDS:
        return None
    return parsed

def effect_for(call: CommandCall, state: CursorState, line_number=None) -> CommandEffect:
    return COMMANDS[call.keyword](call, state, line_number)

def recognize(line: str, state: CursorState, line_number=None) -> Optional[CommandEffect]:
    """Returns the effect of a command line on `state`, or None if the line is not a command."""
    parsed = classify(line, line_number)
    if not isinstance(parsed, CommandCall):
        return None
    return effect_for(parsed, state, line_number)
