# turtle_dojo/domains/turtle/engine.py
import logging
from typing import List, Sequence, Tuple, Union

from .blocks import Block, scan_block
from .errors import NestedRepetitionError, ScriptError
from .interpreter import CommandCall, LoopHeader, classify, effect_for, is_blank_or_comment
from .result import ExecutionResult, Step
from .state import CursorState, apply

logger = logging.getLogger(__name__)

# --- Execution Limits ---
MAX_STEPS = 1000

class ExecutionTruncated(Exception):
    """Raised internally when the step ceiling is reached. Never reported as an error."""

class ScriptInterpreter:
    """
    Runs one script from a fresh cursor and records every intermediate state.

    The driver scans the script line by line. A loop header hands the indented
    block that follows it to `_expand`, which replays the block body once per
    iteration before scanning resumes after the block. The first ScriptError
    halts the run; the steps recorded so far are kept.
    """

    def __init__(self, max_steps: int = MAX_STEPS):
        self.max_steps = max_steps
        self.state = CursorState()
        self.steps: List[Step] = [Step(0, self.state)]
        self.path_length = 0.0
        self.total_turns = 0.0

    def run(self, script: str) -> ExecutionResult:
        lines = script.splitlines()
        logger.debug("Running script with %d lines", len(lines))

        error = None
        try:
            self._scan(lines)
        except ExecutionTruncated:
            logger.info("Step ceiling of %d reached, trace truncated", self.max_steps)
        except ScriptError as e:
            logger.debug("Script halted: %s", e)
            error = str(e)

        return ExecutionResult(
            steps=tuple(self.steps),
            error=error,
            path_length=self.path_length,
            total_turns=self.total_turns,
        )

    def _scan(self, lines: Sequence[str]):
        index = 0
        while index < len(lines):
            line_number = index + 1
            if is_blank_or_comment(lines[index]):
                index += 1
                continue

            parsed = classify(lines[index].strip(), line_number)
            if isinstance(parsed, LoopHeader):
                block = scan_block(lines, index, parsed)
                self._expand(block)
                index = block.resume_index
                continue

            if parsed is not None:
                self._perform(parsed, line_number)
            index += 1

    def _prepare_body(self, block: Block) -> List[Tuple[int, Union[CommandCall, ScriptError]]]:
        # Body lines are classified once. A failure is stored and raised only when
        # the line is reached, so the lines before it still produce their steps.
        prepared = []
        for line_number, text in block.body:
            if is_blank_or_comment(text):
                continue
            try:
                parsed = classify(text, line_number)
            except ScriptError as e:
                prepared.append((line_number, e))
                continue
            if isinstance(parsed, LoopHeader):
                prepared.append((line_number, NestedRepetitionError(
                    "loops cannot be placed inside another loop", line_number)))
            elif parsed is not None:
                prepared.append((line_number, parsed))
        return prepared

    def _expand(self, block: Block):
        body = self._prepare_body(block)
        if not body:
            return

        for _ in range(block.header.count):
            for line_number, item in body:
                if isinstance(item, ScriptError):
                    raise item
                self._perform(item, line_number)

    def _perform(self, call: CommandCall, line_number: int):
        effect = effect_for(call, self.state, line_number)
        self.state = apply(self.state, effect)
        if effect.contributes_to_path:
            self.path_length += effect.magnitude
        if effect.contributes_to_turn:
            self.total_turns += effect.magnitude

        self.steps.append(Step(len(self.steps), self.state))
        if len(self.steps) - 1 >= self.max_steps:
            raise ExecutionTruncated()

def execute(script: str, max_steps: int = MAX_STEPS) -> ExecutionResult:
    """Interprets a turtle script and returns its full trace and path metrics."""
    return ScriptInterpreter(max_steps).run(script)
