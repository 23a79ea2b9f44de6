# turtle_dojo/domains/turtle/result.py
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .state import CursorState

@dataclass(frozen=True)
class Step:
    index: int
    state: CursorState

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.index, **asdict(self.state)}

@dataclass(frozen=True)
class ExecutionResult:
    """
    The complete outcome of one run.

    When `error` is set, `steps` is the valid prefix computed before the failing
    line and the metrics must not be used to judge success.
    """
    steps: Tuple[Step, ...]
    error: Optional[str]
    path_length: float
    total_turns: float

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def final_state(self) -> Optional[CursorState]:
        return self.steps[-1].state if self.steps else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "error": self.error,
            "path_length": self.path_length,
            "total_turns": self.total_turns,
        }
