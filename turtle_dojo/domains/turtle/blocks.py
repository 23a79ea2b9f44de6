# turtle_dojo/domains/turtle/blocks.py
from dataclasses import dataclass
from typing import Sequence, Tuple

from .interpreter import LoopHeader

@dataclass(frozen=True)
class Block:
    header: LoopHeader
    body: Tuple[Tuple[int, str], ...] # (line number, dedented text)
    resume_index: int

def indentation(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))

def is_body_line(line: str) -> bool:
    return not line.strip() or indentation(line) > 0

def scan_block(lines: Sequence[str], index: int, header: LoopHeader) -> Block:
    """
    Collects the indented run of lines after the header at `index`.

    The body ends at the first non-blank line with no leading whitespace;
    `resume_index` points at that line (or past the end of the script).
    """
    end = index + 1
    while end < len(lines) and is_body_line(lines[end]):
        end += 1

    body = tuple((number + 1, lines[number].lstrip()) for number in range(index + 1, end))
    return Block(header=header, body=body, resume_index=end)
