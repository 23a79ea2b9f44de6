from turtle_dojo.domains.turtle.blocks import indentation, is_body_line, scan_block
from turtle_dojo.domains.turtle.interpreter import LoopHeader


class TestBlockScanner:
    def test_body_stops_at_first_unindented_line(self) -> None:
        lines = ["for i in range(2):", "    forward(1)", "", "\tright(90)", "forward(2)"]
        block = scan_block(lines, 0, LoopHeader("i", 2))
        assert block.header.count == 2
        assert block.body == ((2, "forward(1)"), (3, ""), (4, "right(90)"))
        assert block.resume_index == 4

    def test_block_at_end_of_script(self) -> None:
        lines = ["forward(1)", "for i in range(3):", "  left(10)", "  forward(5)"]
        block = scan_block(lines, 1, LoopHeader("i", 3))
        assert block.body == ((3, "left(10)"), (4, "forward(5)"))
        assert block.resume_index == len(lines)

    def test_empty_body(self) -> None:
        lines = ["for i in range(3):", "forward(5)"]
        block = scan_block(lines, 0, LoopHeader("i", 3))
        assert block.body == ()
        assert block.resume_index == 1

    def test_any_consistent_indent(self) -> None:
        lines = ["for i in range(1):", "        forward(1)", "        left(2)"]
        block = scan_block(lines, 0, LoopHeader("i", 1))
        assert [text for _, text in block.body] == ["forward(1)", "left(2)"]

    def test_indentation(self) -> None:
        assert indentation("forward(1)") == 0
        assert indentation("  \tforward(1)") == 3
        assert is_body_line("")
        assert is_body_line("   ")
        assert is_body_line("\tx")
        assert not is_body_line("x")
