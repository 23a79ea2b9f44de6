import pytest

from turtle_dojo.domains.turtle.engine import execute
from turtle_dojo.render import compute_bounds, render_svg, trace_to_polylines, write_svg


class TestPolylines:
    def test_square_is_one_polyline(self) -> None:
        result = execute("for i in range(4):\n    forward(100)\n    right(90)")
        polylines = trace_to_polylines(result.steps)
        assert len(polylines) == 1
        points = polylines[0].points
        assert len(points) == 5
        assert points[2] == pytest.approx((100.0, 100.0))

    def test_pen_up_splits(self) -> None:
        result = execute("forward(10)\npenup()\nforward(10)\npendown()\nforward(10)")
        polylines = trace_to_polylines(result.steps)
        assert len(polylines) == 2
        assert polylines[1].points[0] == pytest.approx((0.0, 20.0), abs=1e-9)

    def test_color_change_splits(self) -> None:
        result = execute("forward(10)\npencolor('red')\nforward(10)")
        polylines = trace_to_polylines(result.steps)
        assert [polyline.color for polyline in polylines] == ["#34d399", "red"]

    def test_no_movement(self) -> None:
        assert trace_to_polylines(execute("left(90)").steps) == []

    def test_bounds(self) -> None:
        result = execute("forward(10)\nright(90)\nforward(20)")
        min_x, min_y, max_x, max_y = compute_bounds(result.steps)
        assert min_x == pytest.approx(0.0, abs=1e-9)
        assert min_y == 0
        assert max_x == pytest.approx(20.0)
        assert max_y == pytest.approx(10.0)


class TestSvg:
    def test_empty_trace_still_renders(self) -> None:
        svg = render_svg(execute(""))
        assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<circle" in svg
        assert "<polyline" not in svg
        assert 'viewBox="-20 -20 40 40"' in svg

    def test_partial_trace_on_error(self) -> None:
        svg = render_svg(execute("forward(50)\nforward(x)"))
        assert svg.count("<polyline") == 1

    def test_title_is_escaped(self) -> None:
        svg = render_svg(execute("forward(1)"), title="a < b & c")
        assert "<title>a &lt; b &amp; c</title>" in svg

    def test_write_svg(self, tmp_path) -> None:
        out = tmp_path / "nested" / "square.svg"
        write_svg(execute("forward(10)"), str(out))
        assert out.read_text(encoding="utf-8").rstrip().endswith("</svg>")
