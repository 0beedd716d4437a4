"""
Tests for the flowing strategies (flow-varying and center-aligned).
"""

import pytest

from copybook_toolkit.core.models.content import Paragraph, ParagraphType, StructuredContent
from copybook_toolkit.layout.config import UNBOUNDED, ColumnOrder, Direction, LayoutConfig
from copybook_toolkit.layout.strategies import CenterAlignedStrategy, FlowVaryingStrategy


def _content(*paragraphs):
    return StructuredContent(
        paragraphs=tuple(Paragraph(type=t, lines=lines) for t, lines in paragraphs)
    )


def _horizontal(cols=4, **kwargs):
    return LayoutConfig(rows=10, cols=cols, cell_size=10, direction=Direction.HORIZONTAL, **kwargs)


class TestFlowVaryingHorizontal:
    def test_lines_centred_within_page_extent(self):
        content = _content((ParagraphType.MAIN, ("一二",)))

        result = FlowVaryingStrategy().calculate(content, _horizontal())

        # extent 40, line width 20 -> offset 10
        assert [(i.x, i.y) for i in result.items] == [(10, 0), (20, 0)]

    def test_long_line_wraps_and_continuation_starts_at_zero(self):
        content = _content((ParagraphType.MAIN, ("一二三", "四五六七八九")))

        result = FlowVaryingStrategy().calculate(content, _horizontal())

        by_char = {i.char: (i.x, i.y) for i in result.items}
        assert by_char["一"] == (5, 0)
        assert by_char["四"] == (0, 10)
        assert by_char["七"] == (30, 10)
        assert by_char["八"] == (0, 20)
        assert result.line_offsets == (0, 10, 20)
        assert result.total_height == 30

    def test_paragraph_spacing_is_half_a_line(self):
        content = _content((ParagraphType.MAIN, ("一二",)), (ParagraphType.MAIN, ("三四",)))

        result = FlowVaryingStrategy().calculate(content, _horizontal())

        assert [i.y for i in result.items] == [0, 0, 15, 15]
        # No spacing after the last paragraph
        assert result.total_height == 25

    def test_small_print_uses_scaled_cells(self):
        content = _content((ParagraphType.NOTE, ("一二",)))

        result = FlowVaryingStrategy().calculate(content, _horizontal())

        first, second = result.items
        assert first.width == pytest.approx(6)
        assert second.x - first.x == pytest.approx(6)
        assert result.total_height == pytest.approx(7)

    def test_unbounded_extent_centres_on_longest_line(self):
        content = _content((ParagraphType.MAIN, ("一二", "三四五六")))

        result = FlowVaryingStrategy().calculate(content, _horizontal(cols=UNBOUNDED))

        assert result.items[0].x == 10
        assert result.items[2].x == 0
        assert result.total_width == 40

    def test_max_rows_truncates_lines(self):
        content = _content((ParagraphType.MAIN, ("一", "二", "三")))

        result = FlowVaryingStrategy().calculate(content, _horizontal(max_rows=2))

        assert [i.char for i in result.items] == ["一", "二"]
        assert result.warnings


class TestFlowVaryingVertical:
    def _config(self, order):
        return LayoutConfig(rows=4, cols=10, cell_size=10, column_order=order)

    def test_right_to_left_puts_first_line_on_the_right(self):
        content = _content((ParagraphType.MAIN, ("一二", "三四")))

        result = FlowVaryingStrategy().calculate(content, self._config(ColumnOrder.RTL))

        by_char = {i.char: (i.x, i.y) for i in result.items}
        assert by_char["一"] == (10, 10)
        assert by_char["二"] == (10, 20)
        assert by_char["三"] == (0, 10)

    def test_left_to_right_puts_first_line_on_the_left(self):
        content = _content((ParagraphType.MAIN, ("一二", "三四")))

        result = FlowVaryingStrategy().calculate(content, self._config(ColumnOrder.LTR))

        by_char = {i.char: i.x for i in result.items}
        assert by_char["一"] == 0
        assert by_char["三"] == 10

    def test_total_size_swaps_axes(self):
        content = _content((ParagraphType.MAIN, ("一二", "三四")))

        result = FlowVaryingStrategy().calculate(content, self._config(ColumnOrder.RTL))

        assert (result.total_width, result.total_height) == (20, 40)


class TestCenterAligned:
    def test_long_line_is_not_wrapped_and_starts_at_edge(self):
        content = _content((ParagraphType.MAIN, ("一二三四五六",)))

        result = CenterAlignedStrategy().calculate(content, _horizontal())

        assert {i.y for i in result.items} == {0}
        assert result.items[0].x == 0

    def test_paragraph_spacing_is_point_eight_of_a_line(self):
        content = _content((ParagraphType.PREFACE, ("一",)), (ParagraphType.MAIN, ("二",)))

        result = CenterAlignedStrategy().calculate(content, _horizontal())

        assert result.items[1].y == pytest.approx(18)

    def test_small_print_scale(self):
        content = _content((ParagraphType.SMALL, ("一",)))

        result = CenterAlignedStrategy().calculate(content, _horizontal())

        assert result.items[0].width == pytest.approx(7)
        assert result.total_height == pytest.approx(8)

    def test_empty_content_then_no_items(self):
        result = CenterAlignedStrategy().calculate(StructuredContent.empty(), _horizontal())

        assert result.is_empty
        assert result.line_offsets == ()

    @pytest.mark.parametrize("strategy", [FlowVaryingStrategy(), CenterAlignedStrategy()])
    def test_line_offsets_never_decrease(self, strategy):
        content = _content(
            (ParagraphType.PREFACE, ("一二三", "四")),
            (ParagraphType.MAIN, ("五六七八九十",)),
            (ParagraphType.NOTE, ("甲乙",)),
        )

        for direction in Direction:
            config = LayoutConfig(rows=4, cols=4, cell_size=10, direction=direction)
            offsets = list(strategy.calculate(content, config).line_offsets)

            assert offsets == sorted(offsets)
