"""
Tests for viewport queries over layout results.
"""

import pytest

from copybook_toolkit.core.models.content import Paragraph, ParagraphType, StructuredContent
from copybook_toolkit.layout.config import UNBOUNDED, ColumnOrder, Direction, LayoutConfig, StrategyKind
from copybook_toolkit.layout.models import RenderItem
from copybook_toolkit.layout.strategies import calculate_layout
from copybook_toolkit.layout.viewport import PRE_RENDER_MARGIN, ScrollIndex, get_viewport_items

TEXT = "".join(chr(0x4E00 + i) for i in range(400))


def _irregular_content():
    """Paragraphs of uneven lines drawn from TEXT, with mixed paragraph types."""
    lengths = [3, 17, 8, 25, 5, 12, 30, 9, 14, 21]
    lines, start = [], 0
    while start < len(TEXT):
        size = lengths[len(lines) % len(lengths)]
        lines.append(TEXT[start:start + size])
        start += size
    return StructuredContent(paragraphs=(
        Paragraph(ParagraphType.PREFACE, tuple(lines[:2])),
        Paragraph(ParagraphType.MAIN, tuple(lines[2:20])),
        Paragraph(ParagraphType.NOTE, tuple(lines[20:24])),
        Paragraph(ParagraphType.MAIN, tuple(lines[24:])),
    ))


def _brute_force(items, scroll, view, margin=PRE_RENDER_MARGIN):
    return tuple(i for i in items if scroll - margin <= i.y <= scroll + view + margin)


@pytest.fixture(params=[
    (StrategyKind.GRID_STANDARD, Direction.VERTICAL),
    (StrategyKind.GRID_STANDARD, Direction.HORIZONTAL),
    (StrategyKind.FLOW_VARYING, Direction.VERTICAL),
    (StrategyKind.FLOW_VARYING, Direction.HORIZONTAL),
    (StrategyKind.CENTER_ALIGNED, Direction.VERTICAL),
    (StrategyKind.CENTER_ALIGNED, Direction.HORIZONTAL),
], ids=lambda p: f"{p[0].value}-{p[1].value}")
def layout(request):
    strategy, direction = request.param
    if direction is Direction.VERTICAL:
        # Right-to-left columns: item y restarts at the top of every column
        config = LayoutConfig(rows=20, cols=UNBOUNDED, column_order=ColumnOrder.RTL)
    else:
        config = LayoutConfig(rows=UNBOUNDED, cols=12, direction=Direction.HORIZONTAL)
    if strategy is StrategyKind.GRID_STANDARD:
        content = StructuredContent.from_text(TEXT)
    else:
        content = _irregular_content()
    return calculate_layout(content, config, strategy)


class TestViewport:
    @pytest.mark.parametrize("scroll,view", [(0, 800), (1500, 600), (-300, 200), (10_000, 800)])
    def test_matches_linear_filter(self, layout, scroll, view):
        assert layout.get_viewport_items(scroll, view) == _brute_force(layout.items, scroll, view)

    def test_results_are_in_reading_order(self, layout):
        visible = layout.get_viewport_items(500, 800)

        indices = [item.index for item in visible]
        assert indices == sorted(indices)
        assert visible

    def test_window_bounds_are_inclusive(self):
        items = [RenderItem(char=c, x=0, y=y, row=0, col=0, index=k)
                 for k, (c, y) in enumerate(zip("甲乙丙", (0, 100, 200)))]

        visible = get_viewport_items(items, 100, 0, pre_render_margin=0)

        assert [i.char for i in visible] == ["乙"]

    def test_zero_margin_excludes_items_outside_window(self):
        items = [RenderItem(char="甲", x=0, y=y, row=0, col=0, index=k) for k, y in enumerate(range(0, 1000, 100))]

        visible = get_viewport_items(items, 250, 300, pre_render_margin=0)

        assert [i.y for i in visible] == [300, 400, 500]

    def test_empty_items_then_empty_result(self):
        assert get_viewport_items([], 0, 800) == ()

    def test_prebuilt_index_gives_same_result(self, layout):
        index = ScrollIndex(layout.items)

        assert get_viewport_items(layout.items, 300, 700, index=index) == layout.get_viewport_items(300, 700)
        assert len(index) == layout.item_count
