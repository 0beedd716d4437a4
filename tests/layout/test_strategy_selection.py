"""
Tests for automatic strategy selection.
"""

import pytest

from copybook_toolkit.core.errors import InvalidConfigurationError
from copybook_toolkit.core.models.content import Paragraph, ParagraphType, StructuredContent
from copybook_toolkit.layout.config import LayoutConfig, StrategyKind
from copybook_toolkit.layout.strategies import (
    CenterAlignedStrategy,
    GridStandardStrategy,
    calculate_layout,
    detect_strategy,
    get_strategy,
    uniform_line_length,
)


def _single(paragraph_type, *lines):
    return StructuredContent(paragraphs=(Paragraph(paragraph_type, lines),))


class TestDetectStrategy:
    def test_empty_content_then_grid(self):
        assert detect_strategy(StructuredContent.empty()) is StrategyKind.GRID_STANDARD

    def test_single_line_then_grid(self):
        content = _single(ParagraphType.MAIN, "这是一段很长很长的单行文字没有任何换行")

        assert detect_strategy(content) is StrategyKind.GRID_STANDARD

    def test_uniform_short_lines_then_grid(self, poem_content):
        assert detect_strategy(poem_content) is StrategyKind.GRID_STANDARD

    def test_all_empty_lines_then_grid(self):
        content = _single(ParagraphType.MAIN, "", "", "")

        assert uniform_line_length(content) == 0
        assert detect_strategy(content) is StrategyKind.GRID_STANDARD

    def test_empty_lines_with_line_length_detection_keep_capacity_wrap(self):
        content = _single(ParagraphType.MAIN, "", "")

        result = calculate_layout(content, LayoutConfig(rows=5, cols=2, detect_line_length=True))

        assert result.strategy is StrategyKind.GRID_STANDARD
        assert result.item_count == 0

    def test_uniform_long_lines_then_flow(self):
        content = _single(ParagraphType.MAIN, "一二三四五六七八九十甲乙", "一二三四五六七八九十甲乙")

        assert detect_strategy(content) is StrategyKind.FLOW_VARYING

    def test_irregular_main_text_then_flow(self):
        content = _single(ParagraphType.MAIN, "寻寻觅觅", "冷冷清清，凄凄惨惨戚戚")

        assert detect_strategy(content) is StrategyKind.FLOW_VARYING

    def test_irregular_text_with_preface_first_then_center(self):
        content = StructuredContent(paragraphs=(
            Paragraph(ParagraphType.PREFACE, ("序", "丙辰中秋，欢饮达旦")),
            Paragraph(ParagraphType.MAIN, ("明月几时有",)),
        ))

        assert detect_strategy(content) is StrategyKind.CENTER_ALIGNED


class TestStrategyRegistry:
    def test_get_strategy_returns_shared_instances(self):
        assert isinstance(get_strategy(StrategyKind.GRID_STANDARD), GridStandardStrategy)
        assert get_strategy("center") is get_strategy(StrategyKind.CENTER_ALIGNED)
        assert isinstance(get_strategy("center"), CenterAlignedStrategy)

    def test_get_strategy_when_unknown_then_raises(self):
        with pytest.raises(InvalidConfigurationError):
            get_strategy("mosaic")

    def test_calculate_layout_detects_when_not_given(self):
        content = _single(ParagraphType.MAIN, "寻寻觅觅", "冷冷清清，凄凄惨惨戚戚")

        result = calculate_layout(content, LayoutConfig(rows=8, cols=8))

        assert result.strategy is StrategyKind.FLOW_VARYING

    def test_every_strategy_places_every_character(self, poem_content):
        for kind in StrategyKind:
            result = calculate_layout(poem_content, LayoutConfig(rows=10, cols=10), kind)

            assert result.item_count == poem_content.char_count
            assert result.strategy is kind

    def test_empty_content_never_raises(self):
        for kind in StrategyKind:
            result = calculate_layout(StructuredContent.empty(), LayoutConfig(), kind)

            assert result.item_count <= 1
