"""
Tests for LayoutConfig validation and derived values.
"""

import pytest

from copybook_toolkit.core.errors import InvalidConfigurationError
from copybook_toolkit.layout.config import (
    UNBOUNDED,
    BorderMode,
    Direction,
    FixedGrid,
    GridOptions,
    LayoutConfig,
    StrategyKind,
)


class TestLayoutConfigValidation:
    @pytest.mark.parametrize("kwargs", [
        {"cell_size": 0},
        {"cell_size": -1},
        {"gap": -0.5},
        {"rows": 0},
        {"cols": 0},
        {"line_height": 0},
        {"max_rows": 0},
        {"padding_left": -1},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            LayoutConfig(**kwargs)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            LayoutConfig(rows=0)

    def test_enum_values_as_strings_are_parsed(self):
        config = LayoutConfig(direction="horizontal", border_mode="lines-only")

        assert config.direction is Direction.HORIZONTAL
        assert config.border_mode is BorderMode.LINES_ONLY

    def test_unknown_enum_value_raises(self):
        with pytest.raises(InvalidConfigurationError, match="Invalid Direction"):
            LayoutConfig(direction="diagonal")

    def test_fixed_grid_when_zero_rows_then_raises(self):
        with pytest.raises(InvalidConfigurationError):
            FixedGrid(rows=0, cols=3)


class TestLayoutConfigGaps:
    def test_full_border_uses_gap_on_both_axes(self):
        config = LayoutConfig(gap=3, border_mode=BorderMode.FULL)

        assert (config.row_gap, config.col_gap) == (3, 3)

    def test_lines_only_vertical_keeps_column_gap_only(self):
        config = LayoutConfig(gap=3, border_mode=BorderMode.LINES_ONLY, direction=Direction.VERTICAL)

        assert (config.row_gap, config.col_gap) == (0, 3)

    def test_lines_only_horizontal_keeps_row_gap_only(self):
        config = LayoutConfig(gap=3, border_mode=BorderMode.LINES_ONLY, direction=Direction.HORIZONTAL)

        assert (config.row_gap, config.col_gap) == (3, 0)

    def test_no_border_has_no_gap(self):
        config = LayoutConfig(gap=3, border_mode=BorderMode.NONE)

        assert (config.row_gap, config.col_gap) == (0, 0)


class TestLayoutConfigCapacity:
    def test_fill_capacity_vertical_is_rows_capped_by_max_rows(self):
        assert LayoutConfig(rows=10, cols=4, max_rows=6).fill_capacity == 6

    def test_fill_capacity_horizontal_is_cols(self):
        assert LayoutConfig(rows=10, cols=4, direction=Direction.HORIZONTAL).fill_capacity == 4

    def test_continuous_flow_when_cross_axis_unbounded(self):
        assert LayoutConfig(rows=10, cols=UNBOUNDED).uses_continuous_flow
        assert not LayoutConfig(rows=10, cols=8).uses_continuous_flow

    def test_continuous_flow_explicit_setting_wins(self):
        assert LayoutConfig(rows=10, cols=8, continuous_flow=True).uses_continuous_flow
        assert not LayoutConfig(rows=10, cols=UNBOUNDED, continuous_flow=False).uses_continuous_flow

    def test_line_height_defaults_to_cell_size(self):
        assert LayoutConfig(cell_size=40).effective_line_height == 40


class TestGridOptions:
    def test_to_dict_and_from_dict_preserve_options(self):
        options = GridOptions(
            direction=Direction.HORIZONTAL,
            border_mode=BorderMode.NONE,
            fixed_grid=FixedGrid(rows=5, cols=2),
            smart_snap=False,
        )

        assert GridOptions.from_dict(options.to_dict()) == options


class TestStrategyKind:
    @pytest.mark.parametrize("value,expected", [
        ("grid", StrategyKind.GRID_STANDARD),
        ("flow-varying", StrategyKind.FLOW_VARYING),
        ("CENTER", StrategyKind.CENTER_ALIGNED),
        (StrategyKind.GRID_STANDARD, StrategyKind.GRID_STANDARD),
    ])
    def test_parse_accepts_values_and_aliases(self, value, expected):
        assert StrategyKind.parse(value) is expected

    def test_parse_when_unknown_then_raises(self):
        with pytest.raises(InvalidConfigurationError):
            StrategyKind.parse("spiral")
