"""Tests for the attribute-to-class mapping functions."""

import pytest

from jsonui.codegen import tailwind
from jsonui.codegen.tailwind import Orientation


class TestNearestKey:
    """Test snapping within a table's range."""

    def test_exact_hit(self):
        assert tailwind.spacing_token("p", 16) == "p-4"

    def test_snaps_to_nearest(self):
        assert tailwind.spacing_token("p", 15) == "p-3.5"
        assert tailwind.spacing_token("p", 17) == "p-4"

    def test_equidistant_values_go_to_the_smaller_key(self):
        # 18 is equidistant from 16 and 20; 52 from 48 and 56
        assert tailwind.nearest_key(18, tailwind.SPACING_SCALE) == 16
        assert tailwind.nearest_key(52, tailwind.SPACING_SCALE) == 48
        assert tailwind.map_font_size(13) == "text-xs"
        assert tailwind.map_corner_radius(10) == "rounded-lg"

    def test_outside_range_is_arbitrary(self):
        assert tailwind.spacing_token("p", 80) == "p-[80px]"
        assert tailwind.map_font_size(72) == "text-[72px]"
        assert tailwind.map_z_index(100) == "z-[100]"
        assert tailwind.map_corner_radius(30) == "rounded-[30px]"

    def test_every_integer_in_spacing_domain_maps_to_one_key(self):
        keys = sorted(tailwind.SPACING_SCALE)
        for value in range(keys[0], keys[-1] + 1):
            assert tailwind.nearest_key(value, tailwind.SPACING_SCALE) in tailwind.SPACING_SCALE

    def test_spacing_is_monotonic(self):
        keys = sorted(tailwind.SPACING_SCALE)
        previous = tailwind.nearest_key(keys[0], tailwind.SPACING_SCALE)
        for value in range(keys[0] + 1, keys[-1] + 1):
            current = tailwind.nearest_key(value, tailwind.SPACING_SCALE)
            assert current >= previous
            assert keys.index(current) - keys.index(previous) <= 1
            previous = current

    def test_float_values(self):
        assert tailwind.map_opacity(0.52) == "opacity-50"
        assert tailwind.map_opacity(0.5) == "opacity-50"

    def test_float_midpoints_tie_to_smaller_key(self):
        assert tailwind.nearest_key(0.55, tailwind.OPACITY_CLASSES) == 0.5
        assert tailwind.map_opacity(0.55) == "opacity-50"
        assert tailwind.map_opacity(0.65) == "opacity-60"
        assert tailwind.map_opacity(0.725) == "opacity-70"


class TestBoxModel:
    """Test padding and margin arrays."""

    def test_uniform(self):
        assert tailwind.map_padding(8) == "p-2"
        assert tailwind.map_padding([8]) == "p-2"

    def test_block_inline_pair(self):
        assert tailwind.map_margin([4, 8]) == "my-1 mx-2"

    def test_four_edges_in_order(self):
        assert tailwind.map_padding([10, 20, 30, 40]) == "pt-2.5 pr-5 pb-7 pl-10"

    def test_other_lengths_are_ignored(self):
        assert tailwind.map_padding([1, 2, 3]) == ""
        assert not tailwind.box_length_valid([1, 2, 3])

    def test_individual_edges(self):
        assert tailwind.map_edges("padding", top=4, left=8) == "pt-1 pl-2"


class TestSizes:
    """Test that sizes are not snapped."""

    def test_keywords(self):
        assert tailwind.map_width("matchParent") == "w-full"
        assert tailwind.map_height("wrapContent") == "h-auto"

    def test_numbers_are_literal(self):
        assert tailwind.map_width(100) == "w-[100px]"
        assert tailwind.map_max_height(40.0) == "max-h-[40px]"

    def test_percentages(self):
        assert tailwind.map_width("50%") == "w-[50%]"

    def test_unknown_values(self):
        assert tailwind.map_width("huge") == ""


class TestColorsAndDepth:
    """Test colors, borders, shadows and flex grow."""

    def test_hex_color_is_arbitrary(self):
        assert tailwind.map_color("#112233") == "bg-[#112233]"
        assert tailwind.map_color("#fff", "text") == "text-[#fff]"

    def test_named_color_uses_palette(self):
        assert tailwind.map_color("blue-500", "border") == "border-blue-500"

    def test_border(self):
        assert tailwind.map_border(1, "#ccc") == "border border-[#ccc]"
        assert tailwind.map_border(3) == "border-2"

    def test_shadow(self):
        assert tailwind.map_shadow(True) == "shadow"
        assert tailwind.map_shadow("lg") == "shadow-lg"
        assert tailwind.map_shadow({"radius": 4, "offsetY": 1, "color": "rgba(0, 0, 0, 0.2)"}) == \
            "[box-shadow:0px_1px_4px_rgba(0,0,0,0.2)]"

    def test_flex_grow(self):
        assert tailwind.map_flex_grow(0) == "grow-0"
        assert tailwind.map_flex_grow(1) == "grow"
        assert tailwind.map_flex_grow(2) == "grow-[2]"

    def test_booleans_are_not_numbers(self):
        assert tailwind.map_opacity(True) == ""


class TestTypography:
    """Test font mapping."""

    def test_font_weight_names_and_numbers(self):
        assert tailwind.map_font_weight("bold") == "font-bold"
        assert tailwind.map_font_weight(600) == "font-semibold"
        assert tailwind.map_font_weight(650) == "font-semibold"

    def test_text_align(self):
        assert tailwind.map_text_align("center") == "text-center"
        assert tailwind.map_text_align("end") == "text-right"


class TestAlignment:
    """Test orientation-aware alignment."""

    def test_direction(self):
        assert tailwind.map_direction("rtl") == "[direction:rtl]"
        assert tailwind.map_direction("leftToRight") == "[direction:ltr]"
        assert tailwind.map_direction("sideways") == ""

    def test_column_gravity(self):
        assert tailwind.map_gravity("centerHorizontal|bottom", Orientation.VERTICAL) == \
            ["items-center", "justify-end"]

    def test_row_gravity_swaps_axes(self):
        assert tailwind.map_gravity("centerHorizontal|bottom", Orientation.HORIZONTAL) == \
            ["items-end", "justify-center"]

    def test_center_sets_both_axes(self):
        assert tailwind.map_gravity("center") == ["items-center", "justify-center"]

    def test_self_alignment_uses_parent_cross_axis(self):
        assert tailwind.map_self_alignment({"alignRight": True}, Orientation.VERTICAL) == "self-end"
        assert tailwind.map_self_alignment({"alignRight": True}, Orientation.HORIZONTAL) == ""
        assert tailwind.map_self_alignment({"alignTop": True}, Orientation.HORIZONTAL) == "self-start"


class TestJoinClasses:
    """Test class token joining."""

    def test_order_preserved_and_deduplicated(self):
        assert tailwind.join_classes("flex flex-col", "", None, "flex", "p-2") == "flex flex-col p-2"

    @pytest.mark.parametrize("tokens,expected", [
        ((), ""),
        (("  ",), ""),
        (("a  b",), "a b"),
    ])
    def test_whitespace(self, tokens, expected):
        assert tailwind.join_classes(*tokens) == expected
