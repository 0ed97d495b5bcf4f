"""Tests for the compositing routine."""

import numpy as np
import pytest

from frame_notes.config import Config
from frame_notes.drawover.stroke_renderer import (
    CompositeMode, composite_segment, composite_strokes, create_surface,
    render_annotation_set, style_for_stroke, style_for_tool
)
from frame_notes.models.stroke import EraseStroke, PaintStroke, Point
from frame_notes.models.tool import DrawingTool
from frame_notes.utils.image_utils import image_to_array

from .pixels import alpha_at, color_at, is_fully_transparent


def _points(*coords):
    return tuple(Point(x, y) for x, y in coords)


def _paint(coords, color="#22d3ee", width=3):
    return PaintStroke(points=_points(*coords), color=color, width=width)


def _erase(coords, width=3):
    return EraseStroke(points=_points(*coords), width=width)


@pytest.fixture
def surface(qapp):
    return create_surface(200, 120)


class TestStyles:

    def test_paint_style(self):
        style = style_for_stroke(_paint([(0, 0), (1, 1)], color="#fb7185", width=5))
        assert style.mode is CompositeMode.PAINT
        assert style.thickness == 5
        assert style.color == "#fb7185"
        assert style.glow_blur == Config.GLOW_BLUR

    def test_erase_style_has_no_glow(self):
        style = style_for_stroke(_erase([(0, 0), (1, 1)], width=5))
        assert style.mode is CompositeMode.ERASE
        assert style.glow_blur == 0

    def test_live_and_replay_eraser_thickness_match(self):
        live = style_for_tool(DrawingTool.ERASER, "#22d3ee", 5)
        replay = style_for_stroke(_erase([(0, 0), (1, 1)], width=5))
        assert live == replay
        assert live.thickness == 5 * Config.ERASER_WIDTH_MULTIPLIER

    def test_live_pen_style_matches_replay(self):
        live = style_for_tool(DrawingTool.PEN, "#a78bfa", 4)
        replay = style_for_stroke(_paint([(0, 0), (1, 1)], color="#a78bfa", width=4))
        assert live == replay


class TestSurfaces:

    def test_new_surface_is_transparent(self, surface):
        assert (surface.width(), surface.height()) == (200, 120)
        assert is_fully_transparent(surface)

    def test_unmeasured_surface_uses_default_size(self, qapp):
        surface = create_surface(None, None)
        assert (surface.width(), surface.height()) == (
            Config.DEFAULT_SURFACE_WIDTH, Config.DEFAULT_SURFACE_HEIGHT
        )

    def test_collapsed_surface_uses_default_size(self, qapp):
        surface = create_surface(0, 300)
        assert surface.width() == Config.DEFAULT_SURFACE_WIDTH


class TestCompositeStrokes:

    def test_empty_set_leaves_surface_transparent(self, surface):
        assert composite_strokes(surface, ()) == 0
        assert is_fully_transparent(surface)

    def test_paint_stroke_is_opaque_palette_color(self, surface):
        composite_strokes(surface, [_paint([(10, 50), (190, 50)])])
        assert alpha_at(surface, 100, 50) == 255
        assert color_at(surface, 100, 50) == "#22d3ee"

    def test_glow_halo_surrounds_stroke(self, surface):
        composite_strokes(surface, [_paint([(10, 50), (190, 50)])])
        halo = alpha_at(surface, 100, 54)
        assert 0 < halo < 255
        assert alpha_at(surface, 100, 90) == 0

    def test_continuous_through_joins(self, surface):
        composite_strokes(surface, [_paint([(10, 10), (10, 50), (50, 50)])])
        for x, y in [(10, 30), (10, 49), (10, 50), (11, 50), (30, 50)]:
            assert alpha_at(surface, x, y) == 255, (x, y)

    def test_later_strokes_paint_on_top(self, surface):
        horizontal = _paint([(10, 50), (190, 50)], color="#fb7185", width=6)
        vertical = _paint([(100, 10), (100, 110)], color="#ffffff", width=6)

        composite_strokes(surface, [horizontal, vertical])
        assert color_at(surface, 100, 50) == "#ffffff"

        composite_strokes(surface, [vertical, horizontal])
        assert color_at(surface, 100, 50) == "#fb7185"

    def test_eraser_clears_only_under_its_path(self, surface):
        strokes = [
            _paint([(10, 50), (190, 50)], width=6),
            _erase([(100, 10), (100, 110)], width=3),
        ]
        composite_strokes(surface, strokes)
        assert alpha_at(surface, 100, 50) == 0
        assert alpha_at(surface, 30, 50) == 255
        assert alpha_at(surface, 170, 50) == 255

    def test_erase_then_paint_is_not_commutative(self, surface):
        paint = _paint([(10, 50), (190, 50)], color="#a78bfa", width=6)
        erase = _erase([(10, 50), (190, 50)], width=6)

        composite_strokes(surface, [paint, erase])
        assert alpha_at(surface, 100, 50) == 0

        composite_strokes(surface, [erase, paint])
        assert alpha_at(surface, 100, 50) == 255
        assert color_at(surface, 100, 50) == "#a78bfa"

    def test_eraser_on_empty_surface_stays_transparent(self, surface):
        composite_strokes(surface, [_erase([(10, 10), (150, 100)], width=10)])
        assert is_fully_transparent(surface)

    def test_paint_after_erase_is_not_erased(self, surface):
        strokes = [
            _paint([(10, 50), (190, 50)], width=6),
            _erase([(10, 50), (190, 50)], width=6),
            _paint([(100, 10), (100, 110)], color="#facc15", width=4),
        ]
        composite_strokes(surface, strokes)
        assert alpha_at(surface, 30, 50) == 0
        assert color_at(surface, 100, 50) == "#facc15"
        assert alpha_at(surface, 100, 50) == 255

    def test_redraw_is_idempotent(self, surface):
        strokes = [
            _paint([(10, 10), (10, 50), (50, 50)], color="#e879f9"),
            _erase([(0, 30), (60, 30)], width=4),
        ]
        composite_strokes(surface, strokes)
        first = image_to_array(surface)
        composite_strokes(surface, strokes)
        second = image_to_array(surface)
        assert np.array_equal(first, second)

    def test_single_point_strokes_are_skipped(self, surface):
        drawn = composite_strokes(surface, [_paint([(10, 10)])])
        assert drawn == 0
        assert is_fully_transparent(surface)

    def test_redraw_clears_previous_content(self, surface):
        composite_strokes(surface, [_paint([(10, 50), (190, 50)])])
        composite_strokes(surface, [])
        assert is_fully_transparent(surface)


class TestCompositeSegment:

    def test_segment_paints_incrementally(self, surface):
        style = style_for_tool(DrawingTool.PEN, "#22d3ee", 3)
        composite_segment(surface, Point(10, 50), Point(60, 50), style)
        assert alpha_at(surface, 30, 50) == 255
        assert alpha_at(surface, 120, 50) == 0

    def test_erase_segment_clears_existing_ink(self, surface):
        composite_strokes(surface, [_paint([(10, 50), (190, 50)], width=6)])
        style = style_for_tool(DrawingTool.ERASER, "#22d3ee", 3)
        composite_segment(surface, Point(100, 10), Point(100, 110), style)
        assert alpha_at(surface, 100, 50) == 0
        assert alpha_at(surface, 30, 50) == 255


class TestRenderAnnotationSet:

    def test_renders_at_requested_size(self, qapp):
        image = render_annotation_set([_paint([(10, 50), (90, 50)])], 100, 100)
        assert (image.width(), image.height()) == (100, 100)
        assert alpha_at(image, 50, 50) == 255

    def test_rescales_from_capture_size(self, qapp):
        stroke = _paint([(10, 50), (90, 50)])
        image = render_annotation_set([stroke], 200, 200, source_size=(100, 100))
        assert alpha_at(image, 100, 100) == 255
        assert alpha_at(image, 100, 50) == 0

    def test_empty_set_renders_transparent(self, qapp):
        assert is_fully_transparent(render_annotation_set((), 64, 48))
