"""Tests for persisted stroke records."""

import json

import pytest

from frame_notes.drawover.stroke_serializer import (
    AnnotationFormatError, annotation_set_from_list, annotation_set_to_list,
    scale_stroke, stroke_from_dict, stroke_to_dict
)
from frame_notes.models.stroke import EraseStroke, PaintStroke, Point


def _points(*coords):
    return tuple(Point(x, y) for x, y in coords)


class TestStrokeRecords:

    def test_paint_record_shape(self):
        stroke = PaintStroke(points=_points((10, 10), (10, 50)), color="#22d3ee", width=3)
        assert stroke_to_dict(stroke) == {
            'points': [{'x': 10, 'y': 10}, {'x': 10, 'y': 50}],
            'color': '#22d3ee',
            'width': 3,
        }

    def test_erase_record_uses_eraser_tag(self):
        stroke = EraseStroke(points=_points((0, 0), (5, 5)), width=6)
        record = stroke_to_dict(stroke)
        assert record['color'] == 'eraser'
        assert record['width'] == 6

    def test_records_are_json_serializable(self):
        strokes = (
            PaintStroke(points=_points((0.5, 1.5), (2, 3)), color="#e879f9", width=2),
            EraseStroke(points=_points((0, 0), (5, 5)), width=6),
        )
        decoded = annotation_set_from_list(json.loads(json.dumps(annotation_set_to_list(strokes))))
        assert decoded == strokes

    def test_eraser_tag_decodes_to_erase_stroke(self):
        stroke = stroke_from_dict({'points': [[0, 0], [3, 4]], 'color': 'eraser', 'width': 5})
        assert isinstance(stroke, EraseStroke)
        assert stroke.points == _points((0, 0), (3, 4))

    def test_missing_width_uses_default(self):
        stroke = stroke_from_dict({'points': [[0, 0], [3, 4]], 'color': '#ffffff'})
        assert stroke.width == 3

    @pytest.mark.parametrize("record", [
        "not a mapping",
        {'color': '#ffffff', 'width': 3},
        {'points': [[0, 0], [1, 1]], 'color': '#ffffff', 'width': 0},
        {'points': [[0, 0], [1, 1]], 'color': '#ffffff', 'width': True},
        {'points': [[0, 0], [1, 1]], 'color': '#ffffff', 'width': float('nan')},
        {'points': [[0, 0], [1, 1]], 'color': '#ffffff', 'width': float('inf')},
        {'points': [[0, 0], [1, 1]], 'color': '', 'width': 3},
        {'points': [[0, 0], ['a', 1]], 'color': '#ffffff', 'width': 3},
        {'points': [[0, 0], [True, 1]], 'color': '#ffffff', 'width': 3},
        {'points': [[0, 0], [float('nan'), 1]], 'color': '#ffffff', 'width': 3},
        {'points': [[0, 0], 7], 'color': '#ffffff', 'width': 3},
    ])
    def test_malformed_records_raise(self, record):
        with pytest.raises(AnnotationFormatError):
            stroke_from_dict(record)


class TestAnnotationSetRecords:

    def test_none_is_empty(self):
        assert annotation_set_from_list(None) == ()

    def test_empty_list_round_trip(self):
        assert annotation_set_to_list(()) == []
        assert annotation_set_from_list([]) == ()

    def test_malformed_entries_are_skipped(self):
        data = [
            {'points': [[0, 0], [1, 1]], 'color': '#ffffff', 'width': 2},
            {'points': 'broken'},
            {'points': [[0, 0], [9, 9]], 'color': 'eraser', 'width': 2},
        ]
        result = annotation_set_from_list(data)
        assert len(result) == 2
        assert isinstance(result[1], EraseStroke)

    def test_strict_mode_raises(self):
        with pytest.raises(AnnotationFormatError):
            annotation_set_from_list([{'points': 'broken'}], strict=True)
        with pytest.raises(AnnotationFormatError):
            annotation_set_from_list({'points': []}, strict=True)

    def test_non_finite_width_from_json_is_skipped(self):
        data = json.loads(
            '[{"points": [{"x": 1, "y": 1}, {"x": 50, "y": 50}], "color": "#22d3ee", "width": NaN},'
            ' {"points": [[0, 0], [9, 9]], "color": "#22d3ee", "width": Infinity}]'
        )
        assert annotation_set_from_list(data) == ()

    def test_non_list_is_ignored(self):
        assert annotation_set_from_list({'points': []}) == ()

    def test_single_point_strokes_are_dropped(self):
        data = [{'points': [[4, 4]], 'color': '#ffffff', 'width': 2}]
        assert annotation_set_from_list(data) == ()

    def test_order_is_preserved(self):
        data = [
            {'points': [[0, 0], [1, 1]], 'color': c, 'width': 2}
            for c in ('#22d3ee', '#fb7185', '#facc15')
        ]
        colors = [s.color for s in annotation_set_from_list(data)]
        assert colors == ['#22d3ee', '#fb7185', '#facc15']


class TestScaleStroke:

    def test_identity_returns_same_stroke(self):
        stroke = PaintStroke(points=_points((1, 1), (2, 2)), color="#ffffff", width=3)
        assert scale_stroke(stroke, 1.0, 1.0) is stroke

    def test_scales_points_and_width(self):
        stroke = EraseStroke(points=_points((10, 20), (30, 40)), width=4)
        scaled = scale_stroke(stroke, 2.0, 0.5)
        assert isinstance(scaled, EraseStroke)
        assert scaled.points == _points((20, 10), (60, 20))
        assert scaled.width == 2.0
