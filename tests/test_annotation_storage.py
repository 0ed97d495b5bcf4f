"""Tests for AnnotationStorage records and the PNG cache."""

import json

import pytest

from frame_notes.drawover.stroke_serializer import AnnotationFormatError
from frame_notes.models.block import BlockType, DrawableBlock
from frame_notes.models.stroke import EraseStroke, PaintStroke, Point
from frame_notes.services.annotation_storage import block_from_record, block_to_record


def _block(block_id="clip01", drawings=()):
    block = DrawableBlock(content="/media/clip.mp4", block_type=BlockType.VIDEO, id=block_id)
    block.replace_drawings(drawings, canvas_size=(200, 120))
    return block


def _strokes():
    return (
        PaintStroke(points=(Point(10, 50), Point(190, 50)), color="#e879f9", width=4),
        EraseStroke(points=(Point(100, 10), Point(100, 110)), width=3),
    )


class TestRecords:

    def test_record_layout(self):
        record = block_to_record(_block(drawings=_strokes()))
        assert record['block_id'] == "clip01"
        assert record['type'] == "video"
        assert record['canvas_size'] == [200, 120]
        assert [d['color'] for d in record['drawings']] == ["#e879f9", "eraser"]

    def test_record_round_trip(self):
        block = _block(drawings=_strokes())
        restored = block_from_record(block_to_record(block))
        assert restored == block

    @pytest.mark.parametrize("record", [
        [],
        {'content': 'x.png'},
        {'block_id': 'a', 'content': 'x.png', 'type': 'audio'},
    ])
    def test_bad_records_raise(self, record):
        with pytest.raises(AnnotationFormatError):
            block_from_record(record)

    def test_bad_canvas_size_is_dropped(self):
        record = block_to_record(_block())
        record['canvas_size'] = [0, "tall"]
        assert block_from_record(record).canvas_size is None


class TestSaveLoad:

    def test_save_and_load(self, storage):
        block = _block(drawings=_strokes())
        assert storage.save_block(block)

        loaded = storage.load_block("clip01")
        assert loaded.drawings == block.drawings
        assert loaded.canvas_size == (200, 120)
        assert loaded.block_type is BlockType.VIDEO

    def test_save_replaces_drawings_wholesale(self, storage):
        block = _block(drawings=_strokes())
        storage.save_block(block)
        block.replace_drawings(_strokes()[:1])
        storage.save_block(block)
        assert len(storage.load_block("clip01").drawings) == 1

    def test_created_at_is_preserved(self, storage):
        block = _block()
        storage.save_block(block)
        created = json.loads(storage.get_record_path("clip01").read_text())['created_at']
        storage.save_block(block)
        record = json.loads(storage.get_record_path("clip01").read_text())
        assert record['created_at'] == created
        assert record['modified_at'] >= created

    def test_missing_block_loads_none(self, storage):
        assert storage.load_block("nothing") is None

    def test_corrupt_file_loads_none(self, storage):
        storage.get_record_path("broken").write_text("{not json", encoding="utf-8")
        assert storage.load_block("broken") is None

    def test_malformed_strokes_are_skipped(self, storage):
        record = block_to_record(_block(drawings=_strokes()))
        record['drawings'].append({'points': 'garbage'})
        storage.get_record_path("clip01").write_text(json.dumps(record), encoding="utf-8")
        assert len(storage.load_block("clip01").drawings) == 2

    def test_non_finite_width_record_loads_and_renders(self, storage, qapp):
        record = block_to_record(_block(drawings=_strokes()))
        record['drawings'][0]['width'] = float('nan')
        storage.get_record_path("clip01").write_text(json.dumps(record), encoding="utf-8")

        loaded = storage.load_block("clip01")
        assert [type(s) for s in loaded.drawings] == [EraseStroke]
        assert storage.render_to_png("clip01", (200, 120)) is not None

    @pytest.mark.parametrize("block_id", ["../escape", "a/b", "", "name.json", "abc\n"])
    def test_invalid_ids_are_rejected(self, storage, block_id):
        with pytest.raises(ValueError):
            storage.get_record_path(block_id)

    def test_list_has_and_delete(self, storage):
        storage.save_block(_block("b", _strokes()))
        storage.save_block(_block("a"))

        assert storage.list_blocks() == ["a", "b"]
        assert storage.has_drawings("b")
        assert not storage.has_drawings("a")

        assert storage.delete_block("b")
        assert storage.list_blocks() == ["a"]
        assert not storage.has_drawings("b")


class TestPngCache:

    def test_render_to_png(self, storage, qapp):
        storage.save_block(_block(drawings=_strokes()))
        png = storage.render_to_png("clip01", (200, 120))
        assert png is not None and png.exists()
        assert png.name == "clip01_200x120.png"

    def test_cached_png_is_reused(self, storage, qapp):
        storage.save_block(_block(drawings=_strokes()))
        first = storage.render_to_png("clip01", (100, 60))
        stamp = first.stat().st_mtime_ns
        second = storage.render_to_png("clip01", (100, 60))
        assert second == first
        assert second.stat().st_mtime_ns == stamp

    def test_save_invalidates_cache(self, storage, qapp):
        block = _block(drawings=_strokes())
        storage.save_block(block)
        png = storage.render_to_png("clip01", (100, 60))
        storage.save_block(block)
        assert not png.exists()

    def test_other_block_caches_survive(self, storage, qapp):
        storage.save_block(_block("clip", _strokes()))
        storage.save_block(_block("clip_b", _strokes()))
        other = storage.render_to_png("clip_b", (50, 30))
        storage.save_block(_block("clip", _strokes()))
        assert other.exists()

    def test_missing_block_has_no_png(self, storage, qapp):
        assert storage.render_to_png("nothing", (10, 10)) is None
