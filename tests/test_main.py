"""Tests for entry point helpers."""

from frame_notes.main import block_type_for, default_block_id, load_or_create_block
from frame_notes.models.block import BlockType, DrawableBlock
from frame_notes.models.stroke import PaintStroke, Point


class TestBlockResolution:

    def test_block_type_from_suffix(self):
        assert block_type_for("clip.MP4") is BlockType.VIDEO
        assert block_type_for("clip.webm") is BlockType.VIDEO
        assert block_type_for("still.png") is BlockType.IMAGE

    def test_default_block_id_is_stable_and_valid(self, tmp_path):
        path = str(tmp_path / "still.png")
        block_id = default_block_id(path)
        assert block_id == default_block_id(path)
        assert block_id != default_block_id(str(tmp_path / "other.png"))
        assert block_id.isalnum()

    def test_new_block_is_created(self, storage, tmp_path):
        path = str(tmp_path / "still.png")
        block = load_or_create_block(storage, path)
        assert block.content == path
        assert block.drawings == ()
        assert block.id == default_block_id(path)

    def test_stored_block_keeps_drawings(self, storage, tmp_path):
        stroke = PaintStroke(points=(Point(0, 0), Point(5, 5)), color="#ffffff", width=2)
        stored = DrawableBlock(content="old.png", id="note7", drawings=(stroke,))
        storage.save_block(stored)

        path = str(tmp_path / "clip.mov")
        block = load_or_create_block(storage, path, "note7")
        assert block.drawings == (stroke,)
        assert block.content == path
        assert block.block_type is BlockType.VIDEO
