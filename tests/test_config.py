"""Tests for Config."""

from frame_notes.config import Config


class TestConfig:

    def test_palette(self):
        assert len(Config.NEON_COLORS) == 6
        assert Config.DEFAULT_COLOR in Config.NEON_COLORS
        assert Config.ERASER_TAG not in Config.NEON_COLORS

    def test_is_palette_color(self):
        assert Config.is_palette_color("#22D3EE")
        assert not Config.is_palette_color("eraser")
        assert not Config.is_palette_color("#000000")

    def test_user_dirs_follow_home_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(Config.HOME_ENV_VAR, str(tmp_path / "home"))
        assert Config.get_user_data_dir() == tmp_path / "home"
        assert Config.get_log_dir() == tmp_path / "home" / "logs"
        annotations = Config.get_annotations_dir()
        assert annotations == tmp_path / "home" / "annotations"
        assert annotations.is_dir()
