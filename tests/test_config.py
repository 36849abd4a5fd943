"""Tests for config loading and the timing table."""

import pytest
from pydantic import ValidationError

from anagrama.config import Config, TimingConfig, load_config


class TestTimingConfig:
    def test_defaults_sum_to_total(self):
        timing = TimingConfig()
        assert timing.durations() == [2.5, 0.5, 8.0, 0.5, 1.5, 2.0]
        assert timing.total == pytest.approx(15.0)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            TimingConfig(move=-1)

    def test_zero_durations_allowed(self):
        timing = TimingConfig(
            display_initial=0, normalize=0, move=0, transition=0, denormalize=0, display_final=0,
        )
        assert timing.total == 0


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.yaml")
        assert config == Config()

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "timing:\n"
            "  move: 4\n"
            "engine:\n"
            "  arc_cap: 12\n"
            "content:\n"
            "  default_text_set: listen-silent\n"
        )
        config = load_config(path)
        assert config.timing.move == 4
        assert config.timing.normalize == 0.5
        assert config.engine.arc_cap == 12
        assert config.content.default_text_set == "listen-silent"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_relative_texts_dir_resolves_to_project(self):
        config = Config()
        resolved = config.content.resolved_texts_dir
        assert resolved.is_absolute()
        assert resolved.name == "texts"

    def test_absolute_texts_dir_kept(self, tmp_path):
        config = Config(content={"texts_dir": str(tmp_path)})
        assert config.content.resolved_texts_dir == tmp_path
