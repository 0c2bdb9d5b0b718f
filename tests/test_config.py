"""Tests for configuration loading."""

from swipestats_pipeline.config import DEFAULT_TINDER_OPTIONAL_SECTIONS, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.default_granularity == "weekly"
        assert settings.fill_gaps is False
        assert settings.tinder_optional_sections == DEFAULT_TINDER_OPTIONAL_SECTIONS
        assert settings.warning_sample_size == 5
        assert settings.resolved_log_level() == "INFO"
        assert settings.output_dir.as_posix() == "output"

    def test_from_yaml_missing_file(self, tmp_path):
        settings = Settings.from_yaml(tmp_path / "nonexistent.yaml")
        assert settings.default_granularity == "weekly"

    def test_from_yaml_with_overrides(self, tmp_path):
        config_file = tmp_path / "test.yaml"
        config_file.write_text("default_granularity: monthly\nfill_gaps: true\n")
        settings = Settings.from_yaml(config_file, warning_sample_size=2)
        assert settings.default_granularity == "monthly"
        assert settings.fill_gaps is True
        assert settings.warning_sample_size == 2

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SWIPESTATS_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.resolved_log_level() == "DEBUG"

    def test_unknown_log_level_falls_back_to_info(self):
        settings = Settings(log_level="chatty")
        assert settings.resolved_log_level() == "INFO"
