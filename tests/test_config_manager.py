import pytest
from pydantic import ValidationError

from managers.config_manager import ConfigManager
from models.config import DEFAULT_WORDS, LoggingSettings, RotationTiming, RotatingTextSettings
from models.enums import AnimationPhase, LogLevel, TimeSourceKind


DEFAULTS_YAML = """
rotating_text:
  words: [Workplaces, Apartments, Gyms, Businesses]
logging:
  level: INFO
"""


@pytest.fixture
def defaults_file(tmp_path):
    path = tmp_path / "factory_defaults.yaml"
    path.write_text(DEFAULTS_YAML, encoding="utf-8")
    return path


def _manager(tmp_path, defaults_file, text):
    config = tmp_path / "config.yaml"
    config.write_text(text, encoding="utf-8")
    return ConfigManager(config, defaults_file)


class TestConfigManager:

    def test_loads_plain_file(self, tmp_path, defaults_file):
        manager = _manager(tmp_path, defaults_file, """
rotating_text:
  words: [Alpha, Beta]
  time_source: virtual
  timing:
    cycle_duration_ms: 1000
logging:
  level: debug
  use_colors: false
""")
        config = manager.load()

        assert config.rotating_text.words == ["Alpha", "Beta"]
        assert config.rotating_text.time_source == TimeSourceKind.VIRTUAL
        assert config.rotating_text.timing.cycle_duration_ms == 1000
        assert manager.logging.level == LogLevel.DEBUG
        assert manager.logging.use_colors is False

    def test_include_files_merged(self, tmp_path, defaults_file):
        (tmp_path / "words.yaml").write_text("rotating_text:\n  words: [One, Two, Three]\n", encoding="utf-8")
        (tmp_path / "log.yaml").write_text("logging:\n  level: WARN\n", encoding="utf-8")

        manager = _manager(tmp_path, defaults_file, "include:\n  - words.yaml\n  - log.yaml\n")
        manager.load()

        assert manager.rotating_text.words == ["One", "Two", "Three"]
        assert manager.logging.level == LogLevel.WARN

    def test_invalid_config_falls_back_to_defaults(self, tmp_path, defaults_file):
        manager = _manager(tmp_path, defaults_file, """
rotating_text:
  words: []
""")
        manager.load()

        assert manager.rotating_text.words == list(DEFAULT_WORDS)

    def test_missing_config_falls_back_to_defaults(self, tmp_path, defaults_file):
        manager = ConfigManager(tmp_path / "missing.yaml", defaults_file)
        manager.load()

        assert manager.rotating_text.words == list(DEFAULT_WORDS)

    def test_non_mapping_falls_back_to_defaults(self, tmp_path, defaults_file):
        manager = _manager(tmp_path, defaults_file, "- just\n- a list\n")
        manager.load()

        assert manager.rotating_text.words == list(DEFAULT_WORDS)

    def test_broken_defaults_raise(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml", tmp_path / "also_missing.yaml")
        with pytest.raises(OSError):
            manager.load()

    def test_config_before_load_raises(self, tmp_path, defaults_file):
        with pytest.raises(RuntimeError):
            ConfigManager(tmp_path / "config.yaml", defaults_file).config

    def test_bundled_config_loads(self):
        config = ConfigManager().load()
        assert config.rotating_text.words == list(DEFAULT_WORDS)


class TestRotationTiming:

    def test_default_split(self):
        durations = RotationTiming().phase_durations()
        assert durations == {
            AnimationPhase.VISIBLE: 2400.0,
            AnimationPhase.EXITING: 300.0,
            AnimationPhase.ENTERING: 300.0,
        }

    def test_windows_sum_to_cycle(self):
        timing = RotationTiming(cycle_duration_ms=1234, visible_ratio=0.7, exiting_ratio=0.2, entering_ratio=0.1)
        assert sum(timing.phase_durations().values()) == pytest.approx(1234)

    def test_odd_cycle_length_windows_are_exact(self):
        durations = RotationTiming(cycle_duration_ms=7).phase_durations()
        assert durations == {
            AnimationPhase.VISIBLE: 5.6,
            AnimationPhase.EXITING: 0.7,
            AnimationPhase.ENTERING: 0.7,
        }

    def test_ratios_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            RotationTiming(visible_ratio=0.8, exiting_ratio=0.2, entering_ratio=0.2)

    @pytest.mark.parametrize("duration", [0, -5])
    def test_cycle_duration_positive(self, duration):
        with pytest.raises(ValidationError):
            RotationTiming(cycle_duration_ms=duration)


class TestSettings:

    def test_words_stripped(self):
        assert RotatingTextSettings(words=["  Gyms "]).words == ["Gyms"]

    def test_blank_word_rejected(self):
        with pytest.raises(ValidationError):
            RotatingTextSettings(words=["Gyms", "  "])

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")
