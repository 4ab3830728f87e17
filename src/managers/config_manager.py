"""
Config Manager

Loads config.yaml (optionally split into modular files via include:) and
validates the merged result into an AppConfig.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from models.config import AppConfig, RotatingTextSettings, LoggingSettings
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Example:
        config = ConfigManager()
        config.load()

        settings = config.rotating_text          # RotatingTextSettings
        durations = settings.timing.phase_durations()
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/config.yaml",
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml"
    ):
        """
        Args:
            config_path: Main config file (relative paths resolve against src/)
            defaults_path: Factory defaults used when the main config is unusable
        """
        self.config_path = self._resolve(config_path)
        self.factory_defaults_path = self._resolve(defaults_path)
        self.data: Dict = {}
        self._config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> AppConfig:
        """
        Load and validate configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Validate into AppConfig
        4. On any failure fall back to factory defaults (a failing fallback raises)
        """
        try:
            self.data = self._read(self.config_path)
            self._config = AppConfig.model_validate(self.data)
            log.info("Configuration loaded", path=str(self.config_path))
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as ex:
            log.error("Failed to load config", path=str(self.config_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read(self.factory_defaults_path)
            self._config = AppConfig.model_validate(self.data)

        settings = self._config.rotating_text
        log.info(
            "Rotating text configured",
            words=len(settings.words),
            cycle_ms=settings.timing.cycle_duration_ms,
            time_source=settings.time_source.value
        )
        return self._config

    def _read(self, path: Path) -> Dict:
        with open(path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f) or {}

        if not isinstance(main_config, dict):
            raise ValueError(f"{path.name} must contain a mapping at top level")

        if "include" in main_config:
            log.debug("Using include-based configuration", path=str(path))
            return self._load_with_includes(main_config["include"], path.parent)
        return main_config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """Load and shallow-merge YAML files in order (later files win)"""
        merged: Dict = {}
        for filename in include_list:
            with open(config_dir / filename, "r", encoding="utf-8") as f:
                file_data = yaml.safe_load(f)
            if file_data:
                merged.update(file_data)
                log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
        return merged

    # ===== Accessors =====

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            raise RuntimeError("ConfigManager.load() has not been called")
        return self._config

    @property
    def rotating_text(self) -> RotatingTextSettings:
        return self.config.rotating_text

    @property
    def logging(self) -> LoggingSettings:
        return self.config.logging
