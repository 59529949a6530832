"""Configuration settings for the task tracker."""
import os
from dataclasses import dataclass
from pathlib import Path

HOME_ENV_VAR = "TTRACK_HOME"
LOG_LEVEL_ENV_VAR = "TTRACK_LOG_LEVEL"


@dataclass
class Config:
    """Application configuration settings.

    Centralized configuration to avoid hardcoded values throughout the codebase.
    """
    # File system
    data_filename: str = "tasks.json"
    global_dir: Path = Path("~/.ttrack").expanduser()

    # Logging
    log_level: str = "WARNING"

    def data_file(self, use_global: bool = False) -> Path:
        """
        Resolve the task file location.

        Args:
            use_global: Store under the home directory instead of the
                current working directory

        Returns:
            Path to the JSON task file (relative in local mode)
        """
        if use_global:
            return self.global_dir / self.data_filename
        return Path(self.data_filename)

    @classmethod
    def load(cls) -> 'Config':
        """
        Load configuration, applying environment variable overrides.

        Returns:
            Config instance with default or overridden values
        """
        cfg = cls()
        home = os.environ.get(HOME_ENV_VAR)
        if home:
            cfg.global_dir = Path(home).expanduser()
        log_level = os.environ.get(LOG_LEVEL_ENV_VAR)
        if log_level:
            cfg.log_level = log_level.strip().upper()
        return cfg


# Global config instance
config = Config.load()
