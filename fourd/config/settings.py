import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "site.yaml"
ENV_PREFIX = "FOURD__"


class Config:
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self._config = self._load_config()
        self._validate_config()

    def _load_config(self) -> dict:
        with open(self.config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")
        self._apply_env_overrides(config)
        return config

    def _apply_env_overrides(self, config: dict):
        """Apply environment variable overrides to config.

        Env vars format: FOURD__SECTION__KEY=value
        For nested dicts, keep chaining with double underscore:
        FOURD__output__compression_level=6
        """

        def _set_nested_value(d: dict, keys: list, value: str):
            """Set a nested value in dict using list of keys."""
            for key in keys[:-1]:
                if not isinstance(d.get(key), dict):
                    d[key] = {}
                d = d[key]
            d[keys[-1]] = self._convert_value(value)

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            parts = env_key[len(ENV_PREFIX):].lower().split('__')
            if len(parts) < 2:
                continue  # Need at least section and key

            _set_nested_value(config, parts, env_value)

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        if value.lower() in ('null', 'none'):
            return None

        if value.isdigit() or (value.startswith('-') and value[1:].isdigit()):
            return int(value)

        if '.' in value:
            try:
                return float(value)
            except ValueError:
                pass

        # URLs may contain commas in query strings
        if ',' in value and '://' not in value:
            return [self._convert_value(item.strip()) for item in value.split(',')]

        return value

    def _validate_config(self):
        """Validate required configuration sections exist."""
        required_sections = ['project', 'source', 'output', 'logging']
        for section in required_sections:
            if section not in self._config:
                raise ValueError(f"Missing required configuration section: {section}")
        if not self.source_url:
            raise ValueError("Missing required configuration value: source.url")
        try:
            self.compression_level
        except TypeError as e:
            raise ValueError(f"output.compression_level must be an integer: {e}") from e

    @staticmethod
    def _text(section: Dict, key: str, default: str) -> str:
        """Free-text value; env overrides may have turned it into a number or list."""
        value = section.get(key, default)
        if value is None:
            return default
        if isinstance(value, list):
            return ', '.join(str(item) for item in value)
        return str(value)

    def override(self, section: str, key: str, value: Any):
        """Set a value from the command line; ``None`` leaves the config untouched."""
        if value is None:
            return
        self._config.setdefault(section, {})[key] = value

    @property
    def project_config(self) -> Dict:
        return self._config.get('project', {})

    @property
    def source_config(self) -> Dict:
        return self._config.get('source', {})

    @property
    def output_config(self) -> Dict:
        return self._config.get('output', {})

    @property
    def logging_config(self) -> Dict:
        return self._config.get('logging', {})

    @property
    def project_name(self) -> str:
        """Workspace directory name, also the archive stem."""
        return self._text(self.project_config, 'name', 'malaysia-4d-interactive')

    @property
    def title(self) -> str:
        return self._text(self.project_config, 'title', 'Malaysia 4D Interactive Tracker')

    @property
    def short_name(self) -> str:
        return self._text(self.project_config, 'short_name', '4DTracker')

    @property
    def background_color(self) -> str:
        return self._text(self.project_config, 'background_color', '#ffffff')

    @property
    def theme_color(self) -> str:
        return self._text(self.project_config, 'theme_color', '#0d6efd')

    @property
    def cache_name(self) -> str:
        """Service worker cache name."""
        return self._text(self.project_config, 'cache_name', 'malaysia-4d-v3')

    @property
    def source_url(self) -> str:
        return self._text(self.source_config, 'url', '')

    @property
    def source_timeout(self) -> float:
        """Request timeout in seconds (0 = no timeout)."""
        return self.source_config.get('timeout', 0) or 0

    @property
    def user_agent(self) -> str:
        return self._text(self.source_config, 'user_agent', 'malaysia-4d-builder')

    @property
    def root_dir(self) -> Path:
        """Directory in which the workspace is created."""
        return Path(self._text(self.output_config, 'root_dir', '.') or '.')

    @property
    def archive_dir(self) -> Path:
        return Path(self._text(self.output_config, 'archive_dir', '.') or '.')

    @property
    def archive_enabled(self) -> bool:
        return bool(self.output_config.get('archive', True))

    @property
    def compression_level(self) -> int:
        """Deflate level for the archive (9 = maximum)."""
        level = int(self.output_config.get('compression_level', 9))
        if not 0 <= level <= 9:
            raise ValueError(f"output.compression_level must be between 0 and 9, got {level}")
        return level

    @property
    def workspace_dir(self) -> Path:
        return self.root_dir / self.project_name

    @property
    def archive_path(self) -> Path:
        return self.archive_dir / f"{self.project_name}.zip"

    @property
    def log_level(self) -> str:
        return self.logging_config.get('level', 'INFO')

    @property
    def log_file(self) -> Optional[str]:
        return self.logging_config.get('file')

    @property
    def log_max_size_mb(self) -> int:
        return self.logging_config.get('max_size_mb', 10)

    @property
    def log_backup_count(self) -> int:
        return self.logging_config.get('backup_count', 3)
