"""
Configuration management for the centrality engine.
"""

import copy
import os
from typing import Any, Optional
import yaml

DEFAULTS = {
    "engine": {
        "mode": "straight",
        "auto_resolve": True,
    },
    "road": {
        "metric": "distance",
        "base_url": "https://maps.googleapis.com/maps/api/distancematrix/json",
        "timeout": 10,
        "max_elements": 100,
        "max_locations": 25,
        "cache_max_age_seconds": 3600,
    },
    "logging": {
        "verbose": False,
        "use_colors": True,
    },
    "alerting": {
        "enabled": True,
    },
}

API_KEY_ENV = "GOOGLE_MAPS_API_KEY"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class EngineConfig:
    """Configuration with dot notation access, layered over DEFAULTS"""

    def __init__(self, config_path: Optional[str] = None, overrides: Optional[dict] = None):
        loaded = self._load_config(config_path) if config_path else {}
        self._config = _merge(_merge(DEFAULTS, loaded), overrides or {})

    def _load_config(self, path: str) -> dict:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot notation (e.g., 'road.metric')"""
        keys = key.split('.')
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def as_dict(self) -> dict:
        return copy.deepcopy(self._config)

    @property
    def engine(self) -> dict:
        return self._config.get('engine', {})

    @property
    def road(self) -> dict:
        return self._config.get('road', {})

    @property
    def logging(self) -> dict:
        return self._config.get('logging', {})

    @property
    def alerting(self) -> dict:
        return self._config.get('alerting', {})

    @property
    def api_key(self) -> Optional[str]:
        """Distance service key, from the config file or the environment"""
        return self.get('road.api_key') or os.getenv(API_KEY_ENV)


# Singleton instance
_config_instance = None


def get_config(config_path: Optional[str] = None) -> EngineConfig:
    """Get or create config singleton"""
    global _config_instance
    if _config_instance is None or config_path:
        path = config_path or os.getenv('MIDPOINT_CONFIG')
        _config_instance = EngineConfig(path)
    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None
