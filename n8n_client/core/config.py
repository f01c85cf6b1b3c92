import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError

ENV_PREFIX = "N8N_CLIENT_"

# Environment variables shared with the provider configuration.
# Credentials stay strings; flags only accept "true".
PROVIDER_ENV_VARS = {
    "N8N_BASE_URL": ("api.base_url", str),
    "N8N_API_KEY": ("api.api_key", str),
    "N8N_EMAIL": ("api.email", str),
    "N8N_PASSWORD": ("api.password", str),
    "N8N_INSECURE_SKIP_VERIFY": ("api.insecure_skip_verify", bool),
    "N8N_USE_SESSION_AUTH": ("api.use_session_auth", bool),
    "N8N_COOKIE_FILE": ("api.cookie_file", str),
}

# Keys kept verbatim when set through N8N_CLIENT_ overrides
STRING_KEYS = frozenset(key for key, kind in PROVIDER_ENV_VARS.values() if kind is str)

class Config:
    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_environment_variables()
        if config_path:
            self.load(config_path)
        self.validate(self._config)

    def _load_defaults(self) -> None:
        """Load default configuration values"""
        self._config = {
            "api": {
                "base_url": "",
                "api_key": "",
                "email": "",
                "password": "",
                "insecure_skip_verify": False,
                "timeout": 30.0,
                "use_session_auth": False,
                "cookie_file": ""
            },
            "retry": {
                "max_retries": 3,
                "base_delay": 0.1,
                "max_delay": 5.0
            },
            "logging": {
                "level": "INFO",
                "file": "",
                "console_output": True,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "max_size": 1024 * 1024,
                "backup_count": 3
            }
        }

    def load(self, path: Path) -> None:
        """Load configuration from JSON file"""
        try:
            with open(path, 'r') as f:
                file_config = json.load(f)
                self.update(file_config)
        except Exception as e:
            raise ConfigError(f"Failed to load config from {path}: {str(e)}")

    def save(self, path: Path) -> None:
        """Save configuration to JSON file"""
        with open(path, 'w') as f:
            json.dump(self._config, f, indent=2)

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables"""
        for env_name, (config_key, kind) in PROVIDER_ENV_VARS.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            if kind is bool:
                self.set(config_key, value.lower() == "true")
            else:
                self.set(config_key, value)

        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                # Convert N8N_CLIENT_RETRY_MAX_RETRIES to retry.max_retries
                parts = key[len(ENV_PREFIX):].lower().split('_')
                if len(parts) < 2:
                    continue

                config_key = f"{parts[0]}.{'_'.join(parts[1:])}"
                if config_key in STRING_KEYS:
                    self.set(config_key, value)
                else:
                    self.set(config_key, self._convert_value(value))

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key"""
        try:
            value = self._config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot notation key"""
        keys = key.split('.')
        d = self._config
        for k in keys[:-1]:
            if k not in d:
                d[k] = {}
            d = d[k]
        d[keys[-1]] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with dictionary"""
        def update_recursive(d1, d2):
            for k, v in d2.items():
                if isinstance(v, dict):
                    if k not in d1:
                        d1[k] = {}
                    update_recursive(d1[k], v)
                else:
                    d1[k] = v
            return d1

        update_recursive(self._config, config_dict)

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        if "api" in config:
            api_config = config["api"]
            if "timeout" in api_config and api_config["timeout"] <= 0:
                raise ConfigError("timeout must be positive")
        if "retry" in config:
            retry_config = config["retry"]
            for key in ("max_retries", "base_delay", "max_delay"):
                if key in retry_config and retry_config[key] < 0:
                    raise ConfigError(f"{key} must not be negative")
            base_delay = retry_config.get("base_delay")
            max_delay = retry_config.get("max_delay")
            if base_delay and max_delay and max_delay < base_delay:
                raise ConfigError("max_delay must not be smaller than base_delay")

    @staticmethod
    def _convert_value(value: str) -> Any:
        """Convert string value to appropriate type"""
        # Handle boolean values
        if value.lower() == "true":
            return True
        if value.lower() == "false":
            return False

        # Handle numeric values
        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            # If not a number, return as string
            return value
