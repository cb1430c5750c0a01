import os
import yaml
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# env var -> (section, key, cast)
ENV_OVERRIDES = {
    "CODEC_DIGEST_ALGORITHM": ("verification", "digest_algorithm", str),
    "CODEC_PREVIEW_BYTES": ("verification", "preview_bytes", int),
    "CODEC_LOG_LEVEL": ("logging", "level", str),
}

class ConfigLoader:
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance.load_config()
        return cls._instance

    def load_config(self, config_path: str = "config/config.yaml"):
        """Load configuration from a YAML file."""
        if not os.path.exists(config_path):
             # Fall back to the config dir next to this module
             base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
             config_path = os.path.join(base_path, "config", "config.yaml")
        
        # If still not found, try example
        if not os.path.exists(config_path):
            example_path = config_path + ".example"
            if os.path.exists(example_path):
                logger.warning(f"Config file not found at {config_path}. Loading example config from {example_path}")
                config_path = example_path
            else:
                raise FileNotFoundError(f"Config file not found at {config_path} or {example_path}")

        with open(config_path, "r") as f:
            self._config = yaml.safe_load(f) or {}
        
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Let environment variables (or .env) override individual settings."""
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is None or value == "":
                continue
            try:
                self._config.setdefault(section, {})[key] = cast(value)
            except ValueError:
                logger.warning(f"Ignoring {env_name}={value!r}: expected {cast.__name__}")

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

# Global accessor
def get_config() -> Dict[str, Any]:
    return ConfigLoader().config
