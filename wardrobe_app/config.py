"""Configuration helpers for the Smart Wardrobe app."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Dict, Optional

from logic.prompts import DEFAULT_LANGUAGE

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
STORAGE_BACKENDS = ("json", "sqlite")

# Config keys whose environment variable differs from the upper-cased key.
_ENV_ALIASES = {"api_key": ("GOOGLE_API_KEY", "GEMINI_API_KEY")}
_FLOAT_KEYS = {
    "classification_temperature",
    "recommendation_temperature",
    "request_timeout_seconds",
    "image_fetch_timeout_seconds",
}


@dataclass
class WardrobeConfig:
    """Configuration values for the wardrobe app.

    Model names and temperatures describe the Gemini capabilities; storage
    settings pick the persistence backend holding per-user inventories and
    account records.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    classification_temperature: float = 0.2
    recommendation_temperature: float = 0.7
    request_timeout_seconds: Optional[float] = None
    image_fetch_timeout_seconds: float = 10.0
    response_language: str = DEFAULT_LANGUAGE
    storage_backend: str = "json"
    storage_path: Optional[str] = None
    log_level: str = "INFO"
    environment: str | None = None

    def __post_init__(self) -> None:
        self.storage_backend = self.storage_backend.lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"storage_backend must be one of {STORAGE_BACKENDS}, got {self.storage_backend!r}"
            )
        for name in ("classification_temperature", "recommendation_temperature"):
            value = getattr(self, name)
            if not 0.0 <= value <= 2.0:
                raise ValueError(f"{name} must be between 0 and 2, got {value}")
        if self.request_timeout_seconds is not None and self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if self.image_fetch_timeout_seconds <= 0:
            raise ValueError("image_fetch_timeout_seconds must be positive")

    @classmethod
    def from_env(cls) -> "WardrobeConfig":
        """Build a config from environment variables over an optional YAML file.

        The file is ``APP_CONFIG_PATH`` when set, otherwise
        ``<WARDROBE_CONFIG_DIR>/<APP_ENV>.yaml``. Each key may be overridden by
        its upper-cased environment variable; the API key is read from
        ``GOOGLE_API_KEY`` (or ``GEMINI_API_KEY``) and ``google_api_key`` in
        the file.
        """

        env_name = os.getenv("APP_ENV")
        path = cls._config_path(env_name)
        file_values = cls._load_yaml_config(path) if path and path.exists() else {}
        if "google_api_key" in file_values:
            file_values.setdefault("api_key", file_values.pop("google_api_key"))

        values: Dict[str, object] = {}
        for field in fields(cls):
            if field.name == "environment":
                continue
            raw = cls._lookup(field.name, file_values)
            if raw is None or raw.strip() == "":
                continue
            values[field.name] = float(raw) if field.name in _FLOAT_KEYS else raw.strip()
        return cls(environment=env_name, **values)

    @staticmethod
    def _config_path(env_name: Optional[str]) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments")) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _lookup(key: str, file_values: Dict[str, str]) -> Optional[str]:
        for env_key in _ENV_ALIASES.get(key, (key.upper(),)):
            if env_key in os.environ:
                return os.environ[env_key]
        return file_values.get(key)

    @staticmethod
    def _load_yaml_config(path: Path) -> Dict[str, str]:
        """Parse flat ``key: value`` lines; quotes and trailing comments are stripped."""

        config: Dict[str, str] = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if value[:1] in {'"', "'"} and value.endswith(value[:1]) and len(value) > 1:
                value = value[1:-1]
            elif " #" in value:
                value = value.split(" #", 1)[0].rstrip()
            config[key.strip()] = value
        return config
