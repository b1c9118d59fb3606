"""Configuration loading and validation."""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, fields

from ...domain.exceptions import ConfigurationError
from ...shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_REGION = "ru-central1"
DEFAULT_ENDPOINT = "https://storage.yandexcloud.net"
DEFAULT_MOUNT_BASE = Path("/function/storage")


@dataclass
class TranscoderConfig:
    """Configuration for the transcoding function."""

    # Result naming
    result_prefix: str

    # Object store
    access_key_id: str
    secret_access_key: str
    region: str = DEFAULT_REGION
    endpoint: str = DEFAULT_ENDPOINT

    # Bucket mount
    bucket_mount_name: Optional[str] = None
    mount_base: Path = DEFAULT_MOUNT_BASE

    # Encoder
    ffmpeg_path: str = "./ffmpeg"
    encoder_timeout: Optional[float] = None

    # Local transfer
    temp_dir: Path = Path("/tmp")
    chunk_size: int = 1024 * 1024
    progress_interval: float = 1.0

    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.mount_base = Path(self.mount_base)
        self.temp_dir = Path(self.temp_dir)
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        for name in ("result_prefix", "access_key_id", "secret_access_key"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty")

        if self.chunk_size <= 0:
            raise ConfigurationError(f"Chunk size must be positive, got: {self.chunk_size}")

        if self.progress_interval <= 0:
            raise ConfigurationError(
                f"Progress interval must be positive, got: {self.progress_interval}"
            )

        if self.encoder_timeout is not None and self.encoder_timeout <= 0:
            raise ConfigurationError(
                f"Encoder timeout must be positive, got: {self.encoder_timeout}"
            )


# Environment variable -> config field
ENV_FIELDS = {
    "RESULT_PREFIX": "result_prefix",
    "AWS_KEY_ID": "access_key_id",
    "AWS_SECRET_KEY": "secret_access_key",
    "STORAGE_REGION": "region",
    "STORAGE_ENDPOINT": "endpoint",
    "BUCKET_MOUNT_NAME": "bucket_mount_name",
    "MOUNT_BASE": "mount_base",
    "FFMPEG_PATH": "ffmpeg_path",
    "ENCODER_TIMEOUT_SECONDS": "encoder_timeout",
    "TEMP_DIR": "temp_dir",
    "CHUNK_SIZE": "chunk_size",
    "PROGRESS_INTERVAL": "progress_interval",
    "LOG_LEVEL": "log_level",
}

REQUIRED_ENV = ("RESULT_PREFIX", "AWS_KEY_ID", "AWS_SECRET_KEY")

NUMERIC_FIELDS = {
    "chunk_size": int,
    "encoder_timeout": float,
    "progress_interval": float,
}


class ConfigLoader:
    """Loads configuration from an optional YAML file and environment variables."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            config_path: Optional path to YAML config file (TRANSCODER_CONFIG if None)
        """
        if config_path is None and os.getenv("TRANSCODER_CONFIG"):
            config_path = Path(os.environ["TRANSCODER_CONFIG"])
        self.config_path = config_path
        self._logger = get_logger(__name__)

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> TranscoderConfig:
        """
        Load configuration from file and environment.

        Environment variables take precedence over the config file, and
        overrides take precedence over both.

        Returns:
            TranscoderConfig instance

        Raises:
            ConfigurationError: If a required value is missing or a value is invalid
        """
        config_dict: Dict[str, Any] = {}

        if self.config_path is not None:
            config_dict.update(self._load_from_file(self.config_path))

        config_dict.update(self._load_from_env())

        if overrides:
            for k, v in overrides.items():
                if v is None:
                    continue
                config_dict[k] = v

        for env_name in REQUIRED_ENV:
            field_name = ENV_FIELDS[env_name]
            if config_dict.get(field_name) in (None, ""):
                raise ConfigurationError(f'"{env_name}" variable is required, but not set.')

        valid_fields = {f.name for f in fields(TranscoderConfig)}
        filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}

        for name, cast in NUMERIC_FIELDS.items():
            if name in filtered_config and filtered_config[name] is not None:
                try:
                    filtered_config[name] = cast(filtered_config[name])
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f"Invalid {name} value: {filtered_config[name]!r}"
                    ) from e

        try:
            return TranscoderConfig(**filtered_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_from_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration values from a YAML mapping."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        self._logger.info(f"Loading config from {path}")
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}
        for env_name, field_name in ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value:
                env_config[field_name] = value
        return env_config
