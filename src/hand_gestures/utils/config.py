"""
Configuration loading.
Reads a YAML file, validates section types and builds typed configs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from ..core.exceptions import ConfigError
from ..detection.hand_detector import HandDetectorConfig
from ..recognition.gesture_buffer import GestureBufferConfig
from ..recognition.gesture_classifier import GestureClassifierConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"

# Schema: known sections and their expected field types
_CONFIG_SCHEMA = {
    "detector": {
        "model_path": str,
        "max_num_hands": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
        "min_presence_confidence": float,
        "running_mode": str,
        "auto_download": bool,
    },
    "recognition": {
        "debug": bool,
    },
    "smoothing": {
        "enabled": bool,
        "buffer_size": int,
        "min_consensus": int,
    },
    "logging": {
        "level": str,
        "file": str,
        "max_size_mb": int,
        "backup_count": int,
    },
}


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3

    @classmethod
    def from_dict(cls, config: dict) -> "LoggingConfig":
        """Create config from dictionary."""
        return cls(
            level=config.get("level", "INFO"),
            file=config.get("file"),
            max_size_mb=config.get("max_size_mb", 10),
            backup_count=config.get("backup_count", 3),
        )


@dataclass
class AppConfig:
    """Application configuration container."""
    detector: HandDetectorConfig = field(default_factory=HandDetectorConfig)
    recognition: GestureClassifierConfig = field(default_factory=GestureClassifierConfig)
    smoothing: GestureBufferConfig = field(default_factory=GestureBufferConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Fields where an empty YAML value means "use the default"
_NULLABLE_FIELDS = {("detector", "model_path"), ("logging", "file")}


def _type_ok(value, expected_type, nullable: bool = False) -> bool:
    if value is None:
        return nullable
    # bool is an int subclass; keep them apart
    if expected_type is not bool and isinstance(value, bool):
        return False
    # Allow int where float is expected
    if expected_type is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected_type)


def validate_config(data: dict) -> None:
    """Check known sections against the schema. Raises ConfigError."""
    errors = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            errors.append(f"Section '{section_name}' should be a mapping, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            nullable = (section_name, field_name) in _NULLABLE_FIELDS
            if field_name in section and not _type_ok(section[field_name], expected_type, nullable):
                value = section[field_name]
                errors.append(
                    f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )

    unknown = set(data) - set(_CONFIG_SCHEMA)
    if unknown:
        logger.warning("Ignoring unknown config sections: %s", ", ".join(sorted(unknown)))

    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors))
    logger.debug("Config validation passed")


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """Load configuration from a YAML file; a missing file yields defaults."""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    validate_config(data)
    logger.info("Loaded config from %s", path)
    return data


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary. Raises ConfigError."""
    validate_config(config_dict)
    try:
        return AppConfig(
            detector=HandDetectorConfig.from_dict(config_dict.get("detector") or {}),
            recognition=GestureClassifierConfig.from_dict(config_dict.get("recognition") or {}),
            smoothing=GestureBufferConfig.from_dict(config_dict.get("smoothing") or {}),
            logging=LoggingConfig.from_dict(config_dict.get("logging") or {}),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
