"""
Configuration Management for StarMixin

Environment-aware configuration for logging and for the mixin lifecycle.
"""

import logging
import logging.handlers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class LifecycleConfig:
    """Mixin lifecycle configuration"""
    # Replay a refresh that happened inside the view model constructor, before mixins existed
    replay_constructor_refresh: bool = True
    # Disabled modules create no mixins and receive no refreshes
    require_enabled: bool = True


@dataclass
class ExtenderConfig:
    """Complete configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)
    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ExtenderConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ExtenderConfig':
        """Create configuration from dictionary"""
        if "environment" in config_dict:
            config = cls.for_environment(Environment(config_dict["environment"]))
        else:
            config = cls()

        if "debug" in config_dict:
            config.debug = config_dict["debug"]

        for section in ("logging", "lifecycle"):
            target = getattr(config, section)
            for key, value in config_dict.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)

        if "custom" in config_dict:
            config.custom.update(config_dict["custom"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file_path": self.logging.file_path,
                "max_file_size": self.logging.max_file_size,
                "backup_count": self.logging.backup_count
            },
            "lifecycle": {
                "replay_constructor_refresh": self.lifecycle.replay_constructor_refresh,
                "require_enabled": self.lifecycle.require_enabled
            },
            "custom": dict(self.custom)
        }


_config: Optional[ExtenderConfig] = None


def get_config() -> ExtenderConfig:
    """Get the global configuration"""
    global _config
    if _config is None:
        _config = ExtenderConfig()
    return _config


def set_config(config: ExtenderConfig) -> None:
    """Set the global configuration"""
    global _config
    _config = config


def configure_logging(config: Optional[ExtenderConfig] = None) -> logging.Logger:
    """Apply the logging section to the ``starmixin`` logger. ``debug`` forces DEBUG level."""
    config = config or get_config()
    logger = logging.getLogger("starmixin")
    logger.setLevel("DEBUG" if config.debug else config.logging.level.upper())

    formatter = logging.Formatter(config.logging.format)
    if config.logging.file_path:
        handler = logging.handlers.RotatingFileHandler(
            config.logging.file_path,
            maxBytes=config.logging.max_file_size,
            backupCount=config.logging.backup_count,
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    return logger
