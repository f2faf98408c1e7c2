"""
ledgerguard Configuration.

Settings are layered: defaults -> YAML file -> environment variables.
Environment variables use the LEDGERGUARD__ prefix, with __ separating
nested keys (LEDGERGUARD__ENCODING=legacy).
"""

import hashlib
import json
import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from .core.encoding import MessageEncoding
from .core.ledger import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LEDGERGUARD__"
ENV_MODE_VAR = "LEDGERGUARD_ENV"


class ValidatorSettings(BaseModel):
    """
    Settings for ledger validation.

    The encoding must match the one the ledger was signed and sealed with.
    """

    encoding: MessageEncoding = MessageEncoding.CANONICAL
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def digest(self) -> str:
        """SHA-256 of the canonical JSON form of these settings."""
        canonical = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ConfigurationLoader:
    def __init__(self, app_name: str = "ledgerguard"):
        self.app_name = app_name
        # Defaults -> File -> Env
        self._config: Dict[str, Any] = {}

    def load(self,
             config_file: Optional[str] = None,
             env_prefix: str = ENV_PREFIX,
             defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:

        # 1. Defaults
        if defaults:
            self._recursive_update(self._config, defaults)

        # 2. File
        if not config_file:
            candidates = [
                f"{self.app_name}.yaml",
                f"/etc/{self.app_name}/config.yaml",
                "config/config.yaml",
            ]
            for c in candidates:
                if os.path.exists(c):
                    config_file = c
                    break
        elif not os.path.exists(config_file):
            raise ConfigurationError(f"Config file {config_file} does not exist")

        if config_file and os.path.exists(config_file):
            self._load_file(config_file)

        # 3. Environment Variables
        self._load_env(env_prefix)

        return self._config

    def _load_file(self, filepath: str):
        # Security check for prod: ensure not world-writable
        if os.getenv(ENV_MODE_VAR, "dev").lower() == "prod":
            st = os.stat(filepath)
            # Check for world-writable bit (S_IWOTH = 0o002)
            if st.st_mode & 0o002:
                raise ConfigurationError(f"Config file {filepath} is world-writable. This is forbidden in production.")

        with open(filepath, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Config file {filepath} is not valid YAML: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {filepath} must contain a mapping")
        logger.debug(f"Loaded settings from {filepath}")
        self._recursive_update(self._config, data)

    def _load_env(self, prefix: str):
        for k, v in os.environ.items():
            if k.startswith(prefix):
                # LEDGERGUARD__ENCODING -> encoding
                key_path = k[len(prefix):].lower().split("__")
                self._set_nested(self._config, key_path, v)

    def _recursive_update(self, d: Dict, u: Dict) -> Dict:
        for k, v in u.items():
            if isinstance(v, dict):
                d[k] = self._recursive_update(d.get(k, {}), v)
            else:
                d[k] = v
        return d

    def _set_nested(self, d: Dict, keys: list, value: Any):
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


def load_settings(
    config_file: Optional[str] = None,
    env_prefix: str = ENV_PREFIX,
    **overrides: Any,
) -> ValidatorSettings:
    """
    Load and validate ValidatorSettings.

    Keyword overrides take precedence over file and environment.

    Raises:
        ConfigurationError: If the file is unusable or a value does not validate
    """
    loader = ConfigurationLoader()
    data = loader.load(config_file=config_file, env_prefix=env_prefix)
    data.update(overrides)

    try:
        return ValidatorSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def configure_logging(level: str | int = "WARNING") -> None:
    """Apply a log level to the ledgerguard logger tree."""
    logging.getLogger("ledgerguard").setLevel(level)
