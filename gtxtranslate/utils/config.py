"""
Configuration Manager
====================

Manages translator settings stored in a JSON file.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

from gtxtranslate.core.constants import (
    CACHE_TTL_SECONDS,
    DEFAULT_MAX_CHUNK_CHARS,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    REQUEST_TIMEOUT_TOTAL,
    TRANSLATE_URL,
    USER_AGENT,
)


@dataclass
class TranslatorSettings:
    """Translation-related settings."""
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE
    max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS
    cache_ttl: int = CACHE_TTL_SECONDS
    request_timeout: float = REQUEST_TIMEOUT_TOTAL
    base_url: str = TRANSLATE_URL
    user_agent: str = USER_AGENT


@dataclass
class LoggingSettings:
    level: str = "INFO"
    log_file: str = ""  # empty = console only


class ConfigManager:
    """Loads and saves settings; unknown keys in the file are ignored."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file) if config_file else None
        self._lock = threading.Lock()
        self.load_error: Optional[str] = None

        self.translator_settings = TranslatorSettings()
        self.logging_settings = LoggingSettings()

        if self.config_file is not None:
            self.load_config()

    def _filter_config_data(self, dataclass_type, data):
        """Filter dictionary keys to match dataclass fields to avoid __init__ errors."""
        if not isinstance(data, dict):
            return {}
        valid_fields = {f.name for f in fields(dataclass_type)}
        return {k: v for k, v in data.items() if k in valid_fields}

    def apply_overrides(self, config_data: dict) -> None:
        if 'translator_settings' in config_data:
            trans_data = self._filter_config_data(TranslatorSettings, config_data['translator_settings'])
            self.translator_settings = TranslatorSettings(**{**asdict(self.translator_settings), **trans_data})
        if 'logging_settings' in config_data:
            log_data = self._filter_config_data(LoggingSettings, config_data['logging_settings'])
            self.logging_settings = LoggingSettings(**{**asdict(self.logging_settings), **log_data})

    def load_config(self) -> bool:
        """Load configuration from file.

        Returns False when the file is absent or unreadable; the current
        settings are kept and the problem is recorded in ``load_error``.
        """
        self.load_error = None
        if self.config_file is None or not self.config_file.exists():
            self.logger.info("Config file not found. Using default configuration.")
            return False
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, ValueError) as e:
            self.load_error = f"Error loading config file {self.config_file}: {e}"
            self.logger.error(f"{self.load_error}. Using default configuration.")
            return False
        if not isinstance(config_data, dict):
            self.load_error = f"Error loading config file {self.config_file}: expected a JSON object"
            self.logger.error(f"{self.load_error}. Using default configuration.")
            return False
        self.apply_overrides(config_data)
        self.logger.info("Configuration loaded successfully")
        return True

    def save_config(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the current settings (write to temp, then rename)."""
        target = Path(path) if path else self.config_file
        if target is None:
            raise ValueError("No config file path given")
        with self._lock:
            config_data = {
                'translator_settings': asdict(self.translator_settings),
                'logging_settings': asdict(self.logging_settings),
            }
            dir_name = target.parent.absolute()
            dir_name.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', dir=str(dir_name), delete=False, encoding='utf-8') as tf:
                json.dump(config_data, tf, indent=4, ensure_ascii=False)
                temp_name = tf.name
            try:
                shutil.move(temp_name, str(target))
            finally:
                if os.path.exists(temp_name):
                    os.remove(temp_name)
            self.logger.info(f"Configuration saved to {target}")
            return target

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value using dot notation (e.g., 'translator.target_language')."""
        parts = key.split('.')
        if len(parts) != 2:
            return default
        section, setting = parts
        if section == 'translator':
            return getattr(self.translator_settings, setting, default)
        if section == 'logging':
            return getattr(self.logging_settings, setting, default)
        return default
