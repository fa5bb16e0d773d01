#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
config_manager.py - Configuration management for the ebook generator
"""

import copy
import logging
from pathlib import Path
from typing import Any

from .common_yaml_utils import load_safe_yaml, merge_yaml_configs

DEFAULT_CONFIG_PATH = Path("ebook_config.yml")

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "file_enabled": False,
        "file_path": "ebook_generator.log",
    },
    "epub": {
        "output_dir": ".",
        "language": "en",
        "contents": "Chapters",
        "show_contents": True,
    },
}

# Keys of the epub section that act as metadata defaults
METADATA_DEFAULT_KEYS = ("language", "contents", "show_contents")


class ConfigManager:
    """Loads the YAML configuration file and merges it over the defaults."""

    def __init__(
        self,
        config_path: Path | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file (default: ebook_config.yml)
            logger: Logger instance

        Raises:
            ValueError: If the configuration file exists but cannot be parsed
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        defaults = copy.deepcopy(DEFAULT_CONFIG)
        if not self.config_path.exists():
            self.logger.debug(f"Configuration file {self.config_path} not found. Using defaults.")
            return defaults

        user_config = load_safe_yaml(self.config_path, "Configuration file")
        for section in ("logging", "epub"):
            if section in user_config and not isinstance(user_config[section], dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")
        return merge_yaml_configs(defaults, user_config)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Return config[section][key], or default if absent."""
        return self.config.get(section, {}).get(key, default)

    def metadata_defaults(self) -> dict[str, Any]:
        """Metadata defaults taken from the epub section."""
        epub = self.config.get("epub", {})
        return {key: epub[key] for key in METADATA_DEFAULT_KEYS if key in epub}
