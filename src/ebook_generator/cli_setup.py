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
cli_setup.py - CLI setup and initialization
===========================================

Handles loading the configuration and setting up logging for ebook-cli.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

from .config_manager import ConfigManager


def setup_configuration(argv: Sequence[str] | None = None) -> ConfigManager:
    """Load configuration from the file named by --config.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Loaded ConfigManager

    Raises:
        ValueError: If the configuration file cannot be parsed
    """
    # Pre-parse to get config file path
    preset_parser = argparse.ArgumentParser(add_help=False)
    preset_parser.add_argument("--config", type=str, default="ebook_config.yml")
    preset_args, _ = preset_parser.parse_known_args(argv)
    return ConfigManager(config_path=Path(preset_args.config))


def setup_logging(config: dict[str, Any], level_override: str | None = None) -> logging.Logger:
    """Set up logging based on configuration.

    Args:
        config: Configuration dictionary
        level_override: Level name given on the command line

    Returns:
        Configured logger instance
    """
    level_name = level_override or config["logging"]["level"]
    log_level = getattr(logging, str(level_name).upper(), logging.INFO)
    log_format = config["logging"]["format"]

    logging.basicConfig(level=log_level, format=log_format)
    logger = logging.getLogger("ebook_generator")
    logger.setLevel(log_level)

    # Set up file logging if enabled
    if config["logging"]["file_enabled"]:
        try:
            file_handler = logging.FileHandler(config["logging"]["file_path"])
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Failed to set up file logging to {config['logging']['file_path']}: {e}")
            # Continue without file logging

    return logger
