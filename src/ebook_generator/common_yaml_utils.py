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
YAML helpers shared by the configuration loader and the book definition reader.
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def load_safe_yaml(yaml_path: str | Path, what: str = "YAML file") -> dict[str, Any]:
    """
    Read a YAML document whose root must be a mapping.

    Args:
        yaml_path: Path to the YAML file
        what: Description of the file used in error messages

    Returns:
        The mapping at the root, {} for an empty document

    Raises:
        ValueError: If the file is missing, unreadable, malformed or not a mapping
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.is_file():
        raise ValueError(f"{what} not found: {yaml_path}")

    try:
        data = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {what} {yaml_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Error reading {what} {yaml_path}: {e}") from e

    if data is None:
        logger.debug(f"{yaml_path} is empty")
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{what} {yaml_path} must contain a dictionary at the root level, got {type(data).__name__}")
    return data


def merge_yaml_configs(base_config: dict[str, Any], override_config: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge override_config into a copy of base_config.

    Nested mappings are merged key by key; any other value replaces the base value.
    """
    result = copy.deepcopy(base_config)
    for key, value in override_config.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_yaml_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
