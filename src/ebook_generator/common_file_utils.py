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
common_file_utils.py - Shared file handling utilities

Reads text files of unknown encoding (section bodies, CSS) using chardet
to detect the encoding before decoding.
"""

import logging
from pathlib import Path

import chardet

# Default logger
logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8", "cp1252", "latin-1"]


def detect_encoding(raw_data: bytes, sample_size: int = 32 * 1024) -> tuple[str, float]:
    """
    Detect the encoding of raw bytes with chardet.

    Returns: (encoding, confidence) tuple, ('utf-8', 0.0) if undetectable
    """
    if not raw_data:
        return "utf-8", 0.0
    result = chardet.detect(raw_data[:sample_size])
    encoding = result.get("encoding") or "utf-8"
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet.detect: {encoding} (confidence: {confidence})")
    return encoding, confidence


def decode_file_content(
    file_path: Path,
    confidence_threshold: float = 0.7,
    fallback_encodings: list[str] | None = None,
) -> str:
    """
    Read a text file, detecting its encoding.

    Parameters:
    - file_path: Path to the file to decode
    - confidence_threshold: Minimum chardet confidence to trust the detection
    - fallback_encodings: Encodings tried in order when detection fails

    Returns: Decoded content

    Raises:
    - OSError: If the file cannot be read
    - ValueError: If no encoding can decode the file
    """
    if fallback_encodings is None:
        fallback_encodings = DEFAULT_FALLBACK_ENCODINGS

    raw_data = file_path.read_bytes()
    encoding, confidence = detect_encoding(raw_data)

    if confidence >= confidence_threshold:
        try:
            return raw_data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with detected encoding {encoding}: {e}")
    else:
        logger.warning(f"Low confidence ({confidence:.2f}) detecting encoding of {file_path.name}")

    for enc in fallback_encodings:
        try:
            content = raw_data.decode(enc)
            logger.debug(f"Decoded {file_path.name} with fallback encoding {enc}")
            return content
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode file {file_path} with any known encoding")
