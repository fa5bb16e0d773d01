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
Common utility functions shared by the ebook generator modules.
"""

import re
import unicodedata


def sanitize_filename(filename: str, max_length: int = 200) -> str:
    """
    Sanitize filename by removing/replacing invalid characters.

    The result is safe to use as a single path component on any platform.
    """
    # Remove invalid characters for filenames
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, "_")

    # Replace multiple spaces with single space
    filename = re.sub(r"\s+", " ", filename)

    # Remove leading/trailing spaces and dots
    filename = filename.strip(". ")

    filename = unicodedata.normalize("NFC", filename)

    if len(filename) > max_length:
        filename = filename[:max_length].rstrip(". ")

    # Ensure filename is not empty
    if not filename:
        filename = "unnamed"

    return filename
