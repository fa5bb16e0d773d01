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
epub_validation.py - EPUB error types and metadata resolution
=============================================================

Defines the errors raised while building a book and resolves the raw
metadata mapping supplied by the caller into an immutable BookMetadata,
applying defaults in a fixed order of precedence:

    builtin defaults  <-  configured defaults  <-  book metadata
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, cast

from .epub_constants import DEFAULT_CONTENTS_TITLE, DEFAULT_LANGUAGE, REQUIRED_FIELDS
from .models import BookMetadata, ImageObject

logger = logging.getLogger(__name__)

# ───────────────────────────── errors ───────────────────────────── #


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DuplicateFilenameError(ValidationError):
    """Raised when a section would reuse an existing filename."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Duplicate section filename: {filename}", field="filename")
        self.filename = filename


class PackagingError(Exception):
    """Raised when the archive cannot be built or saved."""

    pass


# ───────────── metadata resolution ───────────── #

# Keys accepted in the camelCase spelling used by JSON book descriptions
_KEY_ALIASES = {
    "showContents": "show_contents",
    "fileAs": "file_as",
    "isRTL": "is_rtl",
}

_OPTIONAL_TEXT_FIELDS = (
    "series",
    "sequence",
    "genre",
    "tags",
    "copyright",
    "publisher",
    "published",
    "description",
    "source",
    "file_as",
)

_TRUE_STRINGS = {"true", "yes", "1", "on"}
_FALSE_STRINGS = {"false", "no", "0", "off", ""}


def normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of data with camelCase aliases mapped to their snake_case keys."""
    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _cover_name(cover: Any) -> str | None:
    if isinstance(cover, ImageObject):
        return cover.name
    if isinstance(cover, Mapping):
        return cover.get("name")
    return None


def to_bool(value: Any, field: str) -> bool:
    """
    Interpret a flag given as a bool or as a string like "true"/"no".

    Raises:
        ValidationError: If the value cannot be read as a flag
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationError(f"Invalid value for {field}: {value!r}", field=field)


def check_required(metadata: Mapping[str, Any] | None) -> None:
    """
    Ensure every mandatory field is present and non-empty.

    Args:
        metadata: Raw metadata mapping

    Raises:
        ValidationError: Naming the first missing field
    """
    if metadata is None:
        raise ValidationError("Missing metadata")
    for field in REQUIRED_FIELDS:
        value = metadata.get(field)
        if field == "cover":
            if value is None or _is_blank(_cover_name(value)):
                raise ValidationError(f"Missing metadata: {field}", field=field)
        elif _is_blank(value):
            raise ValidationError(f"Missing metadata: {field}", field=field)


def resolve_metadata(
    metadata: Mapping[str, Any] | None,
    defaults: Mapping[str, Any] | None = None,
) -> BookMetadata:
    """
    Validate raw metadata and resolve it into a BookMetadata snapshot.

    Args:
        metadata: Raw metadata mapping supplied by the caller
        defaults: Optional configured defaults (language, contents, show_contents)

    Returns:
        Resolved BookMetadata

    Raises:
        ValidationError: If a required field is missing or a flag is malformed
    """
    check_required(metadata)
    metadata = normalize_keys(cast(Mapping[str, Any], metadata))

    merged: dict[str, Any] = {
        "language": DEFAULT_LANGUAGE,
        "contents": DEFAULT_CONTENTS_TITLE,
        "show_contents": True,
        "is_rtl": False,
    }
    if defaults:
        merged.update({k: v for k, v in normalize_keys(defaults).items() if v is not None})
    merged.update({k: v for k, v in metadata.items() if v is not None})

    language = str(merged["language"]).strip() or DEFAULT_LANGUAGE
    contents = str(merged["contents"]) if not _is_blank(merged["contents"]) else DEFAULT_CONTENTS_TITLE

    optional = {}
    for field in _OPTIONAL_TEXT_FIELDS:
        value = merged.get(field)
        optional[field] = None if _is_blank(value) else str(value).strip()

    resolved = BookMetadata(
        id=str(merged["id"]).strip(),
        title=str(merged["title"]).strip(),
        author=str(merged["author"]).strip(),
        language=language,
        contents=contents,
        show_contents=to_bool(merged["show_contents"], "show_contents"),
        is_rtl=to_bool(merged["is_rtl"], "is_rtl"),
        **optional,
    )
    logger.debug(f"Resolved metadata for '{resolved.title}' (language={resolved.language})")
    return resolved
