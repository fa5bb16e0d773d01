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
epub_replacements.py - Token substitution for EPUB templates
============================================================

Every document generator writes its template with [[TOKEN]] placeholders
and finishes with a call to replacements(), which fills them from the
book metadata in a single pass.
"""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone
from typing import Callable

from .epub_constants import DEFAULT_PUBLISHER, MODIFIED_FORMAT, TOKEN_RE
from .models import BookMetadata

_YEAR_RE = re.compile(r"^\s*(\d{4})")


def _published(metadata: BookMetadata, now: datetime) -> str:
    return metadata.published or now.date().isoformat()


def _year(metadata: BookMetadata, now: datetime) -> str:
    published = _published(metadata, now)
    m = _YEAR_RE.match(published)
    return m.group(1) if m else published


def token_values(metadata: BookMetadata, now: datetime) -> dict[str, Callable[[], str | None]]:
    """Map each recognised token name to a getter for its value."""
    return {
        "ID": lambda: metadata.id,
        "TITLE": lambda: metadata.title,
        "SERIES": lambda: metadata.series,
        "SEQUENCE": lambda: metadata.sequence,
        "COPYRIGHT": lambda: metadata.copyright,
        "LANGUAGE": lambda: metadata.language,
        "FILEAS": lambda: metadata.file_as or metadata.author,
        "AUTHOR": lambda: metadata.author,
        "PUBLISHER": lambda: metadata.publisher or DEFAULT_PUBLISHER,
        "PUBLISHED": lambda: _published(metadata, now),
        "YEAR": lambda: _year(metadata, now),
        "MODIFIED": lambda: now.strftime(MODIFIED_FORMAT),
        "DESCRIPTION": lambda: metadata.description,
        "GENRE": lambda: metadata.genre,
        "TAGS": lambda: metadata.tags,
        "CONTENTS": lambda: metadata.contents,
        "SOURCE": lambda: metadata.source,
    }


def replacements(
    metadata: BookMetadata,
    template: str,
    *,
    escape: bool = True,
    now: datetime | None = None,
) -> str:
    """
    Fill every recognised [[TOKEN]] in template from the metadata.

    Absent values become empty strings, [[EOL]] becomes a newline and
    unknown tokens are left untouched. All tokens are matched in one regex
    pass, so the result does not depend on token order and running it
    again on its own output changes nothing.

    Args:
        metadata: Resolved book metadata
        template: Text containing [[TOKEN]] placeholders
        escape: XML-escape substituted values (disable for CSS)
        now: Instant used for [[MODIFIED]] and the published fallback

    Returns:
        The substituted text
    """
    if now is None:
        now = datetime.now(timezone.utc)
    values = token_values(metadata, now)

    def _substitute(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "EOL":
            return "\n"
        getter = values.get(token)
        if getter is None:
            return match.group(0)
        value = getter() or ""
        return html.escape(value) if escape else value

    return TOKEN_RE.sub(_substitute, template)
