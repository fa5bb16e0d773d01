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
epub_document.py - The in-memory ebook document
===============================================

EbookDocument collects metadata, sections, CSS and images, and hands them
to the assembler in epub_generator to produce the EPUB file list or archive.

Example:
    >>> book = EbookDocument({
    ...     "id": "1",
    ...     "title": "Example Book",
    ...     "author": "Author",
    ...     "cover": {"name": "Cover.png", "data": "data:image/png;base64,iVBORw0KGgo="},
    ... })
    >>> book.add_section("Chapter One", "<p>Hi</p>").filename
    's1.xhtml'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, cast

from . import epub_generator
from .epub_builders import image_id
from .epub_constants import SECTION_SUFFIX, TOC_FILE
from .epub_media import to_image_object
from .epub_validation import DuplicateFilenameError, ValidationError, normalize_keys, resolve_metadata
from .models import ContentItem, FileEntry, ImageObject, Section

logger = logging.getLogger(__name__)

ContentsCallback = Callable[[list[ContentItem]], str]


class EbookDocument:
    """A book under construction: metadata plus ordered sections, CSS and images."""

    def __init__(
        self,
        metadata: Mapping[str, Any] | None,
        contents_callback: ContentsCallback | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Validate the metadata and start an empty document.

        Args:
            metadata: Book metadata; 'id', 'title', 'author' and 'cover' are required
            contents_callback: Optional function rendering the contents page body
                from the list of ContentItem entries
            defaults: Optional configured defaults for language, contents and show_contents

        Raises:
            ValidationError: If a required field is missing or an image is unusable
        """
        self.metadata = resolve_metadata(metadata, defaults)
        raw = normalize_keys(cast(Mapping[str, Any], metadata))

        self.cover: ImageObject = to_image_object(raw["cover"])
        self.images: list[ImageObject] = [to_image_object(image) for image in raw.get("images") or []]
        self._check_image_names()

        self.css: str = str(raw.get("css") or "")
        self.sections: list[Section] = []
        self.contents_callback = contents_callback
        logger.debug(f"Created document '{self.metadata.title}' with {len(self.images)} extra images")

    def _check_image_names(self) -> None:
        seen = {self.cover.name}
        ids: set[str] = set()
        for image in self.images:
            if image.name in seen or image_id(image.name) in ids:
                raise ValidationError(f"Duplicate image name: {image.name}", field="images")
            seen.add(image.name)
            ids.add(image_id(image.name))

    def add_section(
        self,
        title: str,
        content: str,
        exclude_from_contents: bool = False,
        is_front_matter: bool = False,
        override_filename: str | None = None,
    ) -> Section:
        """
        Append a section (usually a chapter).

        Sections are numbered s1, s2, ... from the current section count
        unless override_filename is given; '.xhtml' is always appended.
        Front matter is placed before the contents page.

        Args:
            title: Contents entry and page heading
            content: Markup body of the section, used verbatim
            exclude_from_contents: Hide from the contents page and navigation
            is_front_matter: Place before the contents page
            override_filename: Filename inside the EPUB, without extension

        Returns:
            The new Section

        Raises:
            DuplicateFilenameError: If the filename is already taken
            ValidationError: If override_filename contains a path separator
        """
        if override_filename is None or str(override_filename).strip() == "":
            stem = f"s{len(self.sections) + 1}"
        else:
            stem = str(override_filename).strip()
            if "/" in stem or "\\" in stem:
                raise ValidationError(f"Section filename must not contain a path separator: {stem}", field="filename")
        filename = f"{stem}{SECTION_SUFFIX}"

        if filename == TOC_FILE or any(s.filename == filename for s in self.sections):
            raise DuplicateFilenameError(filename)

        section = Section(
            title=title,
            content=content,
            filename=filename,
            exclude_from_contents=bool(exclude_from_contents),
            is_front_matter=bool(is_front_matter),
        )
        self.sections.append(section)
        logger.debug(f"Added section {filename}: {title}")
        return section

    def add_css(self, content: str) -> None:
        """Append CSS to the stylesheet shared by all sections."""
        self.css += content

    def get_section_count(self) -> int:
        """Return the number of sections added so far."""
        return len(self.sections)

    def get_files_for_epub(self) -> list[FileEntry]:
        """
        Return the files of the EPUB in archive order.

        The first entry is the mimetype and must be stored uncompressed.
        """
        return epub_generator.get_files_for_epub(self)

    def create_epub(self, file_name_without_extension: str | None = None, output_dir: str | Path = ".") -> Path:
        """
        Build the archive and save it as '<name or title>.epub'.

        Returns:
            Path of the written EPUB

        Raises:
            PackagingError: If the archive cannot be built or saved
        """
        return epub_generator.create_epub(self, file_name_without_extension, output_dir)
