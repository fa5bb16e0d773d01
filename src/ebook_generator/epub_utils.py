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
Book definition loading for the ebook generator.

A book definition is a YAML file holding the metadata at the top level
plus the cover, images, CSS and sections, for example:

    id: urn:uuid:1234
    title: Example Book
    author: Author
    cover: images/cover.png
    images: [images/map.png]
    css: "p { color: black; }"
    sections:
      - title: Preface
        file: text/preface.html
        front_matter: true
      - title: Chapter One
        content: "<p>Hi</p>"

File paths are resolved relative to the definition file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from .common_file_utils import decode_file_content
from .common_yaml_utils import load_safe_yaml
from .config_manager import ConfigManager
from .epub_document import ContentsCallback, EbookDocument
from .epub_validation import ValidationError, to_bool

logger = logging.getLogger(__name__)

_STRUCTURE_KEYS = ("sections", "css", "cover", "images")


def _read_image(entry: Any, base_dir: Path) -> dict[str, Any]:
    """Turn an image entry of a book definition into an image mapping."""
    if isinstance(entry, str):
        entry = {"path": entry}
    if not isinstance(entry, Mapping):
        raise ValidationError(f"Invalid image entry: {entry!r}", field="images")
    if "data" in entry:
        return dict(entry)

    if not entry.get("path"):
        raise ValidationError(f"Image entry needs 'path' or 'data': {dict(entry)}", field="images")
    path = base_dir / str(entry["path"])
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValidationError(f"Cannot read image '{path}': {e}", field="images") from e
    return {"name": entry.get("name") or path.name, "data": data, "type": entry.get("type")}


def _read_text(path: Path, what: str) -> str:
    try:
        return decode_file_content(path)
    except (OSError, ValueError) as e:
        raise ValidationError(f"Cannot read {what} '{path}': {e}") from e


def _add_sections(document: EbookDocument, sections: Any, base_dir: Path) -> None:
    if not isinstance(sections, list):
        raise ValidationError("'sections' must be a list", field="sections")

    for number, entry in enumerate(sections, 1):
        if not isinstance(entry, Mapping) or not entry.get("title"):
            raise ValidationError(f"Section {number} needs a title", field="sections")
        if entry.get("file"):
            content = _read_text(base_dir / str(entry["file"]), "section file")
        else:
            content = str(entry.get("content") or "")
        document.add_section(
            str(entry["title"]),
            content,
            exclude_from_contents=to_bool(entry.get("exclude_from_contents", False), "exclude_from_contents"),
            is_front_matter=to_bool(entry.get("front_matter", entry.get("is_front_matter", False)), "front_matter"),
            override_filename=entry.get("filename"),
        )


def load_book_definition(
    definition_path: Path,
    defaults: Mapping[str, Any] | None = None,
    contents_callback: ContentsCallback | None = None,
) -> EbookDocument:
    """
    Build an EbookDocument from a YAML book definition.

    Args:
        definition_path: Path to the YAML book definition
        defaults: Metadata defaults from the configuration
        contents_callback: Optional contents page renderer

    Returns:
        The populated document

    Raises:
        ValidationError: If the definition is unreadable or incomplete
    """
    try:
        definition = load_safe_yaml(definition_path, "Book definition")
    except ValueError as e:
        raise ValidationError(str(e)) from e

    base_dir = Path(definition_path).parent
    metadata = {k: v for k, v in definition.items() if k not in _STRUCTURE_KEYS}
    if definition.get("cover") is not None:
        metadata["cover"] = _read_image(definition["cover"], base_dir)
    metadata["images"] = [_read_image(entry, base_dir) for entry in definition.get("images") or []]

    document = EbookDocument(metadata, contents_callback, defaults=defaults)

    css = definition.get("css")
    if isinstance(css, list):
        for css_file in css:
            document.add_css(_read_text(base_dir / str(css_file), "CSS file"))
    elif css:
        document.add_css(str(css))

    _add_sections(document, definition.get("sections") or [], base_dir)

    logger.info(f"Loaded '{document.metadata.title}' with {document.get_section_count()} sections")
    return document


def create_epub_from_definition(
    definition_path: Path,
    output_dir: Path | None = None,
    name: str | None = None,
    config: ConfigManager | None = None,
) -> Path:
    """
    Load a book definition and write it as an EPUB.

    This is the main entry point used by the command line.

    Args:
        definition_path: Path to the YAML book definition
        output_dir: Directory for the EPUB (default: epub.output_dir from config)
        name: Archive name without extension (default: the book title)
        config: Loaded configuration (default: built-in defaults)

    Returns:
        Path of the written EPUB

    Raises:
        ValidationError: If the definition is invalid
        PackagingError: If the archive cannot be written
    """
    if config is None:
        config = ConfigManager()

    document = load_book_definition(definition_path, defaults=config.metadata_defaults())
    target_dir = output_dir if output_dir is not None else Path(config.get("epub", "output_dir", "."))
    return document.create_epub(name, target_dir)
