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
epub_generator.py - EPUB file list assembly and ZIP packaging
=============================================================

Collects the output of every builder into an ordered list of FileEntry
records, packs that list into a ZIP archive (mimetype first and stored
uncompressed) and saves the archive to disk.
"""

from __future__ import annotations

import io
import logging
import shutil
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from .common_utils import sanitize_filename
from .epub_builders import (
    build_container_xml,
    build_content_opf,
    build_cover_xhtml,
    build_navigation_ncx,
    build_section_xhtml,
    build_style_css,
    build_toc_xhtml,
)
from .epub_constants import (
    COMPRESSION_LEVEL,
    CONTAINER_FILE,
    CONTENT_FOLDER,
    COVER_FILE,
    CSS_FILE,
    CSS_FOLDER,
    IMAGES_FOLDER,
    META_INF_FOLDER,
    MIMETYPE,
    NCX_FILE,
    OEBPF_FOLDER,
    OPF_FILE,
    TOC_FILE,
)
from .epub_media import data_uri_to_bytes, is_data_uri
from .epub_validation import PackagingError
from .models import Compression, FileEntry

if TYPE_CHECKING:
    from .epub_document import EbookDocument

logger = logging.getLogger(__name__)


def _deflated(name: str, folder: str, content: str | bytes) -> FileEntry:
    return FileEntry(name=name, folder=folder, compression=Compression.DEFLATE, content=content, level=COMPRESSION_LEVEL)


def get_files_for_epub(document: EbookDocument) -> list[FileEntry]:
    """
    Assemble every file of the EPUB in archive order.

    The navigation document is built before the contents page and its
    entries are passed on to it. Image entries carry the data URI text of
    inline images; decoding happens in package_files().

    Args:
        document: The book to assemble

    Returns:
        Ordered list of FileEntry records, mimetype first
    """
    files = [FileEntry(name="mimetype", folder="", compression=Compression.STORE, content=MIMETYPE)]
    files.append(_deflated(CONTAINER_FILE, META_INF_FOLDER, build_container_xml(document)))
    files.append(_deflated(OPF_FILE, OEBPF_FOLDER, build_content_opf(document)))

    ncx, toc_items = build_navigation_ncx(document)
    files.append(_deflated(NCX_FILE, OEBPF_FOLDER, ncx))
    files.append(_deflated(COVER_FILE, OEBPF_FOLDER, build_cover_xhtml(document)))
    files.append(_deflated(CSS_FILE, CSS_FOLDER, build_style_css(document)))

    for idx, section in enumerate(document.sections, 1):
        files.append(_deflated(section.filename, CONTENT_FOLDER, build_section_xhtml(document, idx)))

    if document.metadata.show_contents:
        files.append(_deflated(TOC_FILE, CONTENT_FOLDER, build_toc_xhtml(document, toc_items)))

    files.append(_deflated(document.cover.name, IMAGES_FOLDER, document.cover.content))
    for image in document.images:
        files.append(_deflated(image.name, IMAGES_FOLDER, image.content))

    logger.debug(f"Assembled {len(files)} files for '{document.metadata.title}'")
    return files


def package_files(files: list[FileEntry]) -> bytes:
    """
    Pack the file list into an in-memory ZIP archive.

    Data URI payloads are decoded to binary before they are written.

    Args:
        files: Entries as returned by get_files_for_epub()

    Returns:
        The archive as bytes

    Raises:
        PackagingError: If the mimetype entry is not first and stored, or any entry fails
    """
    if not files or files[0].path != "mimetype" or files[0].compression is not Compression.STORE:
        raise PackagingError("The first entry must be an uncompressed 'mimetype'")

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w") as z:
            for entry in files:
                content = entry.content
                if is_data_uri(content):
                    content, _ = data_uri_to_bytes(str(content))
                if entry.compression is Compression.STORE:
                    z.writestr(entry.path, content, compress_type=zipfile.ZIP_STORED)
                else:
                    z.writestr(entry.path, content, compress_type=zipfile.ZIP_DEFLATED, compresslevel=entry.level)
    except (ValueError, TypeError, zipfile.LargeZipFile, OSError) as e:
        logger.error(f"Error packaging EPUB: {e}")
        raise PackagingError(f"Error packaging EPUB: {e}") from e

    return buffer.getvalue()


def save_epub(blob: bytes, path: Path) -> Path:
    """
    Write the archive to path, replacing any existing file only once fully written.

    Raises:
        PackagingError: If the file cannot be written
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(blob)
        shutil.move(str(tmp_path), str(path))
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        logger.error(f"Error writing EPUB {path}: {e}")
        raise PackagingError(f"Error writing EPUB {path}: {e}") from e

    logger.info(f"EPUB written to {path}")
    return path


def create_epub(
    document: EbookDocument,
    file_name_without_extension: str | None = None,
    output_dir: str | Path = ".",
) -> Path:
    """
    Assemble, package and save the document as '<name or title>.epub'.

    Args:
        document: The book to write
        file_name_without_extension: Archive name; defaults to the book title
        output_dir: Directory the EPUB is written into

    Returns:
        Path of the written EPUB

    Raises:
        PackagingError: If packaging or saving fails
    """
    name = sanitize_filename(file_name_without_extension or document.metadata.title)
    files = get_files_for_epub(document)
    blob = package_files(files)
    return save_epub(blob, Path(output_dir) / f"{name}.epub")
