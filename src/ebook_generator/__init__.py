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
ebook-generator - Programmatic EPUB 3 generation

Build an ebook from metadata, ordered sections, CSS and images:

    from ebook_generator import EbookDocument

    book = EbookDocument({"id": "1", "title": "Example Book", "author": "Author", "cover": cover})
    book.add_section("Chapter One", "<p>Hi</p>")
    book.create_epub("example")
"""

__version__ = "1.0.0"
__author__ = "Emasoft"
__email__ = "713559+Emasoft@users.noreply.github.com"
__license__ = "Apache-2.0"

from .epub_document import EbookDocument
from .epub_validation import DuplicateFilenameError, PackagingError, ValidationError
from .models import BookMetadata, Compression, ContentItem, FileEntry, ImageObject, ItemType, Section

__all__ = [
    "EbookDocument",
    "ValidationError",
    "DuplicateFilenameError",
    "PackagingError",
    "BookMetadata",
    "Compression",
    "ContentItem",
    "FileEntry",
    "ImageObject",
    "ItemType",
    "Section",
]
