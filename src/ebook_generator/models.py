#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2025 Emasoft
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

"""Data models for the ebook generator."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Compression(enum.Enum):
    """How an entry is written into the archive."""

    STORE = "STORE"
    """Stored uncompressed (mandatory for the mimetype entry)."""
    DEFLATE = "DEFLATE"
    """Deflated at the entry's compression level."""


class ItemType(enum.Enum):
    """Kind of a table of contents entry."""

    FRONT = "front"
    """Front matter, placed before the contents page."""
    CONTENTS = "contents"
    """The contents page itself."""
    MAIN = "main"
    """Any remaining section."""


@dataclass(frozen=True)
class InlineImage:
    """Self-describing data URI, decoded only when the archive is packed."""

    uri: str
    mime_type: str


@dataclass(frozen=True)
class BlobImage:
    """Opaque binary image payload."""

    data: bytes
    mime_type: str


ImageData = Union[InlineImage, BlobImage]


@dataclass(frozen=True)
class ImageObject:
    """An image stored under OEBPF/images/<name>."""

    name: str
    data: ImageData

    @property
    def mime_type(self) -> str:
        return self.data.mime_type

    @property
    def content(self) -> str | bytes:
        """Archive payload: data URI text for inline images, raw bytes otherwise."""
        if isinstance(self.data, InlineImage):
            return self.data.uri
        return self.data.data


@dataclass
class Section:
    """A content section (usually a chapter)."""

    title: str
    content: str
    filename: str
    exclude_from_contents: bool = False
    is_front_matter: bool = False


@dataclass(frozen=True)
class ContentItem:
    """A table of contents entry produced by navigation generation."""

    title: str
    link: str
    item_type: ItemType


@dataclass(frozen=True)
class FileEntry:
    """A named payload handed to the archive packager."""

    name: str
    folder: str
    compression: Compression
    content: str | bytes
    level: int | None = None

    @property
    def path(self) -> str:
        """Full path of the entry inside the archive."""
        return f"{self.folder}/{self.name}" if self.folder else self.name


@dataclass(frozen=True)
class BookMetadata:
    """Resolved, immutable book metadata used by every document generator."""

    id: str
    title: str
    author: str
    language: str
    contents: str
    show_contents: bool = True
    is_rtl: bool = False
    series: str | None = None
    sequence: str | None = None
    genre: str | None = None
    tags: str | None = None
    copyright: str | None = None
    publisher: str | None = None
    published: str | None = None
    description: str | None = None
    source: str | None = None
    file_as: str | None = None
