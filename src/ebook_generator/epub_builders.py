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
epub_builders.py - EPUB component builders
==========================================

Provides one builder per file of the archive: container.xml, the OPF
package document, the NCX navigation document, the cover page, the
stylesheet, the section pages and the contents page. Each builder reads
the document and finishes with a replacements() pass over its template.
"""

from __future__ import annotations

import html
import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import quote

from .epub_constants import (
    BASE_CSS,
    COVER_FILE,
    CSS_FILE,
    GENERATOR_NAME,
    NCX_FILE,
    OEBPF_FOLDER,
    OPF_FILE,
    RTL_CSS,
    TOC_FILE,
)
from .epub_media import is_rtl_language
from .epub_replacements import replacements
from .models import BookMetadata, ContentItem, ItemType

if TYPE_CHECKING:
    from .epub_document import EbookDocument

logger = logging.getLogger(__name__)

XHTML_MEDIA_TYPE = "application/xhtml+xml"


def is_rtl(metadata: BookMetadata) -> bool:
    """True if the book is explicitly right-to-left or written in an RTL language."""
    return metadata.is_rtl or is_rtl_language(metadata.language)


def image_id(name: str) -> str:
    """Manifest id of an additional image, derived from its archived name."""
    return "img-" + re.sub(r"[^A-Za-z0-9_.-]", "_", name)


def _href(name: str) -> str:
    return html.escape(quote(name))


def _text_dir(metadata: BookMetadata) -> str:
    return "rtl" if is_rtl(metadata) else "auto"


def build_container_xml(document: EbookDocument) -> str:
    """Build META-INF/container.xml pointing at the package document."""
    result = (
        '<?xml version="1.0" encoding="UTF-8"?>[[EOL]]'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">[[EOL]]'
        "    <rootfiles>[[EOL]]"
        f'        <rootfile full-path="{OEBPF_FOLDER}/{OPF_FILE}" media-type="application/oebps-package+xml"/>[[EOL]]'
        "    </rootfiles>[[EOL]]"
        "</container>[[EOL]]"
    )
    return replacements(document.metadata, result)


# ───────────────────────── package document ───────────────────────── #


def title_template(metadata: BookMetadata) -> str:
    """Title with its series/sequence suffix, as a token template."""
    if metadata.series and metadata.sequence:
        return "[[TITLE]] ([[SERIES]] #[[SEQUENCE]])"
    if metadata.series:
        return "[[TITLE]] ([[SERIES]])"
    if metadata.sequence:
        return "[[TITLE]] (#[[SEQUENCE]])"
    return "[[TITLE]]"


def _split_tags(tags: str | None) -> list[str]:
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def _opf_metadata(metadata: BookMetadata) -> list[str]:
    title = title_template(metadata)
    lines = [
        '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">',
        '    <dc:identifier id="BookId">[[ID]]</dc:identifier>',
        '    <meta refines="#BookId" property="identifier-type" scheme="onix:codelist5">[[ID]]</meta>',
        f'    <dc:title id="meta-title">{title}</dc:title>',
        "    <dc:language>[[LANGUAGE]]</dc:language>",
        '    <meta property="dcterms:modified">[[MODIFIED]]</meta>',
        '    <dc:creator id="creator">[[AUTHOR]]</dc:creator>',
        '    <meta refines="#creator" property="file-as">[[FILEAS]]</meta>',
        '    <meta refines="#creator" property="role" scheme="marc:relators">aut</meta>',
        "    <dc:publisher>[[PUBLISHER]]</dc:publisher>",
        "    <dc:date>[[PUBLISHED]]</dc:date>",
        "    <dc:rights>Copyright &#x00A9; [[YEAR]] by [[PUBLISHER]]</dc:rights>",
    ]
    if metadata.description:
        lines.append("    <dc:description>[[DESCRIPTION]]</dc:description>")
    if metadata.source:
        lines.append("    <dc:source>[[SOURCE]]</dc:source>")
    if metadata.genre:
        lines.append("    <dc:subject>[[GENRE]]</dc:subject>")
    tags = _split_tags(metadata.tags)
    if metadata.tags and not tags:
        logger.warning(f"Tags '{metadata.tags}' contain no subjects")
    for tag in tags:
        lines.append(f"    <dc:subject>{html.escape(tag)}</dc:subject>")
    if metadata.series and metadata.sequence:
        lines.append('    <meta name="calibre:series" content="[[SERIES]]"/>')
        lines.append('    <meta name="calibre:series_index" content="[[SEQUENCE]]"/>')
    lines += [
        '    <meta name="cover" content="image_cover"/>',
        f'    <meta name="generator" content="{GENERATOR_NAME}"/>',
        '    <meta property="ibooks:specified-fonts">true</meta>',
        "</metadata>",
    ]
    return lines


def _opf_manifest(document: EbookDocument) -> list[str]:
    metadata = document.metadata
    cover = document.cover
    lines = [
        "<manifest>",
        f'    <item id="image_cover" href="images/{_href(cover.name)}" media-type="{cover.mime_type}"/>',
        f'    <item id="cover" href="{COVER_FILE}" media-type="{XHTML_MEDIA_TYPE}"/>',
        f'    <item id="ncx" href="{NCX_FILE}" media-type="application/x-dtbncx+xml"/>',
    ]
    if metadata.show_contents:
        lines.append(f'    <item id="toc" href="content/{TOC_FILE}" media-type="{XHTML_MEDIA_TYPE}" properties="nav"/>')
    lines.append(f'    <item id="css" href="css/{CSS_FILE}" media-type="text/css"/>')
    for idx, section in enumerate(document.sections, 1):
        lines.append(f'    <item id="s{idx}" href="content/{_href(section.filename)}" media-type="{XHTML_MEDIA_TYPE}"/>')
    for image in document.images:
        lines.append(f'    <item id="{image_id(image.name)}" href="images/{_href(image.name)}" media-type="{image.mime_type}"/>')
    lines.append("</manifest>")
    return lines


def _opf_spine(document: EbookDocument) -> list[str]:
    metadata = document.metadata
    direction = "rtl" if is_rtl(metadata) else "default"
    lines = [
        f'<spine toc="ncx" page-progression-direction="{direction}">',
        '    <itemref idref="cover" linear="yes"/>',
    ]
    for idx, section in enumerate(document.sections, 1):
        if section.is_front_matter:
            lines.append(f'    <itemref idref="s{idx}"/>')
    if metadata.show_contents:
        lines.append('    <itemref idref="toc"/>')
    for idx, section in enumerate(document.sections, 1):
        if not section.is_front_matter:
            lines.append(f'    <itemref idref="s{idx}"/>')
    lines.append("</spine>")
    return lines


def build_content_opf(document: EbookDocument) -> str:
    """
    Build the OPF package document.

    The spine lists the cover, then front matter in the order it was added,
    then the contents page when enabled, then every other section.

    Args:
        document: The book being generated

    Returns:
        Complete OPF XML as string
    """
    metadata = document.metadata
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="BookId"'
        ' xml:lang="[[LANGUAGE]]"'
        ' prefix="ibooks: http://vocabulary.itunes.apple.com/rdf/ibooks/vocabulary-extensions-1.0/">',
    ]
    for block in (_opf_metadata(metadata), _opf_manifest(document), _opf_spine(document)):
        parts.extend("    " + line for line in block)
    if metadata.show_contents:
        parts += [
            "    <guide>",
            f'        <reference type="toc" title="[[CONTENTS]]" href="content/{TOC_FILE}"/>',
            "    </guide>",
        ]
    parts.append("</package>")
    return replacements(metadata, "[[EOL]]".join(parts) + "[[EOL]]")


# ───────────────────────── navigation ───────────────────────── #


def _nav_point(nav_id: str, play_order: int, label: str, src: str, css_class: str | None = None) -> str:
    class_attr = f' class="{css_class}"' if css_class else ""
    return (
        f'        <navPoint id="{nav_id}" playOrder="{play_order}"{class_attr}>[[EOL]]'
        f"            <navLabel><text>{label}</text></navLabel>[[EOL]]"
        f'            <content src="{src}"/>[[EOL]]'
        "        </navPoint>[[EOL]]"
    )


def build_navigation_ncx(document: EbookDocument) -> tuple[str, list[ContentItem]]:
    """
    Build the NCX navigation document and the table of contents entries.

    The navMap holds the cover, the visible front matter, the contents page
    when enabled and the remaining visible sections, numbered with
    playOrder from 1. The same entries (minus the cover) are returned as
    ContentItem objects for the contents page.

    Args:
        document: The book being generated

    Returns:
        Tuple of (NCX XML, list of ContentItem)
    """
    metadata = document.metadata
    items: list[ContentItem] = []
    play_order = 1
    nav_map = _nav_point("cover", play_order, "Cover", COVER_FILE)

    for idx, section in enumerate(document.sections, 1):
        if section.is_front_matter and not section.exclude_from_contents:
            play_order += 1
            items.append(ContentItem(section.title, section.filename, ItemType.FRONT))
            nav_map += _nav_point(f"s{idx}", play_order, html.escape(section.title), f"content/{_href(section.filename)}", "section")

    if metadata.show_contents:
        play_order += 1
        items.append(ContentItem(metadata.contents, TOC_FILE, ItemType.CONTENTS))
        nav_map += _nav_point("toc", play_order, "[[CONTENTS]]", f"content/{TOC_FILE}", "chapter")

    for idx, section in enumerate(document.sections, 1):
        if not section.is_front_matter and not section.exclude_from_contents:
            play_order += 1
            items.append(ContentItem(section.title, section.filename, ItemType.MAIN))
            nav_map += _nav_point(f"s{idx}", play_order, html.escape(section.title), f"content/{_href(section.filename)}", "chapter")

    result = (
        '<?xml version="1.0" encoding="UTF-8"?>[[EOL]]'
        '<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">[[EOL]]'
        "    <head>[[EOL]]"
        '        <meta name="dtb:uid" content="[[ID]]"/>[[EOL]]'
        f'        <meta name="dtb:generator" content="{GENERATOR_NAME}"/>[[EOL]]'
        '        <meta name="dtb:depth" content="1"/>[[EOL]]'
        '        <meta name="dtb:totalPageCount" content="0"/>[[EOL]]'
        '        <meta name="dtb:maxPageNumber" content="0"/>[[EOL]]'
        "    </head>[[EOL]]"
        "    <docTitle><text>[[TITLE]]</text></docTitle>[[EOL]]"
        "    <docAuthor><text>[[AUTHOR]]</text></docAuthor>[[EOL]]"
        "    <navMap>[[EOL]]"
        f"{nav_map}"
        "    </navMap>[[EOL]]"
        "</ncx>[[EOL]]"
    )
    logger.debug(f"Navigation has {play_order} entries")
    return replacements(metadata, result), items


# ───────────────────────── markup pages ───────────────────────── #


def build_cover_xhtml(document: EbookDocument) -> str:
    """Build the cover page showing the cover image centred and full-bleed."""
    result = (
        '<?xml version="1.0" encoding="UTF-8"?>[[EOL]]'
        "<!DOCTYPE html>[[EOL]]"
        '<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops"'
        ' xml:lang="[[LANGUAGE]]" lang="[[LANGUAGE]]">[[EOL]]'
        "  <head>[[EOL]]"
        '    <meta charset="UTF-8"/>[[EOL]]'
        "    <title>[[TITLE]]</title>[[EOL]]"
        '    <style type="text/css">[[EOL]]'
        "      body { margin: 0; padding: 0; text-align: center; }[[EOL]]"
        "      .cover { margin: 0; padding: 0; font-size: 1px; }[[EOL]]"
        "      img { margin: 0; padding: 0; height: 100%; }[[EOL]]"
        "    </style>[[EOL]]"
        "  </head>[[EOL]]"
        "  <body>[[EOL]]"
        '    <div class="cover">[[EOL]]'
        f'      <img style="height: 100%; width: 100%;" src="images/{_href(document.cover.name)}" alt="Cover"/>[[EOL]]'
        "    </div>[[EOL]]"
        "  </body>[[EOL]]"
        "</html>[[EOL]]"
    )
    return replacements(document.metadata, result)


def build_style_css(document: EbookDocument) -> str:
    """Build the shared stylesheet: base rules, RTL rules if needed, then custom CSS."""
    result = BASE_CSS + "[[EOL]]"
    if is_rtl(document.metadata):
        result += RTL_CSS
    result += f"{document.css}[[EOL]]"
    return replacements(document.metadata, result, escape=False)


def _page(metadata: BookMetadata, title: str, body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>[[EOL]]'
        "<!DOCTYPE html>[[EOL]]"
        '<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops"'
        ' xml:lang="[[LANGUAGE]]" lang="[[LANGUAGE]]">[[EOL]]'
        "    <head>[[EOL]]"
        '        <meta charset="UTF-8"/>[[EOL]]'
        f"        <title>{title}</title>[[EOL]]"
        f'        <link rel="stylesheet" type="text/css" href="../css/{CSS_FILE}"/>[[EOL]]'
        "    </head>[[EOL]]"
        f'    <body dir="{_text_dir(metadata)}">[[EOL]]'
        f"{body}"
        "    </body>[[EOL]]"
        "</html>[[EOL]]"
    )


def build_section_xhtml(document: EbookDocument, index: int) -> str:
    """
    Build the page of one section.

    Args:
        document: The book being generated
        index: 1-based position of the section

    Returns:
        Complete XHTML document as string

    Raises:
        IndexError: If there is no section at index
    """
    if not 1 <= index <= len(document.sections):
        raise IndexError(f"Section {index} does not exist")
    section = document.sections[index - 1]
    title = html.escape(section.title)
    body = (
        f"        <h1>{title}</h1>[[EOL]]"
        '        <div class="content">[[EOL]]'
        f"            {section.content}[[EOL]]"
        "        </div>[[EOL]]"
    )
    return replacements(document.metadata, _page(document.metadata, title, body))


def build_toc_xhtml(document: EbookDocument, toc_items: list[ContentItem] | None = None) -> str:
    """
    Build the contents page.

    With a contents callback the callback receives the navigation entries and
    its markup is used verbatim; otherwise every section not excluded from
    the contents is linked in the order it was added.

    Args:
        document: The book being generated
        toc_items: Entries returned by build_navigation_ncx (computed if omitted)

    Returns:
        Complete XHTML document as string
    """
    if document.contents_callback is not None:
        if toc_items is None:
            _, toc_items = build_navigation_ncx(document)
        body = document.contents_callback(list(toc_items)) + "[[EOL]]"
    else:
        links = ""
        for section in document.sections:
            if section.exclude_from_contents:
                continue
            links += (
                '                <li class="table-of-content">[[EOL]]'
                f'                    <a href="{_href(section.filename)}">{html.escape(section.title)}</a>[[EOL]]'
                "                </li>[[EOL]]"
            )
        body = (
            '        <h1 class="h1">[[CONTENTS]]</h1>[[EOL]]'
            '        <nav id="toc" epub:type="toc">[[EOL]]'
            "            <ol>[[EOL]]"
            f"{links}"
            "            </ol>[[EOL]]"
            "        </nav>[[EOL]]"
        )
    return replacements(document.metadata, _page(document.metadata, "[[CONTENTS]]", body))
