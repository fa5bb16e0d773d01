#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for the EbookDocument class.
"""

import pytest

from conftest import PNG_DATA_URI
from ebook_generator.epub_document import EbookDocument
from ebook_generator.epub_validation import DuplicateFilenameError, ValidationError
from ebook_generator.models import BlobImage, Compression, ImageObject


class TestConstruction:
    """Test creating a document."""

    def test_minimal(self, metadata):
        """Test a document built from minimal metadata."""
        doc = EbookDocument(metadata)
        assert doc.metadata.title == "Example Book"
        assert doc.cover.name == "cover.png"
        assert doc.cover.mime_type == "image/png"
        assert doc.images == []
        assert doc.css == ""
        assert doc.get_section_count() == 0

    def test_missing_metadata(self):
        """Test that construction fails without metadata."""
        with pytest.raises(ValidationError, match="Missing metadata"):
            EbookDocument(None)

    def test_missing_cover(self, metadata):
        """Test that construction fails without a cover."""
        del metadata["cover"]
        with pytest.raises(ValidationError, match="cover"):
            EbookDocument(metadata)

    def test_css_from_metadata(self, metadata):
        """Test that initial CSS can be given in the metadata."""
        doc = EbookDocument({**metadata, "css": "p { color: red; }"})
        assert doc.css == "p { color: red; }"

    def test_images(self, metadata):
        """Test that additional images are resolved."""
        doc = EbookDocument({**metadata, "images": [{"name": "map.png", "data": PNG_DATA_URI}]})
        assert [image.name for image in doc.images] == ["map.png"]

    def test_duplicate_image_names(self, metadata):
        """Test that two images cannot share a name."""
        images = [{"name": "map.png", "data": PNG_DATA_URI}, {"name": "map.png", "data": PNG_DATA_URI}]
        with pytest.raises(ValidationError, match="Duplicate image"):
            EbookDocument({**metadata, "images": images})

    def test_image_named_like_cover(self, metadata):
        """Test that an image cannot replace the cover."""
        with pytest.raises(ValidationError):
            EbookDocument({**metadata, "images": [{"name": "cover.png", "data": PNG_DATA_URI}]})

    def test_prebuilt_image_without_type(self, metadata):
        """Test that an ImageObject of unknown media type is rejected."""
        with pytest.raises(ValidationError):
            EbookDocument({**metadata, "images": [ImageObject("x.bin", BlobImage(b"abc", ""))]})

    def test_prebuilt_cover_without_type(self, metadata):
        """Test that the cover is checked like any other image."""
        with pytest.raises(ValidationError):
            EbookDocument({**metadata, "cover": ImageObject("cover.bin", BlobImage(b"abc", ""))})

    def test_image_given_as_path(self, metadata):
        """Test that a bare string is not accepted as an image."""
        with pytest.raises(ValidationError) as exc_info:
            EbookDocument({**metadata, "images": ["map.png"]})
        assert exc_info.value.field == "images"

    def test_defaults(self, metadata):
        """Test that configured defaults reach the metadata."""
        doc = EbookDocument(metadata, defaults={"language": "ar"})
        assert doc.metadata.language == "ar"


class TestAddSection:
    """Test the add_section method."""

    def test_sequential_filenames(self, metadata):
        """Test that sections are numbered from the section count."""
        doc = EbookDocument(metadata)
        names = [doc.add_section(f"Chapter {i}", "<p/>").filename for i in range(1, 4)]
        assert names == ["s1.xhtml", "s2.xhtml", "s3.xhtml"]

    def test_override_filename(self, metadata):
        """Test that an override filename gets the xhtml suffix."""
        doc = EbookDocument(metadata)
        assert doc.add_section("Intro", "<p/>", override_filename="intro").filename == "intro.xhtml"
        assert doc.add_section("One", "<p/>").filename == "s2.xhtml"

    def test_duplicate_override(self, metadata):
        """Test that an override cannot reuse an existing filename."""
        doc = EbookDocument(metadata)
        doc.add_section("One", "<p/>")
        with pytest.raises(DuplicateFilenameError):
            doc.add_section("Again", "<p/>", override_filename="s1")
        assert doc.get_section_count() == 1

    def test_generated_name_collision(self, metadata):
        """Test that a generated name colliding with an override is rejected."""
        doc = EbookDocument(metadata)
        doc.add_section("Second", "<p/>", override_filename="s2")
        with pytest.raises(DuplicateFilenameError):
            doc.add_section("Next", "<p/>")
        assert doc.get_section_count() == 1
        assert [s.filename for s in doc.sections] == ["s2.xhtml"]

    @pytest.mark.parametrize("override", ["part/one", "part\\one", "../escape"])
    def test_path_separator_rejected(self, metadata, override):
        """Test that section filenames cannot point into other folders."""
        doc = EbookDocument(metadata)
        doc.add_section("One", "<p/>")
        with pytest.raises(ValidationError) as exc_info:
            doc.add_section("Two", "<p/>", override_filename=override)
        assert exc_info.value.field == "filename"
        assert doc.get_section_count() == 1

    def test_contents_page_name_reserved(self, metadata):
        """Test that toc cannot be used as a section filename."""
        doc = EbookDocument(metadata)
        with pytest.raises(DuplicateFilenameError):
            doc.add_section("Contents", "<p/>", override_filename="toc")

    def test_flags(self, metadata):
        """Test that section flags are stored."""
        doc = EbookDocument(metadata)
        section = doc.add_section("Dedication", "<p/>", exclude_from_contents=True, is_front_matter=True)
        assert section.exclude_from_contents is True
        assert section.is_front_matter is True
        assert doc.sections == [section]


class TestCss:
    """Test the add_css method."""

    def test_add_css_appends(self, metadata):
        """Test that CSS accumulates in call order."""
        doc = EbookDocument(metadata)
        doc.add_css("h1 { color: red; }")
        doc.add_css("p { margin: 0; }")
        assert doc.css == "h1 { color: red; }p { margin: 0; }"


class TestFiles:
    """Test get_files_for_epub on the document."""

    def test_files(self, document):
        """Test that the file list starts with a stored mimetype."""
        files = document.get_files_for_epub()
        assert files[0].name == "mimetype"
        assert files[0].compression is Compression.STORE
        assert files[0].content == "application/epub+zip"

    def test_files_are_stable(self, document):
        """Test that listing files twice gives the same paths."""
        first = [f.path for f in document.get_files_for_epub()]
        second = [f.path for f in document.get_files_for_epub()]
        assert first == second
