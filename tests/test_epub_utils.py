#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for book definition loading in epub_utils.
"""

import zipfile

import pytest
import yaml

from conftest import PNG_BYTES, PNG_DATA_URI
from ebook_generator.config_manager import ConfigManager
from ebook_generator.epub_utils import create_epub_from_definition, load_book_definition
from ebook_generator.epub_validation import DuplicateFilenameError, ValidationError


def write_definition(directory, definition):
    path = directory / "book.yml"
    path.write_text(yaml.safe_dump(definition), encoding="utf-8")
    return path


@pytest.fixture
def book_dir(temp_dir):
    """Directory with a cover image, a chapter file and a stylesheet"""
    (temp_dir / "images").mkdir()
    (temp_dir / "images" / "cover.png").write_bytes(PNG_BYTES)
    (temp_dir / "images" / "map.png").write_bytes(PNG_BYTES)
    (temp_dir / "text").mkdir()
    (temp_dir / "text" / "one.html").write_text("<p>Chapter one text</p>", encoding="utf-8")
    (temp_dir / "style.css").write_text("p { text-indent: 1em; }", encoding="utf-8")
    return temp_dir


@pytest.fixture
def definition():
    return {
        "id": "urn:uuid:42",
        "title": "Loaded Book",
        "author": "A. Author",
        "cover": "images/cover.png",
        "images": [{"path": "images/map.png", "name": "world.png"}],
        "css": ["style.css"],
        "sections": [
            {"title": "Preface", "content": "<p>Hello</p>", "front_matter": True},
            {"title": "Chapter One", "file": "text/one.html", "filename": "chapter-one"},
            {"title": "Notes", "content": "<p>n</p>", "exclude_from_contents": "yes"},
        ],
    }


class TestLoadBookDefinition:
    """Test the load_book_definition function."""

    def test_load(self, book_dir, definition):
        """Test that every part of the definition is loaded."""
        doc = load_book_definition(write_definition(book_dir, definition))
        assert doc.metadata.title == "Loaded Book"
        assert doc.cover.name == "cover.png"
        assert doc.cover.content == PNG_BYTES
        assert [image.name for image in doc.images] == ["world.png"]
        assert doc.css == "p { text-indent: 1em; }"
        assert [s.filename for s in doc.sections] == ["s1.xhtml", "chapter-one.xhtml", "s3.xhtml"]
        assert doc.sections[0].is_front_matter is True
        assert doc.sections[1].content == "<p>Chapter one text</p>"
        assert doc.sections[2].exclude_from_contents is True

    def test_inline_css_and_data_uri_cover(self, temp_dir):
        """Test inline CSS and a cover given as a data URI."""
        path = write_definition(
            temp_dir,
            {
                "id": "1",
                "title": "T",
                "author": "A",
                "cover": {"name": "c.png", "data": PNG_DATA_URI},
                "css": "h1 { color: red; }",
            },
        )
        doc = load_book_definition(path)
        assert doc.cover.content == PNG_DATA_URI
        assert doc.css == "h1 { color: red; }"
        assert doc.get_section_count() == 0

    def test_defaults(self, book_dir, definition):
        """Test that configured defaults apply to the loaded metadata."""
        doc = load_book_definition(write_definition(book_dir, definition), defaults={"contents": "Index"})
        assert doc.metadata.contents == "Index"

    def test_missing_file(self, temp_dir):
        """Test that a missing definition raises ValidationError."""
        with pytest.raises(ValidationError):
            load_book_definition(temp_dir / "absent.yml")

    def test_missing_cover(self, book_dir, definition):
        """Test that a definition without cover is rejected."""
        del definition["cover"]
        with pytest.raises(ValidationError, match="cover"):
            load_book_definition(write_definition(book_dir, definition))

    def test_unreadable_image(self, book_dir, definition):
        """Test that a missing image file is reported."""
        definition["cover"] = "images/nope.png"
        with pytest.raises(ValidationError, match="nope.png"):
            load_book_definition(write_definition(book_dir, definition))

    def test_section_without_title(self, book_dir, definition):
        """Test that every section needs a title."""
        definition["sections"].append({"content": "<p/>"})
        with pytest.raises(ValidationError, match="Section 4"):
            load_book_definition(write_definition(book_dir, definition))

    def test_sections_not_a_list(self, book_dir, definition):
        """Test that sections must be a list."""
        definition["sections"] = {"title": "One"}
        with pytest.raises(ValidationError):
            load_book_definition(write_definition(book_dir, definition))

    def test_duplicate_section_filename(self, book_dir, definition):
        """Test that duplicate filenames surface as DuplicateFilenameError."""
        definition["sections"].append({"title": "Again", "content": "", "filename": "chapter-one"})
        with pytest.raises(DuplicateFilenameError):
            load_book_definition(write_definition(book_dir, definition))

    def test_non_utf8_section_file(self, book_dir, definition):
        """Test that section files in other encodings are decoded."""
        text = "<p>Déjà vu, naïve café, résumé. " * 20 + "</p>"
        (book_dir / "text" / "one.html").write_bytes(text.encode("cp1252"))
        doc = load_book_definition(write_definition(book_dir, definition))
        assert "Déjà vu" in doc.sections[1].content


class TestCreateEpubFromDefinition:
    """Test the create_epub_from_definition function."""

    def test_create(self, book_dir, definition):
        """Test writing an EPUB from a definition."""
        out = book_dir / "dist"
        path = create_epub_from_definition(write_definition(book_dir, definition), out)
        assert path == out / "Loaded Book.epub"
        with zipfile.ZipFile(path) as z:
            names = z.namelist()
        assert names[0] == "mimetype"
        assert "OEBPF/content/chapter-one.xhtml" in names
        assert "OEBPF/images/world.png" in names

    def test_output_dir_from_config(self, book_dir, definition):
        """Test that the configured output directory is used by default."""
        config_path = book_dir / "ebook_config.yml"
        config_path.write_text(yaml.safe_dump({"epub": {"output_dir": str(book_dir / "configured")}}))
        path = create_epub_from_definition(
            write_definition(book_dir, definition),
            name="custom",
            config=ConfigManager(config_path),
        )
        assert path == book_dir / "configured" / "custom.epub"
        assert path.exists()
